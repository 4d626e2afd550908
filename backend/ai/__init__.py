"""AI Module for the country chat widget.

Relays visitor questions to Groq's LLM with a country persona.
Without an API key it answers with canned replies instead.
"""

from .chat import ChatReply, answer_message
from .groq_client import ChatUpstreamError

__all__ = ["ChatReply", "answer_message", "ChatUpstreamError"]
