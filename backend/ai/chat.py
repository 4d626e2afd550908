"""
Country chat: LLM relay with canned-reply fallback.

================================================================================
FLOW
================================================================================

1. Resolve the country (unknown codes use the default country)
2. If Groq is configured: one chat completion with the country prompt
3. If not: a canned reply naming the country, after a simulated delay

Provider errors are NOT swallowed here. ChatUpstreamError reaches the route,
which answers 500 with the provider's error text.
================================================================================
"""

import asyncio
import logging
from dataclasses import dataclass

from app.services.countries import Country
from .fallback import reply_without_llm
from .groq_client import get_groq_client
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    message: str
    source: str  # "groq" or "mock"


async def answer_message(user_message: str, country: Country) -> ChatReply:
    """Produce the assistant's reply for one visitor message."""
    client = get_groq_client()

    if not client.is_available():
        return ChatReply(message=await reply_without_llm(country.name), source="mock")

    system_prompt = build_system_prompt(country)
    # SDK call is blocking; keep it off the event loop
    text = await asyncio.to_thread(client.chat, system_prompt, user_message, country.model)
    logger.info(f"Chat reply for {country.code}: {len(text)} chars")
    return ChatReply(message=text, source="groq")
