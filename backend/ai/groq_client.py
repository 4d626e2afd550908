"""
Groq API Client: relay for the country chat widget.

================================================================================
ROLE: ANSWER BUSINESS-SETUP QUESTIONS IN A COUNTRY PERSONA
================================================================================

Each request sends exactly two messages:
1. the country's system prompt (UAE, India, Hungary or UK persona)
2. the visitor's message, unchanged

THIS CLIENT DOES NOT:
- Keep conversation history (every request stands alone)
- Retry (one attempt; failures go straight back to the caller)
- Touch invoices or any other business data

If GROQ_API_KEY is missing the client reports itself unavailable and the
caller answers with a canned reply instead (see ai/fallback.py).
================================================================================
"""

import logging
from typing import Optional

from groq import Groq, APIError

from app.core.config import settings

# NEVER log API keys or message text
logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "Sorry, no response generated."


class ChatUpstreamError(Exception):
    """The chat provider rejected or failed the request.

    ``detail`` holds the provider's error text when it sent one.
    """

    def __init__(self, detail: str = ""):
        super().__init__(detail or "Chat provider request failed")
        self.detail = detail


class GroqClient:
    """
    Thin wrapper around the Groq chat completions API.

    - Model: per country, defaulting to settings.GROQ_MODEL
    - Temperature / max tokens: from settings
    - Retries: none (max_retries=0 on the SDK client as well)
    """

    def __init__(self, api_key: Optional[str] = None):
        api_key = settings.GROQ_API_KEY if api_key is None else api_key

        if not api_key:
            logger.warning(
                "GROQ_API_KEY not found in environment. "
                "Chat will answer with canned replies. "
                "Add your key to backend/.env file."
            )
            self.client = None
        else:
            self.client = Groq(api_key=api_key, max_retries=0)
            logger.info("Groq client initialized")

    def is_available(self) -> bool:
        """Check if Groq client is ready to use."""
        return self.client is not None

    def chat(self, system_prompt: str, user_message: str, model: Optional[str] = None) -> str:
        """
        Send one system + user exchange and return the assistant text.

        Returns:
            The reply text, or NO_RESPONSE_TEXT when the completion is empty

        Raises:
            ChatUpstreamError: the provider returned an error
            RuntimeError: the client is not configured
        """
        if not self.is_available():
            raise RuntimeError("Groq client is not configured")

        try:
            response = self.client.chat.completions.create(
                model=model or settings.GROQ_MODEL,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=settings.CHAT_TEMPERATURE,
                max_tokens=settings.CHAT_MAX_TOKENS,
                stream=False,
            )
        except APIError as e:
            logger.error(f"Groq API error: {type(e).__name__}")
            raise ChatUpstreamError(getattr(e, "message", "") or str(e)) from e

        if response.choices:
            content = response.choices[0].message.content
            if content:
                logger.debug(f"LLM response received: {len(content)} chars")
                return content

        logger.warning("LLM returned empty response")
        return NO_RESPONSE_TEXT


# Singleton instance
_groq_client: Optional[GroqClient] = None


def get_groq_client() -> GroqClient:
    """Get or create singleton Groq client instance.

    Returns:
        Shared GroqClient instance
    """
    global _groq_client
    if _groq_client is None:
        _groq_client = GroqClient()
    return _groq_client
