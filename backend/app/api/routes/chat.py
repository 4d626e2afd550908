"""Country chat widget endpoint. One visitor message in, one reply out."""
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Request

from ai import ChatUpstreamError, answer_message
from app.core.audit import AuditLog
from app.core.exceptions import BusinessError
from app.schemas.chat import ChatResponse
from app.services.countries import get_country

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
def chat_status():
    """Service banner for uptime checks and the widget's handshake."""
    return {
        "message": "SKVChatGB API is running",
        "version": "2.0.0",
        "endpoints": {"chat": "/chat (POST)"},
    }


@router.post("", response_model=ChatResponse)
async def chat(request: Request, payload: Any = Body(default=None)):
    """Relay a visitor message to the country assistant.

    400 if `user` is missing or not a string. 500 with the provider's error
    text if the LLM call fails.
    """
    payload = payload if isinstance(payload, dict) else {}
    user_message = payload.get("user")
    if not user_message or not isinstance(user_message, str):
        raise BusinessError.bad_request("`user` message is required and must be a string")

    raw_country = payload.get("country")
    country = get_country(raw_country if isinstance(raw_country, str) else None)
    client_ip = request.client.host if request.client else ""

    try:
        reply = await answer_message(user_message, country)
    except ChatUpstreamError as e:
        AuditLog.log_chat_relay(country.code, "groq", client_ip, success=False)
        raise BusinessError.upstream_error(e.detail)

    AuditLog.log_chat_relay(country.code, reply.source, client_ip)
    return ChatResponse(
        message=reply.message,
        country=country.code,
        timestamp=datetime.now(timezone.utc),
    )
