"""
Rate limiting middleware.

Two in-memory sliding windows:
- a global limit on every request per client IP
- a tighter per-minute limit on chat messages, since each one may cost
  an upstream LLM call

In-memory only. With multiple workers each process keeps its own counts.
"""
import time
import logging
from collections import defaultdict
from typing import Dict, List, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


class RateLimiter:
    """In-memory rate limiter with sliding window."""

    def __init__(self, requests: int = 100, window: int = 60):
        """
        Args:
            requests: Maximum requests allowed in window
            window: Time window in seconds
        """
        self.requests = requests
        self.window = window
        self.clients: Dict[str, List[float]] = defaultdict(list)
        self.last_cleanup = time.time()

    def is_allowed(self, client_id: str, now: float = None) -> Tuple[bool, int]:
        """
        Record a hit for client_id if it fits in the window.

        Returns:
            (allowed, remaining)
        """
        now = time.time() if now is None else now

        if now - self.last_cleanup > 300:
            self._cleanup(now)
            self.last_cleanup = now

        cutoff = now - self.window
        timestamps = [ts for ts in self.clients[client_id] if ts > cutoff]
        self.clients[client_id] = timestamps

        if len(timestamps) >= self.requests:
            return False, 0
        timestamps.append(now)
        return True, self.requests - len(timestamps)

    def reset(self):
        self.clients.clear()

    def _cleanup(self, now: float):
        """Drop clients with no hits inside the window."""
        cutoff = now - self.window
        for client_id in list(self.clients.keys()):
            timestamps = [ts for ts in self.clients[client_id] if ts > cutoff]
            if timestamps:
                self.clients[client_id] = timestamps
            else:
                del self.clients[client_id]

        logger.debug(f"Rate limiter cleanup: {len(self.clients)} active clients")


request_limiter = RateLimiter(
    requests=settings.RATE_LIMIT_REQUESTS,
    window=settings.RATE_LIMIT_WINDOW_SECONDS,
)

chat_limiter = RateLimiter(
    requests=settings.CHAT_MESSAGES_PER_MINUTE,
    window=60,
)


def _too_many(client_id: str, request: Request, window: int, limit: int) -> JSONResponse:
    logger.warning(f"Rate limit exceeded for {client_id} on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": f"Rate limit exceeded. Try again in {window} seconds."},
        headers={
            "Retry-After": str(window),
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Remaining": "0",
        },
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the global limit to all requests and the chat limit to POST /chat."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        client_id = f"ip:{client_ip}"

        allowed, remaining = request_limiter.is_allowed(client_id)
        if not allowed:
            return _too_many(client_id, request, request_limiter.window, request_limiter.requests)

        if request.method == "POST" and request.url.path == "/chat":
            chat_allowed, _ = chat_limiter.is_allowed(client_id)
            if not chat_allowed:
                return _too_many(client_id, request, chat_limiter.window, chat_limiter.requests)

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(request_limiter.requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Window"] = str(request_limiter.window)

        return response
