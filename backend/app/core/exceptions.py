"""
Exception helpers for API routes.

PRINCIPLE: Don't expose internal details to callers.
Use generic error messages externally, detailed logging internally.
Validation problems are the caller's fault, so those messages are specific.
"""
from typing import List

from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


class BusinessError:
    """Factory for HTTP errors with safe (non-leaky) messages."""

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        """
        400 for malformed input.

        OK to include specific details here since the caller caused the issue.
        Examples: "Invalid email address", "Invalid invoice data"
        """
        logger.info(f"Bad request: {detail}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @staticmethod
    def validation_failed(errors: List[str]) -> HTTPException:
        """
        400 carrying every validation message at once.

        The client shows the full list in one pass instead of fixing
        one field per round-trip.
        """
        logger.info(f"Validation failed with {len(errors)} error(s)")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"errors": errors},
        )

    @staticmethod
    def upstream_error(detail: str = "") -> HTTPException:
        """
        500 for a failed third-party call.

        The upstream error text is forwarded when available; it comes from
        the provider, not from our internals.
        """
        logger.warning(f"Upstream failure: {detail or 'no detail'}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail or "Upstream request failed",
        )

    @staticmethod
    def server_error(original_error: Exception = None, detail: str = GENERIC_SERVER_ERROR) -> HTTPException:
        """
        Generic 500 - logs actual error internally, hides it from the caller.

        Never expose stack traces or internal paths to callers.
        """
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=original_error,
            )
        else:
            logger.error("Internal server error occurred")

        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )

    @staticmethod
    def rate_limit_exceeded(detail: str = "Too many requests") -> HTTPException:
        """429 - Too many requests (rate limiting)."""
        logger.warning(f"Rate limit exceeded: {detail}")
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
        )
