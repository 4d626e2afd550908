"""
SKV Business Services Backend.

ARCHITECTURE:
- Chat relay: country persona + visitor message → Groq LLM (canned replies without a key)
- Invoice engine: per-country tax profile → totals → draft invoice
- Renderers: printable HTML, reportlab PDF, HTML email

STATE MODEL:
- Nothing is persisted. Every invoice is computed from the request body
- The client keeps the assembled invoice and posts it back for export/email
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import chat, countries, invoice
from app.core.config import settings
from app.core.exceptions import GENERIC_SERVER_ERROR
from app.core.rate_limiter import RateLimitMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup only reports which optional integrations are active;
    there is no database or background worker to start.
    """
    logger.info(f"Starting SKV backend ({settings.ENVIRONMENT})")
    if not settings.GROQ_API_KEY:
        logger.warning("Chat relay disabled (no GROQ_API_KEY): canned replies only")
    if not settings.SMTP_HOST:
        logger.warning("SMTP not configured: invoice emails are simulated")

    yield

    logger.info("SKV backend stopped")


app = FastAPI(
    title="SKV Business Services API",
    description="Country-aware chat relay and invoice generator for AE, IN, HU and GB.",
    version="2.0.0",
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)

# CORS must sit outside the rate limiter: 429s need CORS headers too
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
    ],
    max_age=600,
    expose_headers=["Content-Type", "Content-Disposition"],
)


@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are a 400 with readable messages, not FastAPI's 422."""
    messages = [
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}".lstrip(": ")
        for err in exc.errors()
    ]
    logger.info(f"Request validation failed on {request.url.path}: {len(messages)} error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"errors": messages}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last line: log the real error, return a generic 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_SERVER_ERROR},
    )


app.include_router(chat.router, prefix="/chat", tags=["chat"])
app.include_router(invoice.router, prefix="/invoice", tags=["invoice"])
app.include_router(countries.router, prefix="/countries", tags=["countries"])


@app.get("/health")
def health():
    return {"status": "ok", "chat_relay": "groq" if settings.GROQ_API_KEY else "mock"}
