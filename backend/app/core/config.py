"""Application configuration.

Environment variables override all defaults.
GROQ_API_KEY and SMTP credentials must come from .env, never from code.
"""

import os
from pathlib import Path
from typing import List


# Load .env for local development (safe no-op if not installed)
try:
    from dotenv import load_dotenv  # type: ignore

    _BACKEND_DIR = Path(__file__).resolve().parents[2]
    load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)
except ImportError:
    pass


def _origins_from_env(default: List[str]) -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    if not raw.strip():
        return default
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings:
    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Country used when a request omits one or sends an unknown code
    DEFAULT_COUNTRY: str = os.getenv("DEFAULT_COUNTRY", "AE").upper()

    # Groq chat relay. Empty key = canned replies (no outbound call)
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    CHAT_MAX_TOKENS: int = int(os.getenv("CHAT_MAX_TOKENS", "1024"))
    CHAT_TEMPERATURE: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
    CHAT_MOCK_DELAY_SECONDS: float = float(os.getenv("CHAT_MOCK_DELAY_SECONDS", "1.0"))

    # Email delivery. No SMTP_HOST = simulated send
    EMAIL_SEND_DELAY_SECONDS: float = float(os.getenv("EMAIL_SEND_DELAY_SECONDS", "2.0"))
    SMTP_HOST: str = os.getenv("SMTP_HOST", "")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "")

    # CORS (specific origins only, no wildcards)
    CORS_ORIGINS: List[str] = _origins_from_env([
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3001",
    ])

    # Rate limiting
    RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    CHAT_MESSAGES_PER_MINUTE: int = int(os.getenv("CHAT_MESSAGES_PER_MINUTE", "20"))


settings = Settings()
