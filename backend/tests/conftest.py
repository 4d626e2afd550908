"""Shared fixtures. Run with: pytest -v"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import ai.chat
from ai.groq_client import GroqClient
from app.core.config import settings
from app.core.rate_limiter import chat_limiter, request_limiter
from app.main import app
from app.schemas.invoice import ClientInfo, InvoiceItem


@pytest.fixture(autouse=True)
def fast_and_offline(monkeypatch):
    """No real delays, no outbound LLM calls, fresh rate-limit windows."""
    monkeypatch.setattr(settings, "CHAT_MOCK_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "EMAIL_SEND_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "SMTP_HOST", "")
    monkeypatch.setattr(settings, "GROQ_API_KEY", "")
    monkeypatch.setattr(ai.chat, "get_groq_client", lambda: GroqClient(api_key=""))
    request_limiter.reset()
    chat_limiter.reset()
    yield
    request_limiter.reset()
    chat_limiter.reset()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 5, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_client():
    return ClientInfo(
        name="Priya Sharma",
        company="Sharma Exports Pvt Ltd",
        email="priya@sharmaexports.in",
        address=["12 MG Road", "Bengaluru 560001"],
        tax_id="29ABCDE1234F1Z5",
        country="IN",
    )


@pytest.fixture
def taxable_item():
    return InvoiceItem(description="Company Formation", quantity=Decimal("1"), unit_price=Decimal("1000"))


@pytest.fixture
def mixed_items():
    return [
        InvoiceItem(description="Tax Advisory", quantity=Decimal("2"), unit_price=Decimal("250")),
        InvoiceItem(description="Government fee (pass-through)", quantity=Decimal("1"),
                    unit_price=Decimal("300"), taxable=False),
    ]


@pytest.fixture
def invoice_form(sample_client):
    """A valid POST /invoice body as the web form sends it."""
    return {
        "items": [
            {"description": "GST Registration", "quantity": 1, "unitPrice": 5000, "taxable": True},
            {"description": "Stamp duty", "quantity": 2, "unitPrice": 150, "taxable": False},
        ],
        "client": sample_client.model_dump(by_alias=True),
        "country": "IN",
        "notes": "Thank you for choosing SKV.",
    }
