"""
Integration tests for the chat relay and country endpoints

Run with: pytest tests/test_chat_api.py -v
"""

from types import SimpleNamespace

import pytest

import ai.chat
from ai.groq_client import ChatUpstreamError


class FakeGroqClient:
    """Stands in for GroqClient; records what would have been sent."""

    def __init__(self, reply="Kft. setup takes about two weeks.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def is_available(self):
        return True

    def chat(self, system_prompt, user_message, model=None):
        self.calls.append(SimpleNamespace(system=system_prompt, user=user_message, model=model))
        if self.error:
            raise self.error
        return self.reply


class TestChatValidation:

    @pytest.mark.parametrize("body", [{}, {"user": ""}, {"user": 42}, {"country": "AE"}])
    def test_user_required_and_string(self, client, body):
        response = client.post("/chat", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "`user` message is required and must be a string"

    def test_non_object_body(self, client):
        assert client.post("/chat", json=["hello"]).status_code == 400


class TestMockReplies:

    def test_canned_reply_names_country(self, client):
        response = client.post("/chat", json={"user": "How do I open a Kft?", "country": "HU"})

        assert response.status_code == 200
        data = response.json()
        assert data["country"] == "HU"
        assert "Hungary" in data["message"]
        assert data["timestamp"]

    def test_unknown_country_uses_uae(self, client):
        data = client.post("/chat", json={"user": "hi", "country": "ZZ"}).json()

        assert data["country"] == "AE"
        assert "United Arab Emirates" in data["message"]

    def test_missing_country_uses_uae(self, client):
        assert client.post("/chat", json={"user": "hi"}).json()["country"] == "AE"


class TestGroqRelay:

    def test_relays_with_country_prompt(self, client, monkeypatch):
        fake = FakeGroqClient()
        monkeypatch.setattr(ai.chat, "get_groq_client", lambda: fake)

        response = client.post("/chat", json={"user": "How long does a Kft take?", "country": "HU"})

        assert response.status_code == 200
        assert response.json()["message"] == "Kft. setup takes about two weeks."
        call = fake.calls[0]
        assert call.user == "How long does a Kft take?"
        assert call.system.startswith("You are an expert business consultant for SKV Business Services in Hungary.")
        assert "support-hu@skvchatgb.com" in call.system

    def test_upstream_error_text_is_forwarded(self, client, monkeypatch):
        fake = FakeGroqClient(error=ChatUpstreamError("model_decommissioned"))
        monkeypatch.setattr(ai.chat, "get_groq_client", lambda: fake)

        response = client.post("/chat", json={"user": "hello"})

        assert response.status_code == 500
        assert response.json()["detail"] == "model_decommissioned"

    def test_upstream_error_without_text(self, client, monkeypatch):
        fake = FakeGroqClient(error=ChatUpstreamError())
        monkeypatch.setattr(ai.chat, "get_groq_client", lambda: fake)

        response = client.post("/chat", json={"user": "hello"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Upstream request failed"

    def test_one_attempt_only(self, client, monkeypatch):
        fake = FakeGroqClient(error=ChatUpstreamError("overloaded"))
        monkeypatch.setattr(ai.chat, "get_groq_client", lambda: fake)

        client.post("/chat", json={"user": "hello"})

        assert len(fake.calls) == 1

    def test_unexpected_error_is_generic_500(self, monkeypatch):
        from fastapi.testclient import TestClient
        from app.main import app

        fake = FakeGroqClient(error=KeyError("choices"))
        monkeypatch.setattr(ai.chat, "get_groq_client", lambda: fake)

        with TestClient(app, raise_server_exceptions=False) as c:
            response = c.post("/chat", json={"user": "hello"})

        assert response.status_code == 500
        assert response.json() == {"detail": "An internal error occurred. Please try again later."}


class TestChatMisc:

    def test_status_banner(self, client):
        data = client.get("/chat").json()

        assert data["message"] == "SKVChatGB API is running"
        assert data["endpoints"] == {"chat": "/chat (POST)"}

    def test_chat_rate_limit(self, client, monkeypatch):
        from app.core import rate_limiter

        monkeypatch.setattr(rate_limiter.chat_limiter, "requests", 2)

        codes = [client.post("/chat", json={"user": "hi"}).status_code for _ in range(3)]

        assert codes == [200, 200, 429]

    def test_rate_limited_reply_keeps_cors_headers(self, client, monkeypatch):
        from app.core import rate_limiter

        monkeypatch.setattr(rate_limiter.chat_limiter, "requests", 1)
        headers = {"Origin": "http://localhost:3000"}

        client.post("/chat", json={"user": "hi"}, headers=headers)
        response = client.post("/chat", json={"user": "hi"}, headers=headers)

        assert response.status_code == 429
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "chat_relay": "mock"}


class TestCountries:

    def test_list_hides_prompts(self, client):
        countries = client.get("/countries").json()

        assert [c["code"] for c in countries] == ["AE", "IN", "HU", "GB"]
        assert all("system" not in c and "model" not in c for c in countries)

    def test_single_country(self, client):
        data = client.get("/countries/in").json()

        assert data["name"] == "India"
        assert data["contact"]["whatsapp"] == "919876543210"

    def test_resolve_from_subdomain(self, client):
        assert client.get("/countries/resolve", params={"host": "gb.skvchatgb.com"}).json()["code"] == "GB"
        assert client.get("/countries/resolve", params={"host": "www.skvchatgb.com"}).json()["code"] == "AE"
