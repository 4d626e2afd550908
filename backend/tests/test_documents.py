"""Tests for the invoice HTML, PDF and email renderers"""

import asyncio
from decimal import Decimal

import pytest

from app.core.config import settings
from app.schemas.invoice import ClientInfo, InvoiceItem
from app.services import email_service
from app.services.email_service import email_subject, render_invoice_email, send_invoice_email
from app.services.invoice_service import create_invoice
from app.services.pdf_service import render_invoice_html, render_invoice_pdf


@pytest.fixture
def invoice(mixed_items, sample_client, fixed_now):
    return create_invoice(mixed_items, sample_client, "GB", notes="PO #4471", now=fixed_now)


class TestHtmlInvoice:

    def test_contains_identity_parties_and_totals(self, invoice):
        html = render_invoice_html(invoice)

        assert html.startswith("<!DOCTYPE html>")
        assert invoice.invoice_number in html
        assert "S K V GLOBAL BUSINESS SERVICES L.L.C" in html
        assert "Priya Sharma" in html
        assert "5 January 2025" in html
        assert "4 February 2025" in html
        assert "£800.00" in html
        assert "VAT (20%)" in html
        assert "£100.00" in html
        assert "£900.00" in html
        assert "PO #4471" in html

    def test_lists_country_legal_notices(self, invoice):
        html = render_invoice_html(invoice)

        assert "VAT Registration Number: GB123456789" in html
        assert "Payment due within 30 days of invoice date" in html

    def test_escapes_user_text(self, fixed_now):
        client = ClientInfo(name="<script>alert(1)</script>", email="a@b.co", address=["x"], country="AE")
        items = [InvoiceItem(description="Setup & <b>fees</b>", quantity=Decimal("1"), unit_price=Decimal("10"))]
        html = render_invoice_html(create_invoice(items, client, "AE", now=fixed_now))

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html
        assert "Setup &amp; &lt;b&gt;fees&lt;/b&gt;" in html

    def test_no_tax_rows_when_nothing_taxable(self, sample_client, fixed_now):
        items = [InvoiceItem(description="Fee", quantity=Decimal("1"), unit_price=Decimal("100"), taxable=False)]
        html = render_invoice_html(create_invoice(items, sample_client, "HU", now=fixed_now))

        assert "ÁFA" not in html.split("Legal Information")[0]


class TestPdfInvoice:

    def test_renders_pdf_bytes(self, invoice):
        buffer = render_invoice_pdf(invoice)
        data = buffer.read()

        assert data.startswith(b"%PDF")
        assert len(data) > 1000

    def test_renders_every_country(self, mixed_items, sample_client):
        for country in ("AE", "IN", "HU", "GB"):
            buffer = render_invoice_pdf(create_invoice(mixed_items, sample_client, country))
            assert buffer.getvalue().startswith(b"%PDF")


class TestEmail:

    def test_subject(self, invoice):
        assert email_subject(invoice) == (
            f"Invoice {invoice.invoice_number} from S K V GLOBAL BUSINESS SERVICES L.L.C"
        )

    def test_body_summarises_invoice(self, invoice):
        body = render_invoice_email(invoice)

        assert "Dear Priya Sharma," in body
        assert "Value Added Tax (20%):" in body
        assert "£900.00" in body
        assert "Tax Registration Number: 100044161600003" in body
        assert "PO #4471" in body

    def test_simulated_send_without_smtp(self, invoice):
        channel = asyncio.run(send_invoice_email(invoice, "client@example.com"))

        assert channel == "simulated"

    def test_smtp_send_when_configured(self, invoice, monkeypatch):
        sent = []
        monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
        monkeypatch.setattr(email_service, "_send_via_smtp", lambda *args: sent.append(args))

        channel = asyncio.run(send_invoice_email(invoice, "client@example.com"))

        assert channel == "smtp"
        sender, recipient, subject, body = sent[0]
        assert sender == "Info@skvchatgb.com"
        assert recipient == "client@example.com"
        assert invoice.invoice_number in subject
        assert invoice.invoice_number in body

    def test_smtp_failure_propagates(self, invoice, monkeypatch):
        def refuse(*args):
            raise OSError("connection refused")

        monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
        monkeypatch.setattr(email_service, "_send_via_smtp", refuse)

        with pytest.raises(OSError):
            asyncio.run(send_invoice_email(invoice, "client@example.com"))
