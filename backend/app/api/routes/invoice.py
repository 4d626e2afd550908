"""
Invoices: assemble, preview, export and email.

Nothing is stored. The client keeps the assembled invoice and posts it back
for export or email.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Query, Request
from fastapi.responses import HTMLResponse, StreamingResponse
from pydantic import ValidationError

from app.core.audit import AuditLog
from app.core.exceptions import BusinessError
from app.schemas.invoice import (
    EmailDetails,
    Invoice,
    InvoiceCreate,
    InvoiceEmailResponse,
    InvoiceItem,
    InvoiceTotals,
)
from app.schemas.tax import CountryTaxProfile
from app.services.email_service import send_invoice_email
from app.services.invoice_service import (
    calculate_totals,
    create_invoice,
    is_valid_email,
    validate_client_info,
    validate_invoice_items,
)
from app.services.pdf_service import render_invoice_html, render_invoice_pdf
from app.services.tax_config import (
    get_tax_profile,
    items_from_services,
    normalize_country_code,
    services_for_country,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else ""


def _parse_invoice(data: Any) -> Invoice:
    if not isinstance(data, dict) or not data.get("id"):
        raise BusinessError.bad_request("Invalid invoice data")
    try:
        return Invoice.model_validate(data)
    except ValidationError as e:
        logger.info(f"Rejected invoice payload: {e.error_count()} field error(s)")
        raise BusinessError.bad_request("Invalid invoice data")


def _form_items(payload: InvoiceCreate, country_code: str) -> List[InvoiceItem]:
    """Typed line items, then one line per requested catalog service."""
    try:
        return payload.items + items_from_services(country_code, payload.services)
    except ValueError as e:
        raise BusinessError.validation_failed([str(e)])


# ==============================================================================
# ASSEMBLY
# ==============================================================================

@router.post("", response_model=Invoice)
def generate_invoice(payload: InvoiceCreate, request: Request):
    """Validate the form and assemble a draft invoice.

    Every item and client problem is reported at once; nothing is assembled
    unless both lists are empty.
    """
    code = normalize_country_code(payload.country or payload.client.country)
    items = _form_items(payload, code)

    errors = validate_invoice_items(items) + validate_client_info(payload.client)
    if errors:
        AuditLog.log_validation_rejected("invoice", errors, _client_ip(request))
        raise BusinessError.validation_failed(errors)

    invoice = create_invoice(items, payload.client, code, notes=payload.notes)
    AuditLog.log_invoice_event("generated", invoice.invoice_number, invoice.country, total=invoice.total)
    return invoice


@router.post("/preview", response_model=InvoiceTotals)
def preview_totals(payload: InvoiceCreate):
    """Live totals while the form is being filled in. No validation."""
    code = normalize_country_code(payload.country or payload.client.country)
    return calculate_totals(_form_items(payload, code), code)


@router.get("/tax-profile/{country_code}", response_model=CountryTaxProfile)
def tax_profile(country_code: str):
    """Tax profile for a country; unknown codes get the default profile."""
    return get_tax_profile(country_code)


@router.get("/services")
def list_services(country: Optional[str] = Query(None, description="ISO country code, e.g. AE")):
    """Service catalog with default prices for one country."""
    code = country.strip().upper() if country else get_tax_profile(None).country_code
    return services_for_country(code)


# ==============================================================================
# EXPORT
# ==============================================================================

@router.post("/pdf")
def export_invoice(
    payload: Any = Body(default=None),
    output: str = Query("html", alias="format", pattern="^(html|pdf)$"),
):
    """Download the invoice.

    Default is a printable HTML document ({invoiceNumber}.html);
    ?format=pdf returns a real PDF ({invoiceNumber}.pdf).
    """
    invoice = _parse_invoice(payload)

    try:
        if output == "pdf":
            buffer = render_invoice_pdf(invoice)
            response = StreamingResponse(
                buffer,
                media_type="application/pdf",
                headers={"Content-Disposition": f'attachment; filename="{invoice.invoice_number}.pdf"'},
            )
        else:
            response = HTMLResponse(
                content=render_invoice_html(invoice),
                headers={"Content-Disposition": f'attachment; filename="{invoice.invoice_number}.html"'},
            )
    except Exception as e:
        raise BusinessError.server_error(e, detail="Failed to generate PDF")

    AuditLog.log_invoice_event("exported", invoice.invoice_number, invoice.country, details={"format": output})
    return response


# ==============================================================================
# EMAIL
# ==============================================================================

@router.get("/email")
def email_status():
    return {
        "message": "Invoice email service is running",
        "version": "1.0.0",
        "features": [
            "Invoice summary in email",
            "Country-specific formatting",
            "SMTP delivery when configured",
        ],
    }


@router.post("/email", response_model=InvoiceEmailResponse)
async def email_invoice(request: Request, payload: Any = Body(default=None)):
    """Email the invoice summary to a recipient. One attempt."""
    payload = payload if isinstance(payload, dict) else {}
    invoice_data = payload.get("invoice")
    recipient = payload.get("recipientEmail")

    if not invoice_data or not recipient:
        raise BusinessError.bad_request("Invoice data and recipient email are required")
    if not isinstance(recipient, str) or not is_valid_email(recipient.strip()):
        AuditLog.log_validation_rejected("email", ["Invalid email address"], _client_ip(request))
        raise BusinessError.bad_request("Invalid email address")

    recipient = recipient.strip()
    invoice = _parse_invoice(invoice_data)

    try:
        channel = await send_invoice_email(invoice, recipient)
    except Exception as e:
        raise BusinessError.server_error(e, detail="Failed to send invoice email")

    sent_at = datetime.now(timezone.utc)
    AuditLog.log_invoice_event(
        "emailed",
        invoice.invoice_number,
        invoice.country,
        details={"recipient": recipient, "channel": channel},
    )
    return InvoiceEmailResponse(
        success=True,
        message="Invoice sent successfully",
        details=EmailDetails(
            invoice_number=invoice.invoice_number,
            recipient=recipient,
            sent_at=sent_at,
        ),
    )
