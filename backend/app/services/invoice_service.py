"""Invoice calculation, assembly and input validation.

Calculation works on raw Decimal values. Rounding only happens when a
formatter renders an amount for display.
"""
import random
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, List, Optional

from app.schemas.invoice import (
    ClientInfo,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    InvoiceTotals,
    TaxLine,
    generate_id,
)
from app.services.tax_config import SKV_COMPANY_INFO, get_tax_profile, normalize_country_code

PAYMENT_TERM_DAYS = 30
INVOICE_PREFIX = "SKV"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def calculate_item_total(item: InvoiceItem) -> Decimal:
    return item.quantity * item.unit_price


def calculate_subtotal(items: Iterable[InvoiceItem]) -> Decimal:
    """Sum of every line total, taxable or not."""
    return sum((calculate_item_total(item) for item in items), ZERO)


def calculate_taxes(items: Iterable[InvoiceItem], country_code: Optional[str]) -> List[TaxLine]:
    """Tax lines for the country's rule, applied to the taxable lines only.

    No zero-amount lines: an invoice without taxable value gets no taxes.
    """
    taxable_amount = sum(
        (calculate_item_total(item) for item in items if item.taxable),
        ZERO,
    )
    if taxable_amount == 0:
        return []

    rule = get_tax_profile(country_code).tax_rule
    rate = rule.effective_rate
    return [
        TaxLine(
            tax_type=rule.label,
            rate=rate,
            amount=taxable_amount * rate / HUNDRED,
            description=rule.line_description(),
        )
    ]


def calculate_total_tax(taxes: Iterable[TaxLine]) -> Decimal:
    return sum((tax.amount for tax in taxes), ZERO)


def calculate_total(subtotal: Decimal, taxes: Iterable[TaxLine]) -> Decimal:
    return subtotal + calculate_total_tax(taxes)


def calculate_totals(items: List[InvoiceItem], country_code: Optional[str]) -> InvoiceTotals:
    """Everything the assembler needs, without identity or dates."""
    subtotal = calculate_subtotal(items)
    taxes = calculate_taxes(items, country_code)
    total_tax = calculate_total_tax(taxes)
    return InvoiceTotals(
        subtotal=subtotal,
        taxes=taxes,
        total_tax=total_tax,
        total=subtotal + total_tax,
    )


def generate_invoice_number(country_code: str, now: Optional[datetime] = None,
                            rng: Optional[random.Random] = None) -> str:
    """SKV-{country}-{yyyymm}-{nnnn}.

    The suffix is random and not checked for collisions.
    """
    now = now or datetime.now(timezone.utc)
    suffix = (rng or random).randint(0, 9999)
    return f"{INVOICE_PREFIX}-{country_code}-{now.year:04d}{now.month:02d}-{suffix:04d}"


def create_invoice(
    items: List[InvoiceItem],
    client: ClientInfo,
    country_code: Optional[str],
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Invoice:
    """Assemble a draft invoice in one step.

    Does not validate. Callers run validate_invoice_items and
    validate_client_info first and refuse to assemble on any error.
    """
    code = normalize_country_code(country_code)
    profile = get_tax_profile(code)
    totals = calculate_totals(items, code)

    issue_date = now or datetime.now(timezone.utc)
    due_date = issue_date + timedelta(days=PAYMENT_TERM_DAYS)

    return Invoice(
        id=generate_id(),
        invoice_number=generate_invoice_number(code, issue_date),
        issue_date=issue_date,
        due_date=due_date,
        company=SKV_COMPANY_INFO.model_copy(deep=True),
        client=client.model_copy(deep=True),
        items=[item.model_copy(deep=True) for item in items],
        subtotal=totals.subtotal,
        taxes=totals.taxes,
        total_tax=totals.total_tax,
        total=totals.total,
        currency=profile.currency_code,
        locale=profile.locale_tag,
        country=code,
        payment_terms=profile.payment_terms,
        notes=notes or None,
        status=InvoiceStatus.DRAFT,
    )


# ==============================================================================
# VALIDATION (collects every problem, never raises)
# ==============================================================================

def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_invoice_items(items: List[InvoiceItem]) -> List[str]:
    errors: List[str] = []

    if not items:
        errors.append("At least one item is required")

    for index, item in enumerate(items, start=1):
        if not (item.description or "").strip():
            errors.append(f"Item {index}: Description is required")
        if item.quantity <= 0:
            errors.append(f"Item {index}: Quantity must be greater than 0")
        if item.unit_price < 0:
            errors.append(f"Item {index}: Unit price cannot be negative")

    return errors


def validate_client_info(client: ClientInfo) -> List[str]:
    errors: List[str] = []

    if not (client.name or "").strip():
        errors.append("Client name is required")

    email = (client.email or "").strip()
    if not email:
        errors.append("Client email is required")
    elif not is_valid_email(email):
        errors.append("Valid email address is required")

    if not any((line or "").strip() for line in client.address):
        errors.append("Client address is required")

    if not (client.country or "").strip():
        errors.append("Client country is required")

    return errors
