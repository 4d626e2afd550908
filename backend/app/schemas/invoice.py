"""Invoice wire models.

Attributes are snake_case in Python and camelCase on the wire
(invoiceNumber, unitPrice, lineTotal, ...). Money is Decimal internally
and a JSON number externally.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field
from pydantic.alias_generators import to_camel


Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def generate_id() -> str:
    return uuid4().hex


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InvoiceStatus(str, Enum):
    """Only DRAFT is ever produced; the rest are reserved for a future lifecycle."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceItem(CamelModel):
    """One billable line. line_total is always derived from quantity and price."""
    id: str = Field(default_factory=generate_id)
    description: str = ""
    quantity: Money = Decimal("1")
    unit_price: Money = Decimal("0")
    taxable: bool = True

    @computed_field(alias="lineTotal")
    @property
    def line_total(self) -> Money:
        return self.quantity * self.unit_price


class TaxLine(CamelModel):
    tax_type: str
    rate: Money
    amount: Money
    description: str


class CompanyInfo(CamelModel):
    name: str
    address: List[str]
    email: str
    phone: str
    website: Optional[str] = None
    tax_number: Optional[str] = None
    registration_number: Optional[str] = None


class ClientInfo(CamelModel):
    name: str = ""
    company: Optional[str] = None
    email: str = ""
    address: List[str] = Field(default_factory=list)
    tax_id: Optional[str] = None
    country: str = ""


class Invoice(CamelModel):
    """A fully assembled invoice. Immutable: regenerate to change anything."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    invoice_number: str
    issue_date: datetime
    due_date: datetime
    company: CompanyInfo
    client: ClientInfo
    items: List[InvoiceItem]
    subtotal: Money
    taxes: List[TaxLine]
    total_tax: Money
    total: Money
    currency: str
    locale: str
    country: str
    payment_terms: str
    notes: Optional[str] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT


class InvoiceCreate(CamelModel):
    """Request body for POST /invoice and POST /invoice/preview."""
    items: List[InvoiceItem] = Field(default_factory=list)
    # catalog service names, billed once each at their default price
    services: List[str] = Field(default_factory=list)
    client: ClientInfo = Field(default_factory=ClientInfo)
    country: Optional[str] = None
    notes: Optional[str] = None


class InvoiceTotals(CamelModel):
    subtotal: Money
    taxes: List[TaxLine]
    total_tax: Money
    total: Money


class EmailDetails(CamelModel):
    invoice_number: str
    recipient: str
    sent_at: datetime


class InvoiceEmailResponse(CamelModel):
    success: bool
    message: str
    details: EmailDetails
