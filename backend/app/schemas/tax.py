"""Country tax profiles.

A profile carries exactly one tax rule. The rule is a tagged union on
``kind`` so a country can never hold a VAT and a GST rule at once.
"""
from decimal import Decimal
from typing import Annotated, List, Literal, Union

from pydantic import ConfigDict, Field

from app.schemas.invoice import CamelModel, Money


class VatRule(CamelModel):
    """Flat-rate value-added tax (VAT, ÁFA)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["vat"] = "vat"
    rate: Money
    label: str
    description: str

    @property
    def effective_rate(self) -> Decimal:
        return self.rate

    def line_description(self) -> str:
        return self.description


class GstRule(CamelModel):
    """Indian GST. Only the integrated (igst) rate feeds the calculation."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["gst"] = "gst"
    cgst: Money
    sgst: Money
    igst: Money
    label: str
    description: str

    @property
    def effective_rate(self) -> Decimal:
        return self.igst

    def line_description(self) -> str:
        return f"{self.description} (IGST {self.igst:g}%)"


TaxRule = Annotated[Union[VatRule, GstRule], Field(discriminator="kind")]


class CountryTaxProfile(CamelModel):
    model_config = ConfigDict(frozen=True)

    country_code: str
    display_name: str
    currency_code: str
    locale_tag: str
    tax_rule: TaxRule
    payment_terms: str
    legal_notices: List[str]
