"""Country tax profiles, issuer details and the service catalog.

Fixed data, loaded once at import. Nothing here touches disk or network.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from app.core.config import settings
from app.schemas.invoice import CompanyInfo, InvoiceItem
from app.schemas.tax import CountryTaxProfile, GstRule, VatRule

DEFAULT_COUNTRY = "AE"

# Issuer printed on every invoice
SKV_COMPANY_INFO = CompanyInfo(
    name="S K V GLOBAL BUSINESS SERVICES L.L.C",
    address=[
        "Office 101, Al Daghaya,",
        "Gold Souq Deira, Dubai",
        "United Arab Emirates",
    ],
    email="Info@skvchatgb.com",
    phone="+971-50-123-4567",
    website="https://skvchatgb.com",
    tax_number="100044161600003",
    registration_number="CN-1234567",
)

TAX_PROFILES: Dict[str, CountryTaxProfile] = {
    "AE": CountryTaxProfile(
        country_code="AE",
        display_name="United Arab Emirates",
        currency_code="AED",
        locale_tag="en-AE",
        tax_rule=VatRule(rate=Decimal("5"), label="VAT", description="Value Added Tax (5%)"),
        payment_terms="Payment due within 30 days of invoice date",
        legal_notices=[
            "This invoice is subject to UAE VAT regulations",
            "TRN: 100044161600003",
            "All amounts are in UAE Dirhams (AED)",
        ],
    ),
    "IN": CountryTaxProfile(
        country_code="IN",
        display_name="India",
        currency_code="INR",
        locale_tag="en-IN",
        tax_rule=GstRule(
            cgst=Decimal("9"),
            sgst=Decimal("9"),
            igst=Decimal("18"),
            label="GST",
            description="Goods and Services Tax",
        ),
        payment_terms="Payment due within 30 days of invoice date",
        legal_notices=[
            "This invoice is subject to Indian GST regulations",
            "GSTIN: 07AAACH7409R1Z5",
            "All amounts are in Indian Rupees (INR)",
            "This is a computer generated invoice",
        ],
    ),
    "HU": CountryTaxProfile(
        country_code="HU",
        display_name="Hungary",
        currency_code="EUR",
        locale_tag="hu-HU",
        tax_rule=VatRule(rate=Decimal("27"), label="ÁFA", description="Általános Forgalmi Adó (27%)"),
        payment_terms="Fizetési határidő: 30 nap",
        legal_notices=[
            "This invoice complies with Hungarian VAT regulations",
            "EU VAT Number: HU12345678",
            "All amounts are in Euros (EUR)",
            "Magyar számla / Hungarian Invoice",
        ],
    ),
    "GB": CountryTaxProfile(
        country_code="GB",
        display_name="United Kingdom",
        currency_code="GBP",
        locale_tag="en-GB",
        tax_rule=VatRule(rate=Decimal("20"), label="VAT", description="Value Added Tax (20%)"),
        payment_terms="Payment due within 30 days of invoice date",
        legal_notices=[
            "This invoice is subject to UK VAT regulations",
            "VAT Registration Number: GB123456789",
            "All amounts are in British Pounds (GBP)",
            "Company Registration Number: 12345678",
        ],
    ),
}


def normalize_country_code(country_code: Optional[str]) -> str:
    """Uppercase a known code; anything else becomes the default country."""
    code = (country_code or "").strip().upper()
    if code in TAX_PROFILES:
        return code
    fallback = settings.DEFAULT_COUNTRY
    return fallback if fallback in TAX_PROFILES else DEFAULT_COUNTRY


def get_tax_profile(country_code: Optional[str]) -> CountryTaxProfile:
    """Resolve a country code to its profile. Never raises."""
    return TAX_PROFILES[normalize_country_code(country_code)]


# ==============================================================================
# SERVICE CATALOG (default prices, in each country's currency)
# ==============================================================================

SERVICE_CATEGORIES: Dict[str, dict] = {
    "company-formation": {
        "name": "Company Formation Services",
        "services": {
            "AE": [
                ("Mainland Company Setup", 5000),
                ("Freezone Company Setup", 4000),
                ("Offshore Company Setup", 6000),
                ("Business License Renewal", 1500),
                ("Visa Processing", 2000),
            ],
            "IN": [
                ("Private Limited Company", 15000),
                ("LLP Formation", 12000),
                ("GST Registration", 5000),
                ("MSME Registration", 3000),
                ("IEC Code", 4000),
            ],
            "HU": [
                ("Kft. Company Formation", 2000),
                ("EU VAT Registration", 800),
                ("Work Permit Processing", 1500),
                ("Bank Account Opening", 1000),
                ("Residence Permit", 2500),
            ],
            "GB": [
                ("Limited Company Formation", 500),
                ("VAT Registration", 300),
                ("PAYE Setup", 400),
                ("Bank Account Opening", 800),
                ("Companies House Filing", 200),
            ],
        },
    },
    "compliance": {
        "name": "Compliance & Tax Services",
        "services": {
            "AE": [
                ("VAT Return Filing", 800),
                ("Corporate Tax Compliance", 1200),
                ("Audit Support", 2000),
                ("ESR Filing", 1000),
            ],
            "IN": [
                ("GST Return Filing", 3000),
                ("Income Tax Filing", 5000),
                ("TDS Compliance", 2000),
                ("ROC Compliance", 4000),
            ],
            "HU": [
                ("Monthly VAT Returns", 300),
                ("Corporate Tax Filing", 800),
                ("Annual Reports", 600),
                ("Statistical Reports", 400),
            ],
            "GB": [
                ("VAT Returns", 200),
                ("Corporation Tax", 400),
                ("Annual Confirmation", 150),
                ("PAYE Processing", 300),
            ],
        },
    },
    "consultation": {
        "name": "Business Consultation",
        "services": {
            "AE": [
                ("Business Setup Consultation", 500),
                ("Tax Advisory", 800),
                ("Legal Consultation", 1000),
            ],
            "IN": [
                ("Business Setup Consultation", 2000),
                ("Tax Advisory", 3000),
                ("Legal Consultation", 4000),
            ],
            "HU": [
                ("Business Setup Consultation", 200),
                ("Tax Advisory", 300),
                ("Legal Consultation", 400),
            ],
            "GB": [
                ("Business Setup Consultation", 150),
                ("Tax Advisory", 250),
                ("Legal Consultation", 300),
            ],
        },
    },
}


def services_for_country(country_code: str) -> List[dict]:
    """Catalog entries offered in one country, grouped by category.

    Unknown codes get an empty list: the catalog is keyed by country and
    does not fall back like the tax table does.
    """
    code = (country_code or "").strip().upper()
    result = []
    for category in SERVICE_CATEGORIES.values():
        entries = category["services"].get(code)
        if entries:
            result.append({
                "category": category["name"],
                "items": [
                    {"name": name, "price": price, "taxable": True}
                    for name, price in entries
                ],
            })
    return result


def items_from_services(country_code: str, names: List[str]) -> List[InvoiceItem]:
    """Build one line item per catalog service name, at its default price."""
    prices = {
        item["name"]: item
        for group in services_for_country(country_code)
        for item in group["items"]
    }
    items = []
    for name in names:
        entry = prices.get(name)
        if entry is None:
            raise ValueError(f"Unknown service for {country_code}: {name}")
        items.append(InvoiceItem(
            description=entry["name"],
            quantity=Decimal("1"),
            unit_price=Decimal(str(entry["price"])),
            taxable=entry["taxable"],
        ))
    return items
