"""Countries served by the chat widget: contact channels and assistant persona."""
from typing import Dict, List, Optional

from pydantic import BaseModel

from app.core.config import settings
from app.services.tax_config import normalize_country_code


class CountryContact(BaseModel):
    phone: str
    email: str
    whatsapp: str


class Country(BaseModel):
    code: str
    name: str
    language: str
    contact: CountryContact
    system: str  # system prompt for the chat assistant
    model: str


COUNTRIES: Dict[str, Country] = {
    "AE": Country(
        code="AE",
        name="United Arab Emirates",
        language="en",
        contact=CountryContact(phone="+971-50-123-4567", email="support-ae@skvchatgb.com", whatsapp="971501234567"),
        system=(
            "You are an expert business consultant for SKV Business Services in the UAE. "
            "Focus on VAT (5%), Freezone and Mainland company setup, corporate tax regulations, "
            "visa processing and PRO services. Provide accurate, up-to-date information about UAE "
            "business regulations, licensing requirements, and compliance procedures. "
            "Be professional, helpful, and specific in your responses."
        ),
        model=settings.GROQ_MODEL,
    ),
    "IN": Country(
        code="IN",
        name="India",
        language="hi",
        contact=CountryContact(phone="+91-98-7654-3210", email="support-in@skvchatgb.com", whatsapp="919876543210"),
        system=(
            "You are an expert business consultant for SKV Business Services in India. "
            "Focus on GST regulations, MCA company incorporation, MSME and UDYAM registration, "
            "Import Export Code (IEC), FSSAI licensing, and compliance requirements. Provide detailed "
            "guidance on Indian business laws, registration processes, and regulatory compliance. "
            "Be knowledgeable about state-specific requirements and recent policy changes."
        ),
        model=settings.GROQ_MODEL,
    ),
    "HU": Country(
        code="HU",
        name="Hungary",
        language="en",
        contact=CountryContact(phone="+36-20-123-4567", email="support-hu@skvchatgb.com", whatsapp="36201234567"),
        system=(
            "You are an expert business consultant for SKV Business Services in Hungary. "
            "Focus on Kft. (limited liability company) setup, EU VAT regulations, corporate tax "
            "requirements, work permits and residency procedures, and business banking in Hungary. "
            "Provide comprehensive information about the Hungarian business environment, "
            "EU regulations, and local compliance requirements."
        ),
        model=settings.GROQ_MODEL,
    ),
    "GB": Country(
        code="GB",
        name="United Kingdom (London)",
        language="en",
        contact=CountryContact(phone="+44-7444-123456", email="support-uk@skvchatgb.com", whatsapp="447444123456"),
        system=(
            "You are an expert business consultant for SKV Business Services in the UK (London). "
            "Focus on Limited Company (LTD) registration, Companies House filings, HMRC compliance, "
            "VAT registration, PAYE systems, and post-Brexit business regulations. Provide detailed "
            "guidance on UK business formation, tax obligations, and regulatory requirements."
        ),
        model=settings.GROQ_MODEL,
    ),
}


def get_country(code: Optional[str]) -> Country:
    """Unknown or missing codes get the default country."""
    return COUNTRIES[normalize_country_code(code)]


def country_from_subdomain(hostname: str) -> str:
    """'in.skvchatgb.com' -> 'IN'. Anything unrecognised maps to the default."""
    subdomain = (hostname or "").split(":")[0].split(".")[0]
    return normalize_country_code(subdomain)


def all_countries() -> List[Country]:
    return list(COUNTRIES.values())
