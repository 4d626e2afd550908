"""
System prompts for the country chat assistant.

================================================================================
PROMPT LAYOUT
================================================================================

Every request's system message is:

1. COUNTRY PERSONA (from app/services/countries.py)
   - Which jurisdiction the assistant advises on
   - Topics to focus on (VAT, GST, Kft., Companies House, ...)

2. HOUSE RULES (below, same for every country)
   - No invented fees or legal guarantees
   - Point to the local support contact for quotes and documents
   - Plain text only, the widget does not render markdown

The visitor's message is sent separately as the user message and is never
interpolated into the system prompt.
================================================================================
"""

from app.services.countries import Country

HOUSE_RULES = """Rules:
- Do not quote exact government fees or promise approval timelines; say they change and should be confirmed.
- For quotes, invoices or documents, direct the visitor to our local team at {email} or {phone} (WhatsApp {whatsapp}).
- Keep answers concise and practical, in plain text without markdown.
- If the question is not about doing business in {name}, say briefly that you can only help with business services there."""


def build_system_prompt(country: Country) -> str:
    """Persona followed by the shared house rules, filled for one country."""
    rules = HOUSE_RULES.format(
        name=country.name,
        email=country.contact.email,
        phone=country.contact.phone,
        whatsapp=country.contact.whatsapp,
    )
    return f"{country.system}\n\n{rules}"
