"""Invoice email: HTML summary plus delivery via SMTP or a simulated send."""
import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from app.core.config import settings
from app.schemas.invoice import Invoice
from app.services.formatters import format_currency, format_date

logger = logging.getLogger(__name__)

EMAIL_STYLE = """
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0; background-color: #f4f4f4; }
        .container { max-width: 600px; margin: 0 auto; background: white; padding: 20px; border-radius: 8px; }
        .header { text-align: center; border-bottom: 2px solid #007bff; padding-bottom: 20px; margin-bottom: 30px; }
        .invoice-summary { background: #f8f9fa; padding: 20px; border-radius: 6px; margin: 20px 0; }
        .summary-row { display: flex; justify-content: space-between; margin: 10px 0; padding: 5px 0; }
        .total-row { border-top: 2px solid #007bff; font-weight: bold; font-size: 18px; color: #007bff;
                     margin-top: 15px; padding-top: 15px; }
        .payment { background: #fff3cd; border: 1px solid #ffeeba; padding: 15px; border-radius: 5px; margin: 20px 0; }
        .footer { text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #eee;
                  color: #666; font-size: 14px; }
"""


def email_subject(invoice: Invoice) -> str:
    return f"Invoice {invoice.invoice_number} from {invoice.company.name}"


def render_invoice_email(invoice: Invoice) -> str:
    """HTML email body summarising the invoice."""
    money = lambda amount: escape(format_currency(amount, invoice.currency, invoice.locale))
    company = invoice.company

    tax_rows = "\n".join(
        f"""            <div class="summary-row"><span><strong>{escape(tax.description)}:</strong></span>"""
        f"""<span>{money(tax.amount)}</span></div>"""
        for tax in invoice.taxes
    )

    notes = ""
    if invoice.notes:
        notes = f"""
        <div>
            <h4>Additional Notes:</h4>
            <p>{escape(invoice.notes)}</p>
        </div>"""

    address = "\n".join(f"            <p>{escape(line)}</p>" for line in company.address)
    tax_number = f"<p>Tax Registration Number: {escape(company.tax_number)}</p>" if company.tax_number else ""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Invoice {escape(invoice.invoice_number)}</title>
    <style>{EMAIL_STYLE}    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>New Invoice from {escape(company.name)}</h1>
        </div>

        <p>Dear {escape(invoice.client.name)},</p>
        <p>Please find below the summary of your invoice for the services provided.</p>

        <div class="invoice-summary">
            <h3>Invoice Summary</h3>
            <div class="summary-row"><span><strong>Invoice Number:</strong></span><span>{escape(invoice.invoice_number)}</span></div>
            <div class="summary-row"><span><strong>Invoice Date:</strong></span><span>{format_date(invoice.issue_date, invoice.locale)}</span></div>
            <div class="summary-row"><span><strong>Due Date:</strong></span><span>{format_date(invoice.due_date, invoice.locale)}</span></div>
            <div class="summary-row"><span><strong>Subtotal:</strong></span><span>{money(invoice.subtotal)}</span></div>
{tax_rows}
            <div class="summary-row total-row"><span><strong>Total Amount:</strong></span><span>{money(invoice.total)}</span></div>
        </div>

        <div class="payment">
            <h4>Payment Information:</h4>
            <p>{escape(invoice.payment_terms)}</p>
        </div>
{notes}
        <p>If you have any questions about this invoice, please contact us:</p>
        <ul>
            <li><strong>Email:</strong> {escape(company.email)}</li>
            <li><strong>Phone:</strong> {escape(company.phone)}</li>
        </ul>

        <p>Best regards,<br><strong>{escape(company.name)}</strong><br>Business Services Team</p>

        <div class="footer">
            <p><strong>{escape(company.name)}</strong></p>
{address}
            <p>{escape(company.email)} | {escape(company.phone)}</p>
            {tax_number}
        </div>
    </div>
</body>
</html>"""


def _send_via_smtp(sender: str, recipient: str, subject: str, html_body: str):
    msg = MIMEMultipart("alternative")
    msg["From"] = sender
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.attach(MIMEText(html_body, "html", "utf-8"))

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.starttls()
        if settings.SMTP_USER and settings.SMTP_PASSWORD:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.send_message(msg)


async def send_invoice_email(invoice: Invoice, recipient: str) -> str:
    """
    Deliver the invoice summary to recipient. One attempt, no retry.

    Returns:
        "smtp" or "simulated", whichever path delivered the message

    Raises:
        smtplib.SMTPException / OSError: SMTP delivery failed
    """
    subject = email_subject(invoice)
    body = render_invoice_email(invoice)

    if settings.SMTP_HOST:
        sender = settings.EMAIL_FROM or invoice.company.email
        await asyncio.to_thread(_send_via_smtp, sender, recipient, subject, body)
        logger.info(f"Invoice {invoice.invoice_number} sent via SMTP")
        return "smtp"

    # No mail server configured: stand in for delivery latency
    await asyncio.sleep(settings.EMAIL_SEND_DELAY_SECONDS)
    logger.info(
        f"Simulated email for invoice {invoice.invoice_number}: "
        f"subject={subject!r}, content_length={len(body)}"
    )
    return "simulated"
