"""
Invoice document rendering.

Two outputs from the same assembled invoice:
- printable HTML (the default download, opened in a browser and printed)
- a real PDF built with reportlab

No business logic here: every number comes from the Invoice as assembled.
"""
from datetime import datetime, timezone
from html import escape
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.schemas.invoice import Invoice
from app.services.formatters import format_currency, format_date, format_rate
from app.services.tax_config import get_tax_profile

HTML_STYLE = """
        body { font-family: Arial, sans-serif; margin: 0; padding: 20px; color: #333; line-height: 1.6; }
        .invoice-container { max-width: 800px; margin: 0 auto; background: white; padding: 40px; border: 1px solid #ddd; }
        .header { display: flex; justify-content: space-between; align-items: flex-start;
                  margin-bottom: 40px; border-bottom: 2px solid #007bff; padding-bottom: 20px; }
        .invoice-title { font-size: 32px; font-weight: bold; color: #007bff; margin: 0; }
        .invoice-number { font-size: 18px; margin: 5px 0; font-weight: 600; }
        .company-info { text-align: right; }
        .company-name { font-size: 20px; font-weight: bold; margin-bottom: 10px; }
        .company-details { font-size: 14px; line-height: 1.4; }
        .invoice-details { display: flex; justify-content: space-between; margin-bottom: 40px; }
        .bill-to, .invoice-info { width: 48%; }
        .bill-to h3, .invoice-info h3 { font-size: 16px; margin-bottom: 10px; color: #007bff;
                                        border-bottom: 1px solid #eee; padding-bottom: 5px; }
        .items-table { width: 100%; border-collapse: collapse; margin-bottom: 30px; }
        .items-table th { background-color: #f8f9fa; padding: 12px; text-align: left;
                          border: 1px solid #dee2e6; font-weight: 600; }
        .items-table td { padding: 12px; border: 1px solid #dee2e6; }
        .items-table td.num, .items-table th.num { text-align: right; }
        .items-table td.qty, .items-table th.qty { text-align: center; }
        .totals { display: flex; justify-content: flex-end; margin-bottom: 30px; }
        .totals-table { width: 300px; }
        .totals-row { display: flex; justify-content: space-between; padding: 8px 0; border-bottom: 1px solid #eee; }
        .totals-row.total { font-weight: bold; font-size: 18px; border-top: 2px solid #007bff; border-bottom: none; }
        .section { margin-bottom: 25px; }
        .section h4 { margin-bottom: 8px; color: #007bff; }
        .legal { font-size: 12px; color: #666; }
        .footer { text-align: center; margin-top: 40px; font-size: 12px; color: #999; }
        @media print { body { padding: 0; } .invoice-container { border: none; } }
"""


def _lines(values) -> str:
    return "<br>".join(escape(v) for v in values if v)


def render_invoice_html(invoice: Invoice) -> str:
    """Full printable invoice as a standalone HTML document."""
    money = lambda amount: escape(format_currency(amount, invoice.currency, invoice.locale))
    profile = get_tax_profile(invoice.country)
    company = invoice.company
    client = invoice.client

    company_details = [*company.address, company.email, company.phone]
    if company.tax_number:
        company_details.append(f"TRN: {company.tax_number}")

    client_details = [client.company, *client.address, client.email]
    if client.tax_id:
        client_details.append(f"Tax ID: {client.tax_id}")

    item_rows = "\n".join(
        f"""            <tr>
                <td>{escape(item.description)}</td>
                <td class="qty">{item.quantity.normalize():f}</td>
                <td class="num">{money(item.unit_price)}</td>
                <td class="num">{money(item.line_total)}</td>
            </tr>"""
        for item in invoice.items
    )

    tax_rows = "\n".join(
        f"""                <div class="totals-row"><span>{escape(tax.tax_type)} ({format_rate(tax.rate)}):</span>"""
        f"""<span>{money(tax.amount)}</span></div>"""
        for tax in invoice.taxes
    )

    notes_section = ""
    if invoice.notes:
        notes_section = f"""
        <div class="section">
            <h4>Notes</h4>
            <p>{escape(invoice.notes)}</p>
        </div>"""

    legal_items = "\n".join(f"                <li>{escape(n)}</li>" for n in profile.legal_notices)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Invoice {escape(invoice.invoice_number)}</title>
    <style>{HTML_STYLE}    </style>
</head>
<body>
    <div class="invoice-container">
        <div class="header">
            <div>
                <h1 class="invoice-title">INVOICE</h1>
                <div class="invoice-number">{escape(invoice.invoice_number)}</div>
                <div>Status: {invoice.status.value.upper()}</div>
            </div>
            <div class="company-info">
                <div class="company-name">{escape(company.name)}</div>
                <div class="company-details">{_lines(company_details)}</div>
            </div>
        </div>

        <div class="invoice-details">
            <div class="bill-to">
                <h3>Bill To</h3>
                <strong>{escape(client.name)}</strong><br>
                {_lines(client_details)}
            </div>
            <div class="invoice-info">
                <h3>Invoice Details</h3>
                <strong>Issue Date:</strong> {format_date(invoice.issue_date, invoice.locale)}<br>
                <strong>Due Date:</strong> {format_date(invoice.due_date, invoice.locale)}<br>
                <strong>Currency:</strong> {escape(invoice.currency)}<br>
                <strong>Country:</strong> {escape(profile.display_name)}
            </div>
        </div>

        <table class="items-table">
            <thead>
            <tr>
                <th>Description</th>
                <th class="qty">Quantity</th>
                <th class="num">Unit Price</th>
                <th class="num">Amount</th>
            </tr>
            </thead>
            <tbody>
{item_rows}
            </tbody>
        </table>

        <div class="totals">
            <div class="totals-table">
                <div class="totals-row"><span>Subtotal:</span><span>{money(invoice.subtotal)}</span></div>
{tax_rows}
                <div class="totals-row total"><span>Total:</span><span>{money(invoice.total)}</span></div>
            </div>
        </div>

        <div class="section">
            <h4>Payment Terms</h4>
            <p>{escape(invoice.payment_terms)}</p>
        </div>
{notes_section}
        <div class="section legal">
            <h4>Legal Information</h4>
            <ul>
{legal_items}
            </ul>
        </div>

        <div class="footer">
            <p>Thank you for your business!</p>
            <p>{escape(company.name)} | {escape(company.website or company.email)}</p>
        </div>
    </div>
</body>
</html>"""


def render_invoice_pdf(invoice: Invoice) -> BytesIO:
    """
    Generate a PDF for an assembled invoice.

    Args:
        invoice: Invoice as returned by create_invoice

    Returns:
        BytesIO buffer positioned at the start of the PDF data
    """
    money = lambda amount: format_currency(amount, invoice.currency, invoice.locale)
    profile = get_tax_profile(invoice.country)
    company = invoice.company
    client = invoice.client

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        title=f"Invoice {invoice.invoice_number}",
        author=company.name,
    )

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'InvoiceTitle',
        parent=styles['Heading1'],
        fontSize=24,
        textColor=colors.HexColor('#007bff'),
        alignment=TA_CENTER,
        spaceAfter=12,
    )
    heading_style = ParagraphStyle(
        'InvoiceHeading',
        parent=styles['Heading2'],
        fontSize=13,
        textColor=colors.HexColor('#1f2937'),
        spaceAfter=6,
    )
    normal_style = ParagraphStyle(
        'InvoiceNormal',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#374151'),
    )
    right_style = ParagraphStyle('InvoiceRight', parent=normal_style, alignment=TA_RIGHT)
    small_style = ParagraphStyle(
        'InvoiceSmall',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.grey,
    )

    elements.append(Paragraph("INVOICE", title_style))
    elements.append(Spacer(1, 0.2 * inch))

    # Issuer and invoice identity side by side
    company_lines = [f"<b>{escape(company.name)}</b>", *map(escape, company.address), escape(company.email),
                     escape(company.phone)]
    if company.tax_number:
        company_lines.append(f"TRN: {escape(company.tax_number)}")
    info_data = [[
        Paragraph("<br/>".join(company_lines), normal_style),
        Paragraph(
            f"<b>Invoice #:</b> {escape(invoice.invoice_number)}<br/>"
            f"<b>Issue Date:</b> {format_date(invoice.issue_date, invoice.locale)}<br/>"
            f"<b>Due Date:</b> {format_date(invoice.due_date, invoice.locale)}<br/>"
            f"<b>Status:</b> {invoice.status.value.upper()}",
            normal_style,
        ),
    ]]
    info_table = Table(info_data, colWidths=[3.5 * inch, 3 * inch])
    info_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.3 * inch))

    elements.append(Paragraph("<b>Bill To:</b>", heading_style))
    client_lines = [f"<b>{escape(client.name)}</b>"]
    client_lines += [escape(v) for v in [client.company, *client.address, client.email] if v]
    if client.tax_id:
        client_lines.append(f"Tax ID: {escape(client.tax_id)}")
    elements.append(Paragraph("<br/>".join(client_lines), normal_style))
    elements.append(Spacer(1, 0.3 * inch))

    items_data = [[
        Paragraph("<b>Description</b>", normal_style),
        Paragraph("<b>Quantity</b>", normal_style),
        Paragraph("<b>Unit Price</b>", normal_style),
        Paragraph("<b>Amount</b>", normal_style),
    ]]
    for item in invoice.items:
        items_data.append([
            Paragraph(escape(item.description), normal_style),
            Paragraph(f"{item.quantity.normalize():f}", normal_style),
            Paragraph(money(item.unit_price), right_style),
            Paragraph(money(item.line_total), right_style),
        ])

    items_table = Table(items_data, colWidths=[3 * inch, 1 * inch, 1.2 * inch, 1.3 * inch])
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f3f4f6')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor('#1f2937')),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('TOPPADDING', (0, 0), (-1, 0), 8),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#fafafa')]),
        ('TOPPADDING', (0, 1), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 1), (-1, -1), 6),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.2 * inch))

    total_data = [['', '', Paragraph("<b>Subtotal:</b>", normal_style),
                   Paragraph(money(invoice.subtotal), right_style)]]
    for tax in invoice.taxes:
        total_data.append(['', '', Paragraph(f"<b>{escape(tax.tax_type)} ({format_rate(tax.rate)}):</b>", normal_style),
                           Paragraph(money(tax.amount), right_style)])
    total_data.append(['', '', Paragraph("<b>TOTAL:</b>", heading_style),
                       Paragraph(f"<b>{money(invoice.total)}</b>", right_style)])

    last = len(total_data) - 1
    total_table = Table(total_data, colWidths=[3 * inch, 1 * inch, 1.2 * inch, 1.3 * inch])
    total_table.setStyle(TableStyle([
        ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
        ('LINEABOVE', (2, last), (-1, last), 1, colors.black),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
    ]))
    elements.append(total_table)
    elements.append(Spacer(1, 0.4 * inch))

    elements.append(Paragraph("<b>Payment Terms:</b>", heading_style))
    elements.append(Paragraph(escape(invoice.payment_terms), normal_style))

    if invoice.notes:
        elements.append(Spacer(1, 0.2 * inch))
        elements.append(Paragraph("<b>Notes:</b>", heading_style))
        elements.append(Paragraph(escape(invoice.notes), normal_style))

    elements.append(Spacer(1, 0.3 * inch))
    for notice in profile.legal_notices:
        elements.append(Paragraph(escape(notice), small_style))

    footer_style = ParagraphStyle('Footer', parent=small_style, alignment=TA_CENTER)
    elements.append(Spacer(1, 0.5 * inch))
    elements.append(Paragraph("Thank you for your business!", footer_style))
    generated_at = datetime.now(timezone.utc).strftime('%d %b %Y at %H:%M UTC')
    elements.append(Paragraph(f"Invoice generated on {generated_at}", footer_style))

    doc.build(elements)

    buffer.seek(0)
    return buffer
