"""ReportLab PDF Generation Service Implementation

Implements invoice PDF export using ReportLab.
"""

import base64
import logging
from io import BytesIO
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    Image,
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from fluxinvoice.app.services.pdf_service import PdfService
from fluxinvoice.domain.invoice_draft import InvoiceDraft
from fluxinvoice.domain.preview import InvoicePreview

logger = logging.getLogger(__name__)

COLUMN_WIDTHS = [62 * mm, 20 * mm, 30 * mm, 22 * mm, 36 * mm]


def decode_image(reference: Optional[str], max_width: float, max_height: float) -> Optional[Image]:
    """
    Turn a base64 data URL into a flowable scaled to fit the box

    Returns None (and logs) when the reference is missing or not a readable image.
    """
    if not reference:
        return None
    payload = reference.split(",", 1)[1] if reference.startswith("data:") else reference
    try:
        raw = base64.b64decode(payload, validate=True)
        width, height = ImageReader(BytesIO(raw)).getSize()
    except Exception as e:
        logger.warning(f"Skipping unreadable branding image: {e}")
        return None

    scale = min(max_width / width, max_height / height, 1)
    return Image(BytesIO(raw), width=width * scale, height=height * scale)


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Lays out the preview on an A4 page in the draft's theme colors.
    """

    def render_invoice(self, draft: InvoiceDraft, preview: InvoicePreview) -> bytes:
        """
        Render an invoice PDF

        Args:
            draft: Draft supplying branding images
            preview: Rendered preview supplying every printed value

        Returns:
            PDF document as bytes
        """
        palette = preview.theme.palette
        primary = colors.HexColor(palette["primary"])
        accent = colors.HexColor(palette["accent"])
        stripe = colors.HexColor(palette["stripe"])

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=preview.filename,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=6,
            textColor=primary,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=accent,
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Header - logo and INVOICE label
        logo = decode_image(draft.logo, 40 * mm, 20 * mm)
        if logo is not None:
            logo.hAlign = "LEFT"
            elements.append(logo)
            elements.append(Spacer(1, 4 * mm))
        elements.append(Paragraph("INVOICE", title_style))
        if preview.invoice_number:
            elements.append(Paragraph(f"# {self._escape(preview.invoice_number)}", header_style))
        elements.append(Spacer(1, 6 * mm))

        # Invoice Details Table
        invoice_info = [
            ["Issue Date:", preview.issue_date or "-"],
            ["Due Date:", preview.due_date or "-"],
            ["Currency:", preview.currency or "-"],
        ]
        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), accent),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Parties side by side
        party_table = Table(
            [
                [Paragraph("Bill From:", bold_style), Paragraph("Bill To:", bold_style)],
                [
                    self._lines(preview.from_lines, normal_style),
                    self._lines(preview.to_lines, normal_style),
                ],
            ],
            colWidths=[85 * mm, 85 * mm],
        )
        party_table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        elements.append(party_table)
        elements.append(Spacer(1, 8 * mm))

        # Line Items Table
        line_data = [["Item", "Qty", "Rate", "Tax", "Amount"]]
        for row in preview.rows:
            label = self._escape(row.name or "-")
            if row.description:
                label += f"<br/><font size=8 color='#7F8C8D'>{self._escape(row.description)}</font>"
            line_data.append(
                [
                    Paragraph(label, normal_style),
                    row.quantity,
                    row.unit_price,
                    row.tax_percent,
                    row.amount,
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), primary),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 1), (-1, -1), "TOP"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    # Alternate row colors
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, stripe]),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [
            ["", "Subtotal:", preview.subtotal],
            ["", "Tax:", preview.tax_total],
            ["", "Discount:", preview.discount_deduction],
            ["", "Shipping:", preview.shipping],
            ["", "Total:", preview.grand_total],
        ]
        total_table = Table(total_data, colWidths=[94 * mm, 40 * mm, 36 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (1, -1), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (1, -1), (-1, -1), 11),
                    ("LINEABOVE", (1, -1), (-1, -1), 1.5, primary),
                    ("TOPPADDING", (0, -1), (-1, -1), 8),
                ]
            )
        )
        elements.append(total_table)
        elements.append(Spacer(1, 10 * mm))

        if preview.payment_lines:
            elements.append(Paragraph("Payment Details", bold_style))
            elements.append(self._lines(preview.payment_lines, normal_style))
            elements.append(Spacer(1, 6 * mm))

        for heading, text in (("Notes", preview.notes), ("Terms", preview.terms)):
            if text:
                elements.append(Paragraph(heading, bold_style))
                elements.append(Paragraph(self._escape(text).replace("\n", "<br/>"), normal_style))
                elements.append(Spacer(1, 6 * mm))

        signature = decode_image(draft.signature, 50 * mm, 20 * mm)
        if signature is not None:
            signature.hAlign = "RIGHT"
            elements.append(signature)
            elements.append(Paragraph("Authorized Signature", ParagraphStyle(
                "SignatureCaption",
                parent=header_style,
                alignment=2,
            )))

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    def _lines(self, lines: List[str], style: ParagraphStyle) -> Paragraph:
        return Paragraph("<br/>".join(self._escape(line) for line in lines) or "-", style)
