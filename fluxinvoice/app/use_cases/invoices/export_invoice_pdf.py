"""ExportInvoicePdf Use Case

Renders the current draft to a PDF document.
"""

import logging
from fluxinvoice.libs.result import Result, Return, Error
from fluxinvoice.app.services.pdf_service import PdfService
from fluxinvoice.domain.invoice_draft import InvoiceDraft
from fluxinvoice.domain.preview import build_preview
from fluxinvoice.domain.totals import compute_totals
from .dtos import ExportedPdfDTO

logger = logging.getLogger(__name__)


class ExportInvoicePdf:
    """
    Use Case: Export a draft as PDF

    Business Rules:
    1. The preview is rebuilt from the submitted draft right before rendering
    2. Filename is invoice_<invoiceNumber>.pdf (empty number allowed)
    3. Renderer failures are reported as EXPORT_FAILED
    """

    def __init__(self, pdf_service: PdfService):
        self.pdf_service = pdf_service

    def execute(self, draft: InvoiceDraft) -> Result[ExportedPdfDTO]:
        try:
            totals = compute_totals(draft.items, draft.discount, draft.shipping)
            preview = build_preview(draft, totals)
            content = self.pdf_service.render_invoice(draft=draft, preview=preview)

            return Return.ok(
                ExportedPdfDTO(
                    filename=preview.filename,
                    content=content,
                    grand_total=totals.grand_total,
                )
            )

        except Exception as e:
            logger.error(f"PDF export failed: {e}")
            return Return.err(
                Error(
                    code="EXPORT_FAILED",
                    message="Failed to export invoice PDF",
                    reason=str(e),
                )
            )
