"""PDF Generation Service Interface

Defines the contract for exporting a rendered invoice to PDF.
"""

from abc import ABC, abstractmethod
from fluxinvoice.domain.invoice_draft import InvoiceDraft
from fluxinvoice.domain.preview import InvoicePreview


class PdfService(ABC):
    """
    Service interface for PDF generation

    Receives the draft together with its already-rendered preview; the
    preview is the source of every printed amount.
    """

    @abstractmethod
    def render_invoice(self, draft: InvoiceDraft, preview: InvoicePreview) -> bytes:
        """
        Render an invoice as PDF

        Args:
            draft: Draft being exported (branding images, theme)
            preview: Preview built from the same draft state

        Returns:
            PDF document as bytes
        """
        pass
