from .pdf_service import ReportLabPdfService
from .identity_provider import StaticTokenIdentityProvider

__all__ = [
    "ReportLabPdfService",
    "StaticTokenIdentityProvider",
]
