from .base import BaseModel, generate_uuid, coerce_amount
from .party import Party, PartyPatch, PartyRole
from .line_item import LineItem, LineItemPatch
from .invoice_draft import InvoiceDraft, InvoiceTheme, ChargeKind, MetaField
from .saved_invoice import SavedInvoiceRecord
from .totals import InvoiceTotals, compute_totals, format_currency, line_total, line_tax
from .preview import InvoicePreview, build_preview, export_filename

__all__ = [
    "BaseModel",
    "generate_uuid",
    "coerce_amount",
    "Party",
    "PartyPatch",
    "PartyRole",
    "LineItem",
    "LineItemPatch",
    "InvoiceDraft",
    "InvoiceTheme",
    "ChargeKind",
    "MetaField",
    "SavedInvoiceRecord",
    "InvoiceTotals",
    "compute_totals",
    "format_currency",
    "line_total",
    "line_tax",
    "InvoicePreview",
    "build_preview",
    "export_filename",
]
