"""Invoice use cases"""
from .save_invoice import SaveInvoice
from .duplicate_invoice import DuplicateInvoice
from .delete_invoice import DeleteInvoice
from .list_invoices import ListInvoices, GetInvoice
from .edit_handoff import StageInvoiceEdit, OpenDraft
from .edit_draft import PreviewDraft, EditDraft
from .export_invoice_pdf import ExportInvoicePdf
from .dtos import (
    SaveInvoiceCommandDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    DeleteInvoiceResponseDTO,
    DraftStateDTO,
    EditDraftCommandDTO,
    ExportedPdfDTO,
)

__all__ = [
    "SaveInvoice",
    "DuplicateInvoice",
    "DeleteInvoice",
    "ListInvoices",
    "GetInvoice",
    "StageInvoiceEdit",
    "OpenDraft",
    "PreviewDraft",
    "EditDraft",
    "ExportInvoicePdf",
    "SaveInvoiceCommandDTO",
    "ListInvoicesQueryDTO",
    "ListInvoicesResponseDTO",
    "DeleteInvoiceResponseDTO",
    "DraftStateDTO",
    "EditDraftCommandDTO",
    "ExportedPdfDTO",
]
