from .invoice_store import KeyValueInvoiceStore, INVOICES_KEY, EDIT_INVOICE_KEY

__all__ = [
    "KeyValueInvoiceStore",
    "INVOICES_KEY",
    "EDIT_INVOICE_KEY",
]
