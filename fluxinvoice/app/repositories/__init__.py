from .invoice_store import InvoiceStore, SortMode, filter_and_sort

__all__ = [
    "InvoiceStore",
    "SortMode",
    "filter_and_sort",
]
