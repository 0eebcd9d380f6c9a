"""ListInvoices Use Case

Searches and orders the saved invoice collection.
"""

from fluxinvoice.libs.result import Result, Return, Error
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO


class ListInvoices:
    """
    Use Case: List saved invoices

    Never fails: unreadable storage is an empty list.
    """

    def __init__(self, invoice_store: InvoiceStore):
        self.invoice_store = invoice_store

    def execute(self, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        records = self.invoice_store.load_all()
        matched = self.invoice_store.filter_and_sort(records, query.query, query.sort)
        return Return.ok(ListInvoicesResponseDTO(invoices=matched, total_count=len(records)))


class GetInvoice:
    """Use Case: Fetch one saved invoice for viewing"""

    def __init__(self, invoice_store: InvoiceStore):
        self.invoice_store = invoice_store

    def execute(self, record_id: str) -> Result[SavedInvoiceRecord]:
        record = self.invoice_store.get_by_id(record_id)
        if record is None:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {record_id} not found",
                    reason="Invoice does not exist",
                )
            )
        return Return.ok(record)
