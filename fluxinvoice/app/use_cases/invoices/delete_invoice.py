"""DeleteInvoice Use Case

Removes a saved invoice by id. Deleting an unknown id is a no-op.
"""

import logging
from fluxinvoice.libs.result import Result, Return, Error
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.app.services.key_value_storage import StorageWriteError
from .dtos import DeleteInvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeleteInvoice:

    def __init__(self, invoice_store: InvoiceStore):
        self.invoice_store = invoice_store

    def execute(self, record_id: str) -> Result[DeleteInvoiceResponseDTO]:
        try:
            deleted = self.invoice_store.delete(record_id)
        except StorageWriteError as e:
            logger.error(f"Deleting invoice {record_id} failed: {e}")
            return Return.err(
                Error(
                    code="DELETE_FAILED",
                    message="Invoice could not be deleted",
                    reason=str(e),
                )
            )

        return Return.ok(DeleteInvoiceResponseDTO(record_id=record_id, deleted=deleted))
