"""DuplicateInvoice Use Case

Clones a saved invoice under a new identity.
"""

import logging
from fluxinvoice.libs.result import Result, Return, Error
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.app.services.key_value_storage import StorageWriteError
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord

logger = logging.getLogger(__name__)


class DuplicateInvoice:
    """
    Use Case: Duplicate a saved invoice

    Business Rules:
    1. Source record must exist
    2. Copy gets a new id, "-COPY" appended to its invoice number and a fresh saved_at
    3. Copy is placed first in the collection
    """

    def __init__(self, invoice_store: InvoiceStore):
        self.invoice_store = invoice_store

    def execute(self, record_id: str) -> Result[SavedInvoiceRecord]:
        try:
            record = self.invoice_store.get_by_id(record_id)
            if record is None:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {record_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            return Return.ok(self.invoice_store.duplicate(record))

        except StorageWriteError as e:
            logger.error(f"Duplicating invoice {record_id} failed: {e}")
            return Return.err(
                Error(
                    code="DUPLICATE_FAILED",
                    message="Invoice could not be duplicated",
                    reason=str(e),
                )
            )
