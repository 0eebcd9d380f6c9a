"""SaveInvoice Use Case

Persists the current draft as a saved invoice record, or overwrites the
record it was opened from when saving after an edit.
"""

import logging
from fluxinvoice.libs.result import Result, Return, Error
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.app.services.key_value_storage import StorageWriteError
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord
from .dtos import SaveInvoiceCommandDTO

logger = logging.getLogger(__name__)


class SaveInvoice:
    """
    Use Case: Save a draft

    Business Rules:
    1. total is frozen exactly as supplied by the caller (no recomputation)
    2. Without source_record_id a new record is appended with a fresh id
    3. With source_record_id the existing record is overwritten in place,
       keeping its id and position
    4. A failed write is reported, never treated as success
    """

    def __init__(self, invoice_store: InvoiceStore):
        self.invoice_store = invoice_store

    def execute(self, command: SaveInvoiceCommandDTO) -> Result[SavedInvoiceRecord]:
        """
        Execute invoice save

        Args:
            command: SaveInvoiceCommandDTO with draft, total and optional source record

        Returns:
            Result[SavedInvoiceRecord]: Success with stored record or error
        """
        try:
            if command.source_record_id:
                record = self.invoice_store.replace(
                    command.source_record_id, command.draft, command.total
                )
                if record is None:
                    return Return.err(
                        Error(
                            code="INVOICE_NOT_FOUND",
                            message=f"Invoice with ID {command.source_record_id} not found",
                            reason="The invoice being edited no longer exists",
                        )
                    )
            else:
                record = self.invoice_store.save_new(command.draft, command.total)

            return Return.ok(record)

        except StorageWriteError as e:
            logger.error(f"Saving invoice failed: {e}")
            return Return.err(
                Error(
                    code="SAVE_FAILED",
                    message="Invoice could not be saved",
                    reason=str(e),
                )
            )
