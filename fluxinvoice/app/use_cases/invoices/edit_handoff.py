"""Edit handoff Use Cases

StageInvoiceEdit writes a saved record to the edit slot before the client
navigates to the builder; OpenDraft reads it back once (clearing the slot)
and turns it into an editable draft.
"""

import logging
from typing import Optional
from fluxinvoice.libs.result import Result, Return, Error
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.app.services.draft_editor import DraftEditor
from fluxinvoice.app.services.key_value_storage import StorageWriteError
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord
from .dtos import DraftStateDTO

logger = logging.getLogger(__name__)


class StageInvoiceEdit:

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

            self.invoice_store.stage_edit(record)
            return Return.ok(record)

        except StorageWriteError as e:
            logger.error(f"Staging invoice {record_id} for edit failed: {e}")
            return Return.err(
                Error(
                    code="EDIT_HANDOFF_FAILED",
                    message="Invoice could not be opened for editing",
                    reason=str(e),
                )
            )


class OpenDraft:
    """
    Use Case: Open the invoice builder

    Business Rules:
    1. Without a record id the builder starts from a blank draft
    2. With a record id the staged edit target is read and cleared
    3. A staged record with a different id is discarded (stale handoff)
    """

    def __init__(self, invoice_store: InvoiceStore, default_currency: str = "INR"):
        self.invoice_store = invoice_store
        self.default_currency = default_currency

    def execute(self, record_id: Optional[str] = None) -> Result[DraftStateDTO]:
        if not record_id:
            return Return.ok(DraftStateDTO.from_editor(DraftEditor.new(self.default_currency)))

        try:
            staged = self.invoice_store.consume_edit()
        except StorageWriteError as e:
            logger.error(f"Clearing edit handoff failed: {e}")
            return Return.err(
                Error(
                    code="EDIT_HANDOFF_FAILED",
                    message="Invoice could not be opened for editing",
                    reason=str(e),
                )
            )

        if staged is None or staged.id != str(record_id):
            logger.warning(f"No staged edit for invoice {record_id}, starting blank draft")
            return Return.ok(DraftStateDTO.from_editor(DraftEditor.new(self.default_currency)))

        return Return.ok(DraftStateDTO.from_editor(DraftEditor.from_record(staged)))
