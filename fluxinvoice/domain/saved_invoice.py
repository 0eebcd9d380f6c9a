"""Saved Invoice Domain Entity

A persisted snapshot of a draft plus store-assigned identity and frozen total.
"""

from datetime import datetime

from pydantic import Field

from fluxinvoice.domain.base import ZERO, Amount, RecordId, Timestamp
from fluxinvoice.domain.invoice_draft import InvoiceDraft


class SavedInvoiceRecord(InvoiceDraft):
    """
    SavedInvoiceRecord - InvoiceDraft + id, total and saved_at

    Domain Rules:
    - id is assigned by the store and is distinct from invoice_number
    - total is the grand total frozen at save time; it is never recomputed on load
    - saved_at may be missing on records written by older clients
    """

    id: RecordId = Field(description="Store-assigned unique identifier")
    total: Amount = Field(default=ZERO, description="Grand total frozen at save time")
    saved_at: Timestamp = Field(default=None, alias="savedAt", description="Persistence timestamp (UTC)")

    def to_draft(self) -> InvoiceDraft:
        """Copy the draft fields back out, dropping id, total and saved_at"""
        data = self.model_dump(include=set(InvoiceDraft.model_fields))
        return InvoiceDraft.model_validate(data)

    @classmethod
    def from_draft(
        cls, draft: InvoiceDraft, record_id: str, total, saved_at: datetime
    ) -> "SavedInvoiceRecord":
        data = draft.model_dump()
        data.update(id=record_id, total=total, saved_at=saved_at)
        return cls.model_validate(data)
