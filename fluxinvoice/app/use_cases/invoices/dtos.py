"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from decimal import Decimal
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from fluxinvoice.app.repositories.invoice_store import SortMode
from fluxinvoice.app.services.draft_editor import DraftEditor
from fluxinvoice.domain.base import Amount
from fluxinvoice.domain.invoice_draft import ChargeKind, InvoiceDraft, MetaField
from fluxinvoice.domain.line_item import LineItemPatch
from fluxinvoice.domain.party import PartyPatch, PartyRole
from fluxinvoice.domain.preview import InvoicePreview, build_preview
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord
from fluxinvoice.domain.totals import InvoiceTotals


class DTO(BaseModel):
    class Config:
        populate_by_name = True


class SaveInvoiceCommandDTO(DTO):
    """
    Command DTO for saving a draft

    Used as input to SaveInvoice use case.
    """

    draft: InvoiceDraft = Field(
        ...,
        description="Draft to persist (copied by value)"
    )

    total: Amount = Field(
        ...,
        description="Grand total computed by the caller; stored as-is"
    )

    source_record_id: Optional[str] = Field(
        default=None,
        alias="sourceRecordId",
        description="Record being edited; when set the save overwrites it in place"
    )


class ListInvoicesQueryDTO(DTO):
    """Query DTO for the saved invoices list"""

    query: str = Field(
        default="",
        description="Case-insensitive match on invoice number, client or sender name"
    )

    sort: SortMode = Field(
        default=SortMode.NEWEST_FIRST,
        description="new, old, amountDesc or amountAsc"
    )


class ListInvoicesResponseDTO(DTO):
    """Response DTO for ListInvoices"""

    invoices: List[SavedInvoiceRecord] = Field(
        default_factory=list,
        description="Matching records in requested order"
    )

    total_count: int = Field(
        ...,
        alias="totalCount",
        description="Number of stored records before filtering"
    )


class DeleteInvoiceResponseDTO(DTO):
    """Response DTO for DeleteInvoice"""

    record_id: str = Field(..., alias="recordId")

    deleted: bool = Field(
        ...,
        description="False when no record had this id (no-op)"
    )


class DraftStateDTO(DTO):
    """
    Response DTO carrying a draft with everything derived from it

    Returned by OpenDraft, PreviewDraft and EditDraft.
    """

    draft: InvoiceDraft
    totals: InvoiceTotals
    preview: InvoicePreview

    source_record_id: Optional[str] = Field(
        default=None,
        alias="sourceRecordId",
        description="Saved record this draft was opened from, if any"
    )

    next_item_id: int = Field(
        ...,
        alias="nextItemId",
        description="Next line item id; send back with the draft to keep ids unique"
    )

    @classmethod
    def from_editor(cls, editor: DraftEditor) -> "DraftStateDTO":
        return cls(
            draft=editor.draft,
            totals=editor.totals,
            preview=build_preview(editor.draft, editor.totals),
            source_record_id=editor.source_record_id,
            next_item_id=editor.next_item_id,
        )


class SetPartyOperation(DTO):
    op: Literal["set_party"] = "set_party"
    which: PartyRole
    patch: PartyPatch

    def apply(self, editor: DraftEditor) -> None:
        editor.set_party(self.which, self.patch)


class AddLineItemOperation(DTO):
    op: Literal["add_line_item"] = "add_line_item"

    def apply(self, editor: DraftEditor) -> None:
        editor.add_line_item()


class RemoveLineItemOperation(DTO):
    op: Literal["remove_line_item"] = "remove_line_item"
    item_id: int = Field(..., alias="itemId")

    def apply(self, editor: DraftEditor) -> None:
        editor.remove_line_item(self.item_id)


class UpdateLineItemOperation(DTO):
    op: Literal["update_line_item"] = "update_line_item"
    item_id: int = Field(..., alias="itemId")
    patch: LineItemPatch

    def apply(self, editor: DraftEditor) -> None:
        editor.update_line_item(self.item_id, self.patch)


class SetChargeOperation(DTO):
    op: Literal["set_charge"] = "set_charge"
    kind: ChargeKind
    value: Any = None

    def apply(self, editor: DraftEditor) -> None:
        editor.set_charge(self.kind, self.value)


class SetMetaOperation(DTO):
    op: Literal["set_meta"] = "set_meta"
    field: MetaField
    value: Any = None

    def apply(self, editor: DraftEditor) -> None:
        editor.set_meta(self.field, self.value)


DraftOperation = Annotated[
    Union[
        SetPartyOperation,
        AddLineItemOperation,
        RemoveLineItemOperation,
        UpdateLineItemOperation,
        SetChargeOperation,
        SetMetaOperation,
    ],
    Field(discriminator="op"),
]


class EditDraftCommandDTO(DTO):
    """
    Command DTO for applying editor operations to a draft

    Used as input to EditDraft use case.
    """

    draft: InvoiceDraft = Field(default_factory=InvoiceDraft)

    operations: List[DraftOperation] = Field(
        default_factory=list,
        description="Applied in order; each one recomputes totals"
    )

    source_record_id: Optional[str] = Field(default=None, alias="sourceRecordId")

    next_item_id: Optional[int] = Field(default=None, alias="nextItemId")


class ExportedPdfDTO(DTO):
    """Response DTO for ExportInvoicePdf"""

    filename: str = Field(..., description="invoice_<invoiceNumber>.pdf")
    content: bytes = Field(..., description="PDF document")
    grand_total: Decimal = Field(..., alias="grandTotal")
