"""Draft Editor

Holds one InvoiceDraft under construction and applies mutations to it.
Every mutation recomputes totals synchronously and notifies subscribers
(e.g. a bound preview) with the new draft state.
"""

import logging
from typing import Any, Callable, List, Optional

from fluxinvoice.domain.base import coerce_amount
from fluxinvoice.domain.invoice_draft import ChargeKind, InvoiceDraft, MetaField
from fluxinvoice.domain.line_item import LineItem, LineItemPatch
from fluxinvoice.domain.party import PartyPatch, PartyRole
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord
from fluxinvoice.domain.totals import InvoiceTotals, compute_totals

logger = logging.getLogger(__name__)

Listener = Callable[[InvoiceDraft, InvoiceTotals], None]

_PARTY_FIELDS = {PartyRole.FROM: "from_party", PartyRole.TO: "to_party"}


def meta_attribute(field: MetaField) -> str:
    """Python attribute of InvoiceDraft behind a MetaField (its alias or name)"""
    for name, info in InvoiceDraft.model_fields.items():
        if (info.alias or name) == field.value:
            return name
    raise ValueError(f"Unknown draft field: {field.value}")


class DraftEditor:
    """
    Mutable editing session for a single draft

    Line item ids come from a counter that only moves forward. Pass
    next_item_id back in when rebuilding an editor for the same draft so
    that ids of removed rows are not handed out again.

    Usage:
        editor = DraftEditor.new(currency="USD")
        item = editor.add_line_item()
        editor.update_line_item(item.id, LineItemPatch(quantity=2, unit_price=100))
        editor.totals.grand_total
    """

    def __init__(
        self,
        draft: Optional[InvoiceDraft] = None,
        source_record_id: Optional[str] = None,
        next_item_id: Optional[int] = None,
    ):
        self._draft = draft.model_copy(deep=True) if draft is not None else InvoiceDraft()
        self.source_record_id = source_record_id
        highest = max((item.id for item in self._draft.items), default=0)
        self.next_item_id = max(highest + 1, next_item_id or 1)
        self._listeners: List[Listener] = []
        self.totals = self._compute()

    @classmethod
    def new(cls, currency: str = "INR") -> "DraftEditor":
        """Blank draft seeded with one empty row (quantity 0)"""
        editor = cls(InvoiceDraft(currency=currency))
        editor._draft.items.append(LineItem(id=editor._allocate_item_id(), quantity=0))
        editor.totals = editor._compute()
        return editor

    @classmethod
    def from_record(cls, record: SavedInvoiceRecord) -> "DraftEditor":
        """Rehydrate a saved record for editing; remembers which record it came from"""
        return cls(record.to_draft(), source_record_id=record.id)

    @property
    def draft(self) -> InvoiceDraft:
        return self._draft

    def snapshot(self) -> InvoiceDraft:
        """Deep copy of the current draft, safe to hand to the store"""
        return self._draft.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def set_party(self, which: PartyRole, patch: PartyPatch) -> None:
        attr = _PARTY_FIELDS[PartyRole(which)]
        setattr(self._draft, attr, getattr(self._draft, attr).merged(patch))
        self._changed()

    def add_line_item(self) -> LineItem:
        item = LineItem(id=self._allocate_item_id(), quantity=1, unit_price=0, tax_percent=0)
        self._draft.items.append(item)
        self._changed()
        return item

    def remove_line_item(self, item_id: int) -> None:
        remaining = [item for item in self._draft.items if item.id != item_id]
        if len(remaining) == len(self._draft.items):
            logger.debug(f"remove_line_item: no item with id {item_id}")
            return
        self._draft.items = remaining
        self._changed()

    def update_line_item(self, item_id: int, patch: LineItemPatch) -> None:
        for index, item in enumerate(self._draft.items):
            if item.id == item_id:
                self._draft.items[index] = item.merged(patch)
                self._changed()
                return
        logger.debug(f"update_line_item: no item with id {item_id}")

    def set_charge(self, kind: ChargeKind, value: Any) -> None:
        setattr(self._draft, ChargeKind(kind).value, coerce_amount(value))
        self._changed()

    def set_meta(self, field: MetaField, value: Any) -> None:
        attr = meta_attribute(MetaField(field))
        # Validate through the model so text/theme coercion applies
        data = self._draft.model_dump()
        data[attr] = value
        updated = InvoiceDraft.model_validate(data)
        setattr(self._draft, attr, getattr(updated, attr))
        self._changed()

    def _allocate_item_id(self) -> int:
        item_id = self.next_item_id
        self.next_item_id += 1
        return item_id

    def _compute(self) -> InvoiceTotals:
        return compute_totals(self._draft.items, self._draft.discount, self._draft.shipping)

    def _changed(self) -> None:
        self.totals = self._compute()
        for listener in self._listeners:
            listener(self._draft, self.totals)
