"""Invoice Store Interface

Defines the contract for the saved-invoice collection. No view touches raw
storage; everything goes through an InvoiceStore so it can be swapped for
an in-memory fake in tests.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from fluxinvoice.domain.invoice_draft import InvoiceDraft
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord

COPY_SUFFIX = "-COPY"
EMPTY_NUMBER_PLACEHOLDER = "DRAFT"


class SortMode(str, Enum):
    """Orderings offered by the saved invoices list"""
    NEWEST_FIRST = "new"
    OLDEST_FIRST = "old"
    AMOUNT_DESC = "amountDesc"
    AMOUNT_ASC = "amountAsc"


def duplicate_invoice_number(invoice_number: str) -> str:
    return f"{invoice_number or EMPTY_NUMBER_PLACEHOLDER}{COPY_SUFFIX}"


def record_timestamp(record: SavedInvoiceRecord) -> Optional[datetime]:
    """saved_at, falling back to the due date; None when neither is usable"""
    if record.saved_at is not None:
        return record.saved_at
    try:
        due = date.fromisoformat(record.due_date.strip())
    except ValueError:
        return None
    return datetime(due.year, due.month, due.day, tzinfo=timezone.utc)


def matches_query(record: SavedInvoiceRecord, query: str) -> bool:
    needle = (query or "").strip().lower()
    if not needle:
        return True
    haystacks = (record.invoice_number, record.to_party.name, record.from_party.name)
    return any(needle in (value or "").lower() for value in haystacks)


def filter_and_sort(
    collection: Iterable[SavedInvoiceRecord],
    query: str = "",
    sort_mode: SortMode = SortMode.NEWEST_FIRST,
) -> List[SavedInvoiceRecord]:
    """
    Filter records by a case-insensitive substring and order them

    Args:
        collection: Records in stored order
        query: Matched against invoice_number, to.name and from.name
        sort_mode: Ordering to apply; ties keep stored order

    Returns:
        New list of matching records
    """
    matched = [record for record in collection if matches_query(record, query)]
    sort_mode = SortMode(sort_mode)

    if sort_mode in (SortMode.AMOUNT_DESC, SortMode.AMOUNT_ASC):
        return sorted(
            matched,
            key=lambda r: r.total or Decimal(0),
            reverse=sort_mode == SortMode.AMOUNT_DESC,
        )

    # Records without any usable date go last in both directions
    dated = [r for r in matched if record_timestamp(r) is not None]
    undated = [r for r in matched if record_timestamp(r) is None]
    dated = sorted(dated, key=record_timestamp, reverse=sort_mode == SortMode.NEWEST_FIRST)
    return dated + undated


class InvoiceStore(ABC):
    """
    Repository interface for saved invoices

    Read operations fail soft (an unreadable collection is empty).
    Write operations raise StorageWriteError when the change did not persist.
    """

    @abstractmethod
    def load_all(self) -> List[SavedInvoiceRecord]:
        """
        Load every saved record in stored order

        Returns:
            List of records; empty when storage is missing or malformed
        """
        pass

    @abstractmethod
    def get_by_id(self, record_id: str) -> Optional[SavedInvoiceRecord]:
        """
        Retrieve a record by id

        Returns:
            SavedInvoiceRecord if found, None otherwise
        """
        pass

    @abstractmethod
    def save_new(self, draft: InvoiceDraft, total: Decimal) -> SavedInvoiceRecord:
        """
        Persist a draft as a new record appended to the collection

        Args:
            draft: Draft to snapshot (copied by value)
            total: Caller's computed grand total, frozen as-is

        Returns:
            The created record with a fresh id and saved_at
        """
        pass

    @abstractmethod
    def replace(
        self, record_id: str, draft: InvoiceDraft, total: Decimal
    ) -> Optional[SavedInvoiceRecord]:
        """
        Overwrite an existing record in place (save after edit)

        The record keeps its id and position; saved_at is refreshed.

        Returns:
            Updated record, or None when no record has record_id
        """
        pass

    @abstractmethod
    def duplicate(self, record: SavedInvoiceRecord) -> SavedInvoiceRecord:
        """
        Clone a record under a new id and prepend it to the collection

        invoice_number becomes "<original>-COPY" ("DRAFT-COPY" when empty).

        Returns:
            The new record
        """
        pass

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """
        Remove a record by id; a missing id is a no-op

        Returns:
            True if a record was removed
        """
        pass

    @abstractmethod
    def stage_edit(self, record: SavedInvoiceRecord) -> None:
        """Write the record to the edit handoff slot"""
        pass

    @abstractmethod
    def consume_edit(self) -> Optional[SavedInvoiceRecord]:
        """
        Read and clear the edit handoff slot

        Returns:
            The staged record, or None when the slot is empty or unreadable
        """
        pass

    @staticmethod
    def filter_and_sort(
        collection: Iterable[SavedInvoiceRecord],
        query: str = "",
        sort_mode: SortMode = SortMode.NEWEST_FIRST,
    ) -> List[SavedInvoiceRecord]:
        return filter_and_sort(collection, query, sort_mode)
