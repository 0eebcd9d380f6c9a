"""Key-Value Invoice Store Implementation

Implements InvoiceStore on top of a KeyValueStorage using the persisted
layout shared with the browser client:

    "invoices"    -> JSON array of saved invoice records
    "editInvoice" -> JSON object, one record handed to the editor
"""

import json
import logging
import threading
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from fluxinvoice.app.repositories.invoice_store import (
    InvoiceStore,
    duplicate_invoice_number,
)
from fluxinvoice.app.services.key_value_storage import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)
from fluxinvoice.domain.base import generate_uuid, utc_now
from fluxinvoice.domain.invoice_draft import InvoiceDraft
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord

logger = logging.getLogger(__name__)

INVOICES_KEY = "invoices"
EDIT_INVOICE_KEY = "editInvoice"

# Stored JSON entry paired with its parsed record (None when unreadable)
StoredEntry = Tuple[Any, Optional[SavedInvoiceRecord]]


class KeyValueInvoiceStore(InvoiceStore):
    """
    KeyValueStorage implementation of InvoiceStore

    Every mutation is a read-modify-write of the whole collection performed
    under one lock, so two mutations never work from the same snapshot.
    Entries are written back exactly as they were read unless the mutation
    targets them; stored invoices that fail to parse are hidden from reads
    but never dropped.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self._lock = threading.RLock()

    def load_all(self) -> List[SavedInvoiceRecord]:
        with self._lock:
            return self._read_collection()

    def get_by_id(self, record_id: str) -> Optional[SavedInvoiceRecord]:
        record_id = str(record_id)
        for record in self.load_all():
            if record.id == record_id:
                return record
        return None

    def save_new(self, draft: InvoiceDraft, total: Decimal) -> SavedInvoiceRecord:
        record = SavedInvoiceRecord.from_draft(
            draft, record_id=generate_uuid(), total=total, saved_at=utc_now()
        )
        with self._lock:
            entries = self._read_entries(for_update=True)
            entries.append((record.to_storage(), record))
            self._write_entries(entries)

        logger.info(f"Saved invoice {record.id} ({record.invoice_number or 'no number'})")
        return record

    def replace(
        self, record_id: str, draft: InvoiceDraft, total: Decimal
    ) -> Optional[SavedInvoiceRecord]:
        record_id = str(record_id)
        with self._lock:
            entries = self._read_entries(for_update=True)
            for index, (_, existing) in enumerate(entries):
                if existing is not None and existing.id == record_id:
                    break
            else:
                return None

            record = SavedInvoiceRecord.from_draft(
                draft, record_id=record_id, total=total, saved_at=utc_now()
            )
            entries[index] = (record.to_storage(), record)
            self._write_entries(entries)

        logger.info(f"Overwrote invoice {record_id}")
        return record

    def duplicate(self, record: SavedInvoiceRecord) -> SavedInvoiceRecord:
        copy = record.model_copy(
            deep=True,
            update={
                "id": generate_uuid(),
                "invoice_number": duplicate_invoice_number(record.invoice_number),
                "saved_at": utc_now(),
            },
        )
        with self._lock:
            entries = self._read_entries(for_update=True)
            entries.insert(0, (copy.to_storage(), copy))
            self._write_entries(entries)

        logger.info(f"Duplicated invoice {record.id} as {copy.id}")
        return copy

    def delete(self, record_id: str) -> bool:
        record_id = str(record_id)
        with self._lock:
            entries = self._read_entries(for_update=True)
            remaining = [
                (raw, record) for raw, record in entries
                if record is None or record.id != record_id
            ]
            if len(remaining) == len(entries):
                return False
            self._write_entries(remaining)

        logger.info(f"Deleted invoice {record_id}")
        return True

    def stage_edit(self, record: SavedInvoiceRecord) -> None:
        self.storage.set(EDIT_INVOICE_KEY, json.dumps(record.to_storage()))

    def consume_edit(self) -> Optional[SavedInvoiceRecord]:
        with self._lock:
            try:
                raw = self.storage.get(EDIT_INVOICE_KEY)
            except StorageReadError as e:
                logger.warning(f"Edit handoff unreadable: {e}")
                raw = None
            if raw is None:
                return None
            self.storage.remove(EDIT_INVOICE_KEY)

        try:
            return SavedInvoiceRecord.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning(f"Ignoring malformed edit handoff: {e}")
            return None

    def _read_collection(self) -> List[SavedInvoiceRecord]:
        return [record for _, record in self._read_entries() if record is not None]

    def _read_entries(self, for_update: bool = False) -> List[StoredEntry]:
        try:
            raw = self.storage.get(INVOICES_KEY)
        except StorageReadError as e:
            if for_update:
                raise StorageWriteError(f"Refusing to overwrite unreadable invoice storage: {e}") from e
            logger.warning(f"Invoice storage unreadable, treating as empty: {e}")
            return []
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Invoice storage holds malformed JSON, treating as empty: {e}")
            data = None
        if not isinstance(data, list):
            if data is not None:
                logger.warning("Invoice storage is not a JSON array, treating as empty")
            if for_update:
                self._set_aside(raw)
            return []

        return [(entry, self._parse_entry(position, entry)) for position, entry in enumerate(data)]

    def _parse_entry(self, position: int, entry: Any) -> Optional[SavedInvoiceRecord]:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping stored invoice #{position}: not an object")
            return None
        try:
            return SavedInvoiceRecord.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping stored invoice #{position}: {e.error_count()} invalid field(s)")
            return None

    def _set_aside(self, raw: str) -> None:
        key = f"{INVOICES_KEY}.unreadable.{utc_now():%Y%m%dT%H%M%S%f}"
        self.storage.set(key, raw)
        logger.warning(f"Moved unreadable invoice storage to {key!r} before writing")

    def _write_entries(self, entries: List[StoredEntry]) -> None:
        payload = json.dumps([raw for raw, _ in entries])
        self.storage.set(INVOICES_KEY, payload)
