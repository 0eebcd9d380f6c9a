"""JSON File Key-Value Storage

Keeps every key in a single JSON object on disk. Writes go to a temporary
file in the same directory and are moved into place with os.replace, so a
crash mid-write never leaves a truncated document behind.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from fluxinvoice.app.services.key_value_storage import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    File-backed implementation of KeyValueStorage

    Args:
        path: Location of the JSON document; parent directories are created on first write
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_document().get(key)
        if value is None or isinstance(value, str):
            return value
        # Hand-edited files may hold structured JSON instead of a string
        return json.dumps(value)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            document = self._read_for_update()
            document[key] = value
            self._write_document(document)

    def remove(self, key: str) -> None:
        with self._lock:
            document = self._read_for_update()
            if key not in document:
                return
            del document[key]
            self._write_document(document)

    def _read_document(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageReadError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageReadError(f"{self.path} does not contain a JSON object")
        return document

    def _read_for_update(self) -> Dict[str, object]:
        try:
            return self._read_document()
        except StorageReadError as e:
            logger.error(f"Storage file unreadable, leaving it untouched: {e}")
            raise StorageWriteError(f"Refusing to overwrite unreadable {self.path}: {e}") from e

    def _write_document(self, document: Dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                    json.dump(document, tmp_file, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageWriteError(f"Cannot write {self.path}: {e}") from e
