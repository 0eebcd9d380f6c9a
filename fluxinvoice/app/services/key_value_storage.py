"""Key-Value Storage Interface

Defines the contract for the local key-value storage the invoice store
persists into. Values are opaque strings (JSON documents in practice).
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Base class for storage backend failures"""


class StorageReadError(StorageError):
    """The backend could not be read (missing, unreadable, corrupt)"""


class StorageWriteError(StorageError):
    """The backend refused a write (quota exceeded, disabled, I/O failure)"""


class KeyValueStorage(ABC):
    """
    Storage interface for string values addressed by key

    Implementations must raise StorageWriteError on any failed write so
    callers never believe data was persisted when it was not.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value

        Args:
            key: Storage key

        Returns:
            Stored string, or None when the key is absent

        Raises:
            StorageReadError: backend could not be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one

        Raises:
            StorageWriteError: the write did not persist
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key; absent keys are ignored

        Raises:
            StorageWriteError: the removal did not persist
        """
        pass
