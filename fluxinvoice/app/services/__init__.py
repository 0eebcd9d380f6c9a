from .key_value_storage import KeyValueStorage, StorageError, StorageReadError, StorageWriteError
from .pdf_service import PdfService
from .identity_provider import IdentityProvider
from .draft_editor import DraftEditor

__all__ = [
    "KeyValueStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "PdfService",
    "IdentityProvider",
    "DraftEditor",
]
