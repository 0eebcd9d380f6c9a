from .memory_storage import MemoryStorage
from .json_file_storage import JsonFileStorage
from .sql_storage import SqlModelStorage, KeyValueEntry

__all__ = [
    "MemoryStorage",
    "JsonFileStorage",
    "SqlModelStorage",
    "KeyValueEntry",
]
