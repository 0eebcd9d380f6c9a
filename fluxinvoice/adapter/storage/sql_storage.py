"""SQLModel Key-Value Storage

Implements KeyValueStorage on a single SQL table using SQLModel sessions.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, String, Text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine

from fluxinvoice.app.services.key_value_storage import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)


class KeyValueEntry(SQLModel, table=True):
    """
    KeyValueEntry - one stored value

    Domain Rules:
    - key is unique (primary key)
    - value is an opaque string, typically a JSON document
    """

    __tablename__ = "key_value_entries"

    key: str = Field(
        sa_column=Column(String(255), primary_key=True),
        description="Storage key (e.g. 'invoices')"
    )

    value: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Stored value"
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last write timestamp"
    )


class SqlModelStorage(KeyValueStorage):
    """
    SQL implementation of KeyValueStorage

    Args:
        db_uri: SQLAlchemy database URI (e.g. sqlite:///./fluxinvoice.db)
        engine: Pre-built engine; takes precedence over db_uri
    """

    def __init__(self, db_uri: Optional[str] = None, engine=None):
        if engine is None:
            connect_args = {"check_same_thread": False} if db_uri.startswith("sqlite") else {}
            engine = create_engine(db_uri, echo=False, connect_args=connect_args)
        self.engine = engine
        SQLModel.metadata.create_all(self.engine, tables=[KeyValueEntry.__table__])

    def get(self, key: str) -> Optional[str]:
        try:
            with Session(self.engine) as session:
                entry = session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageReadError(f"Cannot read key {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    entry = KeyValueEntry(key=key, value=value)
                else:
                    entry.value = value
                    entry.updated_at = datetime.now(timezone.utc)
                session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write key {key!r}: {e}")
            raise StorageWriteError(f"Cannot write key {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    return
                session.delete(entry)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to remove key {key!r}: {e}")
            raise StorageWriteError(f"Cannot remove key {key!r}: {e}") from e
