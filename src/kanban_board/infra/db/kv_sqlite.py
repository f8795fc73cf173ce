from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Text, DateTime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from kanban_board.infra.db.errors import StorageError


class Base(DeclarativeBase):
    pass


class KeyValueRow(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(120), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SQLiteKeyValueStore:
    """Single-table key-value store on the async SQLite engine."""

    def __init__(self, sessionmaker):
        self.sessionmaker = sessionmaker

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self.sessionmaker() as session:
                row = await session.get(KeyValueRow, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"read {key!r} failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        row = KeyValueRow(key=key, value=value, updated_at=datetime.now(timezone.utc))
        try:
            async with self.sessionmaker() as session:
                await session.merge(row)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"write {key!r} failed: {e}") from e
