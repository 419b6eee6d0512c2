"""The five store operations the import pipeline needs, and a SQLAlchemy store.

The pipeline never touches a Session or ORM object directly; it only calls
these operations with a table name (``"owned"`` or ``"leases"``) and plain
dict rows. Anything a store raises propagates unchanged.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.engine import Engine

from .models import TABLES


class Store(ABC):
    """Narrow persistence interface used by the batch writer and dedup resolver."""

    @abstractmethod
    def count(self, table: str) -> int:
        ...

    @abstractmethod
    def delete_all(self, table: str) -> None:
        ...

    @abstractmethod
    def insert_many(self, table: str, rows: Sequence[dict[str, Any]]) -> None:
        ...

    @abstractmethod
    def update_by_id(self, table: str, row_id: int, values: dict[str, Any]) -> None:
        ...

    @abstractmethod
    def select_columns(self, table: str, columns: Sequence[str]) -> list[dict[str, Any]]:
        ...


class SqlAlchemyStore(Store):
    """Store backed by the ``owned`` and ``leases`` tables.

    Each call runs in its own transaction on a pooled connection, so
    concurrent ``update_by_id`` calls from worker threads never share state.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.tables: dict[str, Table] = {
            name: model.__table__ for name, model in TABLES.items()
        }

    def _table(self, name: str) -> Table:
        try:
            return self.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}") from None

    def count(self, table: str) -> int:
        t = self._table(table)
        with self.engine.connect() as conn:
            return conn.scalar(select(func.count()).select_from(t))

    def delete_all(self, table: str) -> None:
        t = self._table(table)
        with self.engine.begin() as conn:
            conn.execute(delete(t))

    def insert_many(self, table: str, rows: Sequence[dict[str, Any]]) -> None:
        if not rows:
            return
        t = self._table(table)
        with self.engine.begin() as conn:
            conn.execute(insert(t), list(rows))

    def update_by_id(self, table: str, row_id: int, values: dict[str, Any]) -> None:
        t = self._table(table)
        with self.engine.begin() as conn:
            conn.execute(update(t).where(t.c.id == row_id).values(values))

    def select_columns(self, table: str, columns: Sequence[str]) -> list[dict[str, Any]]:
        t = self._table(table)
        with self.engine.connect() as conn:
            result = conn.execute(select(*(t.c[name] for name in columns)))
            return [dict(row._mapping) for row in result]
