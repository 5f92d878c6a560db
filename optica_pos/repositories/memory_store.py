"""
In-memory implementation of the relational store.

Keeps each table as a dict keyed by id. Used for local runs and tests;
foreign keys declared at construction are checked on insert and update,
like the database does, while removing a referenced row leaves the rows
pointing at it untouched.
"""

import copy
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..domain.exceptions import NotFoundError, StoreError
from ..logging_config import get_logger
from .store import Join, Order, RelationalStore, Row

logger = get_logger(__name__)

# Foreign keys of the shop schema: table -> {column: referenced table}
SHOP_FOREIGN_KEYS: Dict[str, Dict[str, str]] = {
    "sales_glasses": {
        "client_id": "clients",
        "frame_id": "inventory_frames",
        "lens_id": "inventory_lenses",
    },
}

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


def _sort_rows(rows: List[Row], order: Optional[Sequence[Order]]) -> List[Row]:
    # Stable sorts applied from the last clause to the first. Nulls sort as
    # the largest value, like Postgres: last ascending, first descending.
    for clause in reversed(order or ()):
        present = [r for r in rows if r.get(clause.column) is not None]
        missing = [r for r in rows if r.get(clause.column) is None]
        present.sort(key=lambda r: r[clause.column], reverse=clause.descending)
        rows = missing + present if clause.descending else present + missing
    return rows


def _matches(row: Row, filters: Optional[Mapping[str, Any]]) -> bool:
    return all(row.get(column) == value for column, value in (filters or {}).items())


class InMemoryStore(RelationalStore):
    """In-memory store with optional foreign key checks."""

    def __init__(self, foreign_keys: Optional[Mapping[str, Mapping[str, str]]] = None):
        """
        Initialize store.

        Args:
            foreign_keys: table -> {column: referenced table}; defaults to
                the shop schema
        """
        self.foreign_keys = dict(SHOP_FOREIGN_KEYS if foreign_keys is None else foreign_keys)
        self._tables: Dict[str, Dict[str, Row]] = {}
        self._lock = threading.RLock()

    def _table(self, name: str) -> Dict[str, Row]:
        return self._tables.setdefault(name, {})

    def _check_references(self, operation: str, table: str, row: Mapping[str, Any]) -> None:
        for column, referenced in self.foreign_keys.get(table, {}).items():
            value = row.get(column)
            if value is not None and str(value) not in self._table(referenced):
                raise StoreError(
                    operation,
                    f"{table}.{column} references missing {referenced} row {value}",
                    code=FOREIGN_KEY_VIOLATION,
                )

    def seed(self, table: str, rows: Iterable[Mapping[str, Any]]) -> None:
        """Load rows as they are, bypassing reference checks (catalog import)."""
        with self._lock:
            target = self._table(table)
            for row in rows:
                target[str(row["id"])] = dict(row)

    def remove(self, table: str, record_id: str) -> Optional[Row]:
        """Drop a row without touching rows that reference it."""
        with self._lock:
            return self._table(table).pop(str(record_id), None)

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        with self._lock:
            row = dict(record)
            if "id" not in row:
                raise StoreError("insert", f"{table} row has no id")
            rows = self._table(table)
            if str(row["id"]) in rows:
                raise StoreError(
                    "insert", f"duplicate id {row['id']} in {table}", code=UNIQUE_VIOLATION
                )
            self._check_references("insert", table, row)
            rows[str(row["id"])] = row
            logger.debug("Row inserted", table=table, id=row["id"])
            return copy.deepcopy(row)

    async def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Row:
        with self._lock:
            rows = self._table(table)
            current = rows.get(str(record_id))
            if current is None:
                raise NotFoundError(table, record_id)
            updated = {**current, **patch, "id": current["id"]}
            self._check_references("update", table, updated)
            rows[str(record_id)] = updated
            logger.debug("Row updated", table=table, id=record_id)
            return copy.deepcopy(updated)

    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        with self._lock:
            rows = [copy.deepcopy(r) for r in self._table(table).values() if _matches(r, filters)]
        return _sort_rows(rows, order)

    async def select_join(
        self,
        table: str,
        columns: Sequence[str],
        joins: Sequence[Join],
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        with self._lock:
            matched = _sort_rows(
                [r for r in self._table(table).values() if _matches(r, filters)], order
            )
            result = []
            for row in matched:
                out = {column: copy.deepcopy(row.get(column)) for column in columns}
                for join in joins:
                    key = row.get(join.foreign_key)
                    referenced = self._table(join.table).get(str(key)) if key is not None else None
                    out[join.alias] = (
                        {c: referenced.get(c) for c in join.columns} if referenced else None
                    )
                result.append(out)
        return result
