"""
Supabase implementation of the relational store.

Talks to PostgREST through the async Supabase client. Joins use
PostgREST resource embedding, which has left-outer semantics for
nullable to-one references.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient

from ..domain.exceptions import NotFoundError, StoreError
from ..logging_config import get_logger
from .store import Join, Order, RelationalStore, Row

logger = get_logger(__name__)

# PostgREST error code for "no rows" on single-object requests
PGRST_NO_ROWS = "PGRST116"


def encode_value(value: Any) -> Any:
    """Convert a Python value into its JSON form for PostgREST."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def encode_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: encode_value(value) for key, value in record.items()}


def build_embed_select(columns: Sequence[str], joins: Sequence[Join]) -> str:
    """
    Build a PostgREST select string with embedded resources.

    Example:
        >>> build_embed_select(["id"], [Join("frame", "inventory_frames", "frame_id", ("name",))])
        'id, frame:inventory_frames(name)'
    """
    parts = list(columns)
    for join in joins:
        parts.append(f"{join.alias}:{join.table}({', '.join(join.columns)})")
    return ", ".join(parts)


class SupabaseStore(RelationalStore):
    """Store backed by a Supabase (PostgREST) project."""

    def __init__(self, client: AsyncClient):
        """
        Initialize store.

        Args:
            client: Async Supabase client
        """
        self.client = client

    async def _execute(self, operation: str, table: str, query) -> List[Row]:
        try:
            response = await query.execute()
        except APIError as e:
            logger.warning(
                "Store request failed",
                operation=operation,
                table=table,
                code=e.code,
                error=e.message,
            )
            if e.code == PGRST_NO_ROWS:
                raise NotFoundError(table, e.details) from e
            raise StoreError(operation, e.message, code=e.code) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Store unreachable", operation=operation, table=table, error=str(e)
            )
            raise StoreError(operation, str(e)) from e
        return list(response.data or [])

    def _apply(self, query, filters: Optional[Mapping[str, Any]], order: Optional[Sequence[Order]]):
        for column, value in (filters or {}).items():
            query = query.eq(column, encode_value(value))
        for clause in order or ():
            query = query.order(clause.column, desc=clause.descending)
        return query

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        query = self.client.table(table).insert(encode_record(record))
        rows = await self._execute("insert", table, query)
        if not rows:
            raise StoreError("insert", f"{table} insert returned no row")
        return rows[0]

    async def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Row:
        query = self.client.table(table).update(encode_record(patch)).eq("id", record_id)
        rows = await self._execute("update", table, query)
        if not rows:
            raise NotFoundError(table, record_id)
        return rows[0]

    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        query = self._apply(self.client.table(table).select("*"), filters, order)
        return await self._execute("select", table, query)

    async def select_join(
        self,
        table: str,
        columns: Sequence[str],
        joins: Sequence[Join],
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        query = self._apply(
            self.client.table(table).select(build_embed_select(columns, joins)),
            filters,
            order,
        )
        return await self._execute("select", table, query)
