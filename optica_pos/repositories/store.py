"""
Relational store interface (Abstract Base Class).

Defines the contract the ledger needs from its persistence engine:
single-row insert and update, filtered/ordered select, and a select
with left-outer embedding of referenced rows.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

Row = Dict[str, Any]


@dataclass(frozen=True)
class Order:
    """Ordering clause: column plus direction."""

    column: str
    descending: bool = False


@dataclass(frozen=True)
class Join:
    """
    Left-outer embedding of a referenced row.

    The referenced row (restricted to ``columns``) is placed under
    ``alias`` in each result row, or None when ``foreign_key`` is null or
    points to a missing row.
    """

    alias: str
    table: str
    foreign_key: str
    columns: Tuple[str, ...]


class RelationalStore(ABC):
    """
    Abstract store interface for ledger data operations.

    Implementations must raise NotFoundError when an update matches no
    row and StoreError for any other failure. Cancellation is never
    caught.
    """

    @abstractmethod
    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        """
        Insert a single row.

        Args:
            table: Target table
            record: Column values

        Returns:
            The stored row
        """
        pass

    @abstractmethod
    async def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Row:
        """
        Update a single row by id.

        Args:
            table: Target table
            record_id: Id of the row to update
            patch: Columns to overwrite

        Returns:
            The updated row
        """
        pass

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        """
        Select rows matching equality filters.

        Args:
            table: Source table
            filters: Column/value equality conditions
            order: Ordering clauses, applied in sequence

        Returns:
            Matching rows
        """
        pass

    @abstractmethod
    async def select_join(
        self,
        table: str,
        columns: Sequence[str],
        joins: Sequence[Join],
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        """
        Select rows with referenced rows embedded (left-outer).

        Args:
            table: Source table
            columns: Columns of the source table to return
            joins: Referenced rows to embed
            filters: Column/value equality conditions on the source table
            order: Ordering clauses on source table columns

        Returns:
            Matching rows with embedded references
        """
        pass
