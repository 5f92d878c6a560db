"""
Repository layer - Data access abstractions.

This layer provides the store interface the services depend on and its
adapters (Supabase, in-memory), hiding persistence details from the
business logic.
"""

from .memory_store import InMemoryStore
from .store import Join, Order, RelationalStore, Row
from .supabase_store import SupabaseStore

__all__ = [
    "InMemoryStore",
    "Join",
    "Order",
    "RelationalStore",
    "Row",
    "SupabaseStore",
]
