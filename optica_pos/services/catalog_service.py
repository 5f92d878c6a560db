"""Read-only access to the frame and lens catalog."""

from typing import List

from ..domain.entities import InventoryFrame, InventoryLens
from ..repositories.store import Order, RelationalStore

FRAMES_TABLE = "inventory_frames"
LENSES_TABLE = "inventory_lenses"


class InventoryCatalog:
    """Lists frames and lenses for sale forms."""

    def __init__(self, store: RelationalStore):
        self.store = store

    async def list_frames(self) -> List[InventoryFrame]:
        """Return all frames ordered by name."""
        rows = await self.store.select(FRAMES_TABLE, order=[Order("name")])
        return [InventoryFrame.from_row(row) for row in rows]

    async def list_lenses(self) -> List[InventoryLens]:
        """Return all lenses ordered by product code."""
        rows = await self.store.select(LENSES_TABLE, order=[Order("product_code")])
        return [InventoryLens.from_row(row) for row in rows]
