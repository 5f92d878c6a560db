"""
Purchase history service.

Joins a client's glasses sales with the frame/lens catalog into a
chronological, denormalized view. Catalog references that no longer
resolve are tolerated and come back as None.
"""

from typing import AsyncIterator

from ..domain.entities import PurchaseHistoryEntry
from ..logging_config import get_logger
from ..repositories.store import Join, Order, RelationalStore
from .sales_service import GLASSES_SALES_TABLE

logger = get_logger(__name__)

HISTORY_COLUMNS = (
    "id",
    "sale_date",
    "amount",
    "payment_method",
    "installment_type",
    "installment_count",
    "created_at",
)

HISTORY_JOINS = (
    Join("frame", "inventory_frames", "frame_id", ("name",)),
    Join("lens", "inventory_lenses", "lens_id", ("product_code",)),
)

# Most recent first; created_at then id keep ties deterministic
HISTORY_ORDER = (
    Order("sale_date", descending=True),
    Order("created_at", descending=True),
    Order("id"),
)


class PurchaseHistory:
    """Service answering "what has this client bought"."""

    def __init__(self, store: RelationalStore):
        self.store = store

    async def get_purchase_history(self, client_id: str) -> AsyncIterator[PurchaseHistoryEntry]:
        """
        Yield a client's glasses sales, most recent first.

        The sequence is finite and meant to be consumed once. An empty
        client id or a client without sales yields nothing.

        Args:
            client_id: Id of the client

        Yields:
            History entries with frame name and lens code resolved

        Raises:
            StoreError: If the store query fails
        """
        if not client_id:
            return

        rows = await self.store.select_join(
            GLASSES_SALES_TABLE,
            HISTORY_COLUMNS,
            HISTORY_JOINS,
            filters={"client_id": client_id},
            order=HISTORY_ORDER,
        )
        logger.debug("Purchase history loaded", client_id=client_id, sales=len(rows))
        for row in rows:
            yield PurchaseHistoryEntry.from_row(row)
