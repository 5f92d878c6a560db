"""
Sales ledger service.

Records glasses sales and miscellaneous (maintenance/product) sales.
Every sale is a single immutable row; nothing else is touched, the
catalog is a reference list and not stock.
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple, Union
from uuid import uuid4

from ..domain.entities import ITEMS_BY_TYPE, GlassesSale, MiscSale, MiscSaleType
from ..domain.exceptions import ValidationError
from ..logging_config import get_logger
from ..repositories.store import RelationalStore
from ..validators import GlassesSaleInput, MiscSaleInput, validate_input

logger = get_logger(__name__)

GLASSES_SALES_TABLE = "sales_glasses"
MISC_SALES_TABLE = "sales_maintenance"


class SalesLedger:
    """
    Service for recording sales.

    Responsibilities:
    - Validate sale input before touching the store
    - Insert one row per sale
    """

    def __init__(self, store: RelationalStore, max_installments: Optional[int] = None):
        """
        Initialize the ledger.

        Args:
            store: Relational store holding the sales tables
            max_installments: Upper bound for installment sales, None for no bound
        """
        self.store = store
        self.max_installments = max_installments

    @staticmethod
    def items_for(sale_type: Union[MiscSaleType, str]) -> Tuple[str, ...]:
        """
        Return the item vocabulary of a misc sale type, in display order.

        Raises:
            ValidationError: If the type is unknown
        """
        try:
            return ITEMS_BY_TYPE[MiscSaleType(sale_type)]
        except ValueError:
            raise ValidationError("type", sale_type, "Unknown sale type")

    async def record_glasses_sale(
        self, data: Union[GlassesSaleInput, Mapping[str, Any]]
    ) -> GlassesSale:
        """
        Record an eyewear sale.

        Args:
            data: clientId, frameId, lensId, amount, paymentMethod,
                installmentType, installmentCount, saleDate

        Returns:
            The recorded sale

        Raises:
            ValidationError: If a required field is missing or malformed
            StoreError: If the store rejects the insert (e.g. unknown frame)
        """
        sale = validate_input(GlassesSaleInput, data)
        if self.max_installments is not None and sale.installment_count > self.max_installments:
            raise ValidationError(
                "installment_count",
                sale.installment_count,
                f"At most {self.max_installments} installments are allowed",
            )

        record = {
            "id": str(uuid4()),
            **sale.model_dump(),
            "created_at": datetime.now(timezone.utc),
        }
        row = await self.store.insert(GLASSES_SALES_TABLE, record)
        logger.debug(
            "Glasses sale recorded", sale_id=record["id"], client_id=sale.client_id
        )
        return GlassesSale.from_row(row)

    async def record_misc_sale(self, data: Union[MiscSaleInput, Mapping[str, Any]]) -> MiscSale:
        """
        Record a maintenance or product sale.

        Args:
            data: type, itemDetail, amount, saleDate

        Returns:
            The recorded sale

        Raises:
            ValidationError: If the item does not belong to the type, or the
                item or amount is missing
            StoreError: If the store rejects the insert
        """
        sale = validate_input(MiscSaleInput, data)
        record = {
            "id": str(uuid4()),
            **sale.model_dump(),
            "created_at": datetime.now(timezone.utc),
        }
        row = await self.store.insert(MISC_SALES_TABLE, record)
        logger.debug("Misc sale recorded", sale_id=record["id"], type=sale.type.value)
        return MiscSale.from_row(row)
