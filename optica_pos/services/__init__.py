"""
Service layer - Business operations of the shop.

Each service receives its store by injection and keeps no state between
calls.
"""

from .catalog_service import InventoryCatalog
from .client_service import ClientRegistry, search_clients
from .history_service import PurchaseHistory
from .sales_service import SalesLedger

__all__ = [
    "ClientRegistry",
    "InventoryCatalog",
    "PurchaseHistory",
    "SalesLedger",
    "search_clients",
]
