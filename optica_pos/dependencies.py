"""
Dependency wiring for the optical shop ledger.

Builds a store from settings and bundles the services around it, so
callers (UI, scripts, tests) get every operation from one place.
"""

from dataclasses import dataclass
from typing import Optional

from . import __version__
from .config import Settings, settings
from .logging_config import get_logger, setup_logging
from .repositories.memory_store import InMemoryStore
from .repositories.store import RelationalStore
from .repositories.supabase_store import SupabaseStore
from .services import ClientRegistry, InventoryCatalog, PurchaseHistory, SalesLedger
from .supabase_client import create_supabase_client

logger = get_logger(__name__)


@dataclass(frozen=True)
class POSServices:
    """The ledger's services, all sharing one store."""

    store: RelationalStore
    clients: ClientRegistry
    sales: SalesLedger
    history: PurchaseHistory
    catalog: InventoryCatalog


async def create_store(settings: Settings) -> RelationalStore:
    """
    Create the store selected by STORE_BACKEND.

    Raises:
        StoreError: If the Supabase backend is selected but not configured
    """
    if settings.STORE_BACKEND == "memory":
        logger.info("Using in-memory store")
        return InMemoryStore()
    client = await create_supabase_client(settings)
    return SupabaseStore(client)


def build_services(store: RelationalStore, settings: Optional[Settings] = None) -> POSServices:
    """
    Wire the services around a store.

    Args:
        store: Store shared by every service
        settings: Optional settings; MAX_INSTALLMENTS bounds installment sales

    Returns:
        Service bundle
    """
    max_installments = settings.MAX_INSTALLMENTS if settings is not None else None
    return POSServices(
        store=store,
        clients=ClientRegistry(store),
        sales=SalesLedger(store, max_installments=max_installments),
        history=PurchaseHistory(store),
        catalog=InventoryCatalog(store),
    )


async def init_services(app_settings: Optional[Settings] = None) -> POSServices:
    """
    Configure logging, connect the store and wire the services.

    Entry point for a UI or script starting up against the ledger. Uses the
    environment-loaded settings when none are given.
    """
    if app_settings is None:
        app_settings = settings
    setup_logging(
        log_level=app_settings.LOG_LEVEL,
        json_logs=app_settings.LOG_JSON,
        service_name=app_settings.SERVICE_NAME,
    )
    logger.info("Starting ledger", version=__version__, backend=app_settings.STORE_BACKEND)
    store = await create_store(app_settings)
    services = build_services(store, app_settings)
    logger.info("Ledger started")
    return services
