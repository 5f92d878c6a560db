"""
Supabase client factory for the optical shop ledger.

Builds an async Supabase client from explicit settings. The client is
handed to the store adapter; nothing in the ledger keeps it globally.
"""

from supabase import AsyncClient, acreate_client

from .config import Settings
from .domain.exceptions import StoreError
from .logging_config import get_logger

logger = get_logger(__name__)


async def create_supabase_client(settings: Settings) -> AsyncClient:
    """
    Create an async Supabase client.

    Args:
        settings: Settings carrying SUPABASE_URL and SUPABASE_KEY

    Returns:
        Configured Supabase client

    Raises:
        StoreError: If Supabase is not configured or the client cannot be built
    """
    if not settings.is_supabase_configured:
        logger.warning(
            "Supabase credentials not fully configured",
            url_set=bool(settings.SUPABASE_URL),
            key_set=bool(settings.SUPABASE_KEY),
        )
        raise StoreError("connect", "Supabase not configured. Set SUPABASE_URL and SUPABASE_KEY")

    logger.info("Initializing Supabase client")
    try:
        client = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    except Exception as e:
        logger.error("Supabase client initialization failed", error=str(e))
        raise StoreError("connect", str(e)) from e
    logger.info("Supabase client initialized")
    return client
