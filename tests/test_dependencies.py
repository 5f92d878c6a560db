"""
Tests for settings and service wiring.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
import structlog

from optica_pos.config import Settings
from optica_pos.dependencies import build_services, create_store, init_services
from optica_pos.domain.exceptions import StoreError
from optica_pos.logging_config import get_logger, setup_logging
from optica_pos.repositories.memory_store import InMemoryStore
from optica_pos.repositories.supabase_store import SupabaseStore
from optica_pos.services import ClientRegistry, PurchaseHistory, SalesLedger


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Test configuration defaults."""

    def test_defaults(self):
        settings = make_settings()
        assert settings.STORE_BACKEND == "supabase"
        assert settings.MAX_INSTALLMENTS == 4
        assert not settings.is_supabase_configured

    def test_supabase_configured(self):
        settings = make_settings(SUPABASE_URL="https://abc123.supabase.co", SUPABASE_KEY="key")
        assert settings.is_supabase_configured


class TestCreateStore:
    """Test store selection."""

    @pytest.mark.asyncio
    async def test_memory_backend(self):
        store = await create_store(make_settings(STORE_BACKEND="memory"))
        assert isinstance(store, InMemoryStore)

    @pytest.mark.asyncio
    async def test_supabase_backend_requires_credentials(self):
        with pytest.raises(StoreError):
            await create_store(make_settings(STORE_BACKEND="supabase"))

    @pytest.mark.asyncio
    async def test_supabase_backend(self):
        settings = make_settings(SUPABASE_URL="https://abc123.supabase.co", SUPABASE_KEY="key")
        with patch(
            "optica_pos.supabase_client.acreate_client", new=AsyncMock(return_value="client")
        ) as create:
            store = await create_store(settings)

        assert isinstance(store, SupabaseStore)
        assert store.client == "client"
        create.assert_awaited_once_with("https://abc123.supabase.co", "key")

    @pytest.mark.asyncio
    async def test_supabase_client_failure(self):
        settings = make_settings(SUPABASE_URL="https://abc123.supabase.co", SUPABASE_KEY="key")
        with patch(
            "optica_pos.supabase_client.acreate_client",
            new=AsyncMock(side_effect=Exception("invalid API key")),
        ):
            with pytest.raises(StoreError) as exc_info:
                await create_store(settings)

        assert "invalid API key" in str(exc_info.value)


class TestBuildServices:
    """Test service wiring."""

    def test_services_share_store(self):
        store = InMemoryStore()
        services = build_services(store, make_settings(MAX_INSTALLMENTS=6))

        assert isinstance(services.clients, ClientRegistry)
        assert isinstance(services.sales, SalesLedger)
        assert isinstance(services.history, PurchaseHistory)
        assert services.clients.store is store
        assert services.catalog.store is store
        assert services.sales.max_installments == 6

    def test_without_settings_installments_are_unbounded(self):
        services = build_services(InMemoryStore())
        assert services.sales.max_installments is None


class TestCatalog:
    """Test catalog listing through the bundle."""

    @pytest.mark.asyncio
    async def test_lists_ordered(self, services):
        frames = await services.catalog.list_frames()
        lenses = await services.catalog.list_lenses()

        assert [f.name for f in frames] == ["Oakley Holbrook", "Ray-Ban RB2140"]
        assert [l.product_code for l in lenses] == ["CR39-AR", "VARILUX-X"]


class TestInitServices:
    """Test startup."""

    @pytest.mark.asyncio
    async def test_memory_startup(self):
        with patch("optica_pos.dependencies.setup_logging") as setup:
            services = await init_services(
                make_settings(STORE_BACKEND="memory", LOG_LEVEL="DEBUG", LOG_JSON=True)
            )

        assert isinstance(services.store, InMemoryStore)
        assert services.sales.max_installments == 4
        setup.assert_called_once_with(log_level="DEBUG", json_logs=True, service_name="optica-pos")

    @pytest.mark.asyncio
    async def test_defaults_to_environment_settings(self):
        env_settings = make_settings(STORE_BACKEND="memory", MAX_INSTALLMENTS=3)
        with patch("optica_pos.dependencies.settings", env_settings), patch(
            "optica_pos.dependencies.setup_logging"
        ):
            services = await init_services()

        assert isinstance(services.store, InMemoryStore)
        assert services.sales.max_installments == 3


class TestSetupLogging:
    """Test structlog configuration."""

    def test_json_logs(self, capsys):
        setup_logging(log_level="INFO", json_logs=True, service_name="optica-test")
        get_logger("optica_pos.test").info("sale recorded", sale_id="s1")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "sale recorded"
        assert event["sale_id"] == "s1"
        assert event["service"] == "optica-test"
        assert event["level"] == "info"

        structlog.contextvars.clear_contextvars()
        structlog.reset_defaults()
