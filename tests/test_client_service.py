"""
Tests for the client registry.

Covers:
- Registration round-trip through the store
- Validation before any store call
- Updates and not-found handling
- In-memory search
"""

from unittest.mock import AsyncMock

import pytest

from optica_pos.domain.entities import Client
from optica_pos.domain.exceptions import NotFoundError, StoreError, ValidationError
from optica_pos.repositories.store import RelationalStore
from optica_pos.services.client_service import ClientRegistry, search_clients


class TestRegisterClient:
    """Test client registration."""

    @pytest.mark.asyncio
    async def test_register_then_list(self, registry):
        """Registered fields come back trimmed from list_clients."""
        created = await registry.register_client(
            {
                "name": "  Maria Silva ",
                "phone": "11 98888-7777",
                "address": "",
                "dnp": " 62mm ",
                "prescription": "OD -1.25 / OE -1.00",
            }
        )

        clients = await registry.list_clients()

        assert [c.id for c in clients] == [created.id]
        stored = clients[0]
        assert stored.name == "Maria Silva"
        assert stored.phone == "11 98888-7777"
        assert stored.address is None
        assert stored.dnp == "62mm"
        assert stored.prescription == "OD -1.25 / OE -1.00"
        assert stored.created_at is not None

    @pytest.mark.asyncio
    async def test_register_generates_distinct_ids(self, registry):
        first = await registry.register_client({"name": "Ana"})
        second = await registry.register_client({"name": "Ana"})
        assert first.id != second.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "    "])
    async def test_empty_name_never_reaches_store(self, name):
        """Validation fails before the store is called."""
        store = AsyncMock(spec=RelationalStore)
        registry = ClientRegistry(store)

        with pytest.raises(ValidationError):
            await registry.register_client({"name": name})

        store.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_errors_surface_unchanged(self):
        store = AsyncMock(spec=RelationalStore)
        error = StoreError("insert", "connection reset")
        store.insert.side_effect = error
        registry = ClientRegistry(store)

        with pytest.raises(StoreError) as exc_info:
            await registry.register_client({"name": "Maria"})

        assert exc_info.value is error
        store.insert.assert_awaited_once()


class TestListClients:
    """Test listing."""

    @pytest.mark.asyncio
    async def test_ordered_by_name_case_sensitive(self, registry):
        for name in ["carla", "Bruno", "Ana", "ana"]:
            await registry.register_client({"name": name})

        names = [c.name for c in await registry.list_clients()]

        assert names == ["Ana", "Bruno", "ana", "carla"]

    @pytest.mark.asyncio
    async def test_empty_registry(self, registry):
        assert await registry.list_clients() == []


class TestUpdateClient:
    """Test updates."""

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, registry):
        created = await registry.register_client({"name": "Maria", "phone": "123"})

        updated = await registry.update_client(
            created.id, {"name": "Maria Souza", "phone": "", "address": "Rua A, 10"}
        )

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.name == "Maria Souza"
        assert updated.phone is None
        assert updated.address == "Rua A, 10"
        assert await registry.get_client(created.id) == updated

    @pytest.mark.asyncio
    async def test_update_to_empty_name_leaves_record_unchanged(self, registry):
        created = await registry.register_client({"name": "Maria", "phone": "123"})

        with pytest.raises(ValidationError):
            await registry.update_client(created.id, {"name": "", "phone": "999"})

        stored = await registry.get_client(created.id)
        assert stored.name == "Maria"
        assert stored.phone == "123"

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, registry):
        with pytest.raises(NotFoundError):
            await registry.update_client("missing", {"name": "Someone"})

    @pytest.mark.asyncio
    async def test_update_without_id(self, registry):
        with pytest.raises(ValidationError):
            await registry.update_client("", {"name": "Someone"})


class TestGetClient:
    """Test lookups."""

    @pytest.mark.asyncio
    async def test_get_unknown_client(self, registry):
        with pytest.raises(NotFoundError):
            await registry.get_client("missing")

    @pytest.mark.asyncio
    async def test_missing_client_reported_the_same_way(self, registry):
        with pytest.raises(NotFoundError) as lookup:
            await registry.get_client("missing")
        with pytest.raises(NotFoundError) as update:
            await registry.update_client("missing", {"name": "Someone"})

        assert lookup.value.entity == update.value.entity == "clients"
        assert str(lookup.value) == str(update.value)


class TestSearchClients:
    """Test in-memory search."""

    @pytest.fixture
    def clients(self):
        return [
            Client(id="1", name="Maria Silva", phone="11 98888-7777"),
            Client(id="2", name="João Souza", phone=None),
            Client(id="3", name="Ana Maria", phone="21 3333-4444"),
        ]

    def test_matches_name_case_insensitive(self, clients):
        assert [c.id for c in search_clients(clients, "maria")] == ["1", "3"]

    def test_matches_phone(self, clients):
        assert [c.id for c in search_clients(clients, "3333")] == ["3"]

    def test_empty_term_matches_all(self, clients):
        assert search_clients(clients, "") == clients

    def test_no_match(self, clients):
        assert search_clients(clients, "xyz") == []

    def test_client_without_phone_is_skipped_for_phone_match(self, clients):
        assert [c.id for c in search_clients(clients, "98888")] == ["1"]
