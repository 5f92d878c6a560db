"""
Client registry service.

Registers, updates and lists the shop's clients. Input is validated
locally before any store call.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Union
from uuid import uuid4

from ..domain.entities import Client
from ..domain.exceptions import NotFoundError, ValidationError
from ..logging_config import get_logger
from ..repositories.store import Order, RelationalStore
from ..validators import ClientInput, validate_input

logger = get_logger(__name__)

CLIENTS_TABLE = "clients"

ClientData = Union[ClientInput, Mapping[str, Any]]


def search_clients(clients: Iterable[Client], term: str) -> List[Client]:
    """
    Filter clients by name or phone, case-insensitively.

    Pure in-memory filter; an empty term matches every client.

    Args:
        clients: Clients to filter (usually the result of list_clients)
        term: Search term

    Returns:
        Clients whose name or phone contains the term
    """
    needle = (term or "").lower()
    if not needle:
        return list(clients)
    return [
        client
        for client in clients
        if needle in client.name.lower() or (client.phone and needle in client.phone.lower())
    ]


class ClientRegistry:
    """
    Service for client records.

    Responsibilities:
    - Register new clients
    - Update client details (id and created_at never change)
    - List and look up clients
    """

    def __init__(self, store: RelationalStore):
        """
        Initialize the registry.

        Args:
            store: Relational store holding the clients table
        """
        self.store = store

    async def register_client(self, data: ClientData) -> Client:
        """
        Register a new client.

        String fields are trimmed and empty optional fields are stored as
        absent.

        Args:
            data: Client fields (name, phone, address, dnp, prescription)

        Returns:
            The created client

        Raises:
            ValidationError: If the name is empty after trimming
            StoreError: If the store rejects the insert
        """
        client_input = validate_input(ClientInput, data)
        record = {
            "id": str(uuid4()),
            **client_input.model_dump(),
            "created_at": datetime.now(timezone.utc),
        }
        row = await self.store.insert(CLIENTS_TABLE, record)
        logger.debug("Client registered", client_id=record["id"])
        return Client.from_row(row)

    async def list_clients(self) -> List[Client]:
        """Return all clients ordered by name."""
        rows = await self.store.select(CLIENTS_TABLE, order=[Order("name")])
        return [Client.from_row(row) for row in rows]

    async def get_client(self, client_id: str) -> Client:
        """
        Look up a client by id.

        Raises:
            NotFoundError: If no client has this id
        """
        if not client_id:
            raise ValidationError("id", client_id, "Client id is required")
        rows = await self.store.select(CLIENTS_TABLE, filters={"id": client_id})
        if not rows:
            raise NotFoundError(CLIENTS_TABLE, client_id)
        return Client.from_row(rows[0])

    async def update_client(self, client_id: str, data: ClientData) -> Client:
        """
        Overwrite a client's details.

        Args:
            client_id: Id of the client to update
            data: New client fields, validated like register_client

        Returns:
            The updated client

        Raises:
            ValidationError: If the id is missing or the name is empty
            NotFoundError: If the store has no client with this id
            StoreError: If the store rejects the update
        """
        if not client_id:
            raise ValidationError("id", client_id, "Client id is required")
        client_input = validate_input(ClientInput, data)
        row = await self.store.update(CLIENTS_TABLE, client_id, client_input.model_dump())
        logger.debug("Client updated", client_id=client_id)
        return Client.from_row(row)
