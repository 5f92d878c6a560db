"""
Test configuration and fixtures
"""

from datetime import datetime, timezone

import pytest

from optica_pos.dependencies import build_services
from optica_pos.repositories.memory_store import InMemoryStore

FRAME_ID = "f1"
LENS_ID = "l1"


@pytest.fixture
def catalog_rows():
    """Frame and lens rows as the catalog import loads them"""
    created = datetime(2024, 1, 10, tzinfo=timezone.utc)
    return {
        "inventory_frames": [
            {"id": FRAME_ID, "name": "Ray-Ban RB2140", "code": "RB2140", "created_at": created},
            {"id": "f2", "name": "Oakley Holbrook", "code": "OO9102", "created_at": created},
        ],
        "inventory_lenses": [
            {"id": LENS_ID, "product_code": "VARILUX-X", "description": "Multifocal", "created_at": created},
            {"id": "l2", "product_code": "CR39-AR", "description": None, "created_at": created},
        ],
    }


@pytest.fixture
def store(catalog_rows):
    """In-memory store seeded with the catalog"""
    memory_store = InMemoryStore()
    for table, rows in catalog_rows.items():
        memory_store.seed(table, rows)
    return memory_store


@pytest.fixture
def services(store):
    """Service bundle over the seeded store"""
    return build_services(store)


@pytest.fixture
def registry(services):
    return services.clients


@pytest.fixture
def ledger(services):
    return services.sales


@pytest.fixture
def history(services):
    return services.history


@pytest.fixture
def glasses_sale_data():
    """A complete glasses sale form, camelCase as the form sends it"""
    return {
        "frameId": FRAME_ID,
        "lensId": LENS_ID,
        "amount": "350.00",
        "paymentMethod": "Pix",
        "installmentType": "lump-sum",
    }
