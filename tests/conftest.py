import os
import sys
from decimal import Decimal

import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from stockroom.db.database_utils import create_store  # noqa: E402
from stockroom.models import Item  # noqa: E402


@pytest.fixture
def store():
    """Seeded store with no simulated latency."""
    return create_store(latency_seconds=0)


@pytest.fixture
def empty_store():
    return create_store(latency_seconds=0, seed=False)


@pytest.fixture
def item_factory():
    counter = {"n": 0}

    def create_item(**kwargs):
        counter["n"] += 1
        defaults = {
            "id": str(counter["n"]),
            "sku": f"TST{counter['n']:03d}",
            "name": f"Item {counter['n']}",
            "quantity": 10,
            "reorder_level": 5,
            "sell_price": Decimal("10.00"),
        }
        defaults.update(kwargs)
        return Item(**defaults)

    return create_item


@pytest.fixture
def item_form():
    """Raw form values for a valid new item."""

    def build(**overrides):
        values = {
            "sku": "NEW001",
            "name": "Desk Lamp",
            "description": "",
            "quantity": "12",
            "reorder_level": "4",
            "sell_price": "39.90",
            "cost_price": "21.00",
            "category_id": "1",
            "supplier_id": "1",
            "location": "Aisle 3",
        }
        values.update(overrides)
        return values

    return build
