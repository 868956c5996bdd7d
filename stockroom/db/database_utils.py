"""In-memory data store helpers.

The store stands in for a database: it is created once per process from the
mock data provider and every read pauses for ``latency_seconds`` to mimic a
network round trip. Logging guidelines:

* Routine success messages should not be logged. Use ``DEBUG`` for optional
  diagnostic information.
* Reserve ``WARNING`` and ``ERROR`` levels for exceptional or unexpected
  conditions.
"""

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import streamlit as st

from ..config import load_settings
from ..core.logging import get_logger
from ..models import Category, Item, Supplier, Transaction, User
from . import mock_data

logger = get_logger(__name__)

COLLECTIONS = ("categories", "items", "suppliers", "transactions", "users")


@dataclass
class InventoryStore:
    """Process-local collections keyed by record id (insertion ordered).

    The store is shared by every browser session on the server. Mutations hold
    ``lock`` from the checks they depend on through the write.
    """

    categories: Dict[str, Category] = field(default_factory=dict)
    items: Dict[str, Item] = field(default_factory=dict)
    suppliers: Dict[str, Supplier] = field(default_factory=dict)
    transactions: Dict[str, Transaction] = field(default_factory=dict)
    users: Dict[str, User] = field(default_factory=dict)
    latency_seconds: float = 0.0
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    def collection(self, name: str) -> Dict[str, Any]:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection '{name}'")
        return getattr(self, name)

    def new_id(self, name: str) -> str:
        """Return the next numeric id for ``name`` as a string."""
        numeric = [int(k) for k in self.collection(name) if str(k).isdigit()]
        return str(max(numeric, default=0) + 1)


def simulate_latency(store: InventoryStore) -> None:
    """Pause for the store's configured artificial delay."""
    if store.latency_seconds > 0:
        time.sleep(store.latency_seconds)


def create_store(
    latency_seconds: float = 0.0, seed: bool = True, now: Optional[datetime] = None
) -> InventoryStore:
    """Build a store, optionally seeded from the mock data provider."""
    store = InventoryStore(latency_seconds=latency_seconds)
    if not seed:
        return store
    now = now or datetime.now()
    store.categories = {c.id: c for c in mock_data.mock_categories()}
    store.suppliers = {s.id: s for s in mock_data.mock_suppliers()}
    store.items = {i.id: i for i in mock_data.mock_items(now)}
    store.transactions = {t.id: t for t in mock_data.mock_transactions(now)}
    store.users = {u.id: u for u in mock_data.mock_users()}
    logger.debug(
        "Seeded store with %d items, %d categories, %d suppliers.",
        len(store.items),
        len(store.categories),
        len(store.suppliers),
    )
    return store


@st.cache_resource(show_spinner="Loading inventory data…")
def connect_db() -> InventoryStore:
    """Return the shared store for this Streamlit server process."""
    settings = load_settings()
    return create_store(latency_seconds=settings.latency_seconds)


def fetch_records(store: InventoryStore, collection: str) -> List[Any]:
    """Return a snapshot list of ``collection`` after the simulated delay."""
    simulate_latency(store)
    with store.lock:
        return list(store.collection(collection).values())

