"""Record types held by the in-memory store.

Derived values (``is_low_stock``, ``item_count``) are deliberately absent and
are computed by the services from the live collections on every read.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional


def _now() -> datetime:
    return datetime.now()


@dataclass
class Category:
    """A grouping of items, e.g. Electronics or Furniture."""

    id: str
    name: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Supplier:
    """A vendor items are purchased from."""

    id: str
    name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Item:
    """An inventory item and its stock tracking details."""

    id: str
    sku: str
    name: str
    quantity: int
    reorder_level: int
    sell_price: Decimal
    description: Optional[str] = None
    cost_price: Optional[Decimal] = None
    category_id: Optional[str] = None
    supplier_id: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Transaction:
    """Records a stock increase or decrease for an item."""

    id: str
    item_id: str
    type: str
    change: int
    reason: Optional[str] = None
    performed_by: Optional[str] = None
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class User:
    """A dashboard user. ``password`` is only set on mock user records."""

    id: str
    name: str
    email: str
    role: str
    password: Optional[str] = None

    def public_dict(self) -> Dict[str, Any]:
        """Return the user without the password, as persisted in the session."""
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}
