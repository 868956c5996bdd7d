# stockroom/db/mock_data.py
"""Seed records for the in-memory store.

Timestamps are generated relative to the moment the store is created so the
"recent stock movement" panel always has data to show.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List

from ..core.constants import ROLE_ADMIN, ROLE_MANAGER, ROLE_VIEWER, TX_ADJUSTMENT, TX_IN, TX_OUT
from ..models import Category, Item, Supplier, Transaction, User


def mock_categories() -> List[Category]:
    return [
        Category("1", "Electronics", "Electronic devices and gadgets"),
        Category("2", "Furniture", "Office and home furniture"),
        Category("3", "Office Supplies", "Stationery and general office supplies"),
        Category("4", "Computer Accessories", "Peripherals and add-ons"),
    ]


def mock_suppliers() -> List[Supplier]:
    return [
        Supplier(
            "1",
            "Tech Supplies Co.",
            contact_person="John Smith",
            email="john@techsupplies.com",
            phone="+1 555-0101",
            address="123 Tech Street, Silicon Valley, CA",
        ),
        Supplier(
            "2",
            "Office Depot",
            contact_person="Sarah Johnson",
            email="sarah@officedepot.com",
            phone="+1 555-0102",
            address="456 Business Ave, New York, NY",
        ),
        Supplier(
            "3",
            "Furniture World",
            contact_person="Mike Brown",
            email="mike@furnitureworld.com",
            phone="+1 555-0103",
            address="789 Comfort Road, Chicago, IL",
        ),
    ]


def mock_items(now: datetime) -> List[Item]:
    created = now - timedelta(days=30)

    def item(id_, sku, name, qty, reorder, sell, cost, cat, sup, loc, desc):
        return Item(
            id=id_,
            sku=sku,
            name=name,
            quantity=qty,
            reorder_level=reorder,
            sell_price=Decimal(sell),
            cost_price=Decimal(cost) if cost is not None else None,
            category_id=cat,
            supplier_id=sup,
            location=loc,
            description=desc,
            created_at=created,
            updated_at=created,
        )

    return [
        item("1", "SKU001", "Laptop", 15, 5, "999.99", "750.00", "1", "1",
             "Warehouse A - Shelf 1",
             "High-performance laptop with 16GB RAM and 512GB SSD"),
        item("2", "SKU002", "Office Chair", 8, 10, "249.99", "150.00", "2", "3",
             "Warehouse B - Shelf 3", "Ergonomic office chair with lumbar support"),
        item("3", "SKU003", "Wireless Mouse", 3, 10, "29.99", "15.00", "4", "1",
             "Warehouse A - Shelf 2", "Bluetooth wireless mouse with long battery life"),
        item("4", "SKU004", "Standing Desk", 6, 3, "499.00", "320.00", "2", "3",
             "Warehouse B - Shelf 1", "Height-adjustable standing desk"),
        item("5", "SKU005", "Printer Paper A4", 120, 50, "6.49", "3.20", "3", "2",
             "Warehouse C - Shelf 4", "500-sheet ream, 80gsm"),
        item("6", "SKU006", "USB-C Hub", 22, 8, "49.99", "28.50", "4", "1",
             "Warehouse A - Shelf 2", "7-in-1 USB-C adapter"),
        item("7", "SKU007", "Ballpoint Pens (Box)", 40, 40, "9.99", None, "3", "2",
             "Warehouse C - Shelf 1", "Box of 50 blue pens"),
        item("8", "SKU008", "27in Monitor", 11, 4, "329.00", "240.00", "1", "1",
             "Warehouse A - Shelf 3", "27 inch IPS monitor"),
    ]


def mock_transactions(now: datetime) -> List[Transaction]:
    def tx(id_, item_id, type_, change, reason, by, days_ago, hours=0):
        return Transaction(
            id=id_,
            item_id=item_id,
            type=type_,
            change=change,
            reason=reason,
            performed_by=by,
            created_at=now - timedelta(days=days_ago, hours=hours),
        )

    return [
        tx("1", "1", TX_IN, 10, "Restock from supplier", "Admin User", 6),
        tx("2", "2", TX_OUT, -4, "Office fit-out order", "Manager User", 5),
        tx("3", "3", TX_OUT, -7, "Bulk sale", "Manager User", 4),
        tx("4", "5", TX_IN, 60, "Monthly paper delivery", "Admin User", 3),
        tx("5", "7", TX_ADJUSTMENT, -2, "Damaged in storage", "Admin User", 2),
        tx("6", "6", TX_IN, 12, "Restock from supplier", "Manager User", 1),
        tx("7", "1", TX_OUT, -3, "Customer order #1042", "Manager User", 0, 2),
    ]


def mock_users() -> List[User]:
    return [
        User("1", "Admin User", "admin@example.com", ROLE_ADMIN, password="admin123"),
        User("2", "Manager User", "manager@example.com", ROLE_MANAGER, password="manager123"),
        User("3", "Viewer User", "viewer@example.com", ROLE_VIEWER, password="viewer123"),
    ]
