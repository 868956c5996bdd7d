"""Dashboard and report aggregations over the item collection."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from ..core.constants import STOCK_MOVEMENT_DAYS
from ..core.logging import get_logger
from ..db.database_utils import InventoryStore, fetch_records
from .list_utils import get_field
from .stock_status import is_low_stock

logger = get_logger(__name__)

CENT = Decimal("0.01")
TENTH = Decimal("0.1")


def _decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_money(value: Decimal) -> str:
    """Two decimal places, no thousands separator (``"16999.77"``)."""
    return str(_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def item_stock_value(item: Any) -> Decimal:
    """Quantity times selling price for a single item."""
    return _decimal(get_field(item, "quantity")) * _decimal(get_field(item, "sell_price"))


def total_stock_value(items: Iterable[Any]) -> Decimal:
    """Sum of quantity × selling price over ``items``."""
    return sum((item_stock_value(i) for i in items), Decimal("0"))


def profit_margin(sell_price: Any, cost_price: Any) -> Decimal:
    """Margin on the selling price as a percentage with one decimal.

    Returns ``0`` when there is no cost price or the item is given away.
    """
    sell = _decimal(sell_price)
    if cost_price is None or sell == 0:
        return Decimal("0.0")
    margin = (sell - _decimal(cost_price)) / sell * 100
    return margin.quantize(TENTH, rounding=ROUND_HALF_UP)


def _items_frame(items: Iterable[Any]) -> pd.DataFrame:
    rows = [
        {
            "category_id": get_field(i, "category_id"),
            "supplier_id": get_field(i, "supplier_id"),
            "quantity": get_field(i, "quantity"),
        }
        for i in items
    ]
    return pd.DataFrame(rows, columns=["category_id", "supplier_id", "quantity"])


def build_overview(items: Iterable[Any]) -> Dict[str, Any]:
    """Headline counts for the dashboard.

    Category and supplier totals count the distinct ids referenced by items.
    """
    items = list(items)
    df = _items_frame(items)
    low = [i for i in items if is_low_stock(get_field(i, "quantity"), get_field(i, "reorder_level"))]
    return {
        "total_items": len(items),
        "total_categories": int(df["category_id"].dropna().nunique()),
        "total_suppliers": int(df["supplier_id"].dropna().nunique()),
        "low_stock_count": len(low),
        "total_stock_value": format_money(total_stock_value(items)),
    }


def category_distribution(
    items: Iterable[Any], categories: Iterable[Any]
) -> List[Dict[str, Any]]:
    """Item count and total quantity per category, in category order."""
    df = _items_frame(items)
    grouped = (
        df.dropna(subset=["category_id"])
        .groupby("category_id")["quantity"]
        .agg(["count", "sum"])
    )
    distribution = []
    for category in categories:
        cat_id = get_field(category, "id")
        if cat_id in grouped.index:
            count = int(grouped.at[cat_id, "count"])
            total = int(grouped.at[cat_id, "sum"])
        else:
            count, total = 0, 0
        distribution.append(
            {"name": get_field(category, "name"), "item_count": count, "total_quantity": total}
        )
    return distribution


def low_stock_report(
    items: Iterable[Any], categories: Iterable[Any]
) -> List[Dict[str, Any]]:
    """Low-stock items with their resolved category name, in item order."""
    names = {get_field(c, "id"): get_field(c, "name") for c in categories}
    report = []
    for item in items:
        quantity = get_field(item, "quantity")
        reorder = get_field(item, "reorder_level")
        if not is_low_stock(quantity, reorder):
            continue
        report.append(
            {
                "id": get_field(item, "id"),
                "sku": get_field(item, "sku"),
                "name": get_field(item, "name"),
                "quantity": quantity,
                "reorder_level": reorder,
                "category_name": names.get(get_field(item, "category_id")),
            }
        )
    return report


def stock_movement(
    transactions: Iterable[Any],
    days: int = STOCK_MOVEMENT_DAYS,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Daily stock in/out totals for the last ``days`` days, newest first.

    Positive changes count as "in", negative changes as "out" (reported as a
    positive number). Days without movement are omitted.
    """
    today = today or datetime.now().date()
    start = today - timedelta(days=days - 1)
    rows = []
    for tx in transactions:
        created = get_field(tx, "created_at")
        day = created.date() if isinstance(created, datetime) else created
        if day is None or day < start or day > today:
            continue
        change = int(get_field(tx, "change") or 0)
        rows.append({"date": day, "in": max(change, 0), "out": max(-change, 0)})
    if not rows:
        return []
    totals = pd.DataFrame(rows).groupby("date")[["in", "out"]].sum()
    totals = totals.sort_index(ascending=False)
    return [
        {"date": day, "in": int(row["in"]), "out": int(row["out"])}
        for day, row in totals.iterrows()
    ]


# ─────────────────────────────────────────────────────────
# STORE-BACKED SCREENS
# ─────────────────────────────────────────────────────────
def get_dashboard_data(store: InventoryStore) -> Dict[str, Any]:
    """Everything the dashboard screen shows, computed from the live store."""
    items = fetch_records(store, "items")
    categories = list(store.categories.values())
    transactions = list(store.transactions.values())
    return {
        "overview": build_overview(items),
        "category_distribution": category_distribution(items, categories),
        "stock_movement": stock_movement(transactions),
    }


def get_reports_data(store: InventoryStore) -> Dict[str, Any]:
    """Low-stock report rows and the total stock value string."""
    items = fetch_records(store, "items")
    categories = list(store.categories.values())
    return {
        "low_stock_items": low_stock_report(items, categories),
        "total_stock_value": format_money(total_stock_value(items)),
    }


def overview_as_metrics(overview: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Label/value pairs in the order the dashboard cards are drawn."""
    return [
        {"label": "Total Items", "value": overview["total_items"]},
        {"label": "Low Stock Items", "value": overview["low_stock_count"]},
        {"label": "Total Stock Value", "value": f"${overview['total_stock_value']}"},
        {"label": "Categories", "value": overview["total_categories"]},
    ]
