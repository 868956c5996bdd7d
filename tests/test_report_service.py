from datetime import date, datetime, timedelta
from decimal import Decimal

from stockroom.models import Category, Transaction
from stockroom.services import report_service


def test_total_stock_value_two_items(item_factory):
    items = [
        item_factory(quantity=15, sell_price=Decimal("999.99")),
        item_factory(quantity=8, sell_price=Decimal("249.99")),
    ]
    assert report_service.format_money(report_service.total_stock_value(items)) == "16999.77"


def test_overview_counts(item_factory):
    items = [
        item_factory(quantity=15, reorder_level=5, sell_price=Decimal("999.99"), category_id="1", supplier_id="1"),
        item_factory(quantity=8, reorder_level=10, sell_price=Decimal("249.99"), category_id="2", supplier_id="1"),
        item_factory(quantity=3, reorder_level=10, sell_price=Decimal("29.99"), category_id="1"),
    ]
    overview = report_service.build_overview(items)
    assert overview == {
        "total_items": 3,
        "total_categories": 2,
        "total_suppliers": 1,
        "low_stock_count": 2,
        "total_stock_value": "17089.74",
    }


def test_overview_of_nothing():
    overview = report_service.build_overview([])
    assert overview["total_items"] == 0
    assert overview["total_categories"] == 0
    assert overview["total_stock_value"] == "0.00"


def test_category_distribution_keeps_category_order(item_factory):
    categories = [Category("1", "Electronics"), Category("2", "Furniture"), Category("3", "Garden")]
    items = [
        item_factory(category_id="2", quantity=4),
        item_factory(category_id="1", quantity=15),
        item_factory(category_id="2", quantity=6),
        item_factory(category_id=None, quantity=99),
    ]
    assert report_service.category_distribution(items, categories) == [
        {"name": "Electronics", "item_count": 1, "total_quantity": 15},
        {"name": "Furniture", "item_count": 2, "total_quantity": 10},
        {"name": "Garden", "item_count": 0, "total_quantity": 0},
    ]


def test_low_stock_report_resolves_category(item_factory):
    categories = [Category("4", "Computer Accessories")]
    items = [
        item_factory(sku="SKU001", quantity=15, reorder_level=5),
        item_factory(sku="SKU003", quantity=3, reorder_level=10, category_id="4"),
        item_factory(sku="SKU009", quantity=1, reorder_level=1),
    ]
    rows = report_service.low_stock_report(items, categories)
    assert [r["sku"] for r in rows] == ["SKU003", "SKU009"]
    assert rows[0]["category_name"] == "Computer Accessories"
    assert rows[1]["category_name"] is None


def test_profit_margin():
    assert report_service.profit_margin(Decimal("999.99"), Decimal("750.00")) == Decimal("25.0")
    assert report_service.profit_margin(Decimal("10"), None) == Decimal("0.0")
    assert report_service.profit_margin(Decimal("0"), Decimal("0")) == Decimal("0.0")


def test_stock_movement_groups_by_day():
    today = date(2026, 3, 10)
    noon = datetime(2026, 3, 10, 12, 0)

    def tx(id_, change, days_ago):
        return Transaction(id_, "1", "IN" if change > 0 else "OUT", change, created_at=noon - timedelta(days=days_ago))

    transactions = [tx("1", 10, 0), tx("2", -4, 0), tx("3", 5, 2), tx("4", 7, 10)]
    movement = report_service.stock_movement(transactions, days=10, today=today)
    assert movement == [
        {"date": date(2026, 3, 10), "in": 10, "out": 4},
        {"date": date(2026, 3, 8), "in": 5, "out": 0},
    ]


def test_dashboard_data_from_seeded_store(store):
    data = report_service.get_dashboard_data(store)
    assert data["overview"]["total_items"] == 8
    assert data["overview"]["low_stock_count"] == 3
    assert data["overview"]["total_stock_value"] == "25980.92"
    assert [c["name"] for c in data["category_distribution"]] == [
        "Electronics",
        "Furniture",
        "Office Supplies",
        "Computer Accessories",
    ]
    assert len(data["stock_movement"]) > 0


def test_reports_data_from_seeded_store(store):
    data = report_service.get_reports_data(store)
    assert [r["sku"] for r in data["low_stock_items"]] == ["SKU002", "SKU003", "SKU007"]


def test_overview_as_metrics_order():
    cards = report_service.overview_as_metrics(
        {"total_items": 2, "low_stock_count": 1, "total_stock_value": "16999.77", "total_categories": 2}
    )
    assert [c["label"] for c in cards] == ["Total Items", "Low Stock Items", "Total Stock Value", "Categories"]
    assert cards[2]["value"] == "$16999.77"
