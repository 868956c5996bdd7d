from decimal import Decimal

import pytest

from stockroom.core.errors import ErrorKind
from stockroom.services import item_service


def test_get_all_items_annotates_low_stock(store):
    df = item_service.get_all_items(store)
    assert len(df) == 8
    low = df.loc[df["is_low_stock"], "sku"].tolist()
    assert low == ["SKU002", "SKU003", "SKU007"]
    assert df.loc[df["sku"] == "SKU001", "category_name"].item() == "Electronics"


def test_get_all_items_empty_store_keeps_columns(empty_store):
    df = item_service.get_all_items(empty_store)
    assert df.empty
    assert "sku" in df.columns
    assert "is_low_stock" in df.columns


def test_list_items_page_searches_name_and_sku(store):
    page = item_service.list_items_page(store, "lap")
    assert [r["name"] for r in page.records] == ["Laptop"]
    page = item_service.list_items_page(store, "sku00", page=1, page_size=5)
    assert page.total_count == 8
    assert page.total_pages == 2
    assert len(page.records) == 5


def test_get_item_details_includes_derived_fields(store):
    result = item_service.get_item_details(store, "1")
    assert result.ok
    details = result.value
    assert details["profit_margin"] == Decimal("25.0")
    assert details["stock_value"] == Decimal("14999.85")
    assert details["is_low_stock"] is False
    assert details["supplier_name"] == "Tech Supplies Co."


def test_get_item_details_not_found(store):
    result = item_service.get_item_details(store, "999")
    assert not result.ok
    assert result.error == ErrorKind.NOT_FOUND


def test_add_new_item(store, item_form):
    result = item_service.add_new_item(store, item_form())
    assert result.ok
    item = result.value
    assert item.id == "9"
    assert item.quantity == 12
    assert item.sell_price == Decimal("39.90")
    assert item.description is None
    assert store.items["9"] is item


def test_add_new_item_collects_field_errors(store, item_form):
    result = item_service.add_new_item(store, item_form(sku="AB", name="", sell_price="-5", cost_price=""))
    assert not result.ok
    assert set(result.field_errors) == {"sku", "name", "sell_price"}
    assert len(store.items) == 8


def test_add_new_item_rejects_duplicate_sku(store, item_form):
    result = item_service.add_new_item(store, item_form(sku="sku001"))
    assert result.error == ErrorKind.DUPLICATE
    assert "sku" in result.field_errors


def test_add_new_item_rejects_unknown_category(store, item_form):
    result = item_service.add_new_item(store, item_form(category_id="42"))
    assert not result.ok
    assert "category_id" in result.field_errors


def test_result_unpacks_like_a_tuple(store, item_form):
    ok, message = item_service.add_new_item(store, item_form())
    assert ok
    assert "Desk Lamp" in message


def test_update_item_merges_fields(store):
    result = item_service.update_item(store, "3", {"quantity": "25"})
    assert result.ok
    item = store.items["3"]
    assert item.quantity == 25
    assert item.name == "Wireless Mouse"
    assert item.updated_at > item.created_at


def test_update_item_keeps_own_sku(store):
    assert item_service.update_item(store, "1", {"sku": "SKU001", "name": "Laptop Pro"}).ok


def test_update_item_validation_leaves_item_untouched(store):
    result = item_service.update_item(store, "1", {"cost_price": "2000"})
    assert result.error == ErrorKind.INCONSISTENT
    assert store.items["1"].cost_price == Decimal("750.00")


def test_update_item_errors(store):
    assert item_service.update_item(store, "1", {}).error == ErrorKind.INVALID
    assert item_service.update_item(store, "1", {"colour": "red"}).error == ErrorKind.INVALID
    missing = item_service.update_item(store, "999", {"name": "X"})
    assert missing.error == ErrorKind.NOT_FOUND
    assert missing.message == "Update failed: Item ID 999 not found."


def test_delete_item_keeps_transactions(store):
    before = len(store.transactions)
    assert item_service.delete_item(store, "1").ok
    assert "1" not in store.items
    assert len(store.transactions) == before
    assert item_service.delete_item(store, "1").error == ErrorKind.NOT_FOUND


def test_add_items_bulk_all_or_nothing(store, item_form):
    drafts = [item_form(sku="BULK1"), item_form(sku="B"), item_form(sku="BULK3")]
    added, errors = item_service.add_items_bulk(store, drafts)
    assert added == 0
    assert errors == ["Row 2: sku: SKU must be at least 3 characters"]
    assert len(store.items) == 8


def test_add_items_bulk_flags_repeated_sku(store, item_form):
    added, errors = item_service.add_items_bulk(store, [item_form(sku="BULK1"), item_form(sku="bulk1")])
    assert added == 0
    assert errors[0].startswith("Row 2:")


def test_add_items_bulk_inserts(store, item_form):
    added, errors = item_service.add_items_bulk(store, [item_form(sku="BULK1"), item_form(sku="BULK2")])
    assert (added, errors) == (2, [])
    assert {i.sku for i in store.items.values()} >= {"BULK1", "BULK2"}


@pytest.mark.parametrize("drafts", [[], None])
def test_add_items_bulk_empty(store, drafts):
    assert item_service.add_items_bulk(store, drafts) == (0, ["No items provided."])
