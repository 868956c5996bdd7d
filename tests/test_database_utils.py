import pytest

from stockroom.db.database_utils import create_store, fetch_records


def test_seeded_store_contents(store):
    assert len(store.items) == 8
    assert len(store.categories) == 4
    assert len(store.suppliers) == 3
    assert len(store.transactions) == 7
    assert {u.email for u in store.users.values()} == {
        "admin@example.com",
        "manager@example.com",
        "viewer@example.com",
    }


def test_new_id_is_next_number(store, empty_store):
    assert store.new_id("items") == "9"
    assert empty_store.new_id("categories") == "1"


def test_unknown_collection(store):
    with pytest.raises(KeyError):
        store.collection("orders")


def test_fetch_records_is_a_snapshot(store):
    records = fetch_records(store, "categories")
    records.clear()
    assert len(store.categories) == 4


def test_stores_are_independent():
    first = create_store()
    second = create_store()
    first.items["1"].quantity = 0
    assert second.items["1"].quantity == 15
    assert first.lock is not second.lock
