import logging

import pytest

from stockroom.core.errors import ErrorKind
from stockroom.services import category_service, item_service, stock_service, supplier_service


@pytest.fixture
def broken_ids(store, monkeypatch):
    """Make id allocation fail so the write path hits an unexpected error."""

    def boom(name):
        raise RuntimeError(f"id allocation failed for {name}")

    monkeypatch.setattr(store, "new_id", boom)
    return store


def _logged_traceback(caplog):
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors
    assert "Traceback" in errors[-1].getMessage()
    assert "id allocation failed" in errors[-1].getMessage()


def test_add_item_unexpected_error_returns_failed_result(broken_ids, item_form, caplog):
    with caplog.at_level(logging.ERROR):
        result = item_service.add_new_item(broken_ids, item_form())
    assert not result.ok
    assert result.error == ErrorKind.UNEXPECTED
    assert result.message == "An unexpected error occurred while adding the item."
    assert len(broken_ids.items) == 8
    _logged_traceback(caplog)


def test_stock_movement_unexpected_error_leaves_quantity(broken_ids, caplog):
    with caplog.at_level(logging.ERROR):
        result = stock_service.record_stock_transaction(broken_ids, "1", "OUT", 5)
    assert result.error == ErrorKind.UNEXPECTED
    assert broken_ids.items["1"].quantity == 15
    assert len(broken_ids.transactions) == 7
    _logged_traceback(caplog)


def test_add_category_unexpected_error(broken_ids, caplog):
    with caplog.at_level(logging.ERROR):
        ok, message = category_service.add_category(broken_ids, {"name": "Garden"})
    assert not ok
    assert message == "An unexpected error occurred while adding the category."
    assert len(broken_ids.categories) == 4
    _logged_traceback(caplog)


def test_add_supplier_unexpected_error(broken_ids, caplog):
    with caplog.at_level(logging.ERROR):
        result = supplier_service.add_supplier(
            broken_ids, {"name": "Acme Parts", "email": "sales@acme.example"}
        )
    assert result.error == ErrorKind.UNEXPECTED
    assert len(broken_ids.suppliers) == 3
    _logged_traceback(caplog)


def test_bulk_import_unexpected_error_adds_nothing(broken_ids, item_form, caplog):
    drafts = [item_form(sku="BULK01"), item_form(sku="BULK02")]
    with caplog.at_level(logging.ERROR):
        added, errors = item_service.add_items_bulk(broken_ids, drafts)
    assert added == 0
    assert errors == ["An unexpected error occurred during the import. No items were added."]
    assert len(broken_ids.items) == 8
    _logged_traceback(caplog)


def test_update_item_unexpected_error(store, monkeypatch, caplog):
    def broken_coerce(candidate):
        raise ValueError("bad coercion")

    monkeypatch.setattr(item_service, "coerce_item_fields", broken_coerce)
    with caplog.at_level(logging.ERROR):
        result = item_service.update_item(store, "1", {"name": "Laptop Pro"})
    assert result.error == ErrorKind.UNEXPECTED
    assert store.items["1"].name == "Laptop"
    assert "Traceback" in caplog.text
