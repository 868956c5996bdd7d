from stockroom.core.errors import ErrorKind
from stockroom.services import supplier_service


def test_get_all_suppliers_counts_items(store):
    rows = {r["name"]: r["item_count"] for r in supplier_service.get_all_suppliers(store)}
    assert rows == {"Tech Supplies Co.": 4, "Office Depot": 2, "Furniture World": 2}


def test_search_matches_name_or_contact(store):
    assert [s["name"] for s in supplier_service.search_suppliers(store, "sarah")] == ["Office Depot"]
    assert [s["name"] for s in supplier_service.search_suppliers(store, "WORLD")] == ["Furniture World"]


def test_add_supplier(store):
    result = supplier_service.add_supplier(
        store, {"name": "Acme", "contact_person": " ", "email": "sales@acme.io"}
    )
    assert result.ok
    supplier = result.value
    assert supplier.id == "4"
    assert supplier.contact_person is None
    assert supplier.email == "sales@acme.io"


def test_add_supplier_invalid_email(store):
    result = supplier_service.add_supplier(store, {"name": "Acme", "email": "nope"})
    assert result.error == ErrorKind.INVALID
    assert result.field_errors == {"email": "Enter a valid email address"}
    assert len(store.suppliers) == 3


def test_update_supplier(store):
    result = supplier_service.update_supplier(store, "2", {"phone": "+1 555-0199"})
    assert result.ok
    assert store.suppliers["2"].phone == "+1 555-0199"
    assert store.suppliers["2"].name == "Office Depot"


def test_update_supplier_errors(store):
    assert supplier_service.update_supplier(store, "2", {}).error == ErrorKind.INVALID
    assert supplier_service.update_supplier(store, "2", {"name": ""}).error == ErrorKind.REQUIRED
    assert supplier_service.update_supplier(store, "9", {"name": "X"}).error == ErrorKind.NOT_FOUND


def test_delete_supplier(store):
    assert supplier_service.delete_supplier(store, "1").error == ErrorKind.INCONSISTENT
    new = supplier_service.add_supplier(store, {"name": "Acme"}).value
    assert supplier_service.delete_supplier(store, new.id).ok
    assert supplier_service.get_supplier_details(store, new.id).error == ErrorKind.NOT_FOUND
