# stockroom/services/supplier_service.py
import traceback
from typing import Any, Dict, List, Optional

from ..core.errors import ErrorKind, Result
from ..core.logging import get_logger
from ..db.database_utils import InventoryStore, fetch_records, simulate_latency
from ..models import Supplier
from .list_utils import search_records
from .validation import is_blank, supplier_error_kinds, validate_supplier

logger = get_logger(__name__)

SUPPLIER_FIELDS = ["name", "contact_person", "email", "phone", "address"]


def item_counts(store: InventoryStore) -> Dict[str, int]:
    """Number of items referencing each supplier id, from the live collection."""
    counts: Dict[str, int] = {}
    with store.lock:
        items = list(store.items.values())
    for item in items:
        if item.supplier_id:
            counts[item.supplier_id] = counts.get(item.supplier_id, 0) + 1
    return counts


def get_all_suppliers(store: InventoryStore) -> List[Dict[str, Any]]:
    """
    Fetches all suppliers with a derived ``item_count``.
    Args:
        store: The in-memory inventory store.
    Returns:
        List of supplier dicts in store order.
    """
    counts = item_counts(store)
    rows = []
    for supplier in fetch_records(store, "suppliers"):
        row = supplier.to_dict()
        row["item_count"] = counts.get(supplier.id, 0)
        rows.append(row)
    return rows


def search_suppliers(store: InventoryStore, term: str = "") -> List[Dict[str, Any]]:
    """Match on supplier name or contact person."""
    return search_records(get_all_suppliers(store), term, ("name", "contact_person"))


def get_supplier_details(store: InventoryStore, supplier_id: str) -> Result:
    supplier = store.suppliers.get(str(supplier_id))
    if supplier is None:
        logger.warning("Supplier %s not found", supplier_id)
        return Result.fail(ErrorKind.NOT_FOUND, f"Supplier ID {supplier_id} not found.")
    return Result.success(supplier)


def _clean(details: Dict[str, Any]) -> Dict[str, Optional[str]]:
    return {
        k: (None if is_blank(details.get(k)) else str(details.get(k)).strip())
        for k in SUPPLIER_FIELDS
    }


def _validation_failure(candidate: Dict[str, Any]) -> Optional[Result]:
    messages = validate_supplier(candidate)
    if not messages:
        return None
    kind = next(iter(supplier_error_kinds(candidate).values()))
    return Result.fail(kind, "Please correct the highlighted fields.", messages)


def add_supplier(store: InventoryStore, details: Dict[str, Any]) -> Result:
    """
    Adds a new supplier.
    Args:
        store: The in-memory inventory store.
        details: Dictionary containing supplier details.
    Returns:
        Result carrying the new :class:`Supplier` or the field errors.
    """
    failure = _validation_failure(details)
    if failure:
        return failure
    simulate_latency(store)
    try:
        with store.lock:
            supplier = Supplier(id=store.new_id("suppliers"), **_clean(details))
            store.suppliers[supplier.id] = supplier
    except Exception as e:
        logger.error(
            "ERROR [supplier_service.add_supplier]: Error adding supplier: %s\n%s",
            e,
            traceback.format_exc(),
        )
        return Result.fail(ErrorKind.UNEXPECTED, "An unexpected error occurred while adding the supplier.")
    return Result.success(
        supplier, f"Supplier '{supplier.name}' added successfully with ID {supplier.id}."
    )


def update_supplier(store: InventoryStore, supplier_id: str, updates: Dict[str, Any]) -> Result:
    """Apply ``updates`` to an existing supplier and return it."""
    if not updates or not any(k in SUPPLIER_FIELDS for k in updates):
        return Result.fail(ErrorKind.INVALID, "No valid fields provided for update.")
    simulate_latency(store)
    try:
        with store.lock:
            supplier = store.suppliers.get(str(supplier_id))
            if supplier is None:
                logger.warning("Supplier %s not found", supplier_id)
                return Result.fail(
                    ErrorKind.NOT_FOUND, f"Update failed: Supplier ID {supplier_id} not found."
                )
            current = supplier.to_dict()
            candidate = {k: updates.get(k, current.get(k)) for k in SUPPLIER_FIELDS}
            failure = _validation_failure(candidate)
            if failure:
                return failure
            for key, value in _clean(candidate).items():
                setattr(supplier, key, value)
    except Exception as e:
        logger.error(
            "ERROR [supplier_service.update_supplier]: Error updating supplier %s: %s\n%s",
            supplier_id,
            e,
            traceback.format_exc(),
        )
        return Result.fail(ErrorKind.UNEXPECTED, "An unexpected error occurred while updating the supplier.")
    return Result.success(supplier, f"Supplier ID {supplier.id} updated successfully.")


def delete_supplier(store: InventoryStore, supplier_id: str) -> Result:
    """Delete a supplier that no item references."""
    simulate_latency(store)
    with store.lock:
        found = get_supplier_details(store, supplier_id)
        if not found.ok:
            return found
        supplier = found.value
        in_use = item_counts(store).get(supplier.id, 0)
        if in_use:
            return Result.fail(
                ErrorKind.INCONSISTENT,
                f"Supplier '{supplier.name}' supplies {in_use} item(s) and cannot be deleted.",
            )
        del store.suppliers[supplier.id]
    return Result.success(supplier, f"Supplier '{supplier.name}' deleted.")
