# stockroom/services/item_service.py
"""Item master operations over the in-memory store.

Reads resolve category and supplier names and derive ``is_low_stock`` on the
fly. Mutations validate first, update the stored record in place and return
it, so pages can refresh their view without reloading the whole list.
"""

import traceback
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.errors import ErrorKind, Result
from ..core.logging import get_logger
from ..db.database_utils import InventoryStore, fetch_records, simulate_latency
from ..models import Item
from . import list_utils
from .report_service import item_stock_value, profit_margin
from .stock_status import annotate_low_stock, is_low_stock
from .validation import coerce_item_fields, item_error_kinds, validate_item

logger = get_logger(__name__)

ITEM_COLUMNS = [
    "id",
    "sku",
    "name",
    "category_name",
    "supplier_name",
    "quantity",
    "reorder_level",
    "sell_price",
    "cost_price",
    "location",
]

EDITABLE_FIELDS = [
    "sku",
    "name",
    "description",
    "quantity",
    "reorder_level",
    "sell_price",
    "cost_price",
    "category_id",
    "supplier_id",
    "location",
]


# ─────────────────────────────────────────────────────────
# READ HELPERS
# ─────────────────────────────────────────────────────────
def _resolved_row(store: InventoryStore, item: Item) -> Dict[str, Any]:
    row = item.to_dict()
    category = store.categories.get(item.category_id) if item.category_id else None
    supplier = store.suppliers.get(item.supplier_id) if item.supplier_id else None
    row["category_name"] = category.name if category else None
    row["supplier_name"] = supplier.name if supplier else None
    return row


def get_item_rows(store: InventoryStore) -> List[Dict[str, Any]]:
    """All items as dicts with resolved ``category_name``/``supplier_name``."""
    return [_resolved_row(store, i) for i in fetch_records(store, "items")]


def get_all_items(store: InventoryStore) -> pd.DataFrame:
    """
    Returns every item with resolved names and a freshly derived
    ``is_low_stock`` column.
    Args:
        store: The in-memory inventory store.
    Returns:
        Pandas DataFrame of items (empty frame with the expected columns if
        there are no items).
    """
    rows = get_item_rows(store)
    df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=ITEM_COLUMNS)
    return annotate_low_stock(df)


def list_items_page(
    store: InventoryStore,
    query: str = "",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list_utils.Page:
    """Search by name or SKU and return the requested page."""
    return list_utils.search_items(get_item_rows(store), query, page, page_size)


def get_item(store: InventoryStore, item_id: str) -> Result:
    """Look up a single item; ``NOT_FOUND`` if the id is unknown."""
    simulate_latency(store)
    item = store.items.get(str(item_id))
    if item is None:
        logger.warning("Item %s not found", item_id)
        return Result.fail(ErrorKind.NOT_FOUND, f"Item ID {item_id} not found.")
    return Result.success(item)


def get_item_details(store: InventoryStore, item_id: str) -> Result:
    """
    Fetches details for the item detail screen.
    Args:
        store: The in-memory inventory store.
        item_id: The ID of the item to fetch.
    Returns:
        Result whose value is a dict of item fields plus ``category_name``,
        ``supplier_name``, ``is_low_stock``, ``profit_margin`` and
        ``stock_value``.
    """
    found = get_item(store, item_id)
    if not found.ok:
        return found
    item = found.value
    details = _resolved_row(store, item)
    details["is_low_stock"] = is_low_stock(item.quantity, item.reorder_level)
    details["profit_margin"] = profit_margin(item.sell_price, item.cost_price)
    details["stock_value"] = item_stock_value(item)
    return Result.success(details)


# ─────────────────────────────────────────────────────────
# MUTATING HELPERS
# ─────────────────────────────────────────────────────────
def _validation_failure(candidate: Dict[str, Any]) -> Optional[Result]:
    messages = validate_item(candidate)
    if not messages:
        return None
    kinds = item_error_kinds(candidate)
    first_kind = next(iter(kinds.values()))
    return Result.fail(first_kind, "Please correct the highlighted fields.", messages)


def _sku_taken(store: InventoryStore, sku: str, exclude_id: Optional[str] = None) -> bool:
    wanted = sku.strip().lower()
    return any(
        i.sku.strip().lower() == wanted and i.id != exclude_id
        for i in store.items.values()
    )


def _reference_errors(store: InventoryStore, fields: Dict[str, Any]) -> Dict[str, str]:
    errors = {}
    if fields.get("category_id") and fields["category_id"] not in store.categories:
        errors["category_id"] = "Select an existing category"
    if fields.get("supplier_id") and fields["supplier_id"] not in store.suppliers:
        errors["supplier_id"] = "Select an existing supplier"
    return errors


def _check_candidate(
    store: InventoryStore, candidate: Dict[str, Any], exclude_id: Optional[str] = None
) -> Tuple[Optional[Result], Dict[str, Any]]:
    failure = _validation_failure(candidate)
    if failure:
        return failure, {}
    fields = coerce_item_fields(candidate)
    if _sku_taken(store, fields["sku"], exclude_id):
        message = f"SKU '{fields['sku']}' already exists. Choose a unique SKU."
        return Result.fail(ErrorKind.DUPLICATE, message, {"sku": message}), {}
    ref_errors = _reference_errors(store, fields)
    if ref_errors:
        return (
            Result.fail(ErrorKind.INVALID, "Please correct the highlighted fields.", ref_errors),
            {},
        )
    return None, fields


def add_new_item(store: InventoryStore, details: Dict[str, Any]) -> Result:
    """
    Validates ``details`` and adds a new item to the store.
    Args:
        store: The in-memory inventory store.
        details: Raw form values keyed by item field name.
    Returns:
        Result carrying the created :class:`Item`, or the field errors.
    """
    candidate = {k: details.get(k) for k in EDITABLE_FIELDS}
    failure = _validation_failure(candidate)
    if failure:
        return failure
    simulate_latency(store)
    try:
        with store.lock:
            failure, fields = _check_candidate(store, candidate)
            if failure:
                return failure
            now = datetime.now()
            item = Item(id=store.new_id("items"), created_at=now, updated_at=now, **fields)
            store.items[item.id] = item
    except Exception as e:
        logger.error(
            "ERROR [item_service.add_new_item]: Error adding item: %s\n%s",
            e,
            traceback.format_exc(),
        )
        return Result.fail(ErrorKind.UNEXPECTED, "An unexpected error occurred while adding the item.")
    return Result.success(item, f"Item '{item.name}' added with ID {item.id}.")


def update_item(store: InventoryStore, item_id: str, updates: Dict[str, Any]) -> Result:
    """Apply ``updates`` to an existing item and return the updated record."""
    if not updates or not any(k in EDITABLE_FIELDS for k in updates):
        return Result.fail(ErrorKind.INVALID, "No valid fields provided for update.")
    simulate_latency(store)
    try:
        with store.lock:
            item = store.items.get(str(item_id))
            if item is None:
                logger.warning("Update requested for missing item %s", item_id)
                return Result.fail(
                    ErrorKind.NOT_FOUND, f"Update failed: Item ID {item_id} not found."
                )
            current = item.to_dict()
            candidate = {k: updates.get(k, current.get(k)) for k in EDITABLE_FIELDS}
            failure, fields = _check_candidate(store, candidate, exclude_id=item.id)
            if failure:
                return failure
            for key, value in fields.items():
                setattr(item, key, value)
            item.updated_at = datetime.now()
    except Exception as e:
        logger.error(
            "ERROR [item_service.update_item]: Error updating item %s: %s\n%s",
            item_id,
            e,
            traceback.format_exc(),
        )
        return Result.fail(ErrorKind.UNEXPECTED, "An unexpected error occurred while updating the item.")
    return Result.success(item, f"Item ID {item.id} updated successfully.")


def delete_item(store: InventoryStore, item_id: str) -> Result:
    """Remove an item. Its transactions are kept for the history screen."""
    simulate_latency(store)
    with store.lock:
        item = store.items.pop(str(item_id), None)
    if item is None:
        logger.warning("Delete requested for missing item %s", item_id)
        return Result.fail(ErrorKind.NOT_FOUND, f"Item ID {item_id} not found.")
    return Result.success(item, f"Item '{item.name}' deleted successfully.")


def add_items_bulk(store: InventoryStore, drafts: List[Dict[str, Any]]) -> Tuple[int, List[str]]:
    """Insert multiple items; nothing is added if any row fails."""
    if not drafts:
        return 0, ["No items provided."]

    simulate_latency(store)
    try:
        with store.lock:
            errors: List[str] = []
            prepared: List[Dict[str, Any]] = []
            batch_skus = set()
            for idx, details in enumerate(drafts, start=1):
                candidate = {k: details.get(k) for k in EDITABLE_FIELDS}
                failure, fields = _check_candidate(store, candidate)
                if failure:
                    detail = "; ".join(f"{k}: {v}" for k, v in failure.field_errors.items())
                    errors.append(f"Row {idx}: {detail or failure.message}")
                    continue
                sku_key = fields["sku"].lower()
                if sku_key in batch_skus:
                    errors.append(f"Row {idx}: sku: SKU '{fields['sku']}' appears more than once")
                    continue
                batch_skus.add(sku_key)
                prepared.append(fields)

            if errors:
                logger.warning("Bulk item import rejected with %d error(s).", len(errors))
                return 0, errors

            now = datetime.now()
            first_id = int(store.new_id("items"))
            new_items = [
                Item(id=str(first_id + offset), created_at=now, updated_at=now, **fields)
                for offset, fields in enumerate(prepared)
            ]
            store.items.update((item.id, item) for item in new_items)
    except Exception as e:
        logger.error(
            "ERROR [item_service.add_items_bulk]: Error during bulk insert: %s\n%s",
            e,
            traceback.format_exc(),
        )
        return 0, ["An unexpected error occurred during the import. No items were added."]
    return len(prepared), []
