# stockroom/services/category_service.py
import traceback
from typing import Any, Dict, List, Optional

from ..core.errors import ErrorKind, Result
from ..core.logging import get_logger
from ..db.database_utils import InventoryStore, fetch_records, simulate_latency
from ..models import Category
from .list_utils import search_records
from .validation import category_error_kinds, is_blank, validate_category

logger = get_logger(__name__)


def item_counts(store: InventoryStore) -> Dict[str, int]:
    """Number of items referencing each category id, from the live collection."""
    counts: Dict[str, int] = {}
    with store.lock:
        items = list(store.items.values())
    for item in items:
        if item.category_id:
            counts[item.category_id] = counts.get(item.category_id, 0) + 1
    return counts


def get_all_categories(store: InventoryStore) -> List[Dict[str, Any]]:
    """Categories as dicts with a derived ``item_count``."""
    counts = item_counts(store)
    rows = []
    for category in fetch_records(store, "categories"):
        row = category.to_dict()
        row["item_count"] = counts.get(category.id, 0)
        rows.append(row)
    return rows


def search_categories(store: InventoryStore, term: str = "") -> List[Dict[str, Any]]:
    return search_records(get_all_categories(store), term, ("name",))


def _other_names(store: InventoryStore, exclude_id: Optional[str] = None) -> List[str]:
    return [c.name for c in store.categories.values() if c.id != exclude_id]


def _check(store: InventoryStore, candidate: Dict[str, Any], exclude_id=None) -> Optional[Result]:
    existing = _other_names(store, exclude_id)
    messages = validate_category(candidate, existing)
    if not messages:
        return None
    kind = category_error_kinds(candidate, existing)["name"]
    return Result.fail(kind, messages["name"], messages)


def add_category(store: InventoryStore, details: Dict[str, Any]) -> Result:
    simulate_latency(store)
    try:
        with store.lock:
            failure = _check(store, details)
            if failure:
                return failure
            description = details.get("description")
            category = Category(
                id=store.new_id("categories"),
                name=str(details["name"]).strip(),
                description=None if is_blank(description) else str(description).strip(),
            )
            store.categories[category.id] = category
    except Exception as e:
        logger.error(
            "ERROR [category_service.add_category]: Error adding category: %s\n%s",
            e,
            traceback.format_exc(),
        )
        return Result.fail(ErrorKind.UNEXPECTED, "An unexpected error occurred while adding the category.")
    return Result.success(category, f"Category '{category.name}' added.")


def update_category(store: InventoryStore, category_id: str, updates: Dict[str, Any]) -> Result:
    simulate_latency(store)
    try:
        with store.lock:
            category = store.categories.get(str(category_id))
            if category is None:
                logger.warning("Category %s not found", category_id)
                return Result.fail(
                    ErrorKind.NOT_FOUND, f"Update failed: Category ID {category_id} not found."
                )
            candidate = {
                "name": updates.get("name", category.name),
                "description": updates.get("description", category.description),
            }
            failure = _check(store, candidate, exclude_id=category.id)
            if failure:
                return failure
            category.name = str(candidate["name"]).strip()
            description = candidate["description"]
            category.description = None if is_blank(description) else str(description).strip()
    except Exception as e:
        logger.error(
            "ERROR [category_service.update_category]: Error updating category %s: %s\n%s",
            category_id,
            e,
            traceback.format_exc(),
        )
        return Result.fail(ErrorKind.UNEXPECTED, "An unexpected error occurred while updating the category.")
    return Result.success(category, f"Category ID {category.id} updated successfully.")


def delete_category(store: InventoryStore, category_id: str) -> Result:
    """Delete a category that no item references."""
    simulate_latency(store)
    with store.lock:
        category = store.categories.get(str(category_id))
        if category is None:
            return Result.fail(ErrorKind.NOT_FOUND, f"Category ID {category_id} not found.")
        in_use = item_counts(store).get(category.id, 0)
        if in_use:
            return Result.fail(
                ErrorKind.INCONSISTENT,
                f"Category '{category.name}' is used by {in_use} item(s) and cannot be deleted.",
            )
        del store.categories[category.id]
    return Result.success(category, f"Category '{category.name}' deleted.")
