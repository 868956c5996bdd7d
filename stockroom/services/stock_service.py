# stockroom/services/stock_service.py
"""Stock movements: recording IN/OUT/ADJUSTMENT transactions and listing them."""

import traceback
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.constants import ALL_TX_TYPES, EMPTY_CELL, FILTER_ALL_TYPES, TX_IN, TX_OUT
from ..core.errors import ErrorKind, Result
from ..core.logging import get_logger
from ..db.database_utils import InventoryStore, fetch_records, simulate_latency
from ..models import Transaction
from .list_utils import filter_records
from .validation import is_blank, parse_int

logger = get_logger(__name__)


def signed_change(tx_type: str, amount: int) -> int:
    """Convert a form amount into the signed change stored on the transaction.

    IN and OUT take a positive amount; ADJUSTMENT takes the signed change as
    entered.
    """
    if tx_type == TX_IN:
        return abs(amount)
    if tx_type == TX_OUT:
        return -abs(amount)
    return amount


def record_stock_transaction(
    store: InventoryStore,
    item_id: str,
    tx_type: str,
    amount: Any,
    reason: Optional[str] = None,
    performed_by: Optional[str] = None,
) -> Result:
    """
    Records a stock movement and applies it to the item's quantity.
    Args:
        store: The in-memory inventory store.
        item_id: ID of the item being moved.
        tx_type: One of IN, OUT or ADJUSTMENT.
        amount: Units moved; IN/OUT must be positive, ADJUSTMENT non-zero.
        reason: Optional free-text reason.
        performed_by: Name of the user recording the movement.
    Returns:
        Result carrying the new :class:`Transaction`.
    """
    if tx_type not in ALL_TX_TYPES:
        return Result.fail(ErrorKind.INVALID, f"Unknown transaction type '{tx_type}'.")
    try:
        units = parse_int(amount)
    except ValueError:
        return Result.fail(
            ErrorKind.INVALID, "Quantity must be a whole number.", {"amount": "Must be a whole number"}
        )
    if units is None or units == 0:
        return Result.fail(
            ErrorKind.REQUIRED, "Enter a non-zero quantity.", {"amount": "Quantity is required"}
        )
    if tx_type in (TX_IN, TX_OUT) and units < 0:
        return Result.fail(
            ErrorKind.INVALID,
            "Quantity must be positive for IN and OUT movements.",
            {"amount": "Must be positive"},
        )

    change = signed_change(tx_type, units)
    simulate_latency(store)
    try:
        with store.lock:
            item = store.items.get(str(item_id))
            if item is None:
                logger.warning("Item %s not found", item_id)
                return Result.fail(ErrorKind.NOT_FOUND, f"Item ID {item_id} not found.")
            if item.quantity + change < 0:
                return Result.fail(
                    ErrorKind.INVALID,
                    f"Only {item.quantity} unit(s) of '{item.name}' in stock; "
                    f"a change of {change} would make stock negative.",
                    {"amount": "Exceeds stock on hand"},
                )
            now = datetime.now()
            tx = Transaction(
                id=store.new_id("transactions"),
                item_id=item.id,
                type=tx_type,
                change=change,
                reason=None if is_blank(reason) else str(reason).strip(),
                performed_by=None if is_blank(performed_by) else str(performed_by).strip(),
                created_at=now,
            )
            store.transactions[tx.id] = tx
            item.quantity += change
            item.updated_at = now
    except Exception as e:
        logger.error(
            "ERROR [stock_service.record_stock_transaction]: Error recording %s for item %s: %s\n%s",
            tx_type,
            item_id,
            e,
            traceback.format_exc(),
        )
        return Result.fail(
            ErrorKind.UNEXPECTED, "An unexpected error occurred while recording the stock movement."
        )
    return Result.success(tx, f"Recorded {tx_type} of {change:+d} for '{item.name}'.")


def get_transactions(
    store: InventoryStore, tx_type: str = FILTER_ALL_TYPES, item_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Transactions newest first, with the item's name and SKU resolved.

    Transactions whose item has since been deleted show a placeholder name.
    """
    records = filter_records(fetch_records(store, "transactions"), type=tx_type, item_id=item_id)
    rows = []
    for tx in sorted(records, key=lambda t: t.created_at, reverse=True):
        row = tx.to_dict()
        item = store.items.get(tx.item_id)
        row["item_name"] = item.name if item else EMPTY_CELL
        row["item_sku"] = item.sku if item else EMPTY_CELL
        rows.append(row)
    return rows


def empty_state_message(tx_type: str) -> str:
    if tx_type != FILTER_ALL_TYPES:
        return f"No {tx_type} transactions available."
    return "Transactions will appear here as items are added or removed."
