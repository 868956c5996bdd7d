"""CSV export and import for the item list and low-stock report.

Export writes with :mod:`csv` using minimal quoting, so the output is exactly
the comma-joined fields whenever no value contains a comma, quote or newline.
Import reads with the same dialect, so quoted fields come back intact. It is
otherwise loose: the first row names the columns, every later non-blank row
is zipped with those names, and rows are not checked for column count.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import PurePath
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.constants import (
    IMPORT_ACCEPTED_EXTENSIONS,
    ITEM_EXPORT_FILENAME_PREFIX,
    ITEM_EXPORT_HEADERS,
    LOW_STOCK_EXPORT_HEADERS,
)
from ..core.errors import ErrorKind, Result
from ..core.logging import get_logger
from .list_utils import get_field

logger = get_logger(__name__)

# Imported column name → item candidate field
IMPORT_FIELD_MAP = {
    "sku": "sku",
    "name": "name",
    "quantity": "quantity",
    "price": "sell_price",
    "location": "location",
    "description": "description",
    "reorder level": "reorder_level",
    "cost price": "cost_price",
}


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def _write_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(list(headers))
    for row in rows:
        writer.writerow([_cell(v) for v in row])
    return buffer.getvalue()


def export_items_csv(items: Iterable[Any], categories: Iterable[Any] = ()) -> str:
    """Return CSV text for ``items`` in input order.

    The category column uses ``category_name`` when the row already carries
    one, otherwise the name of the category referenced by ``category_id``.
    """
    names = {get_field(c, "id"): get_field(c, "name") for c in categories}

    def row(item):
        category = get_field(item, "category_name")
        if category is None:
            category = names.get(get_field(item, "category_id"))
        return [
            get_field(item, "sku"),
            get_field(item, "name"),
            category,
            get_field(item, "quantity"),
            get_field(item, "sell_price"),
            get_field(item, "location"),
        ]

    return _write_csv(ITEM_EXPORT_HEADERS, (row(i) for i in items))


def export_low_stock_csv(rows: Iterable[Any]) -> str:
    """CSV for the reports screen's low-stock table."""
    return _write_csv(
        LOW_STOCK_EXPORT_HEADERS,
        (
            [
                get_field(r, "sku"),
                get_field(r, "name"),
                get_field(r, "category_name"),
                get_field(r, "quantity"),
                get_field(r, "reorder_level"),
            ]
            for r in rows
        ),
    )


def export_filename(today: Optional[date] = None) -> str:
    """``items-export-<YYYY-MM-DD>.csv``"""
    today = today or date.today()
    return f"{ITEM_EXPORT_FILENAME_PREFIX}{today.isoformat()}.csv"


def import_items_csv(text: str) -> List[Dict[str, str]]:
    """Parse CSV text into loosely typed rows keyed by lower-cased header.

    Extra values beyond the header count are dropped and missing trailing
    values are simply absent from the row.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    headers = next(reader, None)
    if headers is None:
        return []
    headers = [h.strip().lower() for h in headers]
    rows = []
    for record in reader:
        values = [v.strip() for v in record]
        if not any(values):
            continue
        rows.append(dict(zip(headers, values)))
    return rows


def is_accepted_upload(filename: str) -> bool:
    return PurePath(filename).suffix.lower() in IMPORT_ACCEPTED_EXTENSIONS


def read_upload(filename: str, payload: bytes) -> Result:
    """Decode an uploaded file into imported rows.

    Spreadsheet extensions are accepted by the file picker but only CSV text
    can be parsed.
    """
    if not is_accepted_upload(filename):
        return Result.fail(ErrorKind.INVALID, f"Unsupported file type: {filename}")
    if PurePath(filename).suffix.lower() != ".csv":
        logger.warning("Rejected spreadsheet upload %s; only CSV is parsed.", filename)
        return Result.fail(
            ErrorKind.INVALID, "Only CSV files can be imported at the moment."
        )
    try:
        text = payload.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Upload %s is not valid UTF-8 text.", filename)
        return Result.fail(ErrorKind.INVALID, "The file is not valid UTF-8 text.")
    rows = import_items_csv(text)
    return Result.success(rows, f"Read {len(rows)} row(s) from {filename}.")


def rows_to_item_drafts(
    rows: Iterable[Dict[str, str]], categories: Iterable[Any] = ()
) -> List[Dict[str, Any]]:
    """Map imported rows onto item candidate fields.

    Category names are resolved case-insensitively to ids; unknown names
    leave the item uncategorised. A missing reorder level defaults to 0.
    """
    by_name = {
        str(get_field(c, "name")).strip().lower(): get_field(c, "id") for c in categories
    }
    drafts = []
    for row in rows:
        draft: Dict[str, Any] = {}
        for column, value in row.items():
            field = IMPORT_FIELD_MAP.get(column)
            if field:
                draft[field] = value
        # The export format carries no reorder level
        draft.setdefault("reorder_level", 0)
        category = (row.get("category") or "").strip().lower()
        if category and category in by_name:
            draft["category_id"] = by_name[category]
        drafts.append(draft)
    return drafts
