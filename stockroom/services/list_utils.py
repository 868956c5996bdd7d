"""Shared helpers for searching, filtering and paginating list screens.

These utilities centralise the logic used by the item, category, supplier and
transaction screens. They work on plain sequences of records, either
dataclass instances or mappings, and always preserve the input order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence

from ..core.constants import DEFAULT_PAGE_SIZE, FILTER_ALL_TYPES
from .stock_status import is_low_stock


def get_field(record: Any, name: str) -> Any:
    """Return ``name`` from a mapping or an object, ``None`` if absent."""
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def search_records(
    records: Iterable[Any], query: str | None, fields: Sequence[str]
) -> List[Any]:
    """Return records where ``query`` occurs in any of ``fields``.

    Matching is a case-insensitive substring test on the query as typed.
    Only ``None`` or ``""`` match everything; whitespace is significant.
    ``None`` field values never match.
    """
    q = (query or "").lower()
    records = list(records)
    if not q:
        return records
    matched = []
    for record in records:
        for name in fields:
            value = get_field(record, name)
            if value is not None and q in str(value).lower():
                matched.append(record)
                break
    return matched


def filter_records(records: Iterable[Any], **exact: Any) -> List[Any]:
    """Keep records whose fields equal the given values.

    A value of ``None``, ``""`` or the "ALL" filter sentinel disables that
    filter.
    """
    active = {
        k: v for k, v in exact.items() if v not in (None, "", FILTER_ALL_TYPES)
    }
    return [
        r for r in records if all(get_field(r, k) == v for k, v in active.items())
    ]


@dataclass
class Page:
    records: List[Any]
    page: int
    page_size: int
    total_pages: int
    total_count: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages_for(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed for ``count`` records, never less than one."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(math.ceil(count / page_size), 1)


def paginate(
    records: Sequence[Any], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> Page:
    """Slice ``records`` for the 1-based ``page``.

    A page past the last one yields an empty slice; keeping navigation in
    range is the caller's job (see :func:`clamp_page`).
    """
    if page < 1:
        raise ValueError("page must be 1 or greater")
    records = list(records)
    start = (page - 1) * page_size
    total = total_pages_for(len(records), page_size)
    return Page(
        records=records[start : start + page_size],
        page=page,
        page_size=page_size,
        total_pages=total,
        total_count=len(records),
    )


def clamp_page(page: int, total_pages: int) -> int:
    """Keep ``page`` within ``[1, total_pages]`` for Previous/Next controls."""
    return min(max(page, 1), max(total_pages, 1))


def _as_row(record: Any) -> Dict[str, Any]:
    if isinstance(record, dict):
        return dict(record)
    return record.to_dict()


def search_items(
    items: Iterable[Any],
    query: str | None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Items list pipeline: match name or SKU, flag low stock, paginate."""
    matched = search_records(items, query, ("name", "sku"))
    rows = []
    for record in matched:
        row = _as_row(record)
        row["is_low_stock"] = is_low_stock(row["quantity"], row["reorder_level"])
        rows.append(row)
    return paginate(rows, page, page_size)
