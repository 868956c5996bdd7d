"""Service layer for the Stockroom dashboard."""

from . import (
    category_service,
    csv_service,
    item_service,
    list_utils,
    report_service,
    stock_service,
    stock_status,
    supplier_service,
    validation,
)

__all__ = [
    "category_service",
    "csv_service",
    "item_service",
    "list_utils",
    "report_service",
    "stock_service",
    "stock_status",
    "supplier_service",
    "validation",
]
