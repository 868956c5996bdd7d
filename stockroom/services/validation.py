"""Form validation rules for items, suppliers and categories.

Each ``validate_*`` function takes a candidate record as a mapping, possibly
partially filled and possibly holding raw strings straight from the form
widgets, and returns a mapping of field name to message for every rule that
fails. An empty mapping means the record is acceptable. The ``*_error_kinds``
variants return the :class:`ErrorKind` per field instead of the message.

None of these functions mutate their input.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..core.constants import SKU_MIN_LENGTH
from ..core.errors import ErrorKind

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FieldErrors = Dict[str, Tuple[ErrorKind, str]]


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a Decimal, ``None`` if blank.

    Raises ``ValueError`` for anything that is not a finite number.
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not number.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    return number


def parse_int(value: Any) -> Optional[int]:
    """Return ``value`` as an int, ``None`` if blank; whole numbers only."""
    number = parse_decimal(value)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValueError(f"Not a whole number: {value!r}")
    return int(number)


def _check_count(errors: FieldErrors, candidate: Mapping, field: str, label: str) -> None:
    try:
        value = parse_int(candidate.get(field))
    except ValueError:
        errors[field] = (ErrorKind.INVALID, f"{label} must be a whole number")
        return
    if value is None:
        errors[field] = (ErrorKind.INVALID, f"{label} is required")
    elif value < 0:
        errors[field] = (ErrorKind.INVALID, f"{label} cannot be negative")


# ─────────────────────────────────────────────────────────
# ITEM RULES
# ─────────────────────────────────────────────────────────
def _item_errors(candidate: Mapping[str, Any]) -> FieldErrors:
    errors: FieldErrors = {}

    sku = candidate.get("sku")
    if is_blank(sku):
        errors["sku"] = (ErrorKind.REQUIRED, "SKU is required")
    elif len(str(sku).strip()) < SKU_MIN_LENGTH:
        errors["sku"] = (
            ErrorKind.TOO_SHORT,
            f"SKU must be at least {SKU_MIN_LENGTH} characters",
        )

    if is_blank(candidate.get("name")):
        errors["name"] = (ErrorKind.REQUIRED, "Name is required")

    _check_count(errors, candidate, "quantity", "Quantity")
    _check_count(errors, candidate, "reorder_level", "Reorder level")

    sell_price: Optional[Decimal] = None
    try:
        sell_price = parse_decimal(candidate.get("sell_price"))
    except ValueError:
        errors["sell_price"] = (ErrorKind.INVALID, "Selling price must be a number")
    else:
        if sell_price is None:
            errors["sell_price"] = (ErrorKind.INVALID, "Selling price is required")
        elif sell_price < 0:
            errors["sell_price"] = (ErrorKind.INVALID, "Price cannot be negative")

    try:
        cost_price = parse_decimal(candidate.get("cost_price"))
    except ValueError:
        errors["cost_price"] = (ErrorKind.INVALID, "Cost price must be a number")
        return errors
    if cost_price is not None:
        if cost_price < 0:
            errors["cost_price"] = (ErrorKind.INVALID, "Cost price cannot be negative")
        elif sell_price is not None and cost_price > sell_price:
            errors["cost_price"] = (
                ErrorKind.INCONSISTENT,
                "Cost price cannot exceed selling price",
            )
    return errors


def validate_item(candidate: Mapping[str, Any]) -> Dict[str, str]:
    """Return field → message for every item rule ``candidate`` violates."""
    return {k: msg for k, (_, msg) in _item_errors(candidate).items()}


def item_error_kinds(candidate: Mapping[str, Any]) -> Dict[str, ErrorKind]:
    return {k: kind for k, (kind, _) in _item_errors(candidate).items()}


def coerce_item_fields(candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a validated candidate into typed item attributes.

    Only keys present in ``candidate`` are returned; blank optional strings
    become ``None``.
    """
    cleaned: Dict[str, Any] = {}
    for key, value in candidate.items():
        if key in ("quantity", "reorder_level"):
            cleaned[key] = parse_int(value)
        elif key in ("sell_price", "cost_price"):
            cleaned[key] = parse_decimal(value)
        elif key in ("sku", "name"):
            cleaned[key] = str(value).strip()
        elif key in ("description", "location", "category_id", "supplier_id"):
            cleaned[key] = None if is_blank(value) else str(value).strip()
    return cleaned


# ─────────────────────────────────────────────────────────
# SUPPLIER RULES
# ─────────────────────────────────────────────────────────
def _supplier_errors(candidate: Mapping[str, Any]) -> FieldErrors:
    errors: FieldErrors = {}
    if is_blank(candidate.get("name")):
        errors["name"] = (ErrorKind.REQUIRED, "Supplier name is required")
    email = candidate.get("email")
    if not is_blank(email) and not EMAIL_PATTERN.match(str(email).strip()):
        errors["email"] = (ErrorKind.INVALID, "Enter a valid email address")
    return errors


def validate_supplier(candidate: Mapping[str, Any]) -> Dict[str, str]:
    """Return field → message for every supplier rule ``candidate`` violates."""
    return {k: msg for k, (_, msg) in _supplier_errors(candidate).items()}


def supplier_error_kinds(candidate: Mapping[str, Any]) -> Dict[str, ErrorKind]:
    return {k: kind for k, (kind, _) in _supplier_errors(candidate).items()}


# ─────────────────────────────────────────────────────────
# CATEGORY RULES
# ─────────────────────────────────────────────────────────
def _category_errors(
    candidate: Mapping[str, Any], existing_names: Iterable[str]
) -> FieldErrors:
    errors: FieldErrors = {}
    name = candidate.get("name")
    if is_blank(name):
        errors["name"] = (ErrorKind.REQUIRED, "Category name is required")
        return errors
    taken = {n.strip().lower() for n in existing_names if n}
    if str(name).strip().lower() in taken:
        errors["name"] = (
            ErrorKind.DUPLICATE,
            f"Category '{str(name).strip()}' already exists",
        )
    return errors


def validate_category(
    candidate: Mapping[str, Any], existing_names: Iterable[str] = ()
) -> Dict[str, str]:
    """Return field → message; ``existing_names`` excludes the record itself."""
    return {
        k: msg for k, (_, msg) in _category_errors(candidate, existing_names).items()
    }


def category_error_kinds(
    candidate: Mapping[str, Any], existing_names: Iterable[str] = ()
) -> Dict[str, ErrorKind]:
    return {
        k: kind for k, (kind, _) in _category_errors(candidate, existing_names).items()
    }
