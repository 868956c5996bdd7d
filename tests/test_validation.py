import pytest

from stockroom.core.errors import ErrorKind
from stockroom.services import validation


def _item(**overrides):
    values = {
        "sku": "SKU001",
        "name": "Laptop",
        "quantity": 15,
        "reorder_level": 5,
        "sell_price": "999.99",
        "cost_price": "750.00",
    }
    values.update(overrides)
    return values


def test_valid_item_has_no_errors():
    assert validation.validate_item(_item()) == {}


def test_missing_sku_is_required():
    kinds = validation.item_error_kinds(_item(sku=""))
    assert kinds == {"sku": ErrorKind.REQUIRED}
    assert validation.validate_item(_item(sku="  "))["sku"] == "SKU is required"


def test_short_sku_is_too_short():
    errors = validation.validate_item(_item(sku="AB"))
    assert errors == {"sku": "SKU must be at least 3 characters"}
    assert validation.item_error_kinds(_item(sku="AB"))["sku"] == ErrorKind.TOO_SHORT


def test_three_character_sku_is_accepted():
    assert "sku" not in validation.validate_item(_item(sku="ABC"))


def test_missing_name_is_required():
    assert validation.validate_item(_item(name=None)) == {"name": "Name is required"}


@pytest.mark.parametrize("field", ["quantity", "reorder_level"])
def test_negative_counts_are_invalid(field):
    kinds = validation.item_error_kinds(_item(**{field: -1}))
    assert kinds == {field: ErrorKind.INVALID}


@pytest.mark.parametrize("value", ["2.5", "abc", ""])
def test_quantity_must_be_a_whole_number(value):
    assert "quantity" in validation.validate_item(_item(quantity=value))


def test_negative_price_is_invalid():
    errors = validation.validate_item(_item(sell_price="-1", cost_price=None))
    assert errors == {"sell_price": "Price cannot be negative"}


def test_cost_above_sell_price_is_inconsistent():
    candidate = _item(sell_price="10", cost_price="12")
    assert validation.item_error_kinds(candidate) == {"cost_price": ErrorKind.INCONSISTENT}
    assert validation.validate_item(candidate)["cost_price"] == "Cost price cannot exceed selling price"


def test_cost_equal_to_sell_price_is_allowed():
    assert validation.validate_item(_item(sell_price="10", cost_price="10")) == {}


def test_missing_cost_price_is_allowed():
    assert validation.validate_item(_item(cost_price="")) == {}


def test_all_failures_are_reported_together():
    errors = validation.validate_item({"sku": "A", "quantity": "-2", "sell_price": "x"})
    assert set(errors) == {"sku", "name", "quantity", "reorder_level", "sell_price"}


def test_validation_does_not_mutate_candidate():
    candidate = _item(quantity="3")
    snapshot = dict(candidate)
    validation.validate_item(candidate)
    assert candidate == snapshot


def test_coerce_item_fields_types_values():
    cleaned = validation.coerce_item_fields(
        {"sku": " SKU9 ", "quantity": "4", "sell_price": "1.50", "location": " "}
    )
    assert cleaned["sku"] == "SKU9"
    assert cleaned["quantity"] == 4
    assert str(cleaned["sell_price"]) == "1.50"
    assert cleaned["location"] is None


@pytest.mark.parametrize("value", ["nan", "inf", True])
def test_parse_decimal_rejects_non_finite(value):
    with pytest.raises(ValueError):
        validation.parse_decimal(value)


def test_supplier_requires_name():
    assert validation.validate_supplier({"name": ""}) == {"name": "Supplier name is required"}


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com"])
def test_supplier_email_must_be_valid(email):
    kinds = validation.supplier_error_kinds({"name": "Acme", "email": email})
    assert kinds == {"email": ErrorKind.INVALID}


def test_supplier_email_is_optional():
    assert validation.validate_supplier({"name": "Acme", "email": ""}) == {}


def test_category_name_required_and_unique():
    assert validation.category_error_kinds({"name": ""}) == {"name": ErrorKind.REQUIRED}
    kinds = validation.category_error_kinds({"name": "electronics "}, ["Electronics"])
    assert kinds == {"name": ErrorKind.DUPLICATE}
    assert validation.validate_category({"name": "Garden"}, ["Electronics"]) == {}
