import pytest

from product_api.errors import PRODUCT_FIELDS_MESSAGE, ValidationError
from product_api.security import KeyCheck, check_api_key
from product_api.validation import paginate, validate_product

VALID = {"name": "Kettle", "description": "1.7L", "price": 30, "category": "kitchen", "inStock": True}


def test_valid_payload_is_accepted():
    product = validate_product(VALID)
    assert product.name == "Kettle"
    assert product.price == 30
    assert product.in_stock is True


def test_extra_fields_are_ignored():
    product = validate_product({**VALID, "id": "spoofed", "colour": "red"})
    assert "id" not in product.model_dump()


@pytest.mark.parametrize("price", [0, -12, 19.99])
def test_any_finite_price_is_accepted(price):
    assert validate_product({**VALID, "price": price}).price == price


@pytest.mark.parametrize("field", ["name", "description", "price", "category", "inStock"])
def test_missing_field_is_rejected(field):
    payload = {k: v for k, v in VALID.items() if k != field}
    with pytest.raises(ValidationError) as exc_info:
        validate_product(payload)
    assert exc_info.value.message == PRODUCT_FIELDS_MESSAGE
    assert exc_info.value.kind == "ValidationError"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("field,value", [
    ("name", ""),
    ("name", 5),
    ("description", None),
    ("price", "30"),
    ("price", True),
    ("category", ["kitchen"]),
    ("inStock", "true"),
    ("inStock", 1),
])
def test_wrong_type_is_rejected(field, value):
    with pytest.raises(ValidationError):
        validate_product({**VALID, field: value})


@pytest.mark.parametrize("payload", [None, [], "Kettle", 3])
def test_non_object_body_is_rejected(payload):
    with pytest.raises(ValidationError):
        validate_product(payload)


def test_check_api_key():
    assert check_api_key(None, "secret") is KeyCheck.MISSING
    assert check_api_key("", "secret") is KeyCheck.MISSING
    assert check_api_key("wrong", "secret") is KeyCheck.INVALID
    assert check_api_key("Secret", "secret") is KeyCheck.INVALID
    assert check_api_key("secret", "secret") is KeyCheck.VALID


def test_unset_secret_accepts_nothing():
    assert check_api_key("anything", "") is KeyCheck.INVALID


def test_paginate():
    items = list(range(12))
    assert paginate(items, 1, 5) == [0, 1, 2, 3, 4]
    assert paginate(items, 2, 5) == [5, 6, 7, 8, 9]
    assert paginate(items, 3, 5) == [10, 11]
    assert paginate(items, 4, 5) == []


def test_python_field_name_does_not_stand_in_for_in_stock():
    payload = {k: v for k, v in VALID.items() if k != "inStock"}
    payload["in_stock"] = True
    with pytest.raises(ValidationError):
        validate_product(payload)
