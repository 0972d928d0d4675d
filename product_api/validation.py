# product_api/validation.py
import json
from typing import Any

import pydantic
from fastapi import Request

from .errors import PRODUCT_FIELDS_MESSAGE, ValidationError
from .models import ProductIn


def validate_product(payload: Any) -> ProductIn:
    """Check a submitted record against the product shape.

    Any problem, however many fields it touches, yields the same
    ``ValidationError`` listing every required field.
    """
    if not isinstance(payload, dict):
        raise ValidationError(PRODUCT_FIELDS_MESSAGE)
    try:
        return ProductIn.model_validate(payload)
    except pydantic.ValidationError:
        raise ValidationError(PRODUCT_FIELDS_MESSAGE) from None


async def product_payload(request: Request) -> ProductIn:
    """Dependency for the create and update routes."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError(PRODUCT_FIELDS_MESSAGE) from None
    return validate_product(payload)


def paginate(items: list, page: int, limit: int) -> list:
    """Slice ``items`` to the 1-based ``page`` of size ``limit``."""
    start = (page - 1) * limit
    return items[start:start + limit]
