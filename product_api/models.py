# product_api/models.py
from typing import List, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, confloat, constr

NonEmptyStr = constr(strict=True, min_length=1)
Price = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]


class ProductIn(BaseModel):
    """Body of a create or full-update request.

    Only the wire name ``inStock`` is accepted; build instances from
    ``model_dump(by_alias=True)`` output.
    """

    name: NonEmptyStr
    description: NonEmptyStr
    price: Price
    category: NonEmptyStr
    in_stock: StrictBool = Field(alias="inStock")


class Product(ProductIn):
    id: str


class ProductPage(BaseModel):
    page: int
    limit: int
    total: int
    results: List[Product]


class Message(BaseModel):
    message: str
