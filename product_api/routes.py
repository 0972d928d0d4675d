"""
Product routes.

The API key is checked by ``ApiKeyMiddleware`` before routing.  The
create and update routes take their body through ``product_payload``.
Store misses come back as ``None``/``False`` and are turned into
``NotFoundError`` here.
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from .database import ProductStore
from .errors import NotFoundError
from .models import Message, Product, ProductIn, ProductPage
from .validation import paginate, product_payload

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"

router = APIRouter(prefix="/api/products", tags=["products"])


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


@router.get("", response_model=ProductPage)
def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1),
    store: ProductStore = Depends(get_store),
):
    results = store.list(category=category, search=search)
    return ProductPage(page=page, limit=limit, total=len(results), results=paginate(results, page, limit))


@router.get("/stats", response_model=Dict[str, int])
def product_stats(store: ProductStore = Depends(get_store)):
    return store.statistics()


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    product = store.get(product_id)
    if product is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return product


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductIn = Depends(product_payload), store: ProductStore = Depends(get_store)):
    product_id = store.append(payload)
    logger.info("Created product %s", product_id)
    return Product(id=product_id, **payload.model_dump(by_alias=True))


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    payload: ProductIn = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    product = store.replace(product_id, payload)
    if product is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return product


@router.delete("/{product_id}", response_model=Message)
def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    if not store.remove(product_id):
        raise NotFoundError(PRODUCT_NOT_FOUND)
    logger.info("Deleted product %s", product_id)
    return Message(message=f"Product with id {product_id} deleted successfully.")
