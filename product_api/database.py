"""
In-memory product store.

``ProductStore`` owns an insertion-ordered list of ``Product`` records.
Lookups that miss return ``None`` (or ``False`` for ``remove``) and the
caller decides what that means.  A single lock serializes every
operation, so handlers running on worker threads never interleave two
mutations or observe a half-applied one.
"""

import threading
import uuid
from collections import Counter
from typing import Dict, Iterable, List, Optional

from .models import Product, ProductIn

SEED_PRODUCTS: List[Dict[str, object]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


def _new_id() -> str:
    return str(uuid.uuid4())


class ProductStore:
    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = list(products or [])
        self._lock = threading.RLock()

    @classmethod
    def seeded(cls) -> "ProductStore":
        """A store holding the three demo products, recreated identically on every call."""
        return cls(Product.model_validate(p) for p in SEED_PRODUCTS)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def append(self, payload: ProductIn) -> str:
        with self._lock:
            product_id = _new_id()
            while self._index_of(product_id) != -1:
                product_id = _new_id()
            self._products.append(Product(id=product_id, **payload.model_dump(by_alias=True)))
            return product_id

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            return self._products[i] if i != -1 else None

    def replace(self, product_id: str, payload: ProductIn) -> Optional[Product]:
        """Overwrite every field except ``id``."""
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            self._products[i] = Product(id=product_id, **payload.model_dump(by_alias=True))
            return self._products[i]

    def remove(self, product_id: str) -> bool:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return False
            del self._products[i]
            return True

    def list(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        """Products in insertion order, narrowed by the given filters.

        ``category`` is a case-insensitive exact match and ``search`` a
        case-insensitive substring of the name.  Both must hold when given.
        """
        with self._lock:
            results = list(self._products)
        if category:
            wanted = category.lower()
            results = [p for p in results if p.category.lower() == wanted]
        if search:
            term = search.lower()
            results = [p for p in results if term in p.name.lower()]
        return results

    def statistics(self) -> Dict[str, int]:
        with self._lock:
            return dict(Counter(p.category.lower() for p in self._products))
