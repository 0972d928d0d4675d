# tests/test_store.py
import threading

from product_api.database import ProductStore
from product_api.models import ProductIn


def make(name="Kettle", category="kitchen", **overrides):
    data = {"name": name, "description": "d", "price": 10, "category": category, "inStock": True}
    data.update(overrides)
    return ProductIn.model_validate(data)


def test_seeded_store_is_recreated_identically():
    a, b = ProductStore.seeded(), ProductStore.seeded()
    assert [p.id for p in a.list()] == ["1", "2", "3"]
    assert a.list() == b.list()
    a.remove("1")
    assert len(ProductStore.seeded()) == 3


def test_append_assigns_unique_ids_and_keeps_order():
    store = ProductStore()
    ids = [store.append(make(f"P{i}")) for i in range(20)]
    assert len(set(ids)) == 20
    assert [p.id for p in store.list()] == ids
    assert store.get(ids[3]).name == "P3"


def test_get_missing_returns_none():
    assert ProductStore.seeded().get("nope") is None


def test_replace_keeps_id_and_overwrites_fields():
    store = ProductStore.seeded()
    updated = store.replace("2", make("Phone", "Gadgets", price=-5, inStock=False))
    assert updated.id == "2"
    assert (updated.name, updated.category, updated.price, updated.in_stock) == ("Phone", "Gadgets", -5, False)
    assert store.get("2") == updated
    assert [p.id for p in store.list()] == ["1", "2", "3"]


def test_replace_missing_returns_none():
    store = ProductStore.seeded()
    assert store.replace("42", make()) is None
    assert len(store) == 3


def test_remove_compacts_and_second_remove_fails():
    store = ProductStore.seeded()
    assert store.remove("2") is True
    assert [p.id for p in store.list()] == ["1", "3"]
    assert store.remove("2") is False


def test_list_filters_compose_case_insensitively():
    store = ProductStore()
    store.append(make("Red Kettle", "Kitchen"))
    store.append(make("Blue kettle", "kitchen"))
    store.append(make("Kettlebell", "Sports"))
    store.append(make("Toaster", "KITCHEN"))

    assert [p.name for p in store.list(category="kitchen")] == ["Red Kettle", "Blue kettle", "Toaster"]
    assert [p.name for p in store.list(search="KETTLE")] == ["Red Kettle", "Blue kettle", "Kettlebell"]
    assert [p.name for p in store.list(category="kitchen", search="kettle")] == ["Red Kettle", "Blue kettle"]
    assert store.list(category="kitch") == []


def test_statistics_lowercases_categories():
    store = ProductStore.seeded()
    store.append(make(category="Kitchen"))
    assert store.statistics() == {"electronics": 2, "kitchen": 2}
    assert ProductStore().statistics() == {}


def test_parallel_appends_and_removes_do_not_interleave():
    store = ProductStore()
    ids = []
    ids_lock = threading.Lock()

    def worker():
        for _ in range(50):
            pid = store.append(make())
            with ids_lock:
                ids.append(pid)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 400
    assert len(set(ids)) == 400

    removers = [threading.Thread(target=lambda chunk=ids[i::4]: [store.remove(p) for p in chunk]) for i in range(4)]
    for t in removers:
        t.start()
    for t in removers:
        t.join()
    assert len(store) == 0
