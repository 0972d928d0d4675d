import logging

from fastapi.testclient import TestClient

from product_api.database import ProductStore
from product_api.main import create_app

from .conftest import AUTH


def _boom():
    raise RuntimeError("disk on fire")


def test_unhandled_error_is_generic_500(settings, caplog):
    store = ProductStore.seeded()
    store.statistics = _boom
    client = TestClient(create_app(settings, store=store))

    with caplog.at_level(logging.ERROR, logger="product_api.errors"):
        r = client.get("/api/products/stats", headers=AUTH)

    assert r.status_code == 500
    assert r.json() == {"error": "ServerError", "message": "Something went wrong"}
    assert "disk on fire" not in r.text
    assert "Error: RuntimeError - disk on fire" in caplog.text


def test_domain_errors_are_logged(client, caplog):
    with caplog.at_level(logging.WARNING, logger="product_api.errors"):
        client.get("/api/products/missing", headers=AUTH)
    assert "Error: NotFoundError - Product not found" in caplog.text


def test_requests_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="product_api.middleware"):
        r = client.get("/api/products?page=1", headers=AUTH)
    assert "GET /api/products?page=1" in caplog.text
    assert r.headers["X-Request-ID"]


def test_unknown_route_uses_error_body(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json()["error"] == "NotFoundError"


def test_wrong_method_uses_error_body(client):
    r = client.patch("/api/products/1", json={}, headers=AUTH)
    assert r.status_code == 405
    assert r.json()["error"] == "MethodNotAllowed"


def test_empty_secret_rejects_every_key(settings):
    client = TestClient(create_app(settings.model_copy(update={"api_key": ""})))
    r = client.get("/api/products", headers={"x-api-key": "anything"})
    assert r.status_code == 403


def test_unseeded_store(settings):
    client = TestClient(create_app(settings.model_copy(update={"seed_products": False})))
    r = client.get("/api/products/stats", headers=AUTH)
    assert r.json() == {}
