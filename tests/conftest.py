import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.main import create_app

API_KEY = "test-key"
AUTH = {"x-api-key": API_KEY}

KETTLE = {"name": "Kettle", "description": "1.7L", "price": 30, "category": "kitchen", "inStock": True}


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, seed_products=True)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
