from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

os.environ["CAFE_STORAGE_BACKEND"] = "memory"
os.environ.setdefault("CAFE_CURRENCY", "USD")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("OTEL_SERVICE_NAME", "cafepos-backend-test")
os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

from cafepos.api.main import app
from cafepos.application.use_cases.import_archive import PendingImport
from cafepos.domain.order.cart import Cart
from cafepos.infrastructure.storage import factory


@pytest.fixture(autouse=True)
def fresh_store(monkeypatch) -> Iterator[None]:
    monkeypatch.setenv("CAFE_STORAGE_BACKEND", "memory")
    factory._build_store.cache_clear()
    app.state.cart = Cart(factory.get_currency())
    app.state.pending_import = PendingImport()
    yield
    factory._build_store.cache_clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def menu(client: TestClient) -> dict[str, str]:
    created = {}
    for payload in (
        {
            "name": "Latte",
            "price": "3.50",
            "category": "drink",
            "addOns": [
                {"name": "Extra Shot", "price": "0.50", "allowQuantity": True},
                {"name": "Oatmilk", "price": "0.60"},
            ],
        },
        {"name": "Bagel", "price": "2.50", "category": "food"},
    ):
        response = client.post("/v1/menu", json=payload)
        assert response.status_code == 201
        created[payload["name"]] = response.json()["itemId"]
    return created
