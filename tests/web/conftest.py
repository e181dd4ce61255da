from __future__ import annotations

from typing import Generator

import pytest

from minam.services import HeuristicFileAnalyzer
from minam.webapp import create_app


@pytest.fixture()
def web_app() -> Generator:
    """Provide a configured Flask application with an offline analyzer."""
    app = create_app({"TESTING": True, "FILE_ANALYZER": HeuristicFileAnalyzer()})
    yield app


@pytest.fixture()
def client(web_app):
    """Flask test client fixture."""
    return web_app.test_client()


@pytest.fixture()
def provider_id(client) -> str:
    response = client.post(
        "/api/providers", json={"name": "Acme", "contact_email": "ops@acme.example"}
    )
    return response.get_json()["id"]


@pytest.fixture()
def dataset_id(client, provider_id) -> str:
    response = client.post(
        "/api/datasets",
        json={
            "provider_id": provider_id,
            "name": "ticks",
            "description": "scenario rows",
            "rows": [{"a": 1}, {"a": 2}, {"b": 3}],
        },
    )
    return response.get_json()["id"]


@pytest.fixture()
def model_id(client) -> str:
    response = client.post(
        "/api/models",
        json={
            "name": "a-model",
            "version": "1.0",
            "description": "needs a",
            "features": [{"name": "a", "dtype": "number"}],
        },
    )
    return response.get_json()["id"]
