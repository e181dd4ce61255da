"""
Minam Repository
Introductory remarks: This module is part of the Minam codebase.

Shared fixtures for the test-suite.
"""

from __future__ import annotations

from typing import Any, List

import pytest

from minam.models import (DatasetCreate, FeatureSpec, ModelProfileCreate,
                          ProviderCreate)
from minam.services import MinamService
from minam.storage import RecordStore


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests offline and silent regardless of the developer shell."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "0")


@pytest.fixture()
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture()
def service(store: RecordStore) -> MinamService:
    return MinamService(store)


@pytest.fixture()
def scenario_rows() -> List[Any]:
    return [{"a": 1}, {"a": 2}, {"b": 3}]


@pytest.fixture()
def provider(service: MinamService):
    return service.register_provider(
        ProviderCreate(name="Acme Data", contact_email="data@acme.example")
    )


@pytest.fixture()
def dataset(service: MinamService, provider, scenario_rows):
    return service.register_dataset(
        DatasetCreate(
            provider_id=provider.id,
            name="prices",
            description="hourly prices",
            rows=tuple(scenario_rows),
        )
    )


@pytest.fixture()
def profile(service: MinamService):
    return service.register_model_profile(
        ModelProfileCreate(
            name="price-model",
            version="1.0",
            description="needs a",
            features=(FeatureSpec(name="a", dtype="number"),),
        )
    )
