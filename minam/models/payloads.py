"""Validated request payloads accepted by the registry service."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from minam.config import DEFAULT_MIN_COVERAGE

from .entities import FeatureSpec

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_record_id(value: Any, field_name: str) -> str:
    """Ensure ``value`` is a UUID string and return it normalised."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} is required.")
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError as exc:
        raise ValueError(f"{field_name} '{value}' is not a valid UUID.") from exc


def validate_email(value: str) -> str:
    if not EMAIL_REGEX.match(value):
        raise ValueError(f"contact_email '{value}' is not a valid e-mail address.")
    return value


def validate_min_coverage(value: Any) -> float:
    """Coerce ``value`` to a threshold in [0.0, 1.0]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("min_coverage must be a number.")
    threshold = float(value)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("min_coverage must be between 0 and 1.")
    return threshold


def _require_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{key} is required and must be a string.")
    return value


def _optional_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string.")
    return value


def _require_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValueError("Request body must be a JSON object.")
    return payload


@dataclass(frozen=True)
class ProviderCreate:
    name: str
    contact_email: str

    def __post_init__(self) -> None:
        validate_email(self.contact_email)

    @classmethod
    def from_mapping(cls, payload: Any) -> "ProviderCreate":
        body = _require_mapping(payload)
        return cls(
            name=_require_str(body, "name"),
            contact_email=_require_str(body, "contact_email"),
        )


def parse_features(raw: Any) -> Tuple[FeatureSpec, ...]:
    """Parse a list of ``{"name", "dtype"}`` objects, keeping order."""
    if not isinstance(raw, list):
        raise ValueError("features must be an array.")
    features = []
    for index, item in enumerate(raw):
        if not isinstance(item, Mapping):
            raise ValueError(f"features[{index}] must be an object.")
        name = item.get("name")
        dtype = item.get("dtype")
        if not isinstance(name, str) or not isinstance(dtype, str):
            raise ValueError(
                f"features[{index}] requires string 'name' and 'dtype'."
            )
        features.append(FeatureSpec(name=name, dtype=dtype))
    return tuple(features)


@dataclass(frozen=True)
class ModelProfileCreate:
    name: str
    version: str
    description: str
    features: Tuple[FeatureSpec, ...]

    @classmethod
    def from_mapping(cls, payload: Any) -> "ModelProfileCreate":
        body = _require_mapping(payload)
        return cls(
            name=_require_str(body, "name"),
            version=_require_str(body, "version"),
            description=_optional_str(body, "description"),
            features=parse_features(body.get("features", [])),
        )


@dataclass(frozen=True)
class DatasetCreate:
    provider_id: str
    name: str
    description: str
    rows: Tuple[Any, ...]

    @classmethod
    def from_mapping(cls, payload: Any) -> "DatasetCreate":
        body = _require_mapping(payload)
        rows = body.get("rows", [])
        if not isinstance(rows, list):
            raise ValueError("rows must be an array.")
        return cls(
            provider_id=validate_record_id(body.get("provider_id"), "provider_id"),
            name=_require_str(body, "name"),
            description=_optional_str(body, "description"),
            rows=tuple(rows),
        )


@dataclass(frozen=True)
class PipelineRunRequest:
    dataset_id: str
    model_profile_id: str
    min_coverage: float = DEFAULT_MIN_COVERAGE

    @classmethod
    def from_mapping(cls, payload: Any) -> "PipelineRunRequest":
        body = _require_mapping(payload)
        raw_threshold = body.get("min_coverage")
        threshold = (
            DEFAULT_MIN_COVERAGE
            if raw_threshold is None
            else validate_min_coverage(raw_threshold)
        )
        return cls(
            dataset_id=validate_record_id(body.get("dataset_id"), "dataset_id"),
            model_profile_id=validate_record_id(
                body.get("model_profile_id"), "model_profile_id"
            ),
            min_coverage=threshold,
        )


@dataclass(frozen=True)
class PublishRequest:
    """Publish request; the approval note is checked by the publish gate."""

    proposal_id: str
    provider_id: str
    name: str
    pricing: str
    human_approval_note: str

    @classmethod
    def from_mapping(cls, payload: Any) -> "PublishRequest":
        body = _require_mapping(payload)
        return cls(
            proposal_id=validate_record_id(body.get("proposal_id"), "proposal_id"),
            provider_id=validate_record_id(body.get("provider_id"), "provider_id"),
            name=_require_str(body, "name"),
            pricing=_require_str(body, "pricing"),
            human_approval_note=_optional_str(body, "human_approval_note"),
        )


@dataclass(frozen=True)
class AnalyzeRequest:
    file_id: str
    model: Optional[str] = None

    @classmethod
    def from_mapping(cls, payload: Any) -> "AnalyzeRequest":
        body = _require_mapping(payload)
        model = body.get("model")
        if model is not None and not isinstance(model, str):
            raise ValueError("model must be a string.")
        return cls(
            file_id=validate_record_id(body.get("file_id"), "file_id"),
            model=model or None,
        )
