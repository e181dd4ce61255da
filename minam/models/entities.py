"""
Minam Repository
Introductory remarks: This module is part of the Minam codebase.

Stored entities of the registry and their JSON payload helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class Provider:
    """Data provider that owns datasets."""

    id: str
    name: str
    contact_email: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "contact_email": self.contact_email,
        }


@dataclass(frozen=True)
class FeatureSpec:
    """Named, typed slot a model profile expects to be populated."""

    name: str
    dtype: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "dtype": self.dtype}


@dataclass(frozen=True)
class ModelProfile:
    """Consumer-facing feature schema."""

    id: str
    name: str
    version: str
    description: str
    features: Tuple[FeatureSpec, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "features": [feature.to_dict() for feature in self.features],
        }


@dataclass(frozen=True)
class Dataset:
    """Semi-structured rows registered by a provider.

    ``provider_id`` is a weak reference; the provider may not exist.
    """

    id: str
    provider_id: str
    name: str
    description: str
    rows: Tuple[Any, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "provider_id": self.provider_id,
            "name": self.name,
            "description": self.description,
            "rows": list(self.rows),
        }


@dataclass(frozen=True)
class FeatureCoverage:
    """Fill rate of a single feature across mapped rows."""

    name: str
    coverage: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "coverage": self.coverage}


@dataclass(frozen=True)
class Proposal:
    """Evaluated, not-yet-published result of one pipeline run."""

    dataset_id: str
    model_profile_id: str
    sample: Tuple[Dict[str, Any], ...]
    coverage: Tuple[FeatureCoverage, ...]
    passed: bool
    human_note_required: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dataset_id": self.dataset_id,
            "model_profile_id": self.model_profile_id,
            "sample": [dict(row) for row in self.sample],
            "coverage": [item.to_dict() for item in self.coverage],
            "pass": self.passed,
            "human_note_required": self.human_note_required,
        }


@dataclass(frozen=True)
class ApiProduct:
    """Published, queryable product backed by an approved proposal."""

    id: str
    name: str
    pricing: str
    provider_id: str
    dataset_id: str
    model_profile_id: str
    version: str
    status: str
    human_approval_note: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "pricing": self.pricing,
            "provider_id": self.provider_id,
            "dataset_id": self.dataset_id,
            "model_profile_id": self.model_profile_id,
            "version": self.version,
            "status": self.status,
            "human_approval_note": self.human_approval_note,
        }


@dataclass(frozen=True)
class FileRecord:
    """Uploaded file kept for LLM-assisted analysis."""

    id: str
    filename: str
    file_size: int
    file_type: str
    uploaded_at: datetime
    content: bytes = field(default=b"", repr=False)

    def metadata(self) -> Mapping[str, Any]:
        """Return the descriptive fields handed to file analyzers."""
        return {
            "file_id": self.id,
            "filename": self.filename,
            "file_size": self.file_size,
            "file_type": self.file_type,
            "uploaded_at": self.uploaded_at.isoformat(),
        }
