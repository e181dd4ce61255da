"""Closed set of pipeline outcomes returned as values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from minam.models import ApiProduct, Proposal


class ErrorCategory(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    POLICY_REJECTED = "POLICY_REJECTED"


class ErrorCode(str, Enum):
    """Named failure outcomes of the pipeline and publish gate."""

    DATASET_NOT_FOUND = "DATASET_NOT_FOUND"
    MODEL_PROFILE_NOT_FOUND = "MODEL_PROFILE_NOT_FOUND"
    PROPOSAL_NOT_FOUND = "PROPOSAL_NOT_FOUND"
    HUMAN_NOTE_REQUIRED = "HUMAN_NOTE_REQUIRED"
    EVALS_NOT_PASSED = "EVALS_NOT_PASSED"

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self]


_CATEGORIES = {
    ErrorCode.DATASET_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorCode.MODEL_PROFILE_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorCode.PROPOSAL_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorCode.HUMAN_NOTE_REQUIRED: ErrorCategory.VALIDATION_FAILED,
    ErrorCode.EVALS_NOT_PASSED: ErrorCategory.POLICY_REJECTED,
}


@dataclass(frozen=True)
class PipelineOutcome:
    """Either a stored proposal with its id, or the error that stopped it."""

    proposal_id: Optional[str] = None
    proposal: Optional[Proposal] = None
    error: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, proposal_id: str, proposal: Proposal) -> "PipelineOutcome":
        return cls(proposal_id=proposal_id, proposal=proposal)

    @classmethod
    def failure(cls, error: ErrorCode) -> "PipelineOutcome":
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "result": self.proposal.to_dict() if self.proposal else None,
            "error": self.error.value if self.error else None,
        }


@dataclass(frozen=True)
class PublishOutcome:
    """Either the published product or the gate check that failed."""

    product: Optional[ApiProduct] = None
    error: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, product: ApiProduct) -> "PublishOutcome":
        return cls(product=product)

    @classmethod
    def failure(cls, error: ErrorCode) -> "PublishOutcome":
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None
