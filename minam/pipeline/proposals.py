"""Dataset + model profile -> evaluated proposal."""

from __future__ import annotations

import logging

from minam.config import PROPOSAL_SAMPLE_SIZE
from minam.models import Dataset, ModelProfile, Proposal
from minam.storage import RecordStore, new_record_id

from .evaluator import coverage_passes, evaluate_coverage
from .mapper import map_rows
from .results import ErrorCode, PipelineOutcome

logger = logging.getLogger(__name__)


def build_proposal(
    dataset: Dataset, profile: ModelProfile, min_coverage: float
) -> Proposal:
    """Map, evaluate and package a proposal without touching the store."""
    mapped = map_rows(dataset.rows, profile.features)
    coverage = evaluate_coverage(mapped, profile.features)
    return Proposal(
        dataset_id=dataset.id,
        model_profile_id=profile.id,
        sample=tuple(mapped[:PROPOSAL_SAMPLE_SIZE]),
        coverage=tuple(coverage),
        passed=coverage_passes(coverage, min_coverage),
        human_note_required=True,
    )


def run_pipeline(
    store: RecordStore,
    dataset_id: str,
    model_profile_id: str,
    min_coverage: float,
) -> PipelineOutcome:
    """Resolve inputs, build a proposal and store it under a fresh id.

    The dataset is resolved before the model profile, so when both are
    missing only DATASET_NOT_FOUND is reported. Nothing is written on
    failure.
    """
    dataset = store.datasets.get(dataset_id)
    if dataset is None:
        logger.info("Pipeline rejected: dataset %s not found", dataset_id)
        return PipelineOutcome.failure(ErrorCode.DATASET_NOT_FOUND)
    profile = store.models.get(model_profile_id)
    if profile is None:
        logger.info(
            "Pipeline rejected: model profile %s not found", model_profile_id
        )
        return PipelineOutcome.failure(ErrorCode.MODEL_PROFILE_NOT_FOUND)

    proposal = build_proposal(dataset, profile, min_coverage)
    proposal_id = new_record_id()
    store.proposals.insert(proposal_id, proposal)
    logger.info(
        "Stored proposal %s for dataset=%s profile=%s pass=%s",
        proposal_id,
        dataset_id,
        model_profile_id,
        proposal.passed,
    )
    return PipelineOutcome.ok(proposal_id, proposal)
