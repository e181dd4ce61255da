"""Publish gate: the only path from a proposal to a live API product."""

from __future__ import annotations

import logging

from minam.config import PRODUCT_STATUS_LIVE, PRODUCT_VERSION
from minam.models import ApiProduct, PublishRequest
from minam.storage import RecordStore, new_record_id

from .results import ErrorCode, PublishOutcome

logger = logging.getLogger(__name__)


def publish_proposal(store: RecordStore, request: PublishRequest) -> PublishOutcome:
    """Apply the gate checks in order and write the product on success.

    1. the proposal must exist
    2. the approval note must be non-empty after trimming
    3. the proposal must have passed evaluation

    Proposals are not consumed, so one proposal may back several products.
    """
    proposal = store.proposals.get(request.proposal_id)
    if proposal is None:
        return _reject(request, ErrorCode.PROPOSAL_NOT_FOUND)
    if not request.human_approval_note.strip():
        return _reject(request, ErrorCode.HUMAN_NOTE_REQUIRED)
    if not proposal.passed:
        return _reject(request, ErrorCode.EVALS_NOT_PASSED)

    product = ApiProduct(
        id=new_record_id(),
        name=request.name,
        pricing=request.pricing,
        provider_id=request.provider_id,
        dataset_id=proposal.dataset_id,
        model_profile_id=proposal.model_profile_id,
        version=PRODUCT_VERSION,
        status=PRODUCT_STATUS_LIVE,
        human_approval_note=request.human_approval_note,
    )
    store.apis.insert(product.id, product)
    logger.info(
        "Published product %s from proposal %s", product.id, request.proposal_id
    )
    return PublishOutcome.ok(product)


def _reject(request: PublishRequest, error: ErrorCode) -> PublishOutcome:
    logger.info("Publish of proposal %s rejected: %s", request.proposal_id, error.value)
    return PublishOutcome.failure(error)
