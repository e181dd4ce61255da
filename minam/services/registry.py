"""
Minam Repository
Introductory remarks: This module is part of the Minam codebase.

Service facade exposing every registry operation to the HTTP layer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from minam.config import DATASET_PREVIEW_SIZE
from minam.models import (ApiProduct, Dataset, DatasetCreate, FileRecord,
                          ModelProfile, ModelProfileCreate, Proposal,
                          Provider, ProviderCreate, PublishRequest)
from minam.pipeline import (PipelineOutcome, PublishOutcome,
                            publish_proposal, run_pipeline)
from minam.storage import RecordStore, new_record_id

from .query import ProductQuery, filter_rows

logger = logging.getLogger(__name__)


class MinamService:
    """Stateless operations over a shared :class:`RecordStore`.

    Safe to call from many request threads at once; all shared state
    lives in the store's tables.
    """

    def __init__(self, store: Optional[RecordStore] = None) -> None:
        self.store = store or RecordStore()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_provider(self, request: ProviderCreate) -> Provider:
        provider = Provider(
            id=new_record_id(),
            name=request.name,
            contact_email=request.contact_email,
        )
        self.store.providers.insert(provider.id, provider)
        logger.info("Registered provider %s", provider.id)
        return provider

    def register_model_profile(self, request: ModelProfileCreate) -> ModelProfile:
        profile = ModelProfile(
            id=new_record_id(),
            name=request.name,
            version=request.version,
            description=request.description,
            features=tuple(request.features),
        )
        self.store.models.insert(profile.id, profile)
        logger.info(
            "Registered model profile %s with %d features",
            profile.id,
            len(profile.features),
        )
        return profile

    def register_dataset(self, request: DatasetCreate) -> Dataset:
        dataset = Dataset(
            id=new_record_id(),
            provider_id=request.provider_id,
            name=request.name,
            description=request.description,
            rows=tuple(request.rows),
        )
        self.store.datasets.insert(dataset.id, dataset)
        logger.info(
            "Registered dataset %s (%d rows)", dataset.id, len(dataset.rows)
        )
        return dataset

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------
    def list_providers(self) -> List[Provider]:
        return self.store.providers.list()

    def list_model_profiles(self) -> List[ModelProfile]:
        return self.store.models.list()

    def list_datasets(self) -> List[Dataset]:
        return self.store.datasets.list()

    def list_proposals(self) -> List[Proposal]:
        return self.store.proposals.list()

    def list_products(self) -> List[ApiProduct]:
        return self.store.apis.list()

    def get_proposal(self, proposal_id: str) -> Optional[Proposal]:
        return self.store.proposals.get(proposal_id)

    def preview_dataset(self, dataset_id: str) -> List[Any]:
        """First rows of a dataset; unknown ids yield an empty list."""
        dataset = self.store.datasets.get(dataset_id)
        if dataset is None:
            return []
        return list(dataset.rows[:DATASET_PREVIEW_SIZE])

    # ------------------------------------------------------------------
    # Pipeline and publishing
    # ------------------------------------------------------------------
    def run_pipeline(
        self, dataset_id: str, model_profile_id: str, min_coverage: float
    ) -> PipelineOutcome:
        return run_pipeline(self.store, dataset_id, model_profile_id, min_coverage)

    def publish(self, request: PublishRequest) -> PublishOutcome:
        return publish_proposal(self.store, request)

    def query_product(self, api_id: str, query: ProductQuery) -> List[Any]:
        """Resolve a product to its dataset and return filtered rows.

        An unknown product, or a product whose dataset is missing, yields
        an empty list.
        """
        product = self.store.apis.get(api_id)
        if product is None:
            return []
        dataset = self.store.datasets.get(product.dataset_id)
        if dataset is None:
            logger.warning(
                "Product %s references missing dataset %s",
                api_id,
                product.dataset_id,
            )
            return []
        return filter_rows(dataset.rows, query)

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------
    def store_file(self, filename: str, file_type: str, content: bytes) -> FileRecord:
        record = FileRecord(
            id=new_record_id(),
            filename=filename,
            file_size=len(content),
            file_type=file_type,
            uploaded_at=datetime.now(timezone.utc),
            content=content,
        )
        self.store.files.insert(record.id, record)
        logger.info("Stored upload %s (%s, %d bytes)", record.id, filename, len(content))
        return record

    def get_file(self, file_id: str) -> Optional[FileRecord]:
        return self.store.files.get(file_id)
