"""Domain model package exports."""

from .entities import (ApiProduct, Dataset, FeatureCoverage, FeatureSpec,
                       FileRecord, ModelProfile, Proposal, Provider)
from .payloads import (AnalyzeRequest, DatasetCreate, ModelProfileCreate,
                       PipelineRunRequest, ProviderCreate, PublishRequest,
                       parse_features, validate_email, validate_min_coverage,
                       validate_record_id)

__all__ = [
    "ApiProduct",
    "Dataset",
    "FeatureCoverage",
    "FeatureSpec",
    "FileRecord",
    "ModelProfile",
    "Proposal",
    "Provider",
    "AnalyzeRequest",
    "DatasetCreate",
    "ModelProfileCreate",
    "PipelineRunRequest",
    "ProviderCreate",
    "PublishRequest",
    "parse_features",
    "validate_email",
    "validate_min_coverage",
    "validate_record_id",
]
