"""Map -> evaluate -> propose -> publish."""

from .evaluator import coverage_passes, evaluate_coverage, feature_coverage
from .mapper import map_row, map_rows
from .proposals import build_proposal, run_pipeline
from .publish import publish_proposal
from .results import ErrorCategory, ErrorCode, PipelineOutcome, PublishOutcome

__all__ = [
    "coverage_passes",
    "evaluate_coverage",
    "feature_coverage",
    "map_row",
    "map_rows",
    "build_proposal",
    "run_pipeline",
    "publish_proposal",
    "ErrorCategory",
    "ErrorCode",
    "PipelineOutcome",
    "PublishOutcome",
]
