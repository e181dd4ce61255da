"""Fill-rate statistics over mapped rows."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from minam.models import FeatureCoverage, FeatureSpec


def feature_coverage(mapped_rows: Sequence[Dict[str, Any]], name: str) -> float:
    """Fraction of rows where ``name`` is present and not None.

    Zero rows yield 0.0.
    """
    total = len(mapped_rows)
    if total == 0:
        return 0.0
    filled = sum(1 for row in mapped_rows if row.get(name) is not None)
    return filled / total


def evaluate_coverage(
    mapped_rows: Sequence[Dict[str, Any]], features: Sequence[FeatureSpec]
) -> List[FeatureCoverage]:
    """One coverage entry per declared feature, in declared order."""
    return [
        FeatureCoverage(
            name=feature.name,
            coverage=feature_coverage(mapped_rows, feature.name),
        )
        for feature in features
    ]


def coverage_passes(
    coverage: Sequence[FeatureCoverage], min_coverage: float
) -> bool:
    """True when every feature meets the threshold; empty coverage passes."""
    return all(item.coverage >= min_coverage for item in coverage)
