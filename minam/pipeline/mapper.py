"""Project dataset rows onto a model profile's declared features."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Sequence

from minam.models import FeatureSpec


def map_row(row: Any, feature_names: Sequence[str]) -> Dict[str, Any]:
    """Return one mapped row holding exactly the declared feature keys.

    Missing fields map to None. Rows that are not JSON objects are treated
    as empty records. A repeated feature name writes the same key twice,
    so the later declaration wins.
    """
    source: Mapping[str, Any] = row if isinstance(row, Mapping) else {}
    mapped: Dict[str, Any] = {}
    for name in feature_names:
        mapped[name] = source.get(name)
    return mapped


def map_rows(
    rows: Iterable[Any], features: Sequence[FeatureSpec]
) -> List[Dict[str, Any]]:
    """Map every row in order; the output has one entry per input row."""
    names = [feature.name for feature in features]
    return [map_row(row, names) for row in rows]
