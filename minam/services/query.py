"""Consumer-side row filtering for published products."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

SYMBOL_FIELD = "symbol"
TIMESTAMP_FIELD = "ts"


def _parse_iso(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware UTC datetime, or None.

    Row values without an offset are read as UTC.
    """
    parsed = _parse_iso(value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class ProductQuery:
    """Optional filters applied to a product's source rows."""

    symbol: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: Optional[int] = None

    @classmethod
    def from_mapping(cls, payload: Any) -> "ProductQuery":
        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise ValueError("Query body must be a JSON object.")

        symbol = payload.get("symbol")
        if symbol is not None and not isinstance(symbol, str):
            raise ValueError("symbol must be a string.")

        bounds = {}
        for key in ("start", "end"):
            raw = payload.get(key)
            if raw is None:
                bounds[key] = None
                continue
            parsed = _parse_iso(raw)
            if parsed is None:
                raise ValueError(f"{key} must be an ISO-8601 timestamp.")
            # Bounds must carry an offset; date-only strings parse as naive.
            if parsed.tzinfo is None:
                raise ValueError(f"{key} must include a UTC offset.")
            bounds[key] = parsed.astimezone(timezone.utc)

        limit = payload.get("limit")
        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
                raise ValueError("limit must be a non-negative integer.")

        return cls(symbol=symbol, start=bounds["start"], end=bounds["end"], limit=limit)

    def matches(self, row: Any) -> bool:
        """Apply the filters to one row.

        Rows that lack the filtered field, or whose timestamp cannot be
        parsed, are kept.
        """
        if not isinstance(row, Mapping):
            return True
        if self.symbol is not None and SYMBOL_FIELD in row:
            if row[SYMBOL_FIELD] != self.symbol:
                return False
        if self.start is not None or self.end is not None:
            ts = parse_timestamp(row.get(TIMESTAMP_FIELD))
            if ts is not None:
                if self.start is not None and ts < self.start:
                    return False
                if self.end is not None and ts > self.end:
                    return False
        return True


def filter_rows(rows: Iterable[Any], query: ProductQuery) -> List[Any]:
    """Return matching rows in dataset order, capped at ``query.limit``."""
    if query.limit == 0:
        return []
    out: List[Any] = []
    for row in rows:
        if not query.matches(row):
            continue
        out.append(row)
        if query.limit is not None and len(out) >= query.limit:
            break
    return out
