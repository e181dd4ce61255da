"""Abstract table interface for the record store."""

from __future__ import annotations

from typing import List, Optional, Protocol, TypeVar

V = TypeVar("V")


class Table(Protocol[V]):
    """Concurrency-safe key/value table keyed by entity id."""

    def insert(self, record_id: str, value: V) -> None:
        """Install or overwrite the entry for ``record_id`` atomically."""

    def get(self, record_id: str) -> Optional[V]:
        """Return the stored value, or None when the id is unknown."""

    def list(self) -> List[V]:
        """
        Return a snapshot of every stored value.

        Ordering is implementation-defined; callers must not rely on
        insertion order.
        """
