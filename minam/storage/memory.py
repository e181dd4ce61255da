"""In-memory table implementations backing the registry."""

from __future__ import annotations

import copy
import threading
import uuid
from typing import Dict, Generic, List, Optional, TypeVar

from minam.models import (ApiProduct, Dataset, FileRecord, ModelProfile,
                          Proposal, Provider)

V = TypeVar("V")


def new_record_id() -> str:
    """Return a fresh random identifier for a stored entity."""
    return str(uuid.uuid4())


class InMemoryTable(Generic[V]):
    """Dictionary-backed table guarded by its own lock.

    Values are deep-copied on the way in and on the way out so that no
    caller ever holds a mutable alias into the table.
    """

    def __init__(self, name: str = "table") -> None:
        self.name = name
        self._records: Dict[str, V] = {}
        self._lock = threading.Lock()

    def insert(self, record_id: str, value: V) -> None:
        stored = copy.deepcopy(value)
        with self._lock:
            self._records[record_id] = stored

    def get(self, record_id: str) -> Optional[V]:
        with self._lock:
            value = self._records.get(record_id)
        if value is None:
            return None
        return copy.deepcopy(value)

    def list(self) -> List[V]:
        with self._lock:
            snapshot = list(self._records.values())
        return [copy.deepcopy(value) for value in snapshot]

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return record_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class RecordStore:
    """The five entity tables plus the upload table used by file analysis.

    Each table locks independently; reads spanning two tables are not
    jointly atomic.
    """

    def __init__(self) -> None:
        self.providers: InMemoryTable[Provider] = InMemoryTable("providers")
        self.models: InMemoryTable[ModelProfile] = InMemoryTable("models")
        self.datasets: InMemoryTable[Dataset] = InMemoryTable("datasets")
        self.proposals: InMemoryTable[Proposal] = InMemoryTable("proposals")
        self.apis: InMemoryTable[ApiProduct] = InMemoryTable("apis")
        self.files: InMemoryTable[FileRecord] = InMemoryTable("files")
