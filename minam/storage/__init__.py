"""Storage layer abstractions and adapters."""

from .base import Table
from .memory import InMemoryTable, RecordStore, new_record_id

__all__ = [
    "Table",
    "InMemoryTable",
    "RecordStore",
    "new_record_id",
]
