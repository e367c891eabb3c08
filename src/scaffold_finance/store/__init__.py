"""Record store collaborators."""

from scaffold_finance.store.base import (
    ProjectNotFoundError,
    RecordStore,
    StoreError,
    StoreQueryError,
    StoreWriteError,
)
from scaffold_finance.store.sql import SqlRecordStore

__all__ = [
    "ProjectNotFoundError",
    "RecordStore",
    "StoreError",
    "StoreQueryError",
    "StoreWriteError",
    "SqlRecordStore",
]
