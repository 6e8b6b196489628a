"""Persistence infrastructure."""

from memopad.infrastructure.persistence.database import DatabaseManager
from memopad.infrastructure.persistence.exceptions import (
    MappingError,
    MemoNotFoundError,
    PersistenceError,
    StoreError,
)
from memopad.infrastructure.persistence.memo_repository import SQLMemoRepository
from memopad.infrastructure.persistence.models import MemoModel

__all__ = [
    "DatabaseManager",
    "MappingError",
    "MemoModel",
    "MemoNotFoundError",
    "PersistenceError",
    "SQLMemoRepository",
    "StoreError",
]
