"""Domain repositories."""

from memopad.domain.repositories.memo_repository import MemoRepository

__all__ = ["MemoRepository"]
