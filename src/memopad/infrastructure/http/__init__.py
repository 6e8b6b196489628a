"""HTTP infrastructure."""

from memopad.infrastructure.http.memo_server import MemoServer

__all__ = ["MemoServer"]
