"""Persistence-related exceptions."""


class PersistenceError(Exception):
    """Base exception for persistence-related errors."""


class StoreError(PersistenceError):
    """Table store request error (network, constraint, missing row)."""


class MemoNotFoundError(StoreError):
    """No memo row matched the requested id."""

    def __init__(self, memo_id: str) -> None:
        self.memo_id = memo_id
        super().__init__(f"Memo {memo_id} not found")


class MappingError(StoreError):
    """A row returned by the store could not be mapped to a Memo."""
