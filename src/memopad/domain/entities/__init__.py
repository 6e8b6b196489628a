"""Domain entities."""

from memopad.domain.entities.memo import (
    DEFAULT_CATEGORIES,
    MEMO_CATEGORIES,
    Memo,
    MemoCategory,
    MemoFormData,
    category_color,
    category_label,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "MEMO_CATEGORIES",
    "Memo",
    "MemoCategory",
    "MemoFormData",
    "category_color",
    "category_label",
]
