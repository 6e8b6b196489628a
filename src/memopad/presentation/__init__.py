"""Presentation layer."""

from memopad.presentation.memo_modal import MemoViewerModal, ModalState

__all__ = ["MemoViewerModal", "ModalState"]
