"""Memo viewer/editor modal state machine."""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from memopad.domain.entities.memo import Memo, MemoFormData
from memopad.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this memo?"


class ModalState(Enum):
    """Modal display state."""

    CLOSED = "closed"
    VIEWING = "viewing"
    EDITING = "editing"


class MemoViewerModal:
    """Modal that shows a memo and lets the user edit or delete it.

    The modal owns a disposable draft of the memo's editable fields while
    editing. Closing or cancelling discards the draft without asking.
    Store calls are delegated to ``on_update`` and ``on_delete``; their
    errors are logged and re-raised, leaving the modal in its current state.
    """

    def __init__(
        self,
        on_update: Callable[[str, MemoFormData], Awaitable[Memo]],
        on_delete: Callable[[str], Awaitable[None]],
        confirm: Callable[[str], bool],
        notify: Callable[[str], None],
        on_close: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the modal.

        Args:
            on_update: Persists a draft and returns the stored memo.
            on_delete: Deletes a memo by id.
            confirm: Blocking yes/no prompt.
            notify: Shows a user-facing message.
            on_close: Called whenever the modal closes.
        """
        self._on_update = on_update
        self._on_delete = on_delete
        self._confirm = confirm
        self._notify = notify
        self._on_close = on_close

        self._state = ModalState.CLOSED
        self._memo: Memo | None = None
        self._draft = MemoFormData()
        self._tag_input = ""

    @property
    def state(self) -> ModalState:
        return self._state

    @property
    def memo(self) -> Memo | None:
        return self._memo

    @property
    def draft(self) -> MemoFormData:
        return self._draft

    @property
    def tag_input(self) -> str:
        return self._tag_input

    @property
    def is_open(self) -> bool:
        return self._state is not ModalState.CLOSED

    @property
    def is_editing(self) -> bool:
        return self._state is ModalState.EDITING

    def _require_editing(self) -> Memo:
        if self._state is not ModalState.EDITING or self._memo is None:
            raise RuntimeError("Modal is not in editing state")
        return self._memo

    def _reset_draft(self) -> None:
        if self._memo is not None:
            self._draft = MemoFormData.from_memo(self._memo)
        self._tag_input = ""

    # Open / close

    def open(self, memo: Memo | None) -> None:
        """Show a memo in the read view. Ignored when ``memo`` is None."""
        if memo is None:
            return
        self._memo = memo
        self._reset_draft()
        self._state = ModalState.VIEWING

    def close(self) -> None:
        """Close the modal, silently discarding any unsaved draft."""
        if self._state is ModalState.CLOSED:
            return
        if self._state is ModalState.EDITING and self._memo is not None:
            logger.debug("Discarding unsaved draft for memo %s", self._memo.id)
        self._state = ModalState.CLOSED
        self._reset_draft()
        if self._on_close is not None:
            self._on_close()

    def handle_key(self, key: str) -> None:
        """Close on Escape while open."""
        if key == "Escape" and self.is_open:
            self.close()

    def handle_background_click(self, is_background: bool) -> None:
        """Close when the click landed on the backdrop rather than the content."""
        if is_background and self.is_open:
            self.close()

    # View / edit

    def start_edit(self) -> None:
        """Switch from the read view to the edit view."""
        if self._state is not ModalState.VIEWING:
            raise RuntimeError("Modal is not in viewing state")
        self._reset_draft()
        self._state = ModalState.EDITING

    def cancel_edit(self) -> None:
        """Drop the draft and return to the read view."""
        self._require_editing()
        self._reset_draft()
        self._state = ModalState.VIEWING

    def set_title(self, title: str) -> None:
        self._require_editing()
        self._draft.title = title

    def set_content(self, content: str | None) -> None:
        self._require_editing()
        self._draft.content = content or ""

    def set_category(self, category: str) -> None:
        self._require_editing()
        self._draft.category = category

    # Tags

    def set_tag_input(self, value: str) -> None:
        self._require_editing()
        self._tag_input = value

    def add_tag(self) -> None:
        """Append the trimmed tag input unless it is empty or already present."""
        self._require_editing()
        tag = self._tag_input.strip()
        if not tag or tag in self._draft.tags:
            return
        self._draft.tags = [*self._draft.tags, tag]
        self._tag_input = ""

    def handle_tag_key(self, key: str) -> None:
        """Enter in the tag input adds the tag."""
        if key == "Enter":
            self.add_tag()

    def remove_tag(self, tag: str) -> None:
        self._require_editing()
        self._draft.tags = [t for t in self._draft.tags if t != tag]

    # Store actions

    async def save(self) -> bool:
        """Persist the draft.

        Returns:
            True if saved, False if validation blocked the save.

        Raises:
            Exception: Whatever ``on_update`` raised. The modal stays in the
                edit view with the draft intact.
        """
        memo = self._require_editing()
        try:
            self._draft.validate()
        except ValidationError as e:
            self._notify(str(e))
            return False

        form = MemoFormData(
            title=self._draft.title,
            content=self._draft.content,
            category=self._draft.category,
            tags=list(self._draft.tags),
        )
        try:
            updated = await self._on_update(memo.id, form)
        except Exception as e:
            logger.error("Failed to update memo: %s", e)
            raise

        self._memo = updated
        self._reset_draft()
        self._state = ModalState.VIEWING
        return True

    async def delete(self) -> bool:
        """Delete the memo after confirmation.

        Returns:
            True if deleted, False if the user declined.

        Raises:
            Exception: Whatever ``on_delete`` raised. The modal stays open.
        """
        if self._memo is None or not self.is_open:
            return False
        if not self._confirm(DELETE_CONFIRMATION):
            return False

        try:
            await self._on_delete(self._memo.id)
        except Exception as e:
            logger.error("Failed to delete memo: %s", e)
            raise

        self.close()
        return True
