"""Tests for Memo entity."""

from datetime import datetime, timedelta, timezone

import pytest

from memopad.domain.entities.memo import (
    DEFAULT_CATEGORIES,
    MEMO_CATEGORIES,
    Memo,
    MemoFormData,
    category_color,
    category_label,
)
from memopad.domain.exceptions import ValidationError


class TestMemo:
    """Tests for Memo entity."""

    @pytest.fixture
    def now(self) -> datetime:
        """Create a fixed current time for testing."""
        return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    @pytest.fixture
    def sample_memo(self, now: datetime) -> Memo:
        """Create a sample Memo instance."""
        return Memo(
            id="1",
            title="Groceries",
            content="milk",
            category="personal",
            tags=["home"],
            created_at=now,
            updated_at=now,
        )

    def test_create_with_valid_params(self, sample_memo: Memo, now: datetime) -> None:
        """Test creating Memo with valid parameters."""
        assert sample_memo.id == "1"
        assert sample_memo.title == "Groceries"
        assert sample_memo.content == "milk"
        assert sample_memo.category == "personal"
        assert sample_memo.tags == ["home"]
        assert sample_memo.created_at == now
        assert sample_memo.updated_at == now

    def test_updated_before_created_raises(self, now: datetime) -> None:
        """Test that updated_at earlier than created_at is rejected."""
        with pytest.raises(ValueError, match="updated_at"):
            Memo(
                id="1",
                title="t",
                content="c",
                category="work",
                tags=[],
                created_at=now,
                updated_at=now - timedelta(seconds=1),
            )

    def test_empty_id_raises(self, now: datetime) -> None:
        """Test that an empty id is rejected."""
        with pytest.raises(ValueError, match="id"):
            Memo(
                id="",
                title="t",
                content="c",
                category="work",
                tags=[],
                created_at=now,
                updated_at=now,
            )

    def test_is_immutable(self, sample_memo: Memo) -> None:
        """Test that Memo is frozen."""
        with pytest.raises(AttributeError):
            sample_memo.title = "changed"  # type: ignore[misc]

    def test_is_not_hashable(self, sample_memo: Memo) -> None:
        """Test that Memo declares itself unhashable but keeps equality."""
        assert Memo.__hash__ is None
        with pytest.raises(TypeError):
            hash(sample_memo)
        assert sample_memo == Memo(**vars(sample_memo))

    def test_category_label_property(self, sample_memo: Memo) -> None:
        """Test category label of a known category."""
        assert sample_memo.category_label == "Personal"


class TestCategories:
    """Tests for category helpers."""

    def test_default_categories_order(self) -> None:
        """Test display order of categories."""
        assert DEFAULT_CATEGORIES == ("personal", "work", "study", "idea", "other")

    def test_every_category_has_label(self) -> None:
        """Test that every category has a display label."""
        assert set(MEMO_CATEGORIES) == set(DEFAULT_CATEGORIES)

    def test_unknown_category_falls_back_to_other(self) -> None:
        """Test that unknown categories use the other label and color."""
        assert category_label("groceries") == MEMO_CATEGORIES["other"]
        assert category_color("groceries") == "gray"

    def test_known_category_color(self) -> None:
        """Test color of a known category."""
        assert category_color("work") == "green"


class TestMemoFormData:
    """Tests for MemoFormData."""

    def test_defaults(self) -> None:
        """Test default form values."""
        form = MemoFormData()

        assert form.title == ""
        assert form.content == ""
        assert form.category == "personal"
        assert form.tags == []

    def test_from_memo_copies_tags(self) -> None:
        """Test that from_memo does not alias the memo's tag list."""
        now = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
        memo = Memo(
            id="1",
            title="Groceries",
            content="milk",
            category="personal",
            tags=["home"],
            created_at=now,
            updated_at=now,
        )

        form = MemoFormData.from_memo(memo)
        form.tags.append("urgent")

        assert form.title == "Groceries"
        assert memo.tags == ["home"]

    def test_validate_accepts_filled_form(self) -> None:
        """Test validation of a complete form."""
        MemoFormData(title="t", content="c").validate()

    @pytest.mark.parametrize(
        ("title", "content"),
        [("   ", "body"), ("title", "\n\t "), ("", "")],
    )
    def test_validate_rejects_blank_fields(self, title: str, content: str) -> None:
        """Test that blank title or content raises ValidationError."""
        with pytest.raises(ValidationError):
            MemoFormData(title=title, content=content).validate()
