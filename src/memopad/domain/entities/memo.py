"""Memo entity and editable form data."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from memopad.domain.exceptions import ValidationError


class MemoCategory(str, Enum):
    """メモのカテゴリ"""

    PERSONAL = "personal"
    WORK = "work"
    STUDY = "study"
    IDEA = "idea"
    OTHER = "other"


MEMO_CATEGORIES: dict[str, str] = {
    MemoCategory.PERSONAL.value: "Personal",
    MemoCategory.WORK.value: "Work",
    MemoCategory.STUDY.value: "Study",
    MemoCategory.IDEA.value: "Idea",
    MemoCategory.OTHER.value: "Other",
}

DEFAULT_CATEGORIES: tuple[str, ...] = tuple(category.value for category in MemoCategory)

_CATEGORY_COLORS: dict[str, str] = {
    MemoCategory.PERSONAL.value: "blue",
    MemoCategory.WORK.value: "green",
    MemoCategory.STUDY.value: "purple",
    MemoCategory.IDEA.value: "yellow",
    MemoCategory.OTHER.value: "gray",
}


def category_label(category: str) -> str:
    """カテゴリの表示ラベルを取得する

    未知のカテゴリは other のラベルになる。

    Args:
        category: カテゴリ値

    Returns:
        表示ラベル
    """
    return MEMO_CATEGORIES.get(category, MEMO_CATEGORIES[MemoCategory.OTHER.value])


def category_color(category: str) -> str:
    """カテゴリの表示色を取得する（未知のカテゴリは gray）"""
    return _CATEGORY_COLORS.get(category, _CATEGORY_COLORS[MemoCategory.OTHER.value])


@dataclass(frozen=True)
class Memo:
    """メモエンティティ

    Attributes:
        id: メモの一意識別子（ストアが採番）
        title: タイトル
        content: マークダウン形式の本文
        category: カテゴリ（ストア上は自由文字列）
        tags: タグリスト（挿入順を保持）
        created_at: 作成日時
        updated_at: 更新日時
    """

    id: str
    title: str
    content: str
    category: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    # tags はリストのためハッシュ不可
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        """バリデーション"""
        if not self.id:
            raise ValueError("Memo id cannot be empty")
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")

    @property
    def category_label(self) -> str:
        """カテゴリの表示ラベル"""
        return category_label(self.category)


@dataclass
class MemoFormData:
    """メモ編集フォームのデータ

    id とタイムスタンプを持たない、編集中の一時的なコピー。

    Attributes:
        title: タイトル
        content: 本文
        category: カテゴリ
        tags: タグリスト
    """

    title: str = ""
    content: str = ""
    category: str = MemoCategory.PERSONAL.value
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_memo(cls, memo: Memo) -> "MemoFormData":
        """Memo の編集可能フィールドからフォームデータを生成する

        Args:
            memo: コピー元のメモ

        Returns:
            MemoFormData（tags は複製される）
        """
        return cls(
            title=memo.title,
            content=memo.content,
            category=memo.category,
            tags=list(memo.tags),
        )

    def validate(self) -> None:
        """保存前のバリデーション

        Raises:
            ValidationError: タイトルまたは本文が空白のみの場合
        """
        if not self.title.strip() or not self.content.strip():
            raise ValidationError("Please enter both a title and content.")
