"""MemoRepository Protocol."""

from typing import Protocol

from memopad.domain.entities.memo import Memo, MemoFormData


class MemoRepository(Protocol):
    """メモリポジトリ

    各操作は失敗時に StoreError を送出する。リトライは行わない。
    """

    async def list(self) -> list[Memo]:
        """全メモを取得

        作成日時降順（新しい順）でソート。

        Returns:
            メモのリスト（空の場合は空リスト）
        """
        ...

    async def create(self, form: MemoFormData) -> Memo:
        """メモを作成

        Args:
            form: 作成するメモの内容

        Returns:
            ストアが採番した ID とタイムスタンプを持つメモ
        """
        ...

    async def update(self, memo_id: str, form: MemoFormData) -> Memo:
        """メモを更新

        updated_at はストア側で更新される。

        Args:
            memo_id: 更新するメモの ID
            form: 新しい内容

        Returns:
            更新後のメモ

        Raises:
            MemoNotFoundError: 該当するメモが存在しない場合
        """
        ...

    async def delete(self, memo_id: str) -> None:
        """メモを削除

        存在しない ID の削除はエラーにならない。

        Args:
            memo_id: 削除するメモの ID
        """
        ...
