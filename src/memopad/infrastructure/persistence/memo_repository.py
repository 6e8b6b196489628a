"""SQL implementation of MemoRepository."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from memopad.domain.entities.memo import Memo, MemoFormData
from memopad.infrastructure.persistence.exceptions import MemoNotFoundError, StoreError
from memopad.infrastructure.persistence.memo_mapper import form_to_row, row_to_memo
from memopad.infrastructure.persistence.models import MemoModel

logger = logging.getLogger(__name__)


class SQLMemoRepository:
    """SQL 版 MemoRepository 実装

    メモの CRUD 操作を memos テーブルに対して行う。
    各操作はセッションを一つ開き、リクエストを一回発行して結果を変換する。
    ストアのエラーは発生箇所でログ出力し、StoreError として再送出する。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def list(self) -> list[Memo]:
        """全メモを取得

        作成日時降順でソート。

        Returns:
            メモのリスト
        """
        try:
            async with self._session_factory() as session:
                stmt = select(MemoModel).order_by(
                    MemoModel.created_at.desc()  # type: ignore[attr-defined]
                )
                result = await session.exec(stmt)
                return [self._to_entity(row) for row in result.all()]
        except StoreError as e:
            logger.error("Error fetching memos: %s", e)
            raise
        except SQLAlchemyError as e:
            logger.error("Error fetching memos: %s", e)
            raise StoreError(f"Failed to fetch memos: {e}") from e

    async def create(self, form: MemoFormData) -> Memo:
        """メモを作成

        Args:
            form: 作成するメモの内容（tags 省略時は空リスト）

        Returns:
            作成されたメモ
        """
        try:
            async with self._session_factory() as session:
                model = MemoModel(**form_to_row(form))
                session.add(model)
                await session.commit()
                await session.refresh(model)
                return self._to_entity(model)
        except StoreError as e:
            logger.error("Error creating memo: %s", e)
            raise
        except SQLAlchemyError as e:
            logger.error("Error creating memo: %s", e)
            raise StoreError(f"Failed to create memo: {e}") from e

    async def update(self, memo_id: str, form: MemoFormData) -> Memo:
        """メモを更新

        updated_at はカラムの onupdate により更新される。

        Args:
            memo_id: 更新するメモの ID
            form: 新しい内容

        Returns:
            更新後のメモ

        Raises:
            MemoNotFoundError: 該当するメモが存在しない場合
        """
        try:
            async with self._session_factory() as session:
                stmt = (
                    update(MemoModel)
                    .where(MemoModel.id == memo_id)  # type: ignore[arg-type]
                    .values(**form_to_row(form))
                )
                result = await session.execute(stmt)
                if result.rowcount != 1:  # type: ignore[attr-defined]
                    await session.rollback()
                    raise MemoNotFoundError(memo_id)
                await session.commit()

                model = await session.get(MemoModel, memo_id)
                if model is None:
                    raise MemoNotFoundError(memo_id)
                return self._to_entity(model)
        except StoreError as e:
            logger.error("Error updating memo: %s", e)
            raise
        except SQLAlchemyError as e:
            logger.error("Error updating memo: %s", e)
            raise StoreError(f"Failed to update memo {memo_id}: {e}") from e

    async def delete(self, memo_id: str) -> None:
        """メモを削除

        存在しない ID の削除は何もしない。

        Args:
            memo_id: 削除するメモの ID
        """
        try:
            async with self._session_factory() as session:
                stmt = delete(MemoModel).where(
                    MemoModel.id == memo_id  # type: ignore[arg-type]
                )
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Error deleting memo: %s", e)
            raise StoreError(f"Failed to delete memo {memo_id}: {e}") from e

        if result.rowcount == 0:  # type: ignore[attr-defined]
            logger.debug("Delete matched no memo with id %s", memo_id)

    @staticmethod
    def _to_entity(model: MemoModel) -> Memo:
        """MemoModel を Memo エンティティに変換"""
        return row_to_memo(model.model_dump())
