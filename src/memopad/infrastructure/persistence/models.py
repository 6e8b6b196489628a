"""SQLModel table definitions."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from memopad.infrastructure.persistence.datetime_utils import utcnow


class MemoModel(SQLModel, table=True):
    """メモテーブル"""

    __tablename__ = "memos"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    content: str
    category: str = Field(index=True)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow}
    )
