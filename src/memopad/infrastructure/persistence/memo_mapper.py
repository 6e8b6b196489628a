"""Translation between stored memo rows, Memo entities and JSON payloads.

Rows come from the ``memos`` table (snake_case timestamps) and JSON payloads
go to browsers (camelCase timestamps). Nothing outside this module reads
either shape directly.
"""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from memopad.domain.entities.memo import Memo, MemoCategory, MemoFormData
from memopad.domain.exceptions import ValidationError
from memopad.infrastructure.persistence.datetime_utils import parse_datetime
from memopad.infrastructure.persistence.exceptions import MappingError

_REQUIRED_ROW_FIELDS = ("id", "title", "content", "created_at")


def _parse_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise MappingError(f"Malformed tags value: {value!r}") from e
    if not isinstance(value, (list, tuple)):
        raise MappingError(f"Tags must be a list, got {type(value).__name__}")
    return [str(tag) for tag in value]


def _parse_timestamp(value: Any, field_name: str) -> datetime:
    if not isinstance(value, (str, datetime)):
        raise MappingError(f"Field '{field_name}' is not a timestamp: {value!r}")
    try:
        return parse_datetime(value)
    except ValueError as e:
        raise MappingError(f"Field '{field_name}' is not a timestamp: {value!r}") from e


def row_to_memo(row: Mapping[str, Any]) -> Memo:
    """Map a stored row to a Memo entity.

    Missing ``tags`` become ``[]``, a missing ``category`` becomes ``other``
    and a missing ``updated_at`` falls back to ``created_at``.

    Args:
        row: Row mapping as returned by the store.

    Returns:
        Memo entity.

    Raises:
        MappingError: A required field is missing or malformed.
    """
    for field_name in _REQUIRED_ROW_FIELDS:
        if row.get(field_name) is None:
            raise MappingError(f"Memo row is missing required field '{field_name}'")

    created_at = _parse_timestamp(row["created_at"], "created_at")
    updated_raw = row.get("updated_at")
    updated_at = (
        created_at if updated_raw is None else _parse_timestamp(updated_raw, "updated_at")
    )

    try:
        return Memo(
            id=str(row["id"]),
            title=str(row["title"]),
            content=str(row["content"]),
            category=str(row.get("category") or MemoCategory.OTHER.value),
            tags=_parse_tags(row.get("tags")),
            created_at=created_at,
            updated_at=updated_at,
        )
    except ValueError as e:
        raise MappingError(str(e)) from e


def form_to_row(form: MemoFormData) -> dict[str, Any]:
    """Build the writable column values for a memo row."""
    return {
        "title": form.title,
        "content": form.content,
        "category": form.category,
        "tags": list(form.tags or []),
    }


def memo_to_payload(memo: Memo) -> dict[str, Any]:
    """Serialize a Memo to its camelCase JSON shape."""
    return {
        "id": memo.id,
        "title": memo.title,
        "content": memo.content,
        "category": memo.category,
        "tags": list(memo.tags),
        "createdAt": memo.created_at.isoformat(),
        "updatedAt": memo.updated_at.isoformat(),
    }


def payload_to_form(payload: Any) -> MemoFormData:
    """Read a ``{title, content, category, tags?}`` JSON body.

    Args:
        payload: Decoded JSON body.

    Returns:
        MemoFormData with ``tags`` defaulted to ``[]``.

    Raises:
        ValidationError: The body is not an object or a field has the wrong type.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: dict[str, str] = {}
    for field_name in ("title", "content", "category"):
        value = payload.get(field_name)
        if not isinstance(value, str):
            raise ValidationError(f"Field '{field_name}' must be a string")
        values[field_name] = value

    tags = payload.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ValidationError("Field 'tags' must be a list of strings")

    return MemoFormData(tags=list(tags), **values)
