"""Flat link records and their storage representation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from link_tree.errors import RecordValidationError


@dataclass(frozen=True)
class FlatRecord:
    name: str
    url: str | None = None
    parent_name: str | None = None

    @property
    def is_root_level(self) -> bool:
        return not self.parent_name


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def record_from_dict(data: dict[str, Any]) -> FlatRecord:
    """Parse one stored record. Accepts ``parent`` or ``parentName`` keys."""
    if not isinstance(data, dict):
        raise RecordValidationError(f"Record must be an object, got {type(data).__name__}")
    name = data.get("name")
    if not isinstance(name, str):
        raise RecordValidationError(f"Record name must be a string: {data!r}")
    parent = data.get("parent") or data.get("parentName")
    return FlatRecord(
        name=name,
        url=_optional_text(data.get("url")),
        parent_name=_optional_text(parent),
    )


def record_to_dict(record: FlatRecord) -> dict[str, str]:
    """Serialize one record with only its flat fields."""
    data = {"name": record.name}
    if record.url:
        data["url"] = record.url
    if record.parent_name:
        data["parent"] = record.parent_name
    return data


def records_from_list(rows: Iterable[dict[str, Any]]) -> list[FlatRecord]:
    return [record_from_dict(row) for row in rows]


def records_to_list(records: Iterable[FlatRecord]) -> list[dict[str, str]]:
    return [record_to_dict(record) for record in records]
