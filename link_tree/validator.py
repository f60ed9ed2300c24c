"""Entry rules applied before a record joins the collection."""

from __future__ import annotations

import re
from typing import Collection

from link_tree.errors import RecordValidationError
from link_tree.records import FlatRecord


URL_RE = re.compile(
    r"^(https?://)?"
    r"((([a-z\d]([a-z\d-]*[a-z\d])?)\.)+[a-z]{2,}"  # domain name
    r"|((\d{1,3}\.){3}\d{1,3}))"  # or IPv4 address
    r"(:\d+)?(/[-a-z\d%_.~+]*)*"
    r"(\?[;&a-z\d%_.~+=-]*)?"
    r"(#[-a-z\d_]*)?$",
    re.IGNORECASE,
)


def is_valid_url(url: str) -> bool:
    return URL_RE.match(url) is not None


def validate_new_record(
    name: str,
    url: str | None,
    parent: str | None,
    existing_names: Collection[str],
) -> FlatRecord:
    """Check a candidate record against the current names and normalize it.

    Raises RecordValidationError with the first failing rule.
    """
    name = (name or "").strip()
    url = (url or "").strip()
    parent = (parent or "").strip()

    if not name:
        raise RecordValidationError("Name must be populated")
    if name in existing_names:
        raise RecordValidationError("Name already taken")
    if url and not is_valid_url(url):
        raise RecordValidationError("URL format invalid")
    if parent and parent not in existing_names:
        raise RecordValidationError("Parent does not exist")

    return FlatRecord(name=name, url=url or None, parent_name=parent or None)
