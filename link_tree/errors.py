"""Exception types raised by the link tree packages."""

from __future__ import annotations


class LinkTreeError(Exception):
    """Base class for link tree failures."""


class RecordValidationError(LinkTreeError, ValueError):
    """A new or stored record violates the entry rules."""


class DuplicateNameError(RecordValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate record name: {name}")
        self.name = name


class RecordInUseError(LinkTreeError, ValueError):
    """A record cannot be removed while other records name it as parent."""

    def __init__(self, name: str, children: list[str]) -> None:
        super().__init__(
            f"Record '{name}' still has children: {', '.join(children)}"
        )
        self.name = name
        self.children = children


class StoreError(LinkTreeError, RuntimeError):
    """Reading or writing the record storage failed."""
