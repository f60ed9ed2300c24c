"""JSON-file backed record store that rebuilds the tree on every change."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from link_tree.errors import RecordInUseError, RecordValidationError, StoreError
from link_tree.records import FlatRecord, records_from_list, records_to_list
from link_tree.validator import validate_new_record
from link_store.pipeline import run_rebuild
from link_store.types import RebuildResult, StoreConfig


LOGGER = logging.getLogger(__name__)

RebuildListener = Callable[[RebuildResult], None]


class LinkStore:
    """Owns the authoritative record list and hands snapshots to the builder."""

    def __init__(self, config: StoreConfig) -> None:
        self.config = config
        self._records: list[FlatRecord] = []
        self._listeners: list[RebuildListener] = []
        self.last_result: RebuildResult | None = None

    @property
    def path(self) -> Path:
        return self.config.store_path

    @property
    def records(self) -> tuple[FlatRecord, ...]:
        return tuple(self._records)

    @property
    def names(self) -> list[str]:
        return [record.name for record in self._records]

    def subscribe(self, listener: RebuildListener) -> None:
        self._listeners.append(listener)

    def _read_payload(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StoreError(f"Failed to read store file {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"Store file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise StoreError(f"Store file {self.path} must contain a JSON object.")
        return payload

    def load(self) -> RebuildResult:
        payload = self._read_payload()
        rows = payload.get(self.config.list_version)
        if rows is None:
            LOGGER.info(
                "No '%s' list found in %s; starting with an empty list.",
                self.config.list_version,
                self.path,
            )
            self._records = []
            self.save()
        elif not isinstance(rows, list):
            raise StoreError(f"Store key '{self.config.list_version}' must hold a list.")
        else:
            try:
                self._records = records_from_list(rows)
            except RecordValidationError as exc:
                raise StoreError(f"Store file {self.path} holds an invalid record: {exc}") from exc
            LOGGER.info("Fetched %d records from %s", len(self._records), self.path)
        return self.rebuild()

    def save(self) -> None:
        payload = self._read_payload()
        payload[self.config.list_version] = records_to_list(self._records)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            raise StoreError(f"Failed to write store file {self.path}: {exc}") from exc
        LOGGER.debug("Saved %d records to %s", len(self._records), self.path)

    def _run(self, records: Iterable[FlatRecord]) -> RebuildResult:
        return run_rebuild(
            records,
            child_order=self.config.child_order,
            strict_names=self.config.strict_names,
        )

    def _publish(self, result: RebuildResult) -> RebuildResult:
        self.last_result = result
        for listener in self._listeners:
            listener(result)
        return result

    def rebuild(self) -> RebuildResult:
        return self._publish(self._run(self.records))

    def add(self, name: str, url: str | None = None, parent: str | None = None) -> RebuildResult:
        record = validate_new_record(name, url, parent, set(self.names))
        self._records.append(record)
        self.save()
        LOGGER.info("Added record '%s' (parent=%s)", record.name, record.parent_name)
        return self.rebuild()

    def remove(self, name: str) -> RebuildResult:
        """Remove a record that has no children attached in the current tree.

        Records hidden from the tree (unresolvable parent) can always be
        removed, even when other hidden records still point at them.
        """
        position = next(
            (index for index, record in enumerate(self._records) if record.name == name),
            None,
        )
        if position is None:
            raise RecordValidationError(f"No record named '{name}'")

        current = self.last_result or self.rebuild()
        if name not in current.report.dropped:
            node = current.tree.find(name)
            if node is not None and node.has_children:
                raise RecordInUseError(name, [child.name for child in node.children])

        del self._records[position]
        self.save()
        LOGGER.info("Removed record '%s'", name)
        return self.rebuild()

    def replace_records(self, records: Iterable[FlatRecord]) -> RebuildResult:
        """Take over a fresh collection supplied by an external change.

        The current list is kept when the new one cannot be built.
        """
        incoming = list(records)
        result = self._run(incoming)
        self._records = incoming
        LOGGER.info("Record list replaced externally (%d records)", len(self._records))
        return self._publish(result)
