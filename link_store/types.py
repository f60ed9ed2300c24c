"""Core data models used by the link store."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from link_tree.builder import BuildReport
from link_tree.flattener import RenderEntry
from link_tree.tree import LinkTree


@dataclass
class StoreConfig:
    store_path: Path
    list_version: str
    child_order: str
    strict_names: bool
    log_level: str


@dataclass
class RebuildResult:
    tree: LinkTree
    report: BuildReport
    entries: list[RenderEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_count": self.tree.node_count,
            "leaf_count": self.tree.leaf_count,
            "dropped": list(self.report.dropped),
            "entries": [entry.to_dict() for entry in self.entries],
        }
