"""Rebuild pipeline: flat records -> tree -> render entries."""

from __future__ import annotations

import logging
from typing import Iterable

from link_tree.builder import build_link_tree
from link_tree.flattener import flatten_tree
from link_tree.records import FlatRecord
from link_store.types import RebuildResult


LOGGER = logging.getLogger(__name__)


def run_rebuild(
    records: Iterable[FlatRecord],
    child_order: str = "resolution",
    strict_names: bool = False,
) -> RebuildResult:
    snapshot = tuple(records)
    LOGGER.info("Rebuilding link tree from %d records.", len(snapshot))
    tree, report = build_link_tree(snapshot, child_order=child_order, check_unique=strict_names)
    if report.dropped:
        LOGGER.warning(
            "%d record(s) are hidden from the tree: %s",
            len(report.dropped),
            ", ".join(report.dropped),
        )
    entries = flatten_tree(tree)
    LOGGER.info(
        "Rebuild finished. nodes=%d leaves=%d entries=%d",
        tree.node_count,
        tree.leaf_count,
        len(entries),
    )
    return RebuildResult(tree=tree, report=report, entries=entries)
