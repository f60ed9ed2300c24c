"""Flat record list to link tree materialization."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import asdict, dataclass, field
import logging
from typing import Any, Iterable

from link_tree.errors import DuplicateNameError
from link_tree.records import FlatRecord
from link_tree.tree import LinkTree, TreeNode, make_root


LOGGER = logging.getLogger(__name__)

CHILD_ORDERS = ("resolution", "input")


@dataclass
class BuildReport:
    dropped: list[str] = field(default_factory=list)
    attempts: int = 0
    attempt_budget: int = 0
    budget_exhausted: bool = False
    stalled: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.dropped

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def attempt_budget(pending_count: int) -> int:
    """Worst-case attempts needed to resolve ``pending_count`` records.

    A chain stored child-before-parent resolves one record per rotation of
    the work list, so the bound is n + (n - 1) + ... + 1.
    """
    if pending_count <= 0:
        return 0
    return pending_count * (pending_count + 1) // 2


def _duplicate_names(records: list[FlatRecord]) -> list[str]:
    counts = Counter(record.name for record in records)
    seen: set[str] = set()
    duplicates: list[str] = []
    for record in records:
        if counts[record.name] > 1 and record.name not in seen:
            seen.add(record.name)
            duplicates.append(record.name)
    return duplicates


def _new_node(record: FlatRecord) -> TreeNode:
    return TreeNode(
        name=record.name,
        url=record.url,
        parent_name=record.parent_name,
        children=[],
    )


def _sort_children_by_input(root: TreeNode, positions: dict[str, int]) -> None:
    stack = list(root.children)
    while stack:
        node = stack.pop()
        node.children.sort(key=lambda child: positions.get(child.name, 0))
        stack.extend(node.children)


def build_link_tree(
    records: Iterable[FlatRecord],
    child_order: str = "resolution",
    check_unique: bool = False,
    stop_when_stalled: bool = True,
) -> tuple[LinkTree, BuildReport]:
    """Materialize flat parent-referencing records into a rooted tree.

    Records without a parent attach to the synthetic root in input order. The
    rest are resolved through a FIFO work list: a record whose parent is not
    materialized yet goes back to the tail. Every attempt is charged against
    a quadratic budget, so missing parents and cycles always terminate and
    end up in ``BuildReport.dropped`` instead of raising.
    """
    if child_order not in CHILD_ORDERS:
        raise ValueError(f"child_order must be one of {CHILD_ORDERS}, got {child_order!r}")

    snapshot = list(records)
    report = BuildReport()

    duplicates = _duplicate_names(snapshot)
    if duplicates:
        if check_unique:
            raise DuplicateNameError(duplicates[0])
        report.warnings.append(f"Duplicate record names: {', '.join(duplicates)}")

    root = make_root()
    pending: deque[FlatRecord] = deque()
    for record in snapshot:
        if record.is_root_level:
            root.children.append(_new_node(record))
        else:
            pending.append(record)

    index: dict[str, TreeNode] = {node.name: node for node in root.children}
    report.attempt_budget = attempt_budget(len(pending))

    idle = 0
    while pending:
        if stop_when_stalled and idle >= len(pending):
            report.stalled = True
            break
        if report.attempts >= report.attempt_budget:
            report.budget_exhausted = True
            break

        record = pending.popleft()
        report.attempts += 1
        parent = index.get(record.parent_name or "")
        if parent is None:
            pending.append(record)
            idle += 1
            if LOGGER.isEnabledFor(logging.DEBUG):
                LOGGER.debug("Deferred '%s': parent '%s' not resolved yet", record.name, record.parent_name)
            continue

        node = _new_node(record)
        parent.children.append(node)
        index[record.name] = node
        idle = 0

    if pending:
        remaining = {id(record) for record in pending}
        report.dropped = [record.name for record in snapshot if id(record) in remaining]
        reason = "no remaining record can resolve its parent" if report.stalled else "attempt budget exhausted"
        message = (
            f"Dropped {len(report.dropped)} record(s) with unresolvable parents "
            f"({reason}): {', '.join(report.dropped)}"
        )
        report.warnings.append(message)
        LOGGER.warning(message)

    if child_order == "input":
        positions: dict[str, int] = {}
        for position, record in enumerate(snapshot):
            positions.setdefault(record.name, position)
        _sort_children_by_input(root, positions)

    tree = LinkTree(root=root)
    tree.recompute_counts()
    LOGGER.debug(
        "Built link tree: nodes=%d leaves=%d attempts=%d/%d dropped=%d",
        tree.node_count,
        tree.leaf_count,
        report.attempts,
        report.attempt_budget,
        len(report.dropped),
    )
    return tree, report


def build(records: Iterable[FlatRecord], **options: Any) -> tuple[LinkTree, BuildReport]:
    """Short alias of :func:`build_link_tree`."""
    return build_link_tree(records, **options)
