"""Breadth-first projection of a link tree into render entries."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Optional

from link_tree.tree import LinkTree, TreeNode


@dataclass(frozen=True)
class RenderEntry:
    name: str
    url: Optional[str]
    has_children: bool
    parent_name: Optional[str]
    depth: int

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "hasChildren": self.has_children}
        if self.url:
            data["url"] = self.url
        if self.parent_name:
            data["parentName"] = self.parent_name
        return data


def flatten_tree(tree: LinkTree | TreeNode) -> list[RenderEntry]:
    """Linearize the tree level by level, skipping the synthetic root.

    Every node at one depth is emitted before any of its children, so a
    presenter can create each parent's container before appending into it.
    """
    root = tree.root if isinstance(tree, LinkTree) else tree
    entries: list[RenderEntry] = []
    queue: deque[tuple[TreeNode, Optional[str], int]] = deque(
        (child, None, 1) for child in root.children
    )
    while queue:
        node, parent_name, depth = queue.popleft()
        entries.append(
            RenderEntry(
                name=node.name,
                url=node.url,
                has_children=node.has_children,
                parent_name=parent_name,
                depth=depth,
            )
        )
        queue.extend((child, node.name, depth + 1) for child in node.children)
    return entries


def flatten(tree: LinkTree | TreeNode) -> list[RenderEntry]:
    """Short alias of :func:`flatten_tree`."""
    return flatten_tree(tree)
