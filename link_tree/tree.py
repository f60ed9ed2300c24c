"""Link tree data model and traversal helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional


ROOT_NAME = "Root"


@dataclass
class TreeNode:
    name: str
    url: Optional[str] = None
    parent_name: Optional[str] = None
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0


@dataclass
class LinkTree:
    root: TreeNode
    node_count: int = 0
    leaf_count: int = 0

    def recompute_counts(self) -> None:
        nodes = list(iter_non_root_nodes(self.root))
        self.node_count = len(nodes)
        self.leaf_count = sum(1 for node in nodes if not node.has_children)

    def find(self, name: str) -> TreeNode | None:
        for node in iter_non_root_nodes(self.root):
            if node.name == name:
                return node
        return None

    def names(self) -> list[str]:
        return [node.name for node in iter_non_root_nodes(self.root)]


def make_root() -> TreeNode:
    return TreeNode(name=ROOT_NAME, url=None, parent_name=None, children=[])


def iter_non_root_nodes(root: TreeNode) -> Iterable[TreeNode]:
    """Yield every node below ``root`` in pre-order."""
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
