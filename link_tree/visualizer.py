"""Tree rendering and serialization utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable
from xml.etree.ElementTree import Element, SubElement, tostring

from link_tree.builder import BuildReport
from link_tree.flattener import RenderEntry
from link_tree.tree import LinkTree, TreeNode


DELETE_MARK = "[−]"


def _node_to_dict(node: TreeNode) -> dict[str, Any]:
    return {
        "name": node.name,
        "url": node.url,
        "parent": node.parent_name,
        "has_children": node.has_children,
        "children": [_node_to_dict(child) for child in node.children],
    }


def tree_to_dict(tree: LinkTree, report: BuildReport | None = None) -> dict[str, Any]:
    """Serialize LinkTree into a JSON-compatible dictionary."""
    data: dict[str, Any] = {
        "node_count": tree.node_count,
        "leaf_count": tree.leaf_count,
        "tree": _node_to_dict(tree.root),
    }
    if report is not None:
        data["report"] = report.to_dict()
    return data


def export_tree_json(tree: LinkTree, output_path: Path, report: BuildReport | None = None) -> None:
    """Export tree to JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(tree_to_dict(tree, report), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def print_link_tree(tree: LinkTree, report: BuildReport | None = None) -> None:
    """Print a readable ASCII tree. Parents are marked with a trailing slash."""
    print(f"Link Tree ({tree.node_count} links, {tree.leaf_count} leaves)")
    print("=" * 60)

    def print_node(node: TreeNode, prefix: str, is_last: bool) -> None:
        connector = "`-- " if is_last else "|-- "
        label = f"{node.name}/" if node.has_children else node.name
        url_text = f" <{node.url}>" if node.url else ""
        print(f"{prefix}{connector}{label}{url_text}")

        child_prefix = prefix + ("    " if is_last else "|   ")
        for index, child in enumerate(node.children):
            print_node(child, child_prefix, index == len(node.children) - 1)

    for index, child in enumerate(tree.root.children):
        print_node(child, "", index == len(tree.root.children) - 1)

    if report is not None and report.dropped:
        print("-" * 60)
        print(f"Not shown (unresolvable parent): {', '.join(report.dropped)}")


def render_entries_html(entries: Iterable[RenderEntry], editable: bool = False) -> str:
    """Render breadth-first entries as nested HTML lists.

    Each parent's sub-list is created when the parent is emitted, so it
    already exists when its children arrive later in the sequence.
    """
    root_list = Element("ul", {"id": "list-group", "class": "tree-list"})
    containers: dict[str, Element] = {}

    for entry in entries:
        if entry.parent_name is None:
            parent_el = root_list
        else:
            parent_el = containers.get(entry.parent_name)
            if parent_el is None:
                raise ValueError(
                    f"Entry '{entry.name}' arrived before its parent '{entry.parent_name}'"
                )

        item_class = "tree-item text-bolded" if entry.has_children else "tree-item text-normal"
        item = SubElement(parent_el, "li", {"id": f"listchild-{entry.name}", "class": item_class})
        content = SubElement(item, "span")
        if entry.url:
            link = SubElement(content, "a", {"href": entry.url})
            link.text = entry.name
        else:
            content.text = entry.name

        if editable and not entry.has_children:
            delete_link = SubElement(item, "a", {"href": "#", "data-delete": entry.name})
            delete_link.text = DELETE_MARK

        if entry.has_children:
            containers[entry.name] = SubElement(
                item,
                "ul",
                {"id": f"listchild-sub-{entry.name}", "class": "tree-list"},
            )

    return tostring(root_list, encoding="unicode", method="html")


def export_entries_html(entries: Iterable[RenderEntry], output_path: Path, editable: bool = False) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_entries_html(entries, editable=editable) + "\n", encoding="utf-8")
