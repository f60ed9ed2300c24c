"""Link tree package."""

from link_tree.builder import BuildReport, attempt_budget, build, build_link_tree
from link_tree.errors import (
    DuplicateNameError,
    LinkTreeError,
    RecordInUseError,
    RecordValidationError,
    StoreError,
)
from link_tree.flattener import RenderEntry, flatten, flatten_tree
from link_tree.records import FlatRecord, record_from_dict, record_to_dict, records_from_list, records_to_list
from link_tree.tree import ROOT_NAME, LinkTree, TreeNode, iter_non_root_nodes
from link_tree.validator import is_valid_url, validate_new_record
from link_tree.visualizer import (
    export_entries_html,
    export_tree_json,
    print_link_tree,
    render_entries_html,
    tree_to_dict,
)

__all__ = [
    "BuildReport",
    "DuplicateNameError",
    "FlatRecord",
    "LinkTree",
    "LinkTreeError",
    "ROOT_NAME",
    "RecordInUseError",
    "RecordValidationError",
    "RenderEntry",
    "StoreError",
    "TreeNode",
    "attempt_budget",
    "build",
    "build_link_tree",
    "export_entries_html",
    "export_tree_json",
    "flatten",
    "flatten_tree",
    "is_valid_url",
    "iter_non_root_nodes",
    "print_link_tree",
    "record_from_dict",
    "record_to_dict",
    "records_from_list",
    "records_to_list",
    "render_entries_html",
    "tree_to_dict",
    "validate_new_record",
]
