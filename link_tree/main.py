"""CLI entrypoint for building a link tree from a records file."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
import sys
from typing import Any

from link_tree.builder import CHILD_ORDERS, BuildReport, build_link_tree
from link_tree.env import load_env
from link_tree.errors import LinkTreeError
from link_tree.flattener import flatten_tree
from link_tree.records import FlatRecord, records_from_list
from link_tree.visualizer import export_entries_html, export_tree_json, print_link_tree


DEFAULT_LIST_VERSION = "links-v1"


def _default_child_order() -> str:
    raw = os.getenv("LINK_TREE_CHILD_ORDER", "").strip()
    return raw if raw in CHILD_ORDERS else "resolution"


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a link tree from a JSON records file.")
    parser.add_argument("input_json", type=Path, help="Path to a JSON list of records or a version-keyed object.")
    parser.add_argument(
        "--list-version",
        default=os.getenv("LINK_TREE_LIST_VERSION", DEFAULT_LIST_VERSION),
        help="Key of the record list when the input is a version-keyed object.",
    )
    parser.add_argument(
        "--child-order",
        choices=list(CHILD_ORDERS),
        default=_default_child_order(),
        help="Order children by parent resolution or by input position.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional tree JSON output path.")
    parser.add_argument("--html", type=Path, default=None, help="Optional HTML list output path.")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LINK_TREE_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def _configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="[%(levelname)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )


def _extract_rows(payload: Any, list_version: str) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get(list_version), list):
        return payload[list_version]
    raise ValueError(f"Expected a JSON list or an object with a '{list_version}' list.")


def load_records_file(path: Path, list_version: str = DEFAULT_LIST_VERSION) -> list[FlatRecord]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    return records_from_list(_extract_rows(payload, list_version))


def _print_build_report(report: BuildReport) -> None:
    print(
        "Build report: "
        f"attempts={report.attempts}/{report.attempt_budget}, "
        f"dropped={len(report.dropped)}, "
        f"stalled={report.stalled}, "
        f"budget_exhausted={report.budget_exhausted}"
    )
    for warning in report.warnings:
        print(f"WARNING: {warning}")


def run_cli(argv: list[str] | None = None) -> int:
    load_env()
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        records = load_records_file(args.input_json, args.list_version)
    except OSError as exc:
        print(f"Failed to read records file: {exc}", file=sys.stderr)
        return 1
    except (json.JSONDecodeError, ValueError, LinkTreeError) as exc:
        print(f"Invalid records file: {exc}", file=sys.stderr)
        return 2

    tree, report = build_link_tree(records, child_order=args.child_order)
    _print_build_report(report)
    print_link_tree(tree, report)

    try:
        if args.output is not None:
            export_tree_json(tree, args.output, report)
            print(f"JSON exported to: {args.output}")
        if args.html is not None:
            export_entries_html(flatten_tree(tree), args.html)
            print(f"HTML exported to: {args.html}")
    except OSError as exc:
        print(f"Failed to write output: {exc}", file=sys.stderr)
        return 1

    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
