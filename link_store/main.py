"""CLI entrypoint for managing the stored link list."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from link_tree.errors import RecordInUseError, RecordValidationError, StoreError
from link_tree.visualizer import export_entries_html, print_link_tree
from link_store.config import LOG_LEVELS, load_store_config
from link_store.store import LinkStore
from link_store.types import RebuildResult


LOGGER = logging.getLogger(__name__)


def _build_parser(default_log_level: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage a tree of named links.")
    parser.add_argument("--store", type=Path, default=None, help="Store JSON file (overrides LINK_TREE_STORE_PATH).")
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=list(LOG_LEVELS),
        help="Logging verbosity for progress output.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the current tree")

    add_parser = sub.add_parser("add", help="Add a link")
    add_parser.add_argument("name", help="Unique link name")
    add_parser.add_argument("--url", default="", help="Optional URL")
    add_parser.add_argument("--parent", default="", help="Optional name of an existing parent")

    remove_parser = sub.add_parser("remove", help="Remove a link that has no children")
    remove_parser.add_argument("name", help="Name of the link to remove")

    export_parser = sub.add_parser("export", help="Write the tree as nested HTML lists")
    export_parser.add_argument("--html", type=Path, required=True, help="Output HTML path")
    export_parser.add_argument("--editable", action="store_true", help="Include delete links on leaves")
    return parser


def _configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="[%(levelname)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )


def _print_result(result: RebuildResult) -> None:
    print_link_tree(result.tree, result.report)


def run_cli(argv: list[str] | None = None) -> int:
    config = load_store_config(load_dotenv=True)
    parser = _build_parser(config.log_level)
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    if args.store is not None:
        config.store_path = args.store
    LOGGER.info("Starting command '%s' (store=%s)", args.command, config.store_path)

    store = LinkStore(config)
    try:
        result = store.load()

        if args.command == "add":
            result = store.add(args.name, url=args.url, parent=args.parent)
            print(f"Added: {args.name}")
        elif args.command == "remove":
            result = store.remove(args.name)
            print(f"Removed: {args.name}")
        elif args.command == "export":
            export_entries_html(result.entries, args.html, editable=args.editable)
            print(f"HTML exported to: {args.html}")
            return 0
    except (RecordValidationError, RecordInUseError) as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except (StoreError, OSError) as exc:
        print(f"Storage failure: {exc}", file=sys.stderr)
        return 1

    _print_result(result)
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
