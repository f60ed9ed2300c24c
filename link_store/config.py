"""Configuration loader for the link store."""

from __future__ import annotations

import os
from pathlib import Path

from link_tree.builder import CHILD_ORDERS
from link_tree.env import load_env
from link_store.types import StoreConfig


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _get_str(name: str, default: str) -> str:
    raw = os.getenv(name, "").strip()
    return raw or default


def _get_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name, "").strip()
    if raw in choices:
        return raw
    if raw.upper() in choices:
        return raw.upper()
    return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def load_store_config(load_dotenv: bool = True) -> StoreConfig:
    if load_dotenv:
        load_env()

    return StoreConfig(
        store_path=Path(_get_str("LINK_TREE_STORE_PATH", "links.json")),
        list_version=_get_str("LINK_TREE_LIST_VERSION", "links-v1"),
        child_order=_get_choice("LINK_TREE_CHILD_ORDER", CHILD_ORDERS, "resolution"),
        strict_names=_get_bool("LINK_TREE_STRICT_NAMES", False),
        log_level=_get_choice("LINK_TREE_LOG_LEVEL", LOG_LEVELS, "INFO"),
    )
