"""Link store package."""

from link_store.config import load_store_config
from link_store.pipeline import run_rebuild
from link_store.store import LinkStore
from link_store.types import RebuildResult, StoreConfig

__all__ = [
    "LinkStore",
    "RebuildResult",
    "StoreConfig",
    "load_store_config",
    "run_rebuild",
]
