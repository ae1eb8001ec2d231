"""Persistence adapters for the outlet repository."""

from __future__ import annotations

from importlib import resources
import json
import logging

from ..config import StorageConfig, get_supabase_key, get_supabase_url
from ..core.types import Outlet
from .base import OutletStore, StorageError
from .json_store import JsonFileStore
from .supabase import SupabaseStore, outlet_to_row, row_to_outlet

__all__ = [
    "OutletStore",
    "StorageError",
    "JsonFileStore",
    "SupabaseStore",
    "outlet_to_row",
    "row_to_outlet",
    "create_store",
    "load_seed_outlets",
]

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("json", "supabase", "memory")


def create_store(cfg: StorageConfig) -> OutletStore | None:
    """Build the configured store; "memory" means no persistence."""
    backend = cfg.backend.lower().strip()
    if backend == "memory":
        return None
    if backend == "json":
        return JsonFileStore(cfg.path)
    if backend == "supabase":
        url = get_supabase_url(cfg)
        key = get_supabase_key(cfg)
        if not url or not key:
            raise ValueError(
                f"Supabase storage needs {cfg.supabase_url_env} and {cfg.supabase_key_env} to be set"
            )
        return SupabaseStore(
            url,
            key,
            table=cfg.table,
            timeout_seconds=cfg.timeout_seconds,
            trust_env=cfg.trust_env,
        )
    supported = ", ".join(STORAGE_BACKENDS)
    raise ValueError(f"Unsupported storage backend: {cfg.backend}. Supported: {supported}")


def load_seed_outlets() -> list[Outlet]:
    """Return the bundled seed catalog."""
    text = resources.files("free_press.data").joinpath("seed_outlets.json").read_text(encoding="utf-8")
    raw = json.loads(text)
    return [Outlet.from_dict(item) for item in raw.get("outlets", []) if isinstance(item, dict)]
