"""
In-memory outlet collection with single-writer mutations.

The repository is the only owner of outlet records. Every mutation runs under
one lock and replaces records rather than editing them, so snapshots handed
to readers (duplicate scans, catalog views) may go stale but are never
half-written. Persistence goes through an optional OutletStore and happens
outside the lock.
"""

from __future__ import annotations

from dataclasses import replace
import logging
import threading
from typing import Any, Iterable

from .core.dedup import DuplicateResolver
from .core.types import Outlet, coerce_field, utc_now_iso
from .logging_utils import log_event
from .storage.base import OutletStore, StorageError


logger = logging.getLogger(__name__)


class OutletRepository:
    """Insertion-ordered outlet collection.

    Args:
        store: Persistence port used by load() and flush(); None keeps everything in memory
        resolver: Duplicate resolver gating add(); defaults to the standard thresholds
    """

    def __init__(self, store: OutletStore | None = None, resolver: DuplicateResolver | None = None):
        self.store = store
        self.resolver = resolver or DuplicateResolver()
        self._lock = threading.Lock()
        self._outlets: dict[str, Outlet] = {}
        self._dirty: set[str] = set()
        self._deleted: set[str] = set()

    def load(self) -> int:
        """Replace the collection with the store's contents and return the count."""
        if self.store is None:
            return self.count()
        records = self.store.load_all()
        with self._lock:
            self._outlets = {}
            for outlet in records:
                self._outlets.setdefault(outlet.id, outlet)
            self._dirty.clear()
            self._deleted.clear()
            total = len(self._outlets)
        log_event(logger, "Loaded outlets", count=total)
        return total

    def get_all(self) -> list[Outlet]:
        with self._lock:
            return list(self._outlets.values())

    def get(self, outlet_id: str) -> Outlet | None:
        with self._lock:
            return self._outlets.get(outlet_id)

    def count(self) -> int:
        with self._lock:
            return len(self._outlets)

    def check_for_duplicate(self, candidate: Any) -> Outlet | None:
        return self.resolver.check_for_duplicate(candidate, self.get_all())

    def add(self, outlet: Outlet) -> Outlet:
        """Insert an outlet unless it already exists.

        Returns:
            The inserted outlet, or the existing outlet with the same id or
            the existing duplicate that blocked the insert
        """
        with self._lock:
            existing = self._outlets.get(outlet.id)
            if existing is not None:
                return existing
            duplicate = self.resolver.check_for_duplicate(outlet, self._outlets.values())
            if duplicate is not None:
                logger.info("Skipped %s: duplicate of %s", outlet.name, duplicate.name)
                return duplicate
            self._outlets[outlet.id] = outlet
            self._dirty.add(outlet.id)
            self._deleted.discard(outlet.id)
        return outlet

    def update(self, outlet_id: str, fields: dict[str, Any]) -> Outlet | None:
        """Merge fields into an outlet and refresh its last_updated timestamp.

        Args:
            outlet_id: Id of the outlet to update
            fields: Attribute names (snake_case) mapped to raw or typed values

        Returns:
            The updated outlet, or None if the id is unknown

        Raises:
            ValueError: If fields try to change the id or name an unknown attribute
        """
        if "id" in fields:
            raise ValueError("Outlet id cannot be changed")
        changes = {name: coerce_field(name, value) for name, value in fields.items()}
        changes["last_updated"] = utc_now_iso()
        with self._lock:
            current = self._outlets.get(outlet_id)
            if current is None:
                return None
            updated = replace(current, **changes)
            self._outlets[outlet_id] = updated
            self._dirty.add(outlet_id)
        return updated

    def remove_by_ids(self, ids: Iterable[str]) -> int:
        targets = set(ids)
        with self._lock:
            before = len(self._outlets)
            removed = targets.intersection(self._outlets)
            self._outlets = {k: v for k, v in self._outlets.items() if k not in targets}
            self._dirty.difference_update(removed)
            self._deleted.update(removed)
            count = before - len(self._outlets)
        log_event(logger, "Removed outlets", count=count)
        return count

    def flush(self) -> bool:
        """Write pending changes to the store.

        Returns:
            True when everything was written (or there is no store), False if
            the store failed; pending changes are kept for the next attempt
        """
        if self.store is None:
            return True
        with self._lock:
            pending = [self._outlets[i] for i in self._outlets if i in self._dirty]
            deleted = sorted(self._deleted)
        if not pending and not deleted:
            return True
        try:
            if pending:
                self.store.save_many(pending)
            if deleted:
                self.store.delete_many(deleted)
        except StorageError as exc:
            logger.error("Failed to flush outlets: %s", exc)
            return False
        with self._lock:
            for outlet in pending:
                if self._outlets.get(outlet.id) is outlet:
                    self._dirty.discard(outlet.id)
            self._deleted.difference_update(deleted)
        log_event(logger, "Flushed outlets", saved=len(pending), deleted=len(deleted))
        return True
