"""
JSON file store for outlets.

The whole catalog lives in one document of the form ``{"outlets": [...]}``
using the camelCase wire shape, which keeps the file readable by the
dashboard and easy to diff. Writes go to a temporary sibling file that is
then renamed over the original.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..core.types import Outlet
from .base import OutletStore, StorageError


logger = logging.getLogger(__name__)


class JsonFileStore(OutletStore):
    """Outlet store backed by a single JSON file.

    Attributes:
        path: Location of the JSON document; a missing file loads as empty
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load_all(self) -> list[Outlet]:
        return [outlet for outlet in (_parse(item) for item in self._read()) if outlet is not None]

    def save_many(self, outlets: Iterable[Outlet]) -> None:
        records = self._read()
        index = {item.get("id"): pos for pos, item in enumerate(records)}
        for outlet in outlets:
            payload = outlet.to_dict()
            pos = index.get(outlet.id)
            if pos is None:
                index[outlet.id] = len(records)
                records.append(payload)
            else:
                records[pos] = payload
        self._write(records)

    def delete_many(self, ids: Iterable[str]) -> None:
        targets = set(ids)
        records = self._read()
        kept = [item for item in records if item.get("id") not in targets]
        if len(kept) != len(records):
            self._write(kept)

    def _read(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        items = raw.get("outlets") if isinstance(raw, dict) else raw
        if not isinstance(items, list):
            raise StorageError(f"Unexpected document shape in {self.path}")
        return [item for item in items if isinstance(item, dict)]

    def _write(self, records: list[dict[str, Any]]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps({"outlets": records}, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc


def _parse(item: dict[str, Any]) -> Outlet | None:
    try:
        return Outlet.from_dict(item)
    except ValueError as exc:
        logger.warning("Skipping stored outlet: %s", exc)
        return None
