"""
Supabase REST store for outlets.

Talks to the PostgREST endpoint of a Supabase project with httpx. Rows use
snake_case columns; freeform ownership text is stored as ``{"details": ...}``
and plain funding labels as ``{"sources": [...]}`` so both columns stay JSON
objects, and both are turned back into their plain forms on load.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from ..core.types import FreeformOwnership, FundingSources, Outlet, utc_now_iso
from .base import OutletStore, StorageError


logger = logging.getLogger(__name__)

_ROW_COLUMNS = {
    "country": "country",
    "bias_score": "biasScore",
    "free_press_score": "freePressScore",
    "logo": "logo",
    "description": "description",
    "website": "website",
    "outlet_type": "outletType",
    "type": "type",
    "platform": "platform",
    "fact_check_accuracy": "factCheckAccuracy",
    "editorial_independence": "editorialIndependence",
    "transparency": "transparency",
    "perspectives": "perspectives",
    "last_updated": "lastUpdated",
    "sponsors": "sponsors",
    "stakeholders": "stakeholders",
    "board_members": "boardMembers",
    "metrics": "metrics",
    "retractions": "retractions",
    "lawsuits": "lawsuits",
    "scandals": "scandals",
    "legal_cases": "legalCases",
    "audience_data": "audienceData",
    "audience_size": "audienceSize",
    "accountability": "accountability",
}


def outlet_to_row(outlet: Outlet) -> dict[str, Any]:
    """Convert an outlet to a database row."""
    wire = outlet.to_dict()
    row: dict[str, Any] = {"id": outlet.id, "name": outlet.name}
    for column, key in _ROW_COLUMNS.items():
        value = wire.get(key)
        row[column] = value if value not in ("", [], {}) else None

    if isinstance(outlet.ownership, FreeformOwnership):
        row["ownership"] = {"details": outlet.ownership.text}
    else:
        row["ownership"] = wire.get("ownership")
    if isinstance(outlet.funding, FundingSources):
        row["funding"] = {"sources": list(outlet.funding.labels)}
    else:
        row["funding"] = wire.get("funding")
    row["updated_at"] = utc_now_iso()
    return row


def row_to_outlet(row: dict[str, Any]) -> Outlet:
    """Convert a database row back to an outlet.

    Raises:
        ValueError: If the row has no id or name
    """
    wire: dict[str, Any] = {"id": row.get("id"), "name": row.get("name")}
    for column, key in _ROW_COLUMNS.items():
        wire[key] = row.get(column)

    ownership = row.get("ownership")
    if isinstance(ownership, dict) and set(ownership) == {"details"} and isinstance(ownership["details"], str):
        ownership = ownership["details"]
    wire["ownership"] = ownership

    funding = row.get("funding")
    if isinstance(funding, dict) and set(funding) == {"sources"} and isinstance(funding["sources"], list):
        funding = funding["sources"]
    wire["funding"] = funding
    return Outlet.from_dict(wire)


class SupabaseStore(OutletStore):
    """Outlet store backed by a Supabase table.

    Args:
        url: Supabase project URL
        api_key: Project API key, sent as both ``apikey`` and bearer token
        table: Table holding outlet rows
        timeout_seconds: Per-request timeout
        trust_env: Whether to respect system proxy settings
        transport: Optional httpx transport, used by tests
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = "media_outlets",
        timeout_seconds: float = 10.0,
        trust_env: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        if not url or not api_key:
            raise ValueError("Missing Supabase URL or API key")
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout_seconds = timeout_seconds
        self.trust_env = trust_env
        self.transport = transport

    def load_all(self) -> list[Outlet]:
        response = self._request("GET", params={"select": "*"})
        try:
            rows = response.json()
        except ValueError as exc:
            raise StorageError(f"Invalid JSON from Supabase: {exc}") from exc
        if not isinstance(rows, list):
            raise StorageError("Unexpected response shape from Supabase")
        outlets = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            try:
                outlets.append(row_to_outlet(row))
            except ValueError as exc:
                logger.warning("Skipping Supabase row: %s", exc)
        logger.info("Loaded %d outlets from Supabase", len(outlets))
        return outlets

    def save_many(self, outlets: Iterable[Outlet]) -> None:
        rows = [outlet_to_row(outlet) for outlet in outlets]
        if not rows:
            return
        self._request(
            "POST",
            json=rows,
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )
        logger.info("Saved %d outlets to Supabase", len(rows))

    def delete_many(self, ids: Iterable[str]) -> None:
        targets = [outlet_id for outlet_id in ids if outlet_id]
        if not targets:
            return
        quoted = ",".join(f'"{outlet_id}"' for outlet_id in targets)
        self._request("DELETE", params={"id": f"in.({quoted})"})
        logger.info("Deleted %d outlets from Supabase", len(targets))

    def _request(
        self,
        method: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        request_headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        request_headers.update(headers or {})
        endpoint = f"{self.url}/rest/v1/{self.table}"
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                trust_env=self.trust_env,
                transport=self.transport,
            ) as client:
                resp = client.request(method, endpoint, params=params, json=json, headers=request_headers)
                resp.raise_for_status()
                return resp
        except httpx.HTTPError as exc:
            raise StorageError(f"Supabase {method} {self.table} failed: {exc}") from exc
