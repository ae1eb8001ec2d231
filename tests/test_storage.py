"""Tests for the JSON file and Supabase outlet stores."""

from __future__ import annotations

import json

import httpx
import pytest

from free_press.config import StorageConfig
from free_press.core.types import FreeformOwnership, FundingSources, Outlet, StructuredOwnership
from free_press.storage import (
    JsonFileStore,
    StorageError,
    SupabaseStore,
    create_store,
    load_seed_outlets,
    outlet_to_row,
    row_to_outlet,
)


def test_json_store_missing_file_loads_empty(tmp_path):
    assert JsonFileStore(tmp_path / "missing.json").load_all() == []


def test_json_store_upserts_in_order(tmp_path):
    store = JsonFileStore(tmp_path / "data" / "outlets.json")
    store.save_many([Outlet(id="a", name="A"), Outlet(id="b", name="B")])
    store.save_many([Outlet(id="a", name="A2"), Outlet(id="c", name="C")])

    outlets = store.load_all()
    assert [(o.id, o.name) for o in outlets] == [("a", "A2"), ("b", "B"), ("c", "C")]

    store.delete_many(["b", "zzz"])
    assert [o.id for o in store.load_all()] == ["a", "c"]


def test_json_store_skips_invalid_records(tmp_path):
    path = tmp_path / "outlets.json"
    path.write_text(json.dumps({"outlets": [{"id": "a", "name": "A"}, {"id": "no-name"}, "junk"]}), encoding="utf-8")
    assert [o.id for o in JsonFileStore(path).load_all()] == ["a"]


def test_json_store_loads_non_finite_numbers_as_absent(tmp_path):
    path = tmp_path / "outlets.json"
    path.write_text('{"outlets": [{"id": "a", "name": "A", "audienceSize": 1e999, "biasScore": NaN}]}', encoding="utf-8")

    [outlet] = JsonFileStore(path).load_all()

    assert outlet.audience_size is None
    assert outlet.bias_score == 0.0


def test_json_store_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "outlets.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonFileStore(path).load_all()


def test_row_conversion_wraps_plain_ownership_and_funding():
    outlet = Outlet(
        id="cnn",
        name="CNN",
        bias_score=-0.5,
        ownership=FreeformOwnership("Warner Bros. Discovery"),
        funding=FundingSources(["Advertising"]),
    )
    row = outlet_to_row(outlet)
    assert row["ownership"] == {"details": "Warner Bros. Discovery"}
    assert row["funding"] == {"sources": ["Advertising"]}
    assert row["bias_score"] == -0.5
    assert row["board_members"] is None
    assert "updated_at" in row

    back = row_to_outlet(row)
    assert back.ownership == FreeformOwnership("Warner Bros. Discovery")
    assert back.funding == FundingSources(["Advertising"])


def test_row_conversion_keeps_structured_ownership():
    row = {"id": "x", "name": "X", "ownership": {"type": "public", "details": "Listed"}}
    outlet = row_to_outlet(row)
    assert isinstance(outlet.ownership, StructuredOwnership)
    assert outlet.ownership.details == "Listed"


def test_supabase_store_round_trip():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.method == "GET":
            return httpx.Response(200, json=[{"id": "cnn", "name": "CNN", "bias_score": -0.5}, {"id": "bad"}])
        return httpx.Response(201)

    store = SupabaseStore("https://example.supabase.co/", "anon-key", transport=httpx.MockTransport(handler))

    outlets = store.load_all()
    assert [o.id for o in outlets] == ["cnn"]
    assert outlets[0].bias_score == -0.5

    store.save_many(outlets)
    store.delete_many(["cnn", "fox-news"])

    get, post, delete = calls
    assert get.url.path == "/rest/v1/media_outlets"
    assert get.url.params["select"] == "*"
    assert get.headers["apikey"] == "anon-key"
    assert post.headers["Prefer"] == "resolution=merge-duplicates,return=minimal"
    assert json.loads(post.content)[0]["id"] == "cnn"
    assert delete.url.params["id"] == 'in.("cnn","fox-news")'


def test_supabase_store_wraps_http_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"message": "boom"}))
    store = SupabaseStore("https://example.supabase.co", "anon-key", transport=transport)
    with pytest.raises(StorageError):
        store.load_all()


def test_supabase_store_skips_empty_writes():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    store = SupabaseStore("https://example.supabase.co", "anon-key", transport=httpx.MockTransport(handler))
    store.save_many([])
    store.delete_many([])


def test_create_store_backends(tmp_path, monkeypatch):
    assert create_store(StorageConfig(backend="memory")) is None
    assert isinstance(create_store(StorageConfig(backend="json", path=str(tmp_path / "o.json"))), JsonFileStore)

    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    with pytest.raises(ValueError):
        create_store(StorageConfig(backend="supabase"))

    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    assert isinstance(create_store(StorageConfig(backend="supabase")), SupabaseStore)

    with pytest.raises(ValueError, match="Unsupported storage backend"):
        create_store(StorageConfig(backend="sqlite"))


def test_seed_catalog_loads():
    outlets = load_seed_outlets()
    assert len(outlets) == 11
    assert outlets[0].id == "msnbc"
    assert len({o.id for o in outlets}) == len(outlets)
