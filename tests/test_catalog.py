"""Tests for catalog filtering, comparison and stats."""

from __future__ import annotations

import pytest

from free_press.core.catalog import bias_category, catalog_stats, compare_outlets, filter_outlets, is_scrapable
from free_press.core.types import Outlet
from free_press.storage import load_seed_outlets


def _outlets() -> list[Outlet]:
    return [
        Outlet(id="a", name="Alpha", country="USA", bias_score=-1.8, free_press_score=60, media_type="tv"),
        Outlet(id="b", name="Bravo", country="UK", bias_score=0.2, free_press_score=80, website="https://bravo.co.uk"),
        Outlet(id="c", name="Charlie", country="USA", bias_score=1.0, free_press_score=70, description="Talk radio"),
    ]


@pytest.mark.parametrize(
    "score, expected",
    [(-2.0, "far-left"), (-1.5, "far-left"), (-1.0, "left"), (-0.5, "left"), (0.0, "center"), (0.49, "center"),
     (0.5, "right"), (1.49, "right"), (1.5, "far-right"), (5, "far-right")],
)
def test_bias_category(score, expected):
    assert bias_category(score) == expected


def test_filter_by_country_and_sort_by_score():
    assert [o.id for o in filter_outlets(_outlets(), country="usa")] == ["c", "a"]
    assert [o.id for o in filter_outlets(_outlets(), country="all")] == ["b", "c", "a"]


def test_filter_by_bias_type_and_query():
    assert [o.id for o in filter_outlets(_outlets(), bias="far-left")] == ["a"]
    assert [o.id for o in filter_outlets(_outlets(), media_type="TV")] == ["a"]
    assert [o.id for o in filter_outlets(_outlets(), query="radio")] == ["c"]


def test_filter_sort_by_name_and_bad_sort():
    assert [o.id for o in filter_outlets(_outlets(), sort="name")] == ["a", "b", "c"]
    with pytest.raises(ValueError, match="Unsupported sort"):
        filter_outlets(_outlets(), sort="bias")


def test_compare_outlets_keeps_requested_order():
    rows = compare_outlets(_outlets(), ["c", "missing", "a"])
    assert [r["id"] for r in rows] == ["c", "a"]
    assert rows[0]["bias"] == "right"
    assert rows[1]["freePressScore"] == 60


def test_is_scrapable():
    assert is_scrapable(Outlet(id="x", name="X", website="https://x.com"))
    assert not is_scrapable(Outlet(id="y", name="Y", website="N/A"))
    assert not is_scrapable(Outlet(id="z", name="Z"))


def test_catalog_stats():
    stats = catalog_stats(_outlets())
    assert stats["total"] == 3
    assert stats["scrapable"] == 1
    assert stats["averageFreePressScore"] == 70.0
    assert stats["byCountry"] == {"USA": 2, "UK": 1}
    assert stats["byBias"] == {"far-left": 1, "center": 1, "right": 1}


def test_catalog_stats_empty_and_seed():
    assert catalog_stats([])["total"] == 0
    assert catalog_stats(load_seed_outlets())["total"] == 11
