"""Tests for duplicate detection, grouping and keep-first merging."""

from __future__ import annotations

from free_press.core.dedup import DuplicateResolver, merge_duplicates
from free_press.core.types import Candidate, Outlet
from free_press.repository import OutletRepository


def _outlet(outlet_id: str, name: str, website: str = "") -> Outlet:
    return Outlet(id=outlet_id, name=name, website=website)


def _catalog() -> list[Outlet]:
    return [
        _outlet("cnn", "CNN", "https://www.cnn.com"),
        _outlet("bbc-news", "BBC News", "https://www.bbc.co.uk/news"),
        _outlet("reuters", "Reuters", "https://www.reuters.com"),
    ]


def test_check_for_duplicate_matches_on_domain():
    resolver = DuplicateResolver()
    match = resolver.check_for_duplicate({"name": "Cable News Network", "website": "cnn.com"}, _catalog())
    assert match is not None
    assert match.id == "cnn"


def test_find_match_reports_match_type():
    resolver = DuplicateResolver()
    match = resolver.find_match(Candidate(name="CNN", website="https://www.cnn.com/"), _catalog())
    assert match is not None
    assert match.match_type == "domain"
    assert match.similarity == 1.0


def test_bare_domain_name_matches_existing_outlet_by_domain():
    outlets = [_outlet("cnn", "CNN", "https://cnn.com")]
    resolver = DuplicateResolver()
    candidate = {"name": "cnn.com", "website": "https://www.cnn.com/"}

    assert resolver.check_for_duplicate(candidate, outlets) is outlets[0]
    assert resolver.find_match(candidate, outlets).match_type == "domain"


def test_check_for_duplicate_returns_none_for_new_outlet():
    resolver = DuplicateResolver()
    assert resolver.check_for_duplicate({"name": "Fox News", "website": "https://www.foxnews.com"}, _catalog()) is None


def test_check_for_duplicate_ignores_own_id():
    resolver = DuplicateResolver()
    outlets = _catalog()
    assert resolver.check_for_duplicate(outlets[0], outlets) is None


def test_check_for_duplicate_first_match_wins():
    resolver = DuplicateResolver()
    outlets = [_outlet("a", "Daily Show"), _outlet("b", "The Daily Show")]
    match = resolver.check_for_duplicate({"name": "Daily Show Podcast"}, outlets)
    assert match.id == "a"


def test_find_all_duplicates_reports_each_pair_once():
    resolver = DuplicateResolver()
    outlets = [
        _outlet("a", "Daily Show"),
        _outlet("b", "The Daily Show"),
        _outlet("c", "Daily Show Podcast"),
        _outlet("d", "Reuters"),
    ]
    pairs = resolver.find_all_duplicates(outlets)
    assert [(p.outlet1.id, p.outlet2.id) for p in pairs] == [("a", "b"), ("a", "c"), ("b", "c")]
    assert all(p.match_type == "exact" for p in pairs)
    assert pairs[0].reason == "Similar names (100%): Daily Show / The Daily Show"


def test_find_all_duplicates_domain_reason():
    resolver = DuplicateResolver()
    outlets = [_outlet("cnn", "CNN", "https://www.cnn.com"), _outlet("cnn-2", "Cable News", "cnn.com/us")]
    pairs = resolver.find_all_duplicates(outlets)
    assert len(pairs) == 1
    assert pairs[0].reason == "Same domain: cnn.com"
    assert pairs[0].match_type == "domain"


def test_bulk_scan_is_looser_than_single_check():
    resolver = DuplicateResolver()
    # one edit over six characters: 0.833
    outlets = [_outlet("a", "Forbes"), _outlet("b", "Forbez")]
    assert len(resolver.find_all_duplicates(outlets)) == 1
    assert resolver.check_for_duplicate({"name": "Forbez"}, outlets[:1]) is None


def test_group_duplicates_merges_transitive_pairs():
    resolver = DuplicateResolver()
    outlets = [
        _outlet("a", "Daily Show"),
        _outlet("x", "Reuters"),
        _outlet("b", "The Daily Show"),
        _outlet("c", "Daily Show Podcast"),
    ]
    pairs = resolver.find_all_duplicates(outlets)
    groups = resolver.group_duplicates(pairs, outlets)
    assert len(groups) == 1
    assert groups[0].ids == ["a", "b", "c"]
    assert groups[0].count == 3
    assert groups[0].name == "Daily Show"


def test_plan_merge_keeps_first_of_each_group():
    resolver = DuplicateResolver()
    outlets = [
        _outlet("a", "Daily Show"),
        _outlet("b", "The Daily Show"),
        _outlet("cnn", "CNN", "https://www.cnn.com"),
        _outlet("c", "Daily Show Podcast"),
        _outlet("cnn-2", "CNN International", "cnn.com"),
    ]
    groups = resolver.group_duplicates(resolver.find_all_duplicates(outlets), outlets)
    plan = resolver.plan_merge(groups)
    assert plan.keep == ["a", "cnn"]
    assert plan.remove == ["b", "c", "cnn-2"]


def test_merge_duplicates_removes_all_but_first():
    repository = OutletRepository()
    repository._outlets = {
        "a": _outlet("a", "Daily Show"),
        "b": _outlet("b", "The Daily Show"),
        "c": _outlet("c", "Daily Show Podcast"),
        "d": _outlet("d", "Reuters"),
    }

    report = merge_duplicates(repository)

    assert report.removed == 2
    assert [o.id for o in repository.get_all()] == ["a", "d"]
    assert report.to_dict() == {
        "removed": 2,
        "duplicatesFound": [{"name": "Daily Show", "kept": "a", "removed": ["b", "c"]}],
    }


def test_merge_duplicates_without_duplicates_is_a_no_op():
    repository = OutletRepository()
    for outlet in _catalog():
        repository.add(outlet)

    report = merge_duplicates(repository)

    assert report.removed == 0
    assert report.entries == []
    assert repository.count() == 3


def test_custom_threshold_changes_outcome():
    strict = DuplicateResolver(single_check_threshold=0.9)
    outlets = [_outlet("p", "Politico")]
    assert strict.check_for_duplicate({"name": "Politica"}, outlets) is None
    assert DuplicateResolver().check_for_duplicate({"name": "Politica"}, outlets).id == "p"
