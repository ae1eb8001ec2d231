"""Tests for outlet discovery with duplicate gating and curated fallback."""

from __future__ import annotations

import json

from free_press.config import ProviderConfig
from free_press.core.types import Candidate, FreeformOwnership, Outlet
from free_press.discovery import (
    CURATED_SOURCE,
    DiscoveryFilters,
    create_outlet_from_discovery,
    curated_fallback,
    discover_outlets,
    load_curated_candidates,
    slugify,
)
from free_press.llm.cascade import ProviderCascade
from free_press.llm.providers.base import EnrichmentProvider
from free_press.repository import OutletRepository
from free_press.storage import load_seed_outlets


class StaticProvider(EnrichmentProvider):
    def __init__(self, answer):
        super().__init__(ProviderConfig(name="openai", model="fake"), api_key="k")
        self.answer = answer
        self.prompts = []

    def generate(self, prompt, system_prompt=None):
        self.prompts.append(prompt)
        return self.answer


def _seeded() -> OutletRepository:
    repository = OutletRepository()
    for outlet in load_seed_outlets():
        repository.add(outlet)
    return repository


def test_slugify():
    assert slugify("The Young Turks") == "the-young-turks"
    assert slugify("  Vox Media!! ") == "vox-media"
    assert slugify("???") == "outlet"


def test_create_outlet_from_discovery_defaults():
    candidate = Candidate(name="Joe Rogan", website="", media_type="social", estimated_audience=11_000_000)
    outlet = create_outlet_from_discovery(candidate, DiscoveryFilters(country="us"))

    assert outlet.id == "joe-rogan"
    assert outlet.bias_score == 0.0
    assert outlet.free_press_score == 50
    assert outlet.transparency == 50
    assert outlet.outlet_type == "influencer"
    assert outlet.country == "United States"
    assert outlet.ownership == FreeformOwnership("Unknown - To be researched")
    assert outlet.metrics["avgMonthlyAudience"] == "11.0M"
    assert outlet.audience_size == 11_000_000


def test_discover_adds_new_and_reports_duplicates():
    answer = json.dumps(
        [
            {"name": "CNN International", "website": "https://edition.cnn.com", "mediaType": "tv"},
            {"name": "Cable News", "website": "cnn.com", "mediaType": "tv"},
            {"name": "Axios", "website": "https://www.axios.com", "mediaType": "print", "estimatedAudience": 3000000},
            {"name": "", "website": "https://empty.example.com"},
        ]
    )
    repository = _seeded()
    provider = StaticProvider(answer)

    results = discover_outlets(repository, ProviderCascade([provider]), DiscoveryFilters(outlets_to_find=5))

    assert "CNN" in provider.prompts[0]
    by_name = {r.candidate.name: r for r in results}
    assert len(results) == 3
    assert by_name["Cable News"].success is False
    assert by_name["Cable News"].matched_existing == "CNN"
    assert by_name["Cable News"].match_type == "domain"
    assert by_name["Axios"].success is True
    assert by_name["Axios"].source == "openai"
    assert repository.get("axios").audience_size == 3_000_000


def test_discover_respects_outlets_to_find():
    answer = json.dumps([{"name": f"Outlet Number {chr(65 + i) * 3}"} for i in range(6)])
    repository = OutletRepository()

    results = discover_outlets(repository, ProviderCascade([StaticProvider(answer)]), DiscoveryFilters(outlets_to_find=2))

    assert len(results) == 2
    assert repository.count() == 2


def test_discover_falls_back_to_curated_list():
    repository = OutletRepository()
    filters = DiscoveryFilters(country="us", media_types=["tv"], min_audience=1_000_000, outlets_to_find=50)

    results = discover_outlets(repository, ProviderCascade([StaticProvider(None)]), filters)

    assert results
    assert all(r.source == CURATED_SOURCE for r in results)
    assert all(r.candidate.media_type == "tv" for r in results)
    assert all("United States" in r.candidate.country for r in results)


def test_discover_without_cascade_uses_curated_list():
    results = discover_outlets(OutletRepository(), None, DiscoveryFilters(outlets_to_find=3))
    assert len(results) == 3
    assert all(r.source == CURATED_SOURCE for r in results)


def test_discover_without_answer_or_fallback_returns_nothing():
    repository = OutletRepository()
    assert discover_outlets(repository, ProviderCascade([StaticProvider("not json")]), curated=False) == []
    assert repository.count() == 0


def test_curated_fallback_skips_existing_names():
    candidates = load_curated_candidates()
    first = candidates[0]
    filters = DiscoveryFilters(country="all", media_types=[first.media_type], min_audience=0)

    remaining = curated_fallback(filters, {first.name.lower()})

    assert first.name not in [c.name for c in remaining]


def test_discover_skips_id_collision():
    repository = OutletRepository()
    repository.add(Outlet(id="axios", name="Completely Different", website="https://different.example.com"))
    answer = json.dumps([{"name": "Axios", "website": "https://www.axios.com"}])

    results = discover_outlets(repository, ProviderCascade([StaticProvider(answer)]))

    assert results[0].success is False
    assert "already exists" in results[0].error


def test_discover_tolerates_non_finite_audience():
    answer = '[{"name": "Brand New Outlet", "website": "https://brandnew.example.org", "estimatedAudience": NaN}]'
    repository = OutletRepository()

    results = discover_outlets(repository, ProviderCascade([StaticProvider(answer)]), DiscoveryFilters(min_audience=250_000))

    assert results[0].success is True
    outlet = repository.get("brand-new-outlet")
    assert outlet.audience_size is None
    assert outlet.metrics["avgMonthlyAudience"] == "250K"
