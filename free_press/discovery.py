"""
Outlet discovery.

Asks the provider cascade for new outlets matching a set of filters, falls
back to a bundled curated list when no provider answers, and gates every
candidate through the duplicate check before it is added to the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
import logging
import re
from typing import Any

import yaml

from .core.types import Candidate, FreeformOwnership, FundingSources, Outlet
from .llm.cascade import ProviderCascade
from .llm.json_parser import parse_json_array
from .llm.prompts import SYSTEM_PROMPTS, build_discovery_prompt, country_label
from .logging_utils import log_event
from .repository import OutletRepository


logger = logging.getLogger(__name__)

CURATED_SOURCE = "curated list"
UNRESEARCHED_OWNERSHIP = "Unknown - To be researched"
_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass
class DiscoveryFilters:
    """Criteria for outlet discovery.

    Attributes:
        country: Country or region key ("all", "us", "uk", ...)
        media_types: Media types to look for; the first is the default for candidates without one
        min_audience: Minimum monthly audience
        outlets_to_find: Maximum number of candidates to process
    """

    country: str = "all"
    media_types: list[str] = field(default_factory=lambda: ["tv", "print", "social"])
    min_audience: int = 1_000_000
    outlets_to_find: int = 12


@dataclass
class DiscoveryResult:
    """Outcome for one candidate.

    Attributes:
        outlet_id: Slug derived from the candidate name
        success: True when the candidate was added to the catalog
        candidate: The candidate as proposed
        source: Provider name or "curated list"
        matched_existing: Name of the existing outlet it duplicates, if any
        match_type: How it matched ("exact", "similar", "partial", "domain")
        error: Human-readable reason for a failure
    """

    outlet_id: str
    success: bool
    candidate: Candidate
    source: str
    matched_existing: str | None = None
    match_type: str | None = None
    error: str | None = None


def slugify(text: str) -> str:
    return _SLUG_RE.sub("-", text.lower()).strip("-") or "outlet"


def _format_audience_label(audience: int) -> str:
    if audience >= 1_000_000:
        return f"{audience / 1_000_000:.1f}M"
    return f"{audience / 1_000:.0f}K"


def create_outlet_from_discovery(candidate: Candidate, filters: DiscoveryFilters) -> Outlet:
    """Build a placeholder outlet for a discovered candidate.

    Scores start neutral (bias 0, sub-scores 50) until research fills them in.
    """
    media_type = candidate.media_type or (filters.media_types[0] if filters.media_types else None)
    audience = candidate.estimated_audience or filters.min_audience
    return Outlet(
        id=slugify(candidate.name),
        name=candidate.name,
        website=candidate.website,
        country=candidate.country or country_label(filters.country),
        description=candidate.description or f"{candidate.name} is a media outlet.",
        outlet_type="influencer" if candidate.media_type == "social" else "traditional",
        media_type=media_type,
        bias_score=0.0,
        free_press_score=50,
        fact_check_accuracy=50,
        editorial_independence=50,
        transparency=50,
        perspectives="multiple",
        ownership=FreeformOwnership(UNRESEARCHED_OWNERSHIP),
        funding=FundingSources(["Unknown"]),
        metrics={"type": media_type, "avgMonthlyAudience": _format_audience_label(audience)},
        audience_size=candidate.estimated_audience,
    )


def load_curated_candidates() -> list[Candidate]:
    text = resources.files("free_press.data").joinpath("curated_outlets.yaml").read_text(encoding="utf-8")
    raw = yaml.safe_load(text) or {}
    return [Candidate.from_dict(item) for item in raw.get("outlets", []) if isinstance(item, dict)]


def curated_fallback(filters: DiscoveryFilters, existing_names: set[str]) -> list[Candidate]:
    """Curated candidates matching the filters and not already in the catalog."""
    region = country_label(filters.country).lower()
    results = []
    for candidate in load_curated_candidates():
        if candidate.name.lower().strip() in existing_names:
            continue
        if filters.country != "all" and region not in candidate.country.lower():
            continue
        if candidate.media_type not in filters.media_types:
            continue
        if (candidate.estimated_audience or 0) < filters.min_audience:
            continue
        results.append(candidate)
    return results


def _candidates_from_answer(items: list[Any]) -> list[Candidate]:
    return [Candidate.from_dict(item) for item in items if isinstance(item, dict)]


def discover_outlets(
    repository: OutletRepository,
    cascade: ProviderCascade | None,
    filters: DiscoveryFilters | None = None,
    max_prompt_names: int = 50,
    curated: bool = True,
) -> list[DiscoveryResult]:
    """Propose new outlets and add the ones that are not duplicates.

    Args:
        repository: Catalog to check against and insert into
        cascade: Providers to ask; None or an empty cascade goes straight to the curated list
        filters: Discovery criteria
        max_prompt_names: How many existing names the prompt lists for exclusion
        curated: Whether to fall back to the curated list when no provider answers

    Returns:
        One result per processed candidate, at most ``filters.outlets_to_find``
    """
    filters = filters or DiscoveryFilters()
    existing = repository.get_all()
    existing_names = {outlet.name.lower().strip() for outlet in existing}

    candidates: list[Candidate] | None = None
    source = CURATED_SOURCE
    if cascade:
        prompt = build_discovery_prompt(
            filters.outlets_to_find,
            filters.country,
            filters.media_types,
            filters.min_audience,
            [outlet.name for outlet in existing],
            max_names=max_prompt_names,
        )
        answer = cascade.generate(prompt, SYSTEM_PROMPTS["discovery"])
        if answer is not None:
            items = parse_json_array(answer.text)
            if items is not None:
                candidates = _candidates_from_answer(items)
                source = answer.provider
    if candidates is None:
        if not curated:
            logger.warning("No provider answered and the curated fallback is disabled")
            return []
        logger.info("All providers failed, using curated fallback list")
        candidates = curated_fallback(filters, existing_names)

    results: list[DiscoveryResult] = []
    for candidate in candidates:
        if len(results) >= filters.outlets_to_find:
            break
        normalized = candidate.name.lower().strip()
        if not normalized:
            continue

        match = repository.resolver.find_match(candidate, repository.get_all())
        if match is not None:
            results.append(
                DiscoveryResult(
                    outlet_id=slugify(candidate.name),
                    success=False,
                    candidate=candidate,
                    source=source,
                    matched_existing=match.outlet.name,
                    match_type=match.match_type,
                    error=f'"{candidate.name}" matches existing outlet "{match.outlet.name}" ({match.match_type} match)',
                )
            )
            continue

        outlet = create_outlet_from_discovery(candidate, filters)
        stored = repository.add(outlet)
        if stored is not outlet:
            results.append(
                DiscoveryResult(
                    outlet_id=outlet.id,
                    success=False,
                    candidate=candidate,
                    source=source,
                    matched_existing=stored.name,
                    error=f'"{candidate.name}" already exists in database',
                )
            )
            continue
        results.append(DiscoveryResult(outlet_id=outlet.id, success=True, candidate=candidate, source=source))

    added = sum(1 for r in results if r.success)
    log_event(logger, "Discovery complete", source=source, added=added, duplicates=len(results) - added)
    return results
