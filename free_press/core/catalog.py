"""Read-only browsing helpers over outlet snapshots: bias bands, filters, comparison, stats."""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from .types import BIAS_MAX, BIAS_MIN, Outlet

BIAS_CATEGORIES: dict[str, dict[str, Any]] = {
    "far-left": {"label": "Far Left", "range": (-2.0, -1.5)},
    "left": {"label": "Left", "range": (-1.49, -0.5)},
    "center": {"label": "Center", "range": (-0.49, 0.49)},
    "right": {"label": "Right", "range": (0.5, 1.49)},
    "far-right": {"label": "Far Right", "range": (1.5, 2.0)},
}

SORT_KEYS = ("score", "name")


def bias_category(score: float) -> str:
    value = max(BIAS_MIN, min(BIAS_MAX, score))
    if value <= -1.5:
        return "far-left"
    if value <= -0.5:
        return "left"
    if value < 0.5:
        return "center"
    if value < 1.5:
        return "right"
    return "far-right"


def is_scrapable(outlet: Outlet) -> bool:
    website = outlet.website.strip()
    return bool(website) and website != "N/A"


def filter_outlets(
    outlets: Iterable[Outlet],
    country: str | None = None,
    bias: str | None = None,
    media_type: str | None = None,
    query: str | None = None,
    sort: str = "score",
) -> list[Outlet]:
    """Filter and sort outlets the way the browse page does.

    Args:
        outlets: Outlets to filter
        country: Exact country name (case-insensitive); None or "all" keeps every country
        bias: Bias category key from BIAS_CATEGORIES
        media_type: Media type such as "tv" or "social"
        query: Substring matched against name and description
        sort: "score" (highest Free Press Score first) or "name"

    Returns:
        A new list of matching outlets
    """
    if sort not in SORT_KEYS:
        raise ValueError(f"Unsupported sort: {sort}. Supported: {', '.join(SORT_KEYS)}")
    needle = (query or "").strip().lower()
    results = []
    for outlet in outlets:
        if country and country.lower() != "all" and outlet.country.lower() != country.lower():
            continue
        if bias and bias_category(outlet.bias_score) != bias:
            continue
        if media_type and (outlet.media_type or "").lower() != media_type.lower():
            continue
        if needle and needle not in outlet.name.lower() and needle not in outlet.description.lower():
            continue
        results.append(outlet)

    if sort == "name":
        results.sort(key=lambda o: o.name.lower())
    else:
        results.sort(key=lambda o: o.free_press_score, reverse=True)
    return results


def compare_outlets(outlets: Iterable[Outlet], ids: list[str]) -> list[dict[str, Any]]:
    by_id = {outlet.id: outlet for outlet in outlets}
    rows = []
    for outlet_id in ids:
        outlet = by_id.get(outlet_id)
        if outlet is None:
            continue
        rows.append(
            {
                "id": outlet.id,
                "name": outlet.name,
                "country": outlet.country,
                "bias": bias_category(outlet.bias_score),
                "biasScore": outlet.bias_score,
                "freePressScore": outlet.free_press_score,
                "factCheckAccuracy": outlet.fact_check_accuracy,
                "editorialIndependence": outlet.editorial_independence,
                "transparency": outlet.transparency,
                "retractions": len(outlet.retractions),
                "lawsuits": len(outlet.lawsuits),
                "scandals": len(outlet.scandals),
            }
        )
    return rows


def catalog_stats(outlets: Iterable[Outlet]) -> dict[str, Any]:
    items = list(outlets)
    total = len(items)
    mean_score = round(sum(o.free_press_score for o in items) / total, 1) if total else 0.0
    return {
        "total": total,
        "scrapable": sum(1 for o in items if is_scrapable(o)),
        "averageFreePressScore": mean_score,
        "byCountry": dict(Counter(o.country or "Unknown" for o in items)),
        "byBias": dict(Counter(bias_category(o.bias_score) for o in items)),
    }
