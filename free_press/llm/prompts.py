"""Prompt loading and rendering helpers for research and discovery."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from ..core.types import Outlet


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"

SYSTEM_PROMPTS = {
    "ownership": (
        "You are a media ownership researcher. Report verified corporate ownership facts "
        "about news organizations and return only JSON."
    ),
    "funding": (
        "You are a media finance analyst. Describe how news organizations are funded "
        "based on public information and return only JSON."
    ),
    "legal": (
        "You are a legal researcher specializing in media law. Research and return factual "
        "legal cases involving media outlets. Only include verified cases."
    ),
    "accountability": (
        "You are a journalism standards expert. Evaluate media outlets on their accountability "
        "practices, correction policies, and editorial standards."
    ),
    "audience": (
        "You are a media analytics expert. Provide accurate audience and viewership data for "
        "media outlets based on publicly available information."
    ),
    "discovery": "You are a media research assistant. Return ONLY valid JSON arrays, no markdown or explanation.",
}

COUNTRY_LABELS = {
    "all": "worldwide",
    "us": "United States",
    "uk": "United Kingdom",
    "canada": "Canada",
    "australia": "Australia",
    "germany": "Germany",
    "france": "France",
    "spain": "Spain",
    "italy": "Italy",
    "japan": "Japan",
    "india": "India",
    "brazil": "Brazil",
    "mexico": "Mexico",
    "argentina": "Argentina",
    "middle-east": "Middle East",
    "africa": "Africa",
    "asia-pacific": "Asia Pacific",
    "latin-america": "Latin America",
    "europe": "Europe",
}

MEDIA_TYPE_LABELS = {
    "tv": "Television",
    "print": "Print/Newspaper",
    "radio": "Radio",
    "podcast": "Podcast",
    "social": "Social Media/Influencer",
    "legacy": "Legacy/Wire Service",
}


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(template_name: str, /, **values: str) -> str:
    template = _load_template(template_name)
    return template.format(**values)


def country_label(value: str) -> str:
    return COUNTRY_LABELS.get(value, value)


def media_type_label(value: str) -> str:
    return MEDIA_TYPE_LABELS.get(value, value)


def format_audience(num: int) -> str:
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.1f} billion"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f} million"
    if num >= 1_000:
        return f"{num / 1_000:.0f} thousand"
    return str(num)


def build_research_prompt(step: str, outlet: Outlet) -> str:
    """Render the research prompt for one enrichment step."""
    website_note = f" ({outlet.website})" if outlet.website else ""
    return _render_template(step, name=outlet.name, website_note=website_note)


def build_discovery_prompt(
    count: int,
    country: str,
    media_types: list[str],
    min_audience: int,
    existing_names: list[str],
    max_names: int = 50,
) -> str:
    excluded = ", ".join(existing_names[:max_names]) or "(none)"
    return _render_template(
        "discovery",
        count=str(count),
        region=country_label(country),
        media_types=", ".join(media_type_label(t) for t in media_types),
        audience=format_audience(min_audience),
        excluded=excluded,
    )
