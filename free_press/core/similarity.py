"""
Name and domain similarity used by duplicate detection.

Outlet names are compared after normalization (leading "The", trailing
format words like "Show" or "News", and punctuation removed), then scored
with a containment ratio or a Levenshtein ratio. Websites are compared by
hostname with any leading "www." dropped.
"""

from __future__ import annotations

import re
from typing import Literal
from urllib.parse import urlsplit

from rapidfuzz.distance import Levenshtein

MatchType = Literal["exact", "similar", "partial", "domain"]

SINGLE_CHECK_THRESHOLD = 0.85
BULK_SCAN_THRESHOLD = 0.80

_LEADING_THE_RE = re.compile(r"^the\s+")
_SUFFIX_RE = re.compile(r"\s+(show|podcast|news|network|media|channel|tv|radio)$")
_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


def _normalize_once(name: str) -> str:
    value = name.lower()
    value = _LEADING_THE_RE.sub("", value)
    value = _SUFFIX_RE.sub("", value)
    value = _PUNCT_RE.sub("", value)
    value = _SPACE_RE.sub(" ", value)
    return value.strip()


def normalize_name(name: str | None) -> str:
    """Reduce an outlet name to its comparable core.

    The pass repeats until the value is stable, so stacked suffixes
    ("Daily Show Podcast") collapse the same way as single ones.
    """
    value = _normalize_once(name or "")
    while True:
        again = _normalize_once(value)
        if again == value:
            return value
        value = again


def extract_domain(url: str | None) -> str | None:
    """Return the lowercased hostname of ``url`` without a leading "www.".

    A missing scheme is treated as https. Empty or malformed input yields None.
    """
    if not url or not isinstance(url, str):
        return None
    text = url.strip()
    if not text or any(ch.isspace() for ch in text):
        return None
    if not text.lower().startswith(("http://", "https://")):
        text = f"https://{text}"
    try:
        host = urlsplit(text).hostname
    except ValueError:
        return None
    # Placeholders like "N/A" and bare hosts like "localhost" never count as a domain.
    if not host or "." not in host:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host or None


def similarity(a: str, b: str) -> float:
    """Similarity of two strings in [0, 1].

    Equal strings (case-insensitive) score 1.0. When one contains the other
    the score is the length ratio; otherwise it is one minus the normalized
    Levenshtein distance.
    """
    s1 = a.lower()
    s2 = b.lower()
    if s1 == s2:
        return 1.0
    longer, shorter = (s1, s2) if len(s1) >= len(s2) else (s2, s1)
    if shorter in longer:
        return len(shorter) / len(longer)
    max_len = len(longer)
    return (max_len - Levenshtein.distance(s1, s2)) / max_len


def name_similarity(a: str | None, b: str | None) -> float:
    return similarity(normalize_name(a), normalize_name(b))


def domains_match(a_site: str | None, b_site: str | None) -> bool:
    a_domain = extract_domain(a_site)
    return a_domain is not None and a_domain == extract_domain(b_site)


def classify_match(
    a_name: str | None,
    a_site: str | None,
    b_name: str | None,
    b_site: str | None,
    threshold: float,
) -> MatchType | None:
    """Classify how two outlets match, or return None when they do not.

    Domain equality wins, then equal normalized names, then similarity
    strictly above ``threshold`` ("partial" when one name contains the other).
    """
    if domains_match(a_site, b_site):
        return "domain"
    a_norm = normalize_name(a_name)
    b_norm = normalize_name(b_name)
    if a_norm == b_norm:
        return "exact"
    if similarity(a_norm, b_norm) > threshold:
        if a_norm in b_norm or b_norm in a_norm:
            return "partial"
        return "similar"
    return None
