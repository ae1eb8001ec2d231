"""
Core domain models and business logic.

This package contains the outlet data model, similarity matching, duplicate
resolution, scoring and catalog helpers. None of it performs I/O.
"""

from .types import Candidate, DuplicateGroup, DuplicatePair, Outlet
from .similarity import classify_match, extract_domain, name_similarity, normalize_name, similarity
from .dedup import DuplicateResolver, MergePlan, MergeReport
from .scoring import ScoreResult, calculate_scores

__all__ = [
    "Outlet",
    "Candidate",
    "DuplicatePair",
    "DuplicateGroup",
    "normalize_name",
    "extract_domain",
    "similarity",
    "name_similarity",
    "classify_match",
    "DuplicateResolver",
    "MergePlan",
    "MergeReport",
    "ScoreResult",
    "calculate_scores",
]
