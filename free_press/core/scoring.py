"""
Free Press Score calculation.

Three sub-scores are derived from whatever research data an outlet has:
- fact-check accuracy from retractions, defamation suits and correction practices
- editorial independence from ownership, government funding and stakeholders
- transparency from ownership, funding and accountability disclosures

The composite is the weighted mean 0.35 / 0.35 / 0.30, rounded half up.
Missing data never lowers a score below its base; it only withholds bonuses.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from .types import Outlet, StructuredFunding, StructuredOwnership

if TYPE_CHECKING:
    from ..repository import OutletRepository


logger = logging.getLogger(__name__)

FACT_CHECK_BASE = 80
RETRACTION_PENALTY = 5
RETRACTION_CAP = 30
DEFAMATION_PENALTY = 8
DEFAMATION_CAP = 20

INDEPENDENCE_BASE = 75
TRANSPARENCY_BASE = 70

WEIGHT_FACT_CHECK = 35
WEIGHT_INDEPENDENCE = 35
WEIGHT_TRANSPARENCY = 30


@dataclass(frozen=True)
class ScoreResult:
    fact_check_accuracy: int
    editorial_independence: int
    transparency: int
    free_press_score: int

    def as_updates(self) -> dict[str, Any]:
        return {
            "fact_check_accuracy": self.fact_check_accuracy,
            "editorial_independence": self.editorial_independence,
            "transparency": self.transparency,
            "free_press_score": self.free_press_score,
        }


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def _fact_check_accuracy(outlet: Outlet) -> int:
    score = FACT_CHECK_BASE
    score -= min(len(outlet.retractions) * RETRACTION_PENALTY, RETRACTION_CAP)
    defamation = sum(1 for lawsuit in outlet.lawsuits if lawsuit.is_defamation())
    score -= min(defamation * DEFAMATION_PENALTY, DEFAMATION_CAP)

    accountability = outlet.accountability
    if accountability is not None:
        if accountability.correction_policy is not None and accountability.correction_policy.exists:
            score += 5
        if accountability.fact_checking is not None and accountability.fact_checking.has_team:
            score += 5
    return _clamp(score)


def _editorial_independence(outlet: Outlet) -> int:
    score = INDEPENDENCE_BASE

    # First matching keyword wins: "public broadcaster (government)" counts as public.
    ownership_text = outlet.ownership.type_text() if outlet.ownership is not None else ""
    if "public" in ownership_text or "nonprofit" in ownership_text:
        score += 10
    elif "state" in ownership_text or "government" in ownership_text:
        score -= 20
    elif "family" in ownership_text or "independent" in ownership_text:
        score += 5

    if isinstance(outlet.funding, StructuredFunding) and outlet.funding.has_gov_funding():
        score -= 15

    stakeholders = len(outlet.stakeholders)
    if stakeholders > 3:
        score += 5
    elif stakeholders == 1:
        score -= 5
    return _clamp(score)


def _transparency(outlet: Outlet) -> int:
    score = TRANSPARENCY_BASE

    ownership = outlet.ownership
    if isinstance(ownership, StructuredOwnership) and ownership.details:
        score += 5
        if ownership.shareholders:
            score += 5
        if ownership.confidence == "high":
            score += 5

    funding = outlet.funding
    if isinstance(funding, StructuredFunding):
        if funding.sources:
            score += 5
        if funding.financial_transparency == "high":
            score += 10
        elif funding.financial_transparency == "medium":
            score += 5

    accountability = outlet.accountability
    if accountability is not None:
        if accountability.correction_policy is not None and accountability.correction_policy.visible:
            score += 5
        if accountability.ethics_code is not None and accountability.ethics_code.exists:
            score += 5

    if outlet.board_members:
        score += 5
    return _clamp(score)


def composite_score(fact_check_accuracy: int, editorial_independence: int, transparency: int) -> int:
    """Weighted mean of the sub-scores, rounded half up in integer arithmetic."""
    weighted = (
        WEIGHT_FACT_CHECK * fact_check_accuracy
        + WEIGHT_INDEPENDENCE * editorial_independence
        + WEIGHT_TRANSPARENCY * transparency
    )
    return _clamp((weighted + 50) // 100)


def calculate_scores(outlet: Outlet) -> ScoreResult | None:
    """Compute all scores for an outlet, or None if its data cannot be scored."""
    try:
        fact_check = _fact_check_accuracy(outlet)
        independence = _editorial_independence(outlet)
        transparency = _transparency(outlet)
    except Exception:  # noqa: BLE001
        logger.warning("Error calculating scores for %s", getattr(outlet, "id", "?"), exc_info=True)
        return None
    return ScoreResult(
        fact_check_accuracy=fact_check,
        editorial_independence=independence,
        transparency=transparency,
        free_press_score=composite_score(fact_check, independence, transparency),
    )


def recompute_scores(repository: "OutletRepository", outlet_id: str) -> Outlet | None:
    """Recalculate and store scores for one outlet; prior scores stay when calculation fails."""
    outlet = repository.get(outlet_id)
    if outlet is None:
        return None
    result = calculate_scores(outlet)
    if result is None:
        return outlet
    return repository.update(outlet_id, result.as_updates())


def recompute_all(repository: "OutletRepository") -> int:
    updated = 0
    for outlet in repository.get_all():
        result = calculate_scores(outlet)
        if result is None:
            continue
        if repository.update(outlet.id, result.as_updates()) is not None:
            updated += 1
    return updated
