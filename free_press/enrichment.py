"""
AI-assisted outlet research.

Each enrichment step asks the provider cascade one research question about an
outlet, parses the JSON answer and turns it into repository updates:
- ownership: structured ownership record
- funding: structured funding record, plus sponsors and stakeholders
- legal: raw legal research, with defamation cases merged into lawsuits
- accountability: correction policy, ethics code and fact-checking practices
- audience: raw audience research and a total audience size

A step that gets no answer, or an answer that is not a JSON object, writes
nothing. After the steps run, scores are recomputed from the updated record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Iterable

from .core.scoring import ScoreResult, calculate_scores
from .core.types import (
    Accountability,
    Lawsuit,
    Outlet,
    Sponsor,
    Stakeholder,
    StructuredFunding,
    StructuredOwnership,
    _number,
)
from .llm.cascade import ProviderCascade
from .llm.json_parser import parse_json_object
from .llm.prompts import SYSTEM_PROMPTS, build_research_prompt
from .logging_utils import log_event
from .repository import OutletRepository


logger = logging.getLogger(__name__)

ALL_STEPS = ("ownership", "funding", "legal", "accountability", "audience")

_OUTCOME_STATUS = {
    "pending": "active",
    "ongoing": "active",
    "active": "active",
    "settled": "settled",
    "lost": "settled",
    "won": "dismissed",
    "dismissed": "dismissed",
}


@dataclass
class StepResult:
    step: str
    success: bool
    provider: str | None = None
    error: str | None = None
    fields: list[str] = field(default_factory=list)


@dataclass
class RefreshReport:
    """Outcome of refreshing one outlet.

    Attributes:
        outlet_id: Outlet that was refreshed
        steps: One result per requested step, in run order
        scores: Recomputed scores, or None if recomputation failed or the outlet vanished
    """

    outlet_id: str
    steps: list[StepResult] = field(default_factory=list)
    scores: ScoreResult | None = None

    @property
    def succeeded(self) -> int:
        return sum(1 for step in self.steps if step.success)

    @property
    def failed(self) -> int:
        return sum(1 for step in self.steps if not step.success)

    @property
    def updated_fields(self) -> list[str]:
        names: list[str] = []
        for step in self.steps:
            names.extend(name for name in step.fields if name not in names)
        return names


ProgressCallback = Callable[[int, int, StepResult], None]


def _count(value: Any) -> float:
    """Audience figure as a finite number; "1,200,000" is accepted, anything else counts as 0."""
    if isinstance(value, str):
        value = value.replace(",", "")
    number = _number(value)
    return number if number is not None else 0.0


def ownership_updates(payload: dict[str, Any], outlet: Outlet) -> dict[str, Any] | None:
    ownership = StructuredOwnership.from_dict(payload)
    if not (ownership.details or ownership.parent or ownership.ultimate_owner or ownership.shareholders):
        return None
    return {"ownership": ownership}


def funding_updates(payload: dict[str, Any], outlet: Outlet) -> dict[str, Any] | None:
    funding = StructuredFunding.from_dict(payload)
    if not (funding.sources or funding.details):
        return None
    updates: dict[str, Any] = {"funding": funding}
    sponsors = [Sponsor.from_dict(item) for item in payload.get("sponsors") or [] if isinstance(item, dict)]
    if sponsors:
        updates["sponsors"] = sponsors
    stakeholders = [
        Stakeholder.from_dict(item) for item in payload.get("stakeholders") or [] if isinstance(item, dict)
    ]
    if stakeholders:
        updates["stakeholders"] = stakeholders
    return updates


def _lawsuit_key(year: int | None, party: str | None) -> tuple[int | None, str]:
    return year, (party or "").strip().lower()


def legal_updates(payload: dict[str, Any], outlet: Outlet) -> dict[str, Any] | None:
    updates: dict[str, Any] = {"legal_cases": payload}
    cases = payload.get("defamationCases")
    if not isinstance(cases, list):
        return updates

    lawsuits = list(outlet.lawsuits)
    seen = {_lawsuit_key(l.year, l.case) for l in lawsuits}
    added = 0
    for raw in cases:
        if not isinstance(raw, dict):
            continue
        plaintiff = str(raw.get("plaintiff") or "").strip()
        lawsuit = Lawsuit.from_dict(
            {
                "type": "defamation",
                "case": plaintiff or None,
                "year": raw.get("year"),
                "amount": raw.get("amount"),
                "description": raw.get("summary") or f"Defamation suit brought by {plaintiff or 'unknown plaintiff'}",
                "status": _OUTCOME_STATUS.get(str(raw.get("outcome") or "").lower(), "active"),
            }
        )
        key = _lawsuit_key(lawsuit.year, lawsuit.case)
        if key in seen:
            continue
        seen.add(key)
        lawsuits.append(lawsuit)
        added += 1
    if added:
        updates["lawsuits"] = lawsuits
    return updates


def accountability_updates(payload: dict[str, Any], outlet: Outlet) -> dict[str, Any] | None:
    raw = dict(payload)
    if "awards" not in raw and isinstance(raw.get("journalismAwards"), list):
        raw["awards"] = raw["journalismAwards"]
    accountability = Accountability.from_dict(raw)
    if accountability.correction_policy is None and accountability.ethics_code is None and accountability.fact_checking is None:
        return None

    policy = accountability.correction_policy
    ethics = accountability.ethics_code
    checking = accountability.fact_checking
    accountability.corrections = (policy.quality if policy and policy.quality else "unknown")
    accountability.details = (
        f"Correction policy: {'Yes' if policy and policy.exists else 'No'}. "
        f"Ethics code: {'Yes' if ethics and ethics.exists else 'No'}. "
        f"Fact-checking: {'Has team' if checking and checking.has_team else 'No dedicated team'}."
    )
    return {"accountability": accountability}


def total_audience(payload: dict[str, Any]) -> int:
    """Total reach if reported, else visitors plus average TV viewers plus social followers."""
    reach = _count(payload.get("totalReach"))
    if reach:
        return int(reach)
    total = _count(payload.get("monthlyVisitors"))
    tv = payload.get("tvViewership")
    if isinstance(tv, dict):
        total += _count(tv.get("averageViewers"))
    social = payload.get("socialMedia")
    if isinstance(social, dict):
        total += sum(_count(v) for v in social.values())
    return int(total)


def audience_updates(payload: dict[str, Any], outlet: Outlet) -> dict[str, Any] | None:
    return {"audience_data": payload, "audience_size": total_audience(payload)}


_STEP_CONVERTERS: dict[str, Callable[[dict[str, Any], Outlet], dict[str, Any] | None]] = {
    "ownership": ownership_updates,
    "funding": funding_updates,
    "legal": legal_updates,
    "accountability": accountability_updates,
    "audience": audience_updates,
}


def run_step(repository: OutletRepository, outlet_id: str, step: str, cascade: ProviderCascade) -> StepResult:
    """Run one research step against one outlet and write what it finds."""
    converter = _STEP_CONVERTERS.get(step)
    if converter is None:
        raise ValueError(f"Unknown enrichment step: {step}. Supported: {', '.join(ALL_STEPS)}")
    outlet = repository.get(outlet_id)
    if outlet is None:
        return StepResult(step=step, success=False, error="Outlet not found")

    answer = cascade.generate(build_research_prompt(step, outlet), SYSTEM_PROMPTS[step])
    if answer is None:
        return StepResult(step=step, success=False, error="No AI response")
    payload = parse_json_object(answer.text)
    if payload is None:
        return StepResult(step=step, success=False, provider=answer.provider, error="Failed to parse AI response")
    updates = converter(payload, outlet)
    if not updates:
        return StepResult(step=step, success=False, provider=answer.provider, error="No usable data in response")
    if repository.update(outlet_id, updates) is None:
        return StepResult(step=step, success=False, provider=answer.provider, error="Outlet not found")
    return StepResult(step=step, success=True, provider=answer.provider, fields=sorted(updates))


def refresh_outlet(
    repository: OutletRepository,
    outlet_id: str,
    cascade: ProviderCascade,
    steps: Iterable[str] = ALL_STEPS,
    progress: ProgressCallback | None = None,
) -> RefreshReport:
    """Run research steps for one outlet, then recompute its scores.

    Step failures are recorded in the report and never stop the remaining steps.

    Args:
        repository: Repository holding the outlet
        outlet_id: Outlet to refresh
        cascade: Providers used for research
        steps: Step names to run, in order
        progress: Optional callback receiving (index, total, step result) after each step

    Returns:
        RefreshReport with per-step outcomes and the recomputed scores
    """
    step_names = list(steps)
    unknown = [name for name in step_names if name not in _STEP_CONVERTERS]
    if unknown:
        raise ValueError(f"Unknown enrichment step: {', '.join(unknown)}. Supported: {', '.join(ALL_STEPS)}")

    report = RefreshReport(outlet_id=outlet_id)
    for index, step in enumerate(step_names, start=1):
        try:
            result = run_step(repository, outlet_id, step, cascade)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Step %s failed for %s: %s", step, outlet_id, exc)
            result = StepResult(step=step, success=False, error=str(exc) or type(exc).__name__)
        report.steps.append(result)
        log_event(
            logger,
            "Enrichment step finished",
            outlet_id=outlet_id,
            step=step,
            success=result.success,
            provider=result.provider,
            error=result.error,
        )
        if progress is not None:
            progress(index, len(step_names), result)

    outlet = repository.get(outlet_id)
    if outlet is not None:
        report.scores = calculate_scores(outlet)
        if report.scores is not None:
            repository.update(outlet_id, report.scores.as_updates())
    return report
