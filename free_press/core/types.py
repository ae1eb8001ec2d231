"""
Core data types for the Free Press catalog.

This module defines the outlet record and everything hanging off it:
- Outlet: A media organization with its scores and research data
- FreeformOwnership / StructuredOwnership: Ownership as plain text or a structured record
- FundingSources / StructuredFunding: Funding as a label list or a structured record
- Accountability: Correction policy, ethics code and fact-checking practices
- Retraction, Lawsuit, Scandal: Dated accountability events
- Stakeholder, BoardMember, Sponsor: Named entities around an outlet
- Candidate: A proposed outlet coming out of discovery
- DuplicatePair / DuplicateGroup: Results of the duplicate scan

Records arrive from seed files, the database and LLM research, so every
``from_dict`` is tolerant: missing keys take defaults, values of the wrong
type are treated as absent. Serialization uses the camelCase shape the
dashboard reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
import math
from typing import Any, Union

SCORE_MIN = 0
SCORE_MAX = 100
BIAS_MIN = -2.0
BIAS_MAX = 2.0

MATCH_TYPES = ("exact", "similar", "partial", "domain")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def clamp_score(value: Any, default: int = 0) -> int:
    number = _number(value)
    if number is None:
        return default
    return max(SCORE_MIN, min(SCORE_MAX, int(round(number))))


def clamp_bias(value: Any) -> float:
    number = _number(value)
    if number is None:
        return 0.0
    return max(BIAS_MIN, min(BIAS_MAX, float(number)))


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    # NaN and infinities count as absent.
    return number if math.isfinite(number) else None


def _text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _opt_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def _opt_int(value: Any) -> int | None:
    number = _number(value)
    return None if number is None else int(number)


def _flag(value: Any) -> bool:
    return value is True


def _mapping(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _mappings(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _texts(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in (_text(v).strip() for v in value) if item]


def _prune(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


# ── Accountability events ────────────────────────────────────────────────


@dataclass
class Retraction:
    date: str = ""
    title: str | None = None
    description: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Retraction":
        return cls(
            date=_text(raw.get("date")),
            title=_opt_text(raw.get("title")),
            description=_text(raw.get("description")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune({"date": self.date, "title": self.title, "description": self.description})


@dataclass
class Lawsuit:
    """A legal case against an outlet.

    Attributes:
        type: "defamation", "misinformation" or "other"
        status: "active", "settled" or "dismissed"
        amount: Settlement or claim amount, numeric or free text
    """

    description: str = ""
    status: str = "active"
    type: str | None = None
    date: str | None = None
    case: str | None = None
    year: int | None = None
    amount: float | str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Lawsuit":
        amount = raw.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, (int, float, str)):
            amount = None
        return cls(
            description=_text(raw.get("description")),
            status=_text(raw.get("status"), "active").lower() or "active",
            type=_opt_text(raw.get("type")),
            date=_opt_text(raw.get("date")),
            case=_opt_text(raw.get("case")),
            year=_opt_int(raw.get("year")),
            amount=amount,
        )

    def is_defamation(self) -> bool:
        if (self.type or "").lower() == "defamation":
            return True
        return "defamation" in self.description.lower()

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "date": self.date,
                "case": self.case,
                "year": self.year,
                "type": self.type,
                "status": self.status,
                "description": self.description,
                "amount": self.amount,
            }
        )


@dataclass
class Scandal:
    title: str = ""
    description: str = ""
    severity: str = "minor"
    date: str | None = None
    year: int | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Scandal":
        return cls(
            title=_text(raw.get("title")),
            description=_text(raw.get("description")),
            severity=_text(raw.get("severity"), "minor") or "minor",
            date=_opt_text(raw.get("date")),
            year=_opt_int(raw.get("year")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "date": self.date,
                "year": self.year,
                "title": self.title,
                "description": self.description,
                "severity": self.severity,
            }
        )


# ── People and organizations ─────────────────────────────────────────────


@dataclass
class Stakeholder:
    name: str = ""
    stake: str = ""
    entity: str | None = None
    political_lean: str = "unknown"
    description: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Stakeholder":
        return cls(
            name=_text(raw.get("name")),
            stake=_text(raw.get("stake")),
            entity=_opt_text(raw.get("entity")),
            political_lean=_text(raw.get("politicalLean"), "unknown") or "unknown",
            description=_text(raw.get("description")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "name": self.name,
                "stake": self.stake,
                "entity": self.entity,
                "politicalLean": self.political_lean,
                "description": self.description,
            }
        )


@dataclass
class BoardMember:
    name: str = ""
    position: str = ""
    background: str = ""
    political_lean: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "BoardMember":
        return cls(
            name=_text(raw.get("name")),
            position=_text(raw.get("position")),
            background=_text(raw.get("background")),
            political_lean=_opt_text(raw.get("politicalLean")),
            description=_opt_text(raw.get("description")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "name": self.name,
                "position": self.position,
                "background": self.background,
                "politicalLean": self.political_lean,
                "description": self.description,
            }
        )


@dataclass
class Sponsor:
    name: str = ""
    type: str = "advertiser"
    relationship: str = ""
    amount: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Sponsor":
        return cls(
            name=_text(raw.get("name")),
            type=_text(raw.get("type"), "advertiser").lower() or "advertiser",
            relationship=_text(raw.get("relationship")),
            amount=_opt_text(raw.get("amount")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {"name": self.name, "type": self.type, "amount": self.amount, "relationship": self.relationship}
        )


# ── Ownership ────────────────────────────────────────────────────────────


@dataclass
class Shareholder:
    name: str = ""
    stake: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "stake": self.stake}


@dataclass
class FreeformOwnership:
    """Ownership known only as a sentence, e.g. "Comcast (NBCUniversal)"."""

    text: str

    def type_text(self) -> str:
        return self.text.lower()

    def to_wire(self) -> str:
        return self.text


@dataclass
class StructuredOwnership:
    """Researched ownership record.

    Attributes:
        type: public, private, nonprofit, government, family or unknown
        details: Human-readable ownership summary
        confidence: "high", "medium" or "low"
    """

    type: str = "unknown"
    details: str = ""
    parent: str | None = None
    ultimate_owner: str | None = None
    shareholders: list[Shareholder] = field(default_factory=list)
    recent_changes: str | None = None
    cross_ownership: list[str] = field(default_factory=list)
    verified_date: str | None = None
    confidence: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "StructuredOwnership":
        shareholders = [
            Shareholder(name=_text(item.get("name")), stake=_text(item.get("stake")))
            for item in _mappings(raw.get("shareholders"))
        ]
        return cls(
            type=_text(raw.get("type"), "unknown") or "unknown",
            details=_text(raw.get("details")),
            parent=_opt_text(raw.get("parent")),
            ultimate_owner=_opt_text(raw.get("ultimateOwner")),
            shareholders=shareholders,
            recent_changes=_opt_text(raw.get("recentChanges")),
            cross_ownership=_texts(raw.get("crossOwnership")),
            verified_date=_opt_text(raw.get("verifiedDate")),
            confidence=_opt_text(raw.get("confidence")),
        )

    def type_text(self) -> str:
        return self.type.lower()

    def to_wire(self) -> dict[str, Any]:
        return _prune(
            {
                "type": self.type,
                "details": self.details,
                "parent": self.parent,
                "ultimateOwner": self.ultimate_owner,
                "shareholders": [s.to_dict() for s in self.shareholders],
                "recentChanges": self.recent_changes,
                "crossOwnership": self.cross_ownership or None,
                "verifiedDate": self.verified_date,
                "confidence": self.confidence,
            }
        )


Ownership = Union[FreeformOwnership, StructuredOwnership]


def parse_ownership(value: Any) -> Ownership | None:
    if isinstance(value, (FreeformOwnership, StructuredOwnership)):
        return value
    if isinstance(value, str):
        text = value.strip()
        return FreeformOwnership(text) if text else None
    if isinstance(value, dict):
        return StructuredOwnership.from_dict(value)
    return None


# ── Funding ──────────────────────────────────────────────────────────────


@dataclass
class FundingSources:
    """Funding known only as a list of labels, e.g. ["Advertising", "Subscriptions"]."""

    labels: list[str] = field(default_factory=list)

    def to_wire(self) -> list[str]:
        return list(self.labels)


@dataclass
class GovernmentFunding:
    has_gov_funding: bool = False
    details: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"hasGovFunding": self.has_gov_funding, "details": self.details}


@dataclass
class StructuredFunding:
    """Researched funding record.

    Attributes:
        financial_transparency: "high", "medium" or "low"
    """

    sources: list[str] = field(default_factory=list)
    details: str = ""
    sponsors: list[dict[str, Any]] = field(default_factory=list)
    political_donors: list[dict[str, Any]] = field(default_factory=list)
    government_funding: GovernmentFunding | None = None
    foundation_support: list[dict[str, Any]] = field(default_factory=list)
    estimated_revenue: str | None = None
    financial_transparency: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "StructuredFunding":
        gov_raw = _mapping(raw.get("governmentFunding"))
        government = None
        if gov_raw is not None:
            government = GovernmentFunding(
                has_gov_funding=_flag(gov_raw.get("hasGovFunding")),
                details=_text(gov_raw.get("details")),
            )
        return cls(
            sources=_texts(raw.get("sources")),
            details=_text(raw.get("details")),
            sponsors=_mappings(raw.get("sponsors")),
            political_donors=_mappings(raw.get("politicalDonors")),
            government_funding=government,
            foundation_support=_mappings(raw.get("foundationSupport")),
            estimated_revenue=_opt_text(raw.get("estimatedRevenue")),
            financial_transparency=_opt_text(raw.get("financialTransparency")),
        )

    def has_gov_funding(self) -> bool:
        return self.government_funding is not None and self.government_funding.has_gov_funding

    def to_wire(self) -> dict[str, Any]:
        return _prune(
            {
                "sources": list(self.sources),
                "details": self.details,
                "sponsors": self.sponsors or None,
                "politicalDonors": self.political_donors or None,
                "governmentFunding": self.government_funding.to_dict() if self.government_funding else None,
                "foundationSupport": self.foundation_support or None,
                "estimatedRevenue": self.estimated_revenue,
                "financialTransparency": self.financial_transparency,
            }
        )


Funding = Union[FundingSources, StructuredFunding]


def parse_funding(value: Any) -> Funding | None:
    if isinstance(value, (FundingSources, StructuredFunding)):
        return value
    if isinstance(value, list):
        return FundingSources(_texts(value))
    if isinstance(value, str):
        text = value.strip()
        return FundingSources([text]) if text else None
    if isinstance(value, dict):
        return StructuredFunding.from_dict(value)
    return None


# ── Accountability ───────────────────────────────────────────────────────


@dataclass
class CorrectionPolicy:
    exists: bool = False
    visible: bool = False
    url: str | None = None
    quality: str | None = None


@dataclass
class EthicsCode:
    exists: bool = False
    details: str = ""


@dataclass
class FactChecking:
    has_team: bool = False
    partnerships: list[str] = field(default_factory=list)


@dataclass
class Accountability:
    corrections: str = ""
    details: str = ""
    correction_policy: CorrectionPolicy | None = None
    ethics_code: EthicsCode | None = None
    fact_checking: FactChecking | None = None
    response_to_criticism: str | None = None
    notable_corrections: list[dict[str, Any]] = field(default_factory=list)
    awards: list[dict[str, Any]] = field(default_factory=list)
    memberships: list[str] = field(default_factory=list)
    accountability_score: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Accountability":
        policy_raw = _mapping(raw.get("correctionPolicy"))
        ethics_raw = _mapping(raw.get("ethicsCode"))
        checking_raw = _mapping(raw.get("factChecking"))
        return cls(
            corrections=_text(raw.get("corrections")),
            details=_text(raw.get("details")),
            correction_policy=CorrectionPolicy(
                exists=_flag(policy_raw.get("exists")),
                visible=_flag(policy_raw.get("visible")),
                url=_opt_text(policy_raw.get("url")),
                quality=_opt_text(policy_raw.get("quality")),
            )
            if policy_raw is not None
            else None,
            ethics_code=EthicsCode(
                exists=_flag(ethics_raw.get("exists")),
                details=_text(ethics_raw.get("details")),
            )
            if ethics_raw is not None
            else None,
            fact_checking=FactChecking(
                has_team=_flag(checking_raw.get("hasTeam")),
                partnerships=_texts(checking_raw.get("partnerships")),
            )
            if checking_raw is not None
            else None,
            response_to_criticism=_opt_text(raw.get("responseToCriticism")),
            notable_corrections=_mappings(raw.get("notableCorrections")),
            awards=_mappings(raw.get("awards")),
            memberships=_texts(raw.get("memberships")),
            accountability_score=_opt_text(raw.get("accountabilityScore")),
        )

    def to_dict(self) -> dict[str, Any]:
        policy = self.correction_policy
        ethics = self.ethics_code
        checking = self.fact_checking
        return _prune(
            {
                "corrections": self.corrections,
                "details": self.details,
                "correctionPolicy": _prune(
                    {"exists": policy.exists, "visible": policy.visible, "url": policy.url, "quality": policy.quality}
                )
                if policy
                else None,
                "ethicsCode": {"exists": ethics.exists, "details": ethics.details} if ethics else None,
                "factChecking": {"hasTeam": checking.has_team, "partnerships": list(checking.partnerships)}
                if checking
                else None,
                "responseToCriticism": self.response_to_criticism,
                "notableCorrections": self.notable_corrections or None,
                "awards": self.awards or None,
                "memberships": self.memberships or None,
                "accountabilityScore": self.accountability_score,
            }
        )


def parse_accountability(value: Any) -> Accountability | None:
    if isinstance(value, Accountability):
        return value
    if isinstance(value, dict):
        return Accountability.from_dict(value)
    return None


def _parse_records(value: Any, record_cls: type) -> list[Any]:
    if not isinstance(value, list):
        return []
    records = []
    for item in value:
        if isinstance(item, record_cls):
            records.append(item)
        elif isinstance(item, dict):
            records.append(record_cls.from_dict(item))
    return records


# ── Outlet ───────────────────────────────────────────────────────────────


@dataclass
class Outlet:
    """A media outlet tracked by the catalog.

    Attributes:
        id: Stable identifier, immutable once assigned
        name: Display name, the primary duplicate-detection signal
        website: Homepage URL or empty string; its domain is the secondary signal
        bias_score: Political lean from -2 (far left) to +2 (far right)
        free_press_score: Composite of the three sub-scores (0-100)
        fact_check_accuracy: Sub-score derived from retractions and lawsuits (0-100)
        editorial_independence: Sub-score derived from ownership and funding (0-100)
        transparency: Sub-score derived from disclosures (0-100)
        last_updated: ISO-8601 timestamp of the last mutation
    """

    id: str
    name: str
    website: str = ""
    country: str = ""
    description: str = ""
    logo: str = ""
    outlet_type: str = "traditional"
    media_type: str | None = None
    platform: str | None = None
    bias_score: float = 0.0
    free_press_score: int = 50
    fact_check_accuracy: int = 50
    editorial_independence: int = 50
    transparency: int = 50
    perspectives: str = "multiple"
    retractions: list[Retraction] = field(default_factory=list)
    lawsuits: list[Lawsuit] = field(default_factory=list)
    scandals: list[Scandal] = field(default_factory=list)
    ownership: Ownership | None = None
    funding: Funding | None = None
    accountability: Accountability | None = None
    stakeholders: list[Stakeholder] = field(default_factory=list)
    board_members: list[BoardMember] = field(default_factory=list)
    sponsors: list[Sponsor] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)
    legal_cases: dict[str, Any] | None = None
    audience_data: dict[str, Any] | None = None
    audience_size: int | None = None
    last_updated: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Outlet":
        """Build an outlet from its camelCase wire form.

        Raises:
            ValueError: If ``id`` or ``name`` is missing
        """
        outlet_id = _text(raw.get("id")).strip()
        name = _text(raw.get("name")).strip()
        if not outlet_id or not name:
            raise ValueError("Outlet requires non-empty 'id' and 'name'")
        return cls(
            id=outlet_id,
            name=name,
            website=_text(raw.get("website")).strip(),
            country=_text(raw.get("country")),
            description=_text(raw.get("description")),
            logo=_text(raw.get("logo")),
            outlet_type=_text(raw.get("outletType"), "traditional") or "traditional",
            media_type=_opt_text(raw.get("type")),
            platform=_opt_text(raw.get("platform")),
            bias_score=clamp_bias(raw.get("biasScore")),
            free_press_score=clamp_score(raw.get("freePressScore"), 50),
            fact_check_accuracy=clamp_score(raw.get("factCheckAccuracy"), 50),
            editorial_independence=clamp_score(raw.get("editorialIndependence"), 50),
            transparency=clamp_score(raw.get("transparency"), 50),
            perspectives=_text(raw.get("perspectives"), "multiple") or "multiple",
            retractions=_parse_records(raw.get("retractions"), Retraction),
            lawsuits=_parse_records(raw.get("lawsuits"), Lawsuit),
            scandals=_parse_records(raw.get("scandals"), Scandal),
            ownership=parse_ownership(raw.get("ownership")),
            funding=parse_funding(raw.get("funding")),
            accountability=parse_accountability(raw.get("accountability")),
            stakeholders=_parse_records(raw.get("stakeholders"), Stakeholder),
            board_members=_parse_records(raw.get("boardMembers"), BoardMember),
            sponsors=_parse_records(raw.get("sponsors"), Sponsor),
            metrics=_mapping(raw.get("metrics")) or {},
            legal_cases=_mapping(raw.get("legalCases")),
            audience_data=_mapping(raw.get("audienceData")),
            audience_size=_opt_int(raw.get("audienceSize")),
            last_updated=_text(raw.get("lastUpdated")) or utc_now_iso(),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "id": self.id,
                "name": self.name,
                "website": self.website,
                "country": self.country,
                "description": self.description,
                "logo": self.logo,
                "outletType": self.outlet_type,
                "type": self.media_type,
                "platform": self.platform,
                "biasScore": self.bias_score,
                "freePressScore": self.free_press_score,
                "factCheckAccuracy": self.fact_check_accuracy,
                "editorialIndependence": self.editorial_independence,
                "transparency": self.transparency,
                "perspectives": self.perspectives,
                "retractions": [r.to_dict() for r in self.retractions],
                "lawsuits": [l.to_dict() for l in self.lawsuits],
                "scandals": [s.to_dict() for s in self.scandals],
                "ownership": self.ownership.to_wire() if self.ownership else None,
                "funding": self.funding.to_wire() if self.funding else None,
                "accountability": self.accountability.to_dict() if self.accountability else None,
                "stakeholders": [s.to_dict() for s in self.stakeholders],
                "boardMembers": [b.to_dict() for b in self.board_members],
                "sponsors": [s.to_dict() for s in self.sponsors],
                "metrics": self.metrics,
                "legalCases": self.legal_cases,
                "audienceData": self.audience_data,
                "audienceSize": self.audience_size,
                "lastUpdated": self.last_updated,
            }
        )


OUTLET_FIELDS = frozenset(f.name for f in fields(Outlet))


def _required_name(value: Any) -> str:
    name = _text(value).strip()
    if not name:
        raise ValueError("Outlet name cannot be empty")
    return name


_FIELD_PARSERS = {
    "name": _required_name,
    "website": lambda v: _text(v).strip(),
    "country": _text,
    "description": _text,
    "logo": _text,
    "outlet_type": lambda v: _text(v, "traditional") or "traditional",
    "media_type": _opt_text,
    "platform": _opt_text,
    "perspectives": lambda v: _text(v, "multiple") or "multiple",
    "last_updated": lambda v: _text(v) or utc_now_iso(),
    "ownership": parse_ownership,
    "funding": parse_funding,
    "accountability": parse_accountability,
    "retractions": lambda v: _parse_records(v, Retraction),
    "lawsuits": lambda v: _parse_records(v, Lawsuit),
    "scandals": lambda v: _parse_records(v, Scandal),
    "stakeholders": lambda v: _parse_records(v, Stakeholder),
    "board_members": lambda v: _parse_records(v, BoardMember),
    "sponsors": lambda v: _parse_records(v, Sponsor),
    "bias_score": clamp_bias,
    "free_press_score": clamp_score,
    "fact_check_accuracy": clamp_score,
    "editorial_independence": clamp_score,
    "transparency": clamp_score,
    "metrics": lambda v: _mapping(v) or {},
    "legal_cases": _mapping,
    "audience_data": _mapping,
    "audience_size": _opt_int,
}


def coerce_field(name: str, value: Any) -> Any:
    """Coerce a raw value for an Outlet attribute into its typed form.

    Raises:
        ValueError: If ``name`` is not an Outlet attribute
    """
    if name not in OUTLET_FIELDS:
        raise ValueError(f"Unknown outlet field: {name}")
    parser = _FIELD_PARSERS.get(name)
    if parser is None:
        return value
    return parser(value)


# ── Discovery and duplicate results ──────────────────────────────────────


@dataclass
class Candidate:
    """An outlet proposed by discovery, not yet accepted into the catalog."""

    name: str
    website: str = ""
    country: str = ""
    media_type: str | None = None
    estimated_audience: int | None = None
    description: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Candidate":
        return cls(
            name=_text(raw.get("name")).strip(),
            website=_text(raw.get("website")).strip(),
            country=_text(raw.get("country")),
            media_type=_opt_text(raw.get("mediaType")),
            estimated_audience=_opt_int(raw.get("estimatedAudience")),
            description=_text(raw.get("description")),
        )


@dataclass
class DuplicatePair:
    """Two existing outlets flagged by the pairwise scan."""

    outlet1: Outlet
    outlet2: Outlet
    reason: str
    match_type: str
    similarity: float


@dataclass
class DuplicateGroup:
    """A cluster of outlets believed to be the same real-world outlet.

    Attributes:
        name: Representative label (the keeper's name)
        ids: Member ids in collection order; the first is the keeper
        count: Number of members
        match_type: One of "exact", "similar", "partial", "domain"
    """

    name: str
    ids: list[str]
    count: int
    match_type: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "ids": list(self.ids), "count": self.count, "matchType": self.match_type}
