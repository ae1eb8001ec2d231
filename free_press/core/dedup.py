"""
Duplicate detection and keep-first merging for outlets.

Two checks share one matching rule set (same domain, equal normalized name,
or name similarity above a threshold) but use different thresholds: a single
candidate is checked strictly before insertion, while the pairwise scan over
the whole catalog is looser so that near misses show up in the merge report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from .similarity import (
    BULK_SCAN_THRESHOLD,
    SINGLE_CHECK_THRESHOLD,
    classify_match,
    extract_domain,
    name_similarity,
)
from .types import DuplicateGroup, DuplicatePair, Outlet

if TYPE_CHECKING:
    from ..repository import OutletRepository


logger = logging.getLogger(__name__)


@dataclass
class DuplicateMatch:
    outlet: Outlet
    match_type: str
    similarity: float


@dataclass
class MergePlan:
    """Keepers and removals derived from duplicate groups.

    Attributes:
        groups: Groups the plan was built from
        keep: First id of every group
        remove: Every other id, in group order
    """

    groups: list[DuplicateGroup]
    keep: list[str] = field(default_factory=list)
    remove: list[str] = field(default_factory=list)


@dataclass
class MergeEntry:
    name: str
    kept: str
    removed: list[str]


@dataclass
class MergeReport:
    entries: list[MergeEntry]
    removed: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "removed": self.removed,
            "duplicatesFound": [
                {"name": e.name, "kept": e.kept, "removed": list(e.removed)} for e in self.entries
            ],
        }


def _name_and_site(candidate: Any) -> tuple[str, str, str | None]:
    if isinstance(candidate, Mapping):
        return (
            str(candidate.get("name") or ""),
            str(candidate.get("website") or ""),
            candidate.get("id"),
        )
    return (
        getattr(candidate, "name", "") or "",
        getattr(candidate, "website", "") or "",
        getattr(candidate, "id", None),
    )


class DuplicateResolver:
    def __init__(
        self,
        single_check_threshold: float = SINGLE_CHECK_THRESHOLD,
        bulk_scan_threshold: float = BULK_SCAN_THRESHOLD,
    ) -> None:
        self.single_check_threshold = single_check_threshold
        self.bulk_scan_threshold = bulk_scan_threshold

    def find_match(self, candidate: Any, outlets: Iterable[Outlet]) -> DuplicateMatch | None:
        """Return the first existing outlet the candidate duplicates.

        Outlets are visited in order; the candidate's own id is skipped.
        """
        name, website, candidate_id = _name_and_site(candidate)
        for outlet in outlets:
            if candidate_id is not None and outlet.id == candidate_id:
                continue
            match_type = classify_match(
                name, website, outlet.name, outlet.website, self.single_check_threshold
            )
            if match_type is not None:
                return DuplicateMatch(
                    outlet=outlet,
                    match_type=match_type,
                    similarity=1.0 if match_type == "domain" else name_similarity(name, outlet.name),
                )
        return None

    def check_for_duplicate(self, candidate: Any, outlets: Iterable[Outlet]) -> Outlet | None:
        match = self.find_match(candidate, outlets)
        return match.outlet if match is not None else None

    def find_all_duplicates(self, outlets: list[Outlet]) -> list[DuplicatePair]:
        """Report every unordered pair of outlets that match each other."""
        pairs: list[DuplicatePair] = []
        for i, first in enumerate(outlets):
            for second in outlets[i + 1 :]:
                match_type = classify_match(
                    first.name, first.website, second.name, second.website, self.bulk_scan_threshold
                )
                if match_type is None:
                    continue
                if match_type == "domain":
                    reason = f"Same domain: {extract_domain(first.website)}"
                    score = 1.0
                else:
                    score = name_similarity(first.name, second.name)
                    reason = f"Similar names ({round(score * 100)}%): {first.name} / {second.name}"
                pairs.append(
                    DuplicatePair(
                        outlet1=first,
                        outlet2=second,
                        reason=reason,
                        match_type=match_type,
                        similarity=score,
                    )
                )
        logger.debug("Duplicate scan over %d outlets found %d pairs", len(outlets), len(pairs))
        return pairs

    def group_duplicates(self, pairs: list[DuplicatePair], outlets: list[Outlet]) -> list[DuplicateGroup]:
        """Cluster pairs that share an outlet into groups ordered by collection position."""
        position = {outlet.id: index for index, outlet in enumerate(outlets)}
        names = {outlet.id: outlet.name for outlet in outlets}
        parent: dict[str, str] = {}

        def find(node: str) -> str:
            while parent[node] != node:
                parent[node] = parent[parent[node]]
                node = parent[node]
            return node

        first_type: dict[str, str] = {}
        for pair in pairs:
            a, b = pair.outlet1.id, pair.outlet2.id
            if a not in position or b not in position:
                continue
            parent.setdefault(a, a)
            parent.setdefault(b, b)
            root_a, root_b = find(a), find(b)
            if root_a != root_b:
                keep, drop = sorted((root_a, root_b), key=position.__getitem__)
                parent[drop] = keep
                if drop in first_type:
                    first_type.setdefault(keep, first_type.pop(drop))
            first_type.setdefault(find(a), pair.match_type)

        members: dict[str, list[str]] = {}
        for node in parent:
            members.setdefault(find(node), []).append(node)

        groups = []
        for root in sorted(members, key=position.__getitem__):
            ids = sorted(members[root], key=position.__getitem__)
            groups.append(
                DuplicateGroup(
                    name=names[ids[0]],
                    ids=ids,
                    count=len(ids),
                    match_type=first_type.get(root, "exact"),
                )
            )
        return groups

    def plan_merge(self, groups: list[DuplicateGroup]) -> MergePlan:
        plan = MergePlan(groups=groups)
        for group in groups:
            if not group.ids:
                continue
            plan.keep.append(group.ids[0])
            plan.remove.extend(group.ids[1:])
        return plan


def remove_duplicates(repository: "OutletRepository", ids: Iterable[str]) -> int:
    return repository.remove_by_ids(ids)


def merge_duplicates(repository: "OutletRepository", resolver: DuplicateResolver | None = None) -> MergeReport:
    """Scan the catalog, keep the first outlet of every duplicate group and remove the rest."""
    resolver = resolver or repository.resolver
    snapshot = repository.get_all()
    pairs = resolver.find_all_duplicates(snapshot)
    groups = resolver.group_duplicates(pairs, snapshot)
    plan = resolver.plan_merge(groups)
    removed = remove_duplicates(repository, plan.remove) if plan.remove else 0
    entries = [MergeEntry(name=g.name, kept=g.ids[0], removed=list(g.ids[1:])) for g in groups]
    logger.info("Removed %d duplicate outlets; %d remain", removed, repository.count())
    return MergeReport(entries=entries, removed=removed)
