"""
Readiness Aggregation Engine

Combines four independently computed sub-scores into one weighted
readiness figure for a workspace.

Formula:
    Readiness_Score = round(
        Evidence_Score × 0.25 +
        Freshness_Score × 0.25 +
        Checklist_Score × 0.30 +
        Obligations_Score × 0.20
    )

Every call recomputes all four sub-scores from a full snapshot of counts.
No function patches a previous score. Tracker scores are rounded before
weighting, so a ReadinessScore reproduces its overall score from its own
sub-scores.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from ..exceptions import InvalidInputError, ValidationIssue
from ..helpers import clamp, is_finite_number, round_half_up

logger = logging.getLogger(__name__)


READINESS_WEIGHTS: Dict[str, float] = {
    "evidence": 0.25,
    "freshness": 0.25,
    "checklist": 0.30,
    "obligations": 0.20,
}

# Score for a collection with nothing in it (vacuously complete)
EMPTY_COLLECTION_SCORE = 100


@dataclass(frozen=True)
class WorkspaceCounts:
    """One consistent snapshot of a workspace's evidence, checklist and obligations."""
    # Pre-computed by the evidence tracker (0-100)
    evidence_score: float
    freshness_score: float

    # Evidence items
    total_evidence_items: int = 0
    current_evidence_items: int = 0
    expiring_evidence_items: int = 0
    expired_evidence_items: int = 0

    # Obligations
    total_obligations: int = 0
    overdue_obligations: int = 0
    upcoming_obligations: int = 0

    # Checklist
    total_checklist_items: int = 0
    completed_checklist_items: int = 0


@dataclass(frozen=True)
class ReadinessScore:
    """Aggregate readiness for a workspace, with the counts it came from."""
    overall_score: int
    evidence_score: int
    freshness_score: int
    checklist_score: int
    obligations_score: int

    total_evidence_items: int
    current_evidence_items: int
    expiring_evidence_items: int
    expired_evidence_items: int
    total_obligations: int
    overdue_obligations: int
    upcoming_obligations: int
    total_checklist_items: int
    completed_checklist_items: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_COUNT_FIELDS = (
    "total_evidence_items",
    "current_evidence_items",
    "expiring_evidence_items",
    "expired_evidence_items",
    "total_obligations",
    "overdue_obligations",
    "upcoming_obligations",
    "total_checklist_items",
    "completed_checklist_items",
)


def validate_counts(counts: WorkspaceCounts) -> List[ValidationIssue]:
    """
    Check a snapshot for impossible values.

    Subsets larger than their totals usually mean the counts were read
    separately while a mutation was in flight (a torn snapshot).

    Returns:
        List of issues (empty when the snapshot is consistent)
    """
    issues: List[ValidationIssue] = []

    for name in ("evidence_score", "freshness_score"):
        value = getattr(counts, name)
        if not is_finite_number(value) or not 0 <= value <= 100:
            issues.append(ValidationIssue(name, f"{name} must be between 0 and 100", value))

    bad_counts = False
    for name in _COUNT_FIELDS:
        value = getattr(counts, name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            issues.append(ValidationIssue(name, f"{name} must be a non-negative whole number", value))
            bad_counts = True
    if bad_counts:
        return issues

    evidence_parts = (
        counts.current_evidence_items
        + counts.expiring_evidence_items
        + counts.expired_evidence_items
    )
    if evidence_parts > counts.total_evidence_items:
        issues.append(ValidationIssue(
            "total_evidence_items",
            "current, expiring and expired evidence exceed the evidence total",
            counts.total_evidence_items,
        ))
    if counts.overdue_obligations + counts.upcoming_obligations > counts.total_obligations:
        issues.append(ValidationIssue(
            "total_obligations",
            "overdue and upcoming obligations exceed the obligation total",
            counts.total_obligations,
        ))
    if counts.completed_checklist_items > counts.total_checklist_items:
        issues.append(ValidationIssue(
            "completed_checklist_items",
            "completed checklist items exceed the checklist total",
            counts.completed_checklist_items,
        ))
    return issues


def calculate_checklist_score(completed: int, total: int) -> int:
    """Percent of checklist items completed; an empty checklist scores 100."""
    if total == 0:
        return EMPTY_COLLECTION_SCORE
    return round_half_up(100 * completed / total)


def calculate_obligations_score(overdue: int, total: int) -> int:
    """Percent of obligations not overdue; no obligations scores 100."""
    if total == 0:
        return EMPTY_COLLECTION_SCORE
    return round_half_up(100 * (total - overdue) / total)


def aggregate(counts: WorkspaceCounts) -> ReadinessScore:
    """
    Recompute the full readiness score from one snapshot.

    Args:
        counts: Snapshot gathered under one logical read

    Returns:
        ReadinessScore with all four sub-scores and the overall score

    Raises:
        InvalidInputError: negative counts, subsets exceeding totals, or
            pre-computed scores outside 0-100
    """
    issues = validate_counts(counts)
    if issues:
        raise InvalidInputError.from_issues(issues)

    checklist_score = calculate_checklist_score(
        counts.completed_checklist_items, counts.total_checklist_items
    )
    obligations_score = calculate_obligations_score(
        counts.overdue_obligations, counts.total_obligations
    )
    evidence_score = round_half_up(counts.evidence_score)
    freshness_score = round_half_up(counts.freshness_score)

    weighted = (
        evidence_score * READINESS_WEIGHTS["evidence"]
        + freshness_score * READINESS_WEIGHTS["freshness"]
        + checklist_score * READINESS_WEIGHTS["checklist"]
        + obligations_score * READINESS_WEIGHTS["obligations"]
    )
    overall = int(clamp(round_half_up(weighted)))

    logger.debug(
        f"Readiness: evidence={evidence_score} freshness={freshness_score} "
        f"checklist={checklist_score} obligations={obligations_score} -> {overall}"
    )

    return ReadinessScore(
        overall_score=overall,
        evidence_score=evidence_score,
        freshness_score=freshness_score,
        checklist_score=checklist_score,
        obligations_score=obligations_score,
        **{name: getattr(counts, name) for name in _COUNT_FIELDS},
    )
