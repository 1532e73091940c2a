"""
Readiness Aggregation

Example Usage:
    from carbonready.readiness import WorkspaceCounts, aggregate

    counts = WorkspaceCounts(
        evidence_score=90,
        freshness_score=80,
        total_obligations=4,
        overdue_obligations=1,
    )
    print(aggregate(counts).overall_score)  # 88
"""

from .engine import (
    EMPTY_COLLECTION_SCORE,
    READINESS_WEIGHTS,
    ReadinessScore,
    WorkspaceCounts,
    aggregate,
    calculate_checklist_score,
    calculate_obligations_score,
    validate_counts,
)
from .snapshot import (
    EVIDENCE_CURRENT,
    EVIDENCE_EXPIRED,
    EVIDENCE_EXPIRING,
    build_workspace_counts,
)

__all__ = [
    "EMPTY_COLLECTION_SCORE",
    "READINESS_WEIGHTS",
    "ReadinessScore",
    "WorkspaceCounts",
    "aggregate",
    "calculate_checklist_score",
    "calculate_obligations_score",
    "validate_counts",
    "EVIDENCE_CURRENT",
    "EVIDENCE_EXPIRED",
    "EVIDENCE_EXPIRING",
    "build_workspace_counts",
]
