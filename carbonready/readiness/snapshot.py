"""
Workspace snapshot builder.

Derives one WorkspaceCounts from the record lists the caller read together,
so aggregate() always sees a single consistent view.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..exceptions import InvalidInputError
from .engine import WorkspaceCounts

EVIDENCE_CURRENT = "current"
EVIDENCE_EXPIRING = "expiring_soon"
EVIDENCE_EXPIRED = "expired"


def _get(record: Any, key: str, default: Any = None) -> Any:
    # Store rows arrive as dicts; ORM-style objects are accepted too
    if isinstance(record, dict):
        return record.get(key, default)
    return getattr(record, key, default)


def _as_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    raise InvalidInputError(f"{field} must be a date", field=field, value=value)


def build_workspace_counts(
    evidence: Iterable[Any],
    checklist: Iterable[Any],
    obligations: Iterable[Any],
    evidence_score: float,
    freshness_score: float,
    today: Optional[date] = None,
) -> WorkspaceCounts:
    """
    Count a workspace's records into one snapshot.

    Args:
        evidence: Evidence items with a `status` of current / expiring_soon / expired
        checklist: Checklist items with an `is_completed` flag
        obligations: Obligations with `due_date` and `is_completed`
        evidence_score: Evidence completeness from the evidence tracker (0-100)
        freshness_score: Evidence freshness from the evidence tracker (0-100)
        today: Reference date for overdue checks (default: today)

    Returns:
        WorkspaceCounts
    """
    today = today or date.today()

    evidence = list(evidence)
    statuses = [_get(item, "status") for item in evidence]

    checklist = list(checklist)
    completed = sum(1 for item in checklist if _get(item, "is_completed", False))

    obligations = list(obligations)
    open_obligations = [o for o in obligations if not _get(o, "is_completed", False)]
    overdue = sum(
        1 for o in open_obligations
        if _as_date(_get(o, "due_date"), "due_date") < today
    )

    return WorkspaceCounts(
        evidence_score=evidence_score,
        freshness_score=freshness_score,
        total_evidence_items=len(evidence),
        current_evidence_items=statuses.count(EVIDENCE_CURRENT),
        expiring_evidence_items=statuses.count(EVIDENCE_EXPIRING),
        expired_evidence_items=statuses.count(EVIDENCE_EXPIRED),
        total_obligations=len(obligations),
        overdue_obligations=overdue,
        upcoming_obligations=len(open_obligations) - overdue,
        total_checklist_items=len(checklist),
        completed_checklist_items=completed,
    )
