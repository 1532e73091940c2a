"""
Error taxonomy for the computation core.

Two families, handled differently by the surrounding UI:

- InvalidInputError: a caller-supplied value is wrong (tie it to a form field)
- MissingReferenceDataError: a reference table has a gap (fall back to a default)
"""

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass
class ValidationIssue:
    """A single problem found while validating caller input."""
    field: str     # Dotted path, e.g. "scope1.natural_gas_kwh"
    message: str   # Human-readable, actionable description
    value: Any = None


class CarbonReadyError(Exception):
    """Base exception for all computation-core errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidInputError(CarbonReadyError):
    """Raised before any calculation when caller input fails validation."""
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        issues: Optional[List[ValidationIssue]] = None,
    ):
        super().__init__(message, field)
        self.value = value
        self.issues = issues or [ValidationIssue(field=field or "", message=message, value=value)]

    @classmethod
    def from_issues(cls, issues: List[ValidationIssue]) -> "InvalidInputError":
        """Build an error whose headline is the first issue found."""
        first = issues[0]
        return cls(first.message, field=first.field, value=first.value, issues=issues)


class MissingReferenceDataError(CarbonReadyError):
    """Raised when a reference table lacks an entry the caller relies on."""


class MissingEmissionFactorError(MissingReferenceDataError):
    """No factor exists for an activity kind in the active dataset."""
    def __init__(self, activity_kind: str, dataset: str):
        super().__init__(
            f"No emission factor for '{activity_kind}' in dataset '{dataset}'",
            field=activity_kind,
        )
        self.activity_kind = activity_kind
        self.dataset = dataset


class MissingBenchmarkError(MissingReferenceDataError):
    """No sector benchmark exists for a business type."""
    def __init__(self, business_type: str):
        super().__init__(
            f"No sector benchmark for business type '{business_type}'",
            field="business_type",
        )
        self.business_type = business_type
