"""
Activity Inputs

One reporting period of raw business activity, split into three explicit
per-scope records whose fields are exactly the ActivityKind values of that
scope. `ActivityInputs.from_dict` is the boundary where loosely keyed form
data is checked against the closed set of kinds.
"""

import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from ..exceptions import InvalidInputError, ValidationIssue
from .factors import ActivityKind, EmissionScope, get_activity_scope


# =============================================================================
# PER-SCOPE RECORDS
# =============================================================================

@dataclass
class Scope1Inputs:
    """Direct combustion: fuels, fleet and refrigerant top-ups."""
    natural_gas_kwh: float = 0.0
    lpg_litres: float = 0.0
    heating_oil_litres: float = 0.0
    vehicle_petrol_litres: float = 0.0
    vehicle_diesel_litres: float = 0.0
    vehicle_ev_kwh: float = 0.0
    refrigerant_kg: float = 0.0

    scope = EmissionScope.DIRECT

    def quantities(self) -> Dict[ActivityKind, Any]:
        return {ActivityKind(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass
class Scope2Inputs:
    """Purchased electricity and heat."""
    electricity_kwh: float = 0.0
    district_heating_kwh: float = 0.0

    scope = EmissionScope.PURCHASED_ENERGY

    def quantities(self) -> Dict[ActivityKind, Any]:
        return {ActivityKind(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass
class Scope3Inputs:
    """Travel, commuting, waste, water and purchased goods."""
    air_domestic_km: float = 0.0
    air_short_haul_km: float = 0.0
    air_long_haul_km: float = 0.0
    business_rail_km: float = 0.0
    business_car_km: float = 0.0
    commute_car_km: float = 0.0
    commute_bus_km: float = 0.0
    commute_rail_km: float = 0.0
    waste_general_tonnes: float = 0.0
    waste_recycling_tonnes: float = 0.0
    water_m3: float = 0.0
    purchased_goods_gbp: float = 0.0

    scope = EmissionScope.VALUE_CHAIN

    def quantities(self) -> Dict[ActivityKind, Any]:
        return {ActivityKind(f.name): getattr(self, f.name) for f in fields(self)}


_SCOPE_RECORDS = {
    "scope1": Scope1Inputs,
    "scope2": Scope2Inputs,
    "scope3": Scope3Inputs,
}


@dataclass
class ActivityInputs:
    """A business's raw usage for one reporting period."""
    period_start: date
    period_end: date
    employees_count: int
    scope1: Scope1Inputs = field(default_factory=Scope1Inputs)
    scope2: Scope2Inputs = field(default_factory=Scope2Inputs)
    scope3: Scope3Inputs = field(default_factory=Scope3Inputs)
    floor_area_sqm: Optional[float] = None

    def scope_inputs(self):
        """(attribute name, record) pairs in scope order."""
        return [("scope1", self.scope1), ("scope2", self.scope2), ("scope3", self.scope3)]

    def quantity(self, kind: ActivityKind) -> Any:
        """Declared quantity of one activity kind."""
        for _, record in self.scope_inputs():
            if record.scope == get_activity_scope(kind):
                return getattr(record, kind.value)
        return 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActivityInputs":
        """
        Build inputs from loosely keyed data (form payloads, JSON files).

        Expected shape:
            {
                "scope1": {"natural_gas_kwh": 12000, ...},
                "scope2": {"electricity_kwh": 10000},
                "scope3": {...},
                "period_start": "2024-01-01",
                "period_end": "2024-12-31",
                "employees_count": 12,
                "floor_area_sqm": 350,      # optional
            }

        Omitted activity kinds default to 0.

        Raises:
            InvalidInputError: payload is not a mapping, unknown activity kind,
                a kind filed under the wrong scope, or a missing / unparseable
                period date
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                "activity inputs must be an object of named fields",
                field="inputs",
                value=data,
            )

        issues: List[ValidationIssue] = []
        records = {}

        for scope_key, record_cls in _SCOPE_RECORDS.items():
            raw = data.get(scope_key) or {}
            values = {}
            if not isinstance(raw, Mapping):
                issues.append(ValidationIssue(
                    field=scope_key,
                    message=f"{scope_key} must map activity kinds to quantities",
                    value=raw,
                ))
                raw = {}
            for name, quantity in raw.items():
                try:
                    kind = ActivityKind(name)
                except ValueError:
                    issues.append(ValidationIssue(
                        field=f"{scope_key}.{name}",
                        message=f"unknown activity kind '{name}'",
                        value=name,
                    ))
                    continue
                if get_activity_scope(kind) != record_cls.scope:
                    issues.append(ValidationIssue(
                        field=f"{scope_key}.{name}",
                        message=(
                            f"'{name}' belongs to scope {get_activity_scope(kind).value}, "
                            f"not scope {record_cls.scope.value}"
                        ),
                        value=quantity,
                    ))
                    continue
                values[name] = quantity
            records[scope_key] = record_cls(**values)

        for key in data:
            if key not in _SCOPE_RECORDS and key not in _TOP_LEVEL_KEYS:
                issues.append(ValidationIssue(
                    field=key,
                    message=f"unknown field '{key}'",
                    value=data[key],
                ))

        period_start = _parse_date(data.get("period_start"), "period_start", issues)
        period_end = _parse_date(data.get("period_end"), "period_end", issues)

        if issues:
            raise InvalidInputError.from_issues(issues)

        return cls(
            period_start=period_start,
            period_end=period_end,
            employees_count=data.get("employees_count"),
            floor_area_sqm=data.get("floor_area_sqm"),
            **records,
        )


_TOP_LEVEL_KEYS = {"period_start", "period_end", "employees_count", "floor_area_sqm"}


def _parse_date(value: Union[date, str, None], name: str, issues: List[ValidationIssue]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
        issues.append(ValidationIssue(field=name, message=f"{name} must be an ISO date (YYYY-MM-DD)", value=value))
        return None
    issues.append(ValidationIssue(field=name, message=f"{name} is required", value=value))
    return None


# =============================================================================
# VALIDATION
# =============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_activity_inputs(inputs: ActivityInputs) -> List[ValidationIssue]:
    """
    Check every caller-supplied value before anything is calculated.

    Returns:
        List of issues (empty when the inputs are valid)
    """
    issues: List[ValidationIssue] = []

    for scope_key, record in inputs.scope_inputs():
        for kind, quantity in record.quantities().items():
            path = f"{scope_key}.{kind.value}"
            if not _is_number(quantity):
                issues.append(ValidationIssue(path, f"{kind.value} must be a number", quantity))
            elif not math.isfinite(quantity):
                issues.append(ValidationIssue(path, f"{kind.value} must be a finite number", quantity))
            elif quantity < 0:
                issues.append(ValidationIssue(path, f"{kind.value} cannot be negative", quantity))

    employees = inputs.employees_count
    if not _is_number(employees) or not math.isfinite(employees):
        issues.append(ValidationIssue("employees_count", "employee count must be a number", employees))
    elif employees <= 0:
        issues.append(ValidationIssue("employees_count", "employee count must be positive", employees))

    area = inputs.floor_area_sqm
    if area is not None:
        if not _is_number(area) or not math.isfinite(area):
            issues.append(ValidationIssue("floor_area_sqm", "floor area must be a finite number", area))
        elif area < 0:
            issues.append(ValidationIssue("floor_area_sqm", "floor area cannot be negative", area))

    if not isinstance(inputs.period_start, date):
        issues.append(ValidationIssue("period_start", "period_start must be a date", inputs.period_start))
    if not isinstance(inputs.period_end, date):
        issues.append(ValidationIssue("period_end", "period_end must be a date", inputs.period_end))
    if (
        isinstance(inputs.period_start, date)
        and isinstance(inputs.period_end, date)
        and inputs.period_end < inputs.period_start
    ):
        issues.append(ValidationIssue(
            "period_end", "reporting period must end on or after its start", inputs.period_end
        ))

    return issues


def default_activity_inputs(year: Optional[int] = None) -> ActivityInputs:
    """
    Empty bundle for a fresh calculator form.

    Args:
        year: Calendar year of the reporting period (default: current year)

    Returns:
        All-zero ActivityInputs covering 1 Jan - 31 Dec with one employee
    """
    year = year or date.today().year
    return ActivityInputs(
        period_start=date(year, 1, 1),
        period_end=date(year, 12, 31),
        employees_count=1,
    )
