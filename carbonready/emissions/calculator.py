"""
Emission Calculation Engine

Converts a bundle of activity quantities into a carbon footprint broken down
by scope and by individual activity line.

Formula:
    line_kg       = quantity × coefficient
    scopeN_total  = Σ line_kg over the scope's activity kinds
    total_kg      = scope1_total + scope2_total + scope3_total
    per_employee  = total_kg / employees_count
    per_sqm       = total_kg / floor_area_sqm   (only when area > 0)

Line items, scope totals and grand total are all kept so each level can be
checked against the one below it.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..exceptions import InvalidInputError
from .factors import (
    ActivityKind,
    EmissionCategory,
    EmissionFactorTable,
    EmissionScope,
    get_activity_category,
    get_factor_table,
)
from .inputs import ActivityInputs, validate_activity_inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakdownLine:
    """Emissions from one activity kind."""
    activity_kind: ActivityKind
    scope: EmissionScope
    category: EmissionCategory
    quantity: float
    unit: str
    coefficient: float
    kg_co2e: float


@dataclass
class CarbonFootprint:
    """Complete footprint for one reporting period."""
    scope1_total_kg_co2e: float
    scope2_total_kg_co2e: float
    scope3_total_kg_co2e: float
    total_kg_co2e: float
    total_tonnes_co2e: float

    # Intensity metrics
    kg_co2e_per_employee: float
    kg_co2e_per_sqm: Optional[float]  # None means "no floor area supplied", not zero

    breakdown: List[BreakdownLine] = field(default_factory=list)

    # Provenance
    dataset: str = ""
    period_start: Optional[date] = None
    period_end: Optional[date] = None

    def scope_total(self, scope: EmissionScope) -> float:
        return {
            EmissionScope.DIRECT: self.scope1_total_kg_co2e,
            EmissionScope.PURCHASED_ENERGY: self.scope2_total_kg_co2e,
            EmissionScope.VALUE_CHAIN: self.scope3_total_kg_co2e,
        }[scope]

    def lines_for_scope(self, scope: EmissionScope) -> List[BreakdownLine]:
        return [line for line in self.breakdown if line.scope == scope]

    def category_totals(self) -> Dict[str, float]:
        """kg CO2e per reporting category, in first-seen order."""
        totals: Dict[str, float] = {}
        for line in self.breakdown:
            key = line.category.value
            totals[key] = totals.get(key, 0.0) + line.kg_co2e
        return totals

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for persistence by the caller."""
        data = asdict(self)
        data["breakdown"] = [
            {
                "activity_kind": line.activity_kind.value,
                "scope": line.scope.value,
                "category": line.category.value,
                "quantity": line.quantity,
                "unit": line.unit,
                "coefficient": line.coefficient,
                "kg_co2e": line.kg_co2e,
            }
            for line in self.breakdown
        ]
        data["period_start"] = self.period_start.isoformat() if self.period_start else None
        data["period_end"] = self.period_end.isoformat() if self.period_end else None
        return data


def calculate_emissions(
    inputs: ActivityInputs,
    factors: Optional[EmissionFactorTable] = None,
) -> CarbonFootprint:
    """
    Calculate the carbon footprint for one reporting period.

    Args:
        inputs: Validated or raw ActivityInputs
        factors: Factor table to price activity with (default: configured dataset)

    Returns:
        CarbonFootprint with scope totals, intensities and line breakdown

    Raises:
        InvalidInputError: negative / non-finite quantity, employees_count <= 0,
            bad period; raised before anything is computed
        MissingEmissionFactorError: the table has no factor for an activity kind
    """
    issues = validate_activity_inputs(inputs)
    if issues:
        raise InvalidInputError.from_issues(issues)

    if factors is None:
        factors = get_factor_table()

    # Resolve every factor up front so a table gap never yields a partial result
    resolved = {kind: factors.get(kind) for kind in ActivityKind}

    breakdown: List[BreakdownLine] = []
    for _, record in inputs.scope_inputs():
        for kind, quantity in record.quantities().items():
            factor = resolved[kind]
            breakdown.append(BreakdownLine(
                activity_kind=kind,
                scope=factor.scope,
                category=get_activity_category(kind),
                quantity=float(quantity),
                unit=factor.unit,
                coefficient=factor.coefficient_kg_per_unit,
                kg_co2e=float(quantity) * factor.coefficient_kg_per_unit,
            ))

    scope1_total = _sum_scope(breakdown, EmissionScope.DIRECT)
    scope2_total = _sum_scope(breakdown, EmissionScope.PURCHASED_ENERGY)
    scope3_total = _sum_scope(breakdown, EmissionScope.VALUE_CHAIN)
    total = scope1_total + scope2_total + scope3_total

    per_sqm = None
    if inputs.floor_area_sqm is not None and inputs.floor_area_sqm > 0:
        per_sqm = total / inputs.floor_area_sqm

    logger.debug(
        f"Footprint ({factors.dataset}): scope1={scope1_total:.1f} scope2={scope2_total:.1f} "
        f"scope3={scope3_total:.1f} total={total:.1f} kg CO2e"
    )

    return CarbonFootprint(
        scope1_total_kg_co2e=scope1_total,
        scope2_total_kg_co2e=scope2_total,
        scope3_total_kg_co2e=scope3_total,
        total_kg_co2e=total,
        total_tonnes_co2e=total / 1000,
        kg_co2e_per_employee=total / inputs.employees_count,
        kg_co2e_per_sqm=per_sqm,
        breakdown=breakdown,
        dataset=factors.dataset,
        period_start=inputs.period_start,
        period_end=inputs.period_end,
    )


def _sum_scope(breakdown: List[BreakdownLine], scope: EmissionScope) -> float:
    total = 0.0
    for line in breakdown:
        if line.scope == scope:
            total += line.kg_co2e
    return total


# =============================================================================
# DISPLAY HELPERS
# =============================================================================

def get_employee_range(count: int) -> str:
    """
    Bucket a head-count into the ranges benchmarks are published for.

    Returns:
        "1-9", "10-49", "50-249" or "250+"
    """
    if count <= 9:
        return "1-9"
    if count <= 49:
        return "10-49"
    if count <= 249:
        return "50-249"
    return "250+"


def format_emissions(kg_co2e: float) -> str:
    """Human-readable emissions: tonnes from 1000 kg upward, kg below."""
    if kg_co2e >= 1000:
        return f"{kg_co2e / 1000:.2f} tonnes CO2e"
    return f"{kg_co2e:.1f} kg CO2e"
