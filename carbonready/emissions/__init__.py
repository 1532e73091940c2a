"""
Emission Calculation

Example Usage:
    from datetime import date
    from carbonready.emissions import (
        ActivityInputs,
        Scope2Inputs,
        calculate_emissions,
        get_factor_table,
    )

    inputs = ActivityInputs(
        period_start=date(2024, 1, 1),
        period_end=date(2024, 12, 31),
        employees_count=12,
        scope2=Scope2Inputs(electricity_kwh=10000),
    )
    footprint = calculate_emissions(inputs, get_factor_table("uk_2024"))
    print(f"Total: {footprint.total_tonnes_co2e:.2f} t CO2e")
"""

from .factors import (
    ACTIVITY_PROFILES,
    FACTOR_DATASETS,
    UK_2024_COEFFICIENTS,
    ActivityKind,
    EmissionCategory,
    EmissionFactor,
    EmissionFactorTable,
    EmissionScope,
    activity_kinds_for_scope,
    build_factor_table,
    get_activity_category,
    get_activity_scope,
    get_activity_unit,
    get_factor_table,
)
from .inputs import (
    ActivityInputs,
    Scope1Inputs,
    Scope2Inputs,
    Scope3Inputs,
    default_activity_inputs,
    validate_activity_inputs,
)
from .calculator import (
    BreakdownLine,
    CarbonFootprint,
    calculate_emissions,
    format_emissions,
    get_employee_range,
)

__all__ = [
    # Reference data
    "ACTIVITY_PROFILES",
    "FACTOR_DATASETS",
    "UK_2024_COEFFICIENTS",
    "ActivityKind",
    "EmissionCategory",
    "EmissionFactor",
    "EmissionFactorTable",
    "EmissionScope",
    "activity_kinds_for_scope",
    "build_factor_table",
    "get_activity_category",
    "get_activity_scope",
    "get_activity_unit",
    "get_factor_table",

    # Inputs
    "ActivityInputs",
    "Scope1Inputs",
    "Scope2Inputs",
    "Scope3Inputs",
    "default_activity_inputs",
    "validate_activity_inputs",

    # Calculation
    "BreakdownLine",
    "CarbonFootprint",
    "calculate_emissions",
    "format_emissions",
    "get_employee_range",
]
