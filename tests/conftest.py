"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

import pytest
from datetime import date
from typing import Any, Dict, List

from carbonready.benchmarks import SectorBenchmark
from carbonready.emissions import (
    ActivityInputs,
    Scope1Inputs,
    Scope2Inputs,
    Scope3Inputs,
    get_factor_table,
)
from carbonready.matching import Profile
from carbonready.utils import get_settings


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Emission Fixtures
# ============================================================================

@pytest.fixture
def uk_factors():
    """Default UK 2024 factor table."""
    return get_factor_table("uk_2024")


@pytest.fixture
def office_inputs() -> ActivityInputs:
    """A small office business with activity in every scope."""
    return ActivityInputs(
        period_start=date(2024, 1, 1),
        period_end=date(2024, 12, 31),
        employees_count=12,
        floor_area_sqm=350,
        scope1=Scope1Inputs(
            natural_gas_kwh=18000,
            vehicle_diesel_litres=1200,
            refrigerant_kg=0.5,
        ),
        scope2=Scope2Inputs(
            electricity_kwh=22000,
        ),
        scope3=Scope3Inputs(
            air_short_haul_km=4000,
            business_rail_km=2500,
            commute_car_km=30000,
            waste_general_tonnes=1.2,
            waste_recycling_tonnes=0.8,
            water_m3=90,
            purchased_goods_gbp=45000,
        ),
    )


@pytest.fixture
def office_inputs_dict() -> Dict[str, Any]:
    """Form payload equivalent to a simple office."""
    return {
        "scope1": {"natural_gas_kwh": 18000},
        "scope2": {"electricity_kwh": 22000},
        "scope3": {"commute_car_km": 30000},
        "period_start": "2024-01-01",
        "period_end": "2024-12-31",
        "employees_count": 12,
        "floor_area_sqm": 350,
    }


# ============================================================================
# Benchmark Fixtures
# ============================================================================

@pytest.fixture
def manufacturing_benchmark() -> SectorBenchmark:
    """Benchmark with good=6000 and average=10000."""
    return SectorBenchmark(
        business_type="manufacturing",
        employee_range="10-49",
        avg_kg_co2e_per_employee=8500,
        good_threshold_kg=6000,
        average_threshold_kg=10000,
    )


# ============================================================================
# Matching Fixtures
# ============================================================================

@pytest.fixture
def leeds_manufacturer() -> Profile:
    return Profile(
        business_type="Manufacturing",
        employees=25,
        location="Leeds",
        needs=["Energy Audits", "Carbon Reporting"],
    )


@pytest.fixture
def catalog_rows() -> List[Dict[str, Any]]:
    """Raw rows as they come from the catalog store."""
    return [
        {
            "kind": "grant",
            "id": "g-uk-wide",
            "name": "Net Zero Accelerator",
            "business_types": ["All"],
            "location_scope": ["UK-wide"],
        },
        {
            "kind": "grant",
            "id": "g-manufacturing",
            "name": "Made Smarter Adoption",
            "business_types": ["Manufacturing", "Technology"],
            "location_scope": ["North West"],
        },
        {
            "kind": "grant",
            "id": "g-scotland",
            "name": "SME Loan Scheme",
            "business_types": ["Retail"],
            "location_scope": ["Scotland"],
        },
        {
            "kind": "subsidy",
            "id": "s-aia",
            "name": "Annual Investment Allowance",
            "subsidy_type": "tax_relief",
            "business_types": [],
            "location_scope": ["UK-wide"],
        },
        {
            "kind": "subsidy",
            "id": "s-large-only",
            "name": "Climate Change Agreement",
            "subsidy_type": "rate_reduction",
            "business_types": ["Manufacturing"],
            "location_scope": ["England"],
            "min_employees": 50,
        },
        {
            "kind": "consultant",
            "id": "c-1",
            "name": "GreenPath Advisory",
            "region": "Yorkshire",
            "expertise_areas": ["Energy Audits", "Carbon Reporting"],
            "verified": True,
            "years_experience": 8,
        },
    ]
