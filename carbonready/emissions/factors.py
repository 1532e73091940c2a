"""
Emission Factor Reference Data

Activity kinds, their reporting scope and category, and versioned factor
tables converting an activity quantity into kg CO2e.

Default dataset: UK Government GHG Conversion Factors 2024. Factors that the
published tables split into parts (electricity generation + T&D losses,
water supply + treatment) are combined here so every activity kind has a
single coefficient.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

from ..exceptions import InvalidInputError, MissingEmissionFactorError, MissingReferenceDataError
from ..utils.config import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS & CONSTANTS
# =============================================================================

class EmissionScope(Enum):
    """GHG Protocol reporting scope."""
    DIRECT = 1            # Direct combustion
    PURCHASED_ENERGY = 2  # Purchased electricity and heat
    VALUE_CHAIN = 3       # Indirect, value-chain activity


class EmissionCategory(Enum):
    """Reporting category used to group breakdown lines."""
    FUELS = "fuels"
    VEHICLES = "vehicles"
    REFRIGERANTS = "refrigerants"
    ELECTRICITY = "electricity"
    HEAT = "heat"
    BUSINESS_TRAVEL_AIR = "business_travel_air"
    BUSINESS_TRAVEL_RAIL = "business_travel_rail"
    BUSINESS_TRAVEL_CAR = "business_travel_car"
    EMPLOYEE_COMMUTING = "employee_commuting"
    WASTE = "waste"
    WATER = "water"
    PURCHASED_GOODS = "purchased_goods"


class ActivityKind(Enum):
    """Closed set of activity kinds shared by inputs and factor tables."""
    # Scope 1
    NATURAL_GAS_KWH = "natural_gas_kwh"
    LPG_LITRES = "lpg_litres"
    HEATING_OIL_LITRES = "heating_oil_litres"
    VEHICLE_PETROL_LITRES = "vehicle_petrol_litres"
    VEHICLE_DIESEL_LITRES = "vehicle_diesel_litres"
    VEHICLE_EV_KWH = "vehicle_ev_kwh"
    REFRIGERANT_KG = "refrigerant_kg"

    # Scope 2
    ELECTRICITY_KWH = "electricity_kwh"
    DISTRICT_HEATING_KWH = "district_heating_kwh"

    # Scope 3
    AIR_DOMESTIC_KM = "air_domestic_km"
    AIR_SHORT_HAUL_KM = "air_short_haul_km"
    AIR_LONG_HAUL_KM = "air_long_haul_km"
    BUSINESS_RAIL_KM = "business_rail_km"
    BUSINESS_CAR_KM = "business_car_km"
    COMMUTE_CAR_KM = "commute_car_km"
    COMMUTE_BUS_KM = "commute_bus_km"
    COMMUTE_RAIL_KM = "commute_rail_km"
    WASTE_GENERAL_TONNES = "waste_general_tonnes"
    WASTE_RECYCLING_TONNES = "waste_recycling_tonnes"
    WATER_M3 = "water_m3"
    PURCHASED_GOODS_GBP = "purchased_goods_gbp"


# (scope, category, unit) per activity kind
ACTIVITY_PROFILES: Dict[ActivityKind, tuple] = {
    ActivityKind.NATURAL_GAS_KWH: (EmissionScope.DIRECT, EmissionCategory.FUELS, "kWh"),
    ActivityKind.LPG_LITRES: (EmissionScope.DIRECT, EmissionCategory.FUELS, "litres"),
    ActivityKind.HEATING_OIL_LITRES: (EmissionScope.DIRECT, EmissionCategory.FUELS, "litres"),
    ActivityKind.VEHICLE_PETROL_LITRES: (EmissionScope.DIRECT, EmissionCategory.VEHICLES, "litres"),
    ActivityKind.VEHICLE_DIESEL_LITRES: (EmissionScope.DIRECT, EmissionCategory.VEHICLES, "litres"),
    # Company EV charging is reported with the fleet, priced at the grid factor
    ActivityKind.VEHICLE_EV_KWH: (EmissionScope.DIRECT, EmissionCategory.VEHICLES, "kWh"),
    ActivityKind.REFRIGERANT_KG: (EmissionScope.DIRECT, EmissionCategory.REFRIGERANTS, "kg"),
    ActivityKind.ELECTRICITY_KWH: (EmissionScope.PURCHASED_ENERGY, EmissionCategory.ELECTRICITY, "kWh"),
    ActivityKind.DISTRICT_HEATING_KWH: (EmissionScope.PURCHASED_ENERGY, EmissionCategory.HEAT, "kWh"),
    ActivityKind.AIR_DOMESTIC_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.BUSINESS_TRAVEL_AIR, "passenger km"),
    ActivityKind.AIR_SHORT_HAUL_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.BUSINESS_TRAVEL_AIR, "passenger km"),
    ActivityKind.AIR_LONG_HAUL_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.BUSINESS_TRAVEL_AIR, "passenger km"),
    ActivityKind.BUSINESS_RAIL_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.BUSINESS_TRAVEL_RAIL, "passenger km"),
    ActivityKind.BUSINESS_CAR_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.BUSINESS_TRAVEL_CAR, "km"),
    ActivityKind.COMMUTE_CAR_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.EMPLOYEE_COMMUTING, "km"),
    ActivityKind.COMMUTE_BUS_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.EMPLOYEE_COMMUTING, "passenger km"),
    ActivityKind.COMMUTE_RAIL_KM: (EmissionScope.VALUE_CHAIN, EmissionCategory.EMPLOYEE_COMMUTING, "passenger km"),
    ActivityKind.WASTE_GENERAL_TONNES: (EmissionScope.VALUE_CHAIN, EmissionCategory.WASTE, "tonnes"),
    ActivityKind.WASTE_RECYCLING_TONNES: (EmissionScope.VALUE_CHAIN, EmissionCategory.WASTE, "tonnes"),
    ActivityKind.WATER_M3: (EmissionScope.VALUE_CHAIN, EmissionCategory.WATER, "m3"),
    ActivityKind.PURCHASED_GOODS_GBP: (EmissionScope.VALUE_CHAIN, EmissionCategory.PURCHASED_GOODS, "GBP"),
}


def get_activity_scope(kind: ActivityKind) -> EmissionScope:
    """Reporting scope an activity kind belongs to."""
    return ACTIVITY_PROFILES[kind][0]


def get_activity_category(kind: ActivityKind) -> EmissionCategory:
    """Reporting category an activity kind is grouped under."""
    return ACTIVITY_PROFILES[kind][1]


def get_activity_unit(kind: ActivityKind) -> str:
    """Unit the activity quantity is expressed in."""
    return ACTIVITY_PROFILES[kind][2]


def activity_kinds_for_scope(scope: EmissionScope) -> List[ActivityKind]:
    """All activity kinds of a scope, in declaration order."""
    return [kind for kind in ActivityKind if get_activity_scope(kind) == scope]


# UK Government GHG Conversion Factors 2024 (kg CO2e per unit)
UK_2024_COEFFICIENTS: Dict[ActivityKind, float] = {
    # Scope 1: Fuels
    ActivityKind.NATURAL_GAS_KWH: 0.18293,
    ActivityKind.LPG_LITRES: 1.55537,
    ActivityKind.HEATING_OIL_LITRES: 2.54031,
    ActivityKind.VEHICLE_PETROL_LITRES: 2.19397,
    ActivityKind.VEHICLE_DIESEL_LITRES: 2.51233,
    ActivityKind.VEHICLE_EV_KWH: 0.20707,
    ActivityKind.REFRIGERANT_KG: 2088.0,    # R410A average

    # Scope 2: generation 0.20707 + T&D losses 0.01879
    ActivityKind.ELECTRICITY_KWH: 0.22586,
    ActivityKind.DISTRICT_HEATING_KWH: 0.16617,

    # Scope 3: Travel
    ActivityKind.AIR_DOMESTIC_KM: 0.24587,
    ActivityKind.AIR_SHORT_HAUL_KM: 0.15353,
    ActivityKind.AIR_LONG_HAUL_KM: 0.19309,
    ActivityKind.BUSINESS_RAIL_KM: 0.03549,
    ActivityKind.BUSINESS_CAR_KM: 0.17141,
    ActivityKind.COMMUTE_CAR_KM: 0.17141,
    ActivityKind.COMMUTE_BUS_KM: 0.10312,
    ActivityKind.COMMUTE_RAIL_KM: 0.03549,

    # Scope 3: Waste
    ActivityKind.WASTE_GENERAL_TONNES: 446.24,
    ActivityKind.WASTE_RECYCLING_TONNES: 21.29,

    # Scope 3: Water, supply 0.149 + treatment 0.272
    ActivityKind.WATER_M3: 0.421,

    # Scope 3: Purchased goods (spend-based approximation)
    ActivityKind.PURCHASED_GOODS_GBP: 0.00023,
}


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class EmissionFactor:
    """One conversion coefficient. Never mutated after load."""
    activity_kind: ActivityKind
    scope: EmissionScope
    coefficient_kg_per_unit: float
    unit: str
    dataset_year: int


@dataclass(frozen=True)
class EmissionFactorTable:
    """Read-only mapping from activity kind to emission factor."""
    dataset: str
    dataset_year: int
    factors: Mapping[ActivityKind, EmissionFactor] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze whatever mapping we were given
        object.__setattr__(self, "factors", MappingProxyType(dict(self.factors)))

    def __contains__(self, kind: ActivityKind) -> bool:
        return kind in self.factors

    def __len__(self) -> int:
        return len(self.factors)

    def get(self, kind: ActivityKind) -> EmissionFactor:
        """
        Look up the factor for an activity kind.

        Raises:
            MissingEmissionFactorError: if the dataset has no entry for it
        """
        factor = self.factors.get(kind)
        if factor is None:
            raise MissingEmissionFactorError(kind.value, self.dataset)
        return factor

    def coefficient(self, kind: ActivityKind) -> float:
        """kg CO2e per unit for an activity kind."""
        return self.get(kind).coefficient_kg_per_unit

    def for_scope(self, scope: EmissionScope) -> List[EmissionFactor]:
        """Factors belonging to one scope."""
        return [f for f in self.factors.values() if f.scope == scope]

    def missing_kinds(self) -> List[ActivityKind]:
        """Activity kinds this table has no factor for."""
        return [kind for kind in ActivityKind if kind not in self.factors]

    def with_overrides(
        self,
        overrides: Mapping[Union[ActivityKind, str], float],
        dataset: Optional[str] = None,
    ) -> "EmissionFactorTable":
        """
        Return a new table with some coefficients replaced.

        Args:
            overrides: {activity kind (or its value string): coefficient}
            dataset: Name for the derived table (default "<dataset>+overrides")

        Returns:
            New EmissionFactorTable; this one is left untouched
        """
        coefficients = {kind: f.coefficient_kg_per_unit for kind, f in self.factors.items()}
        for key, value in overrides.items():
            coefficients[_coerce_kind(key)] = value
        return build_factor_table(
            dataset or f"{self.dataset}+overrides",
            self.dataset_year,
            coefficients,
        )


# =============================================================================
# TABLE CONSTRUCTION
# =============================================================================

def _coerce_kind(key: Union[ActivityKind, str]) -> ActivityKind:
    if isinstance(key, ActivityKind):
        return key
    try:
        return ActivityKind(key)
    except ValueError:
        raise InvalidInputError(
            f"unknown activity kind '{key}'", field=str(key), value=key
        ) from None


def build_factor_table(
    dataset: str,
    dataset_year: int,
    coefficients: Mapping[Union[ActivityKind, str], float],
) -> EmissionFactorTable:
    """
    Build an immutable factor table from raw coefficients.

    Args:
        dataset: Dataset name (e.g. "uk_2024")
        dataset_year: Publication year of the factors
        coefficients: {activity kind: kg CO2e per unit}

    Returns:
        EmissionFactorTable

    Raises:
        InvalidInputError: unknown kind, or a negative / non-finite coefficient
    """
    factors: Dict[ActivityKind, EmissionFactor] = {}
    for key, value in coefficients.items():
        kind = _coerce_kind(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidInputError(
                f"coefficient for {kind.value} must be a finite number",
                field=kind.value,
                value=value,
            )
        if value < 0:
            raise InvalidInputError(
                f"coefficient for {kind.value} cannot be negative",
                field=kind.value,
                value=value,
            )
        factors[kind] = EmissionFactor(
            activity_kind=kind,
            scope=get_activity_scope(kind),
            coefficient_kg_per_unit=float(value),
            unit=get_activity_unit(kind),
            dataset_year=dataset_year,
        )
    return EmissionFactorTable(dataset=dataset, dataset_year=dataset_year, factors=factors)


# Registered datasets: name -> (year, coefficients)
FACTOR_DATASETS: Dict[str, tuple] = {
    "uk_2024": (2024, UK_2024_COEFFICIENTS),
}


@lru_cache
def _load_factor_table(dataset: str) -> EmissionFactorTable:
    if dataset not in FACTOR_DATASETS:
        raise MissingReferenceDataError(
            f"Unknown emission factor dataset '{dataset}'", field="dataset"
        )
    year, coefficients = FACTOR_DATASETS[dataset]
    table = build_factor_table(dataset, year, coefficients)
    logger.debug(f"Loaded emission factor dataset {dataset} ({len(table)} factors)")
    return table


def get_factor_table(dataset: Optional[str] = None) -> EmissionFactorTable:
    """
    Get a registered factor table, loaded once per process.

    Args:
        dataset: Dataset name; defaults to Settings.EMISSION_FACTOR_DATASET

    Raises:
        MissingReferenceDataError: if no dataset of that name is registered
    """
    if dataset is None:
        dataset = get_settings().EMISSION_FACTOR_DATASET
    return _load_factor_table(dataset)
