"""
Sector Benchmark Reference Data

Per-employee emission intensity benchmarks for UK SMEs, one per sector.
Each benchmark supplies the two thresholds the scoring curve is anchored on.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..exceptions import InvalidInputError, MissingBenchmarkError
from ..helpers import is_finite_number
from ..utils.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectorBenchmark:
    """Reference intensity thresholds for one business type."""
    business_type: str
    employee_range: str
    avg_kg_co2e_per_employee: float
    good_threshold_kg: float
    average_threshold_kg: float
    label: str = ""

    def __post_init__(self):
        for name in ("avg_kg_co2e_per_employee", "good_threshold_kg", "average_threshold_kg"):
            value = getattr(self, name)
            if not is_finite_number(value) or value < 0:
                raise InvalidInputError(
                    f"{name} must be a non-negative finite number", field=name, value=value
                )
        if not self.good_threshold_kg < self.average_threshold_kg:
            raise InvalidInputError(
                "good threshold must be below the average threshold",
                field="good_threshold_kg",
                value=self.good_threshold_kg,
            )


# kg CO2e per employee per year
SECTOR_BENCHMARK_DATA: Dict[str, Dict[str, Any]] = {
    "manufacturing": {
        "label": "Manufacturing",
        "avg": 8500,
        "good": 6000,
        "average": 10000,
    },
    "retail": {
        "label": "Retail",
        "avg": 4200,
        "good": 3000,
        "average": 5500,
    },
    "hospitality": {
        "label": "Hospitality",
        "avg": 5800,
        "good": 4000,
        "average": 7500,
    },
    "professional_services": {
        "label": "Professional Services",
        "avg": 2800,
        "good": 2000,
        "average": 4000,
    },
    "construction": {
        "label": "Construction",
        "avg": 12000,
        "good": 8000,
        "average": 15000,
    },
    "transportation": {
        "label": "Transportation & Logistics",
        "avg": 18000,
        "good": 12000,
        "average": 22000,
    },
    "healthcare": {
        "label": "Healthcare",
        "avg": 6500,
        "good": 4500,
        "average": 8500,
    },
    "technology": {
        "label": "Technology",
        "avg": 3500,
        "good": 2500,
        "average": 5000,
    },
    "agriculture": {
        "label": "Agriculture",
        "avg": 35000,
        "good": 25000,
        "average": 45000,
    },
    "other": {
        "label": "Other",
        "avg": 4000,
        "good": 3000,
        "average": 5500,
    },
}


def normalize_business_type(business_type: str) -> str:
    """'Professional Services ' -> 'professional_services'."""
    return "_".join((business_type or "").strip().lower().split())


@lru_cache
def get_sector_benchmarks() -> Mapping[str, SectorBenchmark]:
    """Load the sector table once per process. Read-only."""
    benchmarks = {
        key: SectorBenchmark(
            business_type=key,
            employee_range="all",
            avg_kg_co2e_per_employee=row["avg"],
            good_threshold_kg=row["good"],
            average_threshold_kg=row["average"],
            label=row["label"],
        )
        for key, row in SECTOR_BENCHMARK_DATA.items()
    }
    return MappingProxyType(benchmarks)


def get_benchmark(
    business_type: str,
    benchmarks: Optional[Mapping[str, SectorBenchmark]] = None,
) -> SectorBenchmark:
    """
    Select the active benchmark for a declared industry.

    Args:
        business_type: Industry as declared on the profile (any casing)
        benchmarks: Alternate table keyed by normalized business type

    Raises:
        MissingBenchmarkError: no benchmark for that business type
    """
    table = get_sector_benchmarks() if benchmarks is None else benchmarks
    benchmark = table.get(normalize_business_type(business_type))
    if benchmark is None:
        raise MissingBenchmarkError(business_type)
    return benchmark


def get_benchmark_or_default(
    business_type: Optional[str],
    benchmarks: Optional[Mapping[str, SectorBenchmark]] = None,
) -> SectorBenchmark:
    """
    Like get_benchmark, but fall back to the configured generic sector.

    Raises:
        MissingBenchmarkError: only if the default sector is missing as well
    """
    try:
        return get_benchmark(business_type or "", benchmarks)
    except MissingBenchmarkError:
        default = get_settings().DEFAULT_BUSINESS_TYPE
        logger.warning(f"No benchmark for '{business_type}', using '{default}'")
        return get_benchmark(default, benchmarks)
