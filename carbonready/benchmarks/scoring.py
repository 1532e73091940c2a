"""
Benchmark Scoring Engine

Maps a footprint's per-employee intensity against a sector benchmark to a
three-tier category and a continuous 0-100 score.

Scoring curve (piecewise linear, anchors fixed for every benchmark):
    intensity <= good            -> 100
    good    .. average           -> 100 down to 50
    average .. 2 × average       -> 50 down to 0
    intensity >= 2 × average     -> 0

Rounding to an integer happens once, after interpolation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Mapping, Optional

from ..emissions.calculator import CarbonFootprint
from ..exceptions import InvalidInputError, MissingBenchmarkError
from ..helpers import clamp, is_finite_number, round_half_up
from ..utils.config import get_settings
from .sectors import SectorBenchmark, get_benchmark

logger = logging.getLogger(__name__)


class ScoreCategory(Enum):
    """Benchmark comparison outcome."""
    GOOD = "good"
    AVERAGE = "average"
    NEEDS_IMPROVEMENT = "needs_improvement"


# Curve anchors
SCORE_AT_GOOD = 100
SCORE_AT_AVERAGE = 50
SCORE_FLOOR = 0
FLOOR_MULTIPLIER = 2  # Score reaches the floor at 2 × average threshold


def _check_intensity(intensity: float) -> None:
    if not is_finite_number(intensity):
        raise InvalidInputError(
            "intensity must be a finite number", field="kg_co2e_per_employee", value=intensity
        )
    if intensity < 0:
        raise InvalidInputError(
            "intensity cannot be negative", field="kg_co2e_per_employee", value=intensity
        )


def categorize(intensity: float, benchmark: SectorBenchmark) -> ScoreCategory:
    """
    Classify an intensity against a benchmark.

    Thresholds are inclusive: a value equal to the good threshold is GOOD,
    one equal to the average threshold is AVERAGE.

    Args:
        intensity: kg CO2e per employee
        benchmark: Sector benchmark

    Returns:
        ScoreCategory
    """
    _check_intensity(intensity)
    if intensity <= benchmark.good_threshold_kg:
        return ScoreCategory.GOOD
    elif intensity <= benchmark.average_threshold_kg:
        return ScoreCategory.AVERAGE
    return ScoreCategory.NEEDS_IMPROVEMENT


def score(intensity: float, benchmark: SectorBenchmark) -> int:
    """
    Score an intensity on the fixed three-segment curve.

    Args:
        intensity: kg CO2e per employee
        benchmark: Sector benchmark (supplies the thresholds only)

    Returns:
        Integer score (0-100), non-increasing in intensity
    """
    _check_intensity(intensity)
    # Exact arithmetic; a true .5 must round up
    intensity = Fraction(intensity)
    good = Fraction(benchmark.good_threshold_kg)
    average = Fraction(benchmark.average_threshold_kg)
    floor_at = average * FLOOR_MULTIPLIER

    if intensity <= good:
        raw = SCORE_AT_GOOD
    elif intensity <= average:
        position = (intensity - good) / (average - good)
        raw = SCORE_AT_GOOD - position * (SCORE_AT_GOOD - SCORE_AT_AVERAGE)
    elif intensity >= floor_at:
        raw = SCORE_FLOOR
    else:
        position = (intensity - average) / (floor_at - average)
        raw = SCORE_AT_AVERAGE - position * (SCORE_AT_AVERAGE - SCORE_FLOOR)

    return int(clamp(round_half_up(raw), SCORE_FLOOR, SCORE_AT_GOOD))


@dataclass
class BenchmarkResult:
    """Category and score for one intensity against one benchmark."""
    benchmark: SectorBenchmark
    intensity: float
    category: ScoreCategory
    score: int


def compare_to_benchmark(intensity: float, benchmark: SectorBenchmark) -> BenchmarkResult:
    """Run both categorize and score for one benchmark."""
    return BenchmarkResult(
        benchmark=benchmark,
        intensity=intensity,
        category=categorize(intensity, benchmark),
        score=score(intensity, benchmark),
    )


@dataclass
class FootprintAssessment:
    """A footprint plus its benchmark outcome, when one was available."""
    footprint: CarbonFootprint
    business_type: str
    score: int
    category: Optional[ScoreCategory] = None
    benchmark: Optional[SectorBenchmark] = None
    warning: Optional[str] = None

    @property
    def is_benchmarked(self) -> bool:
        return self.benchmark is not None


def evaluate_footprint(
    footprint: CarbonFootprint,
    business_type: str,
    benchmarks: Optional[Mapping[str, SectorBenchmark]] = None,
) -> FootprintAssessment:
    """
    Benchmark a footprint without letting a benchmark gap hide the footprint.

    Args:
        footprint: Result of calculate_emissions
        business_type: Declared industry
        benchmarks: Alternate sector table

    Returns:
        FootprintAssessment. When no benchmark exists for the business type,
        category and benchmark are None, score is the configured neutral
        score and `warning` explains why.
    """
    try:
        benchmark = get_benchmark(business_type, benchmarks)
    except MissingBenchmarkError as e:
        logger.warning(f"Footprint not benchmarked: {e.message}")
        return FootprintAssessment(
            footprint=footprint,
            business_type=business_type,
            score=get_settings().NEUTRAL_SCORE,
            warning=e.message,
        )

    result = compare_to_benchmark(footprint.kg_co2e_per_employee, benchmark)
    logger.debug(
        f"{business_type}: {footprint.kg_co2e_per_employee:.0f} kg/employee -> "
        f"{result.category.value} ({result.score})"
    )
    return FootprintAssessment(
        footprint=footprint,
        business_type=business_type,
        score=result.score,
        category=result.category,
        benchmark=benchmark,
    )
