"""
Benchmark Scoring

Example Usage:
    from carbonready.benchmarks import get_benchmark, categorize, score

    benchmark = get_benchmark("manufacturing")
    print(categorize(8000, benchmark).value, score(8000, benchmark))  # average 75
"""

from .sectors import (
    SECTOR_BENCHMARK_DATA,
    SectorBenchmark,
    get_benchmark,
    get_benchmark_or_default,
    get_sector_benchmarks,
    normalize_business_type,
)
from .scoring import (
    FLOOR_MULTIPLIER,
    SCORE_AT_AVERAGE,
    SCORE_AT_GOOD,
    SCORE_FLOOR,
    BenchmarkResult,
    FootprintAssessment,
    ScoreCategory,
    categorize,
    compare_to_benchmark,
    evaluate_footprint,
    score,
)

__all__ = [
    "SECTOR_BENCHMARK_DATA",
    "SectorBenchmark",
    "get_benchmark",
    "get_benchmark_or_default",
    "get_sector_benchmarks",
    "normalize_business_type",
    "FLOOR_MULTIPLIER",
    "SCORE_AT_AVERAGE",
    "SCORE_AT_GOOD",
    "SCORE_FLOOR",
    "BenchmarkResult",
    "FootprintAssessment",
    "ScoreCategory",
    "categorize",
    "compare_to_benchmark",
    "evaluate_footprint",
    "score",
]
