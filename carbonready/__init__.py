"""
CarbonReady Computation Core

Deterministic engines behind the sustainability-compliance workspace:
1. Emission calculation - activity quantities to a scoped carbon footprint
2. Benchmark scoring - per-employee intensity against a sector benchmark
3. Readiness aggregation - four sub-scores to one weighted readiness figure
4. Recommendation matching - grants, subsidies and consultants ranked for a profile

Every engine is a pure function of its inputs and an injected reference table.
"""

__version__ = "0.1.0"
