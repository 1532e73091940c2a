#!/usr/bin/env python3
"""
Footprint Calculation Script

Calculate and benchmark a carbon footprint from an activity-input JSON file.

Usage:
    python scripts/calculate_footprint.py inputs.json --business-type manufacturing
    python scripts/calculate_footprint.py inputs.json -b retail --dataset uk_2024 -o report.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from carbonready.benchmarks import evaluate_footprint
from carbonready.emissions import (
    ActivityInputs,
    calculate_emissions,
    format_emissions,
    get_employee_range,
    get_factor_table,
)
from carbonready.exceptions import InvalidInputError, MissingReferenceDataError
from carbonready.utils import get_settings, setup_logging


def build_report(data: Any, business_type: str, dataset: Optional[str] = None) -> dict:
    """Run the calculation pipeline for one input document."""
    inputs = ActivityInputs.from_dict(data)
    factors = get_factor_table(dataset)
    footprint = calculate_emissions(inputs, factors)
    assessment = evaluate_footprint(footprint, business_type)

    return {
        "footprint": footprint.to_dict(),
        "category_totals": footprint.category_totals(),
        "business_type": business_type,
        "employee_range": get_employee_range(inputs.employees_count),
        "category": assessment.category.value if assessment.category else None,
        "score": assessment.score,
        "warning": assessment.warning,
    }


def print_summary(report: dict):
    footprint = report["footprint"]
    print(f"\n{'='*60}")
    print("CARBON FOOTPRINT")
    print(f"{'='*60}")
    print(f"Dataset:   {footprint['dataset']}")
    print(f"Period:    {footprint['period_start']} - {footprint['period_end']}")
    print(f"Scope 1:   {format_emissions(footprint['scope1_total_kg_co2e'])}")
    print(f"Scope 2:   {format_emissions(footprint['scope2_total_kg_co2e'])}")
    print(f"Scope 3:   {format_emissions(footprint['scope3_total_kg_co2e'])}")
    print(f"Total:     {format_emissions(footprint['total_kg_co2e'])}")
    print(f"Per employee: {footprint['kg_co2e_per_employee']:.1f} kg CO2e")
    if footprint["kg_co2e_per_sqm"] is not None:
        print(f"Per m2:       {footprint['kg_co2e_per_sqm']:.1f} kg CO2e")

    print(f"\n{'='*60}")
    print(f"BENCHMARK ({report['business_type']}, {report['employee_range']} employees)")
    print(f"{'='*60}")
    print(f"Category: {report['category'] or 'n/a'}")
    print(f"Score:    {report['score']}")
    if report["warning"]:
        print(f"Warning:  {report['warning']}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Calculate and benchmark a carbon footprint"
    )
    parser.add_argument(
        "inputs",
        help="Path to an activity-input JSON file"
    )
    parser.add_argument(
        "--business-type", "-b",
        default=None,
        help="Sector to benchmark against (default: DEFAULT_BUSINESS_TYPE)"
    )
    parser.add_argument(
        "--dataset",
        default=None,
        help="Emission factor dataset (default: EMISSION_FACTOR_DATASET)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Save report to JSON file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )
    args = parser.parse_args()

    load_dotenv()
    setup_logging(logging.DEBUG if args.verbose else None)

    business_type = args.business_type or get_settings().DEFAULT_BUSINESS_TYPE

    with open(args.inputs, encoding="utf-8") as f:
        data = json.load(f)

    try:
        report = build_report(data, business_type, args.dataset)
    except InvalidInputError as e:
        print("ERROR: invalid input")
        for issue in e.issues:
            print(f"  - {issue.field}: {issue.message}")
        return 1
    except MissingReferenceDataError as e:
        print(f"ERROR: {e.message}")
        return 1

    print_summary(report)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, default=str)

        print(f"\nReport saved to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
