"""
Test Suite for the Emission Calculation Engine

Tests:
- Worked example and additivity of line items / scope totals / grand total
- Non-negativity and monotonicity
- Boundary validation (invalid input vs missing reference data)
- Factor tables, defaults and display helpers
"""

import math
import pytest
from dataclasses import fields, replace
from datetime import date

from carbonready.emissions import (
    ActivityInputs,
    ActivityKind,
    EmissionScope,
    Scope1Inputs,
    Scope2Inputs,
    Scope3Inputs,
    activity_kinds_for_scope,
    build_factor_table,
    calculate_emissions,
    default_activity_inputs,
    format_emissions,
    get_employee_range,
    get_activity_scope,
    get_factor_table,
    validate_activity_inputs,
)
from carbonready.exceptions import (
    InvalidInputError,
    MissingEmissionFactorError,
    MissingReferenceDataError,
)


def _inputs(**scopes) -> ActivityInputs:
    return ActivityInputs(
        period_start=date(2024, 1, 1),
        period_end=date(2024, 12, 31),
        employees_count=scopes.pop("employees_count", 10),
        **scopes,
    )


# =============================================================================
# WORKED EXAMPLE & ADDITIVITY
# =============================================================================


class TestCalculation:
    """Test footprint totals."""

    def test_electricity_only_example(self, uk_factors):
        """10,000 kWh at 0.233 kg/kWh = 2,330 kg = 2.33 t."""
        factors = uk_factors.with_overrides({ActivityKind.ELECTRICITY_KWH: 0.233})
        footprint = calculate_emissions(
            _inputs(scope2=Scope2Inputs(electricity_kwh=10000)), factors
        )

        assert footprint.scope2_total_kg_co2e == pytest.approx(2330)
        assert footprint.scope1_total_kg_co2e == 0
        assert footprint.scope3_total_kg_co2e == 0
        assert footprint.total_kg_co2e == pytest.approx(2330)
        assert footprint.total_tonnes_co2e == pytest.approx(2.33)

    def test_grand_total_is_sum_of_scopes(self, office_inputs, uk_factors):
        """total == scope1 + scope2 + scope3."""
        fp = calculate_emissions(office_inputs, uk_factors)
        expected = fp.scope1_total_kg_co2e + fp.scope2_total_kg_co2e + fp.scope3_total_kg_co2e
        assert fp.total_kg_co2e == pytest.approx(expected, rel=1e-9)

    def test_scope_totals_are_sums_of_lines(self, office_inputs, uk_factors):
        """Each scope total reproduces from its own breakdown lines."""
        fp = calculate_emissions(office_inputs, uk_factors)
        for scope in EmissionScope:
            lines = fp.lines_for_scope(scope)
            assert fp.scope_total(scope) == pytest.approx(
                sum(line.kg_co2e for line in lines), rel=1e-9
            )

    def test_every_line_is_quantity_times_coefficient(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs, uk_factors)
        assert len(fp.breakdown) == len(ActivityKind)
        for line in fp.breakdown:
            assert line.coefficient == uk_factors.coefficient(line.activity_kind)
            assert line.quantity == office_inputs.quantity(line.activity_kind)
            assert line.kg_co2e == line.quantity * line.coefficient

    def test_summation_order_does_not_matter(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs, uk_factors)
        forward = sum(line.kg_co2e for line in fp.breakdown)
        backward = sum(line.kg_co2e for line in reversed(fp.breakdown))
        assert forward == pytest.approx(backward, rel=1e-9)
        assert fp.total_kg_co2e == pytest.approx(forward, rel=1e-9)

    def test_category_totals_add_up(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs, uk_factors)
        totals = fp.category_totals()
        assert sum(totals.values()) == pytest.approx(fp.total_kg_co2e, rel=1e-9)
        assert totals["waste"] == pytest.approx(1.2 * 446.24 + 0.8 * 21.29)

    def test_ev_charging_reported_in_scope1(self, uk_factors):
        fp = calculate_emissions(_inputs(scope1=Scope1Inputs(vehicle_ev_kwh=1000)), uk_factors)
        assert fp.scope1_total_kg_co2e == pytest.approx(207.07)
        assert fp.scope2_total_kg_co2e == 0

    def test_electricity_includes_transmission_losses(self, uk_factors):
        fp = calculate_emissions(_inputs(scope2=Scope2Inputs(electricity_kwh=1000)), uk_factors)
        assert fp.scope2_total_kg_co2e == pytest.approx(1000 * (0.20707 + 0.01879))

    def test_per_employee_intensity(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs, uk_factors)
        assert fp.kg_co2e_per_employee == pytest.approx(fp.total_kg_co2e / 12)

    def test_per_sqm_intensity(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs, uk_factors)
        assert fp.kg_co2e_per_sqm == pytest.approx(fp.total_kg_co2e / 350)

    @pytest.mark.parametrize("area", [None, 0])
    def test_per_sqm_absent_without_floor_area(self, office_inputs, uk_factors, area):
        """No floor area means no intensity, not zero intensity."""
        fp = calculate_emissions(replace(office_inputs, floor_area_sqm=area), uk_factors)
        assert fp.kg_co2e_per_sqm is None

    def test_default_table_comes_from_settings(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs)
        assert fp.dataset == "uk_2024"
        assert fp.total_kg_co2e == calculate_emissions(office_inputs, uk_factors).total_kg_co2e

    def test_to_dict_is_plain_data(self, office_inputs, uk_factors):
        data = calculate_emissions(office_inputs, uk_factors).to_dict()
        assert data["period_start"] == "2024-01-01"
        assert data["breakdown"][0]["activity_kind"] == "natural_gas_kwh"
        assert data["breakdown"][0]["scope"] == 1


# =============================================================================
# PROPERTIES
# =============================================================================


class TestProperties:
    """Non-negativity and monotonicity over every activity kind."""

    def test_outputs_never_negative(self, office_inputs, uk_factors):
        fp = calculate_emissions(office_inputs, uk_factors)
        assert fp.total_kg_co2e >= 0
        assert all(fp.scope_total(scope) >= 0 for scope in EmissionScope)
        assert all(line.kg_co2e >= 0 for line in fp.breakdown)

    @pytest.mark.parametrize("kind", list(ActivityKind))
    def test_increasing_a_quantity_never_lowers_total(self, office_inputs, uk_factors, kind):
        before = calculate_emissions(office_inputs, uk_factors).total_kg_co2e

        scope_attr = f"scope{get_activity_scope(kind).value}"
        record = getattr(office_inputs, scope_attr)
        bumped = replace(record, **{kind.value: getattr(record, kind.value) + 100})
        after = calculate_emissions(
            replace(office_inputs, **{scope_attr: bumped}), uk_factors
        ).total_kg_co2e

        assert after >= before

    def test_all_zero_inputs_give_zero(self, uk_factors):
        fp = calculate_emissions(default_activity_inputs(2024), uk_factors)
        assert fp.total_kg_co2e == 0
        assert fp.kg_co2e_per_employee == 0


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidation:
    """Invalid input is rejected before anything is computed."""

    def test_negative_quantity_rejected(self, uk_factors):
        with pytest.raises(InvalidInputError) as exc:
            calculate_emissions(_inputs(scope1=Scope1Inputs(natural_gas_kwh=-5)), uk_factors)
        assert exc.value.field == "scope1.natural_gas_kwh"
        assert "negative" in exc.value.message

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_quantity_rejected(self, uk_factors, bad):
        with pytest.raises(InvalidInputError) as exc:
            calculate_emissions(_inputs(scope2=Scope2Inputs(electricity_kwh=bad)), uk_factors)
        assert exc.value.field == "scope2.electricity_kwh"
        assert "finite" in exc.value.message

    def test_non_numeric_quantity_rejected(self, uk_factors):
        with pytest.raises(InvalidInputError):
            calculate_emissions(_inputs(scope3=Scope3Inputs(water_m3="90")), uk_factors)

    @pytest.mark.parametrize("employees", [0, -3])
    def test_employee_count_must_be_positive(self, uk_factors, employees):
        with pytest.raises(InvalidInputError) as exc:
            calculate_emissions(_inputs(employees_count=employees), uk_factors)
        assert exc.value.field == "employees_count"
        assert exc.value.message == "employee count must be positive"

    def test_negative_floor_area_rejected(self, office_inputs, uk_factors):
        with pytest.raises(InvalidInputError) as exc:
            calculate_emissions(replace(office_inputs, floor_area_sqm=-10), uk_factors)
        assert exc.value.field == "floor_area_sqm"

    def test_period_must_not_end_before_start(self, office_inputs, uk_factors):
        inputs = replace(office_inputs, period_end=date(2023, 12, 31))
        with pytest.raises(InvalidInputError) as exc:
            calculate_emissions(inputs, uk_factors)
        assert exc.value.field == "period_end"

    def test_all_issues_reported(self):
        inputs = _inputs(employees_count=0, scope1=Scope1Inputs(lpg_litres=-1))
        issues = validate_activity_inputs(inputs)
        assert [i.field for i in issues] == ["scope1.lpg_litres", "employees_count"]

    def test_valid_inputs_have_no_issues(self, office_inputs):
        assert validate_activity_inputs(office_inputs) == []


class TestFromDict:
    """Loosely keyed payloads are checked against the closed kind set."""

    def test_parses_payload(self, office_inputs_dict):
        inputs = ActivityInputs.from_dict(office_inputs_dict)
        assert inputs.scope1.natural_gas_kwh == 18000
        assert inputs.scope1.lpg_litres == 0.0
        assert inputs.period_start == date(2024, 1, 1)
        assert inputs.employees_count == 12

    @pytest.mark.parametrize("payload", [[1, 2], "scope2=100", None, 42])
    def test_non_mapping_payload_rejected(self, payload):
        with pytest.raises(InvalidInputError) as exc:
            ActivityInputs.from_dict(payload)
        assert exc.value.field == "inputs"

    def test_unknown_activity_kind_rejected(self, office_inputs_dict):
        office_inputs_dict["scope2"]["solar_export_kwh"] = 500
        with pytest.raises(InvalidInputError) as exc:
            ActivityInputs.from_dict(office_inputs_dict)
        assert exc.value.field == "scope2.solar_export_kwh"
        assert "unknown activity kind" in exc.value.message

    def test_kind_under_wrong_scope_rejected(self, office_inputs_dict):
        office_inputs_dict["scope1"]["electricity_kwh"] = 100
        with pytest.raises(InvalidInputError) as exc:
            ActivityInputs.from_dict(office_inputs_dict)
        assert "scope 2" in exc.value.message

    def test_bad_date_rejected(self, office_inputs_dict):
        office_inputs_dict["period_end"] = "31/12/2024"
        with pytest.raises(InvalidInputError) as exc:
            ActivityInputs.from_dict(office_inputs_dict)
        assert exc.value.field == "period_end"

    def test_unknown_top_level_field_rejected(self, office_inputs_dict):
        office_inputs_dict["scope4"] = {}
        with pytest.raises(InvalidInputError):
            ActivityInputs.from_dict(office_inputs_dict)


# =============================================================================
# REFERENCE DATA
# =============================================================================


class TestFactorTables:
    """Factor tables are immutable and gaps are reported distinctly."""

    def test_scope_records_match_activity_kinds(self):
        for record, scope in (
            (Scope1Inputs, EmissionScope.DIRECT),
            (Scope2Inputs, EmissionScope.PURCHASED_ENERGY),
            (Scope3Inputs, EmissionScope.VALUE_CHAIN),
        ):
            names = {f.name for f in fields(record)}
            assert names == {k.value for k in activity_kinds_for_scope(scope)}

    def test_uk_table_is_complete(self, uk_factors):
        assert uk_factors.missing_kinds() == []
        assert uk_factors.dataset_year == 2024

    def test_missing_factor_is_reference_error(self, office_inputs):
        partial = build_factor_table("partial", 2024, {ActivityKind.ELECTRICITY_KWH: 0.2})
        with pytest.raises(MissingEmissionFactorError) as exc:
            calculate_emissions(office_inputs, partial)
        assert isinstance(exc.value, MissingReferenceDataError)
        assert not isinstance(exc.value, InvalidInputError)
        assert exc.value.dataset == "partial"

    def test_unknown_dataset(self):
        with pytest.raises(MissingReferenceDataError):
            get_factor_table("us_epa_1999")

    def test_configured_dataset_used_by_default(self, monkeypatch):
        monkeypatch.setenv("EMISSION_FACTOR_DATASET", "not_registered")
        with pytest.raises(MissingReferenceDataError):
            get_factor_table()

    def test_overrides_leave_base_table_untouched(self, uk_factors):
        derived = uk_factors.with_overrides({"electricity_kwh": 0.233})
        assert derived.coefficient(ActivityKind.ELECTRICITY_KWH) == 0.233
        assert uk_factors.coefficient(ActivityKind.ELECTRICITY_KWH) == 0.22586
        assert derived.dataset == "uk_2024+overrides"

    def test_table_cannot_be_mutated(self, uk_factors):
        with pytest.raises(TypeError):
            uk_factors.factors[ActivityKind.ELECTRICITY_KWH] = None

    @pytest.mark.parametrize("bad", [-0.1, math.nan])
    def test_bad_coefficient_rejected(self, bad):
        with pytest.raises(InvalidInputError):
            build_factor_table("bad", 2024, {ActivityKind.WATER_M3: bad})

    def test_unknown_kind_in_table_rejected(self):
        with pytest.raises(InvalidInputError):
            build_factor_table("bad", 2024, {"unobtainium_kg": 1.0})


class TestHelpers:
    """Defaults and display helpers."""

    def test_default_inputs(self):
        inputs = default_activity_inputs(2025)
        assert inputs.period_start == date(2025, 1, 1)
        assert inputs.period_end == date(2025, 12, 31)
        assert inputs.employees_count == 1
        assert inputs.floor_area_sqm is None
        assert all(q == 0 for q in inputs.scope3.quantities().values())

    @pytest.mark.parametrize("count,expected", [
        (1, "1-9"),
        (9, "1-9"),
        (10, "10-49"),
        (49, "10-49"),
        (50, "50-249"),
        (249, "50-249"),
        (250, "250+"),
    ])
    def test_employee_range(self, count, expected):
        assert get_employee_range(count) == expected

    @pytest.mark.parametrize("kg,expected", [
        (2330, "2.33 tonnes CO2e"),
        (1000, "1.00 tonnes CO2e"),
        (999.94, "999.9 kg CO2e"),
        (0, "0.0 kg CO2e"),
    ])
    def test_format_emissions(self, kg, expected):
        assert format_emissions(kg) == expected
