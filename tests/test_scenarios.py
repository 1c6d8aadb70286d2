"""
Tests for scenario presets and composition.
"""

import math

import pytest

from roi_simulator.calculations.assumptions import Assumptions
from roi_simulator.calculations.scenarios import (
    OVERRIDABLE_FIELDS,
    SCENARIO_PRESETS,
    ScenarioError,
    apply_preset,
    run_scenario,
    run_scenarios,
)
from roi_simulator.calculations.valuation import run_model


class TestPresets:
    def test_preset_order(self):
        assert list(SCENARIO_PRESETS) == ["pessimistic", "base", "optimistic"]

    def test_presets_only_touch_improvements(self):
        for overrides in SCENARIO_PRESETS.values():
            assert set(overrides) <= OVERRIDABLE_FIELDS

    def test_presets_strictly_increasing(self):
        low, mid, high = SCENARIO_PRESETS.values()
        for field in OVERRIDABLE_FIELDS:
            assert low[field] < mid[field] < high[field]


class TestApplyPreset:
    def test_apply_named_preset(self, default_assumptions):
        a = apply_preset(default_assumptions, "optimistic")
        assert a.sales_uplift_pct == 0.03
        assert a.compliance_savings_per_store == 30_000

    def test_fee_revenue_and_ramp_preserved(self):
        base = Assumptions(
            fee_per_store_per_year=250_000,
            annual_revenue_per_store=8_000_000,
            ramp_y1=0.3,
        )
        a = apply_preset(base, "pessimistic")
        assert a.fee_per_store_per_year == 250_000
        assert a.annual_revenue_per_store == 8_000_000
        assert a.ramp == (0.3, 1.0, 1.0)

    def test_base_assumptions_not_mutated(self, default_assumptions):
        apply_preset(default_assumptions, "optimistic")
        assert default_assumptions.sales_uplift_pct == 0.015

    def test_aliases(self, default_assumptions):
        assert apply_preset(default_assumptions, "worst") == apply_preset(
            default_assumptions, "pessimistic"
        )
        assert apply_preset(default_assumptions, "best") == apply_preset(
            default_assumptions, "optimistic"
        )

    def test_unknown_preset(self, default_assumptions):
        with pytest.raises(ScenarioError, match="Unknown scenario preset"):
            apply_preset(default_assumptions, "moonshot")

    def test_forbidden_override(self, default_assumptions):
        with pytest.raises(ScenarioError, match="fee_per_store_per_year"):
            apply_preset(default_assumptions, {"fee_per_store_per_year": 0})

    def test_custom_overrides(self, default_assumptions):
        a = apply_preset(default_assumptions, {"labor_efficiency_pct": 0.1})
        assert a.labor_efficiency_pct == 0.1


class TestRunScenarios:
    def test_three_results_in_order(self, default_assumptions):
        results = run_scenarios(default_assumptions)
        assert [r.name for r in results] == ["pessimistic", "base", "optimistic"]

    @pytest.mark.parametrize(
        "base",
        [
            Assumptions(),
            Assumptions(fee_per_store_per_year=50_000),
            Assumptions(stores=12, discount_rate=0.07, ramp_y1=0.4, ramp_y2=0.8),
        ],
    )
    def test_npv_ordering(self, base):
        pessimistic, mid, optimistic = run_scenarios(base)
        assert pessimistic.npv <= mid.npv <= optimistic.npv

    def test_base_scenario_matches_plain_run(self, default_assumptions):
        """Default assumptions already carry the base preset."""
        result = run_scenario(default_assumptions, "base")
        plain = run_model(default_assumptions)
        assert result.npv == pytest.approx(plain.valuation.npv)
        assert result.chain_npv == pytest.approx(plain.chain_npv)

    def test_zero_fee_roi_undefined(self):
        for result in run_scenarios(Assumptions(fee_per_store_per_year=0)):
            assert math.isnan(result.roi)
            assert math.isnan(result.payback_years)

    def test_custom_scenario_mapping(self, default_assumptions):
        results = run_scenarios(
            default_assumptions,
            presets={"flat": {"sales_uplift_pct": 0.0}},
        )
        assert len(results) == 1
        assert results[0].name == "flat"
        assert results[0].assumptions.sales_uplift_pct == 0.0
