"""
Model Parity Tests

Pins the worked example for a 12M revenue store against hand-computed
figures. All benchmark values follow directly from the store formulas:

    baseline op = 12,000,000 x 0.32 - 12,000,000 x 0.12
                  - (12,000,000 - 12,000,000 x 0.32) x 0.02 = 2,236,800
"""

import math

import pytest

from roi_simulator.calculations.assumptions import Assumptions
from roi_simulator.calculations.store_model import (
    calculate_baseline,
    calculate_improved,
    effective_gross_margin,
)
from roi_simulator.calculations.cashflow import (
    calculate_full_effect_cash_flow,
    generate_year_rows,
)
from roi_simulator.calculations.valuation import run_model


# =============================================================================
# BENCHMARK DATA
# =============================================================================

BENCHMARKS = {
    # Baseline store
    "baseline_revenue": 12_000_000,
    "baseline_gross_profit": 3_840_000,
    "baseline_cogs": 8_160_000,
    "baseline_labor": 1_440_000,
    "baseline_shrink": 163_200,
    "baseline_op": 2_236_800,
    # Improved store at full adoption, base improvements
    "improved_revenue": 12_180_000,
    "improved_margin": 0.325,
    "improved_gross_profit": 3_958_500,
    "improved_cogs": 8_221_500,
    "improved_labor": 1_432_368,
    "improved_shrink": 131_544,
    "improved_op": 2_394_588,
    # Default fee 600k and compliance 10k
    "full_effect_cash_flow": -432_212,
}

REL = 1e-6


@pytest.fixture
def worked_example():
    return Assumptions(
        annual_revenue_per_store=12_000_000,
        gross_margin_pct=0.32,
        labor_cost_pct_of_revenue=0.12,
        shrink_pct_of_cogs=0.02,
        sales_uplift_pct=0.015,
        gm_improvement_pp=0.005,
        labor_efficiency_pct=0.02,
        shrink_reduction_pct=0.20,
        compliance_savings_per_store=10_000,
        fee_per_store_per_year=600_000,
    )


class TestBaselineParity:
    def test_baseline_lines(self, worked_example):
        b = calculate_baseline(worked_example)
        assert b.revenue == pytest.approx(BENCHMARKS["baseline_revenue"], rel=REL)
        assert b.gross_profit == pytest.approx(BENCHMARKS["baseline_gross_profit"], rel=REL)
        assert b.cogs == pytest.approx(BENCHMARKS["baseline_cogs"], rel=REL)
        assert b.labor_cost == pytest.approx(BENCHMARKS["baseline_labor"], rel=REL)
        assert b.shrink == pytest.approx(BENCHMARKS["baseline_shrink"], rel=REL)
        assert b.operating_profit == pytest.approx(BENCHMARKS["baseline_op"], rel=REL)


class TestImprovedParity:
    def test_improved_lines_full_adoption(self, worked_example):
        w = calculate_improved(worked_example, 1.0)
        assert effective_gross_margin(worked_example, 1.0) == pytest.approx(
            BENCHMARKS["improved_margin"], rel=REL
        )
        assert w.revenue == pytest.approx(BENCHMARKS["improved_revenue"], rel=REL)
        assert w.gross_profit == pytest.approx(BENCHMARKS["improved_gross_profit"], rel=REL)
        assert w.cogs == pytest.approx(BENCHMARKS["improved_cogs"], rel=REL)
        assert w.labor_cost == pytest.approx(BENCHMARKS["improved_labor"], rel=REL)
        assert w.shrink == pytest.approx(BENCHMARKS["improved_shrink"], rel=REL)
        assert w.operating_profit == pytest.approx(BENCHMARKS["improved_op"], rel=REL)

    def test_fee_outweighs_improvement(self, worked_example):
        """The 600k fee is larger than the operating gain plus compliance."""
        assert calculate_full_effect_cash_flow(worked_example) == pytest.approx(
            BENCHMARKS["full_effect_cash_flow"], rel=REL
        )


class TestProjectionParity:
    def test_year_one_partial_adoption(self, worked_example):
        """Year 1 at 70% adoption."""
        row = generate_year_rows(worked_example)[0]
        revenue = 12_000_000 * (1 + 0.015 * 0.7)
        margin = 0.32 + 0.005 * 0.7
        gross_profit = revenue * margin
        labor = 0.12 * revenue * (1 - 0.02 * 0.7)
        shrink = 0.02 * (revenue - gross_profit) * (1 - 0.20 * 0.7)
        op = gross_profit - labor - shrink

        assert row.improved.revenue == pytest.approx(12_126_000, rel=REL)
        assert row.improved.operating_profit == pytest.approx(op, rel=REL)
        assert row.compliance == pytest.approx(7_000, rel=REL)
        assert row.incremental_cash_flow == pytest.approx(
            op - BENCHMARKS["baseline_op"] + 7_000 - 600_000, rel=REL
        )

    def test_chain_metrics(self, worked_example):
        result = run_model(worked_example)
        cf = result.cash_flows
        expected_npv = cf[0] / 1.1 + cf[1] / 1.1 ** 2 + cf[2] / 1.1 ** 3

        assert result.valuation.npv == pytest.approx(expected_npv, rel=REL)
        assert result.chain_npv == pytest.approx(expected_npv * 100, rel=REL)
        assert result.valuation.roi == pytest.approx(-432_212 / 600_000, rel=REL)
        assert math.isnan(result.valuation.payback_years)
        assert math.isnan(result.valuation.irr)
