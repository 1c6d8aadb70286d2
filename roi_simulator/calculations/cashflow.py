"""
Cash Flow Calculations

Projects per-store incremental cash flows across the adoption ramp.

Each year compares the improved store against the constant baseline, adds
compliance savings (scaled by adoption) and subtracts the platform fee
(never scaled: the full fee is charged every year).
"""

from typing import List, Dict, Optional, Sequence
from dataclasses import dataclass

from roi_simulator.calculations.assumptions import Assumptions
from roi_simulator.calculations.store_model import (
    StoreEconomics,
    calculate_baseline,
    calculate_improved,
)

FULL_EFFECT_SCALE = 1.0


@dataclass(frozen=True)
class YearRow:
    """Projection for a single adoption year."""

    year: int  # 1-based
    scale: float
    improved: StoreEconomics
    baseline_operating_profit: float
    compliance: float
    fee: float
    incremental_cash_flow: float

    def to_dict(self) -> Dict:
        return {
            "year": self.year,
            "scale": self.scale,
            **self.improved.to_dict(),
            "baseline_operating_profit": self.baseline_operating_profit,
            "compliance": self.compliance,
            "fee": self.fee,
            "incremental_cash_flow": self.incremental_cash_flow,
        }


def calculate_incremental_cash_flow(
    assumptions: Assumptions,
    scale: float,
    baseline: Optional[StoreEconomics] = None,
) -> float:
    """
    Incremental cash flow for one store-year.

    (improved_op - baseline_op) + compliance_savings * scale - fee
    """
    if baseline is None:
        baseline = calculate_baseline(assumptions)
    improved = calculate_improved(assumptions, scale)
    compliance = assumptions.compliance_savings_per_store * scale
    return (
        improved.operating_profit - baseline.operating_profit
        + compliance
        - assumptions.fee_per_store_per_year
    )


def calculate_full_effect_cash_flow(assumptions: Assumptions) -> float:
    """Steady-state incremental cash flow (scale = 1.0), used for ROI and payback."""
    return calculate_incremental_cash_flow(assumptions, FULL_EFFECT_SCALE)


def generate_year_rows(
    assumptions: Assumptions,
    scales: Optional[Sequence[float]] = None,
) -> List[YearRow]:
    """
    Generate the per-year projection.

    Args:
        assumptions: Model assumptions
        scales: Adoption factor per year; defaults to the 3-year ramp in
            the assumptions. Any length is accepted.

    Returns:
        One YearRow per entry in ``scales``
    """
    if scales is None:
        scales = assumptions.ramp

    baseline = calculate_baseline(assumptions)
    fee = assumptions.fee_per_store_per_year
    rows = []

    for year, scale in enumerate(scales, start=1):
        improved = calculate_improved(assumptions, scale)
        compliance = assumptions.compliance_savings_per_store * scale
        incremental = (
            improved.operating_profit - baseline.operating_profit
            + compliance
            - fee
        )
        rows.append(
            YearRow(
                year=year,
                scale=scale,
                improved=improved,
                baseline_operating_profit=baseline.operating_profit,
                compliance=compliance,
                fee=fee,
                incremental_cash_flow=incremental,
            )
        )

    return rows


def extract_cash_flows(rows: List[YearRow]) -> List[float]:
    """Incremental cash-flow vector (years 1..n) for the valuation engine."""
    return [row.incremental_cash_flow for row in rows]

