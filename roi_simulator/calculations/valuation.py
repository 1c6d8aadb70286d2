"""
Valuation

Reduces a per-store cash-flow projection to NPV, IRR, ROI and payback, and
runs the full assumptions -> projection -> valuation pipeline.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from roi_simulator.calculations.assumptions import Assumptions
from roi_simulator.calculations.cashflow import (
    YearRow,
    calculate_full_effect_cash_flow,
    extract_cash_flows,
    generate_year_rows,
)
from roi_simulator.calculations.irr import (
    DEFAULT_GUESS,
    MAX_ITERATIONS,
    TOLERANCE,
    calculate_chain_npv,
    calculate_irr_result,
    calculate_npv,
)
from roi_simulator.calculations.store_model import StoreEconomics, calculate_baseline


@dataclass(frozen=True)
class ValuationResult:
    """Per-store investment metrics. Undefined values are NaN."""

    npv: float
    irr: float
    roi: float
    payback_years: float


@dataclass(frozen=True)
class ModelResult:
    """Everything produced by one run of the model."""

    assumptions: Assumptions
    baseline: StoreEconomics
    rows: List[YearRow]
    cash_flows: List[float]
    valuation: ValuationResult
    chain_npv: float
    irr_converged: bool
    irr_iterations: int


def calculate_roi(assumptions: Assumptions) -> float:
    """
    Full-effect ROI: steady-state incremental cash flow divided by the fee.

    Uses scale = 1.0 rather than the ramp. NaN when the fee is zero.
    """
    fee = assumptions.fee_per_store_per_year
    if fee == 0:
        return math.nan
    return calculate_full_effect_cash_flow(assumptions) / fee


def calculate_payback(assumptions: Assumptions) -> float:
    """
    Payback period in years: fee / full-effect incremental cash flow.

    Only defined when there is a fee to pay back and the full-effect cash
    flow is strictly positive.
    """
    fee = assumptions.fee_per_store_per_year
    full_effect = calculate_full_effect_cash_flow(assumptions)
    if fee == 0 or full_effect <= 0:
        return math.nan
    return fee / full_effect


def run_model(
    assumptions: Assumptions,
    scales: Optional[Sequence[float]] = None,
    irr_guess: float = DEFAULT_GUESS,
    irr_max_iterations: int = MAX_ITERATIONS,
    irr_tolerance: float = TOLERANCE,
) -> ModelResult:
    """
    Run the full model for one set of assumptions.

    Args:
        assumptions: Model assumptions
        scales: Adoption factor per year (defaults to the assumptions' ramp)
        irr_guess: Newton-Raphson starting rate
        irr_max_iterations: Newton-Raphson iteration cap
        irr_tolerance: Newton-Raphson convergence tolerance

    Returns:
        ModelResult with rows, cash flows, metrics and chain NPV
    """
    rows = generate_year_rows(assumptions, scales)
    cash_flows = extract_cash_flows(rows)

    irr = calculate_irr_result(
        cash_flows,
        guess=irr_guess,
        max_iterations=irr_max_iterations,
        tolerance=irr_tolerance,
    )
    npv = calculate_npv(cash_flows, assumptions.discount_rate)

    valuation = ValuationResult(
        npv=npv,
        irr=irr.value,
        roi=calculate_roi(assumptions),
        payback_years=calculate_payback(assumptions),
    )

    return ModelResult(
        assumptions=assumptions,
        baseline=calculate_baseline(assumptions),
        rows=rows,
        cash_flows=cash_flows,
        valuation=valuation,
        chain_npv=calculate_chain_npv(npv, assumptions.stores),
        irr_converged=irr.converged,
        irr_iterations=irr.iterations,
    )
