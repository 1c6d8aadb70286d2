"""
IRR and NPV Calculations

Implements IRR using Newton-Raphson method on year-end cash flows.

Cash flows are indexed from year 1: there is no year-0 flow, so
NPV = sum(cf[t] / (1 + r) ** t) for t = 1..n. Undefined results are
reported as NaN rather than raised.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-7
DEFAULT_GUESS = 0.1


@dataclass(frozen=True)
class IRRResult:
    """IRR estimate tagged with solver diagnostics."""

    value: float  # NaN when undefined
    converged: bool
    iterations: int


def _periods(n: int) -> np.ndarray:
    return np.arange(1, n + 1, dtype=np.float64)


def calculate_npv(cash_flows: List[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of year-end cash flows.

    Args:
        cash_flows: Cash flows for years 1..n
        discount_rate: Annual discount rate (e.g., 0.10 for 10%)

    Returns:
        NPV value (0.0 for an empty series)
    """
    flows = np.asarray(cash_flows, dtype=np.float64)
    if flows.size == 0:
        return 0.0
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        discount = (1.0 + discount_rate) ** _periods(flows.size)
        return float(np.sum(flows / discount))


def _npv_and_derivative(flows: np.ndarray, rate: float) -> Tuple[float, float]:
    """NPV and its derivative with respect to rate (for Newton-Raphson)."""
    periods = _periods(flows.size)
    base = np.float64(1.0) + rate
    npv = np.sum(flows / base ** periods)
    dnpv = np.sum(-periods * flows / base ** (periods + 1))
    return npv, dnpv


def has_sign_change(cash_flows: List[float]) -> bool:
    """True unless every flow is non-negative or every flow is non-positive."""
    all_non_negative = all(cf >= 0 for cf in cash_flows)
    all_non_positive = all(cf <= 0 for cf in cash_flows)
    return not (all_non_negative or all_non_positive)


def calculate_irr_result(
    cash_flows: List[float],
    guess: float = DEFAULT_GUESS,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> IRRResult:
    """
    Calculate IRR and report whether Newton-Raphson converged.

    Iteration stops when the update is non-finite or moves less than
    ``tolerance``. If the cap is reached the last estimate is returned with
    ``converged=False``. Without a sign change there is no meaningful root
    and the value is NaN.

    Args:
        cash_flows: Cash flows for years 1..n
        guess: Starting rate (default 0.1 = 10%)
        max_iterations: Iteration cap
        tolerance: Minimum step size treated as convergence

    Returns:
        IRRResult with the estimate, convergence flag and step count
    """
    if not has_sign_change(cash_flows):
        return IRRResult(value=math.nan, converged=False, iterations=0)

    flows = np.asarray(cash_flows, dtype=np.float64)
    rate = np.float64(guess)
    converged = False
    iterations = 0

    # Division by zero and overflow must surface as inf/NaN, not exceptions
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        for _ in range(max_iterations):
            iterations += 1
            npv, dnpv = _npv_and_derivative(flows, rate)
            new_rate = rate - npv / dnpv

            if not np.isfinite(new_rate):
                rate = new_rate
                break

            if abs(new_rate - rate) < tolerance:
                rate = new_rate
                converged = True
                break

            rate = new_rate

    if not converged:
        logger.debug(
            "IRR did not converge after %d iterations, last estimate %s",
            iterations,
            rate,
        )

    return IRRResult(value=float(rate), converged=converged, iterations=iterations)


def calculate_irr(
    cash_flows: List[float],
    guess: float = DEFAULT_GUESS,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> float:
    """
    Calculate IRR (Internal Rate of Return) using Newton-Raphson method.

    Returns:
        Annual IRR as decimal (e.g., 0.15 for 15%), NaN when no sign change
    """
    return calculate_irr_result(cash_flows, guess, max_iterations, tolerance).value


def calculate_chain_npv(store_npv: float, stores: int) -> float:
    """Chain NPV, assuming every store behaves like the modelled one."""
    return store_npv * stores
