"""
Store Economics

Per-store operating profit before the platform (baseline) and with
platform-driven improvements at a given adoption scale (improved).
"""

from dataclasses import dataclass, asdict
from typing import Dict

from roi_simulator.calculations.assumptions import Assumptions

# Improved gross margin is kept inside [MIN_GROSS_MARGIN, MAX_GROSS_MARGIN]
MIN_GROSS_MARGIN = 0.0
MAX_GROSS_MARGIN = 0.99


@dataclass(frozen=True)
class StoreEconomics:
    """Annual P&L lines for a single store."""

    revenue: float
    gross_profit: float
    cogs: float  # revenue - gross_profit
    labor_cost: float
    shrink: float
    operating_profit: float  # gross_profit - labor_cost - shrink

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_baseline(assumptions: Assumptions) -> StoreEconomics:
    """
    Calculate the store's current-state economics.

    Constant across all years; no adoption scale applies. Inputs are not
    validated, out-of-range ratios flow straight through the formulas.
    """
    revenue = assumptions.annual_revenue_per_store
    gross_profit = revenue * assumptions.gross_margin_pct
    cogs = revenue - gross_profit
    labor_cost = assumptions.labor_cost_pct_of_revenue * revenue
    shrink = assumptions.shrink_pct_of_cogs * cogs

    return StoreEconomics(
        revenue=revenue,
        gross_profit=gross_profit,
        cogs=cogs,
        labor_cost=labor_cost,
        shrink=shrink,
        operating_profit=gross_profit - labor_cost - shrink,
    )


def effective_gross_margin(assumptions: Assumptions, scale: float) -> float:
    """Improved gross margin at ``scale``, clamped to [0, 0.99]."""
    margin = assumptions.gross_margin_pct + assumptions.gm_improvement_pp * scale
    return min(MAX_GROSS_MARGIN, max(MIN_GROSS_MARGIN, margin))


def calculate_improved(assumptions: Assumptions, scale: float) -> StoreEconomics:
    """
    Calculate store economics with platform improvements.

    Every improvement is multiplied by ``scale`` (the adoption factor for the
    year). Only the gross margin is clamped; labor and shrink reductions are
    cost multipliers and are left as given.

    Args:
        assumptions: Model assumptions
        scale: Adoption factor, typically 0-1 (not clamped)

    Returns:
        StoreEconomics for one store-year
    """
    revenue = assumptions.annual_revenue_per_store * (
        1 + assumptions.sales_uplift_pct * scale
    )
    gross_margin = effective_gross_margin(assumptions, scale)
    gross_profit = revenue * gross_margin
    cogs = revenue - gross_profit

    labor_cost = (
        assumptions.labor_cost_pct_of_revenue
        * revenue
        * (1 - assumptions.labor_efficiency_pct * scale)
    )
    shrink = (
        assumptions.shrink_pct_of_cogs
        * cogs
        * (1 - assumptions.shrink_reduction_pct * scale)
    )

    return StoreEconomics(
        revenue=revenue,
        gross_profit=gross_profit,
        cogs=cogs,
        labor_cost=labor_cost,
        shrink=shrink,
        operating_profit=gross_profit - labor_cost - shrink,
    )
