"""
Model Assumptions

Immutable input record for the store and chain ROI model.
Ratios are expressed as decimals (0.32 = 32%). Monetary values are per store
per year in the currency named by ``currency``, which is only a label.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import List, Tuple


class AssumptionError(ValueError):
    """Raised by check_assumptions when assumptions fall outside sane ranges."""


@dataclass(frozen=True)
class Assumptions:
    """Business assumptions for one model run."""

    currency: str = "NOK"
    stores: int = 100  # Positive integer

    # Monetary, expected non-negative
    fee_per_store_per_year: float = 600_000
    annual_revenue_per_store: float = 12_000_000
    compliance_savings_per_store: float = 10_000

    # Current-state ratios
    gross_margin_pct: float = 0.32
    labor_cost_pct_of_revenue: float = 0.12
    shrink_pct_of_cogs: float = 0.02  # Shrink as share of COGS

    # Platform improvements at full adoption
    sales_uplift_pct: float = 0.015
    gm_improvement_pp: float = 0.005  # Margin points, e.g. 0.005 = +0.5pp
    labor_efficiency_pct: float = 0.02
    shrink_reduction_pct: float = 0.20

    discount_rate: float = 0.10

    # Adoption scale per year, conceptually 0-1 but never clamped
    ramp_y1: float = 0.70
    ramp_y2: float = 1.0
    ramp_y3: float = 1.0

    @property
    def ramp(self) -> Tuple[float, float, float]:
        """Adoption scale factors for years 1-3."""
        return (self.ramp_y1, self.ramp_y2, self.ramp_y3)

    def with_overrides(self, **overrides) -> "Assumptions":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


DEFAULT_ASSUMPTIONS = Assumptions()

RATIO_FIELDS = (
    "gross_margin_pct",
    "labor_cost_pct_of_revenue",
    "shrink_pct_of_cogs",
    "sales_uplift_pct",
    "gm_improvement_pp",
    "labor_efficiency_pct",
    "shrink_reduction_pct",
    "discount_rate",
    "ramp_y1",
    "ramp_y2",
    "ramp_y3",
)

MONETARY_FIELDS = (
    "fee_per_store_per_year",
    "annual_revenue_per_store",
    "compliance_savings_per_store",
)


def validate_assumptions(assumptions: Assumptions) -> List[str]:
    """
    Check assumptions against their expected ranges.

    The model itself never calls this; it computes whatever the formulas
    yield. Callers that want to warn users about odd inputs can use it.

    Returns:
        List of human-readable problems (empty when everything looks sane)
    """
    problems = []

    if not isinstance(assumptions.stores, int) or assumptions.stores <= 0:
        problems.append(f"stores must be a positive integer, got {assumptions.stores!r}")

    for f in fields(assumptions):
        if f.name in ("currency", "stores"):
            continue
        value = getattr(assumptions, f.name)
        if not math.isfinite(value):
            problems.append(f"{f.name} must be finite, got {value}")

    for name in MONETARY_FIELDS:
        value = getattr(assumptions, name)
        if value < 0:
            problems.append(f"{name} should not be negative, got {value}")

    for name in RATIO_FIELDS:
        value = getattr(assumptions, name)
        if not 0.0 <= value <= 1.0:
            problems.append(f"{name} outside expected range [0, 1]: {value}")

    return problems


def check_assumptions(assumptions: Assumptions) -> Assumptions:
    """Raise AssumptionError if validate_assumptions reports problems."""
    problems = validate_assumptions(assumptions)
    if problems:
        raise AssumptionError("; ".join(problems))
    return assumptions
