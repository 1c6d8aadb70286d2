"""
Scenario Calculations

Runs the full model under named improvement presets.

Presets only override improvement-related assumptions; fee, revenue and the
adoption ramp always come from the caller's assumptions.
"""

from typing import Dict, List, Mapping, Optional, Union
from dataclasses import dataclass

from roi_simulator.calculations.assumptions import Assumptions
from roi_simulator.calculations.irr import DEFAULT_GUESS, MAX_ITERATIONS, TOLERANCE
from roi_simulator.calculations.valuation import run_model


class ScenarioError(ValueError):
    """Unknown preset or an override of a field presets may not touch."""


OVERRIDABLE_FIELDS = frozenset(
    {
        "sales_uplift_pct",
        "gm_improvement_pp",
        "labor_efficiency_pct",
        "shrink_reduction_pct",
        "compliance_savings_per_store",
    }
)

# Ordered pessimistic -> optimistic; every field increases along the order
SCENARIO_PRESETS: Dict[str, Dict[str, float]] = {
    "pessimistic": {
        "sales_uplift_pct": 0.004,
        "gm_improvement_pp": 0.001,
        "labor_efficiency_pct": 0.005,
        "shrink_reduction_pct": 0.05,
        "compliance_savings_per_store": 0,
    },
    "base": {
        "sales_uplift_pct": 0.015,
        "gm_improvement_pp": 0.005,
        "labor_efficiency_pct": 0.02,
        "shrink_reduction_pct": 0.20,
        "compliance_savings_per_store": 10_000,
    },
    "optimistic": {
        "sales_uplift_pct": 0.03,
        "gm_improvement_pp": 0.01,
        "labor_efficiency_pct": 0.04,
        "shrink_reduction_pct": 0.35,
        "compliance_savings_per_store": 30_000,
    },
}

PRESET_ALIASES = {
    "worst": "pessimistic",
    "best": "optimistic",
}


@dataclass(frozen=True)
class ScenarioResult:
    """Per-store metrics for one named scenario."""

    name: str
    assumptions: Assumptions
    npv: float
    irr: float
    roi: float
    payback_years: float
    chain_npv: float


def resolve_preset(name: str) -> Dict[str, float]:
    """Look up a preset by name or alias."""
    key = PRESET_ALIASES.get(name, name)
    try:
        return SCENARIO_PRESETS[key]
    except KeyError:
        raise ScenarioError(f"Unknown scenario preset: {name!r}") from None


def apply_preset(
    assumptions: Assumptions,
    preset: Union[str, Mapping[str, float]],
) -> Assumptions:
    """
    Merge a preset's overrides over the base assumptions.

    Args:
        assumptions: Base assumptions
        preset: Preset name (or alias) or a mapping of overrides

    Returns:
        New Assumptions with the overrides applied

    Raises:
        ScenarioError: Unknown preset name, or an override outside
            OVERRIDABLE_FIELDS
    """
    overrides = resolve_preset(preset) if isinstance(preset, str) else dict(preset)

    forbidden = sorted(set(overrides) - OVERRIDABLE_FIELDS)
    if forbidden:
        raise ScenarioError(f"Scenario presets cannot override: {', '.join(forbidden)}")

    return assumptions.with_overrides(**overrides)


def run_scenario(
    assumptions: Assumptions,
    name: str,
    overrides: Optional[Mapping[str, float]] = None,
    irr_guess: float = DEFAULT_GUESS,
    irr_max_iterations: int = MAX_ITERATIONS,
    irr_tolerance: float = TOLERANCE,
) -> ScenarioResult:
    """Run the full model for one scenario (named preset unless overrides given)."""
    scenario_assumptions = apply_preset(
        assumptions, overrides if overrides is not None else name
    )
    result = run_model(
        scenario_assumptions,
        irr_guess=irr_guess,
        irr_max_iterations=irr_max_iterations,
        irr_tolerance=irr_tolerance,
    )

    return ScenarioResult(
        name=name,
        assumptions=scenario_assumptions,
        npv=result.valuation.npv,
        irr=result.valuation.irr,
        roi=result.valuation.roi,
        payback_years=result.valuation.payback_years,
        chain_npv=result.chain_npv,
    )


def run_scenarios(
    assumptions: Assumptions,
    presets: Mapping[str, Mapping[str, float]] = SCENARIO_PRESETS,
    irr_guess: float = DEFAULT_GUESS,
    irr_max_iterations: int = MAX_ITERATIONS,
    irr_tolerance: float = TOLERANCE,
) -> List[ScenarioResult]:
    """
    Run every preset independently, in preset order.

    Each scenario starts from the same base assumptions; results never feed
    into one another.
    """
    return [
        run_scenario(
            assumptions,
            name,
            overrides,
            irr_guess=irr_guess,
            irr_max_iterations=irr_max_iterations,
            irr_tolerance=irr_tolerance,
        )
        for name, overrides in presets.items()
    ]
