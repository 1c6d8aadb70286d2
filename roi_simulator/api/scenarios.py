"""
Scenario API endpoints.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Dict, List, Optional

from roi_simulator.api.calculations import AssumptionsInput, finite_or_none
from roi_simulator.calculations.scenarios import (
    SCENARIO_PRESETS,
    ScenarioError,
    ScenarioResult,
    run_scenario,
    run_scenarios,
)
from roi_simulator.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class ScenarioResponse(BaseModel):
    """Per-store metrics for one scenario (null when undefined)."""

    name: str
    npv: Optional[float] = None
    irr: Optional[float] = None
    roi: Optional[float] = None
    payback_years: Optional[float] = None
    chain_npv: Optional[float] = None


def _to_response(result: ScenarioResult) -> ScenarioResponse:
    return ScenarioResponse(
        name=result.name,
        npv=finite_or_none(result.npv),
        irr=finite_or_none(result.irr),
        roi=finite_or_none(result.roi),
        payback_years=finite_or_none(result.payback_years),
        chain_npv=finite_or_none(result.chain_npv),
    )


def _solver_kwargs() -> dict:
    settings = get_settings()
    return {
        "irr_guess": settings.irr_guess,
        "irr_max_iterations": settings.irr_max_iterations,
        "irr_tolerance": settings.irr_tolerance,
    }


@router.get("/presets")
async def list_presets() -> Dict[str, Dict[str, float]]:
    """List the named scenario presets and their overrides."""
    return SCENARIO_PRESETS


@router.post("/run", response_model=List[ScenarioResponse])
async def run_all_scenarios(inputs: AssumptionsInput):
    """Run every preset against the given base assumptions."""

    results = run_scenarios(inputs.to_assumptions(), **_solver_kwargs())
    logger.info("Ran %d scenarios", len(results))
    return [_to_response(r) for r in results]


@router.post("/run/{name}", response_model=ScenarioResponse)
async def run_named_scenario(name: str, inputs: AssumptionsInput):
    """Run a single preset by name."""

    try:
        result = run_scenario(inputs.to_assumptions(), name, **_solver_kwargs())
    except ScenarioError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _to_response(result)
