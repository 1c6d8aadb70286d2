"""
Financial calculation API endpoints.

These endpoints accept assumptions and return calculated results.
Undefined metrics (NaN in the engine) are returned as null.
"""

import logging
import math

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import List, Optional

from roi_simulator.calculations import irr
from roi_simulator.calculations.assumptions import Assumptions, validate_assumptions
from roi_simulator.calculations.valuation import run_model
from roi_simulator.config import get_settings
from roi_simulator.services.exports import write_projection_csv

logger = logging.getLogger(__name__)

router = APIRouter()


def finite_or_none(value: float) -> Optional[float]:
    """Map NaN/inf to None so results serialize as JSON null."""
    return value if math.isfinite(value) else None


class AssumptionsInput(BaseModel):
    """Input assumptions for one model run."""

    currency: str = "NOK"
    stores: int = Field(100, gt=0)

    # Per store per year
    fee_per_store_per_year: float = 600_000
    annual_revenue_per_store: float = 12_000_000
    compliance_savings_per_store: float = 10_000

    # Current state
    gross_margin_pct: float = 0.32
    labor_cost_pct_of_revenue: float = 0.12
    shrink_pct_of_cogs: float = 0.02

    # Improvements at full adoption
    sales_uplift_pct: float = 0.015
    gm_improvement_pp: float = 0.005
    labor_efficiency_pct: float = 0.02
    shrink_reduction_pct: float = 0.20

    discount_rate: float = 0.10

    # Adoption ramp
    ramp_y1: float = 0.70
    ramp_y2: float = 1.0
    ramp_y3: float = 1.0

    def to_assumptions(self) -> Assumptions:
        return Assumptions(**self.model_dump(exclude={"scales"}))


class ProjectionInput(AssumptionsInput):
    """Assumptions plus an optional explicit adoption ramp."""

    scales: Optional[List[float]] = None


class StoreEconomicsOut(BaseModel):
    revenue: float
    gross_profit: float
    cogs: float
    labor_cost: float
    shrink: float
    operating_profit: float


class YearRowOut(StoreEconomicsOut):
    """One projected year: improved economics plus the cash-flow bridge."""

    year: int
    scale: float
    baseline_operating_profit: float
    compliance: float
    fee: float
    incremental_cash_flow: float


class ValuationMetrics(BaseModel):
    """Calculated return metrics (null when undefined)."""

    npv: Optional[float] = None
    irr: Optional[float] = None
    roi: Optional[float] = None
    payback_years: Optional[float] = None


class ProjectionResponse(BaseModel):
    """Response with yearly projection and metrics."""

    currency: str
    stores: int
    baseline: StoreEconomicsOut
    rows: List[YearRowOut]
    cash_flows: List[float]
    metrics: ValuationMetrics
    chain_npv: Optional[float] = None
    irr_converged: bool
    irr_iterations: int


def _run(inputs: ProjectionInput):
    settings = get_settings()
    return run_model(
        inputs.to_assumptions(),
        scales=inputs.scales,
        irr_guess=settings.irr_guess,
        irr_max_iterations=settings.irr_max_iterations,
        irr_tolerance=settings.irr_tolerance,
    )


@router.post("/projection", response_model=ProjectionResponse)
async def calculate_projection(inputs: ProjectionInput):
    """Calculate the yearly projection and per-store/chain metrics."""

    result = _run(inputs)
    valuation = result.valuation

    return ProjectionResponse(
        currency=result.assumptions.currency,
        stores=result.assumptions.stores,
        baseline=StoreEconomicsOut(**result.baseline.to_dict()),
        rows=[YearRowOut(**row.to_dict()) for row in result.rows],
        cash_flows=result.cash_flows,
        metrics=ValuationMetrics(
            npv=finite_or_none(valuation.npv),
            irr=finite_or_none(valuation.irr),
            roi=finite_or_none(valuation.roi),
            payback_years=finite_or_none(valuation.payback_years),
        ),
        chain_npv=finite_or_none(result.chain_npv),
        irr_converged=result.irr_converged,
        irr_iterations=result.irr_iterations,
    )


@router.post("/projection.csv")
async def export_projection_csv(inputs: ProjectionInput):
    """Return the yearly projection as a CSV attachment."""

    settings = get_settings()
    result = _run(inputs)
    logger.info("Exporting %d projection rows as CSV", len(result.rows))

    return Response(
        content=write_projection_csv(result.rows),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.export_filename}"'
        },
    )


class IRRInput(BaseModel):
    """Input for IRR calculation on year-end cash flows (years 1..n)."""

    cash_flows: List[float]
    discount_rate: float = 0.10


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: Optional[float] = None
    converged: bool
    iterations: int
    npv: Optional[float] = None


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR and NPV for given cash flows."""

    if not inputs.cash_flows:
        raise HTTPException(status_code=400, detail="At least 1 cash flow required")

    settings = get_settings()
    result = irr.calculate_irr_result(
        inputs.cash_flows,
        guess=settings.irr_guess,
        max_iterations=settings.irr_max_iterations,
        tolerance=settings.irr_tolerance,
    )

    return IRRResponse(
        irr=finite_or_none(result.value),
        converged=result.converged,
        iterations=result.iterations,
        npv=finite_or_none(irr.calculate_npv(inputs.cash_flows, inputs.discount_rate)),
    )


class ValidationResponse(BaseModel):
    valid: bool
    problems: List[str]


@router.post("/validate", response_model=ValidationResponse)
async def validate_inputs(inputs: AssumptionsInput):
    """Report assumptions outside their expected ranges (never blocks a run)."""

    problems = validate_assumptions(inputs.to_assumptions())
    return ValidationResponse(valid=not problems, problems=problems)
