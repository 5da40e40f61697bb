"""Simulation routes: the primary API entry point."""

import logging
from dataclasses import asdict
from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, HTTPException

from immosim.api.schemas import (
    AmortizationRequest,
    AmortizationResponse,
    AmortizationYearResponse,
    LoanCostResponse,
    ResaleResponse,
    SimulationRequest,
    SimulationResponse,
    YearlyResultResponse,
)
from immosim.engine.debt import amortization_schedule, loan_cost_summary, yearly_schedule
from immosim.engine.eligibility import validate_parameters
from immosim.engine.proforma import run_simulation
from immosim.models.parameters import InvestmentParameters
from immosim.models.results import SimulationResult

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

router = APIRouter(prefix="/api/v1", tags=["simulation"])


def _result_to_response(result: SimulationResult) -> SimulationResponse:
    """Convert engine SimulationResult to API response."""
    return SimulationResponse(
        regime=result.regime.value,
        total_acquisition_cost=result.total_acquisition_cost,
        initial_cash_outlay=result.initial_cash_outlay,
        price_per_sqm=result.price_per_sqm,
        rent_per_sqm=result.rent_per_sqm,
        monthly_rent_with_charges=result.monthly_rent_with_charges,
        gross_yield=result.gross_yield,
        net_yield=result.net_yield,
        net_net_yield=result.net_net_yield,
        monthly_cash_flow=result.monthly_cash_flow,
        annual_cash_flow=result.annual_cash_flow,
        irr=result.irr,
        irr_by_horizon=result.irr_by_horizon,
        roi=result.roi,
        total_cash_invested=result.total_cash_invested,
        total_profit=result.total_profit,
        total_tax_paid=result.total_tax_paid,
        total_incentive_reduction=result.total_incentive_reduction,
        payback_year=result.payback_year,
        energy_warnings=result.energy_warnings,
        yearly_results=[YearlyResultResponse(**asdict(r)) for r in result.yearly_results],
        resale=ResaleResponse(**asdict(result.resale)),
    )


@router.post("/simulate", response_model=SimulationResponse)
async def simulate(req: SimulationRequest):
    """Parameters in, full multi-year projection out.

    Eligibility violations are all reported at once as a 400.
    """
    params = InvestmentParameters(**req.model_dump())

    errors = validate_parameters(params)
    if errors:
        raise HTTPException(status_code=400, detail=errors)

    try:
        result = run_simulation(params)
    except ValueError as e:
        logger.warning("Simulation rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return _result_to_response(result)


@router.post("/amortization", response_model=AmortizationResponse)
async def amortization(req: AmortizationRequest):
    """Yearly loan schedule and total cost of credit."""
    schedule = amortization_schedule(req.principal, req.annual_rate, req.term_years)
    yearly = [
        AmortizationYearResponse(
            year=row.period,
            payment=row.payment.quantize(TWO_PLACES, ROUND_HALF_UP),
            interest=row.interest.quantize(TWO_PLACES, ROUND_HALF_UP),
            principal=row.principal.quantize(TWO_PLACES, ROUND_HALF_UP),
            balance=row.balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        )
        for row in yearly_schedule(schedule)
    ]
    cost = loan_cost_summary(req.principal, req.annual_rate, req.term_years, req.insurance_rate)
    return AmortizationResponse(loan_cost=LoanCostResponse(**asdict(cost)), yearly=yearly)
