"""Projection orchestrator: composes all engine sub-modules into a full simulation.

The year loop is a sequential fold: depreciation carry-forward and cumulative
cash flow are the only state carried from one year to the next.

Pure computation. No I/O. InvestmentParameters in, SimulationResult out.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from immosim.config import settings
from immosim.errors import SimulationInputError
from immosim.models.parameters import MIN_GROWTH_RATE, InvestmentParameters
from immosim.models.results import ResaleResult, SimulationResult, YearlyResult

from immosim.engine.cashflow import (
    annual_charges,
    effective_rent,
    gross_rent,
    loan_insurance,
    per_square_meter,
    property_value,
    yield_pct,
)
from immosim.engine.debt import AmortizationRow, amortization_schedule, debt_for_year, yearly_schedule
from immosim.engine.depreciation import compute_yearly_depreciation
from immosim.engine.disposition import compute_resale
from immosim.engine.energy import energy_constraints
from immosim.engine.incentives import incentive_reduction
from immosim.engine.irr import compute_irr
from immosim.engine.tax import compute_tax

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def check_preconditions(params: InvestmentParameters) -> None:
    """Minimal checks the engine needs; finer validation is the caller's."""
    if not params.price or params.price <= 0 or not params.monthly_rent or params.monthly_rent <= 0:
        raise SimulationInputError("Purchase price and monthly rent are required")
    if params.horizon_years < 1:
        raise SimulationInputError(
            f"Projection horizon must be at least 1 year, got {params.horizon_years}"
        )
    for name, rate in params.growth_rates.items():
        if rate <= MIN_GROWTH_RATE:
            raise SimulationInputError(f"{name} must be above {MIN_GROWTH_RATE}%, got {rate}")


def resale_at_year(
    params: InvestmentParameters,
    yearly_debt: list[AmortizationRow],
    year: int,
) -> ResaleResult:
    """Sell at the end of a projection year."""
    return compute_resale(
        params=params,
        sale_price=property_value(params, year),
        years_held=year,
        loan_balance=debt_for_year(yearly_debt, year).balance,
    )


def irr_for_horizon(
    params: InvestmentParameters,
    yearly_results: list[YearlyResult],
    yearly_debt: list[AmortizationRow],
    years: int,
) -> Decimal:
    """IRR of buying, holding for `years` and reselling at the end of that year."""
    if years <= 0 or not yearly_results:
        return ZERO

    held = min(years, len(yearly_results))
    flows = [-params.initial_cash_outlay]
    flows.extend(r.cash_flow_after_tax for r in yearly_results[:held])
    flows[-1] += resale_at_year(params, yearly_debt, held).net_proceeds
    return compute_irr(flows)


def run_simulation(params: InvestmentParameters) -> SimulationResult:
    """Run a complete projection.

    Returns SimulationResult with yearly results, resale analysis and
    summary indicators. Raises SimulationInputError on missing inputs.
    """
    check_preconditions(params)

    regime = params.regime
    horizon = params.horizon_years
    logger.debug("Simulating %s over %d years", regime.value, horizon)

    yearly_debt = yearly_schedule(
        amortization_schedule(params.loan_amount, params.loan_rate, params.loan_term_years)
    )
    incentive = incentive_reduction(
        program=regime.incentive_program,
        eligible_base=params.price,
        investment_year=params.incentive_start_year,
        commitment_years=params.commitment_years,
        works_amount=params.incentive_works,
        protected_sector=params.malraux_protected_sector,
    )

    yearly_results: list[YearlyResult] = []
    energy_warnings: list[str] = []
    carry_forward = ZERO
    cumulative = ZERO

    for year in range(1, horizon + 1):
        calendar_year = params.first_calendar_year + year - 1

        # Debt
        debt = debt_for_year(yearly_debt, year)

        # Income
        constraint = energy_constraints(params.energy_class, calendar_year)
        if constraint.warning and constraint.warning not in energy_warnings:
            energy_warnings.append(constraint.warning)
        scheduled_rent = gross_rent(params, year)
        rent = effective_rent(params, year, constraint)

        # Charges
        charges = annual_charges(params, year)
        insurance = loan_insurance(params, year)

        # Tax
        new_depreciation = ZERO
        if regime.is_furnished_actual:
            new_depreciation = compute_yearly_depreciation(params, year).total
        carry_in = carry_forward
        tax = compute_tax(
            annual_rent=rent,
            annual_expense=charges + debt.interest,
            regime=regime,
            marginal_rate=params.marginal_tax_rate,
            new_amortization=new_depreciation,
            carry_forward_in=carry_in,
        )
        carry_forward = tax.carry_forward_out

        # Incentive reduction cannot push income tax below zero
        granted = min(incentive.reduction_for_year(calendar_year), tax.income_tax)
        net_tax = _q(tax.income_tax - granted + tax.social_levy)

        # Cash flow
        cfbt = _q(rent - charges - debt.interest - debt.principal - insurance)
        cfat = cfbt - net_tax
        cumulative += cfat

        yearly_results.append(YearlyResult(
            year=year,
            calendar_year=calendar_year,
            gross_rent=_q(scheduled_rent),
            effective_rent=_q(rent),
            total_charges=_q(charges),
            loan_insurance=_q(insurance),
            interest_paid=_q(debt.interest),
            principal_paid=_q(debt.principal),
            loan_balance=_q(debt.balance),
            new_depreciation=_q(new_depreciation),
            amortization_available=_q(carry_in + new_depreciation),
            amortization_used=_q(tax.amortization_used),
            amortization_carry_forward=_q(carry_forward),
            taxable_income=_q(tax.taxable_income),
            income_tax=_q(tax.income_tax),
            social_levy=_q(tax.social_levy),
            incentive_reduction=_q(granted),
            net_tax=net_tax,
            cash_flow_before_tax=cfbt,
            cash_flow_after_tax=cfat,
            cumulative_cash_flow=cumulative,
            property_value=_q(property_value(params, year)),
        ))

    first = yearly_results[0]
    acquisition_cost = params.total_acquisition_cost

    # Resale at the horizon
    resale = resale_at_year(params, yearly_debt, horizon)

    # IRR
    irr_by_horizon = {
        years: irr_for_horizon(params, yearly_results, yearly_debt, years)
        for years in settings.irr_horizons
        if years <= horizon
    }
    irr = irr_by_horizon.get(horizon)
    if irr is None:
        irr = irr_for_horizon(params, yearly_results, yearly_debt, horizon)

    # ROI: cash injected to cover negative years counts as invested
    initial_outlay = params.initial_cash_outlay
    shortfalls = sum((-r.cash_flow_after_tax for r in yearly_results if r.cash_flow_after_tax < 0), ZERO)
    total_cash_invested = initial_outlay + shortfalls
    total_profit = cumulative + resale.net_proceeds - initial_outlay
    roi = ZERO
    if total_cash_invested > 0:
        roi = (total_profit / total_cash_invested * 100).quantize(TWO_PLACES, ROUND_HALF_UP)

    payback_year = next((r.year for r in yearly_results if r.cumulative_cash_flow >= 0), None)

    return SimulationResult(
        regime=regime,
        yearly_results=yearly_results,
        resale=resale,
        total_acquisition_cost=_q(acquisition_cost),
        initial_cash_outlay=_q(initial_outlay),
        price_per_sqm=per_square_meter(params.price, params.surface),
        rent_per_sqm=per_square_meter(params.monthly_rent, params.surface),
        monthly_rent_with_charges=_q(params.monthly_rent_with_charges),
        gross_yield=yield_pct(params.annual_gross_rent, acquisition_cost),
        net_yield=yield_pct(first.effective_rent - first.total_charges, acquisition_cost),
        net_net_yield=yield_pct(
            first.effective_rent - first.total_charges - first.net_tax, acquisition_cost
        ),
        monthly_cash_flow=_q(first.cash_flow_after_tax / 12),
        annual_cash_flow=first.cash_flow_after_tax,
        irr=irr,
        irr_by_horizon=irr_by_horizon,
        roi=roi,
        total_cash_invested=_q(total_cash_invested),
        total_profit=_q(total_profit),
        total_tax_paid=sum((r.net_tax for r in yearly_results), ZERO),
        total_incentive_reduction=sum((r.incentive_reduction for r in yearly_results), ZERO),
        payback_year=payback_year,
        energy_warnings=energy_warnings,
    )
