"""Rent, charges, property value and yields.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from immosim.engine.energy import EnergyConstraint
from immosim.models.parameters import InvestmentParameters

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def _growth(rate_pct: Decimal, year: int) -> Decimal:
    """Compounding factor for a 1-indexed year (year 1 is the base)."""
    return (1 + Decimal(rate_pct) / 100) ** (year - 1)


def gross_rent(params: InvestmentParameters, year: int) -> Decimal:
    """Scheduled rent before vacancy, indexed from year 2."""
    return params.annual_gross_rent * _growth(params.rent_indexation_rate, year)


def baseline_effective_rent(params: InvestmentParameters) -> Decimal:
    """Year-1 rent net of vacancy, never indexed."""
    return params.annual_gross_rent * (1 - params.vacancy_rate / 100)


def effective_rent(
    params: InvestmentParameters,
    year: int,
    constraint: EnergyConstraint | None = None,
) -> Decimal:
    """Rent actually collected: vacancy-adjusted, indexed, and zeroed or
    frozen at its un-indexed baseline by energy-performance rules."""
    if constraint is not None and not constraint.rentable:
        return ZERO

    baseline = baseline_effective_rent(params)
    indexed = baseline * _growth(params.rent_indexation_rate, year)
    if constraint is not None and constraint.rent_frozen:
        return min(indexed, baseline)
    return indexed


def annual_charges(params: InvestmentParameters, year: int) -> Decimal:
    """Non-recoverable fixed charges, inflated from year 2."""
    return params.annual_charges * _growth(params.charges_inflation_rate, year)


def loan_insurance(params: InvestmentParameters, year: int) -> Decimal:
    """Borrower insurance premium, paid while the loan runs."""
    if year > params.loan_term_years:
        return ZERO
    return params.annual_loan_insurance


def property_value(params: InvestmentParameters, year: int) -> Decimal:
    """Estimated value of the whole acquisition cost during a given year."""
    return params.total_acquisition_cost * _growth(params.appreciation_rate, year)


def yield_pct(annual_amount: Decimal, acquisition_cost: Decimal) -> Decimal:
    """Annual amount over total acquisition cost, in percent."""
    if acquisition_cost <= 0:
        return ZERO
    return (annual_amount / acquisition_cost * 100).quantize(TWO_PLACES, ROUND_HALF_UP)


def per_square_meter(amount: Decimal, surface: Decimal) -> Decimal:
    if surface <= 0:
        return ZERO
    return (amount / surface).quantize(TWO_PLACES, ROUND_HALF_UP)
