"""Property resale: capital gains tax (plus-value immobilière) and net proceeds.

Two allowance curves reduce the gain with the holding period, one for the
19% income tax and one for the 17.2% social levies. Income tax is fully
exempt after 22 years, social levies after 30.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from immosim.config import settings
from immosim.models.parameters import InvestmentParameters
from immosim.models.results import ResaleResult

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
FULL = Decimal("100")

ALLOWANCE_START_YEAR = 6
INCOME_TAX_EXEMPT_YEAR = 22
SOCIAL_EXEMPT_YEAR = 30

INCOME_TAX_RATE_PER_YEAR = Decimal("6")  # Years 6 to 21
INCOME_TAX_FINAL_YEAR_RATE = Decimal("4")  # Year 22
SOCIAL_RATE_PER_YEAR = Decimal("1.65")  # Years 6 to 21
SOCIAL_LATE_RATE_PER_YEAR = Decimal("1.60")  # Years 22 to 29


@dataclass(frozen=True)
class CapitalGainsTax:
    gross_gain: Decimal
    income_tax_allowance: Decimal = ZERO  # Percent
    social_allowance: Decimal = ZERO  # Percent
    taxable_income_base: Decimal = ZERO
    taxable_social_base: Decimal = ZERO
    income_tax: Decimal = ZERO
    social_tax: Decimal = ZERO
    total_tax: Decimal = ZERO


def income_tax_allowance(years_held: int) -> Decimal:
    """Holding-period allowance (%) on the income tax base."""
    if years_held < ALLOWANCE_START_YEAR:
        return ZERO
    if years_held > INCOME_TAX_EXEMPT_YEAR:
        return FULL

    early_years = min(years_held, INCOME_TAX_EXEMPT_YEAR - 1) - ALLOWANCE_START_YEAR + 1
    allowance = early_years * INCOME_TAX_RATE_PER_YEAR
    if years_held == INCOME_TAX_EXEMPT_YEAR:
        allowance += INCOME_TAX_FINAL_YEAR_RATE  # 96 + 4 = 100
    return allowance


def social_allowance(years_held: int) -> Decimal:
    """Holding-period allowance (%) on the social levy base."""
    if years_held < ALLOWANCE_START_YEAR:
        return ZERO
    if years_held >= SOCIAL_EXEMPT_YEAR:
        return FULL

    early_years = min(years_held, INCOME_TAX_EXEMPT_YEAR - 1) - ALLOWANCE_START_YEAR + 1
    late_years = max(0, years_held - INCOME_TAX_EXEMPT_YEAR + 1)
    return early_years * SOCIAL_RATE_PER_YEAR + late_years * SOCIAL_LATE_RATE_PER_YEAR


def capital_gains_tax(
    sale_price: Decimal,
    acquisition_price: Decimal,
    acquisition_costs: Decimal,
    years_held: int,
) -> CapitalGainsTax:
    """Tax due on a resale gain.

    Args:
        sale_price: Gross sale price
        acquisition_price: Purchase price
        acquisition_costs: Fees and works added to the acquisition basis
        years_held: Full years of ownership
    """
    gross_gain = sale_price - acquisition_price - acquisition_costs

    if gross_gain <= 0 or years_held >= SOCIAL_EXEMPT_YEAR:
        return CapitalGainsTax(gross_gain=gross_gain)

    ir_allowance = income_tax_allowance(years_held)
    ps_allowance = social_allowance(years_held)

    ir_base = gross_gain * (1 - ir_allowance / 100)
    ps_base = gross_gain * (1 - ps_allowance / 100)

    income_tax = ir_base * settings.capital_gains_income_tax_rate / 100
    social_tax = ps_base * settings.capital_gains_social_rate / 100

    return CapitalGainsTax(
        gross_gain=gross_gain,
        income_tax_allowance=ir_allowance,
        social_allowance=ps_allowance,
        taxable_income_base=ir_base,
        taxable_social_base=ps_base,
        income_tax=income_tax,
        social_tax=social_tax,
        total_tax=income_tax + social_tax,
    )


def compute_resale(
    params: InvestmentParameters,
    sale_price: Decimal,
    years_held: int,
    loan_balance: Decimal,
) -> ResaleResult:
    """Net cash returned to the investor by selling at the end of a year.

    Net proceeds = sale price - capital gains tax - loan payoff - disposal
    costs, floored at zero.
    """
    cgt = capital_gains_tax(
        sale_price=sale_price,
        acquisition_price=params.price,
        acquisition_costs=params.acquisition_costs,
        years_held=years_held,
    )
    disposal_costs = sale_price * settings.resale_costs_pct / 100
    net_proceeds = max(ZERO, sale_price - cgt.total_tax - loan_balance - disposal_costs)

    return ResaleResult(
        sale_price=sale_price.quantize(TWO_PLACES, ROUND_HALF_UP),
        years_held=years_held,
        gross_capital_gain=cgt.gross_gain.quantize(TWO_PLACES, ROUND_HALF_UP),
        capital_gains_income_tax=cgt.income_tax.quantize(TWO_PLACES, ROUND_HALF_UP),
        capital_gains_social_tax=cgt.social_tax.quantize(TWO_PLACES, ROUND_HALF_UP),
        capital_gains_tax=cgt.total_tax.quantize(TWO_PLACES, ROUND_HALF_UP),
        net_capital_gain=(cgt.gross_gain - cgt.total_tax).quantize(TWO_PLACES, ROUND_HALF_UP),
        disposal_costs=disposal_costs.quantize(TWO_PLACES, ROUND_HALF_UP),
        loan_payoff=loan_balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        net_proceeds=net_proceeds.quantize(TWO_PLACES, ROUND_HALF_UP),
    )
