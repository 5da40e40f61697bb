"""Yearly income tax on rental income, per French regime.

Micro regimes apply a flat allowance. Actual-expense regimes deduct charges
and interest; furnished ones (LMNP/LMP) also deduct depreciation, which can
only absorb a positive result and otherwise rolls forward indefinitely.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from immosim.config import settings
from immosim.errors import UnknownRegimeError
from immosim.models.regime import TaxRegime

ZERO = Decimal("0")

# Flat allowance (abattement) on gross receipts, in percent
MICRO_ALLOWANCES: dict[TaxRegime, Decimal] = {
    TaxRegime.MICRO_FONCIER: Decimal("30"),
    TaxRegime.MICRO_BIC: Decimal("50"),
    TaxRegime.MICRO_BIC_UNCLASSIFIED: Decimal("30"),
}


@dataclass(frozen=True)
class TaxComputation:
    taxable_income: Decimal
    income_tax: Decimal
    social_levy: Decimal
    total_tax: Decimal
    amortization_used: Decimal = ZERO
    carry_forward_out: Decimal = ZERO


def _taxed(
    taxable: Decimal,
    marginal_rate: Decimal,
    amortization_used: Decimal = ZERO,
    carry_forward_out: Decimal = ZERO,
) -> TaxComputation:
    income_tax = taxable * marginal_rate / 100
    social_levy = taxable * settings.social_levy_rate / 100
    return TaxComputation(
        taxable_income=taxable,
        income_tax=income_tax,
        social_levy=social_levy,
        total_tax=income_tax + social_levy,
        amortization_used=amortization_used,
        carry_forward_out=carry_forward_out,
    )


def micro_tax(annual_rent: Decimal, allowance_pct: Decimal, marginal_rate: Decimal) -> TaxComputation:
    taxable = annual_rent * (100 - allowance_pct) / 100
    return _taxed(taxable, marginal_rate)


def actual_unfurnished_tax(
    annual_rent: Decimal, annual_expense: Decimal, marginal_rate: Decimal
) -> TaxComputation:
    """Régime réel foncier. A deficit is simply untaxed here."""
    return _taxed(max(ZERO, annual_rent - annual_expense), marginal_rate)


def actual_furnished_tax(
    annual_rent: Decimal,
    annual_expense: Decimal,
    marginal_rate: Decimal,
    new_amortization: Decimal,
    carry_forward_in: Decimal,
) -> TaxComputation:
    """Régime réel BIC with depreciation.

    Depreciation cannot create or deepen a deficit: when the result before
    depreciation is not positive, everything available rolls forward.
    """
    available = carry_forward_in + new_amortization
    result_before_amortization = annual_rent - annual_expense

    if result_before_amortization <= 0:
        return TaxComputation(
            taxable_income=ZERO,
            income_tax=ZERO,
            social_levy=ZERO,
            total_tax=ZERO,
            amortization_used=ZERO,
            carry_forward_out=available,
        )

    used = min(available, result_before_amortization)
    return _taxed(
        result_before_amortization - used,
        marginal_rate,
        amortization_used=used,
        carry_forward_out=available - used,
    )


def compute_tax(
    annual_rent: Decimal,
    annual_expense: Decimal,
    regime: TaxRegime,
    marginal_rate: Decimal,
    new_amortization: Decimal = ZERO,
    carry_forward_in: Decimal = ZERO,
) -> TaxComputation:
    """Compute one year of tax on rental income.

    Args:
        annual_rent: Effective rent received in the year
        annual_expense: Deductible charges, including loan interest
        regime: Tax regime applied
        marginal_rate: Marginal income tax rate (TMI) in percent
        new_amortization: Depreciation generated this year (furnished actual only)
        carry_forward_in: Unused depreciation from prior years

    Incentive programs are taxed on the actual-expense unfurnished base; their
    reduction is applied by the caller.
    """
    if regime in MICRO_ALLOWANCES:
        return micro_tax(annual_rent, MICRO_ALLOWANCES[regime], marginal_rate)

    if regime in (
        TaxRegime.REEL_FONCIER,
        TaxRegime.PINEL,
        TaxRegime.DENORMANDIE,
        TaxRegime.MALRAUX,
    ):
        return actual_unfurnished_tax(annual_rent, annual_expense, marginal_rate)

    if regime in (TaxRegime.REEL_BIC, TaxRegime.LMNP_REEL, TaxRegime.LMP_REEL):
        return actual_furnished_tax(
            annual_rent, annual_expense, marginal_rate, new_amortization, carry_forward_in
        )

    raise UnknownRegimeError(regime)
