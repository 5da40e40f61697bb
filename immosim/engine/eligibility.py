"""Eligibility rules for a parameter set: regime ceilings, incentive program
property-type restrictions, financing consistency.

Violations are collected and returned, never raised, so a caller can show all
of them at once. Pure functions. No I/O.
"""

import logging
from decimal import Decimal

from immosim.models.parameters import MIN_GROWTH_RATE, InvestmentParameters
from immosim.models.regime import IncentiveProgram, LandlordStatus, RentalType, TaxMethod, TaxRegime

logger = logging.getLogger(__name__)

# Annual receipts ceilings for the micro regimes
MICRO_FONCIER_CEILING = Decimal("15000")
MICRO_BIC_CEILING = Decimal("77700")
MICRO_BIC_UNCLASSIFIED_CEILING = Decimal("15000")

DENORMANDIE_MIN_WORKS = Decimal("10000")
ALLOWED_COMMITMENTS = (6, 9, 12)

MICRO_CEILINGS: dict[TaxRegime, Decimal] = {
    TaxRegime.MICRO_FONCIER: MICRO_FONCIER_CEILING,
    TaxRegime.MICRO_BIC: MICRO_BIC_CEILING,
    TaxRegime.MICRO_BIC_UNCLASSIFIED: MICRO_BIC_UNCLASSIFIED_CEILING,
}


def micro_ceiling_violation(regime: TaxRegime, annual_rent: Decimal) -> str | None:
    if not regime.is_micro:
        return None
    ceiling = MICRO_CEILINGS[regime]
    if annual_rent <= ceiling:
        return None
    return f"Annual rent {annual_rent} exceeds the {regime.value} ceiling of {ceiling}; use the actual-expense regime"


def incentive_violations(params: InvestmentParameters, regime: TaxRegime) -> list[str]:
    errors: list[str] = []

    if regime is TaxRegime.PINEL and not params.is_new:
        errors.append("Pinel only applies to new builds")

    if regime in (TaxRegime.DENORMANDIE, TaxRegime.MALRAUX) and params.is_new:
        errors.append(f"{regime.value.capitalize()} only applies to existing buildings")

    if regime in (TaxRegime.PINEL, TaxRegime.DENORMANDIE):
        if params.commitment_years is not None and params.commitment_years not in ALLOWED_COMMITMENTS:
            errors.append(f"Commitment must be 6, 9 or 12 years, got {params.commitment_years}")

    if regime is TaxRegime.DENORMANDIE and params.incentive_works < DENORMANDIE_MIN_WORKS:
        errors.append(f"Denormandie requires at least {DENORMANDIE_MIN_WORKS} of works")

    if regime is TaxRegime.MALRAUX and params.incentive_works <= 0:
        errors.append("Malraux requires a restoration works amount")

    if regime.incentive_program is not IncentiveProgram.NONE and params.rental_type is RentalType.FURNISHED:
        errors.append(f"{regime.value.capitalize()} requires an unfurnished letting")

    return errors


def validate_parameters(params: InvestmentParameters) -> list[str]:
    """Return every eligibility violation for a parameter set (empty if valid)."""
    errors: list[str] = []

    if params.price <= 0:
        errors.append("Purchase price is required and must be positive")
    if params.monthly_rent <= 0:
        errors.append("Monthly rent is required and must be positive")
    if params.horizon_years < 1:
        errors.append("Projection horizon must be at least 1 year")
    for name, rate in params.growth_rates.items():
        if rate <= MIN_GROWTH_RATE:
            errors.append(f"{name} must be above {MIN_GROWTH_RATE}%")

    # Financing
    if params.loan_amount > 0 and params.loan_term_years <= 0:
        errors.append("A loan requires a term")
    if params.down_payment > params.total_acquisition_cost:
        errors.append("Down payment cannot exceed the total acquisition cost")

    if params.seasonal_unclassified and (
        params.rental_type is not RentalType.FURNISHED or params.tax_method is not TaxMethod.MICRO
    ):
        errors.append("The unclassified seasonal allowance only applies to furnished micro lettings")
    if params.landlord_status is LandlordStatus.PROFESSIONAL and params.rental_type is not RentalType.FURNISHED:
        errors.append("Professional (LMP) status only applies to furnished lettings")

    regime = params.regime
    violation = micro_ceiling_violation(regime, params.annual_gross_rent)
    if violation:
        errors.append(violation)

    errors.extend(incentive_violations(params, regime))

    if errors:
        logger.warning("Parameters failed %d eligibility rule(s)", len(errors))
    return errors
