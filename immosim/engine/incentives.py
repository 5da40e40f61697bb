"""Tax reductions granted by investment incentive programs.

Pinel and Denormandie: a percentage of the capped cost price, earned over a
6, 9 or 12 year letting commitment. Malraux: a percentage of restoration
works, spread over the works period. Independent of the yearly tax engine;
the orchestrator offsets the year's reduction against income tax.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from immosim.config import settings
from immosim.errors import SimulationInputError
from immosim.models.regime import IncentiveProgram

ZERO = Decimal("0")

DEFAULT_COMMITMENT_YEARS = 9
FIRST_PHASE_YEARS = 9  # 12-year commitments earn the 9-year rate first

# Total reduction (% of base) by commitment length
LEGACY_PINEL_RATES: dict[int, Decimal] = {
    6: Decimal("12"),
    9: Decimal("18"),
    12: Decimal("21"),
}
REFORMED_PINEL_RATES: dict[int, Decimal] = {
    6: Decimal("9"),
    9: Decimal("12"),
    12: Decimal("14"),
}

MALRAUX_PROTECTED_SECTOR_RATE = Decimal("30")  # Site patrimonial remarquable with PSMV
MALRAUX_OTHER_RATE = Decimal("22")


@dataclass(frozen=True)
class IncentiveReduction:
    program: IncentiveProgram
    base: Decimal
    total_reduction: Decimal
    annual_reduction: Decimal  # Average over the duration
    duration_years: int
    investment_year: int
    yearly_rates: tuple[Decimal, ...] = ()  # % of base earned in each year

    def reduction_for_year(self, calendar_year: int) -> Decimal:
        """Reduction payable for a calendar year; 0 outside the window."""
        index = calendar_year - self.investment_year
        if index < 0 or index >= self.duration_years:
            return ZERO
        return self.base * self.yearly_rates[index] / 100


def no_reduction(investment_year: int) -> IncentiveReduction:
    return IncentiveReduction(
        program=IncentiveProgram.NONE,
        base=ZERO,
        total_reduction=ZERO,
        annual_reduction=ZERO,
        duration_years=0,
        investment_year=investment_year,
    )


def pinel_rates(investment_year: int) -> dict[int, Decimal]:
    """Rate table in force for the year the investment was made."""
    if investment_year < settings.pinel_reform_year:
        return LEGACY_PINEL_RATES
    return REFORMED_PINEL_RATES


def pinel_yearly_rates(investment_year: int, commitment_years: int) -> tuple[Decimal, ...]:
    """Per-year split of the total rate.

    6 and 9 years are uniform. 12 years earns the 9-year rate over the first
    nine years, then the remainder over the last three (legacy: 2%/yr, 1%/yr).
    """
    rates = pinel_rates(investment_year)
    if commitment_years not in rates:
        raise SimulationInputError(
            f"Commitment must be one of {sorted(rates)} years, got {commitment_years}"
        )

    total = rates[commitment_years]
    if commitment_years != 12:
        return (total / commitment_years,) * commitment_years

    first = rates[FIRST_PHASE_YEARS]
    tail_years = commitment_years - FIRST_PHASE_YEARS
    return (first / FIRST_PHASE_YEARS,) * FIRST_PHASE_YEARS + ((total - first) / tail_years,) * tail_years


def _pinel_like(
    program: IncentiveProgram,
    base: Decimal,
    commitment_years: int,
    investment_year: int,
) -> IncentiveReduction:
    capped = min(base, settings.pinel_price_cap)
    yearly = pinel_yearly_rates(investment_year, commitment_years)
    rate = pinel_rates(investment_year)[commitment_years]
    total = capped * rate / 100
    return IncentiveReduction(
        program=program,
        base=capped,
        total_reduction=total,
        annual_reduction=total / commitment_years,
        duration_years=commitment_years,
        investment_year=investment_year,
        yearly_rates=yearly,
    )


def malraux_reduction(
    works_amount: Decimal,
    investment_year: int,
    protected_sector: bool = True,
) -> IncentiveReduction:
    """Malraux: price is irrelevant, only capped works count."""
    base = min(max(ZERO, works_amount), settings.malraux_works_cap)
    rate = MALRAUX_PROTECTED_SECTOR_RATE if protected_sector else MALRAUX_OTHER_RATE
    duration = settings.malraux_works_years
    total = base * rate / 100
    return IncentiveReduction(
        program=IncentiveProgram.MALRAUX,
        base=base,
        total_reduction=total,
        annual_reduction=total / duration,
        duration_years=duration,
        investment_year=investment_year,
        yearly_rates=(rate / duration,) * duration,
    )


def incentive_reduction(
    program: IncentiveProgram,
    eligible_base: Decimal,
    investment_year: int,
    commitment_years: int | None = None,
    works_amount: Decimal = ZERO,
    protected_sector: bool = True,
) -> IncentiveReduction:
    """Reduction schedule for an incentive program.

    Args:
        program: Incentive program
        eligible_base: Purchase price (Pinel, Denormandie); ignored by Malraux
        investment_year: Calendar year the investment was made; selects the
            rate table and opens the payment window
        commitment_years: Letting commitment (6, 9 or 12), Pinel/Denormandie
        works_amount: Renovation works (added to the base for Denormandie,
            the whole base for Malraux)
        protected_sector: Malraux zone, 30% if protected else 22%
    """
    if program is IncentiveProgram.NONE:
        return no_reduction(investment_year)

    if program is IncentiveProgram.MALRAUX:
        return malraux_reduction(works_amount, investment_year, protected_sector)

    years = commitment_years if commitment_years is not None else DEFAULT_COMMITMENT_YEARS
    if program is IncentiveProgram.PINEL:
        return _pinel_like(program, eligible_base, years, investment_year)
    if program is IncentiveProgram.DENORMANDIE:
        return _pinel_like(program, eligible_base + works_amount, years, investment_year)

    raise SimulationInputError(f"Unsupported incentive program: {program!r}")
