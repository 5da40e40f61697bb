"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
Rates are annual percentages (3.5 = 3.5%). Schedule rows keep full Decimal
precision; callers quantize what they report.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


@dataclass(frozen=True)
class AmortizationRow:
    period: int  # Month number, or loan year once aggregated
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationRow]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


@dataclass(frozen=True)
class YearlyDebt:
    interest: Decimal
    principal: Decimal
    balance: Decimal


@dataclass(frozen=True)
class LoanCost:
    monthly_payment: Decimal
    monthly_insurance: Decimal
    total_interest: Decimal
    total_insurance: Decimal
    total_cost: Decimal


def _monthly_rate(annual_rate: Decimal) -> Decimal:
    return Decimal(annual_rate) / 100 / 12


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Fixed monthly payment. A zero rate amortizes linearly."""
    if principal <= 0 or term_years <= 0:
        return ZERO

    n = term_years * 12
    r = _monthly_rate(annual_rate)
    if r == 0:
        return principal / n

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
) -> AmortizationSchedule:
    """Month-by-month schedule. Empty when there is no loan.

    Args:
        principal: Loan amount
        annual_rate: Nominal annual rate in percent
        term_years: Loan term in years
    """
    if principal <= 0 or term_years <= 0:
        return AmortizationSchedule(
            payments=[], monthly_payment=ZERO, total_interest=ZERO, total_principal=ZERO
        )

    pmt = monthly_payment(principal, annual_rate, term_years)
    r = _monthly_rate(annual_rate)
    n_periods = term_years * 12

    payments: list[AmortizationRow] = []
    balance = Decimal(principal)
    total_interest = ZERO
    total_principal = ZERO

    for period in range(1, n_periods + 1):
        interest = balance * r
        principal_paid = pmt - interest
        actual_payment = pmt

        # Final payment adjustment; also sweeps any residue left by rounding
        if principal_paid > balance or period == n_periods:
            principal_paid = balance
            actual_payment = interest + principal_paid

        balance = max(ZERO, balance - principal_paid)
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationRow(
            period=period,
            payment=actual_payment,
            interest=interest,
            principal=principal_paid,
            balance=balance,
        ))

    return AmortizationSchedule(
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )


def yearly_schedule(schedule: AmortizationSchedule) -> list[AmortizationRow]:
    """Aggregate a monthly schedule by loan year (period = year number)."""
    yearly: list[AmortizationRow] = []
    year_payment = ZERO
    year_interest = ZERO
    year_principal = ZERO

    for p in schedule.payments:
        year_payment += p.payment
        year_interest += p.interest
        year_principal += p.principal

        if p.period % 12 == 0 or p.period == len(schedule.payments):
            yearly.append(AmortizationRow(
                period=(p.period - 1) // 12 + 1,
                payment=year_payment,
                interest=year_interest,
                principal=year_principal,
                balance=p.balance,
            ))
            year_payment = ZERO
            year_interest = ZERO
            year_principal = ZERO

    return yearly


def debt_for_year(yearly: list[AmortizationRow], year: int) -> YearlyDebt:
    """Interest, principal and end-of-year balance for a 1-indexed year.

    Past the loan term nothing is paid and the last known balance is kept.
    """
    if 1 <= year <= len(yearly):
        row = yearly[year - 1]
        return YearlyDebt(interest=row.interest, principal=row.principal, balance=row.balance)
    last_balance = yearly[-1].balance if yearly and year > 0 else ZERO
    return YearlyDebt(interest=ZERO, principal=ZERO, balance=last_balance)


def loan_cost_summary(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    insurance_rate: Decimal = ZERO,
) -> LoanCost:
    """Total cost of credit: interest plus borrower insurance over the term."""
    if principal <= 0 or term_years <= 0:
        return LoanCost(ZERO, ZERO, ZERO, ZERO, ZERO)

    schedule = amortization_schedule(principal, annual_rate, term_years)
    monthly_insurance = principal * Decimal(insurance_rate) / 100 / 12
    total_insurance = monthly_insurance * term_years * 12

    return LoanCost(
        monthly_payment=schedule.monthly_payment.quantize(TWO_PLACES, ROUND_HALF_UP),
        monthly_insurance=monthly_insurance.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_interest=schedule.total_interest.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_insurance=total_insurance.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_cost=(schedule.total_interest + total_insurance).quantize(TWO_PLACES, ROUND_HALF_UP),
    )
