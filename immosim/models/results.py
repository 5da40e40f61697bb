from dataclasses import dataclass, field
from decimal import Decimal

from immosim.models.regime import TaxRegime


@dataclass(frozen=True)
class YearlyResult:
    year: int
    calendar_year: int

    # Income
    gross_rent: Decimal = Decimal("0")
    effective_rent: Decimal = Decimal("0")  # After vacancy and energy constraints

    # Charges
    total_charges: Decimal = Decimal("0")
    loan_insurance: Decimal = Decimal("0")

    # Debt
    interest_paid: Decimal = Decimal("0")
    principal_paid: Decimal = Decimal("0")
    loan_balance: Decimal = Decimal("0")

    # Depreciation (furnished actual-expense regimes only)
    new_depreciation: Decimal = Decimal("0")
    amortization_available: Decimal = Decimal("0")
    amortization_used: Decimal = Decimal("0")
    amortization_carry_forward: Decimal = Decimal("0")

    # Tax
    taxable_income: Decimal = Decimal("0")
    income_tax: Decimal = Decimal("0")  # Before incentive reduction
    social_levy: Decimal = Decimal("0")
    incentive_reduction: Decimal = Decimal("0")  # Actually offset against income tax
    net_tax: Decimal = Decimal("0")

    # Cash
    cash_flow_before_tax: Decimal = Decimal("0")
    cash_flow_after_tax: Decimal = Decimal("0")
    cumulative_cash_flow: Decimal = Decimal("0")

    property_value: Decimal = Decimal("0")


@dataclass(frozen=True)
class ResaleResult:
    sale_price: Decimal = Decimal("0")
    years_held: int = 0

    # Capital gain (plus-value immobilière)
    gross_capital_gain: Decimal = Decimal("0")
    capital_gains_income_tax: Decimal = Decimal("0")
    capital_gains_social_tax: Decimal = Decimal("0")
    capital_gains_tax: Decimal = Decimal("0")
    net_capital_gain: Decimal = Decimal("0")

    disposal_costs: Decimal = Decimal("0")
    loan_payoff: Decimal = Decimal("0")
    net_proceeds: Decimal = Decimal("0")


@dataclass
class SimulationResult:
    regime: TaxRegime
    yearly_results: list[YearlyResult] = field(default_factory=list)
    resale: ResaleResult = field(default_factory=ResaleResult)

    # Acquisition
    total_acquisition_cost: Decimal = Decimal("0")
    initial_cash_outlay: Decimal = Decimal("0")
    price_per_sqm: Decimal = Decimal("0")
    rent_per_sqm: Decimal = Decimal("0")
    monthly_rent_with_charges: Decimal = Decimal("0")

    # Yields (%)
    gross_yield: Decimal = Decimal("0")
    net_yield: Decimal = Decimal("0")
    net_net_yield: Decimal = Decimal("0")

    # Year-1 after-tax cash flow
    monthly_cash_flow: Decimal = Decimal("0")
    annual_cash_flow: Decimal = Decimal("0")

    # Returns (%). An IRR of 0 means no meaningful rate was found.
    irr: Decimal = Decimal("0")  # Over the full horizon
    irr_by_horizon: dict[int, Decimal] = field(default_factory=dict)
    roi: Decimal = Decimal("0")

    total_cash_invested: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    total_tax_paid: Decimal = Decimal("0")
    total_incentive_reduction: Decimal = Decimal("0")
    payback_year: int | None = None

    energy_warnings: list[str] = field(default_factory=list)

    @property
    def horizon_years(self) -> int:
        return len(self.yearly_results)

    @property
    def final_year(self) -> YearlyResult | None:
        return self.yearly_results[-1] if self.yearly_results else None
