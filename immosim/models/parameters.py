from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from immosim.models.regime import (
    EnergyClass,
    IncentiveProgram,
    LandlordStatus,
    RentalType,
    TaxMethod,
    TaxRegime,
    resolve_regime,
)

NEW_BUILD_NOTARY_PCT = Decimal("2.5")
EXISTING_NOTARY_PCT = Decimal("8")
DEFAULT_FURNITURE_PCT = Decimal("5")  # Of purchase price, when not itemised
MIN_GROWTH_RATE = Decimal("-100")  # Exclusive; growth factors must stay positive


def estimate_notary_fees(price: Decimal, is_new: bool) -> Decimal:
    """Frais de notaire: ~2.5% on new builds, ~8% on existing property."""
    pct = NEW_BUILD_NOTARY_PCT if is_new else EXISTING_NOTARY_PCT
    return price * pct / 100


@dataclass(frozen=True)
class InvestmentParameters:
    """One investment configuration. All rates are percentages (3.5 = 3.5%)."""

    # Acquisition
    price: Decimal
    notary_fees: Decimal | None = None  # Estimated from price when omitted
    agency_fees: Decimal = Decimal("0")
    renovation_budget: Decimal = Decimal("0")
    down_payment: Decimal = Decimal("0")

    # Financing
    loan_amount: Decimal = Decimal("0")
    loan_term_years: int = 20
    loan_rate: Decimal = Decimal("3.5")
    loan_insurance_rate: Decimal = Decimal("0")  # Annual, on initial principal

    # Property
    surface: Decimal = Decimal("0")  # m²
    is_new: bool = False
    energy_class: EnergyClass | None = None

    # Rental terms
    monthly_rent: Decimal = Decimal("0")
    recoverable_charges_monthly: Decimal = Decimal("0")  # Re-billed to the tenant
    vacancy_rate: Decimal = Decimal("0")

    # Fixed annual charges
    condo_fees: Decimal = Decimal("0")
    maintenance: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")  # Landlord insurance (PNO)
    property_tax: Decimal = Decimal("0")

    # Fiscal election
    rental_type: RentalType = RentalType.UNFURNISHED
    tax_method: TaxMethod = TaxMethod.ACTUAL
    landlord_status: LandlordStatus = LandlordStatus.NON_PROFESSIONAL
    incentive: IncentiveProgram = IncentiveProgram.NONE
    marginal_tax_rate: Decimal = Decimal("30")  # TMI
    seasonal_unclassified: bool = False

    # Incentive options
    commitment_years: int | None = None  # Pinel / Denormandie: 6, 9 or 12
    investment_year: int | None = None  # Defaults to the first projected year
    incentive_works_amount: Decimal = Decimal("0")  # Denormandie / Malraux works
    malraux_protected_sector: bool = True

    # Furnished depreciation
    furniture_value: Decimal | None = None
    land_share_pct: Decimal = Decimal("15")  # Land is not depreciable

    # Projection
    horizon_years: int = 20
    rent_indexation_rate: Decimal = Decimal("1.5")
    charges_inflation_rate: Decimal = Decimal("2")
    appreciation_rate: Decimal = Decimal("2")
    start_year: int | None = None  # Calendar year of projection year 1

    @property
    def transfer_fees(self) -> Decimal:
        if self.notary_fees is not None:
            return self.notary_fees
        return estimate_notary_fees(self.price, self.is_new)

    @property
    def total_acquisition_cost(self) -> Decimal:
        return self.price + self.transfer_fees + self.agency_fees + self.renovation_budget

    @property
    def acquisition_costs(self) -> Decimal:
        """Everything paid on top of the price, deductible from a resale gain."""
        return self.total_acquisition_cost - self.price

    @property
    def initial_cash_outlay(self) -> Decimal:
        return self.down_payment + self.transfer_fees + self.agency_fees

    @property
    def monthly_rent_with_charges(self) -> Decimal:
        """Rent as quoted to the tenant (charges comprises). Recoverable charges
        are re-billed at cost, so they never reach the cash flow."""
        return self.monthly_rent + self.recoverable_charges_monthly

    @property
    def annual_gross_rent(self) -> Decimal:
        return self.monthly_rent * 12

    @property
    def annual_charges(self) -> Decimal:
        return self.condo_fees + self.maintenance + self.insurance + self.property_tax

    @property
    def annual_loan_insurance(self) -> Decimal:
        return self.loan_amount * self.loan_insurance_rate / 100

    @property
    def growth_rates(self) -> dict[str, Decimal]:
        return {
            "Rent indexation rate": self.rent_indexation_rate,
            "Charges inflation rate": self.charges_inflation_rate,
            "Appreciation rate": self.appreciation_rate,
        }

    @property
    def first_calendar_year(self) -> int:
        return self.start_year if self.start_year is not None else date.today().year

    @property
    def incentive_start_year(self) -> int:
        if self.investment_year is not None:
            return self.investment_year
        return self.first_calendar_year

    @property
    def incentive_works(self) -> Decimal:
        """Works counted by Denormandie/Malraux; the renovation budget unless given."""
        if self.incentive_works_amount > 0:
            return self.incentive_works_amount
        return self.renovation_budget

    @property
    def furniture(self) -> Decimal:
        if self.furniture_value is not None:
            return self.furniture_value
        return self.price * DEFAULT_FURNITURE_PCT / 100

    @property
    def regime(self) -> TaxRegime:
        return resolve_regime(
            rental_type=self.rental_type,
            tax_method=self.tax_method,
            landlord_status=self.landlord_status,
            incentive=self.incentive,
            seasonal_unclassified=self.seasonal_unclassified,
        )
