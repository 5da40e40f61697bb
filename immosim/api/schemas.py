"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from immosim.models.regime import (
    EnergyClass,
    IncentiveProgram,
    LandlordStatus,
    RentalType,
    TaxMethod,
)


# ---- Request schemas ----

class SimulationRequest(BaseModel):
    # Acquisition
    price: Decimal = Field(..., gt=0, description="Purchase price")
    notary_fees: Decimal | None = Field(None, ge=0, description="Estimated from price when omitted")
    agency_fees: Decimal = Field(Decimal("0"), ge=0)
    renovation_budget: Decimal = Field(Decimal("0"), ge=0)
    down_payment: Decimal = Field(Decimal("0"), ge=0)

    # Financing
    loan_amount: Decimal = Field(Decimal("0"), ge=0)
    loan_term_years: int = Field(20, ge=0, le=30)
    loan_rate: Decimal = Field(Decimal("3.5"), ge=0, le=20, description="Annual rate, percent")
    loan_insurance_rate: Decimal = Field(Decimal("0"), ge=0, le=10)

    # Property
    surface: Decimal = Field(Decimal("0"), ge=0, description="Floor area in m²")
    is_new: bool = False
    energy_class: EnergyClass | None = None

    # Rental terms
    monthly_rent: Decimal = Field(..., gt=0)
    recoverable_charges_monthly: Decimal = Field(Decimal("0"), ge=0)
    vacancy_rate: Decimal = Field(Decimal("0"), ge=0, le=100)

    # Fixed annual charges
    condo_fees: Decimal = Field(Decimal("0"), ge=0)
    maintenance: Decimal = Field(Decimal("0"), ge=0)
    insurance: Decimal = Field(Decimal("0"), ge=0)
    property_tax: Decimal = Field(Decimal("0"), ge=0)

    # Fiscal election
    rental_type: RentalType = RentalType.UNFURNISHED
    tax_method: TaxMethod = TaxMethod.ACTUAL
    landlord_status: LandlordStatus = LandlordStatus.NON_PROFESSIONAL
    incentive: IncentiveProgram = IncentiveProgram.NONE
    marginal_tax_rate: Decimal = Field(Decimal("30"), ge=0, le=60)
    seasonal_unclassified: bool = False

    # Incentive options
    commitment_years: int | None = None
    investment_year: int | None = None
    incentive_works_amount: Decimal = Field(Decimal("0"), ge=0)
    malraux_protected_sector: bool = True

    # Furnished depreciation
    furniture_value: Decimal | None = Field(None, ge=0)
    land_share_pct: Decimal = Field(Decimal("15"), ge=0, le=100)

    # Projection
    horizon_years: int = Field(20, ge=1, le=50)
    rent_indexation_rate: Decimal = Field(Decimal("1.5"), gt=-100)
    charges_inflation_rate: Decimal = Field(Decimal("2"), gt=-100)
    appreciation_rate: Decimal = Field(Decimal("2"), gt=-100)
    start_year: int | None = None


class AmortizationRequest(BaseModel):
    principal: Decimal = Field(..., ge=0)
    annual_rate: Decimal = Field(..., ge=0, le=20, description="Annual rate, percent")
    term_years: int = Field(..., ge=0, le=30)
    insurance_rate: Decimal = Field(Decimal("0"), ge=0, le=10)


# ---- Response schemas ----

class YearlyResultResponse(BaseModel):
    year: int
    calendar_year: int
    gross_rent: Decimal
    effective_rent: Decimal
    total_charges: Decimal
    loan_insurance: Decimal
    interest_paid: Decimal
    principal_paid: Decimal
    loan_balance: Decimal
    new_depreciation: Decimal
    amortization_available: Decimal
    amortization_used: Decimal
    amortization_carry_forward: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    social_levy: Decimal
    incentive_reduction: Decimal
    net_tax: Decimal
    cash_flow_before_tax: Decimal
    cash_flow_after_tax: Decimal
    cumulative_cash_flow: Decimal
    property_value: Decimal


class ResaleResponse(BaseModel):
    sale_price: Decimal
    years_held: int
    gross_capital_gain: Decimal
    capital_gains_income_tax: Decimal
    capital_gains_social_tax: Decimal
    capital_gains_tax: Decimal
    net_capital_gain: Decimal
    disposal_costs: Decimal
    loan_payoff: Decimal
    net_proceeds: Decimal


class SimulationResponse(BaseModel):
    regime: str
    total_acquisition_cost: Decimal
    initial_cash_outlay: Decimal
    price_per_sqm: Decimal
    rent_per_sqm: Decimal
    monthly_rent_with_charges: Decimal
    gross_yield: Decimal
    net_yield: Decimal
    net_net_yield: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    irr: Decimal
    irr_by_horizon: dict[int, Decimal] = {}
    roi: Decimal
    total_cash_invested: Decimal
    total_profit: Decimal
    total_tax_paid: Decimal
    total_incentive_reduction: Decimal
    payback_year: int | None = None
    energy_warnings: list[str] = []
    yearly_results: list[YearlyResultResponse]
    resale: ResaleResponse


class AmortizationYearResponse(BaseModel):
    year: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal


class LoanCostResponse(BaseModel):
    monthly_payment: Decimal
    monthly_insurance: Decimal
    total_interest: Decimal
    total_insurance: Decimal
    total_cost: Decimal


class AmortizationResponse(BaseModel):
    loan_cost: LoanCostResponse
    yearly: list[AmortizationYearResponse]
