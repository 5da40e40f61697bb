"""Canonical test fixtures used across all engine tests.

Fixture: 200K existing flat, 16K notary fees, 176K loan at 3.5% over 20yr,
800/month rent, 8% vacancy, unfurnished actual-expense regime, 30% TMI.
"""

import pytest
from decimal import Decimal

from immosim.models.parameters import InvestmentParameters
from immosim.models.regime import (
    EnergyClass,
    IncentiveProgram,
    RentalType,
    TaxMethod,
)


@pytest.fixture
def canonical_params() -> InvestmentParameters:
    """200K flat, 20yr loan, held for 20 years."""
    return InvestmentParameters(
        price=Decimal("200000"),
        notary_fees=Decimal("16000"),
        down_payment=Decimal("40000"),
        loan_amount=Decimal("176000"),
        loan_term_years=20,
        loan_rate=Decimal("3.5"),
        surface=Decimal("45"),
        monthly_rent=Decimal("800"),
        vacancy_rate=Decimal("8"),
        condo_fees=Decimal("600"),
        insurance=Decimal("150"),
        property_tax=Decimal("800"),
        rental_type=RentalType.UNFURNISHED,
        tax_method=TaxMethod.ACTUAL,
        marginal_tax_rate=Decimal("30"),
        horizon_years=20,
        start_year=2025,
    )


@pytest.fixture
def furnished_params() -> InvestmentParameters:
    """Same flat let furnished under LMNP au réel, with renovation works."""
    return InvestmentParameters(
        price=Decimal("200000"),
        notary_fees=Decimal("16000"),
        renovation_budget=Decimal("20000"),
        down_payment=Decimal("60000"),
        loan_amount=Decimal("176000"),
        loan_term_years=20,
        loan_rate=Decimal("3.5"),
        surface=Decimal("45"),
        monthly_rent=Decimal("950"),
        vacancy_rate=Decimal("5"),
        condo_fees=Decimal("600"),
        insurance=Decimal("150"),
        property_tax=Decimal("800"),
        rental_type=RentalType.FURNISHED,
        tax_method=TaxMethod.ACTUAL,
        marginal_tax_rate=Decimal("30"),
        furniture_value=Decimal("7000"),
        horizon_years=20,
        start_year=2025,
    )


@pytest.fixture
def pinel_params() -> InvestmentParameters:
    """New build under Pinel, 9-year commitment, invested in 2022."""
    return InvestmentParameters(
        price=Decimal("250000"),
        is_new=True,
        down_payment=Decimal("30000"),
        loan_amount=Decimal("226250"),
        loan_term_years=25,
        loan_rate=Decimal("3.5"),
        surface=Decimal("55"),
        monthly_rent=Decimal("850"),
        vacancy_rate=Decimal("3"),
        condo_fees=Decimal("900"),
        insurance=Decimal("150"),
        property_tax=Decimal("900"),
        incentive=IncentiveProgram.PINEL,
        commitment_years=9,
        marginal_tax_rate=Decimal("41"),
        energy_class=EnergyClass.A,
        horizon_years=12,
        start_year=2022,
    )
