from dataclasses import replace
from decimal import Decimal

import pytest

from immosim.engine.cashflow import (
    annual_charges,
    effective_rent,
    gross_rent,
    loan_insurance,
    per_square_meter,
    property_value,
    yield_pct,
)
from immosim.engine.energy import EnergyConstraint
from immosim.models.parameters import InvestmentParameters


@pytest.fixture
def params() -> InvestmentParameters:
    return InvestmentParameters(
        price=Decimal("200000"),
        notary_fees=Decimal("16000"),
        loan_amount=Decimal("100000"),
        loan_term_years=15,
        loan_insurance_rate=Decimal("0.3"),
        monthly_rent=Decimal("1000"),
        vacancy_rate=Decimal("10"),
        condo_fees=Decimal("1000"),
        property_tax=Decimal("1000"),
        rent_indexation_rate=Decimal("2"),
        charges_inflation_rate=Decimal("3"),
        appreciation_rate=Decimal("1"),
    )


class TestRent:
    def test_gross_rent_indexed_from_year_two(self, params):
        assert gross_rent(params, 1) == Decimal("12000")
        assert gross_rent(params, 2) == Decimal("12240")

    def test_vacancy(self, params):
        assert effective_rent(params, 1) == Decimal("10800")
        assert effective_rent(params, 2) == Decimal("11016")

    def test_unrentable_year_earns_nothing(self, params):
        assert effective_rent(params, 3, EnergyConstraint(rentable=False)) == 0

    def test_frozen_rent_stays_at_baseline(self, params):
        frozen = EnergyConstraint(rent_frozen=True)
        assert effective_rent(params, 1, frozen) == Decimal("10800")
        assert effective_rent(params, 5, frozen) == Decimal("10800")

    def test_frozen_rent_can_still_fall(self, params):
        deflating = replace(params, rent_indexation_rate=Decimal("-1"))
        frozen = EnergyConstraint(rent_frozen=True)
        assert effective_rent(deflating, 3, frozen) < Decimal("10800")


class TestCharges:
    def test_inflated_from_year_two(self, params):
        assert annual_charges(params, 1) == Decimal("2000")
        assert annual_charges(params, 2) == Decimal("2060")

    def test_loan_insurance_stops_with_loan(self, params):
        assert loan_insurance(params, 1) == Decimal("300")
        assert loan_insurance(params, 15) == Decimal("300")
        assert loan_insurance(params, 16) == 0


class TestValueAndRatios:
    def test_property_value(self, params):
        assert property_value(params, 1) == Decimal("216000")
        assert property_value(params, 2) == Decimal("218160")

    def test_yield(self):
        assert yield_pct(Decimal("9600"), Decimal("216000")) == Decimal("4.44")
        assert yield_pct(Decimal("9600"), Decimal("0")) == 0

    def test_per_square_meter(self):
        assert per_square_meter(Decimal("200000"), Decimal("45")) == Decimal("4444.44")
        assert per_square_meter(Decimal("200000"), Decimal("0")) == 0
