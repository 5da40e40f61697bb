from decimal import Decimal

import pytest

from immosim.engine.incentives import (
    LEGACY_PINEL_RATES,
    REFORMED_PINEL_RATES,
    incentive_reduction,
    pinel_rates,
    pinel_yearly_rates,
)
from immosim.errors import SimulationInputError
from immosim.models.regime import IncentiveProgram


class TestPinelRates:
    def test_legacy_before_reform(self):
        assert pinel_rates(2022) is LEGACY_PINEL_RATES

    def test_reformed_from_2023(self):
        assert pinel_rates(2023) is REFORMED_PINEL_RATES
        assert pinel_rates(2024)[9] == Decimal("12")

    def test_twelve_year_split_is_not_uniform(self):
        """Legacy 12 years: 2%/yr for nine years, then 1%/yr."""
        rates = pinel_yearly_rates(2022, 12)
        assert rates[:9] == (Decimal("2"),) * 9
        assert rates[9:] == (Decimal("1"),) * 3

    def test_uniform_for_six_years(self):
        assert pinel_yearly_rates(2022, 6) == (Decimal("2"),) * 6

    def test_invalid_commitment(self):
        with pytest.raises(SimulationInputError):
            pinel_yearly_rates(2022, 7)


class TestPinel:
    def test_nine_year_legacy(self):
        r = incentive_reduction(IncentiveProgram.PINEL, Decimal("250000"), 2022, 9)
        assert r.total_reduction == Decimal("45000")
        assert r.annual_reduction == Decimal("5000")
        assert r.duration_years == 9

    def test_default_commitment_is_nine_years(self):
        r = incentive_reduction(IncentiveProgram.PINEL, Decimal("250000"), 2022)
        assert r.duration_years == 9

    def test_zero_commitment_is_rejected(self):
        with pytest.raises(SimulationInputError):
            incentive_reduction(IncentiveProgram.PINEL, Decimal("250000"), 2022, 0)

    def test_price_cap(self):
        r = incentive_reduction(IncentiveProgram.PINEL, Decimal("400000"), 2022, 9)
        assert r.base == Decimal("300000")
        assert r.total_reduction == Decimal("54000")

    def test_window(self):
        """Nothing the year before investing or the year after the commitment ends."""
        r = incentive_reduction(IncentiveProgram.PINEL, Decimal("250000"), 2022, 9)
        assert r.reduction_for_year(2021) == 0
        assert r.reduction_for_year(2031) == 0
        in_window = [r.reduction_for_year(year) for year in range(2022, 2031)]
        assert all(amount == Decimal("5000") for amount in in_window)
        assert sum(in_window) == r.base * LEGACY_PINEL_RATES[9] / 100

    def test_twelve_year_tail(self):
        r = incentive_reduction(IncentiveProgram.PINEL, Decimal("200000"), 2020, 12)
        assert r.reduction_for_year(2020) == Decimal("4000")
        assert r.reduction_for_year(2029) == Decimal("2000")
        assert r.reduction_for_year(2032) == 0

    def test_reformed_twelve_year_total(self):
        r = incentive_reduction(IncentiveProgram.PINEL, Decimal("200000"), 2024, 12)
        assert r.total_reduction == Decimal("28000")
        paid = sum(r.reduction_for_year(year) for year in range(2024, 2036))
        assert abs(paid - r.total_reduction) < Decimal("0.01")


class TestDenormandie:
    def test_works_added_to_base(self):
        r = incentive_reduction(
            IncentiveProgram.DENORMANDIE, Decimal("150000"), 2022, 9, works_amount=Decimal("50000")
        )
        assert r.base == Decimal("200000")
        assert r.total_reduction == Decimal("36000")

    def test_base_capped_with_works(self):
        r = incentive_reduction(
            IncentiveProgram.DENORMANDIE, Decimal("250000"), 2022, 6, works_amount=Decimal("100000")
        )
        assert r.base == Decimal("300000")


class TestMalraux:
    def test_protected_sector(self):
        r = incentive_reduction(
            IncentiveProgram.MALRAUX, Decimal("500000"), 2024, works_amount=Decimal("100000")
        )
        assert r.base == Decimal("100000")
        assert r.total_reduction == Decimal("30000")
        assert r.duration_years == 4
        assert r.reduction_for_year(2024) == Decimal("7500")
        assert r.reduction_for_year(2028) == 0

    def test_other_zone(self):
        r = incentive_reduction(
            IncentiveProgram.MALRAUX, Decimal("0"), 2024,
            works_amount=Decimal("100000"), protected_sector=False,
        )
        assert r.total_reduction == Decimal("22000")

    def test_works_cap(self):
        r = incentive_reduction(
            IncentiveProgram.MALRAUX, Decimal("0"), 2024, works_amount=Decimal("500000")
        )
        assert r.base == Decimal("400000")
        assert r.total_reduction == Decimal("120000")


class TestNoProgram:
    def test_zero_everywhere(self):
        r = incentive_reduction(IncentiveProgram.NONE, Decimal("250000"), 2024)
        assert r.total_reduction == 0
        assert r.reduction_for_year(2024) == 0
