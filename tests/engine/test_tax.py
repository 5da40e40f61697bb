from decimal import Decimal

import pytest

from immosim.engine.tax import compute_tax
from immosim.errors import UnknownRegimeError
from immosim.models.regime import TaxRegime


class TestMicroRegimes:
    def test_micro_foncier(self):
        """30% allowance: 10K rent -> 7K taxable."""
        tax = compute_tax(Decimal("10000"), Decimal("9000"), TaxRegime.MICRO_FONCIER, Decimal("30"))
        assert tax.taxable_income == Decimal("7000")
        assert tax.income_tax == Decimal("2100")
        assert tax.social_levy == Decimal("1204")
        assert tax.total_tax == Decimal("3304")

    def test_micro_bic(self):
        """50% allowance, expenses ignored."""
        tax = compute_tax(Decimal("10000"), Decimal("9000"), TaxRegime.MICRO_BIC, Decimal("30"))
        assert tax.taxable_income == Decimal("5000")
        assert tax.income_tax == Decimal("1500")
        assert tax.social_levy == Decimal("860")

    def test_micro_bic_unclassified(self):
        tax = compute_tax(Decimal("10000"), Decimal("0"), TaxRegime.MICRO_BIC_UNCLASSIFIED, Decimal("30"))
        assert tax.taxable_income == Decimal("7000")

    def test_micro_has_no_carry_forward(self):
        tax = compute_tax(
            Decimal("10000"), Decimal("0"), TaxRegime.MICRO_BIC, Decimal("30"),
            new_amortization=Decimal("5000"), carry_forward_in=Decimal("1000"),
        )
        assert tax.amortization_used == 0
        assert tax.carry_forward_out == 0


class TestActualUnfurnished:
    def test_profit(self):
        tax = compute_tax(Decimal("12000"), Decimal("5000"), TaxRegime.REEL_FONCIER, Decimal("30"))
        assert tax.taxable_income == Decimal("7000")
        assert tax.income_tax == Decimal("2100")

    def test_deficit_is_untaxed(self):
        tax = compute_tax(Decimal("5000"), Decimal("8000"), TaxRegime.REEL_FONCIER, Decimal("30"))
        assert tax.taxable_income == 0
        assert tax.total_tax == 0

    @pytest.mark.parametrize("regime", [TaxRegime.PINEL, TaxRegime.DENORMANDIE, TaxRegime.MALRAUX])
    def test_incentive_regimes_use_actual_base(self, regime):
        tax = compute_tax(Decimal("12000"), Decimal("5000"), regime, Decimal("30"))
        assert tax.taxable_income == Decimal("7000")
        assert tax.income_tax == Decimal("2100")


class TestActualFurnished:
    def test_amortization_absorbs_part_of_result(self):
        tax = compute_tax(
            Decimal("12000"), Decimal("4000"), TaxRegime.LMNP_REEL, Decimal("30"),
            new_amortization=Decimal("5000"),
        )
        assert tax.amortization_used == Decimal("5000")
        assert tax.taxable_income == Decimal("3000")
        assert tax.carry_forward_out == 0

    def test_excess_amortization_rolls_forward(self):
        tax = compute_tax(
            Decimal("12000"), Decimal("4000"), TaxRegime.LMNP_REEL, Decimal("30"),
            new_amortization=Decimal("10000"),
        )
        assert tax.amortization_used == Decimal("8000")
        assert tax.taxable_income == 0
        assert tax.total_tax == 0
        assert tax.carry_forward_out == Decimal("2000")

    def test_deficit_keeps_all_amortization(self):
        tax = compute_tax(
            Decimal("3000"), Decimal("4000"), TaxRegime.LMP_REEL, Decimal("30"),
            new_amortization=Decimal("5000"), carry_forward_in=Decimal("1000"),
        )
        assert tax.taxable_income == 0
        assert tax.amortization_used == 0
        assert tax.carry_forward_out == Decimal("6000")

    def test_carry_forward_consumed_first_year_with_profit(self):
        tax = compute_tax(
            Decimal("20000"), Decimal("5000"), TaxRegime.REEL_BIC, Decimal("30"),
            new_amortization=Decimal("4000"), carry_forward_in=Decimal("6000"),
        )
        assert tax.amortization_used == Decimal("10000")
        assert tax.taxable_income == Decimal("5000")
        assert tax.carry_forward_out == 0

    @pytest.mark.parametrize("rent", ["0", "3000", "8000", "9000", "15000", "40000"])
    def test_carry_forward_conservation(self, rent):
        carry_in = Decimal("2500")
        new = Decimal("6000")
        tax = compute_tax(
            Decimal(rent), Decimal("4000"), TaxRegime.LMNP_REEL, Decimal("30"),
            new_amortization=new, carry_forward_in=carry_in,
        )
        assert tax.amortization_used + tax.carry_forward_out == carry_in + new
        assert tax.taxable_income >= 0

    def test_taxable_income_monotonic_in_result(self):
        previous = Decimal("-1")
        for rent in range(0, 30001, 2500):
            tax = compute_tax(
                Decimal(rent), Decimal("4000"), TaxRegime.LMNP_REEL, Decimal("30"),
                new_amortization=Decimal("6000"),
            )
            assert tax.taxable_income >= previous
            previous = tax.taxable_income


class TestUnknownRegime:
    def test_fails_fast(self):
        with pytest.raises(UnknownRegimeError):
            compute_tax(Decimal("12000"), Decimal("0"), "sci_is", Decimal("30"))

    def test_is_a_value_error(self):
        with pytest.raises(ValueError, match="Unsupported tax regime"):
            compute_tax(Decimal("12000"), Decimal("0"), None, Decimal("30"))
