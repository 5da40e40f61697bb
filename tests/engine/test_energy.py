from immosim.engine.energy import energy_constraints
from immosim.models.regime import EnergyClass


class TestEnergyConstraints:
    def test_unknown_class_unconstrained(self):
        c = energy_constraints(None, 2040)
        assert c.rentable
        assert not c.rent_frozen
        assert c.warning is None

    def test_g_banned_from_2025(self):
        assert energy_constraints(EnergyClass.G, 2024).rentable
        c = energy_constraints(EnergyClass.G, 2025)
        assert not c.rentable
        assert "2025" in c.warning

    def test_f_frozen_then_banned(self):
        c = energy_constraints(EnergyClass.F, 2027)
        assert c.rentable
        assert c.rent_frozen
        assert not energy_constraints(EnergyClass.F, 2028).rentable

    def test_e_banned_from_2034_without_freeze(self):
        c = energy_constraints(EnergyClass.E, 2033)
        assert c.rentable
        assert not c.rent_frozen
        assert not energy_constraints(EnergyClass.E, 2034).rentable

    def test_good_classes_never_constrained(self):
        for energy_class in (EnergyClass.A, EnergyClass.C, EnergyClass.D):
            c = energy_constraints(energy_class, 2050)
            assert c.rentable
            assert not c.rent_frozen
