"""Energy-performance (DPE) letting constraints by calendar year.

The worst classes are progressively banned from the rental market and F/G
rents can no longer be indexed. Cutoff years live in settings.
"""

from dataclasses import dataclass

from immosim.config import settings
from immosim.models.regime import EnergyClass


@dataclass(frozen=True)
class EnergyConstraint:
    rentable: bool = True
    rent_frozen: bool = False
    warning: str | None = None


def energy_constraints(energy_class: EnergyClass | None, calendar_year: int) -> EnergyConstraint:
    """Whether a unit of this class may be let, and at what rent, in a given year."""
    if energy_class is None:
        return EnergyConstraint()

    letter = energy_class.value
    rent_frozen = letter in settings.energy_rent_freeze_classes

    ban_year = settings.energy_rental_ban_year.get(letter)
    if ban_year is not None and calendar_year >= ban_year:
        return EnergyConstraint(
            rentable=False,
            rent_frozen=rent_frozen,
            warning=(
                f"Energy class {letter}: letting prohibited from {ban_year}. "
                "Energy renovation required."
            ),
        )

    return EnergyConstraint(rentable=True, rent_frozen=rent_frozen)
