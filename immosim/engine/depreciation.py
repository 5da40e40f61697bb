"""Straight-line depreciation for furnished rentals (LMNP / LMP au réel).

Components and useful lives:
  building   price less the land share, 25 years
  furniture  7 years
  works      10 years

Each component stops once its life has elapsed. Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from immosim.models.parameters import InvestmentParameters

ZERO = Decimal("0")

BUILDING_LIFE_YEARS = 25
FURNITURE_LIFE_YEARS = 7
WORKS_LIFE_YEARS = 10


@dataclass(frozen=True)
class YearlyDepreciation:
    year: int
    building: Decimal
    furniture: Decimal
    works: Decimal
    total: Decimal


def straight_line(basis: Decimal, life_years: int, year: int) -> Decimal:
    """Annual straight-line amount for a 1-indexed year, 0 outside the life."""
    if basis <= 0 or year < 1 or year > life_years:
        return ZERO
    return basis / life_years


def compute_yearly_depreciation(params: InvestmentParameters, year: int) -> YearlyDepreciation:
    """New depreciation generated in a given year (before any carry-forward)."""
    building_basis = params.price * (100 - params.land_share_pct) / 100

    building = straight_line(building_basis, BUILDING_LIFE_YEARS, year)
    furniture = straight_line(params.furniture, FURNITURE_LIFE_YEARS, year)
    works = straight_line(params.renovation_budget, WORKS_LIFE_YEARS, year)

    return YearlyDepreciation(
        year=year,
        building=building,
        furniture=furniture,
        works=works,
        total=building + furniture + works,
    )
