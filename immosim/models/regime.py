from enum import Enum


class RentalType(Enum):
    UNFURNISHED = "unfurnished"  # Location nue
    FURNISHED = "furnished"  # Location meublée


class TaxMethod(Enum):
    MICRO = "micro"
    ACTUAL = "actual"  # Régime réel


class LandlordStatus(Enum):
    NON_PROFESSIONAL = "lmnp"
    PROFESSIONAL = "lmp"


class IncentiveProgram(Enum):
    NONE = "none"
    PINEL = "pinel"
    DENORMANDIE = "denormandie"
    MALRAUX = "malraux"


class EnergyClass(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


class TaxRegime(Enum):
    MICRO_FONCIER = "micro_foncier"
    MICRO_BIC = "micro_bic"
    MICRO_BIC_UNCLASSIFIED = "micro_bic_unclassified"  # Unclassified seasonal rental
    REEL_FONCIER = "reel_foncier"
    REEL_BIC = "reel_bic"
    LMNP_REEL = "lmnp_reel"
    LMP_REEL = "lmp_reel"
    PINEL = "pinel"
    DENORMANDIE = "denormandie"
    MALRAUX = "malraux"

    @property
    def is_micro(self) -> bool:
        return self in MICRO_REGIMES

    @property
    def is_furnished_actual(self) -> bool:
        """Actual-expense furnished regimes: the only ones with depreciation."""
        return self in FURNISHED_ACTUAL_REGIMES

    @property
    def incentive_program(self) -> IncentiveProgram:
        return INCENTIVE_BY_REGIME.get(self, IncentiveProgram.NONE)


MICRO_REGIMES = frozenset({
    TaxRegime.MICRO_FONCIER,
    TaxRegime.MICRO_BIC,
    TaxRegime.MICRO_BIC_UNCLASSIFIED,
})

FURNISHED_ACTUAL_REGIMES = frozenset({
    TaxRegime.REEL_BIC,
    TaxRegime.LMNP_REEL,
    TaxRegime.LMP_REEL,
})

INCENTIVE_BY_REGIME: dict[TaxRegime, IncentiveProgram] = {
    TaxRegime.PINEL: IncentiveProgram.PINEL,
    TaxRegime.DENORMANDIE: IncentiveProgram.DENORMANDIE,
    TaxRegime.MALRAUX: IncentiveProgram.MALRAUX,
}

REGIME_BY_INCENTIVE: dict[IncentiveProgram, TaxRegime] = {
    program: regime for regime, program in INCENTIVE_BY_REGIME.items()
}


def resolve_regime(
    rental_type: RentalType,
    tax_method: TaxMethod,
    landlord_status: LandlordStatus = LandlordStatus.NON_PROFESSIONAL,
    incentive: IncentiveProgram = IncentiveProgram.NONE,
    seasonal_unclassified: bool = False,
) -> TaxRegime:
    """Map a fiscal election onto the single regime the tax engine applies.

    An incentive program always wins: Pinel, Denormandie and Malraux are taxed
    on the actual-expense unfurnished base with a separate reduction.
    """
    if incentive is not IncentiveProgram.NONE:
        return REGIME_BY_INCENTIVE[incentive]

    if rental_type is RentalType.UNFURNISHED:
        if tax_method is TaxMethod.MICRO:
            return TaxRegime.MICRO_FONCIER
        return TaxRegime.REEL_FONCIER

    if tax_method is TaxMethod.MICRO:
        if seasonal_unclassified:
            return TaxRegime.MICRO_BIC_UNCLASSIFIED
        return TaxRegime.MICRO_BIC

    if landlord_status is LandlordStatus.PROFESSIONAL:
        return TaxRegime.LMP_REEL
    return TaxRegime.LMNP_REEL
