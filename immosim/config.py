from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Social levies on rental income and capital gains (prélèvements sociaux)
    social_levy_rate: Decimal = Decimal("17.2")

    # Capital gains on resale
    capital_gains_income_tax_rate: Decimal = Decimal("19")
    capital_gains_social_rate: Decimal = Decimal("17.2")
    resale_costs_pct: Decimal = Decimal("8")  # Agency + seller-side notary

    # Energy performance: first calendar year a class can no longer be let
    # (Loi Climat et Résilience). Update here when the cutoffs move.
    energy_rental_ban_year: dict[str, int] = {
        "G": 2025,
        "F": 2028,
        "E": 2034,
    }
    # Rent indexation frozen since August 2022
    energy_rent_freeze_classes: list[str] = ["F", "G"]

    # Incentive programs
    pinel_price_cap: Decimal = Decimal("300000")
    pinel_reform_year: int = 2023  # First investment year on the reduced schedule
    malraux_works_cap: Decimal = Decimal("400000")
    malraux_works_years: int = 4

    # Fixed IRR horizons reported alongside the full-horizon IRR
    irr_horizons: list[int] = [10, 20, 30]


settings = Settings()
