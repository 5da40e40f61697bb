"""IRR computation: damped Newton-Raphson with multiple seeds, Brent fallback.

Pure functions. No I/O. Returns a percentage; 0 means no meaningful IRR.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

logger = logging.getLogger(__name__)

FOUR_PLACES = Decimal("0.0001")

DEFAULT_GUESS = 0.1
ALTERNATE_SEEDS = (0.05, 0.15, 0.25, -0.05)
MAX_ITERATIONS = 200
NPV_TOLERANCE = 1e-9  # Relative to the largest flow
STEP_TOLERANCE = 1e-12

# Roots outside this band are numerical artifacts, not economic rates
MIN_RATE = -0.99
MAX_RATE = 10.0


def npv(cash_flows: list[float], rate: float) -> float:
    """Net present value of periodic flows, flow[0] undiscounted."""
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def _npv_derivative(cash_flows: list[float], rate: float) -> float:
    return sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))


def _newton(cash_flows: list[float], seed: float, tolerance: float) -> float | None:
    """Newton iteration from one seed. None when it diverges or stalls."""
    rate = seed
    previous_step = 0.0

    for _ in range(MAX_ITERATIONS):
        try:
            value = npv(cash_flows, rate)
            slope = _npv_derivative(cash_flows, rate)
        except (OverflowError, ZeroDivisionError):
            return None

        if abs(value) < tolerance:
            return rate
        if slope == 0:
            return None

        step = -value / slope
        # Oscillating: direction flips without the step shrinking
        if previous_step and step * previous_step < 0 and abs(step) >= abs(previous_step):
            step /= 2

        new_rate = rate + step
        if new_rate <= -1:
            new_rate = (rate - 1) / 2  # Halfway to -100%, stays in the domain

        if abs(new_rate - rate) < STEP_TOLERANCE:
            return new_rate if abs(npv(cash_flows, new_rate)) < tolerance * 1e3 else None

        previous_step = new_rate - rate
        rate = new_rate

    return None


def _bracketed(cash_flows: list[float]) -> float | None:
    """Brent's method over the plausibility band, when NPV changes sign on it."""
    try:
        low, high = npv(cash_flows, MIN_RATE), npv(cash_flows, MAX_RATE)
    except (OverflowError, ZeroDivisionError):
        return None
    if low * high > 0:
        return None
    try:
        return brentq(lambda r: npv(cash_flows, r), MIN_RATE, MAX_RATE, xtol=1e-10, maxiter=1000)
    except (ValueError, RuntimeError):
        return None


def _plausible(rate: float | None) -> bool:
    return rate is not None and MIN_RATE <= rate <= MAX_RATE


def compute_irr(cash_flows: list[Decimal], guess: float = DEFAULT_GUESS) -> Decimal:
    """Internal rate of return of annual cash flows, as a percentage.

    cash_flows[0] should be the (negative) initial investment and the last
    flow should include resale proceeds. Returns 0 when fewer than two flows
    are given, when the flows never change sign, or when no plausible root
    is found; callers must read 0 as "no IRR", not as 0%.
    """
    if not cash_flows or len(cash_flows) < 2:
        return Decimal("0")

    cf_float = [float(cf) for cf in cash_flows]
    if not (any(cf < 0 for cf in cf_float) and any(cf > 0 for cf in cf_float)):
        return Decimal("0")

    tolerance = NPV_TOLERANCE * max(1.0, max(abs(cf) for cf in cf_float))

    seeds = list(dict.fromkeys((guess,) + ALTERNATE_SEEDS))
    for seed in seeds:
        rate = _newton(cf_float, seed, tolerance)
        if _plausible(rate):
            return (Decimal(str(rate)) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)

    rate = _bracketed(cf_float)
    if _plausible(rate):
        return (Decimal(str(rate)) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)

    logger.warning("IRR did not converge for %d cash flows", len(cf_float))
    return Decimal("0")
