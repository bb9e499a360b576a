"""
Shared rate and rent arithmetic.

Rounding happens only here, on values leaving the engine; sums are kept
unrounded until then.
"""
from decimal import Decimal, ROUND_HALF_UP

from leasedash.config import get_settings

_TWO_PLACES = Decimal("0.01")


def round_rate(value: float) -> float:
    """Round half-up to 2 decimal places."""
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def safe_rate(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator * 100


def safe_ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def daily_rent(monthly_rent: float) -> float:
    """Flat-month daily rent, regardless of calendar month length."""
    return monthly_rent / get_settings().days_per_month
