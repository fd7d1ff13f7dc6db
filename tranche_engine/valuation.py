"""Cross-asset valuation at a given exchange rate.

rate is the value of one unit of Asset A in units of Asset B, scaled by
10^18. Amounts are in each asset's native scale (scale_a, scale_b), so every
conversion first normalizes to 18 decimals, applies the rate, then rescales
to the destination asset. All divisions truncate toward zero.
"""

from tranche_engine.math.fixed_point import SCALE
from tranche_engine.safe_int import S


class InvalidRateError(ValueError):
    """Exchange rate is zero or negative."""

    pass


def validate_rate(rate: int) -> int:
    """Return rate unchanged if it is usable for valuation.

    Raises:
        InvalidRateError: If rate is not a positive integer
    """
    if isinstance(rate, bool) or not isinstance(rate, int):
        raise InvalidRateError(f"Rate must be an integer, got {type(rate).__name__}")
    if rate <= 0:
        raise InvalidRateError(f"Rate must be positive, got {rate}")
    return rate


def total_a(amount_a: int, amount_b: int, rate: int, scale_a: int, scale_b: int) -> int:
    """Value of (amount_a, amount_b) expressed in Asset A.

    Formula: a + ((b * 1e18 / scale_b) * 1e18 / rate) * scale_a / 1e18
    """
    validate_rate(rate)
    b_in_a = (((S(amount_b) * SCALE // scale_b) * SCALE) // rate) * scale_a // SCALE
    return (S(amount_a) + b_in_a).value


def total_b(amount_a: int, amount_b: int, rate: int, scale_a: int, scale_b: int) -> int:
    """Value of (amount_a, amount_b) expressed in Asset B.

    Formula: b + ((a * rate / scale_a) * scale_b) / 1e18
    """
    validate_rate(rate)
    a_in_b = ((S(amount_a) * rate // scale_a) * scale_b) // SCALE
    return (S(amount_b) + a_in_b).value


def token_a_for_token_b(amount_b: int, ratio: int, rate: int, scale_a: int, scale_b: int) -> int:
    """Amount of Asset A whose value relative to amount_b equals ratio.

    Formula: ((b * 1e18 / scale_b) * ratio / rate) * scale_a / 1e18
    """
    validate_rate(rate)
    return ((((S(amount_b) * SCALE // scale_b) * ratio) // rate) * scale_a // SCALE).value


def token_b_for_token_a(amount_a: int, ratio: int, rate: int, scale_a: int, scale_b: int) -> int:
    """Amount of Asset B such that value(amount_a) / value(B) equals ratio.

    Raises:
        DivisionByZero: If ratio is zero
    """
    validate_rate(rate)
    return ((((S(amount_a) * SCALE // scale_a) * rate) // ratio) * scale_b // SCALE).value


def convert_a_to_b(amount_a: int, rate: int, scale_a: int, scale_b: int) -> int:
    """Amount of Asset B worth amount_a at rate."""
    return total_b(amount_a, 0, rate, scale_a, scale_b)


def convert_b_to_a(amount_b: int, rate: int, scale_a: int, scale_b: int) -> int:
    """Amount of Asset A worth amount_b at rate."""
    return total_a(0, amount_b, rate, scale_a, scale_b)
