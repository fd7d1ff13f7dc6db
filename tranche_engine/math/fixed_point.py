"""18-decimal fixed-point helpers.

Ratios, rates, slippage factors and relative deviations are all stored as
integers scaled by 10^18. Asset amounts stay in each asset's native scale
and are converted explicitly (see tranche_engine.valuation).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from tranche_engine.safe_int import UINT256_MAX

__all__ = [
    "SCALE",
    "MAX_RATIO",
    "sqrt",
    "abs_diff",
    "to_fixed",
    "from_fixed",
]

SCALE = 10**18

# Sentinel ratio for a tranche holding only Asset A (unbounded deviation)
MAX_RATIO = UINT256_MAX


def sqrt(x: int) -> int:
    """Floor of the square root of x using Newton's method.

    Args:
        x: Non-negative integer

    Returns:
        Largest integer r such that r * r <= x

    Raises:
        ValueError: If x is negative
    """
    if x < 0:
        raise ValueError(f"sqrt requires non-negative input, got {x}")
    if x < 2:
        return x

    # Initial guess is a power of two above the root, so the iteration
    # decreases monotonically until it reaches the floor.
    z = 1 << ((x.bit_length() + 1) // 2)
    while True:
        y = (z + x // z) // 2
        if y >= z:
            return z
        z = y


def abs_diff(a: int, b: int) -> int:
    """Absolute difference of two unsigned integers."""
    return a - b if a >= b else b - a


def to_fixed(value: Decimal | str | int) -> int:
    """Convert a human-readable value into 18-decimal fixed point.

    Uses ROUND_HALF_UP for consistent rounding behavior.

    Args:
        value: Decimal, decimal string (e.g. "0.005") or integer

    Returns:
        value * 10^18 as an integer

    Raises:
        ValueError: If value is negative or not a number
    """
    try:
        d = Decimal(value)
    except InvalidOperation as err:
        raise ValueError(f"Not a decimal number: {value!r}") from err
    if not d.is_finite():
        raise ValueError(f"Fixed-point value must be finite, got {value!r}")
    if d < 0:
        raise ValueError(f"Fixed-point value must be non-negative, got {value!r}")
    scaled = (d * SCALE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(scaled)


def from_fixed(value: int) -> Decimal:
    """Convert an 18-decimal fixed-point integer to Decimal for display."""
    return Decimal(value) / Decimal(SCALE)
