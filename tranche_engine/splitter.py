"""Split a single-asset amount into the A/B pair implied by a ratio.

Used by issuance and redemption paths that accept or pay out only one asset:
the total value is divided so that value(A) / value(B) equals the ratio,
i.e. A receives ratio / (1 + ratio) of the value and B the remainder.

Rounding always truncates toward zero, so the re-summed value of the pair
never exceeds the input total.
"""

from tranche_engine.math.fixed_point import SCALE
from tranche_engine.safe_int import S
from tranche_engine.valuation import convert_a_to_b, convert_b_to_a, validate_rate


def split_from_a(total: int, ratio: int, rate: int, scale_a: int, scale_b: int) -> tuple[int, int]:
    """Split an amount of Asset A into (amount_a, amount_b) at ratio.

    Args:
        total: Value to split, in Asset A's native scale
        ratio: Target value(A) / value(B), 18-decimal fixed point
        rate: Value of one unit of A in B, 18-decimal fixed point
        scale_a: Native scale of Asset A
        scale_b: Native scale of Asset B

    Returns:
        (amount_a, amount_b) with amount_b in Asset B's native scale

    Raises:
        InvalidRateError: If rate is not positive
    """
    validate_rate(rate)
    amount_a = S(total) - S(total) * SCALE // (S(SCALE) + ratio)
    remainder = S(total) - amount_a
    amount_b = convert_a_to_b(remainder.value, rate, scale_a, scale_b)
    return amount_a.value, amount_b


def split_from_b(total: int, ratio: int, rate: int, scale_a: int, scale_b: int) -> tuple[int, int]:
    """Split an amount of Asset B into (amount_a, amount_b) at ratio.

    Args:
        total: Value to split, in Asset B's native scale

    Returns:
        (amount_a, amount_b) with amount_a in Asset A's native scale

    Raises:
        InvalidRateError: If rate is not positive
    """
    validate_rate(rate)
    amount_b = S(total) * SCALE // (S(SCALE) + ratio)
    remainder = S(total) - amount_b
    amount_a = convert_b_to_a(remainder.value, rate, scale_a, scale_b)
    return amount_a, amount_b.value
