"""Shared type definitions for tranche engine models.

These types are used by the tranche data model and by KeeperConfig.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from tranche_engine.math.fixed_point import to_fixed
from tranche_engine.safe_int import UINT256_MAX


class Asset(str, Enum):
    """One side of the two-asset pair."""

    A = "A"
    B = "B"


class Direction(str, Enum):
    """Which asset a tranche (or the pool) needs more of to reach target."""

    NEED_MORE_A = "need_more_a"
    NEED_MORE_B = "need_more_b"
    BALANCED = "balanced"


def validate_uint256(value: Any) -> int:
    """Validate that a value is a non-negative integer within uint256 range.

    Args:
        value: Integer or decimal integer string

    Returns:
        The value as int

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


def validate_fixed_point(value: Any) -> int:
    """Accept a raw 18-decimal integer or a human decimal string/Decimal.

    Integers are taken as already scaled; strings and Decimals are scaled
    by 10^18 ("1.03" -> 1_030_000_000_000_000_000).
    """
    if isinstance(value, (str, Decimal)):
        value = to_fixed(value)
    return validate_uint256(value)


# 256-bit unsigned integer (validated)
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]

# 18-decimal fixed-point value, raw int or decimal string
FixedPoint = Annotated[
    int,
    BeforeValidator(validate_fixed_point),
    Field(description="18-decimal fixed-point value"),
]
