"""Mathematical primitives for the tranche engine.

This package provides the integer building blocks every higher calculation
uses:
- sqrt / abs_diff: floor square root and unsigned absolute difference
- to_fixed / from_fixed: 18-decimal fixed-point conversions
"""

from tranche_engine.math.fixed_point import (
    MAX_RATIO,
    SCALE,
    abs_diff,
    from_fixed,
    sqrt,
    to_fixed,
)

__all__ = ["MAX_RATIO", "SCALE", "abs_diff", "from_fixed", "sqrt", "to_fixed"]
