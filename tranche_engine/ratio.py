"""Current value ratio of tranches and their deviation from target.

A tranche's ratio is value(reserve_a) / value(reserve_b) at 18-decimal
scale. When it drifts away from target_ratio, the tranche needs either more
Asset A (ratio below target) or more Asset B (ratio above target). The delta
is the single amount of A (and its B equivalent) that restores the target in
one exchange:

    delta_a = |reserve_a - implied_a| / (1 + target_ratio)

where implied_a is the amount of A that reserve_b would call for at target.
Moving delta_a changes both sides of the ratio, hence the (1 + target)
denominator.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from tranche_engine.math.fixed_point import MAX_RATIO, SCALE, abs_diff
from tranche_engine.models.tranche import PoolDelta, Tranche, TrancheDelta
from tranche_engine.models.types import Direction
from tranche_engine.safe_int import S
from tranche_engine.valuation import token_a_for_token_b, validate_rate

logger = structlog.get_logger()


def current_ratio(tranche: Tranche, rate: int, scale_a: int, scale_b: int) -> int:
    """Current value(A) / value(B) of a tranche at 18-decimal scale.

    Args:
        tranche: Tranche state
        rate: Value of one unit of A in B, 18-decimal fixed point
        scale_a: Native scale of Asset A
        scale_b: Native scale of Asset B

    Returns:
        - target_ratio if the tranche is empty
        - 0 if it holds only Asset B
        - MAX_RATIO if it holds only Asset A, or B worth less than one
          18-decimal unit
        - the value ratio otherwise

    Raises:
        InvalidRateError: If rate is not positive
    """
    validate_rate(rate)
    if tranche.reserve_a == 0 and tranche.reserve_b == 0:
        return tranche.target_ratio
    if tranche.reserve_a == 0:
        return 0
    if tranche.reserve_b == 0:
        return MAX_RATIO

    value_a = S(tranche.reserve_a) * rate // scale_a
    value_b = S(tranche.reserve_b) * SCALE // scale_b
    # B dust below 18-decimal precision counts as an all-A tranche
    if value_b == 0:
        return MAX_RATIO
    return (value_a * SCALE // value_b).value


def relative_deviation(ratio: int, target_ratio: int) -> int:
    """|ratio - target| / target at 18-decimal scale, 1.0 for the all-A sentinel."""
    if ratio == MAX_RATIO:
        return SCALE
    return (S(abs_diff(ratio, target_ratio)) * SCALE // target_ratio).value


def tranche_delta(tranche: Tranche, rate: int, scale_a: int, scale_b: int) -> TrancheDelta:
    """Amounts and direction needed to bring a tranche back to target.

    delta_a is in Asset A's native scale, delta_b is the same value in
    Asset B's native scale. If either truncates to zero, the tranche is
    reported as exactly balanced so no one-sided correction is ever issued.

    Raises:
        InvalidRateError: If rate is not positive
        ArithmeticRangeError: If an intermediate exceeds uint256
    """
    ratio = current_ratio(tranche, rate, scale_a, scale_b)
    direction = Direction.NEED_MORE_A if ratio < tranche.target_ratio else Direction.NEED_MORE_B
    r_div = relative_deviation(ratio, tranche.target_ratio)

    implied_a = token_a_for_token_b(tranche.reserve_b, tranche.target_ratio, rate, scale_a, scale_b)
    denominator = S(scale_a) + S(tranche.target_ratio) * scale_a // SCALE
    delta_a = S(abs_diff(tranche.reserve_a, implied_a)) * scale_a // denominator
    # Rescale to B's precision before applying the rate so delta_a is not altered
    delta_b = (delta_a * scale_b // scale_a) * rate // SCALE

    if delta_a == 0 or delta_b == 0:
        return TrancheDelta.balanced()

    result = TrancheDelta(
        delta_a=delta_a.value,
        delta_b=delta_b.value,
        direction=direction,
        r_div=r_div,
    )
    logger.debug(
        "tranche_delta",
        tranche=tranche.tranche_id,
        ratio=ratio,
        target_ratio=tranche.target_ratio,
        direction=direction.value,
        delta_a=result.delta_a,
        delta_b=result.delta_b,
        r_div=r_div,
    )
    return result


def delta(tranches: Iterable[Tranche], rate: int, scale_a: int, scale_b: int) -> PoolDelta:
    """Net rebalance needed across all tranches of a pool.

    Per-tranche deltas are summed with signs: NEED_MORE_B contributes
    (-delta_a, +delta_b) and NEED_MORE_A contributes (+delta_a, -delta_b).
    Only a net result with opposite signs on the two assets is actionable;
    any other combination means the tranches offset each other and the pool
    delta is zero.

    The pool-level r_div is delta_a relative to all Asset A held by the pool.

    Raises:
        InvalidRateError: If rate is not positive
    """
    validate_rate(rate)
    total_reserve_a = 0
    net_a = 0
    net_b = 0
    for tranche in tranches:
        total_reserve_a += tranche.reserve_a
        td = tranche_delta(tranche, rate, scale_a, scale_b)
        if td.direction is Direction.NEED_MORE_B:
            net_a -= td.delta_a
            net_b += td.delta_b
        elif td.direction is Direction.NEED_MORE_A:
            net_a += td.delta_a
            net_b -= td.delta_b

    if net_a > 0 and net_b < 0:
        delta_a, delta_b, direction = net_a, -net_b, Direction.NEED_MORE_A
    elif net_a < 0 and net_b > 0:
        delta_a, delta_b, direction = -net_a, net_b, Direction.NEED_MORE_B
    else:
        if net_a != 0 or net_b != 0:
            logger.debug("pool_delta_cancelled", net_a=net_a, net_b=net_b)
        delta_a, delta_b, direction = 0, 0, Direction.BALANCED

    r_div = 0 if total_reserve_a == 0 else (S(delta_a) * SCALE // total_reserve_a).value
    return PoolDelta(delta_a=delta_a, delta_b=delta_b, direction=direction, r_div=r_div)
