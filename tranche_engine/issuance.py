"""Conversion between claim shares and underlying asset amounts.

The first deposit into an empty tranche defines the share unit with a
square-root rule, sqrt(value * share_scale / scale_a * share_scale), so the
bootstrap share count only depends on the deposited value and not on how
it is split between A and B. Every later deposit or redemption is plain
proportional accounting against the current supply.
"""

from __future__ import annotations

import structlog

from tranche_engine.math.fixed_point import SCALE, sqrt
from tranche_engine.models.tranche import Tranche
from tranche_engine.safe_int import S
from tranche_engine.splitter import split_from_a
from tranche_engine.valuation import total_a

logger = structlog.get_logger()


def shares_for_deposit(
    tranche: Tranche,
    amount_a: int,
    amount_b: int,
    rate: int,
    scale_a: int,
    scale_b: int,
) -> int:
    """Claim shares issued for depositing (amount_a, amount_b).

    Args:
        tranche: Tranche state, share_supply included
        amount_a: Deposited Asset A, native scale
        amount_b: Deposited Asset B, native scale
        rate: Value of one unit of A in B, 18-decimal fixed point
        scale_a: Native scale of Asset A
        scale_b: Native scale of Asset B

    Returns:
        Number of claim shares, in the tranche's share scale

    Raises:
        InvalidRateError: If rate is not positive
        ArithmeticRangeError: If an intermediate exceeds uint256
    """
    e = tranche.share_scale
    value = total_a(amount_a, amount_b, rate, scale_a, scale_b)

    if tranche.is_empty:
        return sqrt((S(value) * e // scale_a * e).value)

    reserves_value = total_a(tranche.reserve_a, tranche.reserve_b, rate, scale_a, scale_b)
    share = (S(value) * e // scale_a * e) // (S(reserves_value) * e // scale_a)
    return (share * tranche.share_supply // e).value


def assets_for_redemption(
    tranche: Tranche,
    share_amount: int,
    rate: int,
    scale_a: int,
    scale_b: int,
) -> tuple[int, int]:
    """Asset amounts backing share_amount claim shares.

    For a non-empty tranche the payout follows the current reserve mix, not
    the target mix. For an empty tranche the bootstrap rule is inverted and
    the implied value is split at target_ratio, which is also the pair a
    first depositor has to supply to mint share_amount.

    Returns:
        (amount_a, amount_b); (0, 0) if the tranche has reserves but no supply

    Raises:
        InvalidRateError: If rate is not positive
    """
    e = tranche.share_scale

    if tranche.is_empty:
        root = S(share_amount) * scale_a // e
        value = root * root // scale_a
        return split_from_a(value.value, tranche.target_ratio, rate, scale_a, scale_b)

    if tranche.share_supply == 0:
        logger.debug("redemption_without_supply", tranche=tranche.tranche_id)
        return 0, 0

    share = S(share_amount) * e // tranche.share_supply
    amount_a = share * tranche.reserve_a // e
    amount_b = share * tranche.reserve_b // e
    return amount_a.value, amount_b.value


def redemption_fees(amount_a: int, amount_b: int, fee_rate: int) -> tuple[int, int]:
    """Fees withheld on a redemption at fee_rate (18-decimal, at most 1.0).

    Raises:
        ValueError: If fee_rate exceeds 1.0
    """
    if fee_rate > SCALE:
        raise ValueError(f"fee_rate cannot exceed 1.0, got {fee_rate}")
    fee_a = S(amount_a) * fee_rate // SCALE
    fee_b = S(amount_b) * fee_rate // SCALE
    return fee_a.value, fee_b.value


def net_of_fees(amount_a: int, amount_b: int, fee_rate: int) -> tuple[int, int]:
    """Redemption amounts after withholding fees at fee_rate."""
    fee_a, fee_b = redemption_fees(amount_a, amount_b, fee_rate)
    return (S(amount_a) - fee_a).value, (S(amount_b) - fee_b).value
