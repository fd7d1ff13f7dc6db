"""Tranche state and the results computed over it."""

from __future__ import annotations

from dataclasses import dataclass

from tranche_engine.models.types import Asset, Direction

# Default decimal scale of a claim-share token (18 decimals)
DEFAULT_SHARE_SCALE = 10**18


@dataclass(frozen=True)
class Tranche:
    """A sub-pool with its own target ratio and claim-share accounting.

    Reserves are in each asset's native scale; target_ratio is value(A)/value(B)
    at 18-decimal fixed point. share_supply is owned by an external ledger and
    only read here.
    """

    tranche_id: str
    target_ratio: int
    reserve_a: int = 0
    reserve_b: int = 0
    share_scale: int = DEFAULT_SHARE_SCALE
    share_supply: int = 0

    def __post_init__(self) -> None:
        if self.target_ratio <= 0:
            raise ValueError(f"Tranche {self.tranche_id}: target_ratio must be positive")
        if self.share_scale <= 0:
            raise ValueError(f"Tranche {self.tranche_id}: share_scale must be positive")
        if self.reserve_a < 0 or self.reserve_b < 0:
            raise ValueError(f"Tranche {self.tranche_id}: reserves cannot be negative")
        if self.share_supply < 0:
            raise ValueError(f"Tranche {self.tranche_id}: share_supply cannot be negative")

    @property
    def is_empty(self) -> bool:
        """True if the tranche holds no reserves of either asset."""
        return self.reserve_a + self.reserve_b == 0


@dataclass(frozen=True)
class TrancheDelta:
    """Deviation of a single tranche from its target ratio.

    delta_a is in Asset A's native scale, delta_b in Asset B's.
    r_div is the relative deviation at 18-decimal scale.
    """

    delta_a: int
    delta_b: int
    direction: Direction
    r_div: int

    @classmethod
    def balanced(cls) -> TrancheDelta:
        return cls(delta_a=0, delta_b=0, direction=Direction.BALANCED, r_div=0)


@dataclass(frozen=True)
class PoolDelta:
    """Net deviation of all tranches in a pool."""

    delta_a: int
    delta_b: int
    direction: Direction
    r_div: int

    @property
    def is_actionable(self) -> bool:
        return self.direction is not Direction.BALANCED


@dataclass(frozen=True)
class RebalancePlan:
    """Amounts a rebalance must move, reported to the external executor.

    amount_in is what the pool must receive (the owed asset), amount_out is
    what it releases. The executor performs the actual swap.
    """

    direction: Direction
    delta_a: int
    delta_b: int
    r_div: int
    rate: int
    timestamp: int

    @property
    def asset_in(self) -> Asset:
        return Asset.A if self.direction is Direction.NEED_MORE_A else Asset.B

    @property
    def asset_out(self) -> Asset:
        return Asset.B if self.direction is Direction.NEED_MORE_A else Asset.A

    @property
    def amount_in(self) -> int:
        return self.delta_a if self.direction is Direction.NEED_MORE_A else self.delta_b

    @property
    def amount_out(self) -> int:
        return self.delta_b if self.direction is Direction.NEED_MORE_A else self.delta_a
