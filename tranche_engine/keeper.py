"""Decision logic for automated rebalances (upkeep).

A pool is in one of two derived states, never stored:
- IDLE: nothing to do
- UPKEEP_NEEDED: the net deviation is large enough, the rebalance interval
  has elapsed, and the subsidy reserve can cover the owed asset with the
  slippage buffer applied

Executing upkeep only records the timestamp and reports the amounts to move.
The swap itself belongs to the external executor.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from tranche_engine.config import KeeperConfig
from tranche_engine.interfaces import BalanceReader, RateSource, ShareLedger
from tranche_engine.math.fixed_point import SCALE
from tranche_engine.models.pool import Pool
from tranche_engine.models.tranche import PoolDelta, RebalancePlan, Tranche
from tranche_engine.models.types import Asset, Direction
from tranche_engine.ratio import delta
from tranche_engine.safe_int import S
from tranche_engine.valuation import validate_rate

logger = structlog.get_logger()


class UpkeepState(str, Enum):
    IDLE = "idle"
    UPKEEP_NEEDED = "upkeep_needed"


class UpkeepNotNeededError(RuntimeError):
    """perform_upkeep was called while the decision is negative."""

    def __init__(self, check: UpkeepCheck) -> None:
        super().__init__(f"Upkeep not needed: {check.reason}")
        self.check = check


@dataclass(frozen=True)
class UpkeepCheck:
    """Outcome of one evaluation and the inputs it was derived from."""

    state: UpkeepState
    reason: str
    deviation: PoolDelta
    rate: int
    now: int
    required_subsidy: int
    subsidy_balance: int
    snapshot: tuple[Tranche, ...]

    @property
    def upkeep_needed(self) -> bool:
        return self.state is UpkeepState.UPKEEP_NEEDED


def owed_asset(direction: Direction) -> Asset:
    """Asset whose reserve must increase for the given direction.

    Raises:
        ValueError: If direction is BALANCED
    """
    if direction is Direction.NEED_MORE_A:
        return Asset.A
    if direction is Direction.NEED_MORE_B:
        return Asset.B
    raise ValueError("A balanced pool owes nothing")


def required_subsidy(deviation: PoolDelta, max_slippage: int) -> int:
    """Owed delta multiplied by the slippage buffer, in the owed asset's scale."""
    if deviation.direction is Direction.BALANCED:
        return 0
    owed = deviation.delta_a if deviation.direction is Direction.NEED_MORE_A else deviation.delta_b
    return (S(owed) * max_slippage // SCALE).value


def evaluate_upkeep(
    tranches: Sequence[Tranche],
    rate: int,
    scale_a: int,
    scale_b: int,
    now: int,
    last_rebalance: int,
    config: KeeperConfig,
    subsidy: BalanceReader,
) -> UpkeepCheck:
    """Decide whether a rebalance should run for a snapshot of the pool.

    Conditions are checked in order (deviation, interval, funding) and the
    first failing one is reported as the reason.

    Raises:
        InvalidRateError: If rate is not positive
    """
    validate_rate(rate)
    snapshot = tuple(tranches)
    deviation = delta(snapshot, rate, scale_a, scale_b)

    def result(state: UpkeepState, reason: str, needed: int = 0, balance: int = 0) -> UpkeepCheck:
        return UpkeepCheck(
            state=state,
            reason=reason,
            deviation=deviation,
            rate=rate,
            now=now,
            required_subsidy=needed,
            subsidy_balance=balance,
            snapshot=snapshot,
        )

    if not deviation.is_actionable:
        return result(UpkeepState.IDLE, "balanced")
    if deviation.r_div < config.min_r_div:
        return result(UpkeepState.IDLE, "deviation_below_threshold")
    if now - last_rebalance < config.rebalance_interval:
        return result(UpkeepState.IDLE, "interval_not_elapsed")

    asset = owed_asset(deviation.direction)
    needed = required_subsidy(deviation, config.max_slippage)
    balance = subsidy.balance_of(asset)
    if balance < needed:
        logger.warning(
            "subsidy_insufficient",
            asset=asset.value,
            balance=balance,
            required=needed,
        )
        return result(UpkeepState.IDLE, "insufficient_funding", needed, balance)

    return result(UpkeepState.UPKEEP_NEEDED, "ok", needed, balance)


class Keeper:
    """Rebalance trigger for one pool.

    Holds the only mutable state of the engine, the last rebalance timestamp.
    All other inputs are read through injected collaborators on every call.

    Args:
        pool: Tranche arena with asset scales
        rates: Exchange-rate source
        ledger: Claim-share ledger
        subsidy: Balance reader of the subsidy reserve
        config: Thresholds; defaults to KeeperConfig()
        last_rebalance: Timestamp of the previous rebalance (seconds)
    """

    def __init__(
        self,
        pool: Pool,
        rates: RateSource,
        ledger: ShareLedger,
        subsidy: BalanceReader,
        config: KeeperConfig | None = None,
        last_rebalance: int = 0,
    ) -> None:
        self.pool = pool
        self.rates = rates
        self.ledger = ledger
        self.subsidy = subsidy
        self.config = config or KeeperConfig()
        self._last_rebalance = last_rebalance
        self._lock = threading.Lock()

    @property
    def last_rebalance(self) -> int:
        return self._last_rebalance

    def _evaluate(self, now: int) -> UpkeepCheck:
        return evaluate_upkeep(
            self.pool.snapshot(self.ledger),
            self.rates.get_rate(),
            self.pool.scale_a,
            self.pool.scale_b,
            now,
            self._last_rebalance,
            self.config,
            self.subsidy,
        )

    def check_upkeep(self, now: int) -> UpkeepCheck:
        """Evaluate the current pool state without changing anything."""
        with self._lock:
            check = self._evaluate(now)
        logger.debug(
            "upkeep_checked",
            state=check.state.value,
            reason=check.reason,
            r_div=check.deviation.r_div,
        )
        return check

    def perform_upkeep(self, now: int) -> RebalancePlan:
        """Re-evaluate and, if needed, record now and return the plan.

        The decision and the reported amounts come from the same snapshot,
        and the timestamp update happens under the same lock.

        Raises:
            UpkeepNotNeededError: If the evaluation is negative
        """
        with self._lock:
            check = self._evaluate(now)
            if not check.upkeep_needed:
                raise UpkeepNotNeededError(check)
            self._last_rebalance = now

        deviation = check.deviation
        plan = RebalancePlan(
            direction=deviation.direction,
            delta_a=deviation.delta_a,
            delta_b=deviation.delta_b,
            r_div=deviation.r_div,
            rate=check.rate,
            timestamp=now,
        )
        logger.info(
            "upkeep_performed",
            direction=plan.direction.value,
            asset_in=plan.asset_in.value,
            amount_in=plan.amount_in,
            asset_out=plan.asset_out.value,
            amount_out=plan.amount_out,
            r_div=plan.r_div,
            rate=plan.rate,
            timestamp=now,
        )
        return plan
