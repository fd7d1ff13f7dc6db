"""Tranche rebalancing engine for two-asset pools."""

from tranche_engine.config import KeeperConfig
from tranche_engine.issuance import assets_for_redemption, net_of_fees, redemption_fees, shares_for_deposit
from tranche_engine.keeper import Keeper, UpkeepCheck, UpkeepNotNeededError, UpkeepState, evaluate_upkeep
from tranche_engine.models import Asset, Direction, Pool, PoolDelta, RebalancePlan, Tranche, TrancheDelta
from tranche_engine.ratio import current_ratio, delta, tranche_delta
from tranche_engine.safe_int import ArithmeticRangeError
from tranche_engine.splitter import split_from_a, split_from_b
from tranche_engine.valuation import InvalidRateError

__version__ = "0.1.0"
__all__ = [
    "ArithmeticRangeError",
    "Asset",
    "Direction",
    "InvalidRateError",
    "Keeper",
    "KeeperConfig",
    "Pool",
    "PoolDelta",
    "RebalancePlan",
    "Tranche",
    "TrancheDelta",
    "UpkeepCheck",
    "UpkeepNotNeededError",
    "UpkeepState",
    "__version__",
    "assets_for_redemption",
    "current_ratio",
    "delta",
    "evaluate_upkeep",
    "net_of_fees",
    "redemption_fees",
    "shares_for_deposit",
    "split_from_a",
    "split_from_b",
    "tranche_delta",
]
