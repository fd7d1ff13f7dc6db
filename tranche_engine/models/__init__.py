"""Data model for tranche pools."""

from tranche_engine.models.pool import Pool
from tranche_engine.models.tranche import (
    DEFAULT_SHARE_SCALE,
    PoolDelta,
    RebalancePlan,
    Tranche,
    TrancheDelta,
)
from tranche_engine.models.types import Asset, Direction, FixedPoint, Uint256

__all__ = [
    "DEFAULT_SHARE_SCALE",
    "Asset",
    "Direction",
    "FixedPoint",
    "Pool",
    "PoolDelta",
    "RebalancePlan",
    "Tranche",
    "TrancheDelta",
    "Uint256",
]
