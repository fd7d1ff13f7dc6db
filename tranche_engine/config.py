"""Keeper configuration.

Thresholds are 18-decimal fixed-point integers. They can be given either as
raw integers or as decimal strings ("0.005", "1.03").

Configuration from environment variables with sensible defaults:
- TRANCHE_KEEPER_MIN_R_DIV: minimum pool deviation to rebalance (default: 0.005)
- TRANCHE_KEEPER_INTERVAL: minimum seconds between rebalances (default: 0)
- TRANCHE_KEEPER_MAX_SLIPPAGE: subsidy buffer factor (default: 1.03)
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tranche_engine.math.fixed_point import SCALE
from tranche_engine.models.types import FixedPoint, Uint256

# 0.5% relative deviation
DEFAULT_MIN_R_DIV = 5 * 10**15

# 1.03 --> tolerate up to 3% execution slippage
DEFAULT_MAX_SLIPPAGE = 103 * 10**16


class KeeperConfig(BaseModel):
    """Thresholds gating automated rebalances."""

    model_config = ConfigDict(frozen=True)

    min_r_div: FixedPoint = Field(
        default=DEFAULT_MIN_R_DIV,
        description="Minimum pool-level relative deviation that triggers a rebalance.",
    )
    rebalance_interval: Uint256 = Field(
        default=0,
        description="Minimum number of seconds between two rebalances.",
    )
    max_slippage: FixedPoint = Field(
        default=DEFAULT_MAX_SLIPPAGE,
        description="Multiplier applied to the owed delta when checking subsidy funding.",
    )

    @field_validator("max_slippage")
    @classmethod
    def slippage_at_least_one(cls, v: int) -> int:
        if v < SCALE:
            raise ValueError("max_slippage must be >= 1.0")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> KeeperConfig:
        """Build a config from TRANCHE_KEEPER_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            min_r_div=env.get("TRANCHE_KEEPER_MIN_R_DIV", DEFAULT_MIN_R_DIV),
            rebalance_interval=env.get("TRANCHE_KEEPER_INTERVAL", 0),
            max_slippage=env.get("TRANCHE_KEEPER_MAX_SLIPPAGE", DEFAULT_MAX_SLIPPAGE),
        )
