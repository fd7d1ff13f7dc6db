"""In-memory collaborators and constants shared by tests."""

from dataclasses import dataclass, field

from tranche_engine.math.fixed_point import SCALE
from tranche_engine.models import Asset

# 30/70 split --> 30% of value in Asset A, 70% in Asset B
RATIO_30_70 = 30 * SCALE // 70

RATE_1800 = 1800 * SCALE


@dataclass
class FixedRate:
    """RateSource returning a settable rate."""

    rate: int

    def get_rate(self) -> int:
        return self.rate


@dataclass
class InMemoryLedger:
    """ShareLedger backed by a dict."""

    supplies: dict[str, int] = field(default_factory=dict)

    def total_supply(self, tranche_id: str) -> int:
        return self.supplies.get(tranche_id, 0)


@dataclass
class SubsidyBalances:
    """BalanceReader backed by a dict."""

    balances: dict[Asset, int] = field(default_factory=dict)

    def balance_of(self, asset: Asset) -> int:
        return self.balances.get(asset, 0)
