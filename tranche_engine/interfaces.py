"""Read-only collaborators injected into the engine.

The engine never talks to an exchange-rate feed, a token ledger or the
subsidy reserve directly. Callers pass objects implementing these protocols,
which keeps every calculation a pure function of its inputs.
"""

from typing import Protocol, runtime_checkable

from tranche_engine.models.types import Asset


@runtime_checkable
class RateSource(Protocol):
    """Current value of one unit of Asset A in units of Asset B."""

    def get_rate(self) -> int:
        """Return the rate at 18-decimal fixed point."""
        ...


@runtime_checkable
class ShareLedger(Protocol):
    """Outstanding claim-share units per tranche."""

    def total_supply(self, tranche_id: str) -> int:
        """Return total claim shares issued for the tranche."""
        ...


@runtime_checkable
class BalanceReader(Protocol):
    """Balances held by the rebalance subsidy reserve."""

    def balance_of(self, asset: Asset) -> int:
        """Return the reserve's balance of asset, in its native scale."""
        ...
