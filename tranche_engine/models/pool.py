"""Insert-only arena of tranches sharing one asset pair.

Tranches are appended in creation order and never removed. The index
returned by add_tranche stays valid for the lifetime of the pool, and
iteration always follows creation order so aggregate calculations are
deterministic.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from tranche_engine.math.fixed_point import SCALE
from tranche_engine.models.tranche import DEFAULT_SHARE_SCALE, Tranche

if TYPE_CHECKING:
    from tranche_engine.interfaces import ShareLedger

logger = structlog.get_logger()


class Pool:
    """Tranches of a two-asset pool plus the native scales of both assets.

    Args:
        scale_a: Native scale of Asset A (10**decimals)
        scale_b: Native scale of Asset B (10**decimals)

    Raises:
        ValueError: If a scale is not in (0, 10**18]
    """

    def __init__(self, scale_a: int, scale_b: int) -> None:
        if scale_a <= 0 or scale_b <= 0:
            raise ValueError(f"Asset scales must be positive, got {scale_a}, {scale_b}")
        if scale_a > SCALE or scale_b > SCALE:
            raise ValueError(f"Asset scales cannot exceed 10**18, got {scale_a}, {scale_b}")
        self.scale_a = scale_a
        self.scale_b = scale_b
        self._tranches: list[Tranche] = []
        self._index: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._tranches)

    def __iter__(self) -> Iterator[Tranche]:
        return iter(list(self._tranches))

    def __contains__(self, tranche_id: object) -> bool:
        return tranche_id in self._index

    def add_tranche(
        self,
        tranche_id: str,
        target_ratio: int,
        share_scale: int = DEFAULT_SHARE_SCALE,
    ) -> int:
        """Create an empty tranche and return its stable index.

        Raises:
            ValueError: If a tranche with this id already exists
        """
        if tranche_id in self._index:
            raise ValueError(f"Tranche {tranche_id} already exists")
        tranche = Tranche(tranche_id=tranche_id, target_ratio=target_ratio, share_scale=share_scale)
        self._tranches.append(tranche)
        index = len(self._tranches) - 1
        self._index[tranche_id] = index
        logger.debug("tranche_added", tranche=tranche_id, index=index, target_ratio=target_ratio)
        return index

    def get(self, tranche_id: str) -> Tranche:
        """Return the current state of a tranche.

        Raises:
            KeyError: If the tranche does not exist
        """
        try:
            return self._tranches[self._index[tranche_id]]
        except KeyError:
            raise KeyError(f"Unknown tranche: {tranche_id}") from None

    def by_index(self, index: int) -> Tranche:
        """Return the tranche created at position index."""
        return self._tranches[index]

    def update_reserves(self, tranche_id: str, reserve_a: int, reserve_b: int) -> Tranche:
        """Record reserves reported by the external deposit/withdraw path."""
        index = self._index.get(tranche_id)
        if index is None:
            raise KeyError(f"Unknown tranche: {tranche_id}")
        updated = replace(self._tranches[index], reserve_a=reserve_a, reserve_b=reserve_b)
        self._tranches[index] = updated
        return updated

    def snapshot(self, ledger: ShareLedger | None = None) -> tuple[Tranche, ...]:
        """Immutable view of all tranches in creation order.

        Args:
            ledger: If given, share_supply of every tranche is refreshed from it

        Returns:
            Tuple of Tranche values; later pool mutations do not affect it
        """
        if ledger is None:
            return tuple(self._tranches)
        return tuple(
            replace(t, share_supply=ledger.total_supply(t.tranche_id)) for t in self._tranches
        )

    def total_reserves(self) -> tuple[int, int]:
        """Sum of reserve_a and reserve_b across all tranches."""
        return (
            sum(t.reserve_a for t in self._tranches),
            sum(t.reserve_b for t in self._tranches),
        )
