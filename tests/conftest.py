"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import RATIO_30_70, InMemoryLedger
from tranche_engine.math.fixed_point import SCALE
from tranche_engine.models import Pool, Tranche


@pytest.fixture
def seeded_tranche() -> Tranche:
    """30/70 tranche after a first deposit worth 1 A at rate 1800.

    The deposit splits into 0.3 A and 1260 B and mints 1 share.
    """
    return Tranche(
        tranche_id="eth30-dai70",
        target_ratio=RATIO_30_70,
        reserve_a=3 * 10**17,
        reserve_b=1260 * SCALE,
        share_supply=SCALE,
    )


@pytest.fixture
def seeded_pool(seeded_tranche: Tranche) -> Pool:
    """Pool with 18-decimal assets holding seeded_tranche."""
    pool = Pool(scale_a=SCALE, scale_b=SCALE)
    pool.add_tranche(seeded_tranche.tranche_id, seeded_tranche.target_ratio)
    pool.update_reserves(seeded_tranche.tranche_id, seeded_tranche.reserve_a, seeded_tranche.reserve_b)
    return pool


@pytest.fixture
def ledger(seeded_tranche: Tranche) -> InMemoryLedger:
    return InMemoryLedger({seeded_tranche.tranche_id: seeded_tranche.share_supply})
