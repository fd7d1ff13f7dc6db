"""Tests for shared model types."""

import pytest

from tranche_engine.models import Asset, Direction, PoolDelta, RebalancePlan, TrancheDelta
from tranche_engine.models.types import validate_fixed_point, validate_uint256
from tranche_engine.safe_int import UINT256_MAX


class TestValidators:
    def test_uint256_accepts_int_and_str(self):
        assert validate_uint256(5) == 5
        assert validate_uint256("123") == 123
        assert validate_uint256(UINT256_MAX) == UINT256_MAX

    @pytest.mark.parametrize("value", [-1, UINT256_MAX + 1, "1.5", 1.5, True])
    def test_uint256_rejects(self, value):
        with pytest.raises(ValueError):
            validate_uint256(value)

    def test_fixed_point_scales_strings(self):
        assert validate_fixed_point("1.03") == 103 * 10**16
        assert validate_fixed_point(7) == 7


class TestDeltas:
    def test_balanced_tranche_delta(self):
        d = TrancheDelta.balanced()
        assert (d.delta_a, d.delta_b, d.r_div) == (0, 0, 0)
        assert d.direction is Direction.BALANCED

    def test_pool_delta_actionable(self):
        assert PoolDelta(1, 1, Direction.NEED_MORE_A, 1).is_actionable
        assert not PoolDelta(0, 0, Direction.BALANCED, 0).is_actionable


class TestRebalancePlan:
    """Plan reports the owed asset as amount_in."""

    def test_need_more_b(self):
        plan = RebalancePlan(Direction.NEED_MORE_B, delta_a=3, delta_b=5400, r_div=1, rate=1, timestamp=0)
        assert plan.asset_in is Asset.B
        assert plan.amount_in == 5400
        assert plan.asset_out is Asset.A
        assert plan.amount_out == 3

    def test_need_more_a(self):
        plan = RebalancePlan(Direction.NEED_MORE_A, delta_a=3, delta_b=5400, r_div=1, rate=1, timestamp=0)
        assert plan.asset_in is Asset.A
        assert plan.amount_in == 3
        assert plan.asset_out is Asset.B
        assert plan.amount_out == 5400
