"""Tests for fixed-point primitives."""

import math
from decimal import Decimal

import pytest

from tranche_engine.math.fixed_point import MAX_RATIO, SCALE, abs_diff, from_fixed, sqrt, to_fixed
from tranche_engine.safe_int import UINT256_MAX


class TestSqrt:
    """Tests for integer square root."""

    def test_small_values(self):
        assert sqrt(0) == 0
        assert sqrt(1) == 1
        assert sqrt(2) == 1
        assert sqrt(3) == 1
        assert sqrt(4) == 2
        assert sqrt(15) == 3
        assert sqrt(16) == 4

    def test_perfect_squares(self):
        for root in (10**9, 10**18, 2**100 + 7):
            assert sqrt(root * root) == root
            assert sqrt(root * root - 1) == root - 1

    def test_matches_isqrt(self):
        """Floor root agrees with math.isqrt across magnitudes."""
        for x in (5, 99, 10**18 + 12345, 3 * 10**36 + 1, UINT256_MAX):
            assert sqrt(x) == math.isqrt(x)

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            sqrt(-1)


class TestAbsDiff:
    def test_symmetric(self):
        assert abs_diff(10, 3) == 7
        assert abs_diff(3, 10) == 7
        assert abs_diff(0, 0) == 0


class TestConversions:
    """Tests for decimal <-> fixed-point conversion."""

    def test_to_fixed(self):
        assert to_fixed("1") == SCALE
        assert to_fixed("0.005") == 5 * 10**15
        assert to_fixed(Decimal("1.03")) == 103 * 10**16
        assert to_fixed(2) == 2 * SCALE

    def test_to_fixed_rounds_half_up(self):
        assert to_fixed("0.0000000000000000005") == 1
        assert to_fixed("0.0000000000000000004") == 0

    def test_to_fixed_rejects_invalid(self):
        with pytest.raises(ValueError):
            to_fixed("-0.1")
        with pytest.raises(ValueError):
            to_fixed("abc")
        with pytest.raises(ValueError):
            to_fixed("Infinity")

    def test_from_fixed(self):
        assert from_fixed(15 * 10**17) == Decimal("1.5")

    def test_max_ratio_is_uint256_max(self):
        assert MAX_RATIO == UINT256_MAX
