"""Tests for cross-asset valuation."""

import pytest

from tests.helpers import RATE_1800, RATIO_30_70
from tranche_engine.math.fixed_point import SCALE
from tranche_engine.valuation import (
    InvalidRateError,
    convert_a_to_b,
    convert_b_to_a,
    token_a_for_token_b,
    token_b_for_token_a,
    total_a,
    total_b,
    validate_rate,
)

USDC_SCALE = 10**6


class TestTotals:
    """Value of an A/B pair in a single asset."""

    def test_total_a(self):
        assert total_a(3 * 10**17, 1260 * SCALE, RATE_1800, SCALE, SCALE) == SCALE

    def test_total_b(self):
        assert total_b(3 * 10**17, 1260 * SCALE, RATE_1800, SCALE, SCALE) == 1800 * SCALE

    def test_total_a_with_six_decimal_b(self):
        assert total_a(0, 1800 * USDC_SCALE, RATE_1800, SCALE, USDC_SCALE) == SCALE

    def test_conversions(self):
        assert convert_a_to_b(SCALE, RATE_1800, SCALE, USDC_SCALE) == 1800 * USDC_SCALE
        assert convert_b_to_a(1800 * USDC_SCALE, RATE_1800, SCALE, USDC_SCALE) == SCALE


class TestRatioConversions:
    """Amounts implied by a target ratio."""

    def test_token_a_for_token_b(self):
        # 1260 B at 30/70 calls for 0.3 A (truncated by one unit)
        amount_a = token_a_for_token_b(1260 * SCALE, RATIO_30_70, RATE_1800, SCALE, SCALE)
        assert amount_a == 3 * 10**17 - 1

    def test_token_b_for_token_a(self):
        amount_b = token_b_for_token_a(3 * 10**17, RATIO_30_70, RATE_1800, SCALE, SCALE)
        assert abs(amount_b - 1260 * SCALE) < 10**6


class TestRateValidation:
    """Zero, negative or non-integer rates fail fast."""

    def test_valid(self):
        assert validate_rate(RATE_1800) == RATE_1800

    @pytest.mark.parametrize("rate", [0, -1, 1.5, True, "1800"])
    def test_invalid(self, rate):
        with pytest.raises(InvalidRateError):
            validate_rate(rate)

    def test_invalid_rate_is_value_error(self):
        assert issubclass(InvalidRateError, ValueError)

    def test_total_a_rejects_zero_rate(self):
        with pytest.raises(InvalidRateError):
            total_a(1, 1, 0, SCALE, SCALE)
