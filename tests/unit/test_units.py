"""
Tests for Units module

Проверяем:
- Конверсии ether ↔ wei без потерь
- Запрет float и отрицательных сумм
- bps_of — floor-деление
- Валидацию basis points и сумм
"""

from decimal import Decimal

import pytest

from src.core.domain.units import (
    BPS,
    DAY,
    MAX_POLICY_DURATION,
    WAD,
    bps_of,
    from_wei,
    is_valid_bps,
    to_wei,
    validate_amount,
)


class TestConstants:

    def test_bps_and_wad(self):
        assert BPS == 10_000
        assert WAD == 10**18

    def test_max_policy_duration_between_observed_bounds(self):
        """7 дней допустимо, 100 дней — нет."""
        assert 7 * DAY <= MAX_POLICY_DURATION < 100 * DAY


class TestConversions:

    def test_to_wei_integer_ether(self):
        assert to_wei(100) == 100 * WAD

    def test_to_wei_fractional_string(self):
        assert to_wei("0.03") == 30_000_000_000_000_000
        assert to_wei("0.0285") == 28_500_000_000_000_000

    def test_to_wei_decimal(self):
        assert to_wei(Decimal("1.5")) == 1_500_000_000_000_000_000

    def test_to_wei_rejects_float(self):
        with pytest.raises(ValueError, match="Float"):
            to_wei(0.1)

    def test_to_wei_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            to_wei(-1)

    def test_to_wei_rejects_sub_wei_precision(self):
        with pytest.raises(ValueError, match="18 decimals"):
            to_wei("0.0000000000000000001")

    def test_from_wei_exact(self):
        assert from_wei(28_500_000_000_000_000) == Decimal("0.0285")
        assert from_wei(1) == Decimal("1E-18")

    def test_roundtrip_preserves_value(self):
        for value in ["0", "1", "99.0285", "0.000000000000000001"]:
            assert from_wei(to_wei(value)) == Decimal(value)


class TestBps:

    def test_bps_of_floors(self):
        assert bps_of(19, 500) == 0
        assert bps_of(20, 500) == 1
        assert bps_of(to_wei(1), 300) == to_wei("0.03")

    @pytest.mark.parametrize("value", [1, 300, BPS])
    def test_valid_bps(self, value):
        assert is_valid_bps(value)

    @pytest.mark.parametrize("value", [0, -1, BPS + 1, True, 5.0, "300"])
    def test_invalid_bps(self, value):
        assert not is_valid_bps(value)


class TestValidateAmount:

    def test_accepts_zero_and_positive(self):
        validate_amount(0)
        validate_amount(to_wei(1))

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            validate_amount(-5)

    @pytest.mark.parametrize("value", [1.0, True, "1"])
    def test_rejects_non_int(self, value):
        with pytest.raises(ValueError, match="integer"):
            validate_amount(value)
