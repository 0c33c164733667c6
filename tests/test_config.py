"""Tests for configuration loading and validation."""

import pytest

from booking_form.config import (
    ApiConfig,
    AppConfig,
    BookingRules,
    BusinessHours,
    _validate_config,
)


def _config(api: ApiConfig = None, hours: BusinessHours = None, horizon_months: int = 3) -> AppConfig:
    return AppConfig(
        api=api or ApiConfig(base_url="http://localhost:5000/api", timeout_sec=10.0),
        rules=BookingRules(
            hours=hours or BusinessHours(open_hour=9, close_hour=18, slot_minutes=30),
            horizon_months=horizon_months,
        ),
    )


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = _config()
        _validate_config(config)  # should not raise

    def test_invalid_base_url(self):
        with pytest.raises(ValueError, match="BOOKING_API_BASE_URL"):
            _validate_config(_config(api=ApiConfig(base_url="localhost:5000", timeout_sec=10.0)))

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="BOOKING_API_TIMEOUT"):
            _validate_config(_config(api=ApiConfig(base_url="http://x", timeout_sec=0)))

    def test_open_after_close(self):
        with pytest.raises(ValueError, match="BUSINESS_OPEN_HOUR"):
            _validate_config(_config(hours=BusinessHours(open_hour=18, close_hour=9, slot_minutes=30)))

    def test_close_hour_out_of_range(self):
        with pytest.raises(ValueError, match="BUSINESS_CLOSE_HOUR"):
            _validate_config(_config(hours=BusinessHours(open_hour=9, close_hour=25, slot_minutes=30)))

    def test_slot_interval_must_divide_hour(self):
        with pytest.raises(ValueError, match="SLOT_INTERVAL_MINUTES"):
            _validate_config(_config(hours=BusinessHours(open_hour=9, close_hour=18, slot_minutes=25)))

    def test_negative_horizon(self):
        with pytest.raises(ValueError, match="BOOKING_HORIZON_MONTHS"):
            _validate_config(_config(horizon_months=-1))


class TestEnvParsing:
    def test_safe_int_parsing(self):
        from booking_form.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_invalid(self, monkeypatch):
        from booking_form.config import _safe_int

        monkeypatch.setenv("BOOKING_TEST_INT", "nine")
        with pytest.raises(ValueError, match="BOOKING_TEST_INT"):
            _safe_int("BOOKING_TEST_INT", "9")

    def test_safe_float_parsing(self):
        from booking_form.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "2.5") == pytest.approx(2.5)

    @pytest.mark.parametrize("raw, expected", [("true", True), ("0", False), ("Yes", True), ("off", False)])
    def test_safe_bool_parsing(self, monkeypatch, raw, expected):
        from booking_form.config import _safe_bool

        monkeypatch.setenv("BOOKING_TEST_BOOL", raw)
        assert _safe_bool("BOOKING_TEST_BOOL", "true") is expected

    def test_safe_bool_invalid(self, monkeypatch):
        from booking_form.config import _safe_bool

        monkeypatch.setenv("BOOKING_TEST_BOOL", "maybe")
        with pytest.raises(ValueError, match="BOOKING_TEST_BOOL"):
            _safe_bool("BOOKING_TEST_BOOL", "true")
