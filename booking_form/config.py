"""
Centralized configuration with environment variable overrides.

Business hours, the booking window, the API address and the availability
failure policy are all configurable here. The resolver and submitter take
these values as arguments; nothing in the tools reads globals directly.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag (1/0, true/false, yes/no, on/off)."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class ApiConfig:
    """Booking backend address and HTTP settings."""

    base_url: str = os.getenv("BOOKING_API_BASE_URL", "http://localhost:5000/api")
    timeout_sec: float = _safe_float("BOOKING_API_TIMEOUT", "10.0")


@dataclass(frozen=True)
class BusinessHours:
    """Opening hours used to generate bookable slots.

    ``open_hour`` is inclusive and ``close_hour`` exclusive, so the
    defaults give half-hour marks from 09:00 through 17:30.
    """

    open_hour: int = _safe_int("BUSINESS_OPEN_HOUR", "9")
    close_hour: int = _safe_int("BUSINESS_CLOSE_HOUR", "18")
    slot_minutes: int = _safe_int("SLOT_INTERVAL_MINUTES", "30")


@dataclass(frozen=True)
class BookingRules:
    """Rules the form enforces before anything reaches the backend."""

    hours: BusinessHours = field(default_factory=BusinessHours)
    horizon_months: int = _safe_int("BOOKING_HORIZON_MONTHS", "3")
    fail_open: bool = _safe_bool("AVAILABILITY_FAIL_OPEN", "true")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    api: ApiConfig = field(default_factory=ApiConfig)
    rules: BookingRules = field(default_factory=BookingRules)
    shop_name: str = os.getenv("SHOP_NAME", "Classic Cuts Barbershop")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.api.base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"BOOKING_API_BASE_URL must be an http(s) URL, got {config.api.base_url!r}"
        )
    if config.api.timeout_sec <= 0:
        raise ValueError(
            f"BOOKING_API_TIMEOUT must be > 0, got {config.api.timeout_sec}"
        )

    hours = config.rules.hours
    for name, value in [
        ("BUSINESS_OPEN_HOUR", hours.open_hour),
        ("BUSINESS_CLOSE_HOUR", hours.close_hour),
    ]:
        if not 0 <= value <= 24:
            raise ValueError(f"{name} must be between 0 and 24, got {value}")
    if hours.open_hour >= hours.close_hour:
        raise ValueError(
            "BUSINESS_OPEN_HOUR must be before BUSINESS_CLOSE_HOUR, "
            f"got {hours.open_hour} >= {hours.close_hour}"
        )
    if hours.slot_minutes < 1 or 60 % hours.slot_minutes != 0:
        raise ValueError(
            f"SLOT_INTERVAL_MINUTES must divide an hour evenly, got {hours.slot_minutes}"
        )

    if config.rules.horizon_months < 0:
        raise ValueError(
            f"BOOKING_HORIZON_MONTHS must be >= 0, got {config.rules.horizon_months}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s' (API %s)", config.shop_name, config.api.base_url)
    return config


# Singleton instance
settings = load_config()
