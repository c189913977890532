"""Environment-driven settings for the pricing engine and its HTTP adapter.

Settings are read once per process and cached. Tests call
``reset_settings()`` after changing environment variables.

Environment variables:
    PRICING_DEFAULT_CURRENCY: Currency assumed when a request omits one
    PRICING_APPLICATION_FEE_PERCENT: Platform fee for brokers without override
    PRICING_WITHHOLDING_PERCENT: Withholding tax percentage
    PRICING_BROKER_FEE_OVERRIDES: JSON object of broker id -> fee percent
    PRICING_CORS_ORIGINS: Comma-separated allowed origins for the API
    LOG_LEVEL: Root log level
"""

import json
import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel, Field, ValidationError

from rental_pricing.services.payment_split import (
    DEFAULT_APPLICATION_FEE_PERCENT,
    DEFAULT_WITHHOLDING_PERCENT,
)
from rental_pricing.utils.logging import get_logger

logger = get_logger(__name__)


class SettingsError(Exception):
    """Raised when environment configuration cannot be parsed."""

    pass


class PricingSettings(BaseModel):
    """Pricing configuration."""

    default_currency: str = Field(default="EUR", min_length=3, max_length=3)
    application_fee_percent: int = Field(default=DEFAULT_APPLICATION_FEE_PERCENT, ge=0, le=100)
    withholding_percent: int = Field(default=DEFAULT_WITHHOLDING_PERCENT, ge=0, le=100)
    broker_fee_overrides: dict[str, int] = Field(default_factory=dict)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PricingSettings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            PricingSettings with defaults for unset variables

        Raises:
            SettingsError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if "PRICING_DEFAULT_CURRENCY" in env:
            values["default_currency"] = env["PRICING_DEFAULT_CURRENCY"].upper()
        if "PRICING_APPLICATION_FEE_PERCENT" in env:
            values["application_fee_percent"] = env["PRICING_APPLICATION_FEE_PERCENT"]
        if "PRICING_WITHHOLDING_PERCENT" in env:
            values["withholding_percent"] = env["PRICING_WITHHOLDING_PERCENT"]
        if "PRICING_BROKER_FEE_OVERRIDES" in env:
            try:
                values["broker_fee_overrides"] = json.loads(env["PRICING_BROKER_FEE_OVERRIDES"])
            except json.JSONDecodeError as e:
                raise SettingsError(
                    f"PRICING_BROKER_FEE_OVERRIDES is not valid JSON: {e}"
                ) from e
        if "PRICING_CORS_ORIGINS" in env:
            values["cors_origins"] = [
                origin.strip()
                for origin in env["PRICING_CORS_ORIGINS"].split(",")
                if origin.strip()
            ]
        if "LOG_LEVEL" in env:
            values["log_level"] = env["LOG_LEVEL"].upper()

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise SettingsError(f"Invalid pricing settings: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> PricingSettings:
    """Get the process-wide settings (read from the environment once)."""
    settings = PricingSettings.from_env()
    logger.debug(
        "Loaded pricing settings: currency=%s fee=%d%% withholding=%d%% overrides=%d",
        settings.default_currency,
        settings.application_fee_percent,
        settings.withholding_percent,
        len(settings.broker_fee_overrides),
    )
    return settings


def reset_settings() -> None:
    """Clear cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
