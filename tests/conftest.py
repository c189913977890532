"""Pytest configuration and fixtures for rental pricing tests.

This module provides reusable fixtures for testing:
- Settings cache reset around every test
- Sample pricing contexts and rules
- Sample additional costs, extras and pricing periods
"""

import datetime as dt
import os
from typing import Generator

import pytest

# === Environment Setup ===

# Pin settings the API reads at import time
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("PRICING_DEFAULT_CURRENCY", "EUR")


# === Settings Fixtures ===


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset cached settings before and after each test.

    Tests that patch environment variables get a fresh PricingSettings
    instead of one cached by a previous test.
    """
    from rental_pricing.config import reset_settings

    reset_settings()
    yield
    reset_settings()


# === Pricing Fixtures ===


@pytest.fixture
def summer_rule():
    """Summer rule: +20% from July 2 through August 31."""
    from rental_pricing.models import PricingRule

    return PricingRule(
        id="rule-summer",
        name="Summer",
        start_date=dt.date(2025, 7, 2),
        end_date=dt.date(2025, 8, 31),
        multiplier=120,
        priority=10,
    )


@pytest.fixture
def per_night_context(summer_rule):
    """Apartment priced per night: €100 base, €25 cleaning."""
    from rental_pricing.models import PricingContext, PricingModel

    return PricingContext(
        asset_id="apt-101",
        pricing_model=PricingModel.PER_NIGHT,
        base_price=10000,
        cleaning_fee=2500,
        currency="EUR",
        max_guests=4,
        min_nights=1,
        pricing_rules=[summer_rule],
    )


@pytest.fixture
def per_night_context_payload() -> dict:
    """JSON payload for the per-night apartment context."""
    return {
        "asset_id": "apt-101",
        "pricing_model": "per_night",
        "base_price": 10000,
        "cleaning_fee": 2500,
        "currency": "EUR",
        "max_guests": 4,
        "min_nights": 1,
        "pricing_rules": [
            {
                "id": "rule-summer",
                "name": "Summer",
                "start_date": "2025-07-02",
                "end_date": "2025-08-31",
                "multiplier": 120,
                "priority": 10,
            }
        ],
    }


# === Cost Fixtures ===


@pytest.fixture
def property_costs():
    """One cost per property unit, tourist tax capped at 7 nights."""
    from rental_pricing.models import AdditionalCost, PropertyCostUnit

    return [
        AdditionalCost(label="Linen", amount=1500, per=PropertyCostUnit.STAY),
        AdditionalCost(label="Heating", amount=300, per=PropertyCostUnit.NIGHT),
        AdditionalCost(label="Towels", amount=500, per=PropertyCostUnit.GUEST),
        AdditionalCost(
            label="Tourist tax",
            amount=350,
            per=PropertyCostUnit.NIGHT_PER_GUEST,
            max_nights=7,
        ),
    ]


@pytest.fixture
def property_extras():
    """Optional extras offered at checkout."""
    from rental_pricing.models import Extra, PropertyCostUnit

    return [
        Extra(name="Airport transfer", amount=4000, per=PropertyCostUnit.STAY),
        Extra(name="Breakfast", amount=1000, per=PropertyCostUnit.GUEST),
    ]


# === Period Fixtures ===


@pytest.fixture
def january_period():
    """Persisted period covering all of January 2025."""
    from rental_pricing.models import PricingPeriod

    return PricingPeriod(
        id="period-jan",
        start_date=dt.date(2025, 1, 1),
        end_date=dt.date(2025, 1, 31),
        price=9000,
        label="January",
    )
