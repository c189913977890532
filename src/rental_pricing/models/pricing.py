"""Pricing models: listing context, override rules and stay breakdowns.

All amounts are integers in minor currency units (EUR cents).
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import PricingModel


class PricingRule(BaseModel):
    """A date-ranged multiplier override on a listing's base nightly price.

    The range is inclusive on both ends. Multiple rules may overlap;
    the resolver picks one deterministically (see
    ``rental_pricing.services.pricing.select_rule``).
    """

    id: str = Field(..., description="Rule identifier")
    name: str = Field(..., description="Display name, reported in breakdowns")
    start_date: dt.date = Field(..., description="First covered night (inclusive)")
    end_date: dt.date = Field(..., description="Last covered night (inclusive)")
    multiplier: int = Field(
        ...,
        ge=1,
        description="Integer multiplier, 100 = 1.0x, 150 = 1.5x",
        examples=[120],
    )
    min_nights: int | None = Field(
        default=None,
        ge=1,
        description="Minimum stay while this rule applies",
    )
    priority: int = Field(default=0, description="Higher priority wins")
    active: bool = Field(default=True)
    created_at: dt.datetime | None = Field(
        default=None,
        description="Creation timestamp, breaks priority ties (newest wins)",
    )

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: dt.datetime | None) -> dt.datetime | None:
        """Treat naive timestamps as UTC so all rules compare."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value

    def covers(self, night: dt.date) -> bool:
        """Check whether the rule's inclusive range contains a night."""
        return self.start_date <= night <= self.end_date


class PricingContext(BaseModel):
    """Per-listing pricing configuration, read-only to the engine."""

    asset_id: str | None = None
    pricing_model: PricingModel = PricingModel.PER_NIGHT
    base_price: int = Field(..., ge=0, description="Base price in minor units")
    cleaning_fee: int = Field(default=0, ge=0, description="Flat cleaning fee")
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    max_guests: int | None = Field(default=None, ge=1, description="Guest capacity, None for no limit")
    min_nights: int = Field(default=1, ge=1)
    pricing_rules: list[PricingRule] = Field(default_factory=list)


class NightlyPrice(BaseModel):
    """Resolved price for a single night."""

    model_config = ConfigDict(strict=True)

    date: dt.date | None = None
    price: int
    applied_rule: str | None = None


class PriceBreakdown(BaseModel):
    """Itemized price of a stay.

    ``base_total + cleaning_fee + service_fee == total`` always holds;
    the total is built by adding already-rounded components.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "nights": 3,
                    "base_total": 34000,
                    "cleaning_fee": 2500,
                    "service_fee": 4380,
                    "total": 40880,
                    "applied_rules": ["Summer"],
                    "currency": "EUR",
                }
            ]
        },
    )

    nights: int = Field(..., ge=0)
    base_total: int
    cleaning_fee: int
    service_fee: int
    total: int
    applied_rules: list[str] = Field(default_factory=list)
    currency: str

    @model_validator(mode="after")
    def check_total(self) -> "PriceBreakdown":
        """Reject breakdowns whose components do not sum to the total."""
        expected = self.base_total + self.cleaning_fee + self.service_fee
        if self.total != expected:
            raise ValueError(
                f"total {self.total} does not equal components sum {expected}"
            )
        return self
