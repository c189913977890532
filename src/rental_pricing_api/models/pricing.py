"""API models for pricing endpoints.

Request bodies wrap the core pricing models with the stay parameters each
calculation needs. All amounts are in minor currency units (EUR cents).
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from rental_pricing.models import (
    AdditionalCost,
    CalendarDayPrice,
    CityTaxRule,
    ExperienceAdditionalCost,
    Extra,
    NightlyPrice,
    PaymentSplit,
    PriceBreakdown,
    PriceLineItem,
    PricingContext,
    PricingPeriod,
)

_EXAMPLE_CONTEXT = {
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
            "active": True,
        }
    ],
}


class QuoteRequest(BaseModel):
    """Price quote for a stay."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "context": _EXAMPLE_CONTEXT,
                    "check_in": "2025-07-01",
                    "check_out": "2025-07-04",
                    "guests": 2,
                }
            ]
        },
    )

    context: PricingContext
    check_in: dt.date | None = Field(default=None, description="Check-in date (YYYY-MM-DD)")
    check_out: dt.date | None = Field(
        default=None,
        description="Check-out date, exclusive; required for per_night listings",
    )
    guests: int = Field(default=1, ge=1)
    enforce_stay_rules: bool = Field(
        default=True,
        description="Reject stays below minimum nights or above max guests",
    )


class NightlyPricesRequest(BaseModel):
    """Per-night prices for a date range."""

    context: PricingContext
    check_in: dt.date
    check_out: dt.date


class NightlyPricesResponse(BaseModel):
    """Resolved price of every night in a range."""

    model_config = ConfigDict(strict=True)

    nights: list[NightlyPrice]
    total: int = Field(..., description="Sum of nightly prices")
    currency: str


class MarkupRequest(BaseModel):
    """Channel markup applied to an existing breakdown."""

    breakdown: PriceBreakdown
    markup_percent: Decimal = Field(
        ...,
        description="Signed percentage; negative values model discounts",
        examples=[15],
    )


class AdditionalCostsRequest(BaseModel):
    """Property costs, selected extras and city tax for a stay.

    Leave ``nights`` or ``guests`` unset to get a preview: flat costs at
    full amount, unit-dependent costs at zero with a per-unit rate.
    """

    additional_costs: list[AdditionalCost] = Field(default_factory=list)
    extras: list[Extra] = Field(default_factory=list)
    selected_extras: list[int] = Field(default_factory=list)
    city_tax: CityTaxRule | None = None
    nights: int | None = Field(default=None, ge=0)
    guests: int | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class AdditionalCostsResponse(BaseModel):
    """Evaluated cost lines and their totals."""

    model_config = ConfigDict(strict=True)

    preview: bool
    additional_costs: list[PriceLineItem]
    additional_costs_total: int
    extras: list[PriceLineItem]
    extras_total: int
    city_tax: int


class ExperienceCostsRequest(BaseModel):
    """Experience costs; leave ``participants`` unset for a preview."""

    additional_costs: list[ExperienceAdditionalCost] = Field(default_factory=list)
    participants: int | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class ExperienceCostsResponse(BaseModel):
    """Evaluated experience cost lines."""

    model_config = ConfigDict(strict=True)

    preview: bool
    additional_costs: list[PriceLineItem]
    additional_costs_total: int


class PaymentSplitRequest(BaseModel):
    """Checkout totals to split between platform, tax and host.

    Percentages default to the broker's configured fee and the platform
    withholding rate when omitted.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "nightly_total": 80000,
                    "additional_costs": 10000,
                    "extras": 5000,
                    "city_tax": 3000,
                    "fee_percent": 10,
                    "withholding_percent": 21,
                }
            ]
        },
    )

    nightly_total: int = Field(..., ge=0)
    additional_costs: int = Field(default=0, ge=0)
    extras: int = Field(default=0, ge=0)
    city_tax: int = Field(default=0, ge=0)
    broker_id: str | None = Field(default=None, description="Broker for fee overrides")
    fee_percent: int | None = None
    withholding_percent: int | None = None


class PaymentSplitResponse(BaseModel):
    """Payment split with the percentages that produced it."""

    model_config = ConfigDict(strict=True)

    split: PaymentSplit
    fee_percent: int
    withholding_percent: int


class ReconcileRequest(BaseModel):
    """New calendar period and the listing's current periods."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "new_period": {
                        "start_date": "2025-01-10",
                        "end_date": "2025-01-20",
                        "price": 15000,
                        "label": "Festival",
                    },
                    "existing_periods": [
                        {
                            "id": "period-jan",
                            "start_date": "2025-01-01",
                            "end_date": "2025-01-31",
                            "price": 9000,
                            "label": "January",
                        }
                    ],
                }
            ]
        },
    )

    new_period: PricingPeriod
    existing_periods: list[PricingPeriod] = Field(default_factory=list)


class CalendarPricesRequest(BaseModel):
    """Saved periods and base price to resolve over a calendar range."""

    periods: list[PricingPeriod] = Field(default_factory=list)
    base_price: int = Field(..., ge=0)
    start_date: dt.date = Field(..., description="First day shown")
    end_date: dt.date = Field(..., description="Last day shown (inclusive)")
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class CalendarPricesResponse(BaseModel):
    """Effective price of every day in the requested range."""

    model_config = ConfigDict(strict=True)

    days: list[CalendarDayPrice]
    currency: str
