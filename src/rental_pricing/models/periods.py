"""Calendar pricing periods authored in the admin calendar editor."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rental_pricing.utils.money import apply_percentage, round_cents


class PricingPeriod(BaseModel):
    """A calendar override: absolute price or percentage over the base price.

    ``id`` is None for periods that have not been persisted yet (the new
    period in a reconcile plan, or the head part of a split period).
    The set of persisted periods of a listing must never overlap.
    """

    id: str | None = None
    start_date: dt.date = Field(..., description="First night (inclusive)")
    end_date: dt.date = Field(..., description="Last night (inclusive)")
    price: int | None = Field(default=None, ge=0, description="Absolute nightly price")
    percentage_adjustment: int | None = Field(
        default=None,
        description="Signed percentage relative to base price (-10 = 10% off)",
    )
    label: str | None = None

    @model_validator(mode="after")
    def check_price_source(self) -> "PricingPeriod":
        """Require an absolute price or a percentage adjustment."""
        if self.price is None and self.percentage_adjustment is None:
            raise ValueError("price or percentage_adjustment is required")
        return self

    def overlaps(self, other: "PricingPeriod") -> bool:
        """Check whether two inclusive date ranges share at least one day."""
        return not (self.end_date < other.start_date or self.start_date > other.end_date)

    def contains(self, night: dt.date) -> bool:
        return self.start_date <= night <= self.end_date

    def effective_price(self, base_price: int) -> int:
        """Nightly price this period implies for a listing's base price."""
        if self.price is not None:
            return self.price
        return round_cents(apply_percentage(base_price, self.percentage_adjustment or 0))


class ReconcilePlan(BaseModel):
    """Operations that insert a new period without leaving overlaps.

    Apply in order: delete, update, add.
    """

    model_config = ConfigDict(strict=True)

    to_add: list[PricingPeriod] = Field(default_factory=list)
    to_update: list[PricingPeriod] = Field(default_factory=list)
    to_delete: list[str | None] = Field(default_factory=list)


class CalendarDayPrice(BaseModel):
    """Effective price of one calendar day, as the admin calendar shows it."""

    model_config = ConfigDict(strict=True)

    date: dt.date
    price: int
    multiplier: int = Field(..., description="Price relative to base price, 100 = 1.0x")
    period_id: str | None = None
    label: str | None = None
