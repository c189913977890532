"""Additional cost, extra and city tax definitions plus evaluated line items."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ExperienceCostUnit, PropertyCostUnit


class AdditionalCost(BaseModel):
    """Mandatory cost attached to a property (linen, final cleaning, tourist tax)."""

    label: str
    amount: int = Field(..., ge=0, description="Amount per unit in minor units")
    per: PropertyCostUnit
    max_nights: int | None = Field(
        default=None,
        ge=1,
        description="Night cap for night_per_guest costs (tourist tax rules)",
    )


class ExperienceAdditionalCost(BaseModel):
    """Mandatory cost attached to an experience."""

    label: str
    amount: int = Field(..., ge=0)
    per: ExperienceCostUnit


class Extra(BaseModel):
    """Optional service a guest can select at checkout (transfer, breakfast)."""

    name: str
    amount: int = Field(..., ge=0)
    per: PropertyCostUnit
    max_nights: int | None = Field(default=None, ge=1)


class CityTaxRule(BaseModel):
    """Municipal tourist tax charged per night per guest, optionally capped."""

    amount: int = Field(..., ge=0, description="Tax per night per guest")
    max_nights: int | None = Field(default=None, ge=1)


class PriceLineItem(BaseModel):
    """One evaluated cost line shown to the guest."""

    model_config = ConfigDict(strict=True)

    label: str
    amount_cents: int
    detail: str | None = None
