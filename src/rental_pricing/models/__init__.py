"""Pydantic models for rental pricing data entities."""

from .costs import (
    AdditionalCost,
    CityTaxRule,
    ExperienceAdditionalCost,
    Extra,
    PriceLineItem,
)
from .enums import ExperienceCostUnit, PricingModel, PropertyCostUnit
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    ErrorCode,
    ErrorResponse,
    PricingError,
)
from .payment import PaymentSplit
from .periods import CalendarDayPrice, PricingPeriod, ReconcilePlan
from .pricing import NightlyPrice, PriceBreakdown, PricingContext, PricingRule

__all__ = [
    # Enums
    "ExperienceCostUnit",
    "PricingModel",
    "PropertyCostUnit",
    # Pricing
    "NightlyPrice",
    "PriceBreakdown",
    "PricingContext",
    "PricingRule",
    # Costs
    "AdditionalCost",
    "CityTaxRule",
    "ExperienceAdditionalCost",
    "Extra",
    "PriceLineItem",
    # Payment
    "PaymentSplit",
    # Periods
    "CalendarDayPrice",
    "PricingPeriod",
    "ReconcilePlan",
    # Errors
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ErrorCode",
    "ErrorResponse",
    "PricingError",
]
