"""API request and response models."""

from .pricing import (
    AdditionalCostsRequest,
    AdditionalCostsResponse,
    CalendarPricesRequest,
    CalendarPricesResponse,
    ExperienceCostsRequest,
    ExperienceCostsResponse,
    MarkupRequest,
    NightlyPricesRequest,
    NightlyPricesResponse,
    PaymentSplitRequest,
    PaymentSplitResponse,
    QuoteRequest,
    ReconcileRequest,
)

__all__ = [
    "AdditionalCostsRequest",
    "AdditionalCostsResponse",
    "CalendarPricesRequest",
    "CalendarPricesResponse",
    "ExperienceCostsRequest",
    "ExperienceCostsResponse",
    "MarkupRequest",
    "NightlyPricesRequest",
    "NightlyPricesResponse",
    "PaymentSplitRequest",
    "PaymentSplitResponse",
    "QuoteRequest",
    "ReconcileRequest",
]
