"""Pricing endpoints for quotes, nightly rates and channel markup.

Provides REST endpoints for:
- Itemized price quote for a stay
- Per-night prices for a date range (checkout price verification)
- Distribution-channel markup applied to an existing quote

All amounts are in EUR cents (e.g., 15000 = €150.00).
"""

from fastapi import APIRouter

from rental_pricing.models import ErrorCode, PriceBreakdown, PricingError, PricingModel
from rental_pricing.services.pricing import (
    apply_channel_markup,
    calculate_price_breakdown,
    get_nightly_prices,
    validate_guest_count,
    validate_minimum_stay,
)
from rental_pricing.utils.logging import get_logger, log_pricing_operation
from rental_pricing_api.models.pricing import (
    MarkupRequest,
    NightlyPricesRequest,
    NightlyPricesResponse,
    QuoteRequest,
)

logger = get_logger(__name__)

router = APIRouter(tags=["pricing"])


@router.post(
    "/pricing/quote",
    summary="Quote a stay",
    description="""
Calculate the itemized price of a stay for a listing.

per_night listings sum the resolved price of every night; per_person
listings charge the base price per guest; fixed listings charge the base
price once. Cleaning fee and a 12% service fee are added in every model.

**Notes:**
- Amounts are in EUR cents
- check_out is exclusive (last night is check_out - 1 day)
- The highest-priority active rule covering a night sets its price
""",
    response_description="Itemized price breakdown",
    response_model=PriceBreakdown,
    responses={
        200: {
            "description": "Stay priced successfully",
            "content": {
                "application/json": {
                    "example": {
                        "nights": 3,
                        "base_total": 34000,
                        "cleaning_fee": 2500,
                        "service_fee": 4380,
                        "total": 40880,
                        "applied_rules": ["Summer"],
                        "currency": "EUR",
                    }
                }
            },
        },
        400: {"description": "Dates incomplete or stay rules not met"},
    },
)
async def quote(request: QuoteRequest) -> PriceBreakdown:
    """Price a stay, optionally enforcing guest capacity and minimum nights."""
    context = request.context

    if request.enforce_stay_rules:
        valid, message = validate_guest_count(request.guests, context)
        if not valid:
            raise PricingError(
                ErrorCode.MAX_GUESTS_EXCEEDED,
                details={"guests": str(request.guests), "reason": message},
            )

        if (
            context.pricing_model == PricingModel.PER_NIGHT
            and request.check_in is not None
            and request.check_out is not None
            and request.check_out > request.check_in
        ):
            valid, message = validate_minimum_stay(request.check_in, request.check_out, context)
            if not valid:
                raise PricingError(
                    ErrorCode.MINIMUM_NIGHTS_NOT_MET,
                    details={"reason": message},
                )

    breakdown = calculate_price_breakdown(
        request.check_in,
        request.check_out,
        request.guests,
        context,
    )
    if breakdown is None:
        raise PricingError(ErrorCode.DATES_INCOMPLETE)

    log_pricing_operation(
        logger,
        "quote",
        asset_id=context.asset_id,
        currency=breakdown.currency,
        nights=breakdown.nights,
        total=breakdown.total,
    )
    return breakdown


@router.post(
    "/pricing/nightly",
    summary="Get nightly prices",
    description="""
Resolve the effective price of every night in [check_in, check_out).

Checkout uses this list to verify the prices shown to the guest. An
empty or inverted range yields an empty list.
""",
    response_description="Per-night prices with the applied rule",
    response_model=NightlyPricesResponse,
)
async def nightly_prices(request: NightlyPricesRequest) -> NightlyPricesResponse:
    """Per-night prices for a date range."""
    nights = get_nightly_prices(request.check_in, request.check_out, request.context)
    total = sum(night.price for night in nights)

    log_pricing_operation(
        logger,
        "nightly_prices",
        asset_id=request.context.asset_id,
        currency=request.context.currency,
        nights=len(nights),
        total=total,
    )
    return NightlyPricesResponse(
        nights=nights,
        total=total,
        currency=request.context.currency,
    )


@router.post(
    "/pricing/markup",
    summary="Apply channel markup",
    description="""
Apply a distribution-channel markup (or discount, when negative) to a
price breakdown.

Base total and service fee are scaled and rounded independently; the
cleaning fee is passed through untouched.
""",
    response_description="Marked-up price breakdown",
    response_model=PriceBreakdown,
)
async def channel_markup(request: MarkupRequest) -> PriceBreakdown:
    """Apply a signed percentage markup to a breakdown."""
    marked_up = apply_channel_markup(request.breakdown, request.markup_percent)

    log_pricing_operation(
        logger,
        "channel_markup",
        currency=marked_up.currency,
        markup_percent=str(request.markup_percent),
        total=marked_up.total,
    )
    return marked_up
