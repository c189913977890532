"""Payment split endpoint.

Decomposes a checkout total into platform fee, withholding tax and host
payout. The fee percentage comes from the request, the broker's
configured override, or the platform default, in that order.
"""

from fastapi import APIRouter, Depends

from rental_pricing.config import PricingSettings
from rental_pricing.models import ErrorCode, PricingError
from rental_pricing.services.payment_split import (
    compute_payment_split,
    resolve_application_fee_percent,
)
from rental_pricing.utils.logging import get_logger, log_pricing_operation
from rental_pricing_api.dependencies import get_pricing_settings
from rental_pricing_api.models.pricing import PaymentSplitRequest, PaymentSplitResponse

logger = get_logger(__name__)

router = APIRouter(tags=["payments"])


def _check_percent(name: str, value: int) -> None:
    if not 0 <= value <= 100:
        raise PricingError(
            ErrorCode.PERCENT_OUT_OF_RANGE,
            details={"field": name, "value": str(value)},
        )


@router.post(
    "/pricing/split",
    summary="Split a payment",
    description="""
Split a guest payment between the platform, withholding tax and host.

Platform fee and withholding are charged on nightly total plus
additional costs; extras and city tax pass through to the host.

**Notes:**
- Amounts are in EUR cents
- application_fee + host_payout always equals guest_total
""",
    response_description="Payment split and the percentages used",
    response_model=PaymentSplitResponse,
    responses={
        200: {
            "description": "Payment split computed",
            "content": {
                "application/json": {
                    "example": {
                        "split": {
                            "taxable_base": 90000,
                            "platform_fee": 9000,
                            "withholding_tax": 18900,
                            "application_fee": 27900,
                            "guest_total": 98000,
                            "host_payout": 70100,
                        },
                        "fee_percent": 10,
                        "withholding_percent": 21,
                    }
                }
            },
        },
        400: {"description": "Percentage outside 0..100"},
    },
)
async def payment_split(
    request: PaymentSplitRequest,
    settings: PricingSettings = Depends(get_pricing_settings),
) -> PaymentSplitResponse:
    """Compute the payment split for a checkout."""
    if request.fee_percent is not None:
        fee_percent = request.fee_percent
    else:
        fee_percent = resolve_application_fee_percent(
            request.broker_id,
            settings.broker_fee_overrides,
            settings.application_fee_percent,
        )
    withholding_percent = (
        request.withholding_percent
        if request.withholding_percent is not None
        else settings.withholding_percent
    )

    _check_percent("fee_percent", fee_percent)
    _check_percent("withholding_percent", withholding_percent)

    split = compute_payment_split(
        nightly_total=request.nightly_total,
        additional_costs=request.additional_costs,
        extras=request.extras,
        city_tax=request.city_tax,
        fee_percent=fee_percent,
        withholding_percent=withholding_percent,
    )

    log_pricing_operation(
        logger,
        "payment_split",
        currency=settings.default_currency,
        broker_id=request.broker_id,
        fee_percent=fee_percent,
        guest_total=split.guest_total,
        host_payout=split.host_payout,
    )
    return PaymentSplitResponse(
        split=split,
        fee_percent=fee_percent,
        withholding_percent=withholding_percent,
    )
