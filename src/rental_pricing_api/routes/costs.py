"""Additional cost endpoints for properties and experiences.

Costs are evaluated for a concrete stay when the stay size is known,
otherwise a preview is returned: flat costs at full amount and
unit-dependent costs at zero with the per-unit rate as detail.
"""

from fastapi import APIRouter, Depends

from rental_pricing.config import PricingSettings
from rental_pricing.services.additional_costs import (
    compute_city_tax,
    compute_experience_additional_costs,
    compute_extras_total,
    compute_property_additional_costs,
    format_experience_cost_preview,
    format_property_cost_preview,
    sum_line_items,
)
from rental_pricing.utils.logging import get_logger, log_pricing_operation
from rental_pricing_api.dependencies import get_pricing_settings
from rental_pricing_api.models.pricing import (
    AdditionalCostsRequest,
    AdditionalCostsResponse,
    ExperienceCostsRequest,
    ExperienceCostsResponse,
)

logger = get_logger(__name__)

router = APIRouter(tags=["costs"])


@router.post(
    "/pricing/additional-costs",
    summary="Evaluate property costs",
    description="""
Evaluate a property's additional costs, the extras the guest selected
and the city tax for a stay.

Leave `nights` or `guests` unset to get a preview. Extras and city tax
are only charged for a concrete stay.

**Notes:**
- Amounts are in EUR cents
- Unknown extra indices are ignored; duplicates count once
""",
    response_description="Evaluated cost lines and totals",
    response_model=AdditionalCostsResponse,
)
async def additional_costs(
    request: AdditionalCostsRequest,
    settings: PricingSettings = Depends(get_pricing_settings),
) -> AdditionalCostsResponse:
    """Evaluate or preview property costs."""
    currency = request.currency or settings.default_currency

    if request.nights is None or request.guests is None:
        items = format_property_cost_preview(request.additional_costs, currency)
        return AdditionalCostsResponse(
            preview=True,
            additional_costs=items,
            additional_costs_total=sum_line_items(items),
            extras=[],
            extras_total=0,
            city_tax=0,
        )

    items = compute_property_additional_costs(
        request.additional_costs,
        nights=request.nights,
        guests=request.guests,
        currency=currency,
    )
    extras = compute_extras_total(
        request.extras,
        request.selected_extras,
        nights=request.nights,
        guests=request.guests,
        currency=currency,
    )
    city_tax = compute_city_tax(request.city_tax, nights=request.nights, guests=request.guests)

    response = AdditionalCostsResponse(
        preview=False,
        additional_costs=items,
        additional_costs_total=sum_line_items(items),
        extras=extras,
        extras_total=sum_line_items(extras),
        city_tax=city_tax,
    )
    log_pricing_operation(
        logger,
        "additional_costs",
        currency=currency,
        nights=request.nights,
        guests=request.guests,
        additional_costs_total=response.additional_costs_total,
        extras_total=response.extras_total,
        city_tax=city_tax,
    )
    return response


@router.post(
    "/pricing/experience-costs",
    summary="Evaluate experience costs",
    description="""
Evaluate an experience's additional costs for a booking.

Leave `participants` unset to get a preview.
""",
    response_description="Evaluated experience cost lines",
    response_model=ExperienceCostsResponse,
)
async def experience_costs(
    request: ExperienceCostsRequest,
    settings: PricingSettings = Depends(get_pricing_settings),
) -> ExperienceCostsResponse:
    """Evaluate or preview experience costs."""
    currency = request.currency or settings.default_currency

    if request.participants is None:
        items = format_experience_cost_preview(request.additional_costs, currency)
        preview = True
    else:
        items = compute_experience_additional_costs(
            request.additional_costs,
            participants=request.participants,
            currency=currency,
        )
        preview = False

    log_pricing_operation(
        logger,
        "experience_costs",
        currency=currency,
        participants=request.participants,
        preview=preview,
    )
    return ExperienceCostsResponse(
        preview=preview,
        additional_costs=items,
        additional_costs_total=sum_line_items(items),
    )
