"""Calendar pricing period endpoints.

Provides REST endpoints for:
- Planning the delete/update/add operations that insert a new pricing
  period into a listing's calendar without leaving overlaps
- Resolving the effective price of each calendar day from saved periods

Both endpoints are stateless: the caller supplies and persists periods.
"""

from fastapi import APIRouter, Depends

from rental_pricing.config import PricingSettings
from rental_pricing.models import ReconcilePlan
from rental_pricing.services.reconciliation import (
    get_calendar_prices,
    reconcile_pricing_periods,
    validate_reconcile_input,
)
from rental_pricing.utils.logging import get_logger, log_pricing_operation
from rental_pricing_api.dependencies import get_pricing_settings
from rental_pricing_api.models.pricing import (
    CalendarPricesRequest,
    CalendarPricesResponse,
    ReconcileRequest,
)

logger = get_logger(__name__)

router = APIRouter(tags=["periods"])


@router.post(
    "/pricing/periods/reconcile",
    summary="Reconcile pricing periods",
    description="""
Compute the plan that inserts a new pricing period.

The new period always wins: covered periods are deleted, partially
overlapped periods are trimmed, and a period strictly containing the new
one is split into a head (added without id) and a tail (updated).

**Notes:**
- Dates are inclusive
- `to_add[0]` is always the new period
- Apply the plan in order: delete, update, add
""",
    response_description="Reconciliation plan",
    response_model=ReconcilePlan,
    responses={
        400: {"description": "New period ends before it starts, or an existing period has no id"},
        409: {"description": "Existing periods already overlap"},
    },
)
async def reconcile_periods(request: ReconcileRequest) -> ReconcilePlan:
    """Plan the insertion of a new pricing period."""
    validate_reconcile_input(request.new_period, request.existing_periods)
    plan = reconcile_pricing_periods(request.new_period, request.existing_periods)

    log_pricing_operation(
        logger,
        "reconcile_periods",
        start_date=request.new_period.start_date.isoformat(),
        end_date=request.new_period.end_date.isoformat(),
        added=len(plan.to_add),
        updated=len(plan.to_update),
        deleted=len(plan.to_delete),
    )
    return plan


@router.post(
    "/pricing/periods/calendar",
    summary="Get calendar prices",
    description="""
Resolve the effective price of every day in [start_date, end_date].

The first saved period containing a day sets its price (absolute, or a
percentage over the base price); days outside every period use the base
price.

**Notes:**
- Amounts are in EUR cents
- Dates are inclusive
- `multiplier` is the day's price relative to the base price (100 = 1.0x)
""",
    response_description="Per-day effective prices",
    response_model=CalendarPricesResponse,
)
async def calendar_prices(
    request: CalendarPricesRequest,
    settings: PricingSettings = Depends(get_pricing_settings),
) -> CalendarPricesResponse:
    """Per-day prices for the admin calendar."""
    currency = request.currency or settings.default_currency
    days = get_calendar_prices(
        request.start_date,
        request.end_date,
        request.periods,
        request.base_price,
    )

    log_pricing_operation(
        logger,
        "calendar_prices",
        currency=currency,
        start_date=request.start_date.isoformat(),
        end_date=request.end_date.isoformat(),
        days=len(days),
    )
    return CalendarPricesResponse(days=days, currency=currency)
