"""Reconciliation of admin-authored calendar pricing periods.

A listing's pricing periods must never overlap. When an admin saves a
new period, ``reconcile_pricing_periods`` computes the plan that makes
room for it; the new period always wins. For every existing period:

- no overlap: untouched
- covered by the new period: deleted
- strictly containing the new period: split; the head part is added as
  a new period and the original keeps the tail
- overlapped at its head: start moves to the day after the new end
- overlapped at its tail: end moves to the day before the new start

Ranges are inclusive calendar dates; trimming is whole-day arithmetic.
The plan is pure data; applying it (delete, update, add) belongs to the
persistence layer.

The calendar lookups resolve a day against a saved period set: the
first period containing the day sets its price, otherwise the listing's
base price applies.
"""

import datetime as dt
import uuid
from collections.abc import Callable, Sequence

from rental_pricing.models import (
    CalendarDayPrice,
    ErrorCode,
    PricingError,
    PricingPeriod,
    ReconcilePlan,
)
from rental_pricing.utils.logging import get_logger
from rental_pricing.utils.money import compute_multiplier

logger = get_logger(__name__)

ONE_DAY = dt.timedelta(days=1)


def reconcile_pricing_periods(
    new_period: PricingPeriod,
    existing_periods: Sequence[PricingPeriod],
) -> ReconcilePlan:
    """Plan the operations that insert a new period without overlaps.

    Args:
        new_period: Period being saved (end on or after start)
        existing_periods: Current, mutually non-overlapping periods

    Returns:
        ReconcilePlan; ``to_add[0]`` is always the new period
    """
    to_add: list[PricingPeriod] = [new_period]
    to_update: list[PricingPeriod] = []
    to_delete: list[str | None] = []

    new_start = new_period.start_date
    new_end = new_period.end_date

    for existing in existing_periods:
        ex_start = existing.start_date
        ex_end = existing.end_date

        if new_end < ex_start or new_start > ex_end:
            continue

        if new_start <= ex_start and new_end >= ex_end:
            to_delete.append(existing.id)
        elif ex_start < new_start and ex_end > new_end:
            to_add.append(
                existing.model_copy(update={"id": None, "end_date": new_start - ONE_DAY})
            )
            to_update.append(existing.model_copy(update={"start_date": new_end + ONE_DAY}))
        elif new_start <= ex_start:
            to_update.append(existing.model_copy(update={"start_date": new_end + ONE_DAY}))
        else:
            to_update.append(existing.model_copy(update={"end_date": new_start - ONE_DAY}))

    logger.debug(
        "Reconciled period %s..%s: add=%d update=%d delete=%d",
        new_start,
        new_end,
        len(to_add),
        len(to_update),
        len(to_delete),
    )
    return ReconcilePlan(to_add=to_add, to_update=to_update, to_delete=to_delete)


def _new_period_id() -> str:
    return str(uuid.uuid4())


def _require_period_ids(periods: Sequence[PricingPeriod]) -> None:
    for index, period in enumerate(periods):
        if period.id is None:
            raise PricingError(
                ErrorCode.PERIOD_ID_MISSING,
                details={"index": str(index), "start_date": period.start_date.isoformat()},
            )


def apply_reconcile_plan(
    periods: Sequence[PricingPeriod],
    plan: ReconcilePlan,
    id_factory: Callable[[], str] = _new_period_id,
) -> list[PricingPeriod]:
    """Apply a plan to an in-memory snapshot: delete, then update, then add.

    Added periods without an id get one from ``id_factory``.

    Returns:
        New list of periods sorted by start date

    Raises:
        PricingError: PERIOD_ID_MISSING when a snapshot period has no id
    """
    _require_period_ids(periods)

    deleted = set(plan.to_delete)
    by_id = {period.id: period for period in periods if period.id not in deleted}

    for updated in plan.to_update:
        by_id[updated.id] = updated

    result = list(by_id.values())
    for added in plan.to_add:
        result.append(added if added.id is not None else added.model_copy(update={"id": id_factory()}))

    return sorted(result, key=lambda period: (period.start_date, period.end_date))


def find_overlapping_periods(
    periods: Sequence[PricingPeriod],
) -> list[tuple[PricingPeriod, PricingPeriod]]:
    """Return every pair of periods that share at least one day."""
    ordered = sorted(periods, key=lambda period: (period.start_date, period.end_date))
    overlaps: list[tuple[PricingPeriod, PricingPeriod]] = []

    for i, current in enumerate(ordered):
        for other in ordered[i + 1 :]:
            if other.start_date > current.end_date:
                break
            overlaps.append((current, other))

    return overlaps


def get_period_for_date(
    night: dt.date,
    periods: Sequence[PricingPeriod],
) -> PricingPeriod | None:
    """Return the first period whose inclusive range contains a night."""
    for period in periods:
        if period.contains(night):
            return period
    return None


def get_effective_price_for_date(
    night: dt.date,
    periods: Sequence[PricingPeriod],
    base_price: int,
) -> int:
    """Nightly price from the covering period, or the base price."""
    period = get_period_for_date(night, periods)
    if period is None:
        return base_price
    return period.effective_price(base_price)


def get_calendar_prices(
    start_date: dt.date,
    end_date: dt.date,
    periods: Sequence[PricingPeriod],
    base_price: int,
) -> list[CalendarDayPrice]:
    """Effective price of every day in the inclusive range [start_date, end_date].

    Args:
        start_date: First day shown
        end_date: Last day shown (inclusive)
        periods: Saved pricing periods of the listing
        base_price: Listing base price in minor units

    Returns:
        One CalendarDayPrice per day; empty when the range is inverted
    """
    days: list[CalendarDayPrice] = []
    day = start_date
    while day <= end_date:
        period = get_period_for_date(day, periods)
        price = get_effective_price_for_date(day, periods, base_price)
        days.append(
            CalendarDayPrice(
                date=day,
                price=price,
                multiplier=compute_multiplier(price, base_price),
                period_id=period.id if period else None,
                label=period.label if period else None,
            )
        )
        day += ONE_DAY
    return days


def validate_reconcile_input(
    new_period: PricingPeriod,
    existing_periods: Sequence[PricingPeriod],
) -> None:
    """Check the reconciler's preconditions before invoking it.

    Raises:
        PricingError: INVALID_PERIOD_RANGE when the new period ends before
            it starts, PERIOD_ID_MISSING when an existing period was never
            saved, OVERLAPPING_PERIODS when the existing set overlaps
    """
    if new_period.end_date < new_period.start_date:
        raise PricingError(
            ErrorCode.INVALID_PERIOD_RANGE,
            details={
                "start_date": new_period.start_date.isoformat(),
                "end_date": new_period.end_date.isoformat(),
            },
        )

    _require_period_ids(existing_periods)

    overlaps = find_overlapping_periods(existing_periods)
    if overlaps:
        first, second = overlaps[0]
        raise PricingError(
            ErrorCode.OVERLAPPING_PERIODS,
            details={"first": str(first.id), "second": str(second.id)},
        )
