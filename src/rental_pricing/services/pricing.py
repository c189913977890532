"""Pricing service for nightly rate resolution and stay breakdowns.

Pure functions: they read only their arguments and never perform I/O.
All amounts are in minor currency units (EUR cents).
"""

import datetime as dt
from collections.abc import Iterable, Iterator
from decimal import Decimal

from rental_pricing.models import (
    NightlyPrice,
    PriceBreakdown,
    PricingContext,
    PricingModel,
    PricingRule,
)
from rental_pricing.utils.logging import get_logger
from rental_pricing.utils.money import (
    apply_multiplier,
    apply_percentage,
    percent_of,
    round_cents,
)

logger = get_logger(__name__)

# Platform service fee charged on (base total + cleaning fee)
SERVICE_FEE_PERCENT = 12

_NO_TIMESTAMP = dt.datetime.min.replace(tzinfo=dt.UTC)


def _precedence(rule: PricingRule) -> tuple[int, bool, dt.datetime]:
    """Sort key: priority, then newest created_at (rules without one lose)."""
    return (rule.priority, rule.created_at is not None, rule.created_at or _NO_TIMESTAMP)


def select_rule(night: dt.date, rules: Iterable[PricingRule]) -> PricingRule | None:
    """Pick the rule that prices a night.

    Only active rules whose inclusive range contains the night compete.
    Highest priority wins; equal priorities go to the most recently
    created rule, and any remaining tie to the smallest rule id.

    Args:
        night: Calendar date of the night
        rules: Candidate pricing rules

    Returns:
        The winning rule or None when no rule matches
    """
    matches = [rule for rule in rules if rule.active and rule.covers(night)]
    if not matches:
        return None

    # sorted() is stable with reverse=True, so id order survives full ties
    by_id = sorted(matches, key=lambda rule: rule.id)
    return sorted(by_id, key=_precedence, reverse=True)[0]


def get_nightly_price_for_date(night: dt.date, context: PricingContext) -> NightlyPrice:
    """Resolve the effective price of one night.

    Args:
        night: Calendar date of the night
        context: Listing pricing context

    Returns:
        NightlyPrice with the rounded price and the applied rule name
    """
    rule = select_rule(night, context.pricing_rules)
    if rule is None:
        return NightlyPrice(date=night, price=context.base_price, applied_rule=None)

    price = round_cents(apply_multiplier(context.base_price, rule.multiplier))
    return NightlyPrice(date=night, price=price, applied_rule=rule.name)


def iter_stay_nights(start_date: dt.date, end_date: dt.date) -> Iterator[dt.date]:
    """Yield each night of the half-open range [start_date, end_date)."""
    for offset in range((end_date - start_date).days):
        yield start_date + dt.timedelta(days=offset)


def get_nightly_prices(
    start_date: dt.date,
    end_date: dt.date,
    context: PricingContext,
) -> list[NightlyPrice]:
    """Resolve every night of a stay.

    Checkout uses the per-night list to verify client-side prices.
    An empty or inverted range yields an empty list.
    """
    return [get_nightly_price_for_date(night, context) for night in iter_stay_nights(start_date, end_date)]


def calculate_service_fee(base_total: int, cleaning_fee: int) -> int:
    """Service fee on base total plus cleaning fee, rounded to the cent."""
    return round_cents(percent_of(base_total + cleaning_fee, SERVICE_FEE_PERCENT))


def calculate_price_breakdown(
    start_date: dt.date | None,
    end_date: dt.date | None,
    guests: int,
    context: PricingContext,
) -> PriceBreakdown | None:
    """Calculate the itemized price of a stay.

    per_night listings sum each resolved night (already rounded);
    per_person listings charge base price times guests; fixed listings
    charge the base price once. Cleaning and service fees are added in
    every model and the total is the sum of the rounded components.

    Args:
        start_date: Check-in date
        end_date: Check-out date (exclusive), required for per_night
        guests: Number of guests
        context: Listing pricing context

    Returns:
        PriceBreakdown, or None when the stay cannot be priced yet
        (missing start, missing end for per_night, zero or negative nights)
    """
    if start_date is None:
        return None

    applied_rules: list[str] = []

    if context.pricing_model == PricingModel.PER_NIGHT:
        if end_date is None:
            return None

        nights = (end_date - start_date).days
        if nights <= 0:
            return None

        base_total = 0
        for nightly in get_nightly_prices(start_date, end_date, context):
            base_total += nightly.price
            if nightly.applied_rule and nightly.applied_rule not in applied_rules:
                applied_rules.append(nightly.applied_rule)
    elif context.pricing_model == PricingModel.PER_PERSON:
        nights = 1
        base_total = context.base_price * guests
    else:
        nights = 1
        base_total = context.base_price

    cleaning_fee = context.cleaning_fee
    service_fee = calculate_service_fee(base_total, cleaning_fee)

    breakdown = PriceBreakdown(
        nights=nights,
        base_total=base_total,
        cleaning_fee=cleaning_fee,
        service_fee=service_fee,
        total=base_total + cleaning_fee + service_fee,
        applied_rules=applied_rules,
        currency=context.currency,
    )
    logger.debug(
        "Priced %s stay: nights=%d base_total=%d total=%d rules=%s",
        context.pricing_model.value,
        nights,
        base_total,
        breakdown.total,
        applied_rules,
    )
    return breakdown


def apply_channel_markup(
    breakdown: PriceBreakdown,
    markup_percent: int | Decimal,
) -> PriceBreakdown:
    """Apply a distribution-channel markup (or discount, when negative).

    Base total and service fee are scaled and rounded independently;
    the cleaning fee is a pass-through and stays untouched. The total is
    re-summed from the new components.

    Args:
        breakdown: Breakdown to transform
        markup_percent: Signed percentage, e.g. 15 for +15%

    Returns:
        New PriceBreakdown; the input is not modified
    """
    base_total = round_cents(apply_percentage(breakdown.base_total, markup_percent))
    service_fee = round_cents(apply_percentage(breakdown.service_fee, markup_percent))

    return PriceBreakdown(
        nights=breakdown.nights,
        base_total=base_total,
        cleaning_fee=breakdown.cleaning_fee,
        service_fee=service_fee,
        total=base_total + breakdown.cleaning_fee + service_fee,
        applied_rules=list(breakdown.applied_rules),
        currency=breakdown.currency,
    )


def get_required_minimum_nights(
    start_date: dt.date,
    end_date: dt.date,
    context: PricingContext,
) -> tuple[int, str | None]:
    """Strictest minimum stay across the listing and the rules pricing the stay.

    Returns:
        Tuple of (minimum nights, name of the rule imposing it or None)
    """
    required = context.min_nights
    source: str | None = None

    for night in iter_stay_nights(start_date, end_date):
        rule = select_rule(night, context.pricing_rules)
        if rule is not None and rule.min_nights is not None and rule.min_nights > required:
            required = rule.min_nights
            source = rule.name

    return required, source


def validate_minimum_stay(
    start_date: dt.date,
    end_date: dt.date,
    context: PricingContext,
) -> tuple[bool, str]:
    """Check if a stay meets the minimum nights requirement.

    Args:
        start_date: Check-in date
        end_date: Check-out date (exclusive)
        context: Listing pricing context

    Returns:
        Tuple of (is_valid, error_message)
    """
    nights = (end_date - start_date).days
    if nights < 1:
        return False, "Check-out must be after check-in"

    required, source = get_required_minimum_nights(start_date, end_date, context)
    if nights < required:
        during = f" during {source}" if source else ""
        return False, (
            f"Minimum stay is {required} nights{during}. "
            f"You selected {nights} nights."
        )

    return True, ""


def validate_guest_count(guests: int, context: PricingContext) -> tuple[bool, str]:
    """Check a guest count against the listing capacity.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if guests < 1:
        return False, "At least 1 guest required"
    if context.max_guests is not None and guests > context.max_guests:
        return False, f"Maximum {context.max_guests} guests allowed. You selected {guests}."
    return True, ""
