"""Additional cost, extras and city tax evaluation.

Cost definitions are stateless and attached to a listing; they are
evaluated per booking attempt into PriceLineItem rows. Charges per unit:

- stay / booking: flat amount
- night: amount * nights
- guest / participant: amount * count
- night_per_guest: amount * min(nights, max_nights) * guests

All amounts are in minor currency units.
"""

from collections.abc import Iterable, Sequence

from rental_pricing.models import (
    AdditionalCost,
    CityTaxRule,
    ExperienceAdditionalCost,
    ExperienceCostUnit,
    Extra,
    PriceLineItem,
    PropertyCostUnit,
)
from rental_pricing.utils.logging import get_logger
from rental_pricing.utils.money import format_price, multiply_cents, sum_cents

logger = get_logger(__name__)

UNIT_SUFFIXES: dict[PropertyCostUnit | ExperienceCostUnit, str] = {
    PropertyCostUnit.NIGHT: "/night",
    PropertyCostUnit.GUEST: "/guest",
    PropertyCostUnit.NIGHT_PER_GUEST: "/night/guest",
    ExperienceCostUnit.PARTICIPANT: "/participant",
}


def effective_nights(nights: int, max_nights: int | None) -> int:
    """Nights a capped cost accrues for (tourist tax stops after N nights)."""
    return min(nights, max_nights) if max_nights is not None else nights


def format_rate_detail(
    amount: int,
    per: PropertyCostUnit | ExperienceCostUnit,
    currency: str,
    max_nights: int | None = None,
) -> str | None:
    """Human-readable per-unit rate, e.g. "€3.50/night/guest (max 7 nights)".

    Flat units (stay, booking) have no detail.
    """
    suffix = UNIT_SUFFIXES.get(per)
    if suffix is None:
        return None

    detail = f"{format_price(amount, currency)}{suffix}"
    if per == PropertyCostUnit.NIGHT_PER_GUEST and max_nights is not None:
        detail += f" (max {max_nights} nights)"
    return detail


def _property_line(
    label: str,
    amount: int,
    per: PropertyCostUnit,
    max_nights: int | None,
    *,
    nights: int,
    guests: int,
    currency: str,
) -> PriceLineItem:
    if per == PropertyCostUnit.STAY:
        charged = amount
    elif per == PropertyCostUnit.NIGHT:
        charged = multiply_cents(amount, nights)
    elif per == PropertyCostUnit.GUEST:
        charged = multiply_cents(amount, guests)
    else:
        charged = multiply_cents(
            multiply_cents(amount, effective_nights(nights, max_nights)),
            guests,
        )

    return PriceLineItem(
        label=label,
        amount_cents=charged,
        detail=format_rate_detail(amount, per, currency, max_nights),
    )


def compute_property_additional_costs(
    costs: Sequence[AdditionalCost] | None,
    *,
    nights: int,
    guests: int,
    currency: str = "EUR",
) -> list[PriceLineItem]:
    """Evaluate a property's additional costs for a stay.

    Args:
        costs: Cost definitions (None or empty yields [])
        nights: Number of nights
        guests: Number of guests
        currency: Currency code used in detail strings

    Returns:
        Line items in definition order
    """
    if not costs:
        return []

    return [
        _property_line(
            cost.label,
            cost.amount,
            cost.per,
            cost.max_nights,
            nights=nights,
            guests=guests,
            currency=currency,
        )
        for cost in costs
    ]


def compute_experience_additional_costs(
    costs: Sequence[ExperienceAdditionalCost] | None,
    *,
    participants: int,
    currency: str = "EUR",
) -> list[PriceLineItem]:
    """Evaluate an experience's additional costs for a booking.

    Args:
        costs: Cost definitions (None or empty yields [])
        participants: Number of participants
        currency: Currency code used in detail strings

    Returns:
        Line items in definition order
    """
    if not costs:
        return []

    items: list[PriceLineItem] = []
    for cost in costs:
        if cost.per == ExperienceCostUnit.BOOKING:
            items.append(PriceLineItem(label=cost.label, amount_cents=cost.amount))
        else:
            items.append(
                PriceLineItem(
                    label=cost.label,
                    amount_cents=multiply_cents(cost.amount, participants),
                    detail=format_rate_detail(cost.amount, cost.per, currency),
                )
            )
    return items


def format_property_cost_preview(
    costs: Sequence[AdditionalCost] | None,
    currency: str = "EUR",
) -> list[PriceLineItem]:
    """Preview costs before dates and guests are known.

    Flat stay costs show their full amount; unit-dependent costs show a
    zero amount and the per-unit rate as detail.
    """
    if not costs:
        return []

    items: list[PriceLineItem] = []
    for cost in costs:
        if cost.per == PropertyCostUnit.STAY:
            items.append(PriceLineItem(label=cost.label, amount_cents=cost.amount))
        else:
            items.append(
                PriceLineItem(
                    label=cost.label,
                    amount_cents=0,
                    detail=format_rate_detail(cost.amount, cost.per, currency, cost.max_nights),
                )
            )
    return items


def format_experience_cost_preview(
    costs: Sequence[ExperienceAdditionalCost] | None,
    currency: str = "EUR",
) -> list[PriceLineItem]:
    """Preview experience costs before the participant count is known."""
    if not costs:
        return []

    return [
        PriceLineItem(label=cost.label, amount_cents=cost.amount)
        if cost.per == ExperienceCostUnit.BOOKING
        else PriceLineItem(
            label=cost.label,
            amount_cents=0,
            detail=format_rate_detail(cost.amount, cost.per, currency),
        )
        for cost in costs
    ]


def compute_extras_total(
    extras: Sequence[Extra] | None,
    selected_indices: Iterable[int],
    *,
    nights: int,
    guests: int,
    currency: str = "EUR",
) -> list[PriceLineItem]:
    """Evaluate the extras a guest selected at checkout.

    Each index counts once; indices that do not point at an extra are
    skipped. Items come back in ascending index order.

    Args:
        extras: Extras offered by the property
        selected_indices: Positions of the selected extras
        nights: Number of nights
        guests: Number of guests
        currency: Currency code used in detail strings

    Returns:
        Line items for the selected extras
    """
    if not extras:
        return []

    items: list[PriceLineItem] = []
    for index in sorted(set(selected_indices)):
        if not 0 <= index < len(extras):
            logger.warning("Skipping unknown extra index %d (%d extras)", index, len(extras))
            continue

        extra = extras[index]
        items.append(
            _property_line(
                extra.name,
                extra.amount,
                extra.per,
                extra.max_nights,
                nights=nights,
                guests=guests,
                currency=currency,
            )
        )
    return items


def compute_city_tax(rule: CityTaxRule | None, *, nights: int, guests: int) -> int:
    """City tax for a stay: amount * min(nights, max_nights) * guests.

    Returns 0 when the municipality has no tax configured.
    """
    if rule is None or rule.amount <= 0:
        return 0
    return multiply_cents(multiply_cents(rule.amount, effective_nights(nights, rule.max_nights)), guests)


def sum_line_items(items: Iterable[PriceLineItem]) -> int:
    """Total of evaluated line items."""
    return sum_cents(item.amount_cents for item in items)
