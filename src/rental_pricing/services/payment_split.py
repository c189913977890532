"""Revenue split between platform, withholding tax and host.

Implements the checkout payment split:
- Taxable base = nightly total + additional costs
- Platform fee = round(taxable base * fee% / 100)
- Withholding tax = round(taxable base * withholding% / 100)
- Application fee = platform fee + withholding tax
- Guest total = nightly + additional costs + extras + city tax
- Host payout = guest total - application fee

Extras and city tax are collected on behalf of the host/municipality and
are excluded from fee and withholding. All amounts are in minor units.
"""

from collections.abc import Mapping
from decimal import Decimal

from rental_pricing.models import PaymentSplit
from rental_pricing.utils.logging import get_logger
from rental_pricing.utils.money import percent_of, round_cents

logger = get_logger(__name__)

# Platform fee when a broker has no override
DEFAULT_APPLICATION_FEE_PERCENT = 10

# Italian short-term rental withholding (cedolare secca)
DEFAULT_WITHHOLDING_PERCENT = 21


def compute_payment_split(
    *,
    nightly_total: int,
    additional_costs: int = 0,
    extras: int = 0,
    city_tax: int = 0,
    fee_percent: int | Decimal = DEFAULT_APPLICATION_FEE_PERCENT,
    withholding_percent: int | Decimal = DEFAULT_WITHHOLDING_PERCENT,
) -> PaymentSplit:
    """Decompose a guest payment into fee, withholding and host payout.

    Percentages above 100 or negative inputs are a caller contract
    violation and are not validated here.

    Args:
        nightly_total: Sum of nightly prices
        additional_costs: Sum of mandatory additional costs
        extras: Sum of selected extras (pass-through)
        city_tax: City tax (pass-through)
        fee_percent: Platform fee percentage
        withholding_percent: Withholding tax percentage

    Returns:
        PaymentSplit that reconciles to the cent
    """
    taxable_base = nightly_total + additional_costs

    # Two independent roundings; the application fee is their exact sum
    platform_fee = round_cents(percent_of(taxable_base, fee_percent))
    withholding_tax = round_cents(percent_of(taxable_base, withholding_percent))
    application_fee = platform_fee + withholding_tax

    guest_total = nightly_total + additional_costs + extras + city_tax
    host_payout = guest_total - application_fee

    logger.debug(
        "Payment split: taxable_base=%d platform_fee=%d withholding=%d guest_total=%d payout=%d",
        taxable_base,
        platform_fee,
        withholding_tax,
        guest_total,
        host_payout,
    )

    return PaymentSplit(
        taxable_base=taxable_base,
        platform_fee=platform_fee,
        withholding_tax=withholding_tax,
        application_fee=application_fee,
        guest_total=guest_total,
        host_payout=host_payout,
    )


def parse_application_fee_percent(value: str | None) -> int:
    """Parse a stored fee setting into a whole percentage.

    Anything that is not an integer between 0 and 100 maps to 0.

    Args:
        value: Raw setting value, e.g. "15"

    Returns:
        Fee percentage
    """
    if value is None:
        return 0
    try:
        percent = int(value.strip())
    except ValueError:
        return 0
    if not 0 <= percent <= 100:
        return 0
    return percent


def resolve_application_fee_percent(
    broker_id: str | None,
    overrides: Mapping[str, int],
    default: int = DEFAULT_APPLICATION_FEE_PERCENT,
) -> int:
    """Fee percentage for a broker: its override if one exists, else the default."""
    if broker_id is not None and broker_id in overrides:
        return overrides[broker_id]
    return default
