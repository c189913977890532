"""Pure pricing calculation services."""

from .additional_costs import (
    compute_city_tax,
    compute_experience_additional_costs,
    compute_extras_total,
    compute_property_additional_costs,
    format_experience_cost_preview,
    format_property_cost_preview,
    sum_line_items,
)
from .payment_split import (
    DEFAULT_APPLICATION_FEE_PERCENT,
    DEFAULT_WITHHOLDING_PERCENT,
    compute_payment_split,
    parse_application_fee_percent,
    resolve_application_fee_percent,
)
from .pricing import (
    SERVICE_FEE_PERCENT,
    apply_channel_markup,
    calculate_price_breakdown,
    get_nightly_price_for_date,
    get_nightly_prices,
    select_rule,
    validate_guest_count,
    validate_minimum_stay,
)
from .reconciliation import (
    apply_reconcile_plan,
    find_overlapping_periods,
    get_calendar_prices,
    get_effective_price_for_date,
    get_period_for_date,
    reconcile_pricing_periods,
    validate_reconcile_input,
)

__all__ = [
    # Pricing
    "SERVICE_FEE_PERCENT",
    "apply_channel_markup",
    "calculate_price_breakdown",
    "get_nightly_price_for_date",
    "get_nightly_prices",
    "select_rule",
    "validate_guest_count",
    "validate_minimum_stay",
    # Additional costs
    "compute_city_tax",
    "compute_experience_additional_costs",
    "compute_extras_total",
    "compute_property_additional_costs",
    "format_experience_cost_preview",
    "format_property_cost_preview",
    "sum_line_items",
    # Payment split
    "DEFAULT_APPLICATION_FEE_PERCENT",
    "DEFAULT_WITHHOLDING_PERCENT",
    "compute_payment_split",
    "parse_application_fee_percent",
    "resolve_application_fee_percent",
    # Reconciliation
    "apply_reconcile_plan",
    "find_overlapping_periods",
    "get_calendar_prices",
    "get_effective_price_for_date",
    "get_period_for_date",
    "reconcile_pricing_periods",
    "validate_reconcile_input",
]
