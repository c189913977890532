"""Enumeration types for rental pricing data models."""

from enum import Enum


class PricingModel(str, Enum):
    """How a listing's base price turns into a stay price."""

    PER_NIGHT = "per_night"  # Apartments, boats
    PER_PERSON = "per_person"  # Tours, experiences
    FIXED = "fixed"


class PropertyCostUnit(str, Enum):
    """Unit an additional cost or extra of a property is charged per."""

    STAY = "stay"
    NIGHT = "night"
    GUEST = "guest"
    NIGHT_PER_GUEST = "night_per_guest"


class ExperienceCostUnit(str, Enum):
    """Unit an additional cost of an experience is charged per."""

    BOOKING = "booking"
    PARTICIPANT = "participant"
