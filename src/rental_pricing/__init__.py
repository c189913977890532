"""Dynamic pricing and revenue-split engine for vacation rental listings."""

__version__ = "0.1.0"
