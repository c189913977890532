"""API routes package.

FastAPI routers for the pricing engine, organized by concern:

- pricing: Quotes, nightly prices and channel markup
- costs: Property and experience additional costs
- split: Platform fee / withholding / host payout split
- periods: Calendar pricing period reconciliation

All routers are registered in main.py with /api prefix.
"""

from rental_pricing_api.routes.costs import router as costs_router
from rental_pricing_api.routes.periods import router as periods_router
from rental_pricing_api.routes.pricing import router as pricing_router
from rental_pricing_api.routes.split import router as split_router

__all__ = [
    "costs_router",
    "periods_router",
    "pricing_router",
    "split_router",
]
