"""FastAPI dependency providers.

The pricing engine itself is stateless; routes only need the cached
settings, which carry the broker fee defaults and overrides.

Usage in routes:
    from rental_pricing_api.dependencies import get_pricing_settings

    @router.post("/pricing/split")
    async def split(settings: PricingSettings = Depends(get_pricing_settings)):
        ...

Testing:
    Override ``get_pricing_settings`` via ``app.dependency_overrides`` or
    call ``reset_services()`` after changing environment variables.
"""

from rental_pricing.config import PricingSettings, get_settings, reset_settings


def get_pricing_settings() -> PricingSettings:
    """Get the cached PricingSettings instance."""
    return get_settings()


def reset_services() -> None:
    """Clear cached settings between tests."""
    reset_settings()
