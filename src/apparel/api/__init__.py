"""Apparel domain API package."""

from apparel.api.admin import router as admin_router
from apparel.api.storefront import router as storefront_router
from apparel.api.webhooks import router as webhook_router

__all__ = ["admin_router", "storefront_router", "webhook_router"]
