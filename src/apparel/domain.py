"""Apparel storefront bounded context.

Catalog of apparel products with size/color variants and images, cart
resolution, order pricing and checkout, and reconciliation of orders with
payment invoices issued by an external payment system.
"""

from protean.domain import Domain

from apparel.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
apparel = Domain(name="apparel")
