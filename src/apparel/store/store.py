"""Store registry: the stores a storefront can sell under."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from apparel.domain import apparel


@apparel.aggregate
class Store:
    """A merchant store registered with the payment system.

    The identifier is the payment system's own opaque store id; products and
    orders carry it as ``store_id``.
    """

    name: String(required=True, max_length=200)
    default_currency: String(max_length=10, default="USD")
    created_at: DateTime(default=lambda: datetime.now(UTC))
