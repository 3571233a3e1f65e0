"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Decimal, Identifier, Integer, String

from apparel.domain import apparel


@apparel.event(part_of="Order")
class OrderPlaced:
    """A shopper's cart was priced and recorded as a Pending order."""

    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    total_amount: Decimal(required=True)
    currency: String(required=True)
    item_count: Integer(required=True)
    buyer_email: String()
    placed_at: DateTime(required=True)


@apparel.event(part_of="Order")
class InvoiceAttached:
    """The payment system issued an invoice for the order."""

    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    invoice_id: String(required=True)
    checkout_link: String()
    amount: Decimal(required=True)
    currency: String(required=True)


@apparel.event(part_of="Order")
class PaymentReceived:
    """The payment system confirmed the invoice was paid."""

    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    invoice_id: String()
    amount: Decimal(required=True)
    currency: String(required=True)
    received_at: DateTime(required=True)


@apparel.event(part_of="Order")
class OrderProcessing:
    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    started_at: DateTime(required=True)


@apparel.event(part_of="Order")
class OrderShipped:
    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    shipped_at: DateTime(required=True)


@apparel.event(part_of="Order")
class OrderCompleted:
    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    completed_at: DateTime(required=True)


@apparel.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    reason: String()
    cancelled_at: DateTime(required=True)


@apparel.event(part_of="Order")
class OrderRefunded:
    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    previous_status: String(required=True)
    amount: Decimal(required=True)
    currency: String(required=True)
    reason: String()
    refunded_at: DateTime(required=True)


@apparel.event(part_of="Order")
class OrderFulfilled:
    """The order was handed to the external fulfillment provider."""

    __version__ = 1

    order_id: Identifier(required=True)
    store_id: Identifier(required=True)
    fulfillment_order_id: String(required=True)
    fulfilled_at: DateTime(required=True)
