"""Order aggregate — a priced, immutable record of what a shopper bought.

Items and totals are fixed when the order is placed. Afterwards only the
status, the invoice reference and fulfillment details change.

State Machine:
    PENDING → PAYMENT_RECEIVED → PROCESSING → SHIPPED → COMPLETED
    PENDING | PAYMENT_RECEIVED → CANCELLED
    any state except REFUNDED → REFUNDED
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)
from protean.fields import (
    Decimal as DecimalField,
)

from apparel.domain import apparel
from apparel.shared.money import ZERO


class OrderStatus(Enum):
    PENDING = "Pending"
    PAYMENT_RECEIVED = "PaymentReceived"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAYMENT_RECEIVED, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.PAYMENT_RECEIVED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.REFUNDED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED, OrderStatus.REFUNDED},
    OrderStatus.COMPLETED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),  # Terminal
}

# Orders in these states can be handed to the fulfillment provider
_FULFILLABLE_STATES = {OrderStatus.PAYMENT_RECEIVED, OrderStatus.PROCESSING, OrderStatus.SHIPPED}


@apparel.value_object(part_of="Order")
class ShippingInfo:
    """Where the order ships and who to contact, captured at checkout."""

    name: String(required=True, max_length=200)
    address: String(required=True, max_length=300)
    city: String(max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100)
    email: String(max_length=200)
    phone: String(max_length=50)


@apparel.entity(part_of="Order")
class OrderItem:
    """A priced line of an order.

    ``product_id`` and ``variant_id`` point back at the catalog but are not
    owned by it: the catalog rows may be deleted later, so everything the
    order needs to show is snapshotted here.
    """

    product_id: Identifier()
    variant_id: Identifier()
    product_name: String(required=True, max_length=200)
    size: String(max_length=50)
    color: String(max_length=50)
    image_url: String(max_length=500)
    quantity: Integer(required=True, min_value=1)
    unit_price: DecimalField(required=True, min_value=0, precision=18, scale=2)
    total_price: DecimalField(required=True, min_value=0, precision=18, scale=2)

    @invariant.post
    def total_price_must_equal_unit_price_times_quantity(self):
        if self.total_price != self.unit_price * self.quantity:
            raise ValidationError(
                {"total_price": [f"Line total {self.total_price} does not equal {self.unit_price} x {self.quantity}"]}
            )

    @property
    def description(self):
        return f"{self.product_name} ({self.color}/{self.size}) x{self.quantity}"


@apparel.aggregate
class Order:
    """Order aggregate root."""

    store_id: Identifier(required=True)
    invoice_id: String(max_length=100)
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    total_amount: DecimalField(required=True, min_value=0, precision=18, scale=2)
    currency: String(max_length=10, default="USD")
    shipping: ValueObject(ShippingInfo, required=True)
    customer_notes: Text()
    items: HasMany(OrderItem)
    fulfillment_order_id: String(max_length=100)
    is_fulfilled: Boolean(default=False)
    fulfilled_at: DateTime()
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def total_amount_must_equal_sum_of_items(self):
        if not self.items:
            return
        items_total = sum((item.total_price for item in self.items), ZERO)
        if self.total_amount != items_total:
            raise ValidationError(
                {"total_amount": [f"Order total {self.total_amount} does not equal item total {items_total}"]}
            )

    @classmethod
    def place(cls, store_id, currency, shipping, items, customer_notes=None):
        """Record a new Pending order from already-priced items."""
        from apparel.order.events import OrderPlaced

        now = datetime.now(UTC)
        total_amount = sum((item.total_price for item in items), ZERO)

        order = cls(
            store_id=store_id,
            status=OrderStatus.PENDING.value,
            total_amount=total_amount,
            currency=currency,
            shipping=shipping,
            customer_notes=customer_notes,
            items=items,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                store_id=store_id,
                total_amount=total_amount,
                currency=currency,
                item_count=sum(item.quantity for item in items),
                buyer_email=shipping.email,
                placed_at=now,
            )
        )
        return order

    @property
    def item_description(self) -> str:
        """Human-readable summary used on the payment invoice."""
        lines = ", ".join(item.description for item in self.items)
        return f"Order #{str(self.id)[:8]} - {lines}"

    @property
    def awaiting_invoice(self) -> bool:
        return not self.invoice_id and self.status == OrderStatus.PENDING.value

    # ------------------------------------------------------------------
    # Invoice linkage
    # ------------------------------------------------------------------
    def attach_invoice(self, invoice_id, checkout_link=None):
        from apparel.order.events import InvoiceAttached

        if self.invoice_id:
            raise ValidationError({"invoice_id": [f"Order already linked to invoice {self.invoice_id}"]})

        self.invoice_id = invoice_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            InvoiceAttached(
                order_id=self.id,
                store_id=self.store_id,
                invoice_id=invoice_id,
                checkout_link=checkout_link,
                amount=self.total_amount,
                currency=self.currency,
            )
        )

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _transition(self, target_status):
        self._assert_can_transition(target_status)
        self.status = target_status.value
        now = datetime.now(UTC)
        self.updated_at = now
        return now

    def record_payment_received(self):
        from apparel.order.events import PaymentReceived

        now = self._transition(OrderStatus.PAYMENT_RECEIVED)
        self.raise_(
            PaymentReceived(
                order_id=self.id,
                store_id=self.store_id,
                invoice_id=self.invoice_id,
                amount=self.total_amount,
                currency=self.currency,
                received_at=now,
            )
        )

    def mark_processing(self):
        from apparel.order.events import OrderProcessing

        now = self._transition(OrderStatus.PROCESSING)
        self.raise_(OrderProcessing(order_id=self.id, store_id=self.store_id, started_at=now))

    def mark_shipped(self):
        from apparel.order.events import OrderShipped

        now = self._transition(OrderStatus.SHIPPED)
        self.raise_(OrderShipped(order_id=self.id, store_id=self.store_id, shipped_at=now))

    def complete(self):
        from apparel.order.events import OrderCompleted

        now = self._transition(OrderStatus.COMPLETED)
        self.raise_(OrderCompleted(order_id=self.id, store_id=self.store_id, completed_at=now))

    def cancel(self, reason=None):
        from apparel.order.events import OrderCancelled

        now = self._transition(OrderStatus.CANCELLED)
        self.raise_(
            OrderCancelled(
                order_id=self.id,
                store_id=self.store_id,
                reason=reason,
                cancelled_at=now,
            )
        )

    def refund(self, reason=None):
        from apparel.order.events import OrderRefunded

        previous = self.status
        now = self._transition(OrderStatus.REFUNDED)
        self.raise_(
            OrderRefunded(
                order_id=self.id,
                store_id=self.store_id,
                previous_status=previous,
                amount=self.total_amount,
                currency=self.currency,
                reason=reason,
                refunded_at=now,
            )
        )

    def record_fulfillment(self, fulfillment_order_id):
        from apparel.order.events import OrderFulfilled

        if OrderStatus(self.status) not in _FULFILLABLE_STATES:
            raise ValidationError({"status": [f"Cannot fulfill an order in {self.status} status"]})
        if self.is_fulfilled:
            raise ValidationError({"fulfillment_order_id": ["Order has already been fulfilled"]})

        now = datetime.now(UTC)
        self.fulfillment_order_id = fulfillment_order_id
        self.is_fulfilled = True
        self.fulfilled_at = now
        self.updated_at = now

        self.raise_(
            OrderFulfilled(
                order_id=self.id,
                store_id=self.store_id,
                fulfillment_order_id=fulfillment_order_id,
                fulfilled_at=now,
            )
        )
