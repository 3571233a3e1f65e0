"""Order status transitions — commands and handlers.

Admin transitions are store-scoped. Payment-driven transitions arrive from
the payment system's webhooks and are keyed by invoice id; they tolerate
redelivery, so a repeated notification leaves the order untouched.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from apparel.domain import apparel, logger
from apparel.order.order import Order, OrderStatus


@apparel.command(part_of="Order")
class RecordPaymentReceived:
    invoice_id: String(required=True, max_length=100)


@apparel.command(part_of="Order")
class CancelUnpaidOrder:
    invoice_id: String(required=True, max_length=100)
    reason: String(max_length=255)


@apparel.command(part_of="Order")
class MarkProcessing:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)


@apparel.command(part_of="Order")
class MarkShipped:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)


@apparel.command(part_of="Order")
class CompleteOrder:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)


@apparel.command(part_of="Order")
class CancelOrder:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)
    reason: String(max_length=255)


@apparel.command(part_of="Order")
class RefundOrder:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)
    reason: String(max_length=255)


@apparel.command(part_of="Order")
class RecordFulfillment:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)
    fulfillment_order_id: String(required=True, max_length=100)


def _order_for_invoice(invoice_id) -> Order:
    order = current_domain.repository_for(Order).find_by_invoice(invoice_id)
    if order is None:
        raise ObjectNotFoundError(f"No order is linked to invoice {invoice_id}")
    return order


@apparel.command_handler(part_of=Order)
class PaymentNotificationHandler:
    @handle(RecordPaymentReceived)
    def record_payment_received(self, command):
        order = _order_for_invoice(command.invoice_id)
        if order.status != OrderStatus.PENDING.value:
            logger.info("payment_already_recorded", order_id=str(order.id), status=order.status)
            return order

        order.record_payment_received()
        current_domain.repository_for(Order).add(order)
        logger.info("payment_received", order_id=str(order.id), invoice_id=command.invoice_id)
        return order

    @handle(CancelUnpaidOrder)
    def cancel_unpaid_order(self, command):
        order = _order_for_invoice(command.invoice_id)
        if order.status != OrderStatus.PENDING.value:
            return order

        order.cancel(reason=command.reason)
        current_domain.repository_for(Order).add(order)
        logger.info("unpaid_order_cancelled", order_id=str(order.id), reason=command.reason)
        return order


@apparel.command_handler(part_of=Order)
class OrderStatusHandler:
    def _load(self, command) -> Order:
        return current_domain.repository_for(Order).get_for_store(command.store_id, command.order_id)

    def _save(self, order) -> Order:
        current_domain.repository_for(Order).add(order)
        return order

    @handle(MarkProcessing)
    def mark_processing(self, command):
        order = self._load(command)
        order.mark_processing()
        return self._save(order)

    @handle(MarkShipped)
    def mark_shipped(self, command):
        order = self._load(command)
        order.mark_shipped()
        return self._save(order)

    @handle(CompleteOrder)
    def complete(self, command):
        order = self._load(command)
        order.complete()
        return self._save(order)

    @handle(CancelOrder)
    def cancel(self, command):
        order = self._load(command)
        order.cancel(reason=command.reason)
        return self._save(order)

    @handle(RefundOrder)
    def refund(self, command):
        order = self._load(command)
        order.refund(reason=command.reason)
        return self._save(order)

    @handle(RecordFulfillment)
    def record_fulfillment(self, command):
        order = self._load(command)
        order.record_fulfillment(command.fulfillment_order_id)
        return self._save(order)
