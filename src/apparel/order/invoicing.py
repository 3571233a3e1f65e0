"""Invoice attachment — links a placed order to a payment invoice.

Runs in its own unit of work, after the order is committed. If the payment
system cannot issue an invoice the order stays as it is, Pending and
without an invoice id, and the failure is reported on the result instead
of being raised. The same command is the retry path for such orders, and
is a no-op for an order that already has an invoice.
"""

from dataclasses import dataclass

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from apparel.domain import apparel, logger
from apparel.gateway import InvoiceCreationFailed, get_gateway
from apparel.order.order import Order, OrderStatus
from apparel.store.registration import find_store

INVOICE_FAILURE_MESSAGE = "Failed to create payment invoice. Please contact support."


@dataclass(frozen=True)
class InvoiceAttachment:
    """Outcome of an invoice attachment attempt."""

    order: Order
    invoice_id: str | None = None
    checkout_link: str | None = None
    error: str | None = None
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.invoice_id is not None


def confirmation_url(store_id, order_id) -> str:
    base_url = getattr(current_domain, "STOREFRONT_BASE_URL", "") or ""
    return f"{base_url.rstrip('/')}/stores/{store_id}/orders/{order_id}"


def invoice_metadata(order: Order) -> dict:
    shipping = order.shipping
    return {
        "orderId": str(order.id),
        "orderType": "apparel",
        "itemDesc": order.item_description,
        "physical": True,
        "buyerName": shipping.name,
        "buyerEmail": shipping.email or "",
        "buyerAddress1": shipping.address,
        "buyerCity": shipping.city or "",
        "buyerState": shipping.state or "",
        "buyerZip": shipping.zip_code or "",
        "buyerCountry": shipping.country or "",
        "buyerPhone": shipping.phone or "",
    }


@apparel.command(part_of="Order")
class AttachInvoice:
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)


@apparel.command_handler(part_of=Order)
class AttachInvoiceHandler:
    @handle(AttachInvoice)
    def attach_invoice(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_store(command.store_id, command.order_id)
        gateway = get_gateway()

        if order.invoice_id:
            return InvoiceAttachment(
                order=order,
                invoice_id=order.invoice_id,
                checkout_link=gateway.checkout_link_for(order.invoice_id),
            )

        if order.status != OrderStatus.PENDING.value:
            raise ValidationError({"status": [f"Cannot request payment for an order in {order.status} status"]})

        try:
            if find_store(command.store_id) is None:
                raise InvoiceCreationFailed(f"Store {command.store_id} is not registered")

            invoice = gateway.create_invoice(
                store_id=command.store_id,
                amount=order.total_amount,
                currency=order.currency,
                metadata=invoice_metadata(order),
                redirect_url=confirmation_url(command.store_id, order.id),
            )
        except InvoiceCreationFailed as exc:
            logger.warning(
                "invoice_creation_failed",
                order_id=str(order.id),
                store_id=command.store_id,
                reason=exc.reason,
            )
            return InvoiceAttachment(order=order, error=INVOICE_FAILURE_MESSAGE, reason=exc.reason)

        order.attach_invoice(invoice.invoice_id, checkout_link=invoice.checkout_link)
        repo.add(order)

        logger.info(
            "invoice_attached",
            order_id=str(order.id),
            store_id=command.store_id,
            invoice_id=invoice.invoice_id,
        )
        return InvoiceAttachment(
            order=order,
            invoice_id=invoice.invoice_id,
            checkout_link=invoice.checkout_link or gateway.checkout_link_for(invoice.invoice_id),
        )
