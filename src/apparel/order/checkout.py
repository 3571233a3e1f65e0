"""Checkout — PlaceOrder command and handler.

The handler runs in a single unit of work: the order row and all of its
item rows are committed together, or nothing is written at all. Invoice
creation is deliberately not part of it (see ``apparel.order.invoicing``).
"""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from apparel.domain import apparel, logger
from apparel.order.order import Order, ShippingInfo
from apparel.order.pricing import parse_lines, price_order


@apparel.command(part_of="Order")
class PlaceOrder:
    store_id = Identifier(required=True)
    items = Text(required=True)  # JSON: [{"variant_id": ..., "quantity": ...}]
    shipping_name = String(max_length=255)
    shipping_address = String(max_length=500)
    shipping_city = String(max_length=255)
    shipping_state = String(max_length=255)
    shipping_zip_code = String(max_length=255)
    shipping_country = String(max_length=255)
    shipping_email = String(max_length=255)
    shipping_phone = String(max_length=255)
    customer_notes = Text()


def shipping_from(command) -> ShippingInfo:
    return ShippingInfo(
        name=command.shipping_name or None,
        address=command.shipping_address or None,
        city=command.shipping_city,
        state=command.shipping_state,
        zip_code=command.shipping_zip_code,
        country=command.shipping_country,
        email=command.shipping_email or None,
        phone=command.shipping_phone or None,
    )


@apparel.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        raw_lines = json.loads(command.items) if isinstance(command.items, str) else command.items
        lines = parse_lines(raw_lines)
        shipping = shipping_from(command)

        order = price_order(
            store_id=command.store_id,
            lines=lines,
            shipping=shipping,
            customer_notes=command.customer_notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            store_id=command.store_id,
            total_amount=str(order.total_amount),
            currency=order.currency,
            items=len(order.items),
        )
        return order
