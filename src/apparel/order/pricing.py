"""Order pricing and validation.

Turns untrusted cart lines into a priced, not yet persisted, Order. This is
the only place money amounts for an order are computed: unit prices come
from the catalog (base price plus variant adjustment), never from the
client, and the order total is the exact sum of the line totals.

Validation is all-or-nothing. Any line whose variant is missing, belongs to
another store or is unavailable rejects the whole order.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from apparel.cart.resolver import CartLine
from apparel.order.order import Order, OrderItem
from apparel.product.product import Product
from apparel.shared.errors import EmptyOrderError, ItemsUnavailableError, MixedCurrencyError
from apparel.shared.money import line_total


def parse_lines(raw_lines) -> list[CartLine]:
    """Build cart lines from request data, rejecting non-positive quantities."""
    lines = []
    for index, raw in enumerate(raw_lines or []):
        variant_id = raw.get("variant_id") if isinstance(raw, dict) else None
        if not variant_id:
            raise ValidationError({"items": [f"Line {index + 1} has no variant_id"]})

        quantity = raw.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"quantity": [f"Quantity for variant {variant_id} must be a positive integer"]})

        lines.append(CartLine(variant_id=str(variant_id), quantity=quantity))
    return lines


def consolidate(lines) -> list[CartLine]:
    """Merge lines for the same variant, keeping first-seen order."""
    quantities = {}
    for line in lines:
        quantities[line.variant_id] = quantities.get(line.variant_id, 0) + line.quantity
    return [CartLine(variant_id=variant_id, quantity=quantity) for variant_id, quantity in quantities.items()]


def price_order(store_id, lines, shipping, customer_notes=None) -> Order:
    """Price ``lines`` against the store's catalog and build a Pending order.

    Raises EmptyOrderError, ItemsUnavailableError or MixedCurrencyError;
    shipping problems surface as ValidationError when ``shipping`` is built.
    """
    lines = consolidate(lines)
    if not lines:
        raise EmptyOrderError()

    requested = [line.variant_id for line in lines]
    catalog = current_domain.repository_for(Product).find_variants(store_id, requested)
    available = {
        variant_id: (product, variant) for variant_id, (product, variant) in catalog.items() if variant.is_available
    }

    if len(available) != len(lines):
        raise ItemsUnavailableError(set(requested) - set(available))

    currencies = {product.currency for product, _ in available.values()}
    if len(currencies) > 1:
        raise MixedCurrencyError(currencies)

    items = []
    for line in lines:
        product, variant = available[line.variant_id]
        unit_price = product.unit_price_for(variant)
        image = product.representative_image(variant)
        items.append(
            OrderItem(
                product_id=product.id,
                variant_id=variant.id,
                product_name=product.name,
                size=variant.size,
                color=variant.color,
                image_url=image.url if image is not None else None,
                quantity=line.quantity,
                unit_price=unit_price,
                total_price=line_total(unit_price, line.quantity),
            )
        )

    return Order.place(
        store_id=store_id,
        currency=currencies.pop(),
        shipping=shipping,
        items=items,
        customer_notes=customer_notes,
    )
