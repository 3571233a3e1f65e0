"""Cart resolution: price a client-held cart against the live catalog.

The shopper's cart lives on the client and is untrusted. Resolution turns
its ``(variant_id, quantity)`` lines into display lines priced by the
server. It is a read-only preview: nothing is reserved or written, and
lines whose variant cannot be found in the store are dropped, so callers
detect stale carts by comparing counts.
"""

from dataclasses import dataclass
from decimal import Decimal

from protean.utils.globals import current_domain

from apparel.product.product import Product


@dataclass(frozen=True)
class CartLine:
    """A line as submitted by the client."""

    variant_id: str
    quantity: int


@dataclass(frozen=True)
class ResolvedCartLine:
    variant_id: str
    product_id: str
    product_name: str
    size: str
    color: str
    quantity: int
    unit_price: Decimal
    currency: str
    image_url: str | None
    is_available: bool


def resolve_line(product, variant, quantity) -> ResolvedCartLine:
    image = product.representative_image(variant)
    return ResolvedCartLine(
        variant_id=str(variant.id),
        product_id=str(product.id),
        product_name=product.name,
        size=variant.size,
        color=variant.color,
        quantity=quantity,
        unit_price=product.unit_price_for(variant),
        currency=product.currency,
        image_url=image.url if image is not None else None,
        is_available=bool(variant.is_available),
    )


def resolve_cart(store_id, lines) -> list[ResolvedCartLine]:
    """Resolve ``lines`` in request order; unknown variants are dropped.

    Unavailable variants are kept and flagged so the client can show them
    as out of stock.
    """
    lines = list(lines)
    catalog = current_domain.repository_for(Product).find_variants(store_id, [line.variant_id for line in lines])

    resolved = []
    for line in lines:
        match = catalog.get(line.variant_id)
        if match is None:
            continue
        product, variant = match
        resolved.append(resolve_line(product, variant, line.quantity))
    return resolved
