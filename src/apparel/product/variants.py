"""Variant management — commands and handler."""

from protean import handle
from protean.fields import Boolean, Decimal, Identifier, Integer, String
from protean.utils.globals import current_domain

from apparel.domain import apparel
from apparel.product.product import DEFAULT_STOCK_QUANTITY, Product


@apparel.command(part_of="Product")
class AddVariant:
    store_id: Identifier(required=True)
    product_id: Identifier(required=True)
    size: String(required=True, max_length=50)
    color: String(required=True, max_length=50)
    color_hex: String(max_length=7)
    price_adjustment: Decimal(default=0)
    stock_quantity: Integer(min_value=0, default=DEFAULT_STOCK_QUANTITY)
    fulfillment_variant_id: String(max_length=100)
    is_available: Boolean(default=True)


@apparel.command(part_of="Product")
class UpdateVariant:
    store_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    size: String(max_length=50)
    color: String(max_length=50)
    color_hex: String(max_length=7)
    price_adjustment: Decimal()
    stock_quantity: Integer(min_value=0)
    fulfillment_variant_id: String(max_length=100)
    is_available: Boolean()


@apparel.command(part_of="Product")
class RemoveVariant:
    store_id: Identifier(required=True)
    variant_id: Identifier(required=True)


@apparel.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_for_store(command.store_id, command.product_id)

        variant = product.add_variant(
            size=command.size,
            color=command.color,
            color_hex=command.color_hex,
            price_adjustment=command.price_adjustment if command.price_adjustment is not None else "0.00",
            stock_quantity=command.stock_quantity
            if command.stock_quantity is not None
            else DEFAULT_STOCK_QUANTITY,
            fulfillment_variant_id=command.fulfillment_variant_id,
            is_available=command.is_available if command.is_available is not None else True,
        )
        repo.add(product)
        return str(variant.id)

    @handle(UpdateVariant)
    def update_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_variant_owner(command.store_id, command.variant_id)

        product.update_variant(
            command.variant_id,
            size=command.size,
            color=command.color,
            color_hex=command.color_hex,
            price_adjustment=command.price_adjustment,
            stock_quantity=command.stock_quantity,
            fulfillment_variant_id=command.fulfillment_variant_id,
            is_available=command.is_available,
        )
        repo.add(product)
        return product

    @handle(RemoveVariant)
    def remove_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_variant_owner(command.store_id, command.variant_id)

        product.remove_variant(command.variant_id)
        repo.add(product)
        return str(product.id)
