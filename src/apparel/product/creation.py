"""Product creation — command and handler."""

from protean import handle
from protean.fields import Boolean, Decimal, Identifier, String, Text
from protean.utils.globals import current_domain

from apparel.domain import apparel
from apparel.product.product import Product


@apparel.command(part_of="Product")
class CreateProduct:
    store_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: Text()
    base_price: Decimal(required=True)
    currency: String(max_length=10, default="USD")
    fulfillment_product_id: String(max_length=100)
    is_active: Boolean(default=True)


@apparel.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            store_id=command.store_id,
            name=command.name,
            description=command.description,
            base_price=command.base_price,
            currency=command.currency or "USD",
            fulfillment_product_id=command.fulfillment_product_id,
            is_active=command.is_active if command.is_active is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
