"""Product detail updates and deletion — commands and handler."""

from protean import handle
from protean.fields import Boolean, Decimal, Identifier, String, Text
from protean.utils.globals import current_domain

from apparel.domain import apparel
from apparel.product.product import Product


@apparel.command(part_of="Product")
class UpdateProduct:
    store_id: Identifier(required=True)
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    base_price: Decimal()
    currency: String(max_length=10)
    fulfillment_product_id: String(max_length=100)
    is_active: Boolean()


@apparel.command(part_of="Product")
class DeleteProduct:
    store_id: Identifier(required=True)
    product_id: Identifier(required=True)


@apparel.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_for_store(command.store_id, command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            base_price=command.base_price,
            currency=command.currency,
            fulfillment_product_id=command.fulfillment_product_id,
            is_active=command.is_active,
        )
        repo.add(product)
        return product

    @handle(DeleteProduct)
    def delete_product(self, command):
        # Order items snapshot everything they show, so historical orders
        # survive the product and keep only a dangling reference to it.
        repo = current_domain.repository_for(Product)
        product = repo.get_for_store(command.store_id, command.product_id)
        repo.remove(product)
