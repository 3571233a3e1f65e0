"""Product image management — commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from apparel.domain import apparel
from apparel.product.product import Product


@apparel.command(part_of="Product")
class AddProductImage:
    store_id: Identifier(required=True)
    product_id: Identifier(required=True)
    url: String(required=True, max_length=500)
    color_variant: String(max_length=50)
    display_order: Integer(default=0)
    is_primary: Boolean(default=False)


@apparel.command(part_of="Product")
class RemoveProductImage:
    store_id: Identifier(required=True)
    image_id: Identifier(required=True)


@apparel.command_handler(part_of=Product)
class ManageImagesHandler:
    @handle(AddProductImage)
    def add_image(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_for_store(command.store_id, command.product_id)

        image = product.add_image(
            url=command.url,
            color_variant=command.color_variant,
            display_order=command.display_order or 0,
            is_primary=bool(command.is_primary),
        )
        repo.add(product)
        return str(image.id)

    @handle(RemoveProductImage)
    def remove_image(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_image_owner(command.store_id, command.image_id)

        product.remove_image(command.image_id)
        repo.add(product)
        return str(product.id)
