"""Store-scoped queries over the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from apparel.domain import apparel
from apparel.product.product import Product


@apparel.repository(part_of=Product)
class ProductRepository:
    """Every lookup filters on ``store_id``; a product from another store is
    indistinguishable from a missing one."""

    def get_for_store(self, store_id, product_id, active_only=False) -> Product:
        filters = {"id": product_id, "store_id": store_id}
        if active_only:
            filters["is_active"] = True

        product = self._dao.query.filter(**filters).all().first
        if product is None:
            raise ObjectNotFoundError(f"Product {product_id} not found in store {store_id}")
        return product

    def list_for_store(self, store_id) -> list[Product]:
        """All products of a store, newest first."""
        return self._dao.query.filter(store_id=store_id).order_by("-created_at").limit(None).all().items

    def list_active(self, store_id) -> list[Product]:
        """Products a shopper can see, ordered by name."""
        return self._dao.query.filter(store_id=store_id, is_active=True).order_by("name").limit(None).all().items

    def find_variants(self, store_id, variant_ids) -> dict:
        """Map each requested variant id found in the store to ``(product, variant)``.

        Ids that do not exist, or that belong to another store's products,
        are simply absent from the result.
        """
        wanted = set(variant_ids)
        found = {}
        for product in self._dao.query.filter(store_id=store_id).limit(None).all().items:
            for variant in product.variants:
                if variant.id in wanted:
                    found[variant.id] = (product, variant)
        return found

    def find_variant_owner(self, store_id, variant_id) -> Product:
        """The store's product that owns ``variant_id``."""
        match = self.find_variants(store_id, [variant_id]).get(variant_id)
        if match is None:
            raise ObjectNotFoundError(f"Variant {variant_id} not found in store {store_id}")
        return match[0]

    def find_image_owner(self, store_id, image_id) -> Product:
        for product in self._dao.query.filter(store_id=store_id).limit(None).all().items:
            if any(image.id == image_id for image in product.images):
                return product
        raise ObjectNotFoundError(f"Image {image_id} not found in store {store_id}")

    def remove(self, product: Product) -> None:
        """Delete the product together with its variants and images."""
        product.mark_deleted()
        for variant in list(product.variants):
            product.remove_variants(variant)
        for image in list(product.images):
            product.remove_images(image)
        self.add(product)
        self._dao.delete(product)
