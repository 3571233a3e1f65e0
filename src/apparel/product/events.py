"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Decimal, Identifier, String, Text

from apparel.domain import apparel


@apparel.event(part_of="Product")
class ProductCreated:
    """A store administrator added a product to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    name: String(required=True)
    base_price: Decimal(required=True)
    currency: String(required=True)
    is_active: Boolean(default=True)
    created_at: DateTime(required=True)


@apparel.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    name: String(required=True)
    base_price: Decimal(required=True)
    currency: String(required=True)
    is_active: Boolean()


@apparel.event(part_of="Product")
class ProductDeleted:
    """A product and, with it, all of its variants and images were deleted."""

    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    variant_ids: Text()  # JSON list


@apparel.event(part_of="Product")
class VariantAdded:
    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    size: String(required=True)
    color: String(required=True)
    price_adjustment: Decimal(required=True)
    unit_price: Decimal(required=True)
    is_available: Boolean()


@apparel.event(part_of="Product")
class VariantUpdated:
    """A variant's attributes, price adjustment or availability changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    size: String(required=True)
    color: String(required=True)
    price_adjustment: Decimal(required=True)
    unit_price: Decimal(required=True)
    is_available: Boolean()


@apparel.event(part_of="Product")
class VariantRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    variant_id: Identifier(required=True)


@apparel.event(part_of="Product")
class ProductImageAdded:
    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    image_id: Identifier(required=True)
    url: String(required=True)
    color_variant: String()
    is_primary: Boolean()


@apparel.event(part_of="Product")
class ProductImageRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    store_id: Identifier(required=True)
    image_id: Identifier(required=True)
