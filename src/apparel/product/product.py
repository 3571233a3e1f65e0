"""Product aggregate root with Variant and Image entities.

A product belongs to exactly one store. Its variants are the purchasable
size/color combinations; each variant's effective unit price is the
product's base price plus the variant's price adjustment, and is only ever
computed here on the server.
"""

import json
import re
from datetime import UTC, datetime
from decimal import Decimal

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)
from protean.fields import (
    Decimal as DecimalField,
)

from apparel.domain import apparel
from apparel.shared.money import CENT, to_amount, validate_currency

DEFAULT_STOCK_QUANTITY = 999

_COLOR_HEX = re.compile(r"^#[0-9A-Fa-f]{6}$")


@apparel.entity(part_of="Product")
class Variant:
    """A size/color combination of a product.

    ``stock_quantity`` is informational only: checkout never reads or
    decrements it. ``is_available`` is what gates ordering.
    """

    size: String(required=True, max_length=50)
    color: String(required=True, max_length=50)
    color_hex: String(max_length=7)
    price_adjustment: DecimalField(precision=18, scale=2, default=Decimal("0.00"))
    stock_quantity: Integer(min_value=0, default=DEFAULT_STOCK_QUANTITY)
    fulfillment_variant_id: String(max_length=100)
    is_available: Boolean(default=True)

    @invariant.post
    def color_hex_must_be_a_hex_triplet(self):
        if self.color_hex and not _COLOR_HEX.match(self.color_hex):
            raise ValidationError({"color_hex": [f"'{self.color_hex}' is not a #RRGGBB color"]})

    @property
    def label(self):
        return f"{self.color}/{self.size}"


@apparel.entity(part_of="Product")
class Image:
    url: String(required=True, max_length=500)
    color_variant: String(max_length=50)
    display_order: Integer(default=0)
    is_primary: Boolean(default=False)


@apparel.aggregate
class Product:
    """Product aggregate root."""

    store_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: Text()
    base_price: DecimalField(required=True, min_value=0, precision=18, scale=2)
    currency: String(max_length=10, default="USD")
    fulfillment_product_id: String(max_length=100)
    is_active: Boolean(default=True)
    variants: HasMany(Variant)
    images: HasMany(Image)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def variant_prices_cannot_be_negative(self):
        for variant in self.variants:
            if self.base_price + variant.price_adjustment < 0:
                raise ValidationError(
                    {
                        "price_adjustment": [
                            f"Variant {variant.label} would cost {self.base_price + variant.price_adjustment}; "
                            "effective price cannot be negative"
                        ]
                    }
                )

    @classmethod
    def create(
        cls,
        store_id,
        name,
        base_price,
        currency="USD",
        description=None,
        fulfillment_product_id=None,
        is_active=True,
    ):
        from apparel.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            store_id=store_id,
            name=name,
            description=description,
            base_price=to_amount(base_price, "base_price"),
            currency=validate_currency(currency),
            fulfillment_product_id=fulfillment_product_id,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                store_id=store_id,
                name=name,
                base_price=product.base_price,
                currency=product.currency,
                is_active=is_active,
                created_at=now,
            )
        )
        return product

    # ------------------------------------------------------------------
    # Pricing and presentation
    # ------------------------------------------------------------------
    def unit_price_for(self, variant) -> Decimal:
        """Effective unit price of ``variant``: base price plus its adjustment."""
        return (self.base_price + variant.price_adjustment).quantize(CENT)

    def images_in_display_order(self):
        return sorted(self.images, key=lambda image: image.display_order or 0)

    def representative_image(self, variant=None):
        """Pick the image that stands for the product, or for one of its variants.

        Primary image first, then the first image tagged with the variant's
        color, then the first image in display order.
        """
        ordered = self.images_in_display_order()
        if not ordered:
            return None

        primary = next((image for image in ordered if image.is_primary), None)
        if primary is not None:
            return primary

        if variant is not None:
            color_match = next((image for image in ordered if image.color_variant == variant.color), None)
            if color_match is not None:
                return color_match

        return ordered[0]

    def get_variant(self, variant_id):
        variant = next((v for v in self.variants if v.id == variant_id), None)
        if variant is None:
            raise ObjectNotFoundError(f"Variant {variant_id} not found on product {self.id}")
        return variant

    def get_image(self, image_id):
        image = next((i for i in self.images if i.id == image_id), None)
        if image is None:
            raise ObjectNotFoundError(f"Image {image_id} not found on product {self.id}")
        return image

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------
    def update_details(
        self,
        name=None,
        description=None,
        base_price=None,
        currency=None,
        fulfillment_product_id=None,
        is_active=None,
    ):
        from apparel.product.events import ProductUpdated

        with atomic_change(self):
            if name is not None:
                self.name = name
            if description is not None:
                self.description = description
            if base_price is not None:
                self.base_price = to_amount(base_price, "base_price")
            if currency is not None:
                self.currency = validate_currency(currency)
            if fulfillment_product_id is not None:
                self.fulfillment_product_id = fulfillment_product_id
            if is_active is not None:
                self.is_active = is_active
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                store_id=self.store_id,
                name=self.name,
                base_price=self.base_price,
                currency=self.currency,
                is_active=self.is_active,
            )
        )

    def mark_deleted(self):
        from apparel.product.events import ProductDeleted

        self.raise_(
            ProductDeleted(
                product_id=self.id,
                store_id=self.store_id,
                variant_ids=json.dumps([str(v.id) for v in self.variants]),
            )
        )

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------
    def add_variant(
        self,
        size,
        color,
        color_hex=None,
        price_adjustment="0.00",
        stock_quantity=DEFAULT_STOCK_QUANTITY,
        fulfillment_variant_id=None,
        is_available=True,
    ):
        from apparel.product.events import VariantAdded

        variant = Variant(
            size=size,
            color=color,
            color_hex=color_hex,
            price_adjustment=to_amount(price_adjustment, "price_adjustment"),
            stock_quantity=stock_quantity,
            fulfillment_variant_id=fulfillment_variant_id,
            is_available=is_available,
        )
        with atomic_change(self):
            self.add_variants(variant)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantAdded(
                product_id=self.id,
                store_id=self.store_id,
                variant_id=variant.id,
                size=size,
                color=color,
                price_adjustment=variant.price_adjustment,
                unit_price=self.unit_price_for(variant),
                is_available=is_available,
            )
        )
        return variant

    def update_variant(
        self,
        variant_id,
        size=None,
        color=None,
        color_hex=None,
        price_adjustment=None,
        stock_quantity=None,
        fulfillment_variant_id=None,
        is_available=None,
    ):
        from apparel.product.events import VariantUpdated

        variant = self.get_variant(variant_id)

        with atomic_change(self):
            if size is not None:
                variant.size = size
            if color is not None:
                variant.color = color
            if color_hex is not None:
                variant.color_hex = color_hex
            if price_adjustment is not None:
                variant.price_adjustment = to_amount(price_adjustment, "price_adjustment")
            if stock_quantity is not None:
                variant.stock_quantity = stock_quantity
            if fulfillment_variant_id is not None:
                variant.fulfillment_variant_id = fulfillment_variant_id
            if is_available is not None:
                variant.is_available = is_available
            self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantUpdated(
                product_id=self.id,
                store_id=self.store_id,
                variant_id=variant.id,
                size=variant.size,
                color=variant.color,
                price_adjustment=variant.price_adjustment,
                unit_price=self.unit_price_for(variant),
                is_available=variant.is_available,
            )
        )
        return variant

    def remove_variant(self, variant_id):
        from apparel.product.events import VariantRemoved

        variant = self.get_variant(variant_id)
        self.remove_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantRemoved(
                product_id=self.id,
                store_id=self.store_id,
                variant_id=variant_id,
            )
        )

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def add_image(self, url, color_variant=None, display_order=0, is_primary=False):
        from apparel.product.events import ProductImageAdded

        with atomic_change(self):
            # A new primary image takes the flag from the old one
            if is_primary:
                for existing in self.images:
                    if existing.is_primary:
                        existing.is_primary = False

            image = Image(
                url=url,
                color_variant=color_variant,
                display_order=display_order,
                is_primary=is_primary,
            )
            self.add_images(image)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImageAdded(
                product_id=self.id,
                store_id=self.store_id,
                image_id=image.id,
                url=url,
                color_variant=color_variant,
                is_primary=is_primary,
            )
        )
        return image

    def remove_image(self, image_id):
        from apparel.product.events import ProductImageRemoved

        image = self.get_image(image_id)
        self.remove_images(image)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImageRemoved(
                product_id=self.id,
                store_id=self.store_id,
                image_id=image_id,
            )
        )
