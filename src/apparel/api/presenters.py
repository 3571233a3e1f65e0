"""Aggregate → response schema conversion shared by the routers."""

from apparel.api.schemas import (
    ImageResponse,
    OrderItemResponse,
    OrderResponse,
    ProductResponse,
    ResolvedCartLineResponse,
    ShippingSchema,
    VariantResponse,
)


def product_response(product) -> ProductResponse:
    image = product.representative_image()
    return ProductResponse(
        product_id=str(product.id),
        store_id=str(product.store_id),
        name=product.name,
        description=product.description,
        base_price=product.base_price,
        currency=product.currency,
        fulfillment_product_id=product.fulfillment_product_id,
        is_active=product.is_active,
        image_url=image.url if image is not None else None,
        variants=[
            VariantResponse(
                variant_id=str(v.id),
                size=v.size,
                color=v.color,
                color_hex=v.color_hex,
                price_adjustment=v.price_adjustment,
                unit_price=product.unit_price_for(v),
                stock_quantity=v.stock_quantity,
                fulfillment_variant_id=v.fulfillment_variant_id,
                is_available=v.is_available,
            )
            for v in product.variants
        ],
        images=[
            ImageResponse(
                image_id=str(i.id),
                url=i.url,
                color_variant=i.color_variant,
                display_order=i.display_order or 0,
                is_primary=bool(i.is_primary),
            )
            for i in product.images_in_display_order()
        ],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def cart_line_response(line) -> ResolvedCartLineResponse:
    return ResolvedCartLineResponse(
        variant_id=line.variant_id,
        product_id=line.product_id,
        product_name=line.product_name,
        size=line.size,
        color=line.color,
        quantity=line.quantity,
        price=line.unit_price,
        currency=line.currency,
        image_url=line.image_url,
        is_available=line.is_available,
    )


def order_response(order) -> OrderResponse:
    shipping = order.shipping
    return OrderResponse(
        order_id=str(order.id),
        store_id=str(order.store_id),
        invoice_id=order.invoice_id,
        status=order.status,
        total_amount=order.total_amount,
        currency=order.currency,
        shipping=ShippingSchema(
            name=shipping.name,
            address=shipping.address,
            city=shipping.city,
            state=shipping.state,
            zip_code=shipping.zip_code,
            country=shipping.country,
            email=shipping.email,
            phone=shipping.phone,
        ),
        customer_notes=order.customer_notes,
        fulfillment_order_id=order.fulfillment_order_id,
        is_fulfilled=bool(order.is_fulfilled),
        fulfilled_at=order.fulfilled_at,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id) if item.product_id else None,
                variant_id=str(item.variant_id) if item.variant_id else None,
                product_name=item.product_name,
                size=item.size,
                color=item.color,
                image_url=item.image_url,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in order.items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
