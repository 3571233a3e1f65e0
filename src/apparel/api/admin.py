"""FastAPI routes for store administrators: catalog CRUD and order handling."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from apparel.api.presenters import order_response, product_response
from apparel.api.schemas import (
    AddImageRequest,
    AddVariantRequest,
    CreateProductRequest,
    ImageIdResponse,
    OrderListResponse,
    OrderResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    ReasonRequest,
    RecordFulfillmentRequest,
    StatusResponse,
    UpdateProductRequest,
    UpdateVariantRequest,
    VariantIdResponse,
)
from apparel.order.order import Order
from apparel.order.status import (
    CancelOrder,
    CompleteOrder,
    MarkProcessing,
    MarkShipped,
    RecordFulfillment,
    RefundOrder,
)
from apparel.product.creation import CreateProduct
from apparel.product.details import DeleteProduct, UpdateProduct
from apparel.product.images import AddProductImage, RemoveProductImage
from apparel.product.product import Product
from apparel.product.variants import AddVariant, RemoveVariant, UpdateVariant

router = APIRouter(prefix="/admin/stores", tags=["admin"])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@router.get("/{store_id}/products", response_model=ProductListResponse)
async def list_products(store_id: str) -> ProductListResponse:
    """All products, active or not, newest first."""
    products = current_domain.repository_for(Product).list_for_store(store_id)
    return ProductListResponse(products=[product_response(p) for p in products])


@router.post("/{store_id}/products", status_code=201, response_model=ProductIdResponse)
async def create_product(store_id: str, body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        store_id=store_id,
        name=body.name,
        description=body.description,
        base_price=body.base_price,
        currency=body.currency,
        fulfillment_product_id=body.fulfillment_product_id,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@router.get("/{store_id}/products/{product_id}", response_model=ProductResponse)
async def get_product(store_id: str, product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get_for_store(store_id, product_id)
    return product_response(product)


@router.put("/{store_id}/products/{product_id}", response_model=ProductResponse)
async def update_product(store_id: str, product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        store_id=store_id,
        product_id=product_id,
        name=body.name,
        description=body.description,
        base_price=body.base_price,
        currency=body.currency,
        fulfillment_product_id=body.fulfillment_product_id,
        is_active=body.is_active,
    )
    product = current_domain.process(command, asynchronous=False)
    return product_response(product)


@router.delete("/{store_id}/products/{product_id}", response_model=StatusResponse)
async def delete_product(store_id: str, product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(store_id=store_id, product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------
@router.post("/{store_id}/products/{product_id}/variants", status_code=201, response_model=VariantIdResponse)
async def add_variant(store_id: str, product_id: str, body: AddVariantRequest) -> VariantIdResponse:
    command = AddVariant(
        store_id=store_id,
        product_id=product_id,
        size=body.size,
        color=body.color,
        color_hex=body.color_hex,
        price_adjustment=body.price_adjustment,
        stock_quantity=body.stock_quantity,
        fulfillment_variant_id=body.fulfillment_variant_id,
        is_available=body.is_available,
    )
    result = current_domain.process(command, asynchronous=False)
    return VariantIdResponse(variant_id=result)


@router.put("/{store_id}/variants/{variant_id}", response_model=ProductResponse)
async def update_variant(store_id: str, variant_id: str, body: UpdateVariantRequest) -> ProductResponse:
    command = UpdateVariant(
        store_id=store_id,
        variant_id=variant_id,
        size=body.size,
        color=body.color,
        color_hex=body.color_hex,
        price_adjustment=body.price_adjustment,
        stock_quantity=body.stock_quantity,
        fulfillment_variant_id=body.fulfillment_variant_id,
        is_available=body.is_available,
    )
    product = current_domain.process(command, asynchronous=False)
    return product_response(product)


@router.delete("/{store_id}/variants/{variant_id}", response_model=StatusResponse)
async def delete_variant(store_id: str, variant_id: str) -> StatusResponse:
    current_domain.process(RemoveVariant(store_id=store_id, variant_id=variant_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------
@router.post("/{store_id}/products/{product_id}/images", status_code=201, response_model=ImageIdResponse)
async def add_image(store_id: str, product_id: str, body: AddImageRequest) -> ImageIdResponse:
    command = AddProductImage(
        store_id=store_id,
        product_id=product_id,
        url=body.url,
        color_variant=body.color_variant,
        display_order=body.display_order,
        is_primary=body.is_primary,
    )
    result = current_domain.process(command, asynchronous=False)
    return ImageIdResponse(image_id=result)


@router.delete("/{store_id}/images/{image_id}", response_model=StatusResponse)
async def delete_image(store_id: str, image_id: str) -> StatusResponse:
    current_domain.process(RemoveProductImage(store_id=store_id, image_id=image_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@router.get("/{store_id}/orders", response_model=OrderListResponse)
async def list_orders(store_id: str) -> OrderListResponse:
    """All orders of the store, newest first."""
    orders = current_domain.repository_for(Order).list_for_store(store_id)
    return OrderListResponse(orders=[order_response(o) for o in orders])


@router.get("/{store_id}/orders/awaiting-invoice", response_model=OrderListResponse)
async def list_orders_awaiting_invoice(store_id: str) -> OrderListResponse:
    """Pending orders whose payment invoice still has to be created."""
    orders = current_domain.repository_for(Order).awaiting_invoice(store_id)
    return OrderListResponse(orders=[order_response(o) for o in orders])


@router.get("/{store_id}/orders/{order_id}", response_model=OrderResponse)
async def get_order(store_id: str, order_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get_for_store(store_id, order_id)
    return order_response(order)


@router.put("/{store_id}/orders/{order_id}/processing", response_model=OrderResponse)
async def mark_processing(store_id: str, order_id: str) -> OrderResponse:
    order = current_domain.process(MarkProcessing(store_id=store_id, order_id=order_id), asynchronous=False)
    return order_response(order)


@router.put("/{store_id}/orders/{order_id}/ship", response_model=OrderResponse)
async def mark_shipped(store_id: str, order_id: str) -> OrderResponse:
    order = current_domain.process(MarkShipped(store_id=store_id, order_id=order_id), asynchronous=False)
    return order_response(order)


@router.put("/{store_id}/orders/{order_id}/complete", response_model=OrderResponse)
async def complete_order(store_id: str, order_id: str) -> OrderResponse:
    order = current_domain.process(CompleteOrder(store_id=store_id, order_id=order_id), asynchronous=False)
    return order_response(order)


@router.put("/{store_id}/orders/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(store_id: str, order_id: str, body: ReasonRequest) -> OrderResponse:
    command = CancelOrder(store_id=store_id, order_id=order_id, reason=body.reason)
    order = current_domain.process(command, asynchronous=False)
    return order_response(order)


@router.put("/{store_id}/orders/{order_id}/refund", response_model=OrderResponse)
async def refund_order(store_id: str, order_id: str, body: ReasonRequest) -> OrderResponse:
    command = RefundOrder(store_id=store_id, order_id=order_id, reason=body.reason)
    order = current_domain.process(command, asynchronous=False)
    return order_response(order)


@router.post("/{store_id}/orders/{order_id}/fulfillment", response_model=OrderResponse)
async def record_fulfillment(store_id: str, order_id: str, body: RecordFulfillmentRequest) -> OrderResponse:
    command = RecordFulfillment(
        store_id=store_id,
        order_id=order_id,
        fulfillment_order_id=body.fulfillment_order_id,
    )
    order = current_domain.process(command, asynchronous=False)
    return order_response(order)
