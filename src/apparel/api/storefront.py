"""FastAPI routes for the shopper-facing storefront.

Thin adapters that translate HTTP requests into domain commands and
queries. Every route is scoped by the store id in the path.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from apparel.api.presenters import cart_line_response, order_response, product_response
from apparel.api.schemas import (
    CheckoutResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductListResponse,
    ProductResponse,
    RegisterStoreRequest,
    ResolveCartRequest,
    ResolveCartResponse,
    StoreIdResponse,
)
from apparel.cart.resolver import CartLine, resolve_cart
from apparel.order.checkout import PlaceOrder
from apparel.order.invoicing import AttachInvoice
from apparel.order.order import Order
from apparel.product.product import Product
from apparel.store.registration import RegisterStore

router = APIRouter(prefix="/stores", tags=["storefront"])


def _checkout_response(order, attachment) -> CheckoutResponse:
    return CheckoutResponse(
        order_id=str(order.id),
        total_amount=order.total_amount,
        currency=order.currency,
        invoice_id=attachment.invoice_id,
        checkout_link=attachment.checkout_link,
        error=attachment.error,
    )


@router.post("", status_code=201, response_model=StoreIdResponse)
async def register_store(body: RegisterStoreRequest) -> StoreIdResponse:
    command = RegisterStore(
        store_id=body.store_id,
        name=body.name,
        default_currency=body.default_currency,
    )
    result = current_domain.process(command, asynchronous=False)
    return StoreIdResponse(store_id=result)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
@router.get("/{store_id}/products", response_model=ProductListResponse)
async def list_products(store_id: str) -> ProductListResponse:
    """Active products of the store, ordered by name."""
    products = current_domain.repository_for(Product).list_active(store_id)
    return ProductListResponse(products=[product_response(p) for p in products])


@router.get("/{store_id}/products/{product_id}", response_model=ProductResponse)
async def get_product(store_id: str, product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get_for_store(store_id, product_id, active_only=True)
    return product_response(product)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@router.post("/{store_id}/cart/items", response_model=ResolveCartResponse)
async def resolve_cart_items(store_id: str, body: ResolveCartRequest) -> ResolveCartResponse:
    """Price the client's cart. Lines for unknown variants are left out."""
    lines = [CartLine(variant_id=line.variant_id, quantity=line.quantity) for line in body.items]
    return ResolveCartResponse(items=[cart_line_response(line) for line in resolve_cart(store_id, lines)])


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@router.post("/{store_id}/orders", status_code=201, response_model=CheckoutResponse)
async def place_order(store_id: str, body: PlaceOrderRequest) -> CheckoutResponse:
    """Place the order, then request its payment invoice.

    1. Price and persist the order (fails as a whole on any invalid line)
    2. Ask the payment system for an invoice; a failure here is reported
       in ``error`` and the order stays recorded
    """
    shipping = body.shipping
    command = PlaceOrder(
        store_id=store_id,
        items=json.dumps([line.model_dump() for line in body.items]),
        shipping_name=shipping.name,
        shipping_address=shipping.address,
        shipping_city=shipping.city,
        shipping_state=shipping.state,
        shipping_zip_code=shipping.zip_code,
        shipping_country=shipping.country,
        shipping_email=shipping.email,
        shipping_phone=shipping.phone,
        customer_notes=body.customer_notes,
    )
    order = current_domain.process(command, asynchronous=False)

    attachment = current_domain.process(
        AttachInvoice(store_id=store_id, order_id=str(order.id)),
        asynchronous=False,
    )
    return _checkout_response(order, attachment)


@router.get("/{store_id}/orders/{order_id}", response_model=OrderResponse)
async def get_order(store_id: str, order_id: str) -> OrderResponse:
    """Order confirmation: the order as recorded, with its items."""
    order = current_domain.repository_for(Order).get_for_store(store_id, order_id)
    return order_response(order)


@router.post("/{store_id}/orders/{order_id}/invoice", response_model=CheckoutResponse)
async def retry_invoice(store_id: str, order_id: str) -> CheckoutResponse:
    """Request the payment invoice again for an order whose invoice creation failed."""
    attachment = current_domain.process(
        AttachInvoice(store_id=store_id, order_id=order_id),
        asynchronous=False,
    )
    return _checkout_response(attachment.order, attachment)
