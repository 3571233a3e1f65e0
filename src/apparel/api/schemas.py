"""Pydantic request/response schemas for the Apparel API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Money is exchanged as decimal strings.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    variant_id: str
    quantity: int


class ShippingSchema(BaseModel):
    name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------
class RegisterStoreRequest(BaseModel):
    store_id: str
    name: str
    default_currency: str = "USD"


class StoreIdResponse(BaseModel):
    store_id: str


# ---------------------------------------------------------------------------
# Catalog requests
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    description: str | None = None
    base_price: Decimal
    currency: str = "USD"
    fulfillment_product_id: str | None = None
    is_active: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Logo Tee",
                    "description": "Heavyweight cotton tee",
                    "base_price": "20.00",
                    "currency": "USD",
                    "is_active": True,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    base_price: Decimal | None = None
    currency: str | None = None
    fulfillment_product_id: str | None = None
    is_active: bool | None = None


class AddVariantRequest(BaseModel):
    size: str
    color: str
    color_hex: str | None = None
    price_adjustment: Decimal = Decimal("0.00")
    stock_quantity: int = Field(ge=0, default=999)
    fulfillment_variant_id: str | None = None
    is_available: bool = True


class UpdateVariantRequest(BaseModel):
    size: str | None = None
    color: str | None = None
    color_hex: str | None = None
    price_adjustment: Decimal | None = None
    stock_quantity: int | None = Field(ge=0, default=None)
    fulfillment_variant_id: str | None = None
    is_available: bool | None = None


class AddImageRequest(BaseModel):
    url: str
    color_variant: str | None = None
    display_order: int = 0
    is_primary: bool = False


# ---------------------------------------------------------------------------
# Catalog responses
# ---------------------------------------------------------------------------
class VariantResponse(BaseModel):
    variant_id: str
    size: str
    color: str
    color_hex: str | None = None
    price_adjustment: Decimal
    unit_price: Decimal
    stock_quantity: int | None = None
    fulfillment_variant_id: str | None = None
    is_available: bool


class ImageResponse(BaseModel):
    image_id: str
    url: str
    color_variant: str | None = None
    display_order: int
    is_primary: bool


class ProductResponse(BaseModel):
    product_id: str
    store_id: str
    name: str
    description: str | None = None
    base_price: Decimal
    currency: str
    fulfillment_product_id: str | None = None
    is_active: bool
    image_url: str | None = None
    variants: list[VariantResponse] = []
    images: list[ImageResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class ProductIdResponse(BaseModel):
    product_id: str


class VariantIdResponse(BaseModel):
    variant_id: str


class ImageIdResponse(BaseModel):
    image_id: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class ResolveCartRequest(BaseModel):
    items: list[CartLineSchema]


class ResolvedCartLineResponse(BaseModel):
    variant_id: str
    product_id: str
    product_name: str
    size: str
    color: str
    quantity: int
    price: Decimal
    currency: str
    image_url: str | None = None
    is_available: bool


class ResolveCartResponse(BaseModel):
    items: list[ResolvedCartLineResponse]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    items: list[CartLineSchema]
    shipping: ShippingSchema
    customer_notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"variant_id": "var-001", "quantity": 2}],
                    "shipping": {
                        "name": "Ada Lovelace",
                        "address": "12 St James's Square",
                        "city": "London",
                        "zip_code": "SW1Y 4JH",
                        "country": "GB",
                        "email": "ada@example.com",
                    },
                    "customer_notes": "Gift wrap, please",
                }
            ]
        }
    }


class CheckoutResponse(BaseModel):
    order_id: str
    total_amount: Decimal
    currency: str
    invoice_id: str | None = None
    checkout_link: str | None = None
    error: str | None = None


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str | None = None
    variant_id: str | None = None
    product_name: str
    size: str | None = None
    color: str | None = None
    image_url: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderResponse(BaseModel):
    order_id: str
    store_id: str
    invoice_id: str | None = None
    status: str
    total_amount: Decimal
    currency: str
    shipping: ShippingSchema
    customer_notes: str | None = None
    fulfillment_order_id: str | None = None
    is_fulfilled: bool = False
    fulfilled_at: datetime | None = None
    items: list[OrderItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class ReasonRequest(BaseModel):
    reason: str | None = None


class RecordFulfillmentRequest(BaseModel):
    fulfillment_order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
