"""Store-wide lookups must see every product and order, not just the first page."""

import json
from decimal import Decimal

import pytest
from apparel.cart.resolver import CartLine, resolve_cart
from apparel.order.checkout import PlaceOrder
from apparel.order.order import Order, OrderItem, ShippingInfo
from apparel.product.product import Product
from apparel.product.variants import UpdateVariant
from protean import current_domain

PRODUCT_COUNT = 101


@pytest.fixture()
def large_catalog(store_id):
    """One available variant on each of PRODUCT_COUNT products; returns the variant ids in creation order."""
    repo = current_domain.repository_for(Product)
    variant_ids = []
    for index in range(PRODUCT_COUNT):
        product = Product.create(store_id=store_id, name=f"Tee {index:03d}", base_price="10.00")
        variant = product.add_variant(size="M", color="Black")
        repo.add(product)
        variant_ids.append(variant.id)
    return variant_ids


class TestLargeCatalog:
    def test_every_product_is_listed(self, store_id, large_catalog):
        repo = current_domain.repository_for(Product)
        assert len(repo.list_active(store_id)) == PRODUCT_COUNT
        assert len(repo.list_for_store(store_id)) == PRODUCT_COUNT

    def test_cart_resolves_every_variant(self, store_id, large_catalog):
        lines = [CartLine(variant_id=variant_id, quantity=1) for variant_id in large_catalog]
        assert len(resolve_cart(store_id, lines)) == PRODUCT_COUNT

    def test_checkout_finds_variant_beyond_first_page(self, store_id, large_catalog, shipping):
        variant_id = large_catalog[-1]
        order = current_domain.process(
            PlaceOrder(store_id=store_id, items=json.dumps([{"variant_id": variant_id, "quantity": 2}]), **shipping),
            asynchronous=False,
        )
        assert order.items[0].variant_id == variant_id
        assert order.total_amount == Decimal("20.00")

    def test_admin_can_edit_variant_beyond_first_page(self, store_id, large_catalog):
        variant_id = large_catalog[-1]
        product = current_domain.process(
            UpdateVariant(store_id=store_id, variant_id=variant_id, is_available=False),
            asynchronous=False,
        )
        assert product.get_variant(variant_id).is_available is False


class TestManyOrders:
    def test_every_order_is_listed_and_awaiting_invoice(self, store_id):
        repo = current_domain.repository_for(Order)
        for _ in range(PRODUCT_COUNT):
            item = OrderItem(
                product_name="Tee",
                size="M",
                color="Black",
                quantity=1,
                unit_price=Decimal("10.00"),
                total_price=Decimal("10.00"),
            )
            order = Order.place(
                store_id=store_id,
                currency="USD",
                shipping=ShippingInfo(name="Ada Lovelace", address="12 St James's Square"),
                items=[item],
            )
            repo.add(order)

        assert len(repo.list_for_store(store_id)) == PRODUCT_COUNT
        assert len(repo.awaiting_invoice(store_id)) == PRODUCT_COUNT
