"""Shared BDD fixtures and step definitions for checkout."""

import json
from decimal import Decimal

import pytest
from apparel.order.checkout import PlaceOrder
from apparel.order.invoicing import INVOICE_FAILURE_MESSAGE, AttachInvoice
from apparel.order.order import Order, OrderStatus
from apparel.product.creation import CreateProduct
from apparel.product.product import Product
from apparel.product.variants import AddVariant
from apparel.shared.errors import ItemsUnavailableError
from apparel.store.registration import RegisterStore
from protean import current_domain
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def bdd_shipping():
    return {
        "shipping_name": "Ada Lovelace",
        "shipping_address": "12 St James's Square",
        "shipping_city": "London",
        "shipping_country": "GB",
        "shipping_email": "ada@example.com",
    }


@pytest.fixture()
def variants():
    """Variant ids keyed by ``(size, color)``."""
    return {}


@pytest.fixture()
def place_order(variants, bdd_shipping):
    """Place an order and request its invoice, as the storefront does.

    ``lines`` are ``(quantity, size, color)`` tuples.
    """

    def _place(store_id, lines):
        items = [{"variant_id": variants[(size, color)], "quantity": qty} for qty, size, color in lines]
        order = current_domain.process(
            PlaceOrder(store_id=store_id, items=json.dumps(items), **bdd_shipping),
            asynchronous=False,
        )
        return current_domain.process(AttachInvoice(store_id=store_id, order_id=order.id), asynchronous=False)

    return _place


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a store "{store_id}" selling "{name}" at {price} {currency}'),
    target_fixture="product_id",
)
def _(store_id, name, price, currency):
    current_domain.process(RegisterStore(store_id=store_id, name=store_id), asynchronous=False)
    return current_domain.process(
        CreateProduct(store_id=store_id, name=name, base_price=price, currency=currency),
        asynchronous=False,
    )


@given(parsers.cfparse('the product has an available variant "{size}" "{color}" priced +{adjustment}'))
def _(product_id, variants, size, color, adjustment):
    product = current_domain.repository_for(Product).get(product_id)
    variants[(size, color)] = current_domain.process(
        AddVariant(
            store_id=product.store_id,
            product_id=product_id,
            size=size,
            color=color,
            price_adjustment=adjustment,
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('the product has an unavailable variant "{size}" "{color}"'))
def _(product_id, variants, size, color):
    product = current_domain.repository_for(Product).get(product_id)
    variants[(size, color)] = current_domain.process(
        AddVariant(
            store_id=product.store_id,
            product_id=product_id,
            size=size,
            color=color,
            is_available=False,
        ),
        asynchronous=False,
    )


@given("the payment system is down")
def _(fake_gateway):
    fake_gateway.configure(should_succeed=False, failure_reason="Payment system unavailable")


@given("the payment system recovers")
def _(fake_gateway):
    fake_gateway.configure(should_succeed=True)


@given(
    parsers.cfparse('the shopper placed an order for {quantity:d} of "{size}" "{color}"'),
    target_fixture="checkout",
)
def _(product_id, place_order, quantity, size, color):
    store_id = current_domain.repository_for(Product).get(product_id).store_id
    return place_order(store_id, [(quantity, size, color)])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {amount} {currency}"))
def _(checkout, amount, currency):
    assert checkout.order.total_amount == Decimal(amount)
    assert checkout.order.currency == currency


@then("the order is Pending")
def _(checkout):
    order = current_domain.repository_for(Order).get(checkout.order.id)
    assert order.status == OrderStatus.PENDING.value


@then("the order is linked to a payment invoice")
def _(checkout):
    assert checkout.succeeded
    order = current_domain.repository_for(Order).get(checkout.order.id)
    assert order.invoice_id == checkout.invoice_id


@then("the order has no payment invoice")
def _(checkout):
    order = current_domain.repository_for(Order).get(checkout.order.id)
    assert order.invoice_id is None
    assert checkout.checkout_link is None


@then("the shopper is asked to contact support")
def _(checkout):
    assert checkout.error == INVOICE_FAILURE_MESSAGE


@then("the checkout is rejected because items are unavailable")
def _(checkout_error):
    assert isinstance(checkout_error, ItemsUnavailableError)


@then("no order is recorded")
def _(product_id):
    store_id = current_domain.repository_for(Product).get(product_id).store_id
    assert current_domain.repository_for(Order).list_for_store(store_id) == []


@then(parsers.cfparse('the order status is "{status}"'))
def _(checkout, status):
    assert current_domain.repository_for(Order).get(checkout.order.id).status == status
