import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def apparel_bed():
    from apparel.domain import apparel

    bed = DomainFixture(apparel)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(apparel_bed):
    with apparel_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def fake_gateway():
    """A fresh fake invoice gateway for every test."""
    from apparel.gateway import reset_gateway, set_gateway
    from apparel.gateway.fake_adapter import FakeInvoiceGateway

    gateway = FakeInvoiceGateway()
    set_gateway(gateway)
    yield gateway
    reset_gateway()


@pytest.fixture()
def store_id():
    """A registered store."""
    from apparel.store.registration import RegisterStore
    from protean import current_domain

    return current_domain.process(RegisterStore(store_id="store-a", name="Store A"), asynchronous=False)


@pytest.fixture()
def other_store_id():
    from apparel.store.registration import RegisterStore
    from protean import current_domain

    return current_domain.process(RegisterStore(store_id="store-b", name="Store B"), asynchronous=False)


@pytest.fixture()
def catalog(store_id):
    """Logo Tee at 20.00 USD: M/Red at +2.00 (available), L/Blue unavailable.

    Returns a dict of the created ids.
    """
    from apparel.product.creation import CreateProduct
    from apparel.product.images import AddProductImage
    from apparel.product.variants import AddVariant
    from protean import current_domain

    product_id = current_domain.process(
        CreateProduct(store_id=store_id, name="Logo Tee", base_price="20.00", currency="USD"),
        asynchronous=False,
    )
    v1 = current_domain.process(
        AddVariant(
            store_id=store_id,
            product_id=product_id,
            size="M",
            color="Red",
            price_adjustment="2.00",
        ),
        asynchronous=False,
    )
    v2 = current_domain.process(
        AddVariant(
            store_id=store_id,
            product_id=product_id,
            size="L",
            color="Blue",
            is_available=False,
        ),
        asynchronous=False,
    )
    current_domain.process(
        AddProductImage(
            store_id=store_id,
            product_id=product_id,
            url="https://cdn.example.com/tee-front.png",
            display_order=0,
            is_primary=True,
        ),
        asynchronous=False,
    )
    return {"store_id": store_id, "product_id": product_id, "v1": v1, "v2": v2}


@pytest.fixture()
def shipping():
    return {
        "shipping_name": "Ada Lovelace",
        "shipping_address": "12 St James's Square",
        "shipping_city": "London",
        "shipping_state": "",
        "shipping_zip_code": "SW1Y 4JH",
        "shipping_country": "GB",
        "shipping_email": "ada@example.com",
    }
