"""Integration tests for the shopper-facing storefront API."""

from apparel.order.order import Order
from protean import current_domain


def _checkout(client, store_id, items, shipping):
    return client.post(f"/stores/{store_id}/orders", json={"items": items, "shipping": shipping})


class TestStoreRegistration:
    def test_register_store(self, client):
        response = client.post("/stores", json={"store_id": "store-x", "name": "Store X"})
        assert response.status_code == 201
        assert response.json() == {"store_id": "store-x"}

    def test_unknown_currency(self, client):
        response = client.post(
            "/stores",
            json={"store_id": "store-x", "name": "Store X", "default_currency": "ABC"},
        )
        assert response.status_code == 400


class TestCatalogBrowsing:
    def test_list_products(self, client, catalog):
        response = client.get(f"/stores/{catalog['store_id']}/products")
        assert response.status_code == 200

        [product] = response.json()["products"]
        assert product["name"] == "Logo Tee"
        assert product["base_price"] == "20.00"
        assert product["image_url"] == "https://cdn.example.com/tee-front.png"
        prices = {v["variant_id"]: v["unit_price"] for v in product["variants"]}
        assert prices[catalog["v1"]] == "22.00"

    def test_get_product(self, client, catalog):
        response = client.get(f"/stores/{catalog['store_id']}/products/{catalog['product_id']}")
        assert response.status_code == 200
        assert response.json()["product_id"] == catalog["product_id"]

    def test_product_of_another_store_is_not_found(self, client, catalog, other_store_id):
        response = client.get(f"/stores/{other_store_id}/products/{catalog['product_id']}")
        assert response.status_code == 404


class TestCartResolution:
    def test_resolves_lines(self, client, catalog):
        response = client.post(
            f"/stores/{catalog['store_id']}/cart/items",
            json={
                "items": [
                    {"variant_id": catalog["v1"], "quantity": 2},
                    {"variant_id": catalog["v2"], "quantity": 1},
                    {"variant_id": "ghost", "quantity": 1},
                ]
            },
        )
        assert response.status_code == 200

        items = response.json()["items"]
        assert [item["variant_id"] for item in items] == [catalog["v1"], catalog["v2"]]
        assert items[0]["price"] == "22.00"
        assert items[0]["is_available"] is True
        assert items[1]["is_available"] is False


class TestCheckout:
    def test_places_order_and_creates_invoice(self, client, catalog, shipping_body, fake_gateway):
        response = _checkout(client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 3}], shipping_body)
        assert response.status_code == 201

        data = response.json()
        assert data["total_amount"] == "66.00"
        assert data["currency"] == "USD"
        assert data["invoice_id"].startswith("fake_inv_")
        assert data["checkout_link"].endswith(data["invoice_id"])
        assert data["error"] is None

        order = current_domain.repository_for(Order).get(data["order_id"])
        assert order.invoice_id == data["invoice_id"]

    def test_invoice_failure_still_records_order(self, client, catalog, shipping_body, fake_gateway):
        fake_gateway.configure(should_succeed=False)

        response = _checkout(client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 1}], shipping_body)
        assert response.status_code == 201

        data = response.json()
        assert data["invoice_id"] is None
        assert data["checkout_link"] is None
        assert data["error"] == "Failed to create payment invoice. Please contact support."
        assert current_domain.repository_for(Order).get(data["order_id"]).invoice_id is None

    def test_retry_invoice(self, client, catalog, shipping_body, fake_gateway):
        fake_gateway.configure(should_succeed=False)
        order_id = _checkout(
            client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 1}], shipping_body
        ).json()["order_id"]

        fake_gateway.configure(should_succeed=True)
        response = client.post(f"/stores/{catalog['store_id']}/orders/{order_id}/invoice")

        assert response.status_code == 200
        assert response.json()["invoice_id"].startswith("fake_inv_")

    def test_unavailable_item(self, client, catalog, shipping_body):
        response = _checkout(client, catalog["store_id"], [{"variant_id": catalog["v2"], "quantity": 1}], shipping_body)
        assert response.status_code == 400
        assert "items" in response.json()["error"]
        assert current_domain.repository_for(Order).list_for_store(catalog["store_id"]) == []

    def test_empty_order(self, client, catalog, shipping_body):
        response = _checkout(client, catalog["store_id"], [], shipping_body)
        assert response.status_code == 400
        assert response.json()["error"]["items"] == ["Order must contain at least one item"]

    def test_zero_quantity(self, client, catalog, shipping_body):
        response = _checkout(client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 0}], shipping_body)
        assert response.status_code == 400

    def test_missing_shipping_address(self, client, catalog, shipping_body):
        del shipping_body["address"]
        response = _checkout(client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 1}], shipping_body)
        assert response.status_code == 400
        assert "address" in response.json()["error"]


class TestOrderConfirmation:
    def test_get_order(self, client, catalog, shipping_body):
        order_id = _checkout(
            client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 2}], shipping_body
        ).json()["order_id"]

        response = client.get(f"/stores/{catalog['store_id']}/orders/{order_id}")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "Pending"
        assert data["total_amount"] == "44.00"
        assert data["shipping"]["name"] == "Ada Lovelace"
        [item] = data["items"]
        assert item["product_name"] == "Logo Tee"
        assert item["unit_price"] == "22.00"
        assert item["quantity"] == 2

    def test_order_of_another_store_is_not_found(self, client, catalog, other_store_id, shipping_body):
        order_id = _checkout(
            client, catalog["store_id"], [{"variant_id": catalog["v1"], "quantity": 1}], shipping_body
        ).json()["order_id"]

        response = client.get(f"/stores/{other_store_id}/orders/{order_id}")
        assert response.status_code == 404
