"""Integration tests for the store administration API."""


def _place(client, catalog, shipping_body, quantity=1):
    response = client.post(
        f"/stores/{catalog['store_id']}/orders",
        json={"items": [{"variant_id": catalog["v1"], "quantity": quantity}], "shipping": shipping_body},
    )
    return response.json()


class TestProductAdministration:
    def test_create_and_fetch_product(self, client, store_id):
        response = client.post(
            f"/admin/stores/{store_id}/products",
            json={"name": "Hoodie", "base_price": "45.00", "description": "Fleece"},
        )
        assert response.status_code == 201
        product_id = response.json()["product_id"]

        response = client.get(f"/admin/stores/{store_id}/products/{product_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Hoodie"
        assert data["base_price"] == "45.00"
        assert data["variants"] == []

    def test_sub_cent_price_is_rejected(self, client, store_id):
        response = client.post(
            f"/admin/stores/{store_id}/products",
            json={"name": "Hoodie", "base_price": "45.005"},
        )
        assert response.status_code == 400

    def test_inactive_product_is_listed_for_admin_only(self, client, catalog):
        store_id = catalog["store_id"]
        response = client.put(
            f"/admin/stores/{store_id}/products/{catalog['product_id']}",
            json={"is_active": False},
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        assert len(client.get(f"/admin/stores/{store_id}/products").json()["products"]) == 1
        assert client.get(f"/stores/{store_id}/products").json()["products"] == []

    def test_delete_product(self, client, catalog):
        store_id = catalog["store_id"]
        response = client.delete(f"/admin/stores/{store_id}/products/{catalog['product_id']}")
        assert response.status_code == 200
        assert client.get(f"/admin/stores/{store_id}/products/{catalog['product_id']}").status_code == 404

    def test_delete_product_of_another_store(self, client, catalog, other_store_id):
        response = client.delete(f"/admin/stores/{other_store_id}/products/{catalog['product_id']}")
        assert response.status_code == 404


class TestVariantAdministration:
    def test_add_update_and_remove_variant(self, client, catalog):
        store_id, product_id = catalog["store_id"], catalog["product_id"]

        response = client.post(
            f"/admin/stores/{store_id}/products/{product_id}/variants",
            json={"size": "XL", "color": "Black", "color_hex": "#111111", "price_adjustment": "3.00"},
        )
        assert response.status_code == 201
        variant_id = response.json()["variant_id"]

        response = client.put(
            f"/admin/stores/{store_id}/variants/{variant_id}",
            json={"price_adjustment": "4.00", "is_available": False},
        )
        assert response.status_code == 200
        variant = next(v for v in response.json()["variants"] if v["variant_id"] == variant_id)
        assert variant["unit_price"] == "24.00"
        assert variant["is_available"] is False

        response = client.delete(f"/admin/stores/{store_id}/variants/{variant_id}")
        assert response.status_code == 200
        product = client.get(f"/admin/stores/{store_id}/products/{product_id}").json()
        assert variant_id not in [v["variant_id"] for v in product["variants"]]

    def test_invalid_color_hex(self, client, catalog):
        response = client.post(
            f"/admin/stores/{catalog['store_id']}/products/{catalog['product_id']}/variants",
            json={"size": "XL", "color": "Black", "color_hex": "black"},
        )
        assert response.status_code == 400

    def test_negative_effective_price(self, client, catalog):
        response = client.post(
            f"/admin/stores/{catalog['store_id']}/products/{catalog['product_id']}/variants",
            json={"size": "XL", "color": "Black", "price_adjustment": "-30.00"},
        )
        assert response.status_code == 400


class TestImageAdministration:
    def test_add_and_remove_image(self, client, catalog):
        store_id, product_id = catalog["store_id"], catalog["product_id"]

        response = client.post(
            f"/admin/stores/{store_id}/products/{product_id}/images",
            json={"url": "https://cdn.example.com/tee-blue.png", "color_variant": "Blue", "display_order": 1},
        )
        assert response.status_code == 201
        image_id = response.json()["image_id"]

        product = client.get(f"/admin/stores/{store_id}/products/{product_id}").json()
        assert [i["url"] for i in product["images"]] == [
            "https://cdn.example.com/tee-front.png",
            "https://cdn.example.com/tee-blue.png",
        ]

        assert client.delete(f"/admin/stores/{store_id}/images/{image_id}").status_code == 200
        product = client.get(f"/admin/stores/{store_id}/products/{product_id}").json()
        assert len(product["images"]) == 1


class TestOrderAdministration:
    def test_list_orders(self, client, catalog, shipping_body):
        _place(client, catalog, shipping_body)
        _place(client, catalog, shipping_body, quantity=2)

        response = client.get(f"/admin/stores/{catalog['store_id']}/orders")
        assert response.status_code == 200
        assert len(response.json()["orders"]) == 2

    def test_orders_awaiting_invoice(self, client, catalog, shipping_body, fake_gateway):
        _place(client, catalog, shipping_body)
        fake_gateway.configure(should_succeed=False)
        failed = _place(client, catalog, shipping_body)

        response = client.get(f"/admin/stores/{catalog['store_id']}/orders/awaiting-invoice")
        assert response.status_code == 200
        assert [o["order_id"] for o in response.json()["orders"]] == [failed["order_id"]]

    def test_lifecycle(self, client, catalog, shipping_body):
        store_id = catalog["store_id"]
        placed = _place(client, catalog, shipping_body)
        order_id = placed["order_id"]

        client.post(
            "/webhooks/invoices",
            json={"type": "InvoiceSettled", "invoiceId": placed["invoice_id"]},
            headers={"BTCPay-Sig": "test-signature"},
        )
        assert client.put(f"/admin/stores/{store_id}/orders/{order_id}/processing").status_code == 200

        response = client.post(
            f"/admin/stores/{store_id}/orders/{order_id}/fulfillment",
            json={"fulfillment_order_id": "pf-77"},
        )
        assert response.status_code == 200
        assert response.json()["is_fulfilled"] is True

        assert client.put(f"/admin/stores/{store_id}/orders/{order_id}/ship").status_code == 200
        response = client.put(f"/admin/stores/{store_id}/orders/{order_id}/complete")
        assert response.status_code == 200
        assert response.json()["status"] == "Completed"

        response = client.put(f"/admin/stores/{store_id}/orders/{order_id}/refund", json={"reason": "Returned"})
        assert response.json()["status"] == "Refunded"

    def test_invalid_transition(self, client, catalog, shipping_body):
        order_id = _place(client, catalog, shipping_body)["order_id"]
        response = client.put(f"/admin/stores/{catalog['store_id']}/orders/{order_id}/ship")
        assert response.status_code == 400
        assert "status" in response.json()["error"]

    def test_cancel(self, client, catalog, shipping_body):
        order_id = _place(client, catalog, shipping_body)["order_id"]
        response = client.put(
            f"/admin/stores/{catalog['store_id']}/orders/{order_id}/cancel",
            json={"reason": "Customer request"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"

    def test_order_of_another_store(self, client, catalog, other_store_id, shipping_body):
        order_id = _place(client, catalog, shipping_body)["order_id"]
        assert client.get(f"/admin/stores/{other_store_id}/orders/{order_id}").status_code == 404
