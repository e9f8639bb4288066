"""
HTTP tests for /api/v1/orders: envelopes, status codes and access rules.
"""

import pytest

from enums.user_role import UserRole


def order_body(*lines, **overrides) -> dict:
    body = {
        "items": [{"product_id": product_id, "quantity": quantity} for product_id, quantity in lines],
        "shipping_address": {
            "street": "1 Main St", "city": "Springfield", "state": "IL", "zip_code": "62701", "country": "US",
        },
        "payment_method": "credit_card",
    }
    body.update(overrides)
    return body


class TestCreateOrderEndpoint:

    @pytest.mark.asyncio
    async def test_requires_token(self, api_client):
        response = await api_client.post("/api/v1/orders", json=order_body((1, 1)))

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authorized to access this route"}

    @pytest.mark.asyncio
    async def test_rejects_tampered_token(self, api_client, make_user, auth_headers):
        user = await make_user()
        headers = {"Authorization": auth_headers(user)["Authorization"][:-4] + "0000"}

        response = await api_client.get("/api/v1/orders/my", headers=headers)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_created(self, api_client, make_user, make_product, auth_headers):
        user = await make_user()
        shirt = await make_product("Classic Tee", price=10.0, stock=5)
        cap = await make_product("Logo Cap", price=5.0, stock=5)

        response = await api_client.post("/api/v1/orders", json=order_body((shirt.id, 2), (cap.id, 1)),
                                          headers=auth_headers(user))

        assert response.status_code == 201
        payload = response.json()
        assert payload["success"] is True
        assert payload["data"]["total_amount"] == 25.0
        assert payload["data"]["status"] == "pending"
        assert payload["data"]["tracking"]["current_status"] == "Order received"

    @pytest.mark.asyncio
    async def test_client_total_is_ignored(self, api_client, make_user, make_product, auth_headers):
        user = await make_user()
        shirt = await make_product(price=10.0, stock=5)

        response = await api_client.post("/api/v1/orders", json=order_body((shirt.id, 1), total_amount=0.01),
                                          headers=auth_headers(user))

        assert response.json()["data"]["total_amount"] == 10.0

    @pytest.mark.asyncio
    async def test_empty_items(self, api_client, make_user, auth_headers):
        user = await make_user()

        response = await api_client.post("/api/v1/orders", json=order_body(), headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Please add items to your order"}

    @pytest.mark.asyncio
    async def test_insufficient_stock(self, api_client, make_user, make_product, auth_headers):
        user = await make_user()
        shirt = await make_product("Classic Tee", stock=1)

        response = await api_client.post("/api/v1/orders", json=order_body((shirt.id, 2)),
                                          headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json()["error"] == "Insufficient stock for product: Classic Tee"

    @pytest.mark.asyncio
    async def test_unknown_product(self, api_client, make_user, auth_headers):
        user = await make_user()

        response = await api_client.post("/api/v1/orders", json=order_body((999, 1)), headers=auth_headers(user))

        assert response.status_code == 404
        assert response.json()["error"] == "Product not found with id: 999"

    @pytest.mark.asyncio
    async def test_incomplete_address(self, api_client, make_user, make_product, auth_headers):
        user = await make_user()
        shirt = await make_product()
        body = order_body((shirt.id, 1))
        del body["shipping_address"]["zip_code"]

        response = await api_client.post("/api/v1/orders", json=body, headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "zip_code" in response.json()["error"]


class TestReadOrders:

    @pytest.mark.asyncio
    async def test_my_orders_paginated(self, api_client, make_user, make_product, auth_headers):
        user = await make_user()
        shirt = await make_product(stock=50)
        for _ in range(3):
            await api_client.post("/api/v1/orders", json=order_body((shirt.id, 1)), headers=auth_headers(user))

        response = await api_client.get("/api/v1/orders/my", params={"page": 1, "limit": 2},
                                         headers=auth_headers(user))

        payload = response.json()
        assert response.status_code == 200
        assert payload["count"] == 2
        assert payload["pagination"] == {"next": {"page": 2, "limit": 2}}
        assert payload["data"][0]["id"] > payload["data"][1]["id"]

    @pytest.mark.asyncio
    async def test_foreign_order_is_401(self, api_client, make_user, make_product, auth_headers):
        owner = await make_user("owner@example.com")
        stranger = await make_user("stranger@example.com")
        shirt = await make_product()
        created = await api_client.post("/api/v1/orders", json=order_body((shirt.id, 1)), headers=auth_headers(owner))
        order_id = created.json()["data"]["id"]

        response = await api_client.get(f"/api/v1/orders/{order_id}", headers=auth_headers(stranger))

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authorized to access this order"}

    @pytest.mark.asyncio
    async def test_missing_order_is_404(self, api_client, make_user, auth_headers):
        user = await make_user()

        response = await api_client.get("/api/v1/orders/31337", headers=auth_headers(user))

        assert response.status_code == 404
        assert response.json()["error"] == "Order not found with id of 31337"


class TestAdminEndpoints:

    @pytest.mark.asyncio
    async def test_non_admin_is_403(self, api_client, make_user, auth_headers):
        user = await make_user()

        for path in ("/api/v1/orders", "/api/v1/orders/stats/all"):
            response = await api_client.get(path, headers=auth_headers(user))
            assert response.status_code == 403
            assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_admin_lists_all_and_updates_status(self, api_client, make_user, make_product, auth_headers):
        customer = await make_user("customer@example.com")
        admin = await make_user("admin@example.com", role=UserRole.ADMIN)
        shirt = await make_product(stock=5)
        created = await api_client.post("/api/v1/orders", json=order_body((shirt.id, 1)),
                                        headers=auth_headers(customer))
        order_id = created.json()["data"]["id"]

        listing = await api_client.get("/api/v1/orders", headers=auth_headers(admin))
        shipped = await api_client.put(f"/api/v1/orders/{order_id}/status", json={"status": "shipped"},
                                       headers=auth_headers(admin))
        paid = await api_client.put(f"/api/v1/orders/{order_id}/payment-status",
                                    json={"payment_status": "completed"}, headers=auth_headers(admin))

        assert listing.json()["count"] == 1
        assert shipped.json()["data"]["status"] == "shipped"
        assert shipped.json()["data"]["tracking"]["current_status"] == "Order has been shipped"
        assert paid.json()["data"]["payment_status"] == "completed"

    @pytest.mark.asyncio
    async def test_invalid_status_value(self, api_client, make_user, auth_headers):
        admin = await make_user("admin@example.com", role=UserRole.ADMIN)

        response = await api_client.put("/api/v1/orders/1/status", json={"status": "lost"},
                                        headers=auth_headers(admin))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_stats(self, api_client, make_user, make_product, auth_headers):
        customer = await make_user("customer@example.com")
        admin = await make_user("admin@example.com", role=UserRole.ADMIN)
        shirt = await make_product(price=10.0, stock=5)
        await api_client.post("/api/v1/orders", json=order_body((shirt.id, 2)), headers=auth_headers(customer))

        response = await api_client.get("/api/v1/orders/stats/all", headers=auth_headers(admin))

        data = response.json()["data"]
        assert data["total_orders"] == 1
        assert data["total_revenue"] == 20.0
        assert data["status_distribution"]["pending"] == 1
        assert data["status_distribution"]["delivered"] == 0
        assert len(data["daily_orders"]) == 1
