"""End-to-end inventory flows over HTTP against a real SQLite database."""

from httpx import AsyncClient


async def _create_supplier(client: AsyncClient, headers: dict, name: str = "Acme") -> str:
    response = await client.post("/api/suppliers", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


async def _create_widget(client: AsyncClient, headers: dict, supplier_id: str, quantity=10) -> dict:
    response = await client.post(
        "/api/inventory",
        json={"name": "Widget", "quantity": quantity, "price": 5.00, "supplierId": supplier_id},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def _history(client: AsyncClient, headers: dict, item_id: str) -> list[dict]:
    response = await client.get(f"/api/stock-history/item/{item_id}", headers=headers)
    assert response.status_code == 200
    return response.json()


class TestItemLifecycle:
    async def test_create_logs_initial_stock(self, client, admin_headers):
        supplier_id = await _create_supplier(client, admin_headers)

        item = await _create_widget(client, admin_headers, supplier_id)

        assert item["quantity"] == 10
        assert item["createdBy"] == "admin@example.com"
        (row,) = await _history(client, admin_headers, item["id"])
        assert row["change"] == 10
        assert row["reason"] == "INITIAL_STOCK"
        assert row["priceAtChange"] == 5.0
        assert row["supplierId"] == supplier_id

    async def test_zero_quantity_create_has_no_history(self, client, admin_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        item = await _create_widget(client, admin_headers, supplier_id, quantity=0)
        assert await _history(client, admin_headers, item["id"]) == []

    async def test_user_adjusts_and_reprices(self, client, admin_headers, user_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        item = await _create_widget(client, admin_headers, supplier_id)

        sold = await client.patch(
            f"/api/inventory/{item['id']}/quantity",
            params={"delta": -4, "reason": "SOLD"},
            headers=user_headers,
        )
        repriced = await client.patch(
            f"/api/inventory/{item['id']}/price", params={"price": "6.50"}, headers=user_headers
        )

        assert sold.json()["quantity"] == 6
        assert repriced.json()["price"] == 6.5
        rows = await _history(client, admin_headers, item["id"])
        assert [(r["reason"], r["change"]) for r in rows] == [
            ("PRICE_CHANGE", 0),
            ("SOLD", -4),
            ("INITIAL_STOCK", 10),
        ]
        assert rows[0]["createdBy"] == "clerk@example.com"

    async def test_overdraw_is_rejected_without_side_effects(self, client, admin_headers, user_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        item = await _create_widget(client, admin_headers, supplier_id)

        response = await client.patch(
            f"/api/inventory/{item['id']}/quantity",
            params={"delta": -11, "reason": "SOLD"},
            headers=user_headers,
        )

        assert response.status_code == 409
        current = await client.get(f"/api/inventory/{item['id']}", headers=user_headers)
        assert current.json()["quantity"] == 10
        assert len(await _history(client, admin_headers, item["id"])) == 1

    async def test_user_cannot_rename(self, client, admin_headers, user_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        item = await _create_widget(client, admin_headers, supplier_id)

        response = await client.put(
            f"/api/inventory/{item['id']}",
            json={"name": "Gadget", "quantity": 12, "price": 5.00, "supplierId": supplier_id},
            headers=user_headers,
        )

        assert response.status_code == 403
        current = await client.get(f"/api/inventory/{item['id']}", headers=user_headers)
        assert current.json()["name"] == "Widget"
        assert current.json()["quantity"] == 10

    async def test_user_post_is_forbidden(self, client, admin_headers, user_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        response = await client.post(
            "/api/inventory",
            json={"name": "Widget", "quantity": 1, "price": 1, "supplierId": supplier_id},
            headers=user_headers,
        )
        assert response.status_code == 403

    async def test_duplicate_name_ignores_case(self, client, admin_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        await _create_widget(client, admin_headers, supplier_id)

        response = await client.post(
            "/api/inventory",
            json={"name": "WIDGET", "quantity": 1, "price": 1, "supplierId": supplier_id},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_RESOURCE"

    async def test_missing_field_names_it(self, client, admin_headers):
        supplier_id = await _create_supplier(client, admin_headers)

        response = await client.post(
            "/api/inventory",
            json={"name": "Widget", "quantity": 1, "supplierId": supplier_id},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Price must be positive or greater than zero"

    async def test_unknown_supplier_is_404(self, client, admin_headers):
        response = await client.post(
            "/api/inventory",
            json={"name": "Widget", "quantity": 1, "price": 1, "supplierId": "missing"},
            headers=admin_headers,
        )
        assert response.status_code == 404


class TestSupplierDeletion:
    async def test_blocked_until_stock_written_off(self, client, admin_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        item = await _create_widget(client, admin_headers, supplier_id, quantity=5)

        blocked = await client.delete(f"/api/suppliers/{supplier_id}", headers=admin_headers)
        assert blocked.status_code == 409
        assert blocked.json()["message"] == "Cannot delete supplier with linked items"

        deleted = await client.delete(
            f"/api/inventory/{item['id']}", params={"reason": "DAMAGED"}, headers=admin_headers
        )
        assert deleted.status_code == 204

        rows = await _history(client, admin_headers, item["id"])
        assert [(r["reason"], r["change"]) for r in rows] == [("DAMAGED", -5), ("INITIAL_STOCK", 5)]

        response = await client.delete(f"/api/suppliers/{supplier_id}", headers=admin_headers)
        assert response.status_code == 204

    async def test_delete_with_sale_reason_rejected(self, client, admin_headers):
        supplier_id = await _create_supplier(client, admin_headers)
        item = await _create_widget(client, admin_headers, supplier_id)

        response = await client.delete(
            f"/api/inventory/{item['id']}", params={"reason": "SOLD"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert (await client.get(f"/api/inventory/{item['id']}", headers=admin_headers)).status_code == 200

    async def test_supplier_name_unique(self, client, admin_headers):
        await _create_supplier(client, admin_headers, "Acme")
        response = await client.post("/api/suppliers", json={"name": "acme"}, headers=admin_headers)
        assert response.status_code == 409


class TestSession:
    async def test_me_after_login(self, client, admin_headers):
        response = await client.get("/api/me", headers=admin_headers)
        assert response.json()["role"] == "ADMIN"

    async def test_clerk_is_user(self, client, user_headers):
        response = await client.get("/api/me", headers=user_headers)
        assert response.json()["role"] == "USER"
