"""API tests for warehouse products and project lifecycle."""

from httpx import AsyncClient


class TestWarehouseProducts:
    async def test_create_list_get(self, client: AsyncClient, admin_body):
        response = await client.post(
            "/api/warehouse/products",
            json={"product_id": "SAND", "name": "Washed Sand", "quantity": 12, "sale_price": 900, "action_by": admin_body},
        )
        assert response.status_code == 201
        assert response.json()["total_value_display"] == "₱10,800.00"

        listed = await client.get("/api/warehouse/products")
        assert [p["product_id"] for p in listed.json()] == ["SAND"]

        one = await client.get("/api/warehouse/products/SAND")
        assert one.json()["category"] == "Uncategorized"

    async def test_missing_product_is_404(self, client: AsyncClient):
        response = await client.get("/api/warehouse/products/NOPE")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_manager_cannot_create(self, client: AsyncClient, manager_body):
        response = await client.post(
            "/api/warehouse/products",
            json={"product_id": "SAND", "name": "Washed Sand", "action_by": manager_body},
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    async def test_duplicate_is_409(self, client: AsyncClient, admin_body):
        body = {"product_id": "SAND", "name": "Washed Sand", "action_by": admin_body}
        await client.post("/api/warehouse/products", json=body)

        response = await client.post("/api/warehouse/products", json=body)

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_PRODUCT"

    async def test_negative_opening_stock_is_422(self, client: AsyncClient, admin_body):
        response = await client.post(
            "/api/warehouse/products",
            json={"product_id": "SAND", "name": "Sand", "quantity": -1, "action_by": admin_body},
        )
        assert response.status_code == 422
        assert response.json()["field"] == "quantity"


class TestProjectLifecycle:
    async def test_create_confirm_complete(self, client: AsyncClient, admin_body, notifier):
        created = await client.post(
            "/api/projects",
            json={"project_id": "PRJ-009", "name": "Warehouse Annex", "user_id": "u-client", "action_by": admin_body},
        )
        assert created.status_code == 201
        assert created.json()["status"] == "pending"

        confirmed = await client.post("/api/projects/PRJ-009/confirm", json={"action_by": admin_body})
        assert confirmed.json()["status"] == "active"
        assert confirmed.json()["confirmed_by"] == "u-admin"

        completed = await client.post("/api/projects/PRJ-009/complete", json={"action_by": admin_body})
        assert completed.json()["status"] == "completed"
        assert completed.json()["end_date"] is not None

        kinds = [call.args[0].kind.value for call in notifier.notify.call_args_list]
        assert kinds == ["project_created", "project_status_changed", "project_status_changed"]

    async def test_invalid_transition_is_409(self, client: AsyncClient, admin_body):
        await client.post(
            "/api/projects", json={"project_id": "PRJ-009", "name": "Annex", "action_by": admin_body}
        )

        response = await client.post("/api/projects/PRJ-009/complete", json={"action_by": admin_body})

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INVALID_STATUS_TRANSITION"
        assert body["field"] == "status"

    async def test_list_by_status(self, client: AsyncClient, active_project, admin_body):
        await client.post(
            "/api/projects", json={"project_id": "PRJ-002", "name": "Clinic", "action_by": admin_body}
        )

        active = await client.get("/api/projects", params={"status": "active"})
        assert [p["project_id"] for p in active.json()] == ["PRJ-001"]

        everything = await client.get("/api/projects")
        assert len(everything.json()) == 2

    async def test_missing_project_is_404(self, client: AsyncClient):
        response = await client.get("/api/projects/NOPE")
        assert response.status_code == 404
        assert response.json()["path"] == "/api/projects/NOPE"

    async def test_manager_cannot_cancel(self, client: AsyncClient, active_project, manager_body):
        response = await client.post("/api/projects/PRJ-001/cancel", json={"action_by": manager_body})
        assert response.status_code == 403
