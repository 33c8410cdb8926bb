"""API tests for project inventory transfers, snapshots and exports."""

import csv
import io

import pytest
from httpx import AsyncClient

TRANSFERS = "/api/projects/PRJ-001/inventory/transfers"


def _transfer(actor: dict, action: str = "checked_out", quantity: float = 10, **extra) -> dict:
    return {"product_id": "CEM-40", "action": action, "quantity": quantity, "action_by": actor, **extra}


@pytest.fixture
async def stocked(client: AsyncClient, active_project, manager_body):
    """PRJ-001 holds 4 bags of cement: 20 in, 6 back, 10 consumed. Reorder point 5."""
    for body in (
        _transfer(manager_body, quantity=20, project_reorder_point=5),
        _transfer(manager_body, "returned", 6),
        _transfer(manager_body, "adjusted", 10, notes="Footings"),
    ):
        response = await client.post(TRANSFERS, json=body)
        assert response.status_code == 201, response.text


class TestRecordTransfer:
    async def test_checkout(self, client: AsyncClient, active_project, manager_body):
        response = await client.post(TRANSFERS, json=_transfer(manager_body, project_reorder_point=3))

        assert response.status_code == 201
        data = response.json()
        assert data["record"]["record_id"] == "PI-0001"
        assert data["record"]["action_label"] == "Transferred to Project"
        assert data["record"]["total_value"] == 500
        assert data["item"]["current_quantity"] == 10
        assert data["item"]["name"] == "Portland Cement 40kg"

        product = await client.get("/api/warehouse/products/CEM-40")
        assert product.json()["quantity"] == 90

    async def test_insufficient_main_stock(self, client: AsyncClient, active_project, manager_body):
        response = await client.post(TRANSFERS, json=_transfer(manager_body, quantity=101))

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_MAIN_STOCK"
        assert body["field"] == "quantity"
        assert "Only 100 items available" in body["message"]

    async def test_insufficient_project_stock(self, client: AsyncClient, stocked, manager_body):
        response = await client.post(TRANSFERS, json=_transfer(manager_body, "returned", 5))

        assert response.status_code == 409
        assert response.json()["error_code"] == "INSUFFICIENT_PROJECT_STOCK"
        assert response.json()["details"]["available"] == 4

    @pytest.mark.parametrize("quantity", [0, -3])
    async def test_non_positive_quantity(self, client: AsyncClient, active_project, manager_body, quantity):
        response = await client.post(TRANSFERS, json=_transfer(manager_body, quantity=quantity))

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_QUANTITY"
        assert response.json()["field"] == "quantity"

    async def test_viewer_forbidden(self, client: AsyncClient, active_project, viewer_body):
        response = await client.post(TRANSFERS, json=_transfer(viewer_body))
        assert response.status_code == 403

    async def test_unknown_project(self, client: AsyncClient, active_project, manager_body):
        response = await client.post(
            "/api/projects/NOPE/inventory/transfers", json=_transfer(manager_body)
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "PROJECT_NOT_FOUND"

    async def test_unknown_action_is_422(self, client: AsyncClient, active_project, manager_body):
        response = await client.post(TRANSFERS, json=_transfer(manager_body, "stolen"))
        assert response.status_code == 422
        assert response.json()["field"] == "action"

    async def test_low_stock_notifies(self, client: AsyncClient, stocked, notifier):
        kinds = [call.args[0].kind.value for call in notifier.notify.call_args_list]
        assert "low_stock" in kinds


class TestReads:
    async def test_inventory_snapshot(self, client: AsyncClient, stocked):
        response = await client.get("/api/projects/PRJ-001/inventory")

        assert response.status_code == 200
        data = response.json()
        (item,) = data["items"]
        assert item["current_quantity"] == 4
        assert item["total_transferred_in"] == 20
        assert item["total_returned_out"] == 6
        assert item["total_adjusted"] == 10
        assert item["total_value"] == 700
        assert item["total_cost"] == 200
        assert item["stock_status"] == "Low Stock"
        assert data["stats"]["low_stock_items"] == 1
        assert [r["record_id"] for r in data["recent"]] == ["PI-0003", "PI-0002", "PI-0001"]

    async def test_single_item(self, client: AsyncClient, stocked):
        response = await client.get("/api/projects/PRJ-001/inventory/items/CEM-40")
        assert response.json()["project_reorder_point"] == 5

        missing = await client.get("/api/projects/PRJ-001/inventory/items/SAND")
        assert missing.status_code == 404

    async def test_transfers_and_recent(self, client: AsyncClient, stocked):
        history = await client.get(TRANSFERS)
        assert [r["action"] for r in history.json()] == ["checked_out", "returned", "adjusted"]

        recent = await client.get("/api/projects/PRJ-001/inventory/recent", params={"limit": 1})
        assert [r["notes"] for r in recent.json()] == ["Footings"]

        everywhere = await client.get("/api/inventory/transfers")
        assert len(everywhere.json()) == 3

    async def test_stats_and_categories(self, client: AsyncClient, stocked):
        stats = await client.get("/api/projects/PRJ-001/inventory/stats")
        assert stats.json()["total_cost_display"] == "₱200.00"

        categories = await client.get("/api/projects/PRJ-001/inventory/categories")
        assert categories.json()[0]["category"] == "Cement"
        assert categories.json()[0]["items_with_reorder_point"] == 1


class TestExport:
    async def test_transactions_csv(self, client: AsyncClient, stocked):
        response = await client.get("/api/projects/PRJ-001/inventory/export/transactions")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "project-inventory-transactions-PRJ-001-" in response.headers["content-disposition"]
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0][0] == "Transaction ID"
        assert [row[3] for row in rows[1:]] == ["Adjusted", "Returned to Main", "Transferred to Project"]

    async def test_summary_csv(self, client: AsyncClient, stocked):
        response = await client.get("/api/projects/PRJ-001/inventory/export/summary")
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[1] == ["Cement", "1", "4", "₱200.00", "1", "1"]

    async def test_unknown_kind(self, client: AsyncClient, stocked):
        response = await client.get("/api/projects/PRJ-001/inventory/export/pdf")
        assert response.status_code == 422
