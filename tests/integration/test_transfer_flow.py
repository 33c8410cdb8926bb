"""End-to-end flow through the running application and a real database."""

import csv
import io
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from siteledger.api.main import create_app
from siteledger.config import Settings
from siteledger.config.settings import StorageSettings

ADMIN = {"user_id": "u-admin", "name": "Ana Admin", "role": "admin"}
MANAGER = {"user_id": "u-pm", "name": "Paolo Manager", "role": "project_manager"}


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage=StorageSettings(data_dir=tmp_path / "flow"))


def _setup(client: TestClient) -> None:
    for product in (
        {"product_id": "CEM-40", "name": "Portland Cement 40kg", "category": "Cement", "quantity": 50, "unit": "bags", "sale_price": 50},
        {"product_id": "REBAR-10", "name": "Rebar 10mm x 6m", "category": "Steel", "quantity": 200, "unit": "pcs", "sale_price": 120},
    ):
        assert client.post("/api/warehouse/products", json={**product, "action_by": ADMIN}).status_code == 201

    for project_id, name in (("PRJ-001", "Riverside Duplex"), ("PRJ-002", "Hillside Clinic")):
        assert client.post(
            "/api/projects", json={"project_id": project_id, "name": name, "action_by": ADMIN}
        ).status_code == 201
        assert client.post(f"/api/projects/{project_id}/confirm", json={"action_by": ADMIN}).status_code == 200


def _transfer(client: TestClient, project_id: str, product_id: str, action: str, quantity: float, **extra):
    return client.post(
        f"/api/projects/{project_id}/inventory/transfers",
        json={"product_id": product_id, "action": action, "quantity": quantity, "action_by": MANAGER, **extra},
    )


class TestTransferFlow:
    def test_full_flow_survives_restart(self, settings: Settings):
        with TestClient(create_app(settings)) as client:
            _setup(client)

            assert _transfer(client, "PRJ-001", "CEM-40", "checked_out", 30, project_reorder_point=10).status_code == 201
            assert _transfer(client, "PRJ-002", "CEM-40", "checked_out", 15).status_code == 201
            assert _transfer(client, "PRJ-001", "REBAR-10", "checked_out", 40).status_code == 201

            # Only 5 bags left in the warehouse
            refused = _transfer(client, "PRJ-002", "CEM-40", "checked_out", 6)
            assert refused.status_code == 409

            assert _transfer(client, "PRJ-001", "CEM-40", "adjusted", 18).status_code == 201
            assert _transfer(client, "PRJ-001", "CEM-40", "returned", 4).status_code == 201

            # Reorder point carried forward from the first checkout
            item = client.get("/api/projects/PRJ-001/inventory/items/CEM-40").json()
            assert item["current_quantity"] == 8
            assert item["project_reorder_point"] == 10
            assert item["is_low_stock"] is True

            warehouse = client.get("/api/warehouse/products/CEM-40").json()
            assert warehouse["quantity"] == 50 - 30 - 15 + 4

            # Other projects are untouched by PRJ-001's movements
            other = client.get("/api/projects/PRJ-002/inventory").json()
            assert [i["current_quantity"] for i in other["items"]] == [15]

            before = client.get("/api/projects/PRJ-001/inventory").json()["items"]

        with TestClient(create_app(settings)) as client:
            after = client.get("/api/projects/PRJ-001/inventory").json()["items"]
            assert after == before

            export = client.get("/api/projects/PRJ-001/inventory/export/inventory")
            rows = list(csv.reader(io.StringIO(export.text)))
            assert [row[0] for row in rows[1:]] == ["CEM-40", "REBAR-10"]
            assert rows[1][13] == "Low Stock"
            assert rows[2][10] == "₱4,800.00"

    def test_rejections_leave_no_trace(self, settings: Settings):
        with TestClient(create_app(settings)) as client:
            _setup(client)

            assert _transfer(client, "PRJ-001", "CEM-40", "returned", 1).status_code == 409
            assert _transfer(client, "PRJ-001", "CEM-40", "checked_out", 0).status_code == 400
            assert _transfer(client, "PRJ-001", "NOPE", "checked_out", 1).status_code == 404

            assert client.get("/api/inventory/transfers").json() == []
            assert client.get("/api/warehouse/products/CEM-40").json()["quantity"] == 50
