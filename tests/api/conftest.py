"""Fixtures for API tests: a real app over a migrated temporary database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from siteledger.api.main import create_app
from siteledger.config import Settings
from siteledger.config.settings import StorageSettings
from siteledger.infrastructure.storage.sqlite import ConnectionPool
from siteledger.infrastructure.storage.sqlite.migrations import run_migrations

ADMIN = {"user_id": "u-admin", "name": "Ana Admin", "role": "admin"}
MANAGER = {"user_id": "u-pm", "name": "Paolo Manager", "role": "project_manager"}
VIEWER = {"user_id": "u-client", "name": "Carla Client", "role": "user"}


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage=StorageSettings(data_dir=tmp_path / "api"))


@pytest.fixture
async def api_pool(settings: Settings) -> AsyncGenerator[ConnectionPool, None]:
    await run_migrations(settings.storage.db_path)
    pool = ConnectionPool.from_settings(settings)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def app(settings: Settings, api_pool: ConnectionPool, notifier: AsyncMock) -> FastAPI:
    """ASGITransport skips the lifespan, so the pool and notifier are set here."""
    app = create_app(settings)
    app.state.pool = api_pool
    app.state.notifier = notifier
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def active_project(client: AsyncClient) -> dict:
    """Product CEM-40 (100 bags at 50.00) and active project PRJ-001."""
    response = await client.post(
        "/api/warehouse/products",
        json={
            "product_id": "CEM-40",
            "name": "Portland Cement 40kg",
            "category": "Cement",
            "quantity": 100,
            "unit": "bags",
            "supplier": "Holcim",
            "location": "Bay 3",
            "unit_cost": 40,
            "sale_price": 50,
            "action_by": ADMIN,
        },
    )
    assert response.status_code == 201

    response = await client.post(
        "/api/projects",
        json={"project_id": "PRJ-001", "name": "Riverside Duplex", "action_by": ADMIN},
    )
    assert response.status_code == 201

    response = await client.post("/api/projects/PRJ-001/confirm", json={"action_by": ADMIN})
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def admin_body() -> dict:
    return dict(ADMIN)


@pytest.fixture
def manager_body() -> dict:
    return dict(MANAGER)


@pytest.fixture
def viewer_body() -> dict:
    return dict(VIEWER)
