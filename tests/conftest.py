"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from siteledger.config import reset_settings
from siteledger.core.entities import (
    ActionBy,
    LedgerRecord,
    Product,
    Project,
    ProjectStatus,
    TransferAction,
)

BASE_TIME = datetime(2024, 3, 2, 8, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Every test gets default settings with data under its own tmp dir."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("NOTIFY_WEBHOOK_URL", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def admin() -> ActionBy:
    return ActionBy(user_id="u-admin", name="Ana Admin", role="admin")


@pytest.fixture
def manager() -> ActionBy:
    return ActionBy(user_id="u-pm", name="Paolo Manager", role="project_manager")


@pytest.fixture
def viewer() -> ActionBy:
    return ActionBy(user_id="u-client", name="Carla Client", role="user")


@pytest.fixture
def sample_product() -> Product:
    return Product(
        product_id="CEM-40",
        name="Portland Cement 40kg",
        category="Cement",
        quantity=100,
        unit="bags",
        supplier="Holcim",
        location="Bay 3",
        unit_cost=40.0,
        sale_price=50.0,
    )


@pytest.fixture
def sample_project() -> Project:
    return Project(
        project_id="PRJ-001",
        name="Riverside Duplex",
        status=ProjectStatus.ACTIVE,
        user_id="u-client",
        user_email="client@example.com",
    )


@pytest.fixture
def make_record(admin: ActionBy) -> Callable[..., LedgerRecord]:
    """
    Factory for ledger records.

    Records get increasing timestamps one minute apart unless `minute` is given.
    """
    counter = {"n": 0}

    def _make(
        action: TransferAction | str,
        quantity: float,
        *,
        product_id: str = "CEM-40",
        project_id: str = "PRJ-001",
        sale_price: float = 50.0,
        total_value: float | None = None,
        reorder_point: float | None = None,
        minute: int | None = None,
        record_id: str | None = None,
    ) -> LedgerRecord:
        counter["n"] += 1
        action = TransferAction(action)
        if total_value is None:
            total_value = 0.0 if action is TransferAction.ADJUSTED else quantity * sale_price
        offset = counter["n"] if minute is None else minute
        return LedgerRecord(
            record_id=record_id or f"PI-{counter['n']:04d}",
            project_id=project_id,
            product_id=product_id,
            action=action,
            quantity=quantity,
            unit="bags",
            supplier="Holcim",
            sale_price=sale_price,
            total_value=total_value,
            project_reorder_point=reorder_point,
            action_by=admin,
            created_at=BASE_TIME + timedelta(minutes=offset),
        )

    return _make
