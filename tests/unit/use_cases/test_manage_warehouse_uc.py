"""Tests for ManageWarehouseUseCase."""

from unittest.mock import AsyncMock

import pytest

from siteledger.application.dto.requests import ActorRequest, CreateProductRequest
from siteledger.application.use_cases.manage_warehouse import ManageWarehouseUseCase
from siteledger.core.exceptions import AuthorizationError, ProductNotFoundError


@pytest.fixture
def mock_warehouse_store():
    store = AsyncMock()
    store.create_product.side_effect = lambda p: p.model_copy(update={"id": 7})
    return store


def _request(actor) -> CreateProductRequest:
    return CreateProductRequest(
        product_id="PAINT-W",
        name="White Latex Paint 4L",
        category="Paint",
        quantity=30,
        unit="cans",
        sale_price=850,
        action_by=ActorRequest(**actor.model_dump()),
    )


async def test_admin_registers_product(mock_warehouse_store, admin):
    product = await ManageWarehouseUseCase(mock_warehouse_store).create(_request(admin))

    assert product.id == 7
    assert product.quantity == 30
    response = ManageWarehouseUseCase.to_response(product)
    assert response.total_value_display == "₱25,500.00"


async def test_manager_cannot_register(mock_warehouse_store, manager):
    with pytest.raises(AuthorizationError):
        await ManageWarehouseUseCase(mock_warehouse_store).create(_request(manager))
    mock_warehouse_store.create_product.assert_not_called()


async def test_get_missing(mock_warehouse_store):
    mock_warehouse_store.get_product.return_value = None
    with pytest.raises(ProductNotFoundError):
        await ManageWarehouseUseCase(mock_warehouse_store).get("NOPE")
