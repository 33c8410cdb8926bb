"""Data transfer objects between the API and the use cases."""

from siteledger.application.dto.requests import (
    ActorRequest,
    CreateProductRequest,
    CreateProjectRequest,
    ProjectActionRequest,
    TransferRequest,
)
from siteledger.application.dto.responses import (
    CategoryGroupResponse,
    CurrentInventoryItemResponse,
    ErrorResponse,
    HealthResponse,
    InventoryStatsResponse,
    LedgerRecordResponse,
    ProductResponse,
    ProjectInventoryResponse,
    ProjectResponse,
    TransferResponse,
)

__all__ = [
    # Requests
    "ActorRequest",
    "TransferRequest",
    "CreateProductRequest",
    "CreateProjectRequest",
    "ProjectActionRequest",
    # Responses
    "LedgerRecordResponse",
    "CurrentInventoryItemResponse",
    "TransferResponse",
    "InventoryStatsResponse",
    "CategoryGroupResponse",
    "ProjectInventoryResponse",
    "ProductResponse",
    "ProjectResponse",
    "HealthResponse",
    "ErrorResponse",
]
