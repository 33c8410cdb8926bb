"""API routes."""

from siteledger.api.routes.health import router as health_router
from siteledger.api.routes.inventory import router as inventory_router
from siteledger.api.routes.project_inventory import router as project_inventory_router
from siteledger.api.routes.projects import router as projects_router
from siteledger.api.routes.warehouse import router as warehouse_router

__all__ = [
    "health_router",
    "inventory_router",
    "project_inventory_router",
    "projects_router",
    "warehouse_router",
]
