"""
Domain exceptions for the SiteLedger application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class SiteLedgerError(Exception):
    """Base exception for all SiteLedger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(SiteLedgerError):
    """Base exception for storage operations."""

    pass


class ProductNotFoundError(StorageError):
    """Product not found in the main warehouse."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class ProjectNotFoundError(StorageError):
    """Project not found."""

    def __init__(self, project_id: str):
        super().__init__(
            f"Project not found: {project_id}",
            code="PROJECT_NOT_FOUND",
            details={"project_id": project_id},
        )


class DuplicateProductError(StorageError):
    """Product with the same ID already exists."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product already exists: {product_id}",
            code="DUPLICATE_PRODUCT",
            details={"product_id": product_id},
        )


class DuplicateProjectError(StorageError):
    """Project with the same ID already exists."""

    def __init__(self, project_id: str):
        super().__init__(
            f"Project already exists: {project_id}",
            code="DUPLICATE_PROJECT",
            details={"project_id": project_id},
        )


class PersistenceError(StorageError):
    """Ledger write failed; the caller should retry."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Failed to persist {operation}: {error}",
            code="PERSISTENCE_FAILURE",
            details={"operation": operation, "error": error},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Validation Exceptions
class ValidationError(SiteLedgerError):
    """Input validation failed."""

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code=code,
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )
        self.field = field


class TransferError(ValidationError):
    """A transfer command was rejected before anything was written."""

    pass


class InvalidQuantityError(TransferError):
    """Quantity is missing, zero, negative or not a number."""

    def __init__(self, quantity: Any):
        super().__init__(
            field="quantity",
            message="Quantity must be a positive number",
            value=quantity,
            code="INVALID_QUANTITY",
        )


class InsufficientMainStockError(TransferError):
    """Main warehouse does not hold enough stock for a checkout."""

    def __init__(self, product_id: str, requested: float, available: float):
        super().__init__(
            field="quantity",
            message=f"Insufficient stock. Only {available:g} items available",
            value=requested,
            code="INSUFFICIENT_MAIN_STOCK",
        )
        self.details.update(
            {
                "product_id": product_id,
                "requested": requested,
                "available": available,
            }
        )


class InsufficientProjectStockError(TransferError):
    """Project holds less stock than a return or adjustment asks for."""

    def __init__(
        self,
        project_id: str,
        product_id: str,
        requested: float,
        available: float,
    ):
        super().__init__(
            field="quantity",
            message=(
                f"Cannot move more than available in project. "
                f"Only {available:g} items available"
            ),
            value=requested,
            code="INSUFFICIENT_PROJECT_STOCK",
        )
        self.details.update(
            {
                "project_id": project_id,
                "product_id": product_id,
                "requested": requested,
                "available": available,
            }
        )


class InvalidStatusTransitionError(ValidationError):
    """Project lifecycle transition is not allowed."""

    def __init__(self, project_id: str, current: str, target: str):
        super().__init__(
            field="status",
            message=f"Cannot move project {project_id} from '{current}' to '{target}'",
            value=target,
            code="INVALID_STATUS_TRANSITION",
        )
        self.details.update({"project_id": project_id, "current": current})


# Authorization Exceptions
class AuthorizationError(SiteLedgerError):
    """Acting user lacks the capability for an operation."""

    def __init__(self, role: str, capability: str):
        super().__init__(
            f"Role '{role}' is not allowed to {capability.replace('_', ' ')}",
            code="FORBIDDEN",
            details={"role": role, "capability": capability},
        )


# Notification Exceptions
class NotificationError(SiteLedgerError):
    """Notification delivery failed. Never fatal to the triggering operation."""

    def __init__(self, kind: str, reason: str):
        super().__init__(
            f"Failed to deliver '{kind}' notification: {reason}",
            code="NOTIFICATION_FAILURE",
            details={"kind": kind, "reason": reason},
        )


class ConfigurationError(SiteLedgerError):
    """Configuration error."""

    pass
