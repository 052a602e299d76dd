"""
Domain exceptions for the inventory service.

Every error carries a machine-readable code and a details dict; the API layer
maps each family to an HTTP status.
"""

from typing import Any


class InventoryError(Exception):
    """Base exception for all inventory service errors."""

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


# 400 family
class InvalidArgumentError(InventoryError):
    """A field failed validation."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            message,
            code="INVALID_ARGUMENT",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
            },
        )
        self.field = field


class InvalidRequestError(InventoryError):
    """The request as a whole is malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="INVALID_REQUEST", details=details)


# 401 / 403
class UnauthorizedError(InventoryError):
    """No recognized authenticated principal."""

    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(InventoryError):
    """The principal's role does not permit the operation."""

    def __init__(self, message: str = "Access denied", role: str | None = None):
        super().__init__(message, code="FORBIDDEN", details={"role": role})


# 404 family
class NotFoundError(InventoryError):
    """Base exception for missing entities."""

    pass


class ItemNotFoundError(NotFoundError):
    """Inventory item not found."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class SupplierNotFoundError(NotFoundError):
    """Supplier not found."""

    def __init__(self, supplier_id: str):
        super().__init__(
            f"Supplier not found: {supplier_id}",
            code="SUPPLIER_NOT_FOUND",
            details={"supplier_id": supplier_id},
        )


class UserNotFoundError(NotFoundError):
    """Application user not found."""

    def __init__(self, email: str):
        super().__init__(
            f"User not found: {email}",
            code="USER_NOT_FOUND",
            details={"email": email},
        )


# 409 family
class ConflictError(InventoryError):
    """The operation conflicts with current state."""

    pass


class DuplicateResourceError(ConflictError):
    """A uniqueness constraint would be violated."""

    def __init__(self, resource: str, name: str):
        super().__init__(
            f"{resource} already exists: {name}",
            code="DUPLICATE_RESOURCE",
            details={"resource": resource, "name": name},
        )


class IllegalStateError(ConflictError):
    """A business precondition does not hold."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="ILLEGAL_STATE", details=details)


class InsufficientStockError(ConflictError):
    """A quantity adjustment would drive stock below zero."""

    def __init__(self, item_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for item {item_id}: "
            f"available {available}, requested change {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "requested": requested,
                "available": available,
            },
        )


# 500 family
class StorageError(InventoryError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(InventoryError):
    """Configuration error."""

    pass
