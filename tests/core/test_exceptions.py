"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    ConflictError,
    DatabaseError,
    DuplicateResourceError,
    ForbiddenError,
    IllegalStateError,
    InsufficientStockError,
    InvalidArgumentError,
    InvalidRequestError,
    InventoryError,
    ItemNotFoundError,
    NotFoundError,
    StorageError,
    SupplierNotFoundError,
    UnauthorizedError,
    UserNotFoundError,
)


class TestInventoryError:
    """Tests for base InventoryError exception."""

    def test_basic_initialization(self):
        error = InventoryError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "InventoryError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = InventoryError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"


class TestBadRequestErrors:
    def test_invalid_argument_names_field(self):
        error = InvalidArgumentError("price", "Price must be positive or greater than zero", -1)
        assert error.code == "INVALID_ARGUMENT"
        assert error.field == "price"
        assert error.details == {"field": "price", "value": "-1"}

    def test_invalid_argument_truncates_long_values(self):
        error = InvalidArgumentError("name", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_invalid_argument_none_value(self):
        error = InvalidArgumentError("name", "Product name cannot be null or empty")
        assert error.details["value"] is None

    def test_invalid_request(self):
        error = InvalidRequestError("endDate must be >= startDate", details={"page": 0})
        assert error.code == "INVALID_REQUEST"
        assert error.details == {"page": 0}


class TestAuthErrors:
    def test_unauthorized_default_message(self):
        error = UnauthorizedError()
        assert error.code == "UNAUTHORIZED"
        assert error.message == "Unauthorized access"

    def test_forbidden_carries_role(self):
        error = ForbiddenError("Users are only allowed to change quantity or price", role="USER")
        assert error.code == "FORBIDDEN"
        assert error.details["role"] == "USER"


class TestNotFoundErrors:
    @pytest.mark.parametrize(
        ("error", "code", "key"),
        [
            (ItemNotFoundError("i-1"), "ITEM_NOT_FOUND", "item_id"),
            (SupplierNotFoundError("s-1"), "SUPPLIER_NOT_FOUND", "supplier_id"),
            (UserNotFoundError("a@b.c"), "USER_NOT_FOUND", "email"),
        ],
    )
    def test_not_found_family(self, error, code, key):
        assert isinstance(error, NotFoundError)
        assert error.code == code
        assert key in error.details


class TestConflictErrors:
    def test_duplicate_resource(self):
        error = DuplicateResourceError("Inventory item", "Widget")
        assert isinstance(error, ConflictError)
        assert error.message == "Inventory item already exists: Widget"
        assert error.code == "DUPLICATE_RESOURCE"

    def test_illegal_state(self):
        error = IllegalStateError("Cannot delete supplier with linked items")
        assert isinstance(error, ConflictError)
        assert error.code == "ILLEGAL_STATE"

    def test_insufficient_stock(self):
        error = InsufficientStockError("i-1", -15, 10)
        assert isinstance(error, ConflictError)
        assert error.details == {"item_id": "i-1", "requested": -15, "available": 10}
        assert "available 10" in error.message


class TestStorageErrors:
    def test_database_error(self):
        error = DatabaseError("stock_history_append", "CHECK constraint failed")
        assert isinstance(error, StorageError)
        assert error.code == "DATABASE_ERROR"
        assert "stock_history_append" in error.message
