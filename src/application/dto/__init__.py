"""Data Transfer Objects for API contracts."""

from src.application.dto.requests import (
    InventoryItemRequest,
    LoginRequest,
    StockUpdateQueryRequest,
    SupplierRequest,
)
from src.application.dto.responses import (
    AppUserResponse,
    ComponentHealthResponse,
    ErrorResponse,
    FinancialSummaryResponse,
    HealthResponse,
    InventoryItemResponse,
    ItemUpdateFrequencyResponse,
    LowStockItemResponse,
    MonthlyStockMovementResponse,
    PageResponse,
    PricePointResponse,
    StockHistoryResponse,
    StockPerSupplierResponse,
    StockUpdateResponse,
    StockValuePointResponse,
    SupplierResponse,
    to_page_response,
)

__all__ = [
    # Requests
    "InventoryItemRequest",
    "SupplierRequest",
    "LoginRequest",
    "StockUpdateQueryRequest",
    # Responses
    "AppUserResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
    "FinancialSummaryResponse",
    "HealthResponse",
    "InventoryItemResponse",
    "ItemUpdateFrequencyResponse",
    "LowStockItemResponse",
    "MonthlyStockMovementResponse",
    "PageResponse",
    "PricePointResponse",
    "StockHistoryResponse",
    "StockPerSupplierResponse",
    "StockUpdateResponse",
    "StockValuePointResponse",
    "SupplierResponse",
    "to_page_response",
]
