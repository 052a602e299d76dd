"""
Application layer - DTOs and service factories.

This layer:
1. Defines request/response DTOs for API contracts
2. Provides factory functions that wire infrastructure into core services
"""

from src.application.services import (
    get_analytics_service,
    get_auth_service,
    get_inventory_item_service,
    get_stock_history_service,
    get_supplier_service,
    reset_services,
)

__all__ = [
    "get_analytics_service",
    "get_auth_service",
    "get_inventory_item_service",
    "get_stock_history_service",
    "get_supplier_service",
    "reset_services",
]
