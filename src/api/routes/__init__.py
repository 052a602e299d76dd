"""API route modules."""

from src.api.routes.analytics import router as analytics_router
from src.api.routes.auth import router as auth_router
from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.stock_history import router as stock_history_router
from src.api.routes.suppliers import router as suppliers_router

__all__ = [
    "health_router",
    "auth_router",
    "inventory_router",
    "suppliers_router",
    "stock_history_router",
    "analytics_router",
]
