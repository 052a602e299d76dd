"""
Stateless validators.

Each check raises a domain exception on the first violation; nothing here
touches persistence except through the store passed in.
"""

from src.core.validation import (
    inventory_item_validator,
    security_validator,
    stock_history_validator,
    supplier_validator,
)
from src.core.validation.stock_history_validator import ReasonParseResult

__all__ = [
    "inventory_item_validator",
    "security_validator",
    "stock_history_validator",
    "supplier_validator",
    "ReasonParseResult",
]
