"""Structural types accepted by the validators."""

from decimal import Decimal
from typing import Protocol


class ItemFields(Protocol):
    name: str | None
    quantity: int | None
    price: Decimal | None
    supplier_id: str | None
    created_by: str | None


class ItemIdentity(Protocol):
    name: str | None
    supplier_id: str | None


class SupplierFields(Protocol):
    name: str | None


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
