"""Role-scoped field mutation limits for inventory updates."""

from src.core.entities.inventory import InventoryItem
from src.core.entities.user import Actor, Role
from src.core.exceptions import ForbiddenError, UnauthorizedError
from src.core.validation._types import ItemIdentity


def _stripped(value: str | None) -> str:
    return (value or "").strip()


def validate_update_permissions(
    actor: Actor | None, existing: InventoryItem, incoming: ItemIdentity
) -> None:
    """
    USER may only touch quantity and price; ADMIN may change anything.

    Raises:
        UnauthorizedError: no recognized actor.
        ForbiddenError: a USER tried to change name or supplier.
    """
    if actor is None or actor.role not in (Role.ADMIN, Role.USER):
        raise UnauthorizedError()

    if actor.role == Role.ADMIN:
        return

    name_changed = existing.name != _stripped(incoming.name)
    supplier_changed = existing.supplier_id != _stripped(incoming.supplier_id)
    if name_changed or supplier_changed:
        raise ForbiddenError(
            "Users are only allowed to change quantity or price", role=actor.role.value
        )
