"""Supplier service."""

from src.config import get_logger
from src.core.entities.inventory import Supplier, SupplierDraft
from src.core.entities.user import Actor
from src.core.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    SupplierNotFoundError,
    UnauthorizedError,
)
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.validation import supplier_validator

logger = get_logger(__name__)


def _require_admin(actor: Actor | None) -> Actor:
    if actor is None:
        raise UnauthorizedError()
    if not actor.is_admin:
        raise ForbiddenError("Only administrators may manage suppliers", role=actor.role.value)
    return actor


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SupplierService:
    """CRUD for suppliers with unique names and a live-stock delete guard."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def get(self, supplier_id: str) -> Supplier:
        async with self._uow_factory(read_only=True) as uow:
            supplier = await uow.suppliers.get(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    async def list_all(self) -> list[Supplier]:
        async with self._uow_factory(read_only=True) as uow:
            return await uow.suppliers.list_all()

    async def search(self, name: str | None) -> list[Supplier]:
        name = _clean(name)
        async with self._uow_factory(read_only=True) as uow:
            if name is None:
                return await uow.suppliers.list_all()
            return await uow.suppliers.search_by_name(name)

    async def create(self, draft: SupplierDraft, actor: Actor | None) -> Supplier:
        """Create a supplier. Ids and timestamps are always server-generated."""
        actor = _require_admin(actor)
        if draft.id is not None:
            raise InvalidRequestError(
                "Supplier id must not be provided on create", details={"id": draft.id}
            )
        supplier_validator.validate_base(draft)

        async with self._uow_factory() as uow:
            await supplier_validator.assert_unique_name(uow.suppliers, draft.name)
            supplier = await uow.suppliers.add(
                Supplier(
                    name=draft.name.strip(),
                    contact_name=_clean(draft.contact_name),
                    phone=_clean(draft.phone),
                    email=_clean(draft.email),
                    created_by=actor.email,
                )
            )

        logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
        return supplier

    async def update(
        self, supplier_id: str, draft: SupplierDraft, actor: Actor | None
    ) -> Supplier:
        _require_admin(actor)
        if draft.id is not None and draft.id != supplier_id:
            raise InvalidRequestError(
                "Path id and body id do not match",
                details={"path_id": supplier_id, "body_id": draft.id},
            )
        supplier_validator.validate_base(draft)

        async with self._uow_factory() as uow:
            existing = await uow.suppliers.get(supplier_id)
            if existing is None:
                raise SupplierNotFoundError(supplier_id)
            await supplier_validator.assert_unique_name(
                uow.suppliers, draft.name, exclude_id=supplier_id
            )
            supplier = await uow.suppliers.update(
                existing.model_copy(
                    update={
                        "name": draft.name.strip(),
                        "contact_name": _clean(draft.contact_name),
                        "phone": _clean(draft.phone),
                        "email": _clean(draft.email),
                    }
                )
            )

        logger.info("supplier_updated", supplier_id=supplier_id, name=supplier.name)
        return supplier

    async def delete(self, supplier_id: str, actor: Actor | None) -> None:
        """Delete a supplier that has no item with stock on hand."""
        _require_admin(actor)
        async with self._uow_factory() as uow:
            await supplier_validator.validate_deletable(supplier_id, uow.items)
            if not await uow.suppliers.delete(supplier_id):
                raise SupplierNotFoundError(supplier_id)

        logger.info("supplier_deleted", supplier_id=supplier_id)
