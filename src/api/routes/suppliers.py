"""Supplier endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_suppliers
from src.api.security import get_current_actor, require_admin
from src.application.dto.requests import SupplierRequest
from src.application.dto.responses import ErrorResponse, SupplierResponse
from src.core.entities.user import Actor
from src.core.services import SupplierService

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("", response_model=list[SupplierResponse])
async def list_suppliers(
    _: Actor = Depends(get_current_actor),
    service: SupplierService = Depends(get_suppliers),
) -> list[SupplierResponse]:
    return [SupplierResponse.from_entity(s) for s in await service.list_all()]


@router.get("/search", response_model=list[SupplierResponse])
async def search_suppliers(
    name: str | None = Query(default=None),
    _: Actor = Depends(get_current_actor),
    service: SupplierService = Depends(get_suppliers),
) -> list[SupplierResponse]:
    """Case-insensitive name substring search."""
    return [SupplierResponse.from_entity(s) for s in await service.search(name)]


@router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: str,
    _: Actor = Depends(get_current_actor),
    service: SupplierService = Depends(get_suppliers),
) -> SupplierResponse:
    return SupplierResponse.from_entity(await service.get(supplier_id))


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_supplier(
    request: SupplierRequest,
    response: Response,
    actor: Actor = Depends(require_admin),
    service: SupplierService = Depends(get_suppliers),
) -> SupplierResponse:
    """Create a supplier (ADMIN). The id is assigned by the server."""
    supplier = await service.create(request.to_draft(), actor)
    response.headers["Location"] = f"/api/suppliers/{supplier.id}"
    return SupplierResponse.from_entity(supplier)


@router.put(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_supplier(
    supplier_id: str,
    request: SupplierRequest,
    actor: Actor = Depends(require_admin),
    service: SupplierService = Depends(get_suppliers),
) -> SupplierResponse:
    return SupplierResponse.from_entity(
        await service.update(supplier_id, request.to_draft(), actor)
    )


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_supplier(
    supplier_id: str,
    actor: Actor = Depends(require_admin),
    service: SupplierService = Depends(get_suppliers),
) -> Response:
    """Delete a supplier with no stock on hand (ADMIN)."""
    await service.delete(supplier_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
