"""Inventory item endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_item_service
from src.api.security import get_current_actor, require_admin
from src.application.dto.requests import InventoryItemRequest
from src.application.dto.responses import (
    ErrorResponse,
    InventoryItemResponse,
    PageResponse,
    to_page_response,
)
from src.core.entities.user import Actor
from src.core.services import InventoryItemService

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get("", response_model=list[InventoryItemResponse])
async def list_items(
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> list[InventoryItemResponse]:
    """List all items, optionally for one supplier."""
    items = await service.list_all(supplier_id=supplier_id)
    return [InventoryItemResponse.from_entity(i) for i in items]


@router.get("/count", response_model=int)
async def count_items(
    _: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> int:
    return await service.count()


@router.get("/search", response_model=PageResponse[InventoryItemResponse])
async def search_items(
    name: str = Query(default=""),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=50, ge=1, le=200),
    _: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> PageResponse[InventoryItemResponse]:
    """Search by name substring, sorted by price ascending."""
    result = await service.search(name, page, size)
    return to_page_response(result, InventoryItemResponse, InventoryItemResponse.from_entity)


@router.get("/{item_id}", response_model=InventoryItemResponse, responses=ERRORS)
async def get_item(
    item_id: str,
    _: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> InventoryItemResponse:
    return InventoryItemResponse.from_entity(await service.get(item_id))


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def create_item(
    request: InventoryItemRequest,
    response: Response,
    actor: Actor = Depends(require_admin),
    service: InventoryItemService = Depends(get_item_service),
) -> InventoryItemResponse:
    """Create an item and record its initial stock (ADMIN)."""
    item = await service.create(request.to_draft(), actor)
    response.headers["Location"] = f"/api/inventory/{item.id}"
    return InventoryItemResponse.from_entity(item)


@router.put("/{item_id}", response_model=InventoryItemResponse, responses=ERRORS)
async def update_item(
    item_id: str,
    request: InventoryItemRequest,
    actor: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> InventoryItemResponse:
    """Replace an item. USER callers may only change quantity and price."""
    item = await service.update(item_id, request.to_draft(), actor)
    return InventoryItemResponse.from_entity(item)


@router.patch("/{item_id}/quantity", response_model=InventoryItemResponse, responses=ERRORS)
async def adjust_quantity(
    item_id: str,
    delta: int = Query(...),
    reason: str | None = Query(default=None),
    actor: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> InventoryItemResponse:
    """Apply a signed quantity change (reason defaults to MANUAL_UPDATE)."""
    item = await service.adjust_quantity(item_id, delta, reason, actor)
    return InventoryItemResponse.from_entity(item)


@router.patch("/{item_id}/price", response_model=InventoryItemResponse, responses=ERRORS)
async def change_price(
    item_id: str,
    price: Decimal = Query(...),
    actor: Actor = Depends(get_current_actor),
    service: InventoryItemService = Depends(get_item_service),
) -> InventoryItemResponse:
    item = await service.change_price(item_id, price, actor)
    return InventoryItemResponse.from_entity(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERRORS)
async def delete_item(
    item_id: str,
    reason: str | None = Query(default=None),
    actor: Actor = Depends(require_admin),
    service: InventoryItemService = Depends(get_item_service),
) -> Response:
    """Delete an item with a write-off reason (ADMIN)."""
    await service.delete(item_id, reason, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
