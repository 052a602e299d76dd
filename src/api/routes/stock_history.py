"""Stock history (audit trail) endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_history
from src.api.security import get_current_actor
from src.application.dto.responses import (
    ErrorResponse,
    PageResponse,
    StockHistoryResponse,
    to_page_response,
)
from src.core.entities.user import Actor
from src.core.services import StockHistoryService

router = APIRouter(prefix="/api/stock-history", tags=["stock-history"])


@router.get("", response_model=list[StockHistoryResponse])
async def list_history(
    _: Actor = Depends(get_current_actor),
    service: StockHistoryService = Depends(get_history),
) -> list[StockHistoryResponse]:
    return [StockHistoryResponse.from_entity(h) for h in await service.list_all()]


@router.get("/item/{item_id}", response_model=list[StockHistoryResponse])
async def list_history_for_item(
    item_id: str,
    _: Actor = Depends(get_current_actor),
    service: StockHistoryService = Depends(get_history),
) -> list[StockHistoryResponse]:
    return [StockHistoryResponse.from_entity(h) for h in await service.list_by_item(item_id)]


@router.get(
    "/reason/{reason}",
    response_model=list[StockHistoryResponse],
    responses={400: {"model": ErrorResponse}},
)
async def list_history_for_reason(
    reason: str,
    _: Actor = Depends(get_current_actor),
    service: StockHistoryService = Depends(get_history),
) -> list[StockHistoryResponse]:
    return [StockHistoryResponse.from_entity(h) for h in await service.list_by_reason(reason)]


@router.get(
    "/search",
    response_model=PageResponse[StockHistoryResponse],
    responses={400: {"model": ErrorResponse}},
)
async def search_history(
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    item_name: str | None = Query(default=None, alias="itemName"),
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    _: Actor = Depends(get_current_actor),
    service: StockHistoryService = Depends(get_history),
) -> PageResponse[StockHistoryResponse]:
    """Filtered, paged history, newest first. Page size is capped at 200."""
    result = await service.find_filtered(
        start=start_date,
        end=end_date,
        item_name=item_name,
        supplier_id=supplier_id,
        page=page,
        size=size,
    )
    return to_page_response(result, StockHistoryResponse, StockHistoryResponse.from_entity)
