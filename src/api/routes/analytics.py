"""Analytics endpoints."""

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_analytics
from src.api.security import get_current_actor
from src.application.dto.requests import StockUpdateQueryRequest
from src.application.dto.responses import (
    ErrorResponse,
    FinancialSummaryResponse,
    ItemUpdateFrequencyResponse,
    LowStockItemResponse,
    MonthlyStockMovementResponse,
    PricePointResponse,
    StockPerSupplierResponse,
    StockUpdateResponse,
    StockValuePointResponse,
)
from src.core.entities.analytics import StockUpdateFilter
from src.core.entities.user import Actor
from src.core.services import AnalyticsService

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

BAD_REQUEST = {400: {"model": ErrorResponse}}


@router.get("/low-stock-items", response_model=list[LowStockItemResponse])
async def low_stock_items(
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[LowStockItemResponse]:
    items = await service.low_stock_items(supplier_id)
    return [LowStockItemResponse.model_validate(i) for i in items]


@router.get("/low-stock-count", response_model=int)
async def low_stock_count(
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> int:
    return await service.low_stock_count(supplier_id)


@router.get("/stock-per-supplier", response_model=list[StockPerSupplierResponse])
async def stock_per_supplier(
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[StockPerSupplierResponse]:
    rows = await service.stock_per_supplier()
    return [StockPerSupplierResponse.model_validate(r) for r in rows]


@router.get("/item-update-frequency", response_model=list[ItemUpdateFrequencyResponse])
async def item_update_frequency(
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[ItemUpdateFrequencyResponse]:
    rows = await service.item_update_frequency(supplier_id)
    return [ItemUpdateFrequencyResponse.model_validate(r) for r in rows]


@router.get("/price-trend", response_model=list[PricePointResponse], responses=BAD_REQUEST)
async def price_trend(
    item_id: str | None = Query(default=None, alias="itemId"),
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[PricePointResponse]:
    points = await service.price_trend(item_id, start, end)
    return [PricePointResponse.model_validate(p) for p in points]


@router.get(
    "/monthly-stock-movement",
    response_model=list[MonthlyStockMovementResponse],
    responses=BAD_REQUEST,
)
async def monthly_stock_movement(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[MonthlyStockMovementResponse]:
    rows = await service.monthly_stock_movement(start, end, supplier_id)
    return [MonthlyStockMovementResponse.model_validate(r) for r in rows]


@router.get(
    "/financial/summary",
    response_model=FinancialSummaryResponse,
    responses=BAD_REQUEST,
)
async def financial_summary(
    from_date: date | None = Query(default=None, alias="from"),
    to_date: date | None = Query(default=None, alias="to"),
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> FinancialSummaryResponse:
    """Weighted-average-cost summary for the window (defaults to the last 30 days)."""
    summary = await service.financial_summary(from_date, to_date, supplier_id)
    return FinancialSummaryResponse.model_validate(summary)


@router.get("/stock-value", response_model=list[StockValuePointResponse], responses=BAD_REQUEST)
async def stock_value(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[StockValuePointResponse]:
    """Closing stock value per day, oldest first."""
    points = await service.stock_value_over_time(start, end, supplier_id)
    return [StockValuePointResponse.model_validate(p) for p in points]


@router.get("/stock-updates", response_model=list[StockUpdateResponse], responses=BAD_REQUEST)
async def stock_updates(
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    item_name: str | None = Query(default=None, alias="itemName"),
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    created_by: str | None = Query(default=None, alias="createdBy"),
    min_change: int | None = Query(default=None, alias="minChange"),
    max_change: int | None = Query(default=None, alias="maxChange"),
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[StockUpdateResponse]:
    criteria = StockUpdateFilter(
        start_date=start_date,
        end_date=end_date,
        item_name=item_name,
        supplier_id=supplier_id,
        created_by=created_by,
        min_change=min_change,
        max_change=max_change,
    )
    rows = await service.stock_updates(criteria)
    return [StockUpdateResponse.model_validate(r) for r in rows]


@router.post(
    "/stock-updates/query",
    response_model=list[StockUpdateResponse],
    responses=BAD_REQUEST,
)
async def query_stock_updates(
    request: StockUpdateQueryRequest,
    _: Actor = Depends(get_current_actor),
    service: AnalyticsService = Depends(get_analytics),
) -> list[StockUpdateResponse]:
    """Same report as GET /stock-updates with the filter in the body."""
    rows = await service.stock_updates(request.to_filter())
    return [StockUpdateResponse.model_validate(r) for r in rows]
