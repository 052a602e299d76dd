"""Validation for audit-trail entries."""

from dataclasses import dataclass

from src.core.entities.stock_history import StockChange, StockChangeReason
from src.core.exceptions import InvalidArgumentError, InvalidRequestError
from src.core.validation._types import is_blank


@dataclass(frozen=True)
class ReasonParseResult:
    """Outcome of parsing a raw reason string."""

    reason: StockChangeReason | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is not None


def parse_reason(raw: str | StockChangeReason | None) -> ReasonParseResult:
    """Parse a reason without raising; unknown and blank input yield an error."""
    if isinstance(raw, StockChangeReason):
        return ReasonParseResult(reason=raw)
    if is_blank(raw):
        return ReasonParseResult(error="Reason is required")
    try:
        return ReasonParseResult(reason=StockChangeReason(raw.strip().upper()))
    except ValueError:
        return ReasonParseResult(error=f"Invalid stock change reason: {raw}")


def validate(change: StockChange) -> StockChangeReason:
    """
    Validate a pending stock change and return its parsed reason.

    Rules:
        - item_id is required
        - reason must be a known StockChangeReason
        - change must be non-zero unless the reason is PRICE_CHANGE
        - created_by is required
        - price_at_change, when present, is never negative
    """
    if is_blank(change.item_id):
        raise InvalidArgumentError("item_id", "Item ID cannot be empty", change.item_id)

    parsed = parse_reason(change.reason)
    if not parsed.ok:
        raise InvalidRequestError(parsed.error, details={"reason": str(change.reason)})
    reason = parsed.reason

    if change.change == 0 and reason != StockChangeReason.PRICE_CHANGE:
        raise InvalidArgumentError(
            "change", "Change amount must be non-zero", change.change
        )
    if is_blank(change.created_by):
        raise InvalidArgumentError("created_by", "CreatedBy cannot be empty", change.created_by)
    if change.price_at_change is not None and change.price_at_change < 0:
        raise InvalidArgumentError(
            "price_at_change", "Price at change cannot be negative", change.price_at_change
        )
    return reason
