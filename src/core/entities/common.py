"""Helpers shared by the entity modules."""

import uuid
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp; every stored timestamp uses this form."""
    return datetime.now(UTC).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Shift an offset-aware value to UTC and drop the offset. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())
