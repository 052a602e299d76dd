"""Column encoding shared by the SQLite stores."""

from datetime import datetime
from decimal import Decimal

from src.core.entities.common import as_naive_utc

# Fixed-width so that text comparison orders timestamps correctly
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


def to_db_timestamp(value: datetime) -> str:
    """Stored as naive UTC; offset-aware values are shifted to UTC first."""
    return as_naive_utc(value).strftime(TIMESTAMP_FORMAT)


def from_db_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def to_db_decimal(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def from_db_decimal(value: str | None) -> Decimal | None:
    return None if value is None else Decimal(value)


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with %, _ and \\ escaped (use ESCAPE '\\')."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def is_unique_violation(error: Exception) -> bool:
    return "UNIQUE constraint failed" in str(error)
