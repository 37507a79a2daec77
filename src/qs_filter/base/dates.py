# src/qs_filter/base/dates.py
from datetime import date
from typing import Any


def is_date_value(value: Any) -> bool:
    """True for ``date`` and ``datetime`` instances."""
    return isinstance(value, date)


def to_date_only(value: date) -> str:
    """
    Format a date or datetime as ``YYYY-MM-DD``.

    The calendar date of the value itself is used; a timezone-aware datetime
    is not shifted to any other zone first.

    Raises:
        TypeError: If ``value`` is not a date. Coerce raw input first.
    """
    if not is_date_value(value):
        raise TypeError(
            f"Date-only formatting requires a date or datetime, got {type(value).__name__}"
        )
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def normalize_date_value(value: Any) -> Any:
    """Apply ``to_date_only`` to dates; every other value passes through."""
    if is_date_value(value):
        return to_date_only(value)
    return value
