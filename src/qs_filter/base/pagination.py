# src/qs_filter/base/pagination.py
import re
from typing import Any, NamedTuple, Optional

from .config import Configuration

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class Pagination(NamedTuple):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _int_param(value: Any) -> Optional[int]:
    """Read the leading integer of a value: ``"2.5"`` is 2, ``"10abc"`` is 10."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Past the interpreter's int string digit limit.
        return None


def is_supplied(value: Any) -> bool:
    return value is not None and value != ""


def page_requested(page: Any, limit: Any) -> bool:
    """Pagination is emitted only when ``page`` or ``limit`` was supplied."""
    return is_supplied(page) or is_supplied(limit)


def parse_pagination(page: Any, limit: Any, config: Configuration) -> Pagination:
    """
    Resolve the requested page and page size.

    A page that is missing, has no leading integer, or is below 1 becomes 1.
    A limit that is missing, has no leading integer, is below 1, or is above
    ``config.max_page_size`` becomes ``config.default_page_size`` (never the
    maximum).
    """
    resolved_page = _int_param(page)
    if resolved_page is None or resolved_page < 1:
        resolved_page = 1

    resolved_limit = _int_param(limit)
    if (
        resolved_limit is None
        or resolved_limit < 1
        or (config.max_page_size is not None and resolved_limit > config.max_page_size)
    ):
        resolved_limit = config.default_page_size

    return Pagination(page=resolved_page, limit=resolved_limit)
