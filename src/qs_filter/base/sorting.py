# src/qs_filter/base/sorting.py
import logging
from typing import Any, List, Tuple

from .predicates import SortDirection

log = logging.getLogger(__name__)

SORT_SEPARATOR = "|"
DESCENDING_PREFIX = "!"


def parse_sort(sort_value: Any) -> List[Tuple[str, SortDirection]]:
    """
    Parse ``"age|!name"`` into ``[("age", ASC), ("name", DESC)]``.

    Segments that name no field (``"age||name"``, a trailing ``"|"``, a lone
    ``"!"``) are dropped.
    """
    order: List[Tuple[str, SortDirection]] = []
    for segment in str(sort_value).split(SORT_SEPARATOR):
        if segment.startswith(DESCENDING_PREFIX):
            field, direction = segment[len(DESCENDING_PREFIX):], SortDirection.DESC
        else:
            field, direction = segment, SortDirection.ASC
        if not field:
            log.debug(f"Dropping empty sort segment {segment!r} in {sort_value!r}")
            continue
        order.append((field, direction))
    return order
