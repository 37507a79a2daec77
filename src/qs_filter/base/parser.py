# src/qs_filter/base/parser.py
import logging
from typing import Any, Dict, Mapping, Optional

from .config import Configuration
from .pagination import page_requested, parse_pagination
from .predicates import FilterSpecification
from .resolver import FieldResolver
from .sorting import parse_sort

# --- Setup Logging ---
log = logging.getLogger(__name__)

PAGE_KEY = "page"
LIMIT_KEY = "limit"
SORT_KEY = "sort"
RESERVED_KEYS = frozenset({PAGE_KEY, LIMIT_KEY, SORT_KEY})


class QueryStringParser:
    """
    Translates decoded query parameters into a ``FilterSpecification``.

    The parser holds nothing but its frozen ``Configuration``, so a single
    instance can serve concurrent requests.

    Example:
        >>> parser = QueryStringParser(default_page_size=10)
        >>> spec = parser.parse({"age": ">=30", "sort": "!age", "page": "2"})
        >>> spec.offset, spec.limit
        (10, 10)
    """

    def __init__(self, config: Optional[Configuration] = None, **options: Any):
        """
        Initialize the parser.

        Args:
            config: A ready configuration. When omitted one is built from
                ``options`` via ``Configuration.from_options``.
            **options: Configuration options (field names or their aliases).
                Not allowed together with ``config``.

        Raises:
            ValueError: If both ``config`` and ``options`` are given.
            ConfigurationError: If the options are invalid.
        """
        if config is not None and options:
            raise ValueError("Pass either a Configuration or keyword options, not both")
        self._config = config if config is not None else Configuration.from_options(options)
        self._resolver = FieldResolver(self._config)

    @property
    def config(self) -> Configuration:
        return self._config

    def parse(self, query: Mapping[str, Any]) -> FilterSpecification:
        """
        Translate one query.

        Args:
            query: Decoded query parameters. ``page``, ``limit`` and ``sort``
                are reserved; every other key is a filter.

        Returns:
            The predicates plus sort order and pagination when requested.
        """
        filters: Dict[str, Any] = {
            key: value for key, value in query.items() if key not in RESERVED_KEYS
        }
        spec = FilterSpecification(predicates=self._resolver.resolve(filters))

        sort = query.get(SORT_KEY)
        if sort:
            spec.order = parse_sort(sort)

        page, limit = query.get(PAGE_KEY), query.get(LIMIT_KEY)
        if page_requested(page, limit):
            pagination = parse_pagination(page, limit, self._config)
            spec.offset = pagination.offset
            spec.limit = pagination.limit

        log.debug(f"Parsed query {dict(query)!r} into {spec!r}")
        return spec


def parse_query(
    query: Mapping[str, Any], config: Optional[Configuration] = None
) -> FilterSpecification:
    """Translate ``query`` with ``config`` (or the default configuration)."""
    return QueryStringParser(config).parse(query)
