# src/qs_filter/__init__.py

"""
Query String Filter Library Initialization.

This package translates flat HTTP-style query parameters (``age=>=30``,
``name=^s``, ``id=$in1|2|3``) into a backend-agnostic filter specification:
per-field predicates, an optional sort order and optional pagination bounds.

It initializes a logger with a NullHandler and makes the parser, its
configuration, the output types and the bundled SQLite adapter available at
the top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for "qs_filter".
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False

# --------------------------------------------------------------------------
# Core Exports
# --------------------------------------------------------------------------
from .base.config import Configuration, CustomHandler
from .base.exceptions import (
    ConfigurationError,
    OperatorConfigurationError,
    QSFilterException,
)
from .base.parser import RESERVED_KEYS, QueryStringParser, parse_query
from .base.predicates import (
    ComparisonKind,
    FilterSpecification,
    Predicate,
    SortDirection,
)

# --------------------------------------------------------------------------
# Building Blocks
# --------------------------------------------------------------------------
from .base.coercion import CoercedValue, ValueKind, classify, coerce
from .base.dates import to_date_only
from .base.operators import OPERATOR_GRAMMAR, OperatorToken, find_operator
from .base.pagination import Pagination, parse_pagination
from .base.sorting import parse_sort

# --------------------------------------------------------------------------
# Adapter Exports
# --------------------------------------------------------------------------
from .base.interfaces import FilterAdapter
from .sqlite.adapter import SqliteFilterAdapter, SqlQueryParts

__all__ = [
    # Parser
    "QueryStringParser",
    "parse_query",
    "RESERVED_KEYS",
    # Configuration
    "Configuration",
    "CustomHandler",
    # Output
    "ComparisonKind",
    "FilterSpecification",
    "Predicate",
    "SortDirection",
    # Exceptions
    "QSFilterException",
    "ConfigurationError",
    "OperatorConfigurationError",
    # Building blocks
    "CoercedValue",
    "ValueKind",
    "classify",
    "coerce",
    "to_date_only",
    "OPERATOR_GRAMMAR",
    "OperatorToken",
    "find_operator",
    "Pagination",
    "parse_pagination",
    "parse_sort",
    # Adapters
    "FilterAdapter",
    "SqliteFilterAdapter",
    "SqlQueryParts",
    # Logging
    "logger",
]

__version__ = "0.1.0"
