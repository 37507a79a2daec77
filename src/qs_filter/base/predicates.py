# src/qs_filter/base/predicates.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# --- Comparison Kind Enum ---
class ComparisonKind(Enum):
    """The closed set of comparisons a predicate can express."""

    # Equality
    EQ = "eq"
    NE = "ne"
    # Existence
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    # Ordering
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    # String matching (raw text, no wildcards added here)
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
    CONTAINS = "contains"
    # Range / membership
    BETWEEN = "between"
    IN = "in"
    NIN = "nin"


# Kinds that compare against the raw remainder of the query value.
TEXT_MATCH_KINDS = frozenset(
    {ComparisonKind.STARTSWITH, ComparisonKind.ENDSWITH, ComparisonKind.CONTAINS}
)


class SortDirection(Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class Predicate:
    """
    A single field-level comparison.

    Attributes:
        kind: The comparison to perform.
        value: The coerced operand. A ``(min, max)`` tuple for BETWEEN, a tuple
            for IN/NIN, None for IS_NULL/IS_NOT_NULL, otherwise a single value.
        date_only: When True the consumer must compare against the stored
            field truncated to its calendar date, and ``value`` holds
            ``YYYY-MM-DD`` strings wherever a date was given.
    """

    kind: ComparisonKind
    value: Any = None
    date_only: bool = False


# --- Filter Specification ---
@dataclass
class FilterSpecification:
    """The backend-agnostic result of translating one query."""

    predicates: Dict[str, Predicate] = field(default_factory=dict)
    order: Optional[List[Tuple[str, SortDirection]]] = None
    offset: Optional[int] = None
    limit: Optional[int] = None

    def __repr__(self) -> str:
        parts = [f"predicates={self.predicates!r}"]
        if self.order is not None:
            parts.append(f"order={self.order!r}")
        if self.offset is not None:
            parts.append(f"offset={self.offset!r}")
        if self.limit is not None:
            parts.append(f"limit={self.limit!r}")
        return f"FilterSpecification({', '.join(parts)})"

    @property
    def is_paginated(self) -> bool:
        return self.limit is not None
