# src/qs_filter/sqlite/adapter.py
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Tuple

from ..base.interfaces import FilterAdapter
from ..base.predicates import ComparisonKind, FilterSpecification, Predicate

logger = logging.getLogger(__name__)  # Module-level logger

LIKE_ESCAPE = "\\"

_COMPARISON_SQL = {
    ComparisonKind.EQ: "=",
    ComparisonKind.NE: "!=",
    ComparisonKind.GT: ">",
    ComparisonKind.GTE: ">=",
    ComparisonKind.LT: "<",
    ComparisonKind.LTE: "<=",
}


def quote_identifier(identifier: str) -> str:
    """Quote an identifier for SQLite (SQLite uses double quotes for identifiers)."""
    safe_identifier = identifier.replace('"', '""')
    return f'"{safe_identifier}"'


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value is matched literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def to_sql_param(value: Any) -> Any:
    """Convert a predicate operand into a value sqlite3 binds natively."""
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


@dataclass
class SqlQueryParts:
    """WHERE / ORDER BY / LIMIT / OFFSET fragments with their bound parameters."""

    where: str = "1=1"
    params: List[Any] = field(default_factory=list)
    order_by: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class SqliteFilterAdapter(FilterAdapter[SqlQueryParts]):
    """
    Renders a ``FilterSpecification`` as parameterized SQLite SQL.

    Predicates are joined with AND. Date-only predicates compare
    ``date("column")`` so a stored timestamp is matched by calendar date.
    Operands are always bound as ``?`` parameters; field names are quoted.
    """

    def translate(self, spec: FilterSpecification) -> SqlQueryParts:
        if not isinstance(spec, FilterSpecification):
            raise TypeError(
                f"Expected a FilterSpecification, got {type(spec).__name__}"
            )
        fragments: List[str] = []
        params: List[Any] = []
        for field_name, predicate in spec.predicates.items():
            fragment, fragment_params = self.translate_predicate(field_name, predicate)
            if fragment == "1=1":
                continue
            fragments.append(f"({fragment})")
            params.extend(fragment_params)

        parts = SqlQueryParts(
            where=" AND ".join(fragments) if fragments else "1=1",
            params=params,
            limit=spec.limit,
            offset=spec.offset,
        )
        if spec.order:
            parts.order_by = ", ".join(
                f"{quote_identifier(name)} {direction.value}" for name, direction in spec.order
            )
        return parts

    def translate_predicate(
        self, field_name: str, predicate: Predicate
    ) -> Tuple[str, List[Any]]:
        """Translate one predicate into a WHERE fragment and its parameters."""
        column = quote_identifier(field_name)
        if predicate.date_only:
            column = f"date({column})"
        kind = predicate.kind
        value = predicate.value

        if kind == ComparisonKind.IS_NULL:
            return f"{column} IS NULL", []
        if kind == ComparisonKind.IS_NOT_NULL:
            return f"{column} IS NOT NULL", []

        if kind in (ComparisonKind.EQ, ComparisonKind.NE) and value is None:
            sql_op = "IS NULL" if kind == ComparisonKind.EQ else "IS NOT NULL"
            return f"{column} {sql_op}", []

        if kind in _COMPARISON_SQL:
            return f"{column} {_COMPARISON_SQL[kind]} ?", [to_sql_param(value)]

        if kind == ComparisonKind.STARTSWITH:
            return self._like(column, f"{escape_like(str(value))}%")
        if kind == ComparisonKind.ENDSWITH:
            return self._like(column, f"%{escape_like(str(value))}")
        if kind == ComparisonKind.CONTAINS:
            return self._like(column, f"%{escape_like(str(value))}%")

        if kind == ComparisonKind.BETWEEN:
            return self._between(column, value, predicate.date_only)

        if kind in (ComparisonKind.IN, ComparisonKind.NIN):
            return self._membership(column, kind, value)

        raise ValueError(f"Unsupported comparison kind for SQLite translation: {kind}")

    def _like(self, column: str, pattern: str) -> Tuple[str, List[Any]]:
        return f"{column} LIKE ? ESCAPE '{LIKE_ESCAPE}'", [pattern]

    def _between(
        self, column: str, bounds: Sequence[Any], date_only: bool
    ) -> Tuple[str, List[Any]]:
        lower, upper = bounds
        if lower is not None and upper is not None and not date_only:
            return f"{column} BETWEEN ? AND ?", [to_sql_param(lower), to_sql_param(upper)]

        # Date-only ranges, and ranges with a missing bound, are rendered as
        # separate comparisons; a None bound leaves that side open.
        fragments: List[str] = []
        params: List[Any] = []
        if lower is not None:
            fragments.append(f"{column} >= ?")
            params.append(to_sql_param(lower))
        if upper is not None:
            fragments.append(f"{column} <= ?")
            params.append(to_sql_param(upper))
        if not fragments:
            logger.debug(f"BETWEEN on {column} has no bounds; matching everything")
            return "1=1", []
        return " AND ".join(fragments), params

    def _membership(
        self, column: str, kind: ComparisonKind, items: Sequence[Any]
    ) -> Tuple[str, List[Any]]:
        is_in = kind == ComparisonKind.IN
        if not items:
            return ("0=1", []) if is_in else ("1=1", [])

        values = [to_sql_param(item) for item in items if item is not None]
        has_null = len(values) != len(items)
        sql_op = "IN" if is_in else "NOT IN"
        fragment = f"{column} {sql_op} ({', '.join(['?'] * len(values))})" if values else None

        # NULL never compares equal inside IN (...), so null items become an
        # explicit IS NULL / IS NOT NULL check.
        if has_null:
            null_check = f"{column} IS NULL" if is_in else f"{column} IS NOT NULL"
            if fragment is None:
                return null_check, []
            joiner = " OR " if is_in else " AND "
            return f"({fragment}{joiner}{null_check})", values
        return fragment, values

    def build_select(
        self,
        table: str,
        spec: FilterSpecification,
        columns: Sequence[str] = ("*",),
    ) -> Tuple[str, List[Any]]:
        """Build a complete SELECT statement and its parameters."""
        parts = self.translate(spec)
        column_sql = ", ".join(c if c == "*" else quote_identifier(c) for c in columns)
        sql = f"SELECT {column_sql} FROM {quote_identifier(table)} WHERE {parts.where}"
        params = list(parts.params)
        if parts.order_by:
            sql += f" ORDER BY {parts.order_by}"
        if parts.limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([parts.limit, parts.offset or 0])
        return sql, params

    def build_count(self, table: str, spec: FilterSpecification) -> Tuple[str, List[Any]]:
        """Build a COUNT(*) statement over the filtered rows (pagination ignored)."""
        parts = self.translate(spec)
        sql = f"SELECT COUNT(*) FROM {quote_identifier(table)} WHERE {parts.where}"
        return sql, list(parts.params)
