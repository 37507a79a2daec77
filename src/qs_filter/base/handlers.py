# src/qs_filter/base/handlers.py

"""
Predicate handlers.

Each handler receives the comparison kind and the operator token that matched,
strips the token from the raw value and builds a typed ``Predicate``. None of
them raise on malformed input: a missing BETWEEN bound coerces from the empty
string (and so becomes None) and an empty set list is returned as-is.
"""

import logging
from typing import TYPE_CHECKING, Any, Tuple

from .coercion import coerce
from .dates import normalize_date_value
from .predicates import TEXT_MATCH_KINDS, ComparisonKind, Predicate

if TYPE_CHECKING:
    from .config import Configuration

# --- Setup Logging ---
log = logging.getLogger(__name__)

LIST_SEPARATOR = "|"


def strip_token(token: str, raw_value: Any) -> Any:
    """Remove ``token`` from the front of a string value, if it is there."""
    if isinstance(raw_value, str) and token and raw_value.startswith(token):
        return raw_value[len(token):]
    return raw_value


def _coerce_operand(value: Any, date_only: bool) -> Any:
    coerced = coerce(value)
    return normalize_date_value(coerced) if date_only else coerced


def handle_basic(
    kind: ComparisonKind,
    token: str,
    field: str,
    raw_value: Any,
    config: "Configuration",
) -> Predicate:
    """
    Build a single-operand predicate (EQ, NE, GT, STARTSWITH, ...).

    The text-matching kinds keep the stripped remainder as a raw string;
    wildcard placement is left to the consumer.
    """
    date_only = config.is_date_only(field)
    stripped = strip_token(token, raw_value)
    if kind in TEXT_MATCH_KINDS:
        value = stripped
    else:
        value = _coerce_operand(stripped, date_only)
    log.debug(f"Basic predicate on '{field}': {kind.value} {value!r} (date_only={date_only})")
    return Predicate(kind, value, date_only=date_only)


def handle_between(
    kind: ComparisonKind,
    token: str,
    field: str,
    raw_value: Any,
    config: "Configuration",
) -> Predicate:
    """
    Build a BETWEEN predicate from ``<token><min>|<max>``.

    Only the first two parts are used. A missing part is coerced from the
    empty string, which yields None (an unbounded side for most consumers).
    """
    date_only = config.is_date_only(field)
    parts = str(strip_token(token, raw_value)).split(LIST_SEPARATOR)
    if len(parts) != 2:
        log.debug(
            f"BETWEEN on '{field}' got {len(parts)} part(s) in {raw_value!r}; "
            "using the first two, missing bounds become None"
        )
    lower = parts[0]
    upper = parts[1] if len(parts) > 1 else ""
    bounds = (_coerce_operand(lower, date_only), _coerce_operand(upper, date_only))
    return Predicate(kind, bounds, date_only=date_only)


def handle_set(
    kind: ComparisonKind,
    token: str,
    field: str,
    raw_value: Any,
    config: "Configuration",
) -> Predicate:
    """Build an IN / NIN predicate from ``<token>a|b|c``; an empty tuple is kept."""
    date_only = config.is_date_only(field)
    remainder = str(strip_token(token, raw_value))
    items: Tuple[Any, ...] = ()
    if remainder:
        items = tuple(
            _coerce_operand(part, date_only)
            for part in remainder.split(LIST_SEPARATOR)
        )
    log.debug(f"Set predicate on '{field}': {kind.value} {items!r}")
    return Predicate(kind, items, date_only=date_only)
