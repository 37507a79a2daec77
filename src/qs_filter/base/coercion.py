# src/qs_filter/base/coercion.py

"""
Best-guess typing of raw query string values.

Query parameters arrive as untyped strings. ``classify`` runs an ordered set
of total conversion rules and reports which one matched, so callers can
branch on ``CoercedValue.kind`` instead of inspecting the value's runtime type.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Optional, Tuple

# --- Setup Logging ---
log = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")


class ValueKind(Enum):
    """Which coercion rule produced a value."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    DATE = "date"
    TEXT = "text"
    # Input that was not a string to begin with (already typed by the caller).
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class CoercedValue:
    """A raw value together with the rule that typed it."""

    kind: ValueKind
    value: Any


# --- Conversion Rules ---
# Each rule returns a CoercedValue when it applies, otherwise None.


def _null_rule(raw: str) -> Optional[CoercedValue]:
    if raw == "" or raw.lower() == "null":
        return CoercedValue(ValueKind.NULL, None)
    return None


def _bool_rule(raw: str) -> Optional[CoercedValue]:
    lowered = raw.lower()
    if lowered == "true":
        return CoercedValue(ValueKind.BOOL, True)
    if lowered == "false":
        return CoercedValue(ValueKind.BOOL, False)
    return None


def _number_rule(raw: str) -> Optional[CoercedValue]:
    if _INTEGER_RE.fullmatch(raw):
        try:
            return CoercedValue(ValueKind.NUMBER, int(raw))
        except ValueError:
            # Past the interpreter's int string digit limit; stays text.
            return None
    if _DECIMAL_RE.fullmatch(raw):
        number = float(raw)
        # "1e999" overflows to inf; keep it as text like "inf" itself.
        if number in (float("inf"), float("-inf")):
            return None
        return CoercedValue(ValueKind.NUMBER, number)
    return None


def _date_rule(raw: str) -> Optional[CoercedValue]:
    try:
        return CoercedValue(ValueKind.DATE, date.fromisoformat(raw))
    except ValueError:
        pass
    try:
        return CoercedValue(ValueKind.DATE, datetime.fromisoformat(raw))
    except ValueError:
        return None


# Order matters: "0" must be seen by the number rule, never read as False,
# and "20220706" is a number before it is a compact ISO date.
COERCION_RULES: Tuple[Callable[[str], Optional[CoercedValue]], ...] = (
    _null_rule,
    _bool_rule,
    _number_rule,
    _date_rule,
)


def classify(raw: Any) -> CoercedValue:
    """
    Type a raw query value.

    Strings are run through ``COERCION_RULES`` in order and the first rule
    that applies wins; a string no rule accepts is returned unmodified as
    TEXT. Non-string input is returned unchanged as PASSTHROUGH.

    Args:
        raw: The value as supplied by the caller.

    Returns:
        The coerced value and the kind of rule that produced it.
    """
    if not isinstance(raw, str):
        return CoercedValue(ValueKind.PASSTHROUGH, raw)
    for rule in COERCION_RULES:
        result = rule(raw)
        if result is not None:
            return result
    return CoercedValue(ValueKind.TEXT, raw)


def coerce(raw: Any) -> Any:
    """Return the best-guess typed value for ``raw`` (None/bool/number/date/str)."""
    result = classify(raw)
    log.debug(f"Coerced {raw!r} -> {result.value!r} ({result.kind.value})")
    return result.value
