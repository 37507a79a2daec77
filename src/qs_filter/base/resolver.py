# src/qs_filter/base/resolver.py
import logging
from typing import Any, Dict, Mapping

from .coercion import coerce
from .config import Configuration
from .dates import normalize_date_value
from .operators import find_operator, get_operator
from .predicates import ComparisonKind, Predicate

# --- Setup Logging ---
log = logging.getLogger(__name__)

_NOT_NULL_VALUES = ("!", "!null")


def is_null_value(raw_value: Any) -> bool:
    """None, the empty string and ``"null"`` (any case) all ask for IS NULL."""
    if raw_value is None:
        return True
    return isinstance(raw_value, str) and (raw_value == "" or raw_value.lower() == "null")


def is_not_null_value(raw_value: Any) -> bool:
    return isinstance(raw_value, str) and raw_value.lower() in _NOT_NULL_VALUES


class FieldResolver:
    """
    Turns filter keys into one predicate per internal field name.

    For each key, in input order: resolve the alias, skip blacklisted fields,
    defer to a custom handler, apply the null / not-null shortcuts, dispatch on
    an operator token, and otherwise fall back to equality.

    Predicates are accumulated in an insertion-ordered dict keyed by the
    internal field name. A later write for the same field (an alias and its
    target both present, or a custom handler emitting another field) replaces
    the earlier predicate in place.
    """

    def __init__(self, config: Configuration):
        self._config = config

    @property
    def config(self) -> Configuration:
        return self._config

    def resolve(self, filters: Mapping[str, Any]) -> Dict[str, Predicate]:
        predicates: Dict[str, Predicate] = {}
        for key, raw_value in filters.items():
            field = self._config.resolve_alias(key)
            if field in self._config.blacklisted_fields:
                log.debug(f"Skipping blacklisted field '{field}' (query key '{key}')")
                continue

            handler = self._config.custom_handlers.get(field)
            if handler is not None:
                fragment = handler(field, raw_value, self._config)
                log.debug(f"Custom handler for '{field}' produced {fragment!r}")
                predicates.update(fragment or {})
                continue

            predicates[field] = self.resolve_field(field, raw_value)
        return predicates

    def resolve_field(self, field: str, raw_value: Any) -> Predicate:
        """Derive the predicate for one (already aliased) field."""
        date_only = self._config.is_date_only(field)

        if is_null_value(raw_value):
            return Predicate(ComparisonKind.IS_NULL, None, date_only=date_only)

        if is_not_null_value(raw_value):
            return Predicate(ComparisonKind.IS_NOT_NULL, None, date_only=date_only)

        token = find_operator(raw_value, self._config.recognized_operators)
        if token is not None:
            return get_operator(token).build(field, raw_value, self._config)

        value = coerce(raw_value)
        if date_only:
            value = normalize_date_value(value)
        return Predicate(ComparisonKind.EQ, value, date_only=date_only)
