# src/qs_filter/base/operators.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from .exceptions import OperatorConfigurationError
from .handlers import handle_basic, handle_between, handle_set
from .predicates import ComparisonKind, Predicate

# --- Setup Logging ---
log = logging.getLogger(__name__)

PredicateHandler = Callable[..., Predicate]


@dataclass(frozen=True)
class OperatorToken:
    """A value prefix that selects a comparison kind and the handler building it."""

    token: str
    kind: ComparisonKind
    handler: PredicateHandler

    def build(self, field: str, raw_value: Any, config: Any) -> Predicate:
        return self.handler(self.kind, self.token, field, raw_value, config)


# --- Operator Grammar ---
# Matching walks this order (or the configured subset of it) and stops at the
# first token the value starts with, so every token must come before any
# shorter token that is its prefix: "$in" before "$", ">=" before ">".
OPERATOR_GRAMMAR: Tuple[OperatorToken, ...] = (
    OperatorToken("$in", ComparisonKind.IN, handle_set),
    OperatorToken("$nin", ComparisonKind.NIN, handle_set),
    OperatorToken("!", ComparisonKind.NE, handle_basic),
    OperatorToken("|", ComparisonKind.BETWEEN, handle_between),
    OperatorToken("^", ComparisonKind.STARTSWITH, handle_basic),
    OperatorToken("$", ComparisonKind.ENDSWITH, handle_basic),
    OperatorToken("~", ComparisonKind.CONTAINS, handle_basic),
    OperatorToken(">=", ComparisonKind.GTE, handle_basic),
    OperatorToken(">", ComparisonKind.GT, handle_basic),
    OperatorToken("<=", ComparisonKind.LTE, handle_basic),
    OperatorToken("<", ComparisonKind.LT, handle_basic),
)

OPERATORS_BY_TOKEN: Dict[str, OperatorToken] = {op.token: op for op in OPERATOR_GRAMMAR}

DEFAULT_OPERATOR_TOKENS: Tuple[str, ...] = tuple(op.token for op in OPERATOR_GRAMMAR)


def get_operator(token: str) -> OperatorToken:
    """
    Look up the grammar entry for a token.

    Raises:
        OperatorConfigurationError: If the token has no handler.
    """
    try:
        return OPERATORS_BY_TOKEN[token]
    except KeyError:
        raise OperatorConfigurationError(
            f"Operator token {token!r} has no handler. "
            f"Known tokens: {', '.join(DEFAULT_OPERATOR_TOKENS)}"
        ) from None


def validate_operator_order(tokens: Sequence[str]) -> None:
    """
    Check that a recognized operator sequence can be dispatched as listed.

    Every token must exist in the grammar, and no token may follow one of its
    own prefixes (``">"`` listed before ``">="`` would swallow ``">=5"``).

    Raises:
        OperatorConfigurationError: On an unknown or unreachable token.
    """
    seen = []
    for token in tokens:
        get_operator(token)
        for earlier in seen:
            if token.startswith(earlier):
                raise OperatorConfigurationError(
                    f"Operator token {token!r} is listed after its prefix {earlier!r} "
                    f"and could never match; list {token!r} first."
                )
        seen.append(token)


def find_operator(raw_value: Any, recognized_operators: Iterable[str]) -> Optional[str]:
    """Return the first recognized token ``raw_value`` starts with, or None."""
    if not isinstance(raw_value, str):
        return None
    for token in recognized_operators:
        if raw_value.startswith(token):
            log.debug(f"Value {raw_value!r} matched operator token {token!r}")
            return token
    return None
