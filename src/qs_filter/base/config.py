# src/qs_filter/base/config.py
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Set, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .exceptions import ConfigurationError
from .operators import DEFAULT_OPERATOR_TOKENS, validate_operator_order

# --- Setup Logging ---
log = logging.getLogger(__name__)

# (field_name, raw_query_value, configuration) -> {field: Predicate}
CustomHandler = Callable[[str, Any, "Configuration"], Mapping[str, Any]]

DEFAULT_PAGE_SIZE = 25
DEFAULT_MAX_PAGE_SIZE = 100
DEFAULT_DATE_ONLY_FIELDS = frozenset({"createdAt", "updatedAt"})

# Option names accepted besides the field name itself, including the
# camelCase names used by the JavaScript query string conventions.
_OPTION_ALIASES: Dict[str, Tuple[str, ...]] = {
    "recognized_operators": ("ops", "recognizedOperators"),
    "field_aliases": ("alias", "fieldAliases"),
    "blacklisted_fields": ("blacklist", "blacklistedFields"),
    "custom_handlers": ("customHandlers",),
    "default_page_size": ("defaultPaginationLimit", "defaultPageSize"),
    "max_page_size": ("maximumPageSize", "maxPageSize"),
    "date_only_fields": ("dateFields", "dateOnlyFields"),
    "date_only_compare": ("dateOnlyCompare", "dateOnlyCompareEnabled"),
}


def _aliases(name: str) -> AliasChoices:
    return AliasChoices(name, *_OPTION_ALIASES[name])


class Configuration(BaseModel):
    """
    Read-only settings for translating query parameters.

    Built once and shared by every translation; instances are frozen and the
    mapping fields are exposed as read-only proxies.

    Attributes:
        recognized_operators: Operator tokens tried, in order, against each
            value. A token may not follow one of its own prefixes.
        field_aliases: External query key -> internal field name.
        blacklisted_fields: Internal field names that never produce a predicate.
        custom_handlers: Internal field name -> callable overriding predicate
            derivation for that field. Its returned mapping is merged as-is.
        default_page_size: Page size used when ``limit`` is absent or invalid.
        max_page_size: Largest accepted ``limit``; None disables the cap.
        date_only_fields: Fields compared at calendar-date granularity.
        date_only_compare: Turns date-only comparison on for those fields.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recognized_operators: Tuple[str, ...] = Field(
        default=DEFAULT_OPERATOR_TOKENS,
        validation_alias=_aliases("recognized_operators"),
    )
    field_aliases: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        validation_alias=_aliases("field_aliases"),
    )
    blacklisted_fields: FrozenSet[str] = Field(
        default=frozenset(), validation_alias=_aliases("blacklisted_fields")
    )
    custom_handlers: Mapping[str, Callable[..., Any]] = Field(
        default_factory=dict,
        validate_default=True,
        validation_alias=_aliases("custom_handlers"),
    )
    default_page_size: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=1, validation_alias=_aliases("default_page_size")
    )
    max_page_size: Optional[int] = Field(
        default=DEFAULT_MAX_PAGE_SIZE, ge=1, validation_alias=_aliases("max_page_size")
    )
    date_only_fields: FrozenSet[str] = Field(
        default=DEFAULT_DATE_ONLY_FIELDS, validation_alias=_aliases("date_only_fields")
    )
    date_only_compare: bool = Field(
        default=False, validation_alias=_aliases("date_only_compare")
    )

    @field_validator("recognized_operators")
    @classmethod
    def check_operators(cls, tokens: Tuple[str, ...]) -> Tuple[str, ...]:
        # Not a ValueError: pydantic re-raises it unwrapped.
        validate_operator_order(tokens)
        return tokens

    @field_validator("field_aliases", "custom_handlers")
    @classmethod
    def freeze_mapping(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def check_page_sizes(self) -> "Configuration":
        if self.max_page_size is not None and self.max_page_size < self.default_page_size:
            raise ValueError(
                f"max_page_size ({self.max_page_size}) must be >= "
                f"default_page_size ({self.default_page_size})"
            )
        return self

    def is_date_only(self, field: str) -> bool:
        """True when ``field`` must be compared at calendar-date granularity."""
        return self.date_only_compare and field in self.date_only_fields

    def resolve_alias(self, key: str) -> str:
        return self.field_aliases.get(key, key)

    @classmethod
    def from_options(
        cls, options: Optional[Mapping[str, Any]] = None, *, strict: bool = False
    ) -> "Configuration":
        """
        Build a configuration from a loose options mapping.

        Keys may use field names or any of their aliases. With ``strict=False``
        an option whose value fails validation is dropped with a warning and
        its default applies. Errors not tied to a single option (the page size
        invariant) and operator table errors are always raised.

        Args:
            options: Raw options, e.g. loaded from a settings file.
            strict: Raise on the first invalid option instead of dropping it.

        Raises:
            ConfigurationError: If the options cannot form a valid configuration.
            OperatorConfigurationError: If the operator table is misconfigured.
        """
        remaining: Dict[str, Any] = dict(options or {})
        while True:
            try:
                return cls.model_validate(remaining)
            except ValidationError as e:
                if strict:
                    raise ConfigurationError(f"Invalid configuration: {e}") from e
                dropped = _drop_invalid_options(remaining, e)
                if not dropped:
                    raise ConfigurationError(f"Invalid configuration: {e}") from e
                log.warning(
                    f"Ignoring invalid configuration option(s) {sorted(dropped)}; "
                    "defaults apply."
                )


def _drop_invalid_options(options: Dict[str, Any], error: ValidationError) -> Set[str]:
    """Remove every key (name or alias) of each option the error points at."""
    invalid_fields = set()
    for detail in error.errors():
        loc = detail.get("loc") or ()
        if not loc:
            continue
        name = str(loc[0])
        for field_name, aliases in _OPTION_ALIASES.items():
            if name == field_name or name in aliases:
                invalid_fields.add(field_name)
    dropped = set()
    for field_name in invalid_fields:
        for key in (field_name, *_OPTION_ALIASES[field_name]):
            if key in options:
                del options[key]
                dropped.add(key)
    return dropped
