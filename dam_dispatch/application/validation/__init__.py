"""Message validation - rules and the validator registry."""

from .registry import ValidatorRegistry
from .rules import (
    ValidationRule,
    greater_than,
    greater_than_or_equal,
    inclusive_between,
    is_set,
    less_than_or_equal,
    max_length,
    must,
    not_empty,
    pagination_rules,
    resolve_field,
)

__all__: list[str] = [
    "ValidatorRegistry",
    "ValidationRule",
    "not_empty",
    "greater_than",
    "greater_than_or_equal",
    "less_than_or_equal",
    "inclusive_between",
    "max_length",
    "must",
    "is_set",
    "pagination_rules",
    "resolve_field",
]
