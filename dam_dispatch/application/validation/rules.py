"""
Validation rules and rule builders.

A rule pairs a predicate over the whole message with the reason reported
when the predicate does not hold. Field paths may be dotted
(``"filter.page_number"``) to reach nested filter objects.
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

Predicate = Callable[[Any], bool]


def resolve_field(message: Any, path: str) -> Any:
    """Follow a dotted attribute path; missing links resolve to None."""
    value = message
    for name in path.split("."):
        if value is None:
            return None
        value = getattr(value, name, None)
    return value


@dataclass(frozen=True)
class ValidationRule:
    """A predicate over a message plus its human-readable failure reason."""

    reason: str
    predicate: Predicate
    field: Optional[str] = None
    when: Optional[Predicate] = None

    def applies_to(self, message: Any) -> bool:
        return self.when is None or bool(self.when(message))

    def is_satisfied_by(self, message: Any) -> bool:
        if not self.applies_to(message):
            return True
        return bool(self.predicate(message))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _field_rule(field: str, check: Predicate, reason: str, when: Optional[Predicate]) -> ValidationRule:
    return ValidationRule(
        reason=reason,
        predicate=lambda message: check(resolve_field(message, field)),
        field=field,
        when=when,
    )


def not_empty(field: str, reason: str, when: Optional[Predicate] = None) -> ValidationRule:
    """Field must be present and not blank."""
    return _field_rule(field, lambda value: not _is_empty(value), reason, when)


def greater_than(field: str, bound: Any, reason: str, when: Optional[Predicate] = None) -> ValidationRule:
    """Field must be set and strictly greater than ``bound``."""
    return _field_rule(field, lambda value: value is not None and value > bound, reason, when)


def greater_than_or_equal(field: str, bound: Any, reason: str, when: Optional[Predicate] = None) -> ValidationRule:
    """Field must be set and at least ``bound``."""
    return _field_rule(field, lambda value: value is not None and value >= bound, reason, when)


def less_than_or_equal(field: str, bound: Any, reason: str, when: Optional[Predicate] = None) -> ValidationRule:
    """Field must be set and at most ``bound``."""
    return _field_rule(field, lambda value: value is not None and value <= bound, reason, when)


def inclusive_between(
    field: str, low: Any, high: Any, reason: str, when: Optional[Predicate] = None
) -> ValidationRule:
    """Field must be set and within ``[low, high]``."""
    return _field_rule(field, lambda value: value is not None and low <= value <= high, reason, when)


def max_length(field: str, limit: int, reason: str, when: Optional[Predicate] = None) -> ValidationRule:
    """Field, when set, must not be longer than ``limit``."""
    return _field_rule(field, lambda value: value is None or len(value) <= limit, reason, when)


def must(predicate: Predicate, reason: str, when: Optional[Predicate] = None) -> ValidationRule:
    """Arbitrary predicate over the whole message (cross-field checks)."""
    return ValidationRule(reason=reason, predicate=predicate, when=when)


def is_set(field: str) -> Predicate:
    """Condition helper: the field holds a value."""
    return lambda message: resolve_field(message, field) is not None


PAGE_NUMBER_REASON = "La página debe ser mayor o igual a 1."
PAGE_SIZE_REASON = "El tamaño de página debe estar entre 1 y 100 registros."
MAX_PAGE_SIZE = 100


def pagination_rules(prefix: str = "") -> List[ValidationRule]:
    """Shared page checks for a pagination filter found at ``prefix``."""
    base = f"{prefix}." if prefix else ""
    return [
        greater_than_or_equal(f"{base}page_number", 1, PAGE_NUMBER_REASON),
        inclusive_between(f"{base}page_size", 1, MAX_PAGE_SIZE, PAGE_SIZE_REASON),
    ]
