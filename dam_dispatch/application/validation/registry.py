"""Validator registry - maps message types to their validation rules."""
import logging
import threading
from typing import Any, Dict, Iterable, List, Tuple, Type

from dam_dispatch.domain.base.exceptions import ConfigurationError

from .rules import ValidationRule

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """
    Static table of validation rules per message type.

    Rules registered for a base class also apply to its subclasses. Every
    applicable rule is evaluated so that all violations come back together.
    Once frozen the registry is read-only and safe to share without locking.
    """

    def __init__(self) -> None:
        self._rules: Dict[Type, List[ValidationRule]] = {}
        self._lock = threading.RLock()
        self._frozen = False

    def register(self, message_type: Type, *rules: ValidationRule) -> None:
        """Add rules for a message type."""
        with self._lock:
            if self._frozen:
                raise ConfigurationError(
                    f"Cannot register validation rules for {message_type.__name__}: registry is frozen"
                )
            self._rules.setdefault(message_type, []).extend(rules)
            logger.debug(
                f"Registered {len(rules)} validation rule(s) for {message_type.__name__}"
            )

    def freeze(self) -> None:
        """Reject further registrations."""
        with self._lock:
            self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def rules_for(self, message_type: Type) -> Tuple[ValidationRule, ...]:
        """Rules that apply to a message type, base-class rules first."""
        collected: List[ValidationRule] = []
        for klass in reversed(message_type.__mro__):
            collected.extend(self._rules.get(klass, ()))
        return tuple(collected)

    def evaluate(self, message: Any) -> List[str]:
        """
        Evaluate every applicable rule.

        Returns:
            Reasons of the violated rules in registration order; empty when valid
        """
        return [
            rule.reason
            for rule in self.rules_for(type(message))
            if not rule.is_satisfied_by(message)
        ]

    def registered_types(self) -> Iterable[Type]:
        return tuple(self._rules)

    def get_stats(self) -> Dict[str, int]:
        """Get registry statistics."""
        return {
            "message_types": len(self._rules),
            "rules": sum(len(rules) for rules in self._rules.values()),
        }
