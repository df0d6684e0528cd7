"""Property Validators

Atomic, immutable validators attached to one model property through
``ModelValidator.rule_for``. Each validator knows how to check a value, but
the OpenAPI translation layer only reads its declared kind and parameters.

Features:
- Frozen dataclass validators for immutability
- Compiled regex caching
- Rich validation metadata for error context
- Custom error codes/messages via ``with_error_code``/``with_message``
"""
from __future__ import annotations

import operator
import re
from abc import ABC, abstractmethod
from collections.abc import Sized
from dataclasses import dataclass, field, replace
from decimal import Decimal
from functools import lru_cache
from typing import Any, Callable, ClassVar


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of a validation check with rich context."""
    is_valid: bool
    error_message: str | None = None
    error_code: str | None = None
    constraint: str | None = None
    expected: Any = None
    actual: Any = None

    @classmethod
    def valid(cls) -> ValidationResult: return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str, code: str | None = None, *,
                constraint: str | None = None, expected: Any = None, actual: Any = None) -> ValidationResult:
        return cls(is_valid=False, error_message=message, error_code=code, constraint=constraint,
            expected=expected, actual=actual)

    def to_dict(self) -> dict[str, Any]:
        if self.is_valid: return {"valid": True}
        return {"valid": False, "message": self.error_message, "code": self.error_code,
            "constraint": self.constraint, "expected": self.expected, "actual": self.actual}


@lru_cache(maxsize=256)
def _compile(pattern: str, flags: int) -> re.Pattern:
    return re.compile(pattern, flags)


@dataclass(frozen=True, slots=True)
class PropertyValidator(ABC):
    """Base class for property validators.

    ``kind`` classifies the validator for diagnostics. ``message`` and
    ``error_code`` override the defaults reported on failure.
    """
    kind: ClassVar[str] = "custom"

    message: str | None = field(default=None, kw_only=True)
    error_code: str | None = field(default=None, kw_only=True)

    @abstractmethod
    def check(self, value: Any, instance: Any = None) -> bool:
        """Return True when ``value`` satisfies the validator."""

    @property
    @abstractmethod
    def default_message(self) -> str:
        """Message used when no custom message is set."""

    @property
    def constraint_name(self) -> str:
        return self.kind

    def validate(self, value: Any, instance: Any = None) -> ValidationResult:
        if self.check(value, instance):
            return ValidationResult.valid()
        return ValidationResult.invalid(
            self.message or self.default_message,
            self.error_code or self.kind,
            constraint=self.constraint_name,
            actual=value,
        )

    def with_message(self, message: str) -> PropertyValidator: return replace(self, message=message)

    def with_error_code(self, code: str) -> PropertyValidator: return replace(self, error_code=code)


# ============================================================================
# Presence Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class NotNull(PropertyValidator):
    """Value must not be None."""
    kind: ClassVar[str] = "not_null"

    @property
    def default_message(self) -> str: return "Value must not be null"

    def check(self, value: Any, instance: Any = None) -> bool:
        return value is not None


@dataclass(frozen=True, slots=True)
class NotEmpty(PropertyValidator):
    """Value must not be None, blank, an empty collection or a zero default."""
    kind: ClassVar[str] = "not_empty"

    @property
    def default_message(self) -> str: return "Value must not be empty"

    def check(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float, Decimal)):
            return value != 0
        if isinstance(value, Sized):
            return len(value) > 0
        return True


# ============================================================================
# String Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Length(PropertyValidator):
    """Length of a string or collection within [min_length, max_length]."""
    kind: ClassVar[str] = "length"

    min_length: int = 0
    max_length: int | None = None

    @property
    def constraint_name(self) -> str:
        return f"length[{self.min_length},{self.max_length if self.max_length is not None else '*'}]"

    @property
    def default_message(self) -> str:
        if self.max_length is None:
            return f"Length must be at least {self.min_length}"
        return f"Length must be between {self.min_length} and {self.max_length}"

    def check(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return True
        if not isinstance(value, Sized):
            return False
        size = len(value)
        if size < self.min_length:
            return False
        return self.max_length is None or size <= self.max_length


@dataclass(frozen=True, slots=True)
class MinimumLength(Length):
    """Length of at least ``min_length``."""


@dataclass(frozen=True, slots=True)
class MaximumLength(Length):
    """Length of at most ``max_length``."""


@dataclass(frozen=True, slots=True)
class ExactLength(Length):
    """Length of exactly ``min_length`` (== ``max_length``)."""


@dataclass(frozen=True, slots=True)
class RegularExpression(PropertyValidator):
    """String must match ``pattern``."""
    kind: ClassVar[str] = "regex"

    pattern: str = ""
    flags: int = 0

    @property
    def constraint_name(self) -> str: return f"pattern[{self.pattern}]"

    @property
    def default_message(self) -> str: return f"Value does not match pattern: {self.pattern}"

    def check(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and _compile(self.pattern, self.flags).search(value) is not None


EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


@dataclass(frozen=True, slots=True)
class Email(PropertyValidator):
    """Validate email address format."""
    kind: ClassVar[str] = "email"

    @property
    def default_message(self) -> str: return "Value is not a valid email address"

    def check(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and _compile(EMAIL_PATTERN, 0).match(value) is not None


# ============================================================================
# Comparison Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Comparison(PropertyValidator):
    """Compare value against ``value_to_compare``."""
    kind: ClassVar[str] = "comparison"
    symbol: ClassVar[str] = "?"
    compare: ClassVar[Callable[[Any, Any], bool]]

    value_to_compare: Any = None

    @property
    def constraint_name(self) -> str: return f"{self.symbol}{self.value_to_compare}"

    @property
    def default_message(self) -> str: return f"Value must be {self.symbol} {self.value_to_compare}"

    def check(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return True
        try:
            return type(self).compare(value, self.value_to_compare)
        except TypeError:
            return False


@dataclass(frozen=True, slots=True)
class GreaterThan(Comparison):
    symbol: ClassVar[str] = ">"
    compare = staticmethod(operator.gt)


@dataclass(frozen=True, slots=True)
class GreaterThanOrEqual(Comparison):
    symbol: ClassVar[str] = ">="
    compare = staticmethod(operator.ge)


@dataclass(frozen=True, slots=True)
class LessThan(Comparison):
    symbol: ClassVar[str] = "<"
    compare = staticmethod(operator.lt)


@dataclass(frozen=True, slots=True)
class LessThanOrEqual(Comparison):
    symbol: ClassVar[str] = "<="
    compare = staticmethod(operator.le)


@dataclass(frozen=True, slots=True)
class Between(PropertyValidator):
    """Value within the range [from_value, to_value]."""
    kind: ClassVar[str] = "between"
    exclusive: ClassVar[bool] = False

    from_value: Any = None
    to_value: Any = None

    @property
    def constraint_name(self) -> str:
        left, right = ("(", ")") if self.exclusive else ("[", "]")
        return f"range{left}{self.from_value}, {self.to_value}{right}"

    @property
    def default_message(self) -> str:
        qualifier = "exclusive" if self.exclusive else "inclusive"
        return f"Value must be between {self.from_value} and {self.to_value} ({qualifier})"

    def check(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return True
        try:
            if self.exclusive:
                return self.from_value < value < self.to_value
            return self.from_value <= value <= self.to_value
        except TypeError:
            return False


@dataclass(frozen=True, slots=True)
class InclusiveBetween(Between):
    exclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class ExclusiveBetween(Between):
    exclusive: ClassVar[bool] = True


# ============================================================================
# Membership / Custom
# ============================================================================

@dataclass(frozen=True, slots=True)
class OneOf(PropertyValidator):
    """Value must be one of ``options``."""
    kind: ClassVar[str] = "enum"

    options: tuple[Any, ...] = ()

    @property
    def constraint_name(self) -> str:
        opts = [str(o) for o in self.options[:5]]
        suffix = f"... +{len(self.options) - 5}" if len(self.options) > 5 else ""
        return f"one_of[{', '.join(opts)}{suffix}]"

    @property
    def default_message(self) -> str:
        return f"Value must be one of: {', '.join(str(o) for o in self.options)}"

    def check(self, value: Any, instance: Any = None) -> bool:
        return value is None or value in self.options


@dataclass(frozen=True, slots=True)
class Predicate(PropertyValidator):
    """Custom predicate ("must").

    Usage:
        Predicate(lambda value: value % 2 == 0)
        Predicate(lambda instance, value: value != instance.other, pass_instance=True)
    """
    kind: ClassVar[str] = "predicate"

    predicate: Callable[..., bool] = field(default=lambda value: True)
    pass_instance: bool = False

    @property
    def default_message(self) -> str: return "The specified condition was not met"

    def check(self, value: Any, instance: Any = None) -> bool:
        if self.pass_instance:
            return bool(self.predicate(instance, value))
        return bool(self.predicate(value))
