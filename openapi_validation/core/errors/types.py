"""Monadic Error Handling Types

Result/Either types for deterministic, composable error propagation across
the rule engine. Rule and operation boundaries convert exceptions into
``Err`` values so one failure never aborts the surrounding generation pass.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
E = TypeVar("E", bound="AppError")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E1xxx: Rule translation errors
    E2xxx: Schema repository/generation errors
    E3xxx: Operation/description errors
    E9xxx: Internal/Unknown errors
    """
    # Rules (E1xxx)
    E1000_RULE_GENERIC = 1000
    E1001_RULE_APPLY_FAILED = 1001
    E1002_PROPERTY_NOT_IN_SCHEMA = 1002

    # Schema (E2xxx)
    E2000_SCHEMA_GENERIC = 2000
    E2001_SCHEMA_GENERATION_FAILED = 2001
    E2002_SCHEMA_FILTER_FAILED = 2002

    # Operations (E3xxx)
    E3000_OPERATION_GENERIC = 3000
    E3001_OPERATION_FILTER_FAILED = 3001

    # Internal (E9xxx)
    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001
    E9002_NOT_IMPLEMENTED = 9002

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 1000 <= code < 2000:
            return "rule"
        if 2000 <= code < 3000:
            return "schema"
        if 3000 <= code < 4000:
            return "operation"
        return "internal"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing and debugging."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""


@dataclass(frozen=True, slots=True)
class AppError:
    """Base error with full context.

    All errors carry:
    - Typed error code from taxonomy
    - Human-readable message
    - Structured metadata (rule name, property key, operation id)
    - Optional cause for error chaining
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (correlation_id={self.context.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result monad."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result monad.

    Wraps an AppError. Immutable and carries full error context.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


def from_exception(
    exc: Exception,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    message: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Convert exception to Err with full context."""
    return Err(AppError(
        code=code,
        message=message or f"{type(exc).__name__}: {exc}",
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=exc,
    ))


def try_result(
    f: Callable[[], T],
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    origin: str = "",
    **metadata,
) -> Result[T, AppError]:
    """Execute function and wrap result in Result monad.

    Catches exceptions and converts to Err.
    """
    try:
        return Ok(f())
    except Exception as e:
        return from_exception(e, code=code, origin=origin, **metadata)
