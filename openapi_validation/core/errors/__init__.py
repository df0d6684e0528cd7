"""Monadic Error Handling System

Type-safe error handling inspired by Rust's Result type.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction

Usage:
    from openapi_validation.core.errors import try_result, ErrorCode, Err

    match try_result(lambda: rule.apply(ctx), code=ErrorCode.E1001_RULE_APPLY_FAILED):
        case Ok(_):
            ...
        case Err(error):
            log.warning("rule_apply_failed", code=error.code.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Constructors
    from_exception,
    try_result,
)

from .builders import (
    rule_error,
    property_not_in_schema,
    schema_generation_failed,
    internal_error,
    not_implemented,
)

from .exceptions import (
    AppErrorException,
    FeatureNotSupported,
    raise_error,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "try_result",
    "rule_error",
    "property_not_in_schema",
    "schema_generation_failed",
    "internal_error",
    "not_implemented",
    "AppErrorException",
    "FeatureNotSupported",
    "raise_error",
]
