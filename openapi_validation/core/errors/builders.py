"""Domain-Specific Error Builders

Ergonomic constructors for typed errors across the library.
Each builder creates AppError with appropriate code and context.
"""
from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Rule Errors (E1xxx)
# =============================================================================

def rule_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E1000_RULE_GENERIC,
    rule: str | None = None,
    property_key: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create rule translation error."""
    meta = {"rule": rule, "property_key": property_key, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def property_not_in_schema(property_key: str, schema_title: str | None = None, origin: str = "") -> Err[AppError]:
    return rule_error(
        f"Property '{property_key}' is not declared in schema '{schema_title or '?'}'",
        code=ErrorCode.E1002_PROPERTY_NOT_IN_SCHEMA,
        property_key=property_key,
        origin=origin,
    )


# =============================================================================
# Schema Errors (E2xxx)
# =============================================================================

def schema_generation_failed(model_name: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E2001_SCHEMA_GENERATION_FAILED,
        message=f"Schema generation failed for '{model_name}': {cause}",
        context=ErrorContext(origin=origin),
        metadata={"model": model_name},
        cause=cause,
    ))


# =============================================================================
# Internal Errors (E9xxx)
# =============================================================================

def internal_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create internal/unexpected error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=cause,
    ))


def not_implemented(feature: str, origin: str = "") -> Err[AppError]:
    return internal_error(
        f"Feature '{feature}' is not implemented",
        code=ErrorCode.E9002_NOT_IMPLEMENTED,
        feature=feature,
        origin=origin,
    )
