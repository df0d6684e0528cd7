"""Declarative Validation

Model validators composed of immutable property validators, plus the
factory that resolves the validator for a model type.
"""
from .validators import (
    ValidationResult,
    PropertyValidator,
    NotNull,
    NotEmpty,
    Length,
    MinimumLength,
    MaximumLength,
    ExactLength,
    RegularExpression,
    Email,
    Comparison,
    GreaterThan,
    GreaterThanOrEqual,
    LessThan,
    LessThanOrEqual,
    Between,
    InclusiveBetween,
    ExclusiveBetween,
    OneOf,
    Predicate,
)
from .model import (
    ModelValidator,
    ModelValidationResult,
    PropertyRule,
    RuleBuilder,
    ValidationFailure,
)
from .factory import ValidatorFactory

__all__ = [
    "ValidationResult",
    "PropertyValidator",
    "NotNull",
    "NotEmpty",
    "Length",
    "MinimumLength",
    "MaximumLength",
    "ExactLength",
    "RegularExpression",
    "Email",
    "Comparison",
    "GreaterThan",
    "GreaterThanOrEqual",
    "LessThan",
    "LessThanOrEqual",
    "Between",
    "InclusiveBetween",
    "ExclusiveBetween",
    "OneOf",
    "Predicate",
    "ModelValidator",
    "ModelValidationResult",
    "PropertyRule",
    "RuleBuilder",
    "ValidationFailure",
    "ValidatorFactory",
]
