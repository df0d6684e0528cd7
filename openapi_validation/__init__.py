"""OpenAPI Validation

Publishes declarative model validation rules in generated OpenAPI schemas:
required-ness, lengths, numeric bounds, patterns and enums are derived from
each model's validator instead of being re-declared as schema annotations.
"""
from openapi_validation.engines import MutationResult, SchemaMutationEngine
from openapi_validation.filters import (
    ApiDescription,
    ApiParameterDescription,
    ModelMetadata,
    OperationFilterContext,
    ValidationOperationFilter,
    ValidationSchemaFilter,
)
from openapi_validation.integration import build_openapi, describe_route, install
from openapi_validation.rules import Rule, RuleContext, RuleRegistry, configure, create_default_rules, merge
from openapi_validation.schema import (
    PydanticSchemaGenerator,
    SchemaRepository,
    to_schema_case,
    validators_for_member,
)
from openapi_validation.validation import ModelValidator, ValidatorFactory

__version__ = "0.1.0"

__all__ = [
    "MutationResult",
    "SchemaMutationEngine",
    "ApiDescription",
    "ApiParameterDescription",
    "ModelMetadata",
    "OperationFilterContext",
    "ValidationOperationFilter",
    "ValidationSchemaFilter",
    "build_openapi",
    "describe_route",
    "install",
    "Rule",
    "RuleContext",
    "RuleRegistry",
    "configure",
    "create_default_rules",
    "merge",
    "PydanticSchemaGenerator",
    "SchemaRepository",
    "to_schema_case",
    "validators_for_member",
    "ModelValidator",
    "ValidatorFactory",
]
