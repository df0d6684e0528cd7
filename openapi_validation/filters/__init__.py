"""Filters invoked by the host's OpenAPI generation pass."""
from .context import (
    ApiDescription,
    ApiParameterDescription,
    ModelMetadata,
    OperationFilterContext,
)
from .operation import ValidationOperationFilter
from .schema import ValidationSchemaFilter

__all__ = [
    "ApiDescription",
    "ApiParameterDescription",
    "ModelMetadata",
    "OperationFilterContext",
    "ValidationOperationFilter",
    "ValidationSchemaFilter",
]
