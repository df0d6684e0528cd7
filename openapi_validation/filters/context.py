"""Operation description types handed to filters by the host integration."""
from __future__ import annotations

from dataclasses import dataclass

from openapi_validation.schema import SchemaGenerator, SchemaRepository, find_name


@dataclass(frozen=True, slots=True)
class ModelMetadata:
    """Backing model of a parameter: the container type and the property it binds."""
    container_type: type | None
    property_name: str


@dataclass(frozen=True, slots=True)
class ApiParameterDescription:
    name: str
    model_metadata: ModelMetadata | None = None


@dataclass(frozen=True, slots=True)
class ApiDescription:
    """Parameters of one operation as the host framework binds them."""
    parameter_descriptions: tuple[ApiParameterDescription, ...] = ()

    def find(self, parameter_name: str) -> ApiParameterDescription | None:
        """Description whose name matches, ignoring case."""
        by_name: dict[str, ApiParameterDescription] = {}
        for description in self.parameter_descriptions:
            by_name.setdefault(description.name, description)
        name = find_name(by_name, parameter_name)
        return by_name[name] if name is not None else None


@dataclass(frozen=True, slots=True)
class OperationFilterContext:
    api_description: ApiDescription
    schema_repository: SchemaRepository
    schema_generator: SchemaGenerator
    method: str | None = None
    path: str | None = None
