"""Schema helpers: casing, validator introspection, repository and generation."""
from .naming import to_schema_case, names_match, find_name, contains_key, resolve_property_key
from .introspection import validators_for_member
from .repository import (
    SchemaNode,
    SchemaGenerator,
    SchemaRepository,
    PydanticSchemaGenerator,
    schema_name,
)

__all__ = [
    "to_schema_case",
    "names_match",
    "find_name",
    "contains_key",
    "resolve_property_key",
    "validators_for_member",
    "SchemaNode",
    "SchemaGenerator",
    "SchemaRepository",
    "PydanticSchemaGenerator",
    "schema_name",
]
