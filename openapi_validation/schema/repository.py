"""Schema Repository and Generation

The repository is the memo of one OpenAPI generation pass: component
schemas keyed by model name. Nodes are generated on first access and then
reused, never regenerated per rule. Wrap the ``components.schemas`` mapping
of a generated document so mutations land in the published output.
"""
from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, TypeAdapter

from openapi_validation.core.errors import raise_error, schema_generation_failed
from openapi_validation.core.logging import schema_logger

log = schema_logger()

REF_TEMPLATE = "#/components/schemas/{model}"

SchemaNode = dict[str, Any]


def schema_name(model_type: type) -> str:
    return model_type.__name__


class SchemaGenerator(Protocol):
    """Produces the baseline schema for a type."""

    def generate_schema(self, model_type: type, repository: SchemaRepository) -> SchemaNode: ...


class SchemaRepository:
    """Component schemas of one generation pass, keyed by model name.

    FastAPI may publish a model as ``Name-Input``/``Name-Output`` when its
    validation and serialization schemas differ; lookups accept the input
    variant for the model name.
    """

    __slots__ = ("schemas", "_generated")

    def __init__(self, schemas: dict[str, SchemaNode] | None = None):
        self.schemas: dict[str, SchemaNode] = schemas if schemas is not None else {}
        self._generated: set[str] = set()

    def get(self, model_type: type) -> SchemaNode | None:
        name = schema_name(model_type)
        if name in self.schemas:
            return self.schemas[name]
        return self.schemas.get(f"{name}-Input")

    def put(self, model_type: type, node: SchemaNode) -> None:
        self.schemas[schema_name(model_type)] = node

    def get_or_generate(self, model_type: type, generator: SchemaGenerator) -> SchemaNode:
        """Existing node for ``model_type``, generating and storing it on first access."""
        if (node := self.get(model_type)) is not None:
            return node
        try:
            node = generator.generate_schema(model_type, self)
        except Exception as e:
            raise_error(schema_generation_failed(schema_name(model_type), e, origin="schema.repository").error)
        self.put(model_type, node)
        self._generated.add(schema_name(model_type))
        log.debug("schema_generated", model=model_type, properties=len(node.get("properties") or {}))
        return node

    @property
    def generated(self) -> frozenset[str]:
        """Names of schemas generated (rather than found) during this pass."""
        return frozenset(self._generated)

    def __contains__(self, model_type: object) -> bool:
        return isinstance(model_type, type) and self.get(model_type) is not None

    def __len__(self) -> int:
        return len(self.schemas)


class PydanticSchemaGenerator:
    """Generate OpenAPI 3.1 component schemas from pydantic models.

    Nested model definitions are registered in the repository as sibling
    components, so ``$ref`` pointers resolve against ``components.schemas``.
    """

    def __init__(self, mode: str = "validation", by_alias: bool = True):
        self.mode, self.by_alias = mode, by_alias

    def generate_schema(self, model_type: type, repository: SchemaRepository) -> SchemaNode:
        if isinstance(model_type, type) and issubclass(model_type, BaseModel):
            schema = model_type.model_json_schema(
                by_alias=self.by_alias, ref_template=REF_TEMPLATE, mode=self.mode,
            )
        else:
            schema = TypeAdapter(model_type).json_schema(
                by_alias=self.by_alias, ref_template=REF_TEMPLATE, mode=self.mode,
            )
        for name, definition in (schema.pop("$defs", None) or {}).items():
            repository.schemas.setdefault(name, definition)
        return schema
