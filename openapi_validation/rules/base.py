"""Translation rule primitives."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from openapi_validation.core.errors import property_not_in_schema, raise_error
from openapi_validation.schema.naming import resolve_property_key
from openapi_validation.schema.repository import SchemaNode
from openapi_validation.validation import PropertyValidator


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Everything one rule invocation may read or mutate.

    Created per (schema, property key, validator) triple and dropped after
    the call.
    """
    schema: SchemaNode
    property_key: str
    validator: PropertyValidator
    model_type: type | None = None

    @property
    def property_schema(self) -> SchemaNode:
        """Sub-schema of ``property_key``; raises when the schema does not declare it."""
        properties = self.schema.get("properties") or {}
        key = resolve_property_key(self.schema, self.property_key)
        if key not in properties:
            raise_error(property_not_in_schema(self.property_key, self.schema.get("title"), origin="rules").error)
        return properties[key]


def _never(validator: PropertyValidator) -> bool:
    return False


def _nothing(context: RuleContext) -> None:
    return None


@dataclass(frozen=True, slots=True)
class Rule:
    """Named translation unit: ``matches`` selects validators, ``apply`` mutates the schema."""
    name: str
    matches: Callable[[PropertyValidator], bool]
    apply: Callable[[RuleContext], None]

    @classmethod
    def noop(cls, name: str) -> Rule:
        """Rule that neutralizes the rule registered under ``name``."""
        return cls(name, _never, _nothing)

    def __repr__(self) -> str:
        return f"Rule({self.name!r})"


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
