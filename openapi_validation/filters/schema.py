"""Schema filter: validator rules for full object schemas (request bodies, forms)."""
from __future__ import annotations

from typing import Iterable

from openapi_validation.core.config import Settings, settings as default_settings
from openapi_validation.core.errors import ErrorCode, try_result
from openapi_validation.core.logging import filter_logger
from openapi_validation.engines import MutationResult, SchemaMutationEngine
from openapi_validation.rules import Rule, RuleRegistry, configure
from openapi_validation.schema import SchemaNode
from openapi_validation.validation import ValidatorFactory

log = filter_logger()


class ValidationSchemaFilter:
    """Applies every rule of a model's validator to that model's schema."""

    __slots__ = ("validator_factory", "registry", "engine")

    def __init__(
        self,
        validator_factory: ValidatorFactory | None = None,
        rules: Iterable[Rule] | None = None,
        *,
        settings: Settings | None = None,
        registry: RuleRegistry | None = None,
    ):
        settings = settings or default_settings
        self.validator_factory = validator_factory if validator_factory is not None else ValidatorFactory()
        self.registry = registry if registry is not None else configure(rules)
        self.engine = SchemaMutationEngine(
            self.validator_factory,
            self.registry,
            include_conditional=settings.APPLY_CONDITIONAL_RULES,
        )

    def apply(self, schema: SchemaNode, model_type: type) -> list[MutationResult]:
        """Mutate ``schema`` in place. Never raises; returns the per-property results."""
        if not schema.get("properties"):
            return []
        result = try_result(
            lambda: self.engine.apply_rules_to_schema(model_type, schema),
            code=ErrorCode.E2002_SCHEMA_FILTER_FAILED,
            origin="filters.schema",
        )
        if result.is_err():
            error = result.unwrap_err()
            log.warning("schema_filter_failed", model=model_type, error=error.message, exc_info=error.cause)
            return []
        return result.unwrap()
