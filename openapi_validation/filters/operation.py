"""Operation filter: validator rules for parameters bound from models.

Invoked once per generated operation. For every parameter backed by a
validated model property, the schema mutation engine runs the matching
rules and the parameter's ``required`` flag is set from the resulting schema.
"""
from __future__ import annotations

import copy
from typing import Any, Iterable

from openapi_validation.core.config import Settings, settings as default_settings
from openapi_validation.core.errors import ErrorCode, from_exception, not_implemented, raise_error
from openapi_validation.core.logging import bind_context, filter_logger, unbind_context
from openapi_validation.engines import MutationResult, SchemaMutationEngine
from openapi_validation.rules import Rule, RuleRegistry, configure
from openapi_validation.validation import ValidatorFactory

from .context import OperationFilterContext

log = filter_logger()

PARAMETER_CONSTRAINTS = "parameter_constraint_propagation"


class ValidationOperationFilter:
    """Applies validator-derived rules to the parameters of one operation at a time."""

    __slots__ = ("validator_factory", "registry", "engine")

    def __init__(
        self,
        validator_factory: ValidatorFactory | None = None,
        rules: Iterable[Rule] | None = None,
        *,
        settings: Settings | None = None,
        propagate_parameter_constraints: bool | None = None,
    ):
        settings = settings or default_settings
        if propagate_parameter_constraints is None:
            propagate_parameter_constraints = settings.PROPAGATE_PARAMETER_CONSTRAINTS
        if propagate_parameter_constraints:
            # Copying length/pattern/bounds onto parameter-level schemas is not implemented
            raise_error(not_implemented(PARAMETER_CONSTRAINTS, origin="filters.operation").error)

        self.validator_factory = validator_factory if validator_factory is not None else ValidatorFactory()
        self.registry: RuleRegistry = configure(rules)
        self.engine = SchemaMutationEngine(
            self.validator_factory,
            self.registry,
            include_conditional=settings.APPLY_CONDITIONAL_RULES,
        )

    def apply(self, operation: dict[str, Any], context: OperationFilterContext) -> None:
        """Mutate ``operation`` in place. Never raises.

        On any failure the operation's parameters are restored to their
        generated state and the failure is logged with the operation id.
        """
        parameters = operation.get("parameters")
        snapshot = copy.deepcopy(parameters)
        bind_context(operation_id=operation.get("operationId"))
        try:
            self._apply_internal(operation, context)
        except Exception as e:
            if snapshot is not None:
                operation["parameters"] = snapshot
            error = from_exception(
                e,
                code=ErrorCode.E3001_OPERATION_FILTER_FAILED,
                message=f"Error on apply rules for operation '{operation.get('operationId')}'",
                origin="filters.operation",
            ).error
            log.warning(
                "operation_filter_failed",
                operation_id=operation.get("operationId"),
                method=context.method,
                path=context.path,
                code=error.code.name,
                category=error.code.category,
                error=error.message,
                exc_info=e,
            )
        finally:
            unbind_context("operation_id")

    def _apply_internal(self, operation: dict[str, Any], context: OperationFilterContext) -> None:
        parameters = operation.get("parameters")
        if not parameters:
            return

        for parameter in parameters:
            description = context.api_description.find(parameter["name"])
            metadata = description.model_metadata if description else None
            if metadata is None or metadata.container_type is None:
                continue
            if self.validator_factory.get_validator(metadata.container_type) is None:
                continue

            result = self.engine.apply_rules_for_property(
                metadata.container_type,
                metadata.property_name,
                context.schema_repository,
                context.schema_generator,
            )
            if result is not None:
                self._write_back(parameter, result)

    @staticmethod
    def _write_back(parameter: dict[str, Any], result: MutationResult) -> None:
        if parameter.get("in") == "path":
            # OpenAPI requires path parameters to stay required
            return
        parameter["required"] = result.required
