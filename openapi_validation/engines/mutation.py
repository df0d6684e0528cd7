"""Schema Mutation Engine

Applies translation rules to generated schema nodes. Every rule invocation
is isolated with ``try_result``: a failing rule becomes an ``Err`` that is
logged and collected, and the remaining rules still run.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from openapi_validation.core.config import settings
from openapi_validation.core.errors import AppError, Err, ErrorCode, Ok, try_result
from openapi_validation.core.logging import rules_logger
from openapi_validation.rules import RuleContext, RuleRegistry, configure
from openapi_validation.schema import (
    SchemaGenerator,
    SchemaNode,
    SchemaRepository,
    contains_key,
    resolve_property_key,
    validators_for_member,
)
from openapi_validation.validation import PropertyValidator, ValidatorFactory

log = rules_logger()


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of applying rules for one property.

    ``required`` is read back from the schema after all rules ran and is
    what callers should publish for the property.
    """
    schema: SchemaNode
    property_key: str
    required: bool
    applied: tuple[str, ...] = ()
    errors: tuple[AppError, ...] = field(default=())

    @property
    def has_errors(self) -> bool: return bool(self.errors)


class SchemaMutationEngine:
    """Matches property validators to rules and mutates schema nodes."""

    __slots__ = ("validator_factory", "registry", "include_conditional")

    def __init__(
        self,
        validator_factory: ValidatorFactory | None = None,
        registry: RuleRegistry | None = None,
        *,
        include_conditional: bool | None = None,
    ):
        self.validator_factory = validator_factory if validator_factory is not None else ValidatorFactory()
        self.registry = registry if registry is not None else configure()
        self.include_conditional = (
            settings.APPLY_CONDITIONAL_RULES if include_conditional is None else include_conditional
        )

    def apply_rules_for_property(
        self,
        model_type: type,
        property_name: str,
        repository: SchemaRepository,
        generator: SchemaGenerator,
    ) -> MutationResult | None:
        """Apply every matching rule for ``property_name`` of ``model_type``.

        Returns None when the type has no validator or the property has no
        validators; nothing is generated or mutated in that case.
        """
        validator = self.validator_factory.get_validator(model_type)
        if validator is None:
            return None

        member_validators = validators_for_member(
            validator, property_name, include_conditional=self.include_conditional,
        )
        if not member_validators:
            return None

        schema = repository.get_or_generate(model_type, generator)
        return self._apply(schema, model_type, property_name, member_validators)

    def apply_rules_to_schema(self, model_type: type, schema: SchemaNode) -> list[MutationResult]:
        """Apply rules for every validated property of ``model_type`` to a full object schema."""
        validator = self.validator_factory.get_validator(model_type)
        if validator is None:
            return []

        results: list[MutationResult] = []
        for property_name in validator.properties():
            member_validators = validators_for_member(
                validator, property_name, include_conditional=self.include_conditional,
            )
            if member_validators:
                results.append(self._apply(schema, model_type, property_name, member_validators))
        return results

    def _apply(
        self,
        schema: SchemaNode,
        model_type: type,
        property_name: str,
        member_validators: list[PropertyValidator],
    ) -> MutationResult:
        key = resolve_property_key(schema, property_name)
        applied: list[str] = []
        errors: list[AppError] = []

        for property_validator in member_validators:
            for rule in self.registry.rules:
                if not rule.matches(property_validator):
                    continue
                context = RuleContext(schema, key, property_validator, model_type)
                match try_result(
                    lambda: rule.apply(context),
                    code=ErrorCode.E1001_RULE_APPLY_FAILED,
                    origin="engines.mutation",
                    rule=rule.name,
                    property_key=key,
                ):
                    case Ok(_):
                        applied.append(rule.name)
                    case Err(error):
                        errors.append(error)
                        log.warning(
                            "rule_apply_failed",
                            rule=rule.name,
                            property_key=key,
                            model=model_type,
                            validator=property_validator.kind,
                            error=error.message,
                            exc_info=error.cause,
                        )

        required = contains_key(schema.get("required"), key)
        log.debug("rules_applied", model=model_type, property_key=key, applied=applied, required=required)
        return MutationResult(schema, key, required, tuple(applied), tuple(errors))
