"""Declarative Model Validators

A ``ModelValidator`` attaches property-level rules to one model type:

    class CreateImageRequestValidator(ModelValidator[CreateImageRequest]):
        model = CreateImageRequest

        def __init__(self):
            super().__init__()
            self.rule_for("File").not_empty().with_error_code("MustNotBeEmpty")
            self.rule_for("Name").length(0, 250)

Rules are data: the OpenAPI layer reads them without running them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, TypeVar

from .validators import (
    Email,
    ExactLength,
    ExclusiveBetween,
    GreaterThan,
    GreaterThanOrEqual,
    InclusiveBetween,
    Length,
    LessThan,
    LessThanOrEqual,
    MaximumLength,
    MinimumLength,
    NotEmpty,
    NotNull,
    OneOf,
    Predicate,
    PropertyValidator,
    RegularExpression,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """One failed property validator."""
    property_name: str
    message: str
    error_code: str | None = None
    attempted_value: Any = None


@dataclass(frozen=True, slots=True)
class ModelValidationResult:
    failures: tuple[ValidationFailure, ...] = ()

    @property
    def is_valid(self) -> bool: return not self.failures

    def for_property(self, property_name: str) -> list[ValidationFailure]:
        return [f for f in self.failures if f.property_name.lower() == property_name.lower()]


@dataclass(slots=True)
class PropertyRule:
    """Validators declared for one property, with an optional condition."""
    property_name: str
    validators: list[PropertyValidator] = field(default_factory=list)
    condition: Callable[[Any], bool] | None = None

    @property
    def is_conditional(self) -> bool: return self.condition is not None

    def applies_to(self, instance: Any) -> bool:
        return self.condition is None or bool(self.condition(instance))


class RuleBuilder:
    """Fluent builder returned by ``ModelValidator.rule_for``.

    Every call appends a validator to the property rule; ``with_message``
    and ``with_error_code`` decorate the last validator added.
    """

    __slots__ = ("_rule",)

    def __init__(self, rule: PropertyRule):
        self._rule = rule

    @property
    def rule(self) -> PropertyRule: return self._rule

    def _add(self, validator: PropertyValidator) -> RuleBuilder:
        self._rule.validators.append(validator)
        return self

    def _replace_last(self, fn: Callable[[PropertyValidator], PropertyValidator]) -> RuleBuilder:
        if not self._rule.validators:
            raise ValueError(f"No validator declared for '{self._rule.property_name}' yet")
        self._rule.validators[-1] = fn(self._rule.validators[-1])
        return self

    # Presence
    def not_null(self) -> RuleBuilder: return self._add(NotNull())
    def not_empty(self) -> RuleBuilder: return self._add(NotEmpty())

    # Strings / collections
    def length(self, min_length: int, max_length: int) -> RuleBuilder:
        return self._add(Length(min_length, max_length))

    def min_length(self, min_length: int) -> RuleBuilder: return self._add(MinimumLength(min_length))
    def max_length(self, max_length: int) -> RuleBuilder: return self._add(MaximumLength(0, max_length))
    def exact_length(self, length: int) -> RuleBuilder: return self._add(ExactLength(length, length))

    def matches(self, pattern: str, flags: int = 0) -> RuleBuilder:
        return self._add(RegularExpression(pattern, flags))

    def email(self) -> RuleBuilder: return self._add(Email())

    # Numbers
    def greater_than(self, value: Any) -> RuleBuilder: return self._add(GreaterThan(value))
    def greater_than_or_equal(self, value: Any) -> RuleBuilder: return self._add(GreaterThanOrEqual(value))
    def less_than(self, value: Any) -> RuleBuilder: return self._add(LessThan(value))
    def less_than_or_equal(self, value: Any) -> RuleBuilder: return self._add(LessThanOrEqual(value))

    def inclusive_between(self, from_value: Any, to_value: Any) -> RuleBuilder:
        return self._add(InclusiveBetween(from_value, to_value))

    def exclusive_between(self, from_value: Any, to_value: Any) -> RuleBuilder:
        return self._add(ExclusiveBetween(from_value, to_value))

    # Membership / custom
    def one_of(self, *options: Any) -> RuleBuilder: return self._add(OneOf(tuple(options)))

    def must(self, predicate: Callable[..., bool], *, pass_instance: bool = False) -> RuleBuilder:
        return self._add(Predicate(predicate, pass_instance))

    def using(self, validator: PropertyValidator) -> RuleBuilder: return self._add(validator)

    # Decorators
    def with_message(self, message: str) -> RuleBuilder:
        return self._replace_last(lambda v: v.with_message(message))

    def with_error_code(self, code: str) -> RuleBuilder:
        return self._replace_last(lambda v: v.with_error_code(code))

    def when(self, condition: Callable[[Any], bool]) -> RuleBuilder:
        self._rule.condition = condition
        return self

    def unless(self, condition: Callable[[Any], bool]) -> RuleBuilder:
        self._rule.condition = lambda instance: not condition(instance)
        return self


class ModelValidator(Generic[T]):
    """Validator for one model type, composed of per-property rules."""

    model: ClassVar[type | None] = None

    def __init__(self):
        self._rules: list[PropertyRule] = []
        self._includes: list[ModelValidator] = []

    def rule_for(self, property_name: str) -> RuleBuilder:
        rule = PropertyRule(property_name)
        self._rules.append(rule)
        return RuleBuilder(rule)

    def include(self, other: ModelValidator) -> None:
        """Reuse the rules of ``other`` for this model."""
        if other is self:
            raise ValueError("A validator cannot include itself")
        self._includes.append(other)

    @property
    def rules(self) -> list[PropertyRule]:
        """Own rules followed by included rules, flattened."""
        flattened = list(self._rules)
        for included in self._includes:
            flattened.extend(included.rules)
        return flattened

    def properties(self) -> list[str]:
        seen: dict[str, str] = {}
        for rule in self.rules:
            seen.setdefault(rule.property_name.lower(), rule.property_name)
        return list(seen.values())

    def validate(self, instance: T) -> ModelValidationResult:
        failures: list[ValidationFailure] = []
        for rule in self.rules:
            if not rule.applies_to(instance):
                continue
            value = _read_property(instance, rule.property_name)
            for validator in rule.validators:
                if (result := validator.validate(value, instance)).is_valid:
                    continue
                failures.append(ValidationFailure(
                    property_name=rule.property_name,
                    message=result.error_message or "Validation failed",
                    error_code=result.error_code,
                    attempted_value=value,
                ))
        return ModelValidationResult(tuple(failures))

    def __repr__(self) -> str:
        model = self.model.__name__ if self.model else "?"
        return f"{type(self).__name__}(model={model}, rules={len(self.rules)})"


def _read_property(instance: Any, property_name: str) -> Any:
    if isinstance(instance, dict):
        return instance.get(property_name)
    return getattr(instance, property_name, None)


