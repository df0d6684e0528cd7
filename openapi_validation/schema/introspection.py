"""Validator introspection: which property validators apply to a member."""
from __future__ import annotations

from openapi_validation.validation import ModelValidator, PropertyValidator

from .naming import find_name


def _declared_members(model: type | None) -> list[str]:
    if model is None:
        return []
    fields = getattr(model, "model_fields", None) or getattr(model, "__annotations__", None) or {}
    return list(fields)


def validators_for_member(
    validator: ModelValidator | None,
    property_name: str,
    *,
    include_conditional: bool = True,
) -> list[PropertyValidator]:
    """Every property validator scoped to ``property_name``.

    Matching ignores letter case, so ``Name``, ``name`` and ``NAME`` all
    resolve the same rules. A schema-cased name (``ownerEmail``) reaches the
    rules of ``owner_email`` only when the model declares no member spelled
    that way. Included validators are flattened in. An unknown type or
    property yields ``[]``.
    """
    if validator is None or not property_name:
        return []
    rules = validator.rules
    # A declared member is its own target even when no rule names it
    targets = [*_declared_members(validator.model), *(rule.property_name for rule in rules)]
    target = find_name(targets, property_name)
    if target is None:
        return []
    wanted = target.casefold()
    return [
        property_validator
        for rule in rules
        if rule.property_name.casefold() == wanted
        and (include_conditional or not rule.is_conditional)
        for property_validator in rule.validators
    ]
