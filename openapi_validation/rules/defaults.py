"""Built-in translation rules.

Each rule pairs a validator kind with the OpenAPI 3.1 keywords it implies:

    Required    NotNull, NotEmpty        -> schema.required
    NotEmpty    NotEmpty                 -> minLength/minItems = 1, not nullable
    NotNull     NotNull                  -> not nullable
    Length      Length (+min/max/exact)  -> minLength/maxLength (minItems/maxItems)
    Pattern     RegularExpression        -> pattern
    EMail       Email                    -> format: email
    Comparison  >, >=, <, <=             -> minimum/exclusiveMinimum/maximum/exclusiveMaximum
    Between     inclusive/exclusive      -> minimum/maximum or exclusive bounds
    Enum        OneOf                    -> enum

Rules run in this order for every matching validator; when two rules set
the same keyword the later one wins.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from openapi_validation.schema.naming import contains_key
from openapi_validation.schema.repository import SchemaNode
from openapi_validation.validation import (
    Between,
    Comparison,
    Email,
    ExactLength,
    GreaterThan,
    GreaterThanOrEqual,
    Length,
    LessThan,
    LessThanOrEqual,
    MaximumLength,
    MinimumLength,
    NotEmpty,
    NotNull,
    OneOf,
    RegularExpression,
)

from .base import Rule, RuleContext, is_number


def _json_number(value: Any) -> int | float:
    return float(value) if isinstance(value, Decimal) else value


def _has_type(prop: SchemaNode, json_type: str) -> bool:
    types = prop.get("type")
    if types == json_type or (isinstance(types, list) and json_type in types):
        return True
    return any(_has_type(variant, json_type) for variant in prop.get("anyOf") or ())


def _size_keywords(prop: SchemaNode) -> tuple[str, str] | None:
    """(min, max) size keywords for the property type, None when it has no size."""
    if _has_type(prop, "array"):
        return "minItems", "maxItems"
    if _has_type(prop, "string"):
        return "minLength", "maxLength"
    return None


def set_not_nullable(prop: SchemaNode) -> None:
    """Drop the ``null`` alternative pydantic emits for ``X | None`` properties."""
    if isinstance(types := prop.get("type"), list) and "null" in types:
        remaining = [t for t in types if t != "null"]
        prop["type"] = remaining[0] if len(remaining) == 1 else remaining
    else:
        variants = prop.get("anyOf") or []
        kept = [v for v in variants if v.get("type") != "null"]
        if len(kept) == len(variants) or not kept:
            return
        if len(kept) > 1:
            prop["anyOf"] = kept
        else:
            del prop["anyOf"]
            for key, value in kept[0].items():
                prop.setdefault(key, value)
    if prop.get("default", ...) is None:
        del prop["default"]


# =============================================================================
# Actions
# =============================================================================

def _apply_required(ctx: RuleContext) -> None:
    required = ctx.schema.setdefault("required", [])
    if not contains_key(required, ctx.property_key):
        required.append(ctx.property_key)


def _apply_not_empty(ctx: RuleContext) -> None:
    prop = ctx.property_schema
    set_not_nullable(prop)
    if (keywords := _size_keywords(prop)) is None:
        return
    keyword = keywords[0]
    if prop.get(keyword, 0) < 1:
        prop[keyword] = 1


def _apply_not_null(ctx: RuleContext) -> None:
    set_not_nullable(ctx.property_schema)


def _apply_length(ctx: RuleContext) -> None:
    validator: Length = ctx.validator  # type: ignore[assignment]
    prop = ctx.property_schema
    if (keywords := _size_keywords(prop)) is None:
        return
    min_keyword, max_keyword = keywords
    if validator.max_length is not None and validator.max_length > 0:
        prop[max_keyword] = validator.max_length
    if isinstance(validator, MaximumLength):
        return
    # A plain Length(0, n) must not loosen a stricter minimum already published
    if (isinstance(validator, (MinimumLength, ExactLength))
            or min_keyword not in prop
            or validator.min_length > prop[min_keyword]):
        prop[min_keyword] = validator.min_length


def _apply_pattern(ctx: RuleContext) -> None:
    ctx.property_schema["pattern"] = ctx.validator.pattern  # type: ignore[attr-defined]


def _apply_email(ctx: RuleContext) -> None:
    ctx.property_schema["format"] = "email"


def _apply_comparison(ctx: RuleContext) -> None:
    validator: Comparison = ctx.validator  # type: ignore[assignment]
    prop = ctx.property_schema
    value = _json_number(validator.value_to_compare)
    match validator:
        case GreaterThanOrEqual():
            prop["minimum"] = value
        case GreaterThan():
            prop["exclusiveMinimum"] = value
        case LessThanOrEqual():
            prop["maximum"] = value
        case LessThan():
            prop["exclusiveMaximum"] = value


def _apply_between(ctx: RuleContext) -> None:
    validator: Between = ctx.validator  # type: ignore[assignment]
    prop = ctx.property_schema
    low, high = _json_number(validator.from_value), _json_number(validator.to_value)
    if validator.exclusive:
        prop["exclusiveMinimum"], prop["exclusiveMaximum"] = low, high
    else:
        prop["minimum"], prop["maximum"] = low, high


def _apply_enum(ctx: RuleContext) -> None:
    options = ctx.validator.options  # type: ignore[attr-defined]
    ctx.property_schema["enum"] = [o.value if isinstance(o, Enum) else o for o in options]


# =============================================================================
# Registry defaults
# =============================================================================

def create_default_rules() -> list[Rule]:
    """Fresh list of the built-in rules, in application order."""
    return [
        Rule("Required", lambda v: isinstance(v, (NotNull, NotEmpty)), _apply_required),
        Rule("NotEmpty", lambda v: isinstance(v, NotEmpty), _apply_not_empty),
        Rule("NotNull", lambda v: isinstance(v, NotNull), _apply_not_null),
        Rule("Length", lambda v: isinstance(v, Length), _apply_length),
        Rule("Pattern", lambda v: isinstance(v, RegularExpression), _apply_pattern),
        Rule("EMail", lambda v: isinstance(v, Email), _apply_email),
        Rule(
            "Comparison",
            lambda v: isinstance(v, Comparison) and is_number(v.value_to_compare),
            _apply_comparison,
        ),
        Rule(
            "Between",
            lambda v: isinstance(v, Between) and is_number(v.from_value) and is_number(v.to_value),
            _apply_between,
        ),
        Rule("Enum", lambda v: isinstance(v, OneOf) and bool(v.options), _apply_enum),
    ]
