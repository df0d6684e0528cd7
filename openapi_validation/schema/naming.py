"""Property name casing between models and published schemas."""
from __future__ import annotations

from typing import Any, Iterable

from pydantic.alias_generators import to_camel


def to_schema_case(name: str) -> str:
    """Convert a model property name to its schema-exposed (lowerCamelCase) name.

    ``File`` -> ``file``, ``page_size`` -> ``pageSize``, ``pageSize`` -> ``pageSize``.
    Pure, so it doubles as a pydantic ``alias_generator``.
    """
    if not name:
        return name
    if "_" in name.strip("_"):
        return to_camel(name)
    return name[0].lower() + name[1:]


def names_match(left: str, right: str) -> bool:
    """Case-insensitive comparison that also bridges snake_case and camelCase."""
    return member_key(left) == member_key(right)


def member_key(name: str) -> str:
    return to_schema_case(name).casefold()


def find_name(names: Iterable[str], name: str) -> str | None:
    """First of ``names`` equal to ``name`` ignoring case.

    The snake_case/camelCase bridge is only tried when no name matches
    as written, so ``page_size`` never stands in for a declared ``pagesize``.
    """
    names = list(names)
    wanted = name.casefold()
    for candidate in names:
        if candidate.casefold() == wanted:
            return candidate
    for candidate in names:
        if names_match(candidate, name):
            return candidate
    return None


def contains_key(keys: Iterable[str] | None, key: str) -> bool:
    """Case-insensitive membership of the schema key ``key`` in ``keys``."""
    if not keys:
        return False
    wanted = key.casefold()
    return any(candidate.casefold() == wanted for candidate in keys)


def resolve_property_key(schema: dict[str, Any], property_name: str) -> str:
    """Key under which ``property_name`` is exposed in ``schema["properties"]``.

    Tries the name as written, then the schema-cased name, then a
    case-insensitive search. Falls back to the schema-cased name when nothing matches.
    """
    schema_key = to_schema_case(property_name)
    properties = schema.get("properties") or {}
    for candidate in (property_name, schema_key):
        if candidate in properties:
            return candidate
    return find_name(properties, property_name) or schema_key
