"""Rule registry - defaults plus name-keyed overrides."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Iterable

from openapi_validation.core.logging import rules_logger

from .base import Rule
from .defaults import create_default_rules

log = rules_logger()


def merge(defaults: Iterable[Rule], overrides: Iterable[Rule] = ()) -> dict[str, Rule]:
    """Name-keyed map of ``defaults`` with each override inserted or replaced by name.

    Replaced rules keep their position; new names are appended.
    """
    rule_map: dict[str, Rule] = {}
    for rule in defaults:
        rule_map[rule.name] = rule
    for rule in overrides:
        if rule.name in rule_map:
            log.debug("rule_replaced", rule=rule.name)
        rule_map[rule.name] = rule
    return rule_map


class RuleRegistry(Mapping[str, Rule]):
    """Read-only, ordered mapping of rule name to Rule.

    Built once and then shared; nothing mutates it after construction.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, Rule]):
        self._rules = MappingProxyType(dict(rules))

    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in application order."""
        return tuple(self._rules.values())

    def __repr__(self) -> str:
        return f"RuleRegistry({list(self._rules)})"


def configure(custom_rules: Iterable[Rule] | None = None) -> RuleRegistry:
    """Registry of the built-in rules merged with ``custom_rules``."""
    return RuleRegistry(merge(create_default_rules(), custom_rules or ()))
