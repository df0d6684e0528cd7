"""Translation rules from validators to OpenAPI schema keywords."""
from .base import Rule, RuleContext
from .defaults import create_default_rules, set_not_nullable
from .registry import RuleRegistry, configure, merge

__all__ = [
    "Rule",
    "RuleContext",
    "create_default_rules",
    "set_not_nullable",
    "RuleRegistry",
    "configure",
    "merge",
]
