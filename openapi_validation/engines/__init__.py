"""Processing engines."""
from .mutation import MutationResult, SchemaMutationEngine

__all__ = ["MutationResult", "SchemaMutationEngine"]
