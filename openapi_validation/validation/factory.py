"""Validator factory - resolves "the validator for type T"."""
from __future__ import annotations

from typing import Iterable

from .model import ModelValidator


class ValidatorFactory:
    """Registry of model validators keyed by model type."""

    def __init__(self, validators: Iterable[ModelValidator] = ()):
        self._validators: dict[type, ModelValidator] = {}
        for validator in validators:
            self.register(validator)

    def register(self, validator: ModelValidator, model: type | None = None) -> None:
        """Register a validator. Later registrations for the same model win."""
        target = model or validator.model
        if target is None:
            raise ValueError(f"{type(validator).__name__} declares no model; pass model= explicitly")
        self._validators[target] = validator

    def get_validator(self, model_type: type | None) -> ModelValidator | None:
        if model_type is None:
            return None
        return self._validators.get(model_type)

    @property
    def models(self) -> list[type]:
        return list(self._validators)

    def __contains__(self, model_type: object) -> bool:
        return model_type in self._validators

    def __len__(self) -> int:
        return len(self._validators)
