"""Validator registry for lookup by name."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from checkdigits.validators.base import Validator


class ValidatorRegistry:
    """Singleton registry of column validator classes."""

    _instance: "ValidatorRegistry | None" = None

    # Modules whose classes register themselves on import
    MODULES = ("checksum", "financial")

    def __new__(cls) -> "ValidatorRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._validators = {}
            cls._instance._categories = {}
            cls._instance._initialized = False
        return cls._instance

    def _discover_validators(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        for module in self.MODULES:
            importlib.import_module(f"checkdigits.validators.{module}")

    def register(self, validator_cls: type["Validator"]) -> None:
        """Register a validator class."""
        name = getattr(validator_cls, "name", validator_cls.__name__.lower())
        category = getattr(validator_cls, "category", "general")

        self._validators[name] = validator_cls

        if category not in self._categories:
            self._categories[category] = {}
        self._categories[category][name] = validator_cls

    def get(self, name: str) -> type["Validator"]:
        """Get a validator class by name."""
        self._discover_validators()
        if name not in self._validators:
            available = ", ".join(sorted(self._validators.keys()))
            raise ValueError(f"Unknown validator: {name}. Available: {available}")
        return self._validators[name]

    def get_by_category(self, category: str) -> dict[str, type["Validator"]]:
        """Get all validators in a category."""
        self._discover_validators()
        return self._categories.get(category, {}).copy()

    def list_all(self) -> dict[str, type["Validator"]]:
        """List all registered validators."""
        self._discover_validators()
        return self._validators.copy()

    def list_categories(self) -> list[str]:
        """List all categories."""
        self._discover_validators()
        return list(self._categories.keys())

    def __iter__(self) -> Iterator[tuple[str, type["Validator"]]]:
        self._discover_validators()
        return iter(self._validators.items())

    def __contains__(self, name: str) -> bool:
        self._discover_validators()
        return name in self._validators

    def __len__(self) -> int:
        self._discover_validators()
        return len(self._validators)


# Singleton instance
registry = ValidatorRegistry()


def register_validator(cls: type["Validator"]) -> type["Validator"]:
    """Decorator to register a validator class."""
    registry.register(cls)
    return cls
