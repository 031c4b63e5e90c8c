"""Factory building descriptors from configuration.

Configuration Options:
    type (str): string, number, boolean, null, undefined, any, never,
        array, object or union
    name (str): Object display name (objects only)
    mode (str): loose, strict or violet (objects only, default: loose)
    required (dict): Field name to descriptor configuration (objects only)
    optional (dict): Field name to descriptor configuration (objects only)
    items (dict): Element descriptor configuration (arrays only)
    types (list): Alternative descriptor configurations (unions only)
    constraints (list): Refinements applied in order
    allow (list): Alternatives appended after the constraints

Constraint Options:
    type (str): max, min, greater, less, negative, positive, integer, finite,
        parse_float, min_length, max_length, length, regex, type, instanceof
    limit (number): Bound for the comparison and length refinements
    pattern (str): Regular expression for regex
    class (str): Dotted class path for type and instanceof

Example Configuration:
    type: object
    name: Order
    mode: violet
    required:
      id:
        type: number
        constraints:
          - type: integer
          - type: min
            limit: 1
      lines:
        type: array
        items:
          type: string
    optional:
      note:
        type: string
        allow:
          - type: number
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Union

from dataknobs_config import FactoryBase
from dataknobs_config.inheritance import InheritanceError, load_config_with_inheritance

from .alternation import allow
from .arrays import array
from .base import Type, any_, boolean, never, null, undefined
from .exceptions import ConfigurationError
from .numbers import number
from .objects import Mode, object_type
from .strings import string

logger = logging.getLogger(__name__)

_LIMIT_CONSTRAINTS = {"max", "min", "greater", "less", "min_length", "max_length", "length"}
_PLAIN_CONSTRAINTS = {"negative", "positive", "integer", "finite", "parse_float"}
_CLASS_CONSTRAINTS = {"type": "type_", "instanceof": "instanceof"}
_FILE_SUFFIXES = (".yaml", ".yml", ".json")


class TypeFactory(FactoryBase):
    """Factory for creating descriptors from configuration dictionaries."""

    def __init__(self) -> None:
        self._builders: dict[str, Callable[[Mapping[str, Any]], Type]] = {
            "string": lambda config: string(),
            "number": lambda config: number(),
            "boolean": lambda config: boolean(),
            "null": lambda config: null(),
            "undefined": lambda config: undefined(),
            "any": lambda config: any_(),
            "never": lambda config: never(),
            "array": self._build_array,
            "object": self._build_object,
            "union": self._build_union,
        }

    def create(self, **config: Any) -> Type:
        """Create a descriptor from configuration.

        Args:
            **config: Descriptor configuration

        Returns:
            The configured descriptor

        Raises:
            ConfigurationError: If the configuration names an unknown type,
                constraint or mode, or is missing a required option
        """
        descriptor = self.build(config)
        logger.info(f"Created descriptor: {descriptor.name}")
        return descriptor

    def build(self, config: Any) -> Type:
        if not isinstance(config, Mapping):
            raise ConfigurationError(
                f"Descriptor configuration must be a mapping, got {type(config).__name__}"
            )

        type_name = str(config.get("type", "")).lower()
        builder = self._builders.get(type_name)
        if builder is None:
            raise ConfigurationError(
                f"Unknown descriptor type: {type_name!r}",
                context={"type": type_name, "available": sorted(self._builders)},
            )

        descriptor = builder(config)
        for constraint in config.get("constraints") or []:
            descriptor = self._apply_constraint(descriptor, constraint)

        alternatives = [self.build(c) for c in config.get("allow") or []]
        if alternatives:
            descriptor = allow(descriptor, *alternatives)
        return descriptor

    def _build_array(self, config: Mapping[str, Any]) -> Type:
        if "items" not in config:
            raise ConfigurationError("Array configuration requires 'items'")
        return array(self.build(config["items"]))

    def _build_union(self, config: Mapping[str, Any]) -> Type:
        types = [self.build(c) for c in config.get("types") or []]
        if not types:
            raise ConfigurationError("Union configuration requires at least one entry in 'types'")
        return allow(*types)

    def _build_object(self, config: Mapping[str, Any]) -> Type:
        required = {key: self.build(c) for key, c in (config.get("required") or {}).items()}
        optional = {key: self.build(c) for key, c in (config.get("optional") or {}).items()}
        obj = object_type(required, optional, config.get("name"))

        mode_name = str(config.get("mode", Mode.LOOSE.value)).lower()
        try:
            mode = Mode(mode_name)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown object mode: {mode_name!r}",
                context={"mode": mode_name, "available": [m.value for m in Mode]},
            ) from e

        if mode is Mode.STRICT:
            return obj.strict()
        if mode is Mode.VIOLET:
            return obj.violet()
        return obj

    def _apply_constraint(self, descriptor: Type, config: Any) -> Type:
        if isinstance(config, str):
            config = {"type": config}
        constraint = str(config.get("type", "")).lower()

        if constraint in _LIMIT_CONSTRAINTS:
            if "limit" not in config:
                raise ConfigurationError(f"Constraint {constraint!r} requires 'limit'")
            args: tuple[Any, ...] = (config["limit"],)
            method = constraint
        elif constraint in _PLAIN_CONSTRAINTS:
            args = ()
            method = constraint
        elif constraint == "regex":
            if "pattern" not in config:
                raise ConfigurationError("Constraint 'regex' requires 'pattern'")
            args = (config["pattern"],)
            method = constraint
        elif constraint in _CLASS_CONSTRAINTS:
            if "class" not in config:
                raise ConfigurationError(f"Constraint {constraint!r} requires 'class'")
            args = (self._load_class(config["class"]),)
            method = _CLASS_CONSTRAINTS[constraint]
        else:
            raise ConfigurationError(f"Unknown constraint type: {constraint!r}")

        refinement = getattr(descriptor, method, None)
        if refinement is None:
            raise ConfigurationError(
                f"Constraint {constraint!r} does not apply to {descriptor.name}",
                context={"constraint": constraint, "descriptor": descriptor.name},
            )
        return refinement(*args)

    def _load_class(self, class_path: str) -> type:
        """Load a class from a dotted path such as ``collections.OrderedDict``."""
        if "." not in class_path:
            raise ConfigurationError(f"Invalid class path: {class_path}")
        module_path, class_name = class_path.rsplit(".", 1)
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ConfigurationError(f"Failed to import {class_path}: {e}") from e

        cls = getattr(module, class_name, None)
        if not isinstance(cls, type):
            raise ConfigurationError(f"Class {class_name} not found in {module_path}")
        return cls


def load_type(path: Union[str, Path], factory: TypeFactory | None = None) -> Type:
    """Build a descriptor from a YAML or JSON file.

    The file may name a sibling file in ``extends``; the two are deep merged,
    so a descriptor file can add fields to a shared base.

    Args:
        path: Path to the configuration file
        factory: Factory to use; the shared ``type_factory`` by default

    Returns:
        The configured descriptor
    """
    path = Path(path)
    if path.suffix.lower() not in _FILE_SUFFIXES:
        raise ConfigurationError(
            f"Unsupported file format: {path.suffix}",
            context={"path": str(path), "supported": list(_FILE_SUFFIXES)},
        )

    # Variable substitution would rewrite regex patterns as paths
    try:
        data = load_config_with_inheritance(path, substitute_vars=False)
    except InheritanceError as e:
        raise ConfigurationError(str(e), context={"path": str(path)}) from e

    return (factory or type_factory).create(**data)


# Shared instance for registration
type_factory = TypeFactory()
