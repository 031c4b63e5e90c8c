"""Custom exceptions for the dataknobs_shapes package.

This module defines exception types for the shapes package, built on the
common exception framework from dataknobs_common. Decode failures are
returned as data (see ``ValidationResult``); these exceptions are raised for
programming and configuration mistakes, or when a caller explicitly asks for
a failed result to be raised.

Example:
    ```python
    from dataknobs_shapes import number, DecodeError

    try:
        number().check("12")
    except DecodeError as e:
        logger.error(str(e))
        for error in e.errors:
            logger.error(f"{error.path}: {error.expected}")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dataknobs_common import (
    ConfigurationError as BaseConfigurationError,
    DataknobsError,
)

if TYPE_CHECKING:
    from .result import ValidationError


class ShapesError(DataknobsError):
    """Base exception for the dataknobs_shapes package."""

    pass


class SchemaDefinitionError(ShapesError):
    """Raised when a descriptor is composed incorrectly.

    Example:
        ```python
        object_type({"a": string()}, {"a": number()})
        # SchemaDefinitionError: Fields declared both required and optional: a
        ```
    """

    pass


class ConfigurationError(ShapesError, BaseConfigurationError):
    """Raised when a descriptor configuration is invalid or cannot be loaded."""

    pass


class DecodeError(ShapesError):
    """Raised when a failed decode is turned into an exception.

    The message is the rendered diagnostic; ``errors`` keeps the raw leaf
    errors for programmatic inspection.
    """

    def __init__(self, message: str, errors: list[ValidationError]):
        self.errors = errors
        super().__init__(
            message,
            context={"paths": [error.path_string for error in errors]},
        )


__all__ = [
    "ShapesError",
    "SchemaDefinitionError",
    "ConfigurationError",
    "DecodeError",
]
