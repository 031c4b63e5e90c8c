"""Descriptor base class, generic refinement and the simple primitives.

A descriptor (``Type``) pairs a decode rule with a display name. Descriptors
are immutable once built: every combinator returns a new descriptor and
never changes the ones it was built from, so a descriptor can be shared by
any number of larger ones.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from .result import UNDEFINED, Context, ContextEntry, ValidationError, ValidationResult

if TYPE_CHECKING:
    from .alternation import UnionType

logger = logging.getLogger(__name__)


class Type(ABC):
    """Base class for all descriptors.

    Attributes:
        tag: Base display name, e.g. ``number`` or ``InterfaceA``
        options: Labels of the decorations applied on top of the base
        name: Full display name used verbatim in diagnostics
    """

    def __init__(self, tag: str, options: tuple[str, ...] = ()):
        self.tag = tag
        self.options = tuple(options)
        self.name = f"{tag}({', '.join(self.options)})" if self.options else tag

    @abstractmethod
    def is_(self, value: Any) -> bool:
        """Check a value that is already of the decoded type."""

    @abstractmethod
    def validate(self, value: Any, context: Context) -> ValidationResult:
        """Decode a value at the given position of the decode trail.

        Args:
            value: Raw input value
            context: Trail from the root to this descriptor

        Returns:
            ValidationResult with the decoded value or the leaf errors
        """

    def encode(self, value: Any) -> Any:
        """Turn a decoded value back into its raw form."""
        return value

    def decode(self, value: Any) -> ValidationResult:
        """Decode an untyped input from the root.

        Args:
            value: Raw input value

        Returns:
            ValidationResult with the decoded value or every leaf error
        """
        result = self.validate(value, (ContextEntry("", self, value),))
        if not result.valid:
            logger.debug(f"Decoding against {self.name} failed with {len(result.errors)} error(s)")
        return result

    def check(self, value: Any) -> Any:
        """Decode a value and return it, raising ``DecodeError`` on failure."""
        return self.decode(value).unwrap()

    def fail(self, value: Any, context: Context, expected: str | None = None) -> ValidationResult:
        """Build a failure holding a single leaf error at ``context``."""
        return ValidationResult.failure(
            value, [ValidationError(value, context, expected or self.name)]
        )

    # Subclasses swap this so refinements keep the fluent methods of their family.
    refinement_class: type[Refinement] | None = None

    def refine(
        self,
        predicate: Callable[[Any], bool],
        label: str,
        **bounds: Any,
    ) -> Type:
        """Narrow this descriptor with a predicate.

        Args:
            predicate: Check applied to the value decoded by this descriptor
            label: Display label, reported as the expected name on failure
            **bounds: Values the predicate encodes, kept for introspection

        Returns:
            New refined descriptor
        """
        refinement_class = self.refinement_class or Refinement
        return refinement_class(self, predicate, label, bounds)

    def allow(self, *alternatives: Type) -> UnionType:
        """Accept this descriptor or any of ``alternatives``."""
        from .alternation import allow

        return allow(self, *alternatives)

    def __or__(self, other: Type) -> UnionType:
        return self.allow(other)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


class Refinement(Type):
    """Descriptor narrowing a parent descriptor by a predicate.

    The predicate only runs once the parent decoded successfully; a parent
    failure is passed through unchanged.
    """

    def __init__(
        self,
        parent: Type,
        predicate: Callable[[Any], bool],
        label: str,
        bounds: dict[str, Any] | None = None,
    ):
        super().__init__(parent.tag, parent.options + (label,))
        self.parent = parent
        self.predicate = predicate
        self.label = label
        self.bounds = dict(bounds or {})

    def _holds(self, value: Any) -> bool:
        try:
            return bool(self.predicate(value))
        except Exception as e:
            logger.warning(f"Refinement {self.label} raised on {value!r}: {e}")
            return False

    def is_(self, value: Any) -> bool:
        return self.parent.is_(value) and self._holds(value)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        result = self.parent.validate(value, context)
        if not result.valid:
            return result
        if self._holds(result.value):
            return result
        return self.fail(result.value, context, self.label)

    def encode(self, value: Any) -> Any:
        return self.parent.encode(value)


class SizedMethods:
    """Length refinements shared by strings and arrays."""

    def min_length(self, limit: int) -> Type:
        return self.refine(lambda v: len(v) >= limit, f"length>={limit}", min_length=limit)  # type: ignore[attr-defined]

    def max_length(self, limit: int) -> Type:
        return self.refine(lambda v: len(v) <= limit, f"length<={limit}", max_length=limit)  # type: ignore[attr-defined]

    def length(self, limit: int) -> Type:
        return self.refine(  # type: ignore[attr-defined]
            lambda v: len(v) == limit, f"length=={limit}", min_length=limit, max_length=limit
        )


class AnyType(Type):
    """Accepts every value."""

    def __init__(self) -> None:
        super().__init__("any")

    def is_(self, value: Any) -> bool:
        return True

    def validate(self, value: Any, context: Context) -> ValidationResult:
        return ValidationResult.success(value)


class NeverType(Type):
    """Accepts nothing."""

    def __init__(self) -> None:
        super().__init__("never")

    def is_(self, value: Any) -> bool:
        return False

    def validate(self, value: Any, context: Context) -> ValidationResult:
        return self.fail(value, context)


class UndefinedType(Type):
    """Accepts a missing value; ``None`` counts as missing and decodes to ``None``."""

    def __init__(self) -> None:
        super().__init__("undefined")

    def is_(self, value: Any) -> bool:
        return value is UNDEFINED or value is None

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if self.is_(value):
            return ValidationResult.success(None)
        return self.fail(value, context)


class NullType(Type):
    def __init__(self) -> None:
        super().__init__("null")

    def is_(self, value: Any) -> bool:
        return value is None

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if value is None:
            return ValidationResult.success(value)
        return self.fail(value, context)


class BooleanType(Type):
    def __init__(self) -> None:
        super().__init__("boolean")

    def is_(self, value: Any) -> bool:
        return isinstance(value, bool)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if isinstance(value, bool):
            return ValidationResult.success(value)
        return self.fail(value, context)


def any_() -> AnyType:
    return AnyType()


def never() -> NeverType:
    return NeverType()


def undefined() -> UndefinedType:
    return UndefinedType()


def null() -> NullType:
    return NullType()


def boolean() -> BooleanType:
    return BooleanType()


def refine(parent: Type, predicate: Callable[[Any], bool], label: str, **bounds: Any) -> Type:
    """Narrow ``parent`` by ``predicate``; see ``Type.refine``."""
    return parent.refine(predicate, label, **bounds)


def decode(descriptor: Type, value: Any) -> ValidationResult:
    """Decode ``value`` against ``descriptor`` from the root."""
    return descriptor.decode(value)
