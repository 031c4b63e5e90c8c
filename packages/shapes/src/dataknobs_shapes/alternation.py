"""Alternation: a descriptor matching any one of several descriptors.
"""

from __future__ import annotations

from typing import Any, Sequence

from .base import Type, UndefinedType
from .exceptions import SchemaDefinitionError
from .result import Context, ContextEntry, ValidationError, ValidationResult


class UnionType(Type):
    """Matches when any alternative matches.

    Alternatives are tried in declared order against the same input and the
    first success wins. When every alternative fails, the errors of all of
    them are reported, in declared order.
    """

    def __init__(self, types: Sequence[Type], name: str | None = None):
        if not types:
            raise SchemaDefinitionError("An alternation needs at least one alternative")
        self.types = tuple(types)
        super().__init__(name or f"({' | '.join(t.name for t in self.types)})")

    def is_(self, value: Any) -> bool:
        return any(t.is_(value) for t in self.types)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        errors: list[ValidationError] = []
        for index, alternative in enumerate(self.types):
            result = alternative.validate(
                value, context + (ContextEntry(index, alternative, value, branch=True),)
            )
            if result.valid:
                return result
            errors.extend(result.errors)
        return ValidationResult.failure(value, errors)

    def encode(self, value: Any) -> Any:
        for alternative in self.types:
            if alternative.is_(value):
                return alternative.encode(value)
        return value


class OptionalType(UnionType):
    """Optional object field: the field type or a missing value.

    Keeps the field type's name so object names read ``field?: type``. A
    plain alternation field type is flattened, so every alternative and
    ``undefined`` are siblings in the report.
    """

    def __init__(self, inner: Type):
        members = inner.types if type(inner) is UnionType else (inner,)
        super().__init__((*members, UndefinedType()), name=inner.name)
        self.inner = inner


def allow(primary: Type, *alternatives: Type) -> UnionType:
    """Extend ``primary`` so that it also accepts any of ``alternatives``.

    Plain alternations given as members are flattened, so
    ``allow(allow(a, b), c)`` is named ``(a | b | c)``.
    """
    types: list[Type] = []
    for t in (primary, *alternatives):
        if type(t) is UnionType:
            types.extend(t.types)
        else:
            types.append(t)
    return UnionType(types)
