"""Array descriptor: every element decoded against one element descriptor.
"""

from __future__ import annotations

from typing import Any

from .base import Refinement, SizedMethods, Type
from .result import Context, ContextEntry, ValidationError, ValidationResult


class ArrayType(SizedMethods, Type):
    """Accepts lists and tuples whose elements all decode against ``item_type``.

    Every element is decoded; failures at all indices are collected. The
    input list is returned as is when no element changed while decoding,
    otherwise (and for tuples) a new list is built.
    """

    def __init__(self, item_type: Type):
        super().__init__(f"{item_type.name}[]")
        self.item_type = item_type

    def is_(self, value: Any) -> bool:
        return isinstance(value, (list, tuple)) and all(self.item_type.is_(v) for v in value)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if not isinstance(value, (list, tuple)):
            return self.fail(value, context)

        errors: list[ValidationError] = []
        items = []
        changed = isinstance(value, tuple)
        for index, item in enumerate(value):
            result = self.item_type.validate(
                item, context + (ContextEntry(index, self.item_type, item),)
            )
            if not result.valid:
                errors.extend(result.errors)
                continue
            if result.value is not item:
                changed = True
            items.append(result.value)

        if errors:
            return ValidationResult.failure(value, errors)
        return ValidationResult.success(items if changed else value)

    def encode(self, value: Any) -> list[Any]:
        return [self.item_type.encode(item) for item in value]


class ArrayRefinement(SizedMethods, Refinement):
    pass


ArrayType.refinement_class = ArrayRefinement
ArrayRefinement.refinement_class = ArrayRefinement


def array(item_type: Type) -> ArrayType:
    return ArrayType(item_type)
