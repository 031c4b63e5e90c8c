"""Object descriptors with loose, strict and violet matching modes.

A loose object checks its declared fields and keeps any other property. A
strict object additionally rejects properties it does not declare. A violet
object drops such properties from its output without complaining.

Example:
    ```python
    user = object_type(
        {"id": number().integer(), "name": string()},
        {"email": string()},
        name="User",
    ).violet()

    user.decode({"id": 1, "name": "ann", "role": "admin"}).value
    # {'id': 1, 'name': 'ann'}
    user.name
    # 'User(violet)'
    ```
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .alternation import OptionalType
from .base import NeverType, Refinement, Type
from .exceptions import SchemaDefinitionError
from .result import UNDEFINED, Context, ContextEntry, ValidationError, ValidationResult

NEVER = NeverType()


class Mode(Enum):
    """How an object treats properties it does not declare."""

    LOOSE = "loose"
    STRICT = "strict"
    VIOLET = "violet"


def name_from_props(
    required: Mapping[str, Type] | None = None,
    optional: Mapping[str, Type] | None = None,
) -> str:
    """Derive ``{ a: T, b?: U }`` from field descriptors, in declared order."""
    parts = [f"{key}: {t.name}" for key, t in (required or {}).items()]
    parts.extend(f"{key}?: {t.name}" for key, t in (optional or {}).items())
    if not parts:
        return "{}"
    return f"{{ {', '.join(parts)} }}"


@dataclass(frozen=True)
class ObjectShape:
    """Declared fields of an object and the mode used to match it.

    The field maps are stored read-only and are shared, not copied, between
    the mode variants of one shape.
    """

    required: Mapping[str, Type] = field(default_factory=dict)
    optional: Mapping[str, Type] = field(default_factory=dict)
    name: str | None = None
    mode: Mode = Mode.LOOSE

    def __post_init__(self) -> None:
        for attr in ("required", "optional"):
            value = getattr(self, attr)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, attr, MappingProxyType(dict(value)))

        overlap = [key for key in self.required if key in self.optional]
        if overlap:
            raise SchemaDefinitionError(
                f"Fields declared both required and optional: {', '.join(overlap)}",
                context={"fields": overlap},
            )

    @property
    def declared(self) -> frozenset[str]:
        return frozenset(self.required) | frozenset(self.optional)

    def with_mode(self, mode: Mode) -> ObjectShape:
        return dataclasses.replace(self, mode=mode)


class ObjectMethods:
    """Class checks available on objects and on refined objects."""

    def type_(self, cls: type) -> Type:
        """Require the decoded value's class to be exactly ``cls``."""
        return self.refine(  # type: ignore[attr-defined]
            lambda v: type(v) is cls, f"type {cls.__name__}", type=cls
        )

    def instanceof(self, cls: type) -> Type:
        """Require the decoded value to be an instance of ``cls``."""
        return self.refine(  # type: ignore[attr-defined]
            lambda v: isinstance(v, cls), f"instanceof {cls.__name__}", instanceof=cls
        )


class ObjectType(ObjectMethods, Type):
    """Descriptor for mappings with required and optional fields.

    Required fields must be present and decode against their descriptor.
    Optional fields may be absent or ``None``; ``None`` is treated as absent
    and removed from the output.
    """

    def __init__(self, shape: ObjectShape):
        tag = shape.name or name_from_props(shape.required, shape.optional)
        options = () if shape.mode is Mode.LOOSE else (shape.mode.value,)
        super().__init__(tag, options)
        self.shape = shape
        self._optional_types = {key: OptionalType(t) for key, t in shape.optional.items()}

    @property
    def mode(self) -> Mode:
        return self.shape.mode

    def strict(self) -> ObjectType:
        """Reject properties that are not declared."""
        return self._with_mode(Mode.STRICT)

    def violet(self) -> ObjectType:
        """Silently drop properties that are not declared."""
        return self._with_mode(Mode.VIOLET)

    def _with_mode(self, mode: Mode) -> ObjectType:
        if self.shape.mode is not Mode.LOOSE:
            raise SchemaDefinitionError(
                f"{self.name} already has a mode; {mode.value} applies to loose objects only",
                context={"mode": self.shape.mode.value},
            )
        return ObjectType(self.shape.with_mode(mode))

    def _extra_keys(self, value: Mapping[Any, Any]) -> list[Any]:
        declared = self.shape.declared
        return [key for key in value if key not in declared]

    def _is_loose(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        for key, t in self.shape.required.items():
            if key not in value or not t.is_(value[key]):
                return False
        for key, t in self.shape.optional.items():
            item = value.get(key)
            if item is not None and not t.is_(item):
                return False
        return True

    def is_(self, value: Any) -> bool:
        if not self._is_loose(value):
            return False
        if self.shape.mode is Mode.STRICT:
            return not self._extra_keys(value)
        return True

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if not isinstance(value, Mapping):
            return self.fail(value, context)

        result = self._validate_fields(value, context)
        if not result.valid or self.shape.mode is Mode.LOOSE:
            return result

        if self.shape.mode is Mode.STRICT:
            errors = [
                ValidationError(value[key], context + (ContextEntry(key, NEVER, value[key]),), NEVER.name)
                for key in self._extra_keys(value)
            ]
            if errors:
                return ValidationResult.failure(value, errors)
            return result

        declared = self.shape.declared
        return ValidationResult.success(
            {key: item for key, item in result.value.items() if key in declared}
        )

    def _validate_fields(self, value: Mapping[Any, Any], context: Context) -> ValidationResult:
        errors: list[ValidationError] = []
        changes: dict[str, Any] = {}
        removed: list[str] = []

        for key, t in self.shape.required.items():
            item = value[key] if key in value else UNDEFINED
            field_context = context + (ContextEntry(key, t, item),)
            result = t.validate(item, field_context)
            if item is UNDEFINED:
                # A missing required field fails even if its type accepts nothing.
                errors.extend(result.errors or [ValidationError(item, field_context, t.name)])
            elif not result.valid:
                errors.extend(result.errors)
            elif result.value is not item:
                changes[key] = result.value

        for key, t in self._optional_types.items():
            item = value.get(key)
            if item is None:
                if key in value:
                    removed.append(key)
                continue
            result = t.validate(item, context + (ContextEntry(key, t, item),))
            if not result.valid:
                errors.extend(result.errors)
            elif result.value is not item:
                changes[key] = result.value

        if errors:
            return ValidationResult.failure(value, errors)
        if not changes and not removed:
            return ValidationResult.success(value)

        output = dict(value)
        output.update(changes)
        for key in removed:
            del output[key]
        return ValidationResult.success(output)

    def encode(self, value: Mapping[Any, Any]) -> dict[Any, Any]:
        output = dict(value)
        for key, t in self.shape.required.items():
            if key in output:
                output[key] = t.encode(output[key])
        for key, t in self.shape.optional.items():
            if output.get(key) is not None:
                output[key] = t.encode(output[key])
        return output


class ObjectRefinement(ObjectMethods, Refinement):
    pass


ObjectType.refinement_class = ObjectRefinement
ObjectRefinement.refinement_class = ObjectRefinement


def object_type(
    required: Mapping[str, Type] | None = None,
    optional: Mapping[str, Type] | None = None,
    name: str | None = None,
) -> ObjectType:
    """Build a loose object descriptor.

    Args:
        required: Fields that must be present
        optional: Fields that may be absent or None
        name: Display name; derived from the fields when omitted

    Returns:
        ObjectType in loose mode
    """
    return ObjectType(ObjectShape(required or {}, optional or {}, name))


def strict(obj: ObjectType) -> ObjectType:
    return obj.strict()


def violet(obj: ObjectType) -> ObjectType:
    return obj.violet()
