"""Composable runtime decoders with readable failure reports.

Descriptors are built bottom-up from primitives, refinements, alternations,
arrays and objects, then asked to decode an untyped value:

    ```python
    from dataknobs_shapes import array, create_message, number, object_type, string

    order = object_type({"lines": array(string() | number())}, name="Order").strict()
    result = order.decode({"lines": ["a", None]})
    if not result:
        print(create_message(result))
    ```
"""

from .alternation import OptionalType, UnionType, allow
from .arrays import ArrayType, array
from .base import (
    AnyType,
    BooleanType,
    NeverType,
    NullType,
    Refinement,
    Type,
    UndefinedType,
    any_,
    boolean,
    decode,
    never,
    null,
    refine,
    undefined,
)
from .exceptions import ConfigurationError, DecodeError, SchemaDefinitionError, ShapesError
from .factory import TypeFactory, load_type, type_factory
from .message import create_message
from .numbers import NumberConversion, NumberType, number
from .objects import Mode, ObjectShape, ObjectType, name_from_props, object_type, strict, violet
from .result import UNDEFINED, ContextEntry, ValidationError, ValidationResult
from .strings import StringType, string

__version__ = "0.1.0"

__all__ = [
    # Result types
    "UNDEFINED",
    "ContextEntry",
    "ValidationError",
    "ValidationResult",
    # Descriptors
    "Type",
    "Refinement",
    "AnyType",
    "NeverType",
    "UndefinedType",
    "NullType",
    "BooleanType",
    "NumberType",
    "NumberConversion",
    "StringType",
    "ArrayType",
    "UnionType",
    "OptionalType",
    "ObjectType",
    "ObjectShape",
    "Mode",
    # Combinators
    "any_",
    "never",
    "undefined",
    "null",
    "boolean",
    "number",
    "string",
    "array",
    "object_type",
    "strict",
    "violet",
    "allow",
    "refine",
    "decode",
    "name_from_props",
    # Rendering
    "create_message",
    # Configuration
    "TypeFactory",
    "type_factory",
    "load_type",
    # Exceptions
    "ShapesError",
    "SchemaDefinitionError",
    "ConfigurationError",
    "DecodeError",
]
