"""Number descriptor and its refinements.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .base import Refinement, Type
from .result import Context, ValidationResult

MAX_SAFE_INTEGER = 2**53 - 1

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_float(text: str) -> float | None:
    """Parse the leading number of ``text``, ignoring whatever follows it.

    Returns:
        The parsed number, or None when ``text`` does not start with one
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    literal = match.group(1)
    if literal.endswith("Infinity"):
        return -math.inf if literal.startswith("-") else math.inf
    return float(literal)


def format_float(value: Any) -> str:
    """Render a number so that ``parse_float`` reads it back unchanged.

    Integral floats drop their fraction, so ``5.0`` renders as ``5``.
    """
    if isinstance(value, float):
        if math.isinf(value):
            return "-Infinity" if value < 0 else "Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return repr(value)


def is_safe_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return abs(value) <= MAX_SAFE_INTEGER
    if isinstance(value, float):
        return value.is_integer() and abs(value) <= MAX_SAFE_INTEGER
    return False


def is_finite(value: Any) -> bool:
    if isinstance(value, int):
        return True
    return math.isfinite(value)


class NumberMethods:
    """Numeric refinements available on numbers and on refined numbers."""

    def max(self, limit: float) -> Type:
        return self.refine(lambda n: n <= limit, f"<={format_float(limit)}", max=limit)  # type: ignore[attr-defined]

    def min(self, limit: float) -> Type:
        return self.refine(lambda n: n >= limit, f">={format_float(limit)}", min=limit)  # type: ignore[attr-defined]

    def greater(self, limit: float) -> Type:
        return self.refine(lambda n: n > limit, f">{format_float(limit)}", greater=limit)  # type: ignore[attr-defined]

    def less(self, limit: float) -> Type:
        return self.refine(lambda n: n < limit, f"<{format_float(limit)}", less=limit)  # type: ignore[attr-defined]

    def negative(self) -> Type:
        return self.refine(lambda n: n < 0, "-", less=0)  # type: ignore[attr-defined]

    def positive(self) -> Type:
        return self.refine(lambda n: n > 0, "+", greater=0)  # type: ignore[attr-defined]

    def integer(self) -> Type:
        return self.refine(is_safe_integer, "integer", integer=True)  # type: ignore[attr-defined]

    def finite(self) -> Type:
        return self.refine(is_finite, "finite", finite=True)  # type: ignore[attr-defined]

    def parse_float(self) -> NumberConversion:
        """Accept numeric strings, decoding them to numbers."""
        return NumberConversion(self)  # type: ignore[arg-type]


class NumberType(NumberMethods, Type):
    """Accepts ``int`` and ``float`` values; ``bool`` is not a number."""

    def __init__(self) -> None:
        super().__init__("number")

    def is_(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if self.is_(value):
            return ValidationResult.success(value)
        return self.fail(value, context)


class NumberRefinement(NumberMethods, Refinement):
    pass


class NumberConversion(NumberMethods, Type):
    """Parses a string into a number, then decodes it with the parent.

    Inputs that are not strings, or strings that do not start with a number,
    fail against the parent's name. Encoding renders the number back into
    a string.
    """

    def __init__(self, parent: Type):
        super().__init__(parent.tag, parent.options + ("parse_float",))
        self.parent = parent

    def is_(self, value: Any) -> bool:
        return self.parent.is_(value)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if not isinstance(value, str):
            return self.fail(value, context, self.parent.name)
        parsed = parse_float(value)
        if parsed is None:
            return self.fail(value, context, self.parent.name)
        return self.parent.validate(parsed, context)

    def encode(self, value: Any) -> str:
        return format_float(self.parent.encode(value))


NumberType.refinement_class = NumberRefinement
NumberRefinement.refinement_class = NumberRefinement
NumberConversion.refinement_class = NumberRefinement


def number() -> NumberType:
    return NumberType()
