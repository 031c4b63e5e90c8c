"""String descriptor and its refinements.
"""

from __future__ import annotations

import re
from re import Pattern as RegexPattern
from typing import Any

from .base import Refinement, SizedMethods, Type
from .result import Context, ValidationResult


class StringMethods(SizedMethods):
    def regex(self, pattern: str | RegexPattern) -> Type:
        """Require the whole string to match ``pattern``."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self.refine(  # type: ignore[attr-defined]
            lambda s: regex.fullmatch(s) is not None,
            f"/{regex.pattern}/",
            pattern=regex.pattern,
        )


class StringType(StringMethods, Type):
    def __init__(self) -> None:
        super().__init__("string")

    def is_(self, value: Any) -> bool:
        return isinstance(value, str)

    def validate(self, value: Any, context: Context) -> ValidationResult:
        if isinstance(value, str):
            return ValidationResult.success(value)
        return self.fail(value, context)


class StringRefinement(StringMethods, Refinement):
    pass


StringType.refinement_class = StringRefinement
StringRefinement.refinement_class = StringRefinement


def string() -> StringType:
    return StringType()
