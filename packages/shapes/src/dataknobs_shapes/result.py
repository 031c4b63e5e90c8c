"""Decode result types: the success/failure result and its leaf errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Tuple, Union

if TYPE_CHECKING:
    from .base import Type


class _Undefined:
    """Marker for a value that is not there at all, such as a missing key."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

PathKey = Union[str, int]


@dataclass(frozen=True)
class ContextEntry:
    """One step of the trail followed while decoding.

    Field and index steps extend the path. Branch steps record which
    alternative of an alternation was being tried and leave the path as is.
    ``actual`` is the value seen at that step; the message renderer falls
    back to it for errors that carry no value of their own.
    """

    key: PathKey
    type: Type
    actual: Any = UNDEFINED
    branch: bool = False


Context = Tuple[ContextEntry, ...]


def format_path(keys: tuple[PathKey, ...] | list[PathKey]) -> str:
    """Render path keys as ``$.field[0].other``."""
    parts = ["$"]
    for key in keys:
        if isinstance(key, int):
            parts.append(f"[{key}]")
        else:
            parts.append(f".{key}")
    return "".join(parts)


@dataclass(frozen=True)
class ValidationError:
    """A single leaf mismatch found while decoding.

    Attributes:
        value: The raw value that failed
        context: Decode trail from the root down to the failing descriptor
        expected: Name of what was expected at this point
    """

    value: Any
    context: Context
    expected: str

    @property
    def path(self) -> tuple[PathKey, ...]:
        """Field names and array indices leading to the failing value."""
        return tuple(
            entry.key for entry in self.context[1:] if not entry.branch
        )

    @property
    def path_string(self) -> str:
        return format_path(self.path)


@dataclass
class ValidationResult:
    """Tagged result of every decode operation.

    A successful result carries the decoded value; a failed one carries the
    original value and every leaf error found.
    """

    valid: bool
    value: Any
    errors: list[ValidationError] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def unwrap(self) -> Any:
        """Return the decoded value, raising if the decode failed.

        Returns:
            The decoded value

        Raises:
            DecodeError: With the rendered message, when the result is a failure
        """
        if self.valid:
            return self.value

        from .exceptions import DecodeError
        from .message import create_message

        raise DecodeError(create_message(self.errors), list(self.errors))

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful result.

        Args:
            value: The decoded value

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, value=value, errors=[])

    @classmethod
    def failure(cls, value: Any, errors: list[ValidationError]) -> ValidationResult:
        """Create a failed result.

        Args:
            value: The value that failed to decode
            errors: Leaf errors explaining the failure

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, value=value, errors=errors)
