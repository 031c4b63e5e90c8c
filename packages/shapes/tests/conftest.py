"""Pytest configuration for dataknobs_shapes tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_shapes import array, number, object_type, string  # noqa: E402


def tidy_text(text: str) -> str:
    """Strip the ``#`` line markers and common indentation of an expected message."""
    lines = [line.strip() for line in text.strip().splitlines()]
    return "\n".join(line[1:] if line.startswith("#") else line for line in lines)


@pytest.fixture
def tidy():
    return tidy_text


@pytest.fixture
def nested_violet():
    """Four levels of named violet objects, each also accepting a number."""
    return array(
        object_type({
            "a": object_type({
                "b": object_type({
                    "c": object_type(
                        {"d": string().allow(number())},
                        {"e": number()},
                        "InterfaceDE",
                    ).violet().allow(number())
                }, name="InterfaceC").violet().allow(number())
            }, name="InterfaceB").violet().allow(number())
        }, name="InterfaceA").violet().allow(number())
    )
