"""
Type definitions for validtree.

Provides the Ok/Err result pair and the Path alias used to address errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .selectors import Prop

T = TypeVar("T")
R = TypeVar("R")

# Type aliases
CheckFn = Callable[[Any], bool]
Path = tuple[str, ...]
ErrorMap = dict[Path, list[str]]


def to_path_segment(segment: Any) -> str:
    """Render a path segment: selectors by name, everything else as text."""
    if isinstance(segment, Prop):
        return segment.name
    return str(segment)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing the validated subject."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def get(self, *path: Any) -> list[str] | None:
        return None

    def get_all(self) -> list[str]:
        return []

    def map(self, fn: Callable[[T], R]) -> Ok[R]:
        return Ok(fn(self.value))


@dataclass(frozen=True, slots=True)
class Err:
    """
    Failure result containing error messages keyed by path.

    The mapping is never empty and its insertion order is the order in
    which the validation tree was traversed.
    """

    errors: ErrorMap

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Err requires at least one path with messages")

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def get(self, *path: Any) -> list[str] | None:
        """
        Look up the messages recorded at an exact path.

        Segments may be selectors (rendered by name), indices or keys:
            result.get(registrations, 1, email)
        """
        return self.errors.get(tuple(to_path_segment(p) for p in path))

    def get_all(self) -> list[str]:
        return [msg for messages in self.errors.values() for msg in messages]

    def map(self, fn: Callable[[Any], Any]) -> Err:
        return Err(self.errors)


ValidationResult = Ok[T] | Err
