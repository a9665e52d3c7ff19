"""
Built-in constraints for validtree, named after JSON Schema keywords.

Each helper adds one constraint to the given builder and returns it, so the
result can be passed to ValidationBuilder.hint:

    b.property("age", lambda a: minimum(a, 0))
    b.hint(max_length(b.has("name"), 20), "name is too long")
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Mapping, Sized
from typing import Any

from .builder import ValidationBuilder
from .core import Constraint


def type_(b: ValidationBuilder[Any], t: type) -> Constraint[Any]:
    """
    Validate that value is an instance of type.

    Usage:
        type_(b, str)
    """

    def check(x: Any) -> bool:
        return isinstance(x, t)

    return b.add_constraint("must be of the correct type", t.__name__, check=check)


def enum(b: ValidationBuilder[Any], *allowed: Any) -> Constraint[Any]:
    """
    Validate value is one of the allowed values.

    Usage:
        enum(b, "active", "inactive", "pending")
    """
    choices = ", ".join(f"'{a}'" for a in allowed)
    return b.add_constraint(
        "must be one of: {1}", choices, check=lambda x: x in allowed
    )


def const(b: ValidationBuilder[Any], expected: Any) -> Constraint[Any]:
    """Validate exact equality."""
    return b.add_constraint(
        "must be {1}", f"'{expected}'", check=lambda x: x == expected
    )


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def multiple_of(b: ValidationBuilder[Any], factor: int | float) -> Constraint[Any]:
    if factor == 0:
        raise ValueError("multiple_of requires a non-zero factor")
    return b.add_constraint(
        "must be a multiple of '{1}'",
        str(factor),
        check=lambda x: _is_number(x) and x % factor == 0,
    )


def minimum(b: ValidationBuilder[Any], value: Any) -> Constraint[Any]:
    """Validate greater than or equal."""
    return b.add_constraint(
        "must be at least '{1}'",
        str(value),
        check=lambda x: _is_number(x) and x >= value,
    )


def maximum(b: ValidationBuilder[Any], value: Any) -> Constraint[Any]:
    """Validate less than or equal."""
    return b.add_constraint(
        "must be at most '{1}'",
        str(value),
        check=lambda x: _is_number(x) and x <= value,
    )


def exclusive_minimum(b: ValidationBuilder[Any], value: Any) -> Constraint[Any]:
    """Validate greater than."""
    return b.add_constraint(
        "must be greater than '{1}'",
        str(value),
        check=lambda x: _is_number(x) and x > value,
    )


def exclusive_maximum(b: ValidationBuilder[Any], value: Any) -> Constraint[Any]:
    """Validate less than."""
    return b.add_constraint(
        "must be less than '{1}'",
        str(value),
        check=lambda x: _is_number(x) and x < value,
    )


def _length_at_least(x: Any, n: int) -> bool:
    return isinstance(x, Sized) and len(x) >= n


def _length_at_most(x: Any, n: int) -> bool:
    return isinstance(x, Sized) and len(x) <= n


def min_length(b: ValidationBuilder[Any], n: int) -> Constraint[Any]:
    """Validate minimum string length."""
    return b.add_constraint(
        "must have at least {1} characters",
        str(n),
        check=lambda x: _length_at_least(x, n),
    )


def max_length(b: ValidationBuilder[Any], n: int) -> Constraint[Any]:
    """Validate maximum string length."""
    return b.add_constraint(
        "must have at most {1} characters",
        str(n),
        check=lambda x: _length_at_most(x, n),
    )


def pattern(b: ValidationBuilder[Any], regex: str | re.Pattern[str]) -> Constraint[Any]:
    """
    Validate string matches a regex anywhere in the value.

    Usage:
        pattern(b, r".+@.+")
        pattern(b, r"^[a-z]+$")
    """
    compiled = re.compile(regex)

    def check(x: Any) -> bool:
        return isinstance(x, str) and compiled.search(x) is not None

    return b.add_constraint(
        "must match the expected pattern", compiled.pattern, check=check
    )


_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def uuid(b: ValidationBuilder[Any]) -> Constraint[Any]:
    """Validate the value is a UUID string in canonical 8-4-4-4-12 form."""

    def check(x: Any) -> bool:
        return isinstance(x, str) and _UUID.fullmatch(x) is not None

    return b.add_constraint("must be a valid UUID string", check=check)


def min_items(b: ValidationBuilder[Any], n: int) -> Constraint[Any]:
    return b.add_constraint(
        "must have at least {1} items", str(n), check=lambda x: _length_at_least(x, n)
    )


def max_items(b: ValidationBuilder[Any], n: int) -> Constraint[Any]:
    return b.add_constraint(
        "must have at most {1} items", str(n), check=lambda x: _length_at_most(x, n)
    )


def min_properties(b: ValidationBuilder[Any], n: int) -> Constraint[Any]:
    return b.add_constraint(
        "must have at least {1} properties",
        str(n),
        check=lambda x: isinstance(x, Mapping) and len(x) >= n,
    )


def max_properties(b: ValidationBuilder[Any], n: int) -> Constraint[Any]:
    return b.add_constraint(
        "must have at most {1} properties",
        str(n),
        check=lambda x: isinstance(x, Mapping) and len(x) <= n,
    )


def unique_items(b: ValidationBuilder[Any], unique: bool = True) -> Constraint[Any]:
    """Validate that no element repeats (compared by equality)."""

    def check(x: Any) -> bool:
        if not unique:
            return True
        seen: list[Any] = []
        for item in x:
            if item in seen:
                return False
            seen.append(item)
        return True

    return b.add_constraint("all items must be unique", check=check)
