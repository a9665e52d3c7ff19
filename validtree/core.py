"""
Core validation nodes for validtree.

Provides Constraint and the closed set of node dataclasses a compiled
validation tree is made of. Every node is immutable and callable:

    node(subject) -> Ok(subject) | Err({path: [messages]})
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, TypeVar, Union

from .context import DEFAULT_REQUIRED_MESSAGE
from .selectors import MapEntry, Prop, entry_value
from .types import CheckFn, Err, ErrorMap, Ok, Path

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Constraint(Generic[T]):
    """
    A single predicate with its message template.

    The template may reference the validated value as {0} and the template
    args as {1}, {2}, ... in order.
    """

    message: str
    template_args: tuple[str, ...]
    check: CheckFn

    def hint(self, template: str) -> Constraint[T]:
        """Return a copy of this constraint with a different message."""
        return replace(self, message=template)

    def render(self, value: Any, render_value: Callable[[Any], str] = str) -> str:
        text = self.message
        for index, arg in enumerate(self.template_args, start=1):
            text = text.replace(f"{{{index}}}", arg)
        return text.replace("{0}", render_value(value))


class _Node:
    __slots__ = ()

    def __call__(self, value: Any) -> Ok[Any] | Err:
        """
        Validate a value.

        Returns:
            Ok(value) if every rule in the tree passes
            Err({path: [messages]}) otherwise
        """
        errors = _collect(self, value)
        return Err(errors) if errors else Ok(value)


@dataclass(frozen=True, slots=True)
class ValueValidation(_Node):
    """Runs constraints against the value itself."""

    constraints: tuple[Constraint[Any], ...]
    render_value: Callable[[Any], str] = str


@dataclass(frozen=True, slots=True)
class NonNullPropertyValidation(_Node):
    prop: Prop
    validations: tuple[Validation, ...]


@dataclass(frozen=True, slots=True)
class OptionalPropertyValidation(_Node):
    """Validates a property only when it is not None."""

    prop: Prop
    validations: tuple[Validation, ...]


@dataclass(frozen=True, slots=True)
class RequiredPropertyValidation(_Node):
    """Validates a property and reports `message` when it is None."""

    prop: Prop
    validations: tuple[Validation, ...]
    message: str = DEFAULT_REQUIRED_MESSAGE


@dataclass(frozen=True, slots=True)
class IterableValidation(_Node):
    validations: tuple[Validation, ...]


@dataclass(frozen=True, slots=True)
class ArrayValidation(_Node):
    """Validates each element of an indexable sequence."""

    validations: tuple[Validation, ...]


@dataclass(frozen=True, slots=True)
class MapValidation(_Node):
    """Validates each entry of a mapping, exposed as a MapEntry."""

    validations: tuple[Validation, ...]
    render_key: Callable[[Any], str] = str


@dataclass(frozen=True, slots=True)
class ClassValidation(_Node):
    """Runs several validations against the same value and merges them."""

    validations: tuple[Validation, ...]


Validation = Union[
    ValueValidation,
    NonNullPropertyValidation,
    OptionalPropertyValidation,
    RequiredPropertyValidation,
    IterableValidation,
    ArrayValidation,
    MapValidation,
    ClassValidation,
]


def _merge(into: ErrorMap, errors: ErrorMap, prefix: Path = ()) -> ErrorMap:
    """Append messages to `into`, keeping paths that already exist in place."""
    for path, messages in errors.items():
        into.setdefault((*prefix, *path), []).extend(messages)
    return into


def _collect_all(validations: tuple[Validation, ...], value: Any) -> ErrorMap:
    errors: ErrorMap = {}
    for validation in validations:
        _merge(errors, _collect(validation, value))
    return errors


def _collect(node: Validation, value: Any) -> ErrorMap:
    """Evaluate a node and return its errors; empty means the value is valid."""
    match node:
        case ValueValidation(constraints=constraints, render_value=render_value):
            messages = [
                c.render(value, render_value) for c in constraints if not c.check(value)
            ]
            return {(): messages} if messages else {}

        case NonNullPropertyValidation(prop=prop, validations=validations):
            return _merge({}, _collect_all(validations, prop(value)), (prop.name,))

        case OptionalPropertyValidation(prop=prop, validations=validations):
            selected = prop(value)
            if selected is None:
                return {}
            return _merge({}, _collect_all(validations, selected), (prop.name,))

        case RequiredPropertyValidation(
            prop=prop, validations=validations, message=message
        ):
            selected = prop(value)
            if selected is None:
                return {(prop.name,): [message]}
            return _merge({}, _collect_all(validations, selected), (prop.name,))

        case IterableValidation(validations=validations):
            errors: ErrorMap = {}
            for index, element in enumerate(value):
                _merge(errors, _collect_all(validations, element), (str(index),))
            return errors

        case ArrayValidation(validations=validations):
            errors = {}
            for index in range(len(value)):
                _merge(errors, _collect_all(validations, value[index]), (str(index),))
            return errors

        case MapValidation(validations=validations, render_key=render_key):
            errors = {}
            for key, item in value.items():
                entry_errors = _collect_all(validations, MapEntry(key, item))
                for path, messages in entry_errors.items():
                    # Errors on the entry value are addressed by the key alone
                    if path[:1] == (entry_value.name,):
                        path = path[1:]
                    errors.setdefault((render_key(key), *path), []).extend(messages)
            return errors

        case ClassValidation(validations=validations):
            return _collect_all(validations, value)

    raise TypeError(f"Unknown validation node: {type(node).__name__}")
