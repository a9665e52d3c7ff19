"""
Named accessors used to select sub-values of a subject.

A Prop pairs a display name (used as the path segment) with a way of
extracting the value. Without an explicit getter, the name is looked up as a
dict key on mappings and as an attribute on everything else.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any, Callable, NamedTuple, Type

from pydantic import BaseModel


@dataclasses.dataclass(frozen=True, slots=True)
class Prop:
    """
    Immutable named accessor.

    Two Props are equal when their names and getters are equal, so
    Prop("email") requested twice addresses the same field.
    """

    name: str
    getter: Callable[[Any], Any] | None = None

    def __call__(self, subject: Any) -> Any:
        if self.getter is not None:
            return self.getter(subject)
        if isinstance(subject, Mapping):
            return subject.get(self.name)
        return getattr(subject, self.name)

    def __str__(self) -> str:
        return self.name


class MapEntry(NamedTuple):
    """A key/value pair handed to validations declared with on_each_map."""

    key: Any
    value: Any


entry_key = Prop("key")
entry_value = Prop("value")


def to_prop(selector: Prop | str) -> Prop:
    """Coerce a selector to a Prop; strings become name lookups."""
    if isinstance(selector, Prop):
        return selector
    if isinstance(selector, str):
        return Prop(selector)
    raise TypeError(
        f"Selector must be a Prop or a field name, got {type(selector).__name__}"
    )


def is_pydantic_model(model_class: Type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        return (
            isinstance(model_class, type)
            and issubclass(model_class, BaseModel)
            and hasattr(model_class, "model_fields")
        )
    except TypeError:
        return False


def fields(model_class: Type) -> SimpleNamespace:
    """
    Build one Prop per declared field of a pydantic model or dataclass.

    Usage:
        R = fields(Register)
        b.property(R.password, lambda p: min_length(p, 8))
    """
    if is_pydantic_model(model_class):
        names = list(model_class.model_fields)
    elif dataclasses.is_dataclass(model_class) and isinstance(model_class, type):
        names = [f.name for f in dataclasses.fields(model_class)]
    else:
        name = getattr(model_class, "__name__", repr(model_class))
        raise TypeError(f"Cannot derive fields from {name}: not a model or dataclass")
    return SimpleNamespace(**{name: Prop(name) for name in names})
