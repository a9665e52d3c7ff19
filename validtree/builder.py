"""
ValidationBuilder - declarative assembly of validation trees.

A builder collects constraints for one value plus child builders for the
properties and collections beneath it, then compiles itself into an
immutable tree of nodes from validtree.core.

Usage:
    @validation
    def check_register(b: ValidationBuilder[Register]):
        b.property("password", lambda p: min_length(p, 8))
        b.if_present("referred_by", lambda r: pattern(r, ".+@.+"))

    check_register(Register(password="secret"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from .context import ValidationConfig, current_config
from .core import (
    ArrayValidation,
    ClassValidation,
    Constraint,
    IterableValidation,
    MapValidation,
    NonNullPropertyValidation,
    OptionalPropertyValidation,
    RequiredPropertyValidation,
    Validation,
    ValueValidation,
)
from .selectors import MapEntry, Prop, to_prop

logger = logging.getLogger(__name__)

T = TypeVar("T")

Block = Callable[["ValidationBuilder[Any]"], Any]


class Modifier(Enum):
    """How a property's presence is treated."""

    NON_NULL = "non_null"  # Always present, validate directly
    OPTIONAL = "optional"  # None skips validation
    REQUIRED = "required"  # None is itself an error


class _Kind(Enum):
    VALUE = "value"
    ITERABLE = "iterable"
    ARRAY = "array"
    MAP = "map"


@dataclass(frozen=True)
class _PropKey:
    """
    Identity of a child builder.

    Requests with an equal key share one builder, which is how several rule
    blocks for the same field end up merged under a single path.
    """

    prop: Prop
    modifier: Modifier
    kind: _Kind = _Kind.VALUE
    render_key: Optional[Callable[[Any], str]] = None

    def build(
        self, builder: ValidationBuilder[Any], config: ValidationConfig
    ) -> Validation:
        validations = builder._internal_build(config)

        match self.kind:
            case _Kind.ITERABLE:
                validations = (IterableValidation(validations),)
            case _Kind.ARRAY:
                validations = (ArrayValidation(validations),)
            case _Kind.MAP:
                validations = (MapValidation(validations, self.render_key or str),)

        match self.modifier:
            case Modifier.OPTIONAL:
                return OptionalPropertyValidation(self.prop, validations)
            case Modifier.REQUIRED:
                return RequiredPropertyValidation(
                    self.prop, validations, config.required_message
                )
        return NonNullPropertyValidation(self.prop, validations)


class ValidationBuilder(Generic[T]):
    """
    Mutable scratch state for declaring rules on values of type T.

    Every property and collection method returns the child builder, so the
    block argument may be omitted in favour of chaining:

        min_length(b.has("password"), 8)
    """

    def __init__(self) -> None:
        self._constraints: list[Constraint[T]] = []
        self._children: dict[_PropKey, ValidationBuilder[Any]] = {}

    def add_constraint(
        self, message: str, *template_args: str, check: Callable[[T], bool]
    ) -> Constraint[T]:
        """
        Add a constraint on the value itself.

        Args:
            message: Template; {0} is the value, {1}.. are template_args
            template_args: Values substituted for {1}, {2}, ...
            check: Predicate that returns True when the value is valid
        """
        constraint: Constraint[T] = Constraint(message, tuple(template_args), check)
        self._constraints.append(constraint)
        return constraint

    def hint(self, constraint: Constraint[T], template: str) -> Constraint[T]:
        """
        Replace the message of a constraint added to this builder or to any
        builder beneath it.

        Usage:
            b.hint(pattern(b, "[0-9]"), "must have at least one number")
            b.hint(max_length(b.has("name"), 20), "name is too long")

        Raises:
            ValueError: if the constraint was not added under this builder
        """
        hinted = constraint.hint(template)
        if not self._replace(constraint, hinted):
            raise ValueError(
                f"Constraint {constraint.message!r} was not added to this builder"
            )
        return hinted

    def _replace(self, constraint: Constraint[Any], hinted: Constraint[Any]) -> bool:
        for index, pending in enumerate(self._constraints):
            if pending is constraint:
                self._constraints[index] = hinted
                return True
        return any(
            child._replace(constraint, hinted) for child in self._children.values()
        )

    def _child(self, key: _PropKey, block: Optional[Block]) -> ValidationBuilder[Any]:
        builder = self._children.get(key)
        if builder is None:
            builder = self._children[key] = ValidationBuilder()
        if block is not None:
            block(builder)
        return builder

    def property(
        self, selector: Prop | str, block: Optional[Block] = None
    ) -> ValidationBuilder[Any]:
        """Validate a property that is always present."""
        return self._child(_PropKey(to_prop(selector), Modifier.NON_NULL), block)

    def if_present(
        self, selector: Prop | str, block: Optional[Block] = None
    ) -> ValidationBuilder[Any]:
        """Validate a property only when it is not None."""
        return self._child(_PropKey(to_prop(selector), Modifier.OPTIONAL), block)

    def required(
        self, selector: Prop | str, block: Optional[Block] = None
    ) -> ValidationBuilder[Any]:
        """Validate a property and report an error when it is None."""
        return self._child(_PropKey(to_prop(selector), Modifier.REQUIRED), block)

    def has(self, selector: Prop | str) -> ValidationBuilder[Any]:
        return self.property(selector)

    def on_each(
        self,
        selector: Prop | str,
        block: Optional[Block] = None,
        *,
        modifier: Modifier = Modifier.NON_NULL,
    ) -> ValidationBuilder[Any]:
        """Validate every element of an iterable property."""
        key = _PropKey(to_prop(selector), modifier, _Kind.ITERABLE)
        return self._child(key, block)

    def on_each_array(
        self,
        selector: Prop | str,
        block: Optional[Block] = None,
        *,
        modifier: Modifier = Modifier.NON_NULL,
    ) -> ValidationBuilder[Any]:
        """Validate every element of an indexable sequence property."""
        key = _PropKey(to_prop(selector), modifier, _Kind.ARRAY)
        return self._child(key, block)

    def on_each_map(
        self,
        selector: Prop | str,
        block: Optional[Block] = None,
        *,
        modifier: Modifier = Modifier.NON_NULL,
        render_key: Callable[[Any], str] = str,
    ) -> ValidationBuilder[MapEntry]:
        """
        Validate every entry of a mapping property.

        The child builder sees MapEntry(key, value) pairs; select the parts
        with entry_key and entry_value. Errors are addressed by
        render_key(key), and errors on the value need no extra segment.
        """
        key = _PropKey(to_prop(selector), modifier, _Kind.MAP, render_key)
        return self._child(key, block)

    def _internal_build(self, config: ValidationConfig) -> tuple[Validation, ...]:
        local: tuple[Validation, ...] = ()
        if self._constraints:
            local = (ValueValidation(tuple(self._constraints), config.render_value),)
        nested = tuple(
            key.build(builder, config) for key, builder in self._children.items()
        )
        return local + nested

    def build(self) -> ClassValidation:
        """Compile the declared rules into an immutable, callable tree."""
        validations = self._internal_build(current_config())
        logger.debug(
            "Compiled validation: %d constraints, %d nested rules",
            len(self._constraints),
            len(self._children),
        )
        return ClassValidation(validations)


def validation(block: Callable[[ValidationBuilder[T]], Any]) -> ClassValidation:
    """
    Compile a definition block into a validation.

    Runs `block` against a fresh builder and returns the compiled tree.
    Works as a plain call or as a decorator:

        check = validation(lambda b: b.property("name", non_empty))

        @validation
        def check_user(b): ...
    """
    builder: ValidationBuilder[T] = ValidationBuilder()
    block(builder)
    return builder.build()
