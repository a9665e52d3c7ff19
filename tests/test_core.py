"""Tests for the validation node types in validtree.core."""

import dataclasses

import pytest

from tests.structstest import Address, Register
from validtree import (
    ArrayValidation,
    ClassValidation,
    Constraint,
    Err,
    IterableValidation,
    MapValidation,
    NonNullPropertyValidation,
    Ok,
    OptionalPropertyValidation,
    Prop,
    RequiredPropertyValidation,
    ValueValidation,
    entry_value,
)
from validtree.context import DEFAULT_REQUIRED_MESSAGE


def never_called(_):
    pytest.fail("nested validation should not run")


not_empty = Constraint("must not be empty", (), lambda s: len(s) > 0)
short = Constraint("must be shorter than {1}", ("3",), lambda s: len(s) < 3)
untouched = ValueValidation((Constraint("unreachable", (), never_called),))


class TestConstraint:
    def test_render_template_args(self):
        c = Constraint("between {1} and {2}", ("1", "5"), lambda _: False)
        assert c.render(9) == "between 1 and 5"

    def test_render_value(self):
        c = Constraint("'{0}' is not {1}", ("allowed",), lambda _: False)
        assert c.render("x") == "'x' is not allowed"
        assert c.render(3, lambda v: f"<{v}>") == "'<3>' is not allowed"

    def test_value_text_is_not_reinterpreted(self):
        c = Constraint("got {0}, want {1}", ("ok",), lambda _: False)
        assert c.render("{1}") == "got {1}, want ok"

    def test_hint_returns_new_constraint(self):
        hinted = short.hint("too long")
        assert hinted.message == "too long"
        assert hinted.check is short.check
        assert hinted.template_args == short.template_args
        assert short.message == "must be shorter than {1}"


class TestValueValidation:
    def test_passes(self):
        assert ValueValidation((not_empty, short))("ab") == Ok("ab")

    def test_no_short_circuit(self):
        v = ValueValidation((short, Constraint("no digits", (), str.isalpha)))
        result = v("abc1")
        assert result == Err({(): ["must be shorter than 3", "no digits"]})

    def test_declaration_order(self):
        result = ValueValidation((short, not_empty, short))("abcd")
        assert result.get() == ["must be shorter than 3", "must be shorter than 3"]


class TestPropertyValidation:
    address = Prop("address")

    def test_non_null_prefixes_path(self):
        v = NonNullPropertyValidation(self.address, (ValueValidation((not_empty,)),))
        result = v(Address())
        assert result == Err({("address",): ["must not be empty"]})

    def test_success_payload_is_subject(self):
        v = NonNullPropertyValidation(self.address, (ValueValidation((not_empty,)),))
        subject = Address(address="Main St")
        assert v(subject) == Ok(subject)

    def test_optional_skips_none(self):
        v = OptionalPropertyValidation(Prop("referred_by"), (untouched,))
        subject = Register()
        assert v(subject) == Ok(subject)

    def test_required_reports_none(self):
        v = RequiredPropertyValidation(Prop("referred_by"), (untouched,), "missing")
        assert v(Register()) == Err({("referred_by",): ["missing"]})

    def test_required_default_message(self):
        v = RequiredPropertyValidation(Prop("referred_by"), (untouched,))
        assert v(Register()).get("referred_by") == [DEFAULT_REQUIRED_MESSAGE]

    def test_required_validates_present(self):
        v = RequiredPropertyValidation(
            Prop("referred_by"), (ValueValidation((short,)),)
        )
        result = v(Register(referred_by="someone"))
        assert result.get("referred_by") == ["must be shorter than 3"]

    def test_nested_paths(self):
        address = NonNullPropertyValidation(
            self.address, (ValueValidation((not_empty,)),)
        )
        v = OptionalPropertyValidation(Prop("home"), (address,))
        result = v(Register(home=Address()))
        assert result.get("home", "address") == ["must not be empty"]

    def test_incompatible_selector_raises(self):
        v = NonNullPropertyValidation(Prop("missing"), ())
        with pytest.raises(AttributeError):
            v(Address())


class TestCollectionValidation:
    def test_iterable_indexes(self):
        v = IterableValidation((ValueValidation((not_empty,)),))
        result = v(["a", "", "b", ""])
        assert list(result.errors) == [("1",), ("3",)]

    def test_iterable_accepts_generators(self):
        v = IterableValidation((ValueValidation((not_empty,)),))
        result = v(s for s in ["", "x"])
        assert result.get(0) == ["must not be empty"]

    def test_array_indexes(self):
        v = ArrayValidation((ValueValidation((short,)),))
        assert v(("ab", "abcd")).get("1") == ["must be shorter than 3"]

    def test_map_value_errors_use_key(self):
        v = MapValidation(
            (NonNullPropertyValidation(entry_value, (ValueValidation((short,)),)),)
        )
        result = v({"a": "ok", "b": "too long"})
        assert result == Err({("b",): ["must be shorter than 3"]})

    def test_map_key_renderer(self):
        v = MapValidation(
            (NonNullPropertyValidation(entry_value, (ValueValidation((short,)),)),),
            render_key=lambda k: f"#{k}",
        )
        assert v({7: "too long"}).get("#7") == ["must be shorter than 3"]

    def test_empty_collections(self):
        assert IterableValidation((untouched,))([]) == Ok([])
        assert MapValidation((untouched,))({}) == Ok({})


class TestClassValidation:
    def test_merges_same_path(self):
        address = Prop("address")
        v = ClassValidation(
            (
                NonNullPropertyValidation(address, (ValueValidation((not_empty,)),)),
                ValueValidation((Constraint("bad country", (), lambda a: False),)),
                NonNullPropertyValidation(address, (ValueValidation((short,)),)),
            )
        )
        result = v(Address(address=""))
        assert result.errors == {
            ("address",): ["must not be empty"],
            (): ["bad country"],
        }

        result = v(Address(address="long"))
        assert result.get("address") == ["must be shorter than 3"]

    def test_appends_in_child_order(self):
        first = ValueValidation((Constraint("first", (), lambda _: False),))
        second = ValueValidation((Constraint("second", (), lambda _: False),))
        assert ClassValidation((first, second))(1).get() == ["first", "second"]

    def test_empty_is_ok(self):
        assert ClassValidation(())("anything") == Ok("anything")

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            ClassValidation((object(),))(1)


class TestImmutability:
    def test_nodes_are_frozen(self):
        node = ClassValidation(())
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.validations = (untouched,)

    def test_evaluation_does_not_mutate_subject(self):
        subject = {"tags": ["a", ""]}
        v = NonNullPropertyValidation(
            Prop("tags"), (IterableValidation((ValueValidation((not_empty,)),)),)
        )
        v(subject)
        assert subject == {"tags": ["a", ""]}
