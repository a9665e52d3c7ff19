from typing import Any

from validtree import Err, ValidationBuilder
from validtree.jsonschema import pattern


def count_errors(result: Any, *path: Any) -> int:
    return len(result.get(*path) or [])


def count_fields_with_errors(result: Any) -> int:
    assert isinstance(result, Err)
    return len(result.errors)


def contains_a_number(b: ValidationBuilder[str]):
    return b.hint(pattern(b, "[0-9]"), "must have at least one number")
