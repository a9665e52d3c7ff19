"""
validtree - composable validation trees with path-addressed errors.

Usage:
    from validtree import validation, fields
    from validtree.jsonschema import min_length, pattern

    R = fields(Register)

    @validation
    def check_register(b):
        b.property(R.password, lambda p: min_length(p, 8))
        b.if_present(R.referred_by, lambda r: pattern(r, ".+@.+"))

    result = check_register(register)
    result.get(R.password)  # ["must have at least 8 characters"] or None
"""

from .builder import Modifier, ValidationBuilder, validation
from .context import ValidationConfig, current_config, validation_context
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
from .selectors import MapEntry, Prop, entry_key, entry_value, fields
from .types import Err, Ok, Path, ValidationResult, to_path_segment

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Path",
    "ValidationResult",
    "to_path_segment",
    # Builder
    "validation",
    "ValidationBuilder",
    "Modifier",
    # Nodes
    "Validation",
    "Constraint",
    "ValueValidation",
    "NonNullPropertyValidation",
    "OptionalPropertyValidation",
    "RequiredPropertyValidation",
    "IterableValidation",
    "ArrayValidation",
    "MapValidation",
    "ClassValidation",
    # Selectors
    "Prop",
    "fields",
    "MapEntry",
    "entry_key",
    "entry_value",
    # Configuration
    "validation_context",
    "current_config",
    "ValidationConfig",
]
