"""Numeric column constraints: validation and normalization."""

from evalfilter.numeric.constraint import NumericConstraint, SchemaParseError, parse_constraint
from evalfilter.numeric.validator import (
    ValidationReason,
    ValidationResult,
    decimal_places,
    format_decimal,
    normalize,
    validate,
)

__all__ = [
    "NumericConstraint",
    "SchemaParseError",
    "parse_constraint",
    "ValidationReason",
    "ValidationResult",
    "decimal_places",
    "format_decimal",
    "normalize",
    "validate",
]
