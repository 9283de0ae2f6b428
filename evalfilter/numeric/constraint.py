"""Numeric column constraints parsed from JSON schema text."""

import json
import logging
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class SchemaParseError(Exception):
    """Exception raised when a column schema cannot be parsed."""

    pass


class NumericConstraint(BaseModel):
    """
    Numeric bounds and step for a dataset column.

    All bounds are exact decimals; floats are converted through their
    shortest repr so ``0.0001`` stays ``0.0001``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type: Literal["integer", "number"] | None = Field(default=None, description="JSON schema type")
    minimum: Decimal | None = Field(default=None, description="Inclusive lower bound")
    maximum: Decimal | None = Field(default=None, description="Inclusive upper bound")
    multiple_of: Decimal | None = Field(
        default=None, alias="multipleOf", description="Step the value must be a multiple of"
    )

    @field_validator("minimum", "maximum", "multiple_of", mode="before")
    @classmethod
    def exact_decimal(cls, v: Any) -> Any:
        """Convert numbers to Decimal without binary float error."""
        if isinstance(v, bool):
            raise ValueError("boolean is not a numeric constraint")
        if isinstance(v, float):
            return Decimal(repr(v))
        if isinstance(v, (int, str)):
            try:
                return Decimal(str(v).strip())
            except InvalidOperation:
                raise ValueError(f"not a decimal number: {v!r}")
        return v

    @field_validator("minimum", "maximum", "multiple_of")
    @classmethod
    def finite(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and not v.is_finite():
            raise ValueError("constraint must be a finite number")
        return v

    @field_validator("multiple_of")
    @classmethod
    def positive_step(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v <= 0:
            raise ValueError("multipleOf must be greater than 0")
        return v

    @property
    def is_integer(self) -> bool:
        return self.type == "integer"


@lru_cache(maxsize=256)
def _parse_schema_text(text: str) -> NumericConstraint:
    try:
        data = json.loads(text, parse_float=Decimal, parse_int=Decimal)
    except ValueError as e:
        raise SchemaParseError(f"Invalid schema JSON: {e}")
    if not isinstance(data, dict):
        raise SchemaParseError(f"Schema must be a JSON object, got {type(data).__name__}")
    return _from_mapping(data)


def _from_mapping(data: Mapping[str, Any]) -> NumericConstraint:
    try:
        return NumericConstraint.model_validate(dict(data))
    except ValidationError as e:
        raise SchemaParseError(f"Invalid numeric constraint: {e}")


def parse_constraint(
    schema: "str | Mapping[str, Any] | NumericConstraint | None",
) -> NumericConstraint:
    """
    Parse a column schema into a NumericConstraint.

    Args:
        schema: JSON text, an already-decoded mapping, a constraint, or None

    Returns:
        The parsed constraint (empty when schema is None or blank)

    Raises:
        SchemaParseError: If the schema is malformed
    """
    if schema is None:
        return NumericConstraint()
    if isinstance(schema, NumericConstraint):
        return schema
    if isinstance(schema, str):
        if not schema.strip():
            return NumericConstraint()
        return _parse_schema_text(schema)
    return _from_mapping(schema)
