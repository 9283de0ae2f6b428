"""Pydantic schemas for the compiled (backend) filter request."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from evalfilter.catalog.types import FieldType


class FilterOperatorType(IntEnum):
    """Operator ids understood by the list-fetch backend."""

    UNKNOWN = 0
    EQUAL = 1
    NOT_EQUAL = 2
    GREATER = 3
    GREATER_OR_EQUAL = 4
    LESS = 5
    LESS_OR_EQUAL = 6
    IN = 7
    NOT_IN = 8


class FilterLogicOp(IntEnum):
    """How filter conditions are combined."""

    UNKNOWN = 0
    AND = 1
    OR = 2


class FilterField(BaseModel):
    """Backend field reference."""

    field_type: FieldType = Field(..., description="Backend field type tag")
    field_key: str | None = Field(default=None, description="Optional sub-key")


class SourceTarget(BaseModel):
    """Structured evaluation-target reference for composite fields."""

    source_target_ids: list[str] = Field(default_factory=list)
    eval_target_type: int | None = Field(default=None)


class FilterCondition(BaseModel):
    """A single compiled condition."""

    field: FilterField
    operator: FilterOperatorType | None = Field(
        default=None, description="None when the operator id was not recognised"
    )
    value: str = Field(default="", description="Stringified value (CSV for lists)")
    source_target: SourceTarget | None = None


class CompiledFilter(BaseModel):
    """Normalized filter request consumed by the list-fetch collaborator."""

    logic_op: FilterLogicOp = Field(default=FilterLogicOp.AND)
    filter_conditions: list[FilterCondition] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-ready request shape, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class SimpleFilterField(BaseModel):
    """Whitelist entry mapping a simple filter key to a backend field type."""

    key: str = Field(..., description="Key in the simple filter object")
    type: FieldType = Field(..., description="Backend field type tag")

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        """Allow field types to be given by name."""
        return FieldType.coerce(v)
