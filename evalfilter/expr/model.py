"""Expression model edited by the logic filter editor."""

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field


def is_empty_value(value: Any) -> bool:
    """
    Check whether a value counts as empty.

    None, the empty string and empty lists/tuples are empty. Zero and False
    are real values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


class SourceTargetValue(BaseModel):
    """Right-hand value of a composite (source/target) field."""

    model_config = ConfigDict(populate_by_name=True)

    type: int | None = Field(default=None, description="Evaluation target type")
    eval_target_id: str | int | list[str | int] | None = Field(
        default=None, alias="evalTargetId", description="One or more evaluation target ids"
    )


class Expr(BaseModel):
    """
    A single field/operator/value triple.

    Any part may be missing while the user is still editing.
    """

    left: str | None = Field(default=None, description="Field name")
    operator: str | None = Field(default=None, description="Operator id")
    right: Any = Field(default=None, description="Scalar, list, or composite value")

    @property
    def is_complete(self) -> bool:
        """True when left, operator and right are all non-empty."""
        return not (
            is_empty_value(self.left)
            or is_empty_value(self.operator)
            or is_empty_value(self.right)
        )


class LogicFilter(BaseModel):
    """A group of expressions combined with one logic operator."""

    logic_operator: Literal["and", "or"] = Field(default="and", description="Combinator")
    exprs: list[Expr] = Field(default_factory=list, description="Expressions in the group")
    child_groups: list["LogicFilter"] = Field(
        default_factory=list, description="Nested groups (not produced by the shipped editor)"
    )

    def completed(self) -> "LogicFilter":
        """Copy of this group keeping only complete expressions."""
        return LogicFilter(
            logic_operator=self.logic_operator,
            exprs=[e.model_copy(deep=True) for e in self.exprs if e.is_complete],
            child_groups=[g.completed() for g in self.child_groups],
        )


def has_filter_condition(
    simple_filter: Mapping[str, Any] | None,
    logic_filter: LogicFilter | None,
) -> bool:
    """
    Check whether any filter is currently in effect.

    Args:
        simple_filter: Key/value filter object
        logic_filter: Applied logic filter

    Returns:
        True if a simple value or an expression's right side is non-empty
    """
    has_simple = any(not is_empty_value(v) for v in (simple_filter or {}).values())
    has_logic = logic_filter is not None and any(
        not is_empty_value(e.right) for e in logic_filter.exprs
    )
    return has_simple or has_logic
