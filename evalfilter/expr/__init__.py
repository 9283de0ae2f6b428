"""Filter expressions and the draft/applied editor."""

from evalfilter.expr.model import (
    Expr,
    LogicFilter,
    SourceTargetValue,
    has_filter_condition,
    is_empty_value,
)
from evalfilter.expr.editor import LogicFilterEditor

__all__ = [
    "Expr",
    "LogicFilter",
    "SourceTargetValue",
    "has_filter_condition",
    "is_empty_value",
    "LogicFilterEditor",
]
