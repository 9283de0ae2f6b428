"""Field catalog: data types, operators and filterable fields."""

from evalfilter.catalog.types import (
    DataType,
    FieldType,
    Operator,
    OperatorId,
    WidgetKind,
    operators_for,
    widget_for,
)
from evalfilter.catalog.catalog import FieldCatalog, LogicField

__all__ = [
    "DataType",
    "FieldType",
    "Operator",
    "OperatorId",
    "WidgetKind",
    "operators_for",
    "widget_for",
    "FieldCatalog",
    "LogicField",
]
