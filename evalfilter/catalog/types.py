"""Data types, operators and widget kinds for the logic filter field catalog."""

from dataclasses import dataclass
from enum import Enum, IntEnum


class OperatorId(str, Enum):
    """Stable operator identifiers used by filter expressions."""

    EQUALS = "equals"
    NOT_EQUALS = "not-equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not-contains"
    GREATER_THAN = "greater-than"
    GREATER_THAN_EQUALS = "greater-than-equals"
    LESS_THAN = "less-than"
    LESS_THAN_EQUALS = "less-than-equals"


class WidgetKind(str, Enum):
    """Input widget used on the right side of an expression."""

    INPUT = "input"
    NUMBER_INPUT = "number_input"
    DATE_PICKER = "date_picker"
    SELECT = "select"
    USER_SELECT = "user_select"
    CUSTOM = "custom"


class FieldType(IntEnum):
    """Backend field taxonomy carried on compiled filter conditions."""

    UNKNOWN = 0
    EVALUATOR_SCORE = 1
    CREATOR_BY = 2
    EXPT_STATUS = 3
    TURN_RUN_STATE = 4
    TARGET_ID = 5
    EVAL_SET_ID = 6
    EVALUATOR_ID = 7
    TARGET_TYPE = 8
    SOURCE_TARGET = 9
    EVALUATOR_VERSION_ID = 20
    TARGET_VERSION_ID = 21
    EVAL_SET_VERSION_ID = 22
    EXPT_TYPE = 30
    SOURCE_TYPE = 31
    SOURCE_ID = 32

    @classmethod
    def coerce(cls, value: object) -> object:
        """Accept member names (case-insensitive) in addition to integer values."""
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.isdigit():
            return int(text)
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown field type: {value!r}")


@dataclass(frozen=True)
class Operator:
    """
    A comparison operator offered for a data type.

    Attributes:
        id: Stable operator identifier
        label_key: i18n message key for the operator label
    """

    id: OperatorId
    label_key: str

    @property
    def value(self) -> str:
        return self.id.value


EQUALS = Operator(OperatorId.EQUALS, "equal_to")
NOT_EQUALS = Operator(OperatorId.NOT_EQUALS, "not_equal_to")
CONTAINS = Operator(OperatorId.CONTAINS, "contain")
NOT_CONTAINS = Operator(OperatorId.NOT_CONTAINS, "not_contain")
GREATER_THAN = Operator(OperatorId.GREATER_THAN, "greater_than")
GREATER_THAN_EQUALS = Operator(OperatorId.GREATER_THAN_EQUALS, "greater_than_or_equal_to")
LESS_THAN = Operator(OperatorId.LESS_THAN, "less_than")
LESS_THAN_EQUALS = Operator(OperatorId.LESS_THAN_EQUALS, "less_than_or_equal_to")
LATER_THAN = Operator(OperatorId.GREATER_THAN, "later_than")
EARLIER_THAN = Operator(OperatorId.LESS_THAN, "earlier_than")

BASE_OPERATORS: tuple[Operator, ...] = (EQUALS, NOT_EQUALS, CONTAINS, NOT_CONTAINS)

NUMBER_OPERATORS: tuple[Operator, ...] = (
    EQUALS,
    NOT_EQUALS,
    GREATER_THAN,
    GREATER_THAN_EQUALS,
    LESS_THAN,
    LESS_THAN_EQUALS,
)

DATE_OPERATORS: tuple[Operator, ...] = (EQUALS, NOT_EQUALS, LATER_THAN, EARLIER_THAN)

SELECT_OPERATORS: tuple[Operator, ...] = (CONTAINS, NOT_CONTAINS)

# Composite values are matched structurally by the backend; the editor only
# needs one operator to select.
COMPOSITE_OPERATORS: tuple[Operator, ...] = (EQUALS,)


class DataType(str, Enum):
    """
    Logical data type of a filterable field.

    Each member owns its ordered operator list and its input widget.
    """

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    OPTIONS = "options"
    USER_REF = "user_ref"
    COMPOSITE = "composite"

    @property
    def operators(self) -> tuple[Operator, ...]:
        """Ordered operators supported by this data type."""
        return _OPERATORS[self]

    @property
    def widget(self) -> WidgetKind:
        """Input widget for the right side of an expression."""
        return _WIDGETS[self]

    @classmethod
    def resolve(cls, value: "str | DataType | None") -> "DataType | None":
        """Look up a data type by value, returning None when unknown."""
        if isinstance(value, DataType):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_OPERATORS: dict[DataType, tuple[Operator, ...]] = {
    DataType.STRING: BASE_OPERATORS,
    DataType.NUMBER: NUMBER_OPERATORS,
    DataType.DATE: DATE_OPERATORS,
    DataType.OPTIONS: SELECT_OPERATORS,
    DataType.USER_REF: BASE_OPERATORS,
    DataType.COMPOSITE: COMPOSITE_OPERATORS,
}

_WIDGETS: dict[DataType, WidgetKind] = {
    DataType.STRING: WidgetKind.INPUT,
    DataType.NUMBER: WidgetKind.NUMBER_INPUT,
    DataType.DATE: WidgetKind.DATE_PICKER,
    DataType.OPTIONS: WidgetKind.SELECT,
    DataType.USER_REF: WidgetKind.USER_SELECT,
    DataType.COMPOSITE: WidgetKind.CUSTOM,
}


def operators_for(data_type: "str | DataType | None") -> tuple[Operator, ...]:
    """Get the ordered operators for a data type (empty when unknown)."""
    resolved = DataType.resolve(data_type)
    if resolved is None:
        return ()
    return resolved.operators


def widget_for(data_type: "str | DataType | None") -> WidgetKind:
    """Get the input widget for a data type (plain input when unknown)."""
    resolved = DataType.resolve(data_type)
    if resolved is None:
        return WidgetKind.INPUT
    return resolved.widget
