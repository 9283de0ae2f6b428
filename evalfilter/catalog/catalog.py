"""Field catalog for the logic filter editor."""

import logging
from typing import Any, Iterable, Iterator

from pydantic import BaseModel, Field, field_validator

from evalfilter.catalog.types import (
    DataType,
    FieldType,
    Operator,
    WidgetKind,
    operators_for,
    widget_for,
)

logger = logging.getLogger(__name__)


class LogicField(BaseModel):
    """A field that can appear on the left side of a filter expression."""

    name: str = Field(..., min_length=1, description="Unique field name")
    title: str | None = Field(default=None, description="Display title")
    type: str = Field(..., description="Logical data type (see DataType)")
    field_type: FieldType = Field(
        default=FieldType.UNKNOWN, description="Backend field type tag for compiled conditions"
    )
    field_key: str | None = Field(
        default=None, description="Backend field key, e.g. an evaluator version id"
    )
    setter_props: dict[str, Any] = Field(
        default_factory=dict, description="Opaque props for the value widget (e.g. option list)"
    )
    disabled_operations: list[str] = Field(
        default_factory=list, description="Operator ids hidden for this field"
    )

    @field_validator("field_type", mode="before")
    @classmethod
    def parse_field_type(cls, v: Any) -> Any:
        """Allow field types to be given by name, e.g. ``expt_status``."""
        return FieldType.coerce(v)

    @property
    def data_type(self) -> DataType | None:
        """Resolved data type, or None when the type is unknown."""
        return DataType.resolve(self.type)

    @property
    def operators(self) -> list[Operator]:
        """Effective operators: the type's list minus disabled ones, order preserved."""
        disabled = set(self.disabled_operations)
        return [op for op in operators_for(self.type) if op.value not in disabled]

    @property
    def operator_ids(self) -> list[str]:
        return [op.value for op in self.operators]

    @property
    def widget(self) -> WidgetKind:
        return widget_for(self.type)


class FieldCatalog:
    """
    Read-only lookup of logic fields by name.

    The catalog is supplied by the embedding application and never mutated
    by the editor or the compiler.
    """

    def __init__(self, fields: Iterable[LogicField | dict[str, Any]]):
        """
        Initialize the catalog.

        Args:
            fields: Field entries (models or plain dicts)

        Raises:
            ValueError: If two fields share a name
        """
        self._fields: dict[str, LogicField] = {}
        for entry in fields:
            field = entry if isinstance(entry, LogicField) else LogicField(**entry)
            if field.name in self._fields:
                raise ValueError(f"Duplicate field name in catalog: {field.name}")
            if field.data_type is None:
                logger.debug(f"Field '{field.name}' has unknown data type '{field.type}'")
            self._fields[field.name] = field

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[LogicField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str | None) -> LogicField | None:
        """Get a field by name."""
        if name is None:
            return None
        return self._fields.get(name)

    def __getitem__(self, name: str) -> LogicField:
        return self._fields[name]

    def operators(self, name: str | None) -> list[Operator]:
        """Effective operators for a field name (empty when unknown)."""
        field = self.get(name)
        return field.operators if field else []

    def available_fields(self, disabled_fields: Iterable[str] = ()) -> list[LogicField]:
        """Fields offered in the editor's field selector, minus disabled names."""
        hidden = set(disabled_fields)
        return [f for f in self._fields.values() if f.name not in hidden]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={list(self._fields)})"
