"""Compile applied logic filters into backend filter requests."""

import json
import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from evalfilter.catalog import FieldCatalog, FieldType, OperatorId
from evalfilter.compiler.schemas import (
    CompiledFilter,
    FilterCondition,
    FilterField,
    FilterLogicOp,
    FilterOperatorType,
    SimpleFilterField,
    SourceTarget,
)
from evalfilter.config.defaults import VALUE_SEPARATOR
from evalfilter.expr.model import Expr, LogicFilter, SourceTargetValue, is_empty_value

logger = logging.getLogger(__name__)


OPERATOR_TABLE: dict[str, FilterOperatorType] = {
    OperatorId.EQUALS.value: FilterOperatorType.EQUAL,
    OperatorId.NOT_EQUALS.value: FilterOperatorType.NOT_EQUAL,
    OperatorId.CONTAINS.value: FilterOperatorType.IN,
    OperatorId.NOT_CONTAINS.value: FilterOperatorType.NOT_IN,
    OperatorId.GREATER_THAN.value: FilterOperatorType.GREATER,
    OperatorId.GREATER_THAN_EQUALS.value: FilterOperatorType.GREATER_OR_EQUAL,
    OperatorId.LESS_THAN.value: FilterOperatorType.LESS,
    OperatorId.LESS_THAN_EQUALS.value: FilterOperatorType.LESS_OR_EQUAL,
}

_LOGIC_OPS: dict[str, FilterLogicOp] = {
    "and": FilterLogicOp.AND,
    "or": FilterLogicOp.OR,
}


def compile_operator(operator: str | None) -> FilterOperatorType | None:
    """Map an editor operator id to the backend operator (None when unknown)."""
    if operator is None:
        return None
    compiled = OPERATOR_TABLE.get(str(operator))
    if compiled is None:
        logger.warning(f"Unknown operator id in filter expression: {operator!r}")
    return compiled


def _decode_legacy_key(left: str) -> FilterField | None:
    # Older saved filters serialize the field as {"type": <int>, "key": <str>}.
    try:
        data = json.loads(left)
    except ValueError:
        return None
    if not isinstance(data, dict) or "type" not in data:
        return None
    try:
        field_type = FieldType(int(data["type"]))
    except (TypeError, ValueError):
        return None
    key = data.get("key")
    return FilterField(field_type=field_type, field_key=str(key) if key else None)


def decode_field(left: str | None, catalog: FieldCatalog | None = None) -> FilterField:
    """
    Resolve an expression's left side to a backend field.

    Catalog entries win; otherwise a JSON-encoded ``{"type", "key"}`` is
    accepted. Anything else resolves to ``FieldType.UNKNOWN``.
    """
    field = catalog.get(left) if catalog is not None else None
    if field is not None:
        return FilterField(field_type=field.field_type, field_key=field.field_key)

    if left:
        decoded = _decode_legacy_key(left)
        if decoded is not None:
            return decoded

    logger.warning(f"Unknown filter field: {left!r}")
    return FilterField(field_type=FieldType.UNKNOWN)


def _stringify_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def stringify_value(value: Any) -> str:
    """Render a filter value as the backend string (lists become CSV)."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return VALUE_SEPARATOR.join(_stringify_scalar(v) for v in value)
    return _stringify_scalar(value)


def _source_target(value: Any) -> SourceTarget:
    try:
        if isinstance(value, SourceTargetValue):
            target = value
        elif isinstance(value, Mapping):
            target = SourceTargetValue.model_validate(dict(value))
        else:
            target = SourceTargetValue(eval_target_id=value)
    except ValidationError as e:
        logger.warning(f"Malformed source target value {value!r}: {e.error_count()} error(s)")
        return SourceTarget()

    ids = target.eval_target_id
    if ids is None:
        ids = []
    elif not isinstance(ids, list):
        ids = [ids]
    return SourceTarget(
        source_target_ids=[str(i) for i in ids],
        eval_target_type=target.type,
    )


def compile_expr(expr: Expr, catalog: FieldCatalog | None = None) -> FilterCondition:
    """
    Compile one expression into a filter condition.

    Composite (source/target) fields carry their value in ``source_target``
    and an empty ``value`` string.
    """
    field = decode_field(expr.left, catalog)
    operator = compile_operator(expr.operator)

    if field.field_type == FieldType.SOURCE_TARGET:
        return FilterCondition(
            field=field,
            operator=operator,
            value="",
            source_target=_source_target(expr.right),
        )

    return FilterCondition(field=field, operator=operator, value=stringify_value(expr.right))


def compile_simple_filter(
    simple_filter: Mapping[str, Any] | None,
    filter_fields: Iterable[SimpleFilterField | Mapping[str, Any]],
) -> list[FilterCondition]:
    """
    Compile whitelisted key/value filters into ``In`` conditions.

    Conditions follow the order of ``filter_fields``; empty values are skipped.
    """
    if not simple_filter:
        return []

    conditions: list[FilterCondition] = []
    for entry in filter_fields:
        spec = entry if isinstance(entry, SimpleFilterField) else SimpleFilterField(**entry)
        value = simple_filter.get(spec.key)
        if is_empty_value(value):
            continue
        conditions.append(
            FilterCondition(
                field=FilterField(field_type=spec.type),
                operator=FilterOperatorType.IN,
                value=stringify_value(value),
            )
        )
    return conditions


def compile_filter(
    logic_filter: LogicFilter | None,
    simple_filter: Mapping[str, Any] | None = None,
    catalog: FieldCatalog | None = None,
    filter_fields: Iterable[SimpleFilterField | Mapping[str, Any]] = (),
) -> CompiledFilter:
    """
    Build the backend filter request.

    Args:
        logic_filter: Applied logic filter (None for no expressions)
        simple_filter: Key/value filter object
        catalog: Field catalog used to resolve expression fields
        filter_fields: Ordered ``{key, type}`` whitelist for ``simple_filter``

    Returns:
        A freshly built CompiledFilter; expression conditions come first
    """
    logic_op = FilterLogicOp.AND
    conditions: list[FilterCondition] = []

    if logic_filter is not None:
        logic_op = _LOGIC_OPS.get(logic_filter.logic_operator, FilterLogicOp.AND)
        if logic_filter.child_groups:
            logger.warning(
                f"Ignoring {len(logic_filter.child_groups)} nested group(s); "
                "only top-level expressions are compiled"
            )
        for expr in logic_filter.exprs:
            if not expr.is_complete:
                logger.debug(f"Skipping incomplete expression: {expr!r}")
                continue
            conditions.append(compile_expr(expr, catalog))

    conditions.extend(compile_simple_filter(simple_filter, filter_fields))

    logger.debug(f"Compiled {len(conditions)} filter condition(s)")
    return CompiledFilter(logic_op=logic_op, filter_conditions=conditions)
