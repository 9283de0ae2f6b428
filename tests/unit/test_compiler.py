"""Tests for the logic filter compiler."""

import json
from decimal import Decimal

import pytest

from evalfilter.catalog import FieldType
from evalfilter.compiler import (
    CompiledFilter,
    FilterLogicOp,
    FilterOperatorType,
    compile_expr,
    compile_filter,
    compile_operator,
    compile_simple_filter,
    decode_field,
    stringify_value,
)
from evalfilter.expr import Expr, LogicFilter, SourceTargetValue


class TestCompileOperator:
    """Tests for the operator table."""

    @pytest.mark.parametrize(
        "operator,expected",
        [
            ("equals", FilterOperatorType.EQUAL),
            ("not-equals", FilterOperatorType.NOT_EQUAL),
            ("contains", FilterOperatorType.IN),
            ("not-contains", FilterOperatorType.NOT_IN),
            ("greater-than", FilterOperatorType.GREATER),
            ("greater-than-equals", FilterOperatorType.GREATER_OR_EQUAL),
            ("less-than", FilterOperatorType.LESS),
            ("less-than-equals", FilterOperatorType.LESS_OR_EQUAL),
        ],
    )
    def test_known(self, operator, expected):
        assert compile_operator(operator) == expected

    def test_unknown(self):
        assert compile_operator("between") is None
        assert compile_operator(None) is None


class TestStringifyValue:
    """Tests for value rendering."""

    def test_list_joins_with_comma(self):
        assert stringify_value(["done", "failed"]) == "done,failed"

    def test_scalars(self):
        assert stringify_value("abc") == "abc"
        assert stringify_value(42) == "42"
        assert stringify_value(0.5) == "0.5"
        assert stringify_value(3.0) == "3"
        assert stringify_value(True) == "true"
        assert stringify_value(Decimal("0.10")) == "0.10"

    def test_mixed_list(self):
        assert stringify_value([1, 2.5, "x"]) == "1,2.5,x"

    def test_none(self):
        assert stringify_value(None) == ""


class TestDecodeField:
    """Tests for resolving the left side."""

    def test_catalog_entry(self, catalog):
        field = decode_field("score", catalog)
        assert field.field_type == FieldType.EVALUATOR_SCORE
        assert field.field_key == "ev_42"

    def test_json_key_fallback(self):
        field = decode_field(json.dumps({"type": 1, "key": "ev_7"}))
        assert field.field_type == FieldType.EVALUATOR_SCORE
        assert field.field_key == "ev_7"

    def test_json_key_without_key(self):
        field = decode_field('{"type": 3}')
        assert field.field_type == FieldType.EXPT_STATUS
        assert field.field_key is None

    @pytest.mark.parametrize("left", [None, "", "missing", "[1, 2]", '{"type": 999}', '{"key": "a"}'])
    def test_unknown(self, catalog, left):
        field = decode_field(left, catalog)
        assert field.field_type == FieldType.UNKNOWN
        assert field.field_key is None


class TestCompileExpr:
    """Tests for compiling single expressions."""

    def test_options_scenario(self):
        from evalfilter.catalog import FieldCatalog

        catalog = FieldCatalog([{"name": "status", "type": "options", "field_type": 3}])
        condition = compile_expr(
            Expr(left="status", operator="contains", right=["done", "failed"]), catalog
        )
        assert condition.field.field_type == FieldType.EXPT_STATUS
        assert condition.field.field_key is None
        assert condition.operator == FilterOperatorType.IN
        assert condition.value == "done,failed"
        assert condition.source_target is None

    def test_number(self, catalog):
        condition = compile_expr(Expr(left="score", operator="greater-than", right=0.8), catalog)
        assert condition.operator == FilterOperatorType.GREATER
        assert condition.value == "0.8"
        assert condition.field.field_key == "ev_42"

    def test_composite_dict(self, catalog):
        condition = compile_expr(
            Expr(left="target", operator="equals", right={"type": 1, "evalTargetId": "t1"}),
            catalog,
        )
        assert condition.value == ""
        assert condition.source_target.source_target_ids == ["t1"]
        assert condition.source_target.eval_target_type == 1

    def test_composite_model(self, catalog):
        value = SourceTargetValue(type=2, eval_target_id=["t1", "t2"])
        condition = compile_expr(Expr(left="target", operator="equals", right=value), catalog)
        assert condition.value == ""
        assert condition.source_target.source_target_ids == ["t1", "t2"]
        assert condition.source_target.eval_target_type == 2

    def test_composite_without_ids(self, catalog):
        condition = compile_expr(Expr(left="target", operator="equals", right={"type": 1}), catalog)
        assert condition.source_target.source_target_ids == []

    def test_composite_integer_ids(self, catalog):
        condition = compile_expr(
            Expr(left="target", operator="equals", right={"type": 1, "evalTargetId": [123, 456]}),
            catalog,
        )
        assert condition.source_target.source_target_ids == ["123", "456"]
        assert condition.source_target.eval_target_type == 1

    @pytest.mark.parametrize(
        "right",
        [{"type": "prompt", "evalTargetId": "t1"}, {"evalTargetId": {"id": "t1"}}, 1.5],
    )
    def test_malformed_composite_degrades(self, catalog, right, caplog):
        condition = compile_expr(Expr(left="target", operator="equals", right=right), catalog)
        assert condition.value == ""
        assert condition.source_target.source_target_ids == []
        assert condition.source_target.eval_target_type is None
        assert "Malformed source target" in caplog.text

    def test_unknown_operator_degrades(self, catalog):
        condition = compile_expr(Expr(left="name", operator="matches", right="x"), catalog)
        assert condition.operator is None
        assert "operator" not in condition.model_dump(exclude_none=True)


class TestCompileSimpleFilter:
    """Tests for the key/value filter path."""

    def test_follows_filter_fields_order(self, sample_filter_fields):
        conditions = compile_simple_filter(
            {"expt_type": 1, "status": ["11", "12"], "ignored": "x"},
            sample_filter_fields,
        )
        assert [c.field.field_type for c in conditions] == [
            FieldType.EXPT_STATUS,
            FieldType.EXPT_TYPE,
        ]
        assert [c.value for c in conditions] == ["11,12", "1"]
        assert all(c.operator == FilterOperatorType.IN for c in conditions)
        assert all(c.field.field_key is None for c in conditions)

    @pytest.mark.parametrize("empty", [None, "", []])
    def test_skips_empty(self, sample_filter_fields, empty):
        assert compile_simple_filter({"status": empty}, sample_filter_fields) == []

    def test_no_filter(self, sample_filter_fields):
        assert compile_simple_filter(None, sample_filter_fields) == []


class TestCompileFilter:
    """Tests for full compilation."""

    def test_absent_logic_filter(self):
        compiled = compile_filter(None)
        assert compiled == CompiledFilter(logic_op=FilterLogicOp.AND, filter_conditions=[])

    def test_expressions_before_simple(self, catalog, sample_filter_fields):
        group = LogicFilter(exprs=[Expr(left="name", operator="contains", right="gpt")])
        compiled = compile_filter(
            group, {"status": ["11"]}, catalog=catalog, filter_fields=sample_filter_fields
        )
        assert [c.operator for c in compiled.filter_conditions] == [
            FilterOperatorType.IN,
            FilterOperatorType.IN,
        ]
        assert [c.value for c in compiled.filter_conditions] == ["gpt", "11"]
        assert compiled.filter_conditions[0].field.field_type == FieldType.UNKNOWN

    def test_skips_incomplete(self, catalog):
        group = LogicFilter(
            exprs=[
                Expr(left="score", operator="greater-than"),
                Expr(left="score", operator="less-than", right=1),
            ]
        )
        compiled = compile_filter(group, catalog=catalog)
        assert len(compiled.filter_conditions) == 1
        assert compiled.filter_conditions[0].operator == FilterOperatorType.LESS

    def test_or_group(self, catalog):
        compiled = compile_filter(LogicFilter(logic_operator="or"), catalog=catalog)
        assert compiled.logic_op == FilterLogicOp.OR

    def test_malformed_composite_does_not_raise(self, catalog):
        logic_filter = LogicFilter(
            exprs=[
                Expr(left="target", operator="equals", right={"type": 1, "evalTargetId": [123]}),
                Expr(left="target", operator="equals", right={"type": "x", "evalTargetId": "t1"}),
            ]
        )
        compiled = compile_filter(logic_filter, catalog=catalog)
        assert [c.source_target.source_target_ids for c in compiled.filter_conditions] == [
            ["123"],
            [],
        ]

    def test_nested_groups_ignored(self, catalog):
        group = LogicFilter(
            exprs=[Expr(left="name", operator="equals", right="a")],
            child_groups=[LogicFilter(exprs=[Expr(left="name", operator="equals", right="b")])],
        )
        compiled = compile_filter(group, catalog=catalog)
        assert [c.value for c in compiled.filter_conditions] == ["a"]

    def test_idempotent(self, catalog, sample_filter_fields):
        group = LogicFilter(
            exprs=[
                Expr(left="status", operator="contains", right=["11", "12"]),
                Expr(left="target", operator="equals", right={"type": 1, "evalTargetId": ["t1"]}),
            ]
        )
        simple = {"expt_type": [1, 2]}
        first = compile_filter(group, simple, catalog=catalog, filter_fields=sample_filter_fields)
        second = compile_filter(group, simple, catalog=catalog, filter_fields=sample_filter_fields)
        assert first == second
        assert first is not second
        assert json.dumps(first.to_wire()) == json.dumps(second.to_wire())

    def test_wire_shape(self, catalog):
        group = LogicFilter(
            exprs=[
                Expr(left="score", operator="greater-than-equals", right=0.5),
                Expr(left="target", operator="equals", right={"type": 1, "evalTargetId": "t1"}),
            ]
        )
        wire = compile_filter(group, catalog=catalog).to_wire()
        assert wire == {
            "logic_op": 1,
            "filter_conditions": [
                {
                    "field": {"field_type": 1, "field_key": "ev_42"},
                    "operator": 4,
                    "value": "0.5",
                },
                {
                    "field": {"field_type": 9},
                    "operator": 1,
                    "value": "",
                    "source_target": {"source_target_ids": ["t1"], "eval_target_type": 1},
                },
            ],
        }
