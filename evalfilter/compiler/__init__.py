"""Logic filter query compiler."""

from evalfilter.compiler.schemas import (
    CompiledFilter,
    FilterCondition,
    FilterField,
    FilterLogicOp,
    FilterOperatorType,
    SimpleFilterField,
    SourceTarget,
)
from evalfilter.compiler.compile import (
    OPERATOR_TABLE,
    compile_expr,
    compile_filter,
    compile_operator,
    compile_simple_filter,
    decode_field,
    stringify_value,
)

__all__ = [
    "CompiledFilter",
    "FilterCondition",
    "FilterField",
    "FilterLogicOp",
    "FilterOperatorType",
    "SimpleFilterField",
    "SourceTarget",
    "OPERATOR_TABLE",
    "compile_expr",
    "compile_filter",
    "compile_operator",
    "compile_simple_filter",
    "decode_field",
    "stringify_value",
]
