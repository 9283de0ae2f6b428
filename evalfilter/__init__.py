"""
evalfilter: logic filter compiler for LLM evaluation list views.

- Field catalog with per-type operators and widgets
- Draft/applied logic filter editor
- Compiler to the backend filter request
- Exact-decimal validation and normalization of numeric column values
"""

__version__ = "0.1.0"

from evalfilter.catalog import DataType, FieldCatalog, LogicField
from evalfilter.compiler import CompiledFilter, compile_filter
from evalfilter.expr import Expr, LogicFilter, LogicFilterEditor
from evalfilter.numeric import normalize, validate

__all__ = [
    "__version__",
    "DataType",
    "FieldCatalog",
    "LogicField",
    "CompiledFilter",
    "compile_filter",
    "Expr",
    "LogicFilter",
    "LogicFilterEditor",
    "normalize",
    "validate",
]
