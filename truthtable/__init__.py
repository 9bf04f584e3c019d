"""Convenience exports for the truth table calculator core."""

from .logic import (
    ExpressionError,
    EmptyExpressionError,
    ExpressionTooComplexError,
    InvalidTokenError,
    TrailingInputError,
    UnexpectedEndError,
    UnmatchedParenthesisError,
    evaluate,
    normalize,
    parse_expression,
    to_sympy,
    variables,
)
from .table import (
    FORMAT_01,
    FORMAT_VF,
    TruthTable,
    build_truth_table,
    describe,
    format_bit,
    format_rows,
    headers,
)
from .kmap_engine import axis_labels, idx_to_rc, kmap_grid, map_dimensions

__all__ = [
    "EmptyExpressionError",
    "ExpressionError",
    "ExpressionTooComplexError",
    "FORMAT_01",
    "FORMAT_VF",
    "InvalidTokenError",
    "TrailingInputError",
    "TruthTable",
    "UnexpectedEndError",
    "UnmatchedParenthesisError",
    "axis_labels",
    "build_truth_table",
    "describe",
    "evaluate",
    "format_bit",
    "format_rows",
    "headers",
    "idx_to_rc",
    "kmap_grid",
    "map_dimensions",
    "normalize",
    "parse_expression",
    "to_sympy",
    "variables",
]
