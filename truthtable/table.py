"""Truth table construction and display helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .logic import (
    EmptyExpressionError,
    Node,
    evaluate,
    normalize,
    parse_expression,
    variables,
)

log = logging.getLogger(__name__)

FORMAT_VF = "vf"
FORMAT_01 = "01"

_FORMAT_LABELS = {FORMAT_VF: "V/F", FORMAT_01: "0/1"}
_FORMAT_SYMBOLS = {FORMAT_VF: ("F", "V"), FORMAT_01: ("0", "1")}

RESULT_HEADER = "Result"


@dataclass(frozen=True)
class TruthTable:
    """Complete truth table of one expression.

    ``rows`` holds one tuple per assignment: the variable bits in ``vars``
    order followed by the result bit, ordered by the binary number the
    variable bits spell (first variable most significant).
    """

    expr: str
    vars: Tuple[str, ...]
    rows: Tuple[Tuple[int, ...], ...]

    @property
    def results(self) -> Tuple[int, ...]:
        return tuple(row[-1] for row in self.rows)

    @property
    def minterms(self) -> Tuple[int, ...]:
        """Row indices whose result is 1."""
        return tuple(idx for idx, bit in enumerate(self.results) if bit)

    def as_array(self) -> np.ndarray:
        return np.array(self.rows, dtype=np.int8).reshape(len(self.rows), len(self.vars) + 1)

    def to_dict(self) -> Dict[str, object]:
        return {
            "expr": self.expr,
            "vars": list(self.vars),
            "rows": [list(row) for row in self.rows],
        }


def enumerate_rows(tree: Node, names: Sequence[str]) -> List[Tuple[int, ...]]:
    """Evaluate tree for every assignment of names in ascending mask order."""
    n = len(names)
    if n == 0:
        return [(int(evaluate(tree, {})),)]

    rows = []
    for mask in range(1 << n):
        context = {}
        bits = []
        for i, name in enumerate(names):
            bit = (mask >> (n - 1 - i)) & 1
            context[name] = bool(bit)
            bits.append(bit)
        bits.append(int(evaluate(tree, context)))
        rows.append(tuple(bits))
    return rows


def build_truth_table(text: str) -> TruthTable:
    """Parse text and return its full truth table.

    Raises an ExpressionError subclass when the text is blank or malformed.
    """
    if not text or not text.strip():
        raise EmptyExpressionError("enter a formula")

    normalized = normalize(text)
    tree = parse_expression(normalized)
    names = variables(tree)
    log.debug("normalized %r to %r with variables %s", text, normalized, names)

    rows = enumerate_rows(tree, names)
    log.debug("built %d rows for %r", len(rows), normalized)
    return TruthTable(
        expr=text,
        vars=tuple(name.upper() for name in names),
        rows=tuple(rows),
    )


# ------------------------------- formatting -------------------------------

def format_bit(bit: int, mode: str = FORMAT_VF) -> str:
    """Render one bit as V/F or 1/0."""
    if mode not in _FORMAT_SYMBOLS:
        raise ValueError(f"Unknown display format: {mode!r}")
    return _FORMAT_SYMBOLS[mode][1 if bit else 0]


def format_rows(table: TruthTable, mode: str = FORMAT_VF) -> List[List[str]]:
    return [[format_bit(bit, mode) for bit in row] for row in table.rows]


def headers(table: TruthTable) -> List[str]:
    return [*table.vars, RESULT_HEADER]


def describe(table: TruthTable, mode: str = FORMAT_VF) -> str:
    """One-line summary shown above the rendered table."""
    if mode not in _FORMAT_LABELS:
        raise ValueError(f"Unknown display format: {mode!r}")
    return f"Formula: {table.expr}  •  Rows: {len(table.rows)}  •  Format: {_FORMAT_LABELS[mode]}"
