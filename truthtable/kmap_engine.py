"""Karnaugh map layout of a truth table's result column."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .table import TruthTable


def gray_code(bits: int) -> List[Tuple[int, ...]]:
    """Return the reflected Gray sequence of ``bits``-wide bit tuples."""
    if bits < 0:
        raise ValueError("Gray code width must be non-negative.")
    if bits == 0:
        return [()]
    prev = gray_code(bits - 1)
    return [(0,) + code for code in prev] + [(1,) + code for code in reversed(prev)]


def _split(nvars: int) -> Tuple[int, int]:
    row_bits = nvars // 2
    return row_bits, nvars - row_bits


def _to_bits(value: int, width: int) -> Tuple[int, ...]:
    return tuple((value >> (width - 1 - k)) & 1 for k in range(width))


def map_dimensions(nvars: int) -> Tuple[int, int]:
    """Return (rows, cols) for the K-map of nvars variables."""
    if not 0 <= nvars <= 4:
        raise ValueError("K-map available for 0-4 variables.")
    row_bits, col_bits = _split(nvars)
    return 1 << row_bits, 1 << col_bits


def idx_to_rc(nvars: int, idx: int) -> Tuple[int, int]:
    """Translate a row index of the truth table to (row, col) coordinates.

    The first ``nvars // 2`` variables select the map row, the rest the
    column; both axes follow Gray order so neighbouring cells differ in
    one variable.
    """
    nrows, ncols = map_dimensions(nvars)
    if not 0 <= idx < nrows * ncols:
        raise ValueError(f"Row index {idx} out of range for {nvars} variables.")
    row_bits, col_bits = _split(nvars)
    row_value = idx >> col_bits
    col_value = idx & ((1 << col_bits) - 1)
    row = gray_code(row_bits).index(_to_bits(row_value, row_bits))
    col = gray_code(col_bits).index(_to_bits(col_value, col_bits))
    return row, col


def kmap_grid(table: TruthTable) -> np.ndarray:
    """Lay the result bits of table out on its K-map."""
    nvars = len(table.vars)
    grid = np.zeros(map_dimensions(nvars), dtype=np.int8)
    for idx, bit in enumerate(table.results):
        r, c = idx_to_rc(nvars, idx)
        grid[r, c] = bit
    return grid


def _labels(names: Sequence[str]) -> List[str]:
    if not names:
        return [""]
    prefix = "".join(names)
    return [f"{prefix}=" + "".join(str(b) for b in code) for code in gray_code(len(names))]


def axis_labels(table: TruthTable) -> Tuple[List[str], List[str]]:
    """Return (row_labels, col_labels), e.g. ``AB=01``, in Gray order."""
    row_bits, _ = _split(len(table.vars))
    return _labels(table.vars[:row_bits]), _labels(table.vars[row_bits:])


__all__ = [
    "gray_code",
    "map_dimensions",
    "idx_to_rc",
    "kmap_grid",
    "axis_labels",
]
