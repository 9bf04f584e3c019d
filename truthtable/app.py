import sys, os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import streamlit as st
import matplotlib.pyplot as plt
import numpy as np
from sympy import latex

from truthtable.kmap_engine import axis_labels, idx_to_rc, kmap_grid, map_dimensions
from truthtable.logic import ACCEPTED_SYMBOLS, ExpressionError, normalize, parse_expression, to_sympy
from truthtable.table import (
    FORMAT_01,
    FORMAT_VF,
    build_truth_table,
    describe,
    format_bit,
    format_rows,
    headers,
)

logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

# ------------------------------- page setup -------------------------------

ONE_COLOR = "#1f3c88"
ZERO_COLOR = "#9aa7b7"
FORMAT_CHOICES = {"V/F": FORMAT_VF, "0/1": FORMAT_01}

st.set_page_config(page_title="Truth Table Calculator", layout="wide")
st.title("🔣 Truth Table Calculator")
st.markdown("---")

raw_expr = st.text_input("Formula (example: (a -> b) & !c):")
st.caption(f"{ACCEPTED_SYMBOLS} Unicode ¬ ~ ∧ ∨ → ↔ also work.")
fmt_label = st.radio("Format:", list(FORMAT_CHOICES), horizontal=True)
mode = FORMAT_CHOICES[fmt_label]


# ------------------------------- K-map drawing -------------------------------
def draw_kmap(table, mode):
    """Draw the result column of table on its Karnaugh map."""
    n = len(table.vars)
    nrows, ncols = map_dimensions(n)
    grid = kmap_grid(table)
    row_labels, col_labels = axis_labels(table)

    fig, ax = plt.subplots(figsize=(1.3 * ncols + 1.2, 1.3 * nrows + 1.0))
    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    for j, lab in enumerate(col_labels):
        ax.text(j + 0.5, -0.25, lab, ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(row_labels):
        ax.text(-0.25, i + 0.5, lab, ha="right", va="center", fontsize=10, color="#333")

    for idx in range(len(table.rows)):
        r, c = idx_to_rc(n, idx)
        bit = int(grid[r, c])
        ax.text(c + 0.5, r + 0.5, format_bit(bit, mode),
                color=ONE_COLOR if bit else ZERO_COLOR,
                fontsize=13, ha="center", va="center", weight="bold")
        ax.text(c + 0.05, r + 0.9, str(idx), color="#777", fontsize=8, alpha=0.7)
    return fig


# ------------------------------- calculation -------------------------------
if st.button("Calculate 🚀") or raw_expr:
    try:
        table = build_truth_table(raw_expr.strip())
    except ExpressionError as e:
        log.info("rejected expression %r: %s", raw_expr, e)
        st.error(f"Error: {e}")
    else:
        st.info(describe(table, mode))

        cols = headers(table)
        st.table([dict(zip(cols, row)) for row in format_rows(table, mode)])

        formula = to_sympy(parse_expression(normalize(table.expr)))
        st.latex(latex(formula))

        if table.vars:
            with st.container():
                st.markdown("### 🗺️ Karnaugh map")
                st.caption("Result column laid out in Gray order; cell corner shows the row number.")
                st.pyplot(draw_kmap(table, mode))
