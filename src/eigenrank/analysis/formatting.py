"""
Formatting functions for ranking output.

Matrices and eigen dumps are printed with a label prefix and continuation rows
aligned under the first one; every cell uses the same fixed number of
significant digits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from eigenrank.core.constants import (
    DUMP_SIGNIFICANT_DIGITS,
    EIGENVALUE_PREFIX,
    EIGENVECTOR_PREFIX,
    MATRIX_PREFIX,
    RANK_SIGNIFICANT_DIGITS,
)

if TYPE_CHECKING:
    from eigenrank.core.eigen import EigenDecomposition
    from eigenrank.core.results import RankResult


def format_number(value: complex | float, digits: int) -> str:
    """Format a real or complex scalar with ``digits`` significant digits."""
    if isinstance(value, (complex, np.complexfloating)):
        if value.imag == 0:
            value = value.real
        else:
            return f"{value.real:.{digits}g}{value.imag:+.{digits}g}j"
    return f"{float(value):.{digits}g}"


def format_grid(array: np.ndarray, prefix: str, digits: int) -> str:
    """Render a 1-D or 2-D array as bracketed, right-aligned rows.

    Args:
        array: Values to render.
        prefix: Label printed before the first row.
        digits: Significant digits per cell.

    Returns:
        Multi-line string without a trailing newline.
    """
    array = np.asarray(array)
    if array.ndim == 1:
        array = array.reshape(1, -1)
    if array.size == 0:
        return f"{prefix}[]"

    cells = [[format_number(value, digits) for value in row] for row in array]
    width = max(len(cell) for row in cells for cell in row)

    indent = " " * len(prefix)
    lines = []
    for row_index, row in enumerate(cells):
        lead = prefix if row_index == 0 else indent
        lines.append(f"{lead}[{' '.join(cell.rjust(width) for cell in row)}]")
    return "\n".join(lines)


def format_rank_table(
    result: RankResult, digits: int = RANK_SIGNIFICANT_DIGITS
) -> str:
    """One ``name<TAB>rank`` line per player in registry id order."""
    return "\n".join(
        f"{player}\t{format_number(rank, digits)}"
        for player, rank in zip(result.players, result.ranks)
    )


def format_matrix(
    matrix: np.ndarray,
    prefix: str = MATRIX_PREFIX,
    digits: int = DUMP_SIGNIFICANT_DIGITS,
) -> str:
    """Render a tally or win-rate matrix."""
    return format_grid(matrix, prefix, digits)


def format_eigenvectors(
    decomposition: EigenDecomposition,
    prefix: str = EIGENVECTOR_PREFIX,
    digits: int = DUMP_SIGNIFICANT_DIGITS,
) -> str:
    """Render eigenvectors as columns, row ``i`` aligned to player id ``i``."""
    return format_grid(decomposition.vectors, prefix, digits)


def format_eigenvalues(
    decomposition: EigenDecomposition,
    prefix: str = EIGENVALUE_PREFIX,
    digits: int = DUMP_SIGNIFICANT_DIGITS,
) -> str:
    """Render eigenvalues in solver order."""
    return format_grid(decomposition.values, prefix, digits)
