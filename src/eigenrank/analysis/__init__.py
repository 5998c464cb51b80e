"""Ranking engine and presentation helpers."""

from eigenrank.analysis.engine import EigenRankEngine
from eigenrank.analysis.formatting import (
    format_eigenvalues,
    format_eigenvectors,
    format_matrix,
    format_rank_table,
)
from eigenrank.analysis.graph import build_digraph, to_dot, write_dot

__all__ = [
    "EigenRankEngine",
    "build_digraph",
    "format_eigenvalues",
    "format_eigenvectors",
    "format_matrix",
    "format_rank_table",
    "to_dot",
    "write_dot",
]
