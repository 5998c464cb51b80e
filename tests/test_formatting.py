"""Tests for tabular output."""

import numpy as np

from eigenrank.analysis.formatting import (
    format_eigenvalues,
    format_eigenvectors,
    format_matrix,
    format_number,
    format_rank_table,
)
from eigenrank.core.eigen import EigenDecomposition
from eigenrank.core.results import RankResult


def _result(players, ranks) -> RankResult:
    ranks = np.asarray(ranks, dtype=float)
    return RankResult(
        ranks=ranks,
        players=list(players),
        games=np.ones(len(players)),
        eigenvalue=1.0,
        eigenvector=ranks,
        eigenvector_index=0,
        sense=1.0,
    )


def test_format_number_significant_digits():
    assert format_number(0.123456, 2) == "0.12"
    assert format_number(3.0, 4) == "3"
    assert format_number(np.float64(1234.5678), 4) == "1235"
    assert format_number(np.complex128(2 + 0j), 4) == "2"
    assert format_number(1.5 - 0.25j, 4) == "1.5-0.25j"


def test_rank_table_in_registry_order():
    table = format_rank_table(_result(["zed", "amy"], [0.123, 0.5]))
    assert table == "zed\t0.12\namy\t0.5"


def test_rank_table_shows_nan():
    table = format_rank_table(_result(["a", "idle"], [0.25, np.nan]))
    assert table.splitlines()[1] == "idle\tnan"


def test_matrix_rows_align_under_prefix():
    rendered = format_matrix(np.array([[0.0, 1.0], [13.0, 0.0]]))
    assert rendered == "tournmat = [ 0  1]\n           [13  0]"


def test_matrix_custom_prefix_and_digits():
    rendered = format_matrix(
        np.array([[0.0, 0.75], [0.25, 0.0]]), prefix="winrate = ", digits=1
    )
    first, second = rendered.splitlines()
    assert first.startswith("winrate = [")
    assert second.startswith(" " * len("winrate = ") + "[")
    assert "0.8" in first


def test_empty_matrix():
    assert format_matrix(np.zeros((0, 0))) == "tournmat = []"


def test_eigen_dumps():
    decomposition = EigenDecomposition(
        values=np.array([3.0, 1.0]),
        vectors=np.array([[0.70710678, -0.70710678], [0.70710678, 0.70710678]]),
    )
    assert format_eigenvalues(decomposition) == "eigvals = [3 1]"
    vectors = format_eigenvectors(decomposition).splitlines()
    assert vectors[0] == "eigvects = [ 0.7071 -0.7071]"
    assert vectors[1] == "           [ 0.7071  0.7071]"
