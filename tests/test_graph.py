"""Tests for the Graphviz export."""

import graphviz
import numpy as np
import pytest

from eigenrank.analysis.engine import EigenRankEngine
from eigenrank.analysis.graph import (
    build_digraph,
    rank_position,
    to_dot,
    write_dot,
)
from eigenrank.core.config import GraphConfig
from eigenrank.core.constants import DEMO_MATCHES
from eigenrank.core.convert import Tournament
from eigenrank.core.results import RankResult


def _edges(dot: str) -> list[str]:
    return [line.strip() for line in dot.splitlines() if " -> " in line]


def _nodes(dot: str) -> list[str]:
    return [line.strip() for line in dot.splitlines() if "[label=" in line]


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


@pytest.fixture
def demo_analysis():
    engine = EigenRankEngine()
    analysis = engine.analyze(Tournament.from_pairs(DEMO_MATCHES))
    return analysis, engine.rank_analysis(analysis)


class TestDemoGraph:
    def test_one_edge_per_match(self, demo_analysis):
        analysis, result = demo_analysis
        dot = to_dot(result, analysis.matrix)
        assert len(_edges(dot)) == 14
        assert _edges(dot).count('"tim-c" -> "bob-r"') == 3

    def test_frame(self, demo_analysis):
        analysis, result = demo_analysis
        dot = to_dot(result, analysis.matrix)
        assert dot.startswith("digraph matches {\n")
        assert dot.endswith("}\n")
        assert len(_nodes(dot)) == 6

    def test_sizes_use_true_min_and_max(self, demo_analysis):
        analysis, result = demo_analysis
        dot = to_dot(result, analysis.matrix)
        top = result.players[int(np.argmax(result.ranks))]
        bottom = result.players[int(np.argmin(result.ranks))]
        assert result.max_rank == result.ranks.max()
        assert result.min_rank == result.ranks.min()
        top_line = next(line for line in _nodes(dot) if line.startswith(f'"{top}"'))
        bottom_line = next(
            line for line in _nodes(dot) if line.startswith(f'"{bottom}"')
        )
        assert 'fillcolor="#FF0000" height=1.80 style=filled width=2.50' in top_line
        assert 'fillcolor="#FFffff" height=0.50 style=filled width=0.50' in bottom_line

    def test_build_digraph_returns_library_graph(self, demo_analysis):
        analysis, result = demo_analysis
        dot = build_digraph(result, analysis.matrix)
        assert isinstance(dot, graphviz.Digraph)
        assert dot.name == "matches"
        assert dot.source == to_dot(result, analysis.matrix)


class TestEdgeDirection:
    matrix = np.array([[0.0, 1.0], [0.0, 0.0]])

    def test_default_points_loser_to_winner(self):
        dot = to_dot(_result(["a", "b"], [1.0, 0.0]), self.matrix)
        assert _edges(dot) == ["b -> a"]

    def test_winner_to_loser(self):
        dot = to_dot(
            _result(["a", "b"], [1.0, 0.0]),
            self.matrix,
            GraphConfig(edge_direction="winner-to-loser"),
        )
        assert _edges(dot) == ["a -> b"]

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            GraphConfig(edge_direction="sideways")


def test_node_statements():
    dot = to_dot(
        _result(["a", "b"], [0.75, 0.25]), np.array([[0.0, 1.0], [0.0, 0.0]])
    )
    assert _nodes(dot) == [
        'a [label="a\\n(0.75)" fillcolor="#FF0000" height=1.80 '
        "style=filled width=2.50]",
        'b [label="b\\n(0.25)" fillcolor="#FFffff" height=0.50 '
        "style=filled width=0.50]",
    ]


def test_equal_ranks_do_not_divide_by_zero():
    dot = to_dot(_result(["a", "b"], [0.5, 0.5]), np.array([[0.0, 1.0], [1.0, 0.0]]))
    assert dot.count("height=0.50 style=filled width=0.50") == 2
    assert "nan" not in dot


def test_nan_rank_sits_at_minimum():
    dot = to_dot(
        _result(["a", "b", "idle"], [1.0, 0.0, np.nan]),
        np.array([[0.0, 1.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]),
    )
    assert (
        'idle [label="idle\\n(nan)" fillcolor="#FFffff" height=0.50 '
        "style=filled width=0.50]"
    ) in _nodes(dot)


def test_rank_position():
    assert rank_position(3.0, 1.0, 5.0) == 0.5
    assert rank_position(2.0, 2.0, 2.0) == 0.0
    assert rank_position(float("nan"), 0.0, 1.0) == 0.0


def test_quotes_in_names_are_escaped():
    dot = to_dot(
        _result(['say "hi"', "b"], [1.0, 0.0]), np.array([[0.0, 1.0], [0.0, 0.0]])
    )
    assert _nodes(dot)[0].startswith('"say \\"hi\\"" [label="say \\"hi\\"\\n(1)"')
    assert _edges(dot) == ['b -> "say \\"hi\\""']


def test_backslashes_in_labels_are_literal():
    dot = to_dot(
        _result(["a\\b", "c"], [1.0, 0.0]), np.array([[0.0, 1.0], [0.0, 0.0]])
    )
    assert 'label="a\\\\b\\n(1)"' in dot


def test_matrix_shape_must_match():
    with pytest.raises(ValueError):
        to_dot(_result(["a"], [1.0]), np.zeros((2, 2)))


def test_write_dot(tmp_path):
    path = tmp_path / "matches.dot"
    result = _result(["a", "b"], [1.0, 0.0])
    matrix = np.array([[0.0, 2.0], [0.0, 0.0]])
    with path.open("w") as handle:
        write_dot(result, matrix, handle)
    assert path.read_text() == to_dot(result, matrix)
    assert _edges(path.read_text()) == ["b -> a", "b -> a"]
