"""Graphviz export of match relationships sized and colored by rank."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import graphviz
import numpy as np

from eigenrank.analysis.formatting import format_number
from eigenrank.core.config import GraphConfig
from eigenrank.core.constants import EDGE_LOSER_TO_WINNER, GRAPH_NAME

if TYPE_CHECKING:
    from typing import Iterator, TextIO

    from eigenrank.core.results import RankResult


def rank_position(rank: float, low: float, high: float) -> float:
    """Position of ``rank`` on the [0, 1] min/max axis.

    Non-finite ranks and a zero-width axis map to 0.0.
    """
    bound = high - low
    if not math.isfinite(rank) or not math.isfinite(bound) or bound == 0:
        return 0.0
    return (rank - low) / bound


def node_attributes(
    player: str, rank: float, position: float, config: GraphConfig
) -> dict[str, str]:
    """Graphviz attributes for one player.

    Width and height grow linearly with ``position`` and the fill moves from
    white (lowest rank) to red (highest rank).
    """
    width = config.base_size + config.width_scale * position
    height = config.base_size + config.height_scale * position
    red = int(position * 255)
    green = blue = 255 - red
    rank_text = format_number(rank, config.significant_digits)
    return {
        "label": f"{graphviz.escape(player)}\\n({rank_text})",
        "width": f"{width:.2f}",
        "height": f"{height:.2f}",
        "style": "filled",
        "fillcolor": f"#FF{green:02x}{blue:02x}",
    }


def iter_edges(
    players: list[str], matrix: np.ndarray, config: GraphConfig
) -> Iterator[tuple[str, str]]:
    """Yield one (tail, head) pair per recorded match, cells in row-major order."""
    rows, cols = matrix.shape
    for i in range(rows):
        for j in range(cols):
            count = int(matrix[i, j])
            if count <= 0:
                continue
            winner, loser = players[i], players[j]
            if config.edge_direction == EDGE_LOSER_TO_WINNER:
                edge = (loser, winner)
            else:
                edge = (winner, loser)
            for _ in range(count):
                yield edge


def build_digraph(
    result: RankResult,
    matrix: np.ndarray,
    config: GraphConfig | None = None,
) -> graphviz.Digraph:
    """Build a directed graph of matches.

    Args:
        result: Ranking whose players align with the matrix rows.
        matrix: Win tally matrix.
        config: Graph options. Defaults to ``GraphConfig()``.

    Returns:
        Digraph with one node per player and one edge per match.
    """
    config = config or GraphConfig()
    matrix = np.asarray(matrix)
    if matrix.shape != (len(result), len(result)):
        raise ValueError(
            f"matrix shape {matrix.shape} does not match {len(result)} ranked players"
        )

    # min/max are taken once from the whole rank vector
    low, high = result.min_rank, result.max_rank

    dot = graphviz.Digraph(GRAPH_NAME)
    for player, rank in zip(result.players, result.ranks):
        position = rank_position(float(rank), low, high)
        attributes = node_attributes(player, float(rank), position, config)
        dot.node(player, **attributes)
    for tail, head in iter_edges(result.players, matrix, config):
        dot.edge(tail, head)
    return dot


def to_dot(
    result: RankResult,
    matrix: np.ndarray,
    config: GraphConfig | None = None,
) -> str:
    """Render the match graph in Graphviz dot syntax."""
    return build_digraph(result, matrix, config).source


def write_dot(
    result: RankResult,
    matrix: np.ndarray,
    stream: TextIO,
    config: GraphConfig | None = None,
) -> None:
    """Write the dot script for ``result`` to ``stream``."""
    stream.write(to_dot(result, matrix, config))
