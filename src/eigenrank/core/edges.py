"""Match matrix construction from tournaments."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import polars as pl

from eigenrank.core.convert import PlayerRegistry, tournament_to_dataframe

if TYPE_CHECKING:
    from typing import Iterable

    from eigenrank.core.convert import Match


def _freeze(matrix: np.ndarray) -> np.ndarray:
    matrix.flags.writeable = False
    return matrix


def build_pair_counts(
    tournament: Iterable[Match],
    registry: PlayerRegistry,
) -> pl.DataFrame:
    """Aggregate matches into one row per (winner, loser) index pair.

    Args:
        tournament: Matches to aggregate.
        registry: Registry supplying the indices.

    Returns:
        DataFrame with columns: winner_idx, loser_idx, wins.

    Raises:
        ValueError: If a match has the same player on both sides.
    """
    pairs = tournament_to_dataframe(tournament, registry)

    self_matches = pairs.filter(pl.col("winner_idx") == pl.col("loser_idx"))
    if not self_matches.is_empty():
        raise ValueError(
            f"self-match recorded for {self_matches['winner'][0]!r}"
        )

    return (
        pairs.group_by(["winner_idx", "loser_idx"])
        .agg(pl.len().alias("wins"))
        .sort(["winner_idx", "loser_idx"])
    )


def build_match_matrix(
    tournament: Iterable[Match],
    registry: PlayerRegistry | None = None,
) -> np.ndarray:
    """Build the n x n win tally matrix.

    ``M[i, j]`` is the number of times player ``i`` defeated player ``j``.

    Args:
        tournament: Matches to tally.
        registry: Player registry. Defaults to one built from the tournament.

    Returns:
        Read-only float matrix with a zero diagonal; 0 x 0 for no players.
    """
    if registry is None:
        registry = PlayerRegistry.from_tournament(tournament)

    num_players = len(registry)
    matrix = np.zeros((num_players, num_players), dtype=np.float64)
    if num_players == 0:
        return _freeze(matrix)

    counts = build_pair_counts(tournament, registry)
    if not counts.is_empty():
        np.add.at(
            matrix,
            (counts["winner_idx"].to_numpy(), counts["loser_idx"].to_numpy()),
            counts["wins"].to_numpy().astype(np.float64),
        )

    return _freeze(matrix)


def build_win_rate_matrix(counts: np.ndarray) -> np.ndarray:
    """Convert a tally matrix into pairwise win rates.

    For every pair with at least one match, cell ``(i, j)`` becomes
    ``w(i, j) / (w(i, j) + w(j, i))`` and ``(j, i)`` its complement. Pairs
    that never met stay zero.

    Args:
        counts: Square win tally matrix.

    Returns:
        Read-only win-rate matrix of the same shape.
    """
    counts = np.asarray(counts, dtype=np.float64)
    pair_totals = counts + counts.T

    rates = np.zeros_like(counts)
    upper = np.triu(pair_totals > 0, k=1)
    rates[upper] = counts[upper] / pair_totals[upper]
    rates.T[upper] = 1.0 - rates[upper]
    return _freeze(rates)


def total_games(counts: np.ndarray) -> np.ndarray:
    """Matches played by each player as winner or loser."""
    counts = np.asarray(counts, dtype=np.float64)
    return counts.sum(axis=1) + counts.sum(axis=0)
