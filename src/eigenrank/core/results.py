"""Result dataclasses for the ranking pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import numpy as np
import polars as pl

if TYPE_CHECKING:
    from eigenrank.core.convert import PlayerRegistry, Tournament
    from eigenrank.core.eigen import EigenDecomposition


@dataclass(frozen=True)
class TournamentAnalysis:
    """Artifacts produced ahead of rank selection."""

    tournament: Tournament
    registry: PlayerRegistry
    matrix: np.ndarray
    decomposition: EigenDecomposition

    @property
    def num_players(self) -> int:
        return len(self.registry)


@dataclass(frozen=True)
class RankResult:
    """Normalized ranking derived from an accepted eigenvector."""

    ranks: np.ndarray
    players: list[str]
    games: np.ndarray

    eigenvalue: float
    eigenvector: np.ndarray
    eigenvector_index: int
    sense: float

    rescaled: bool = False

    def __len__(self) -> int:
        return len(self.players)

    @cached_property
    def finite_ranks(self) -> np.ndarray:
        return self.ranks[np.isfinite(self.ranks)]

    @property
    def min_rank(self) -> float:
        """Smallest finite rank, NaN if there is none."""
        finite = self.finite_ranks
        return float(finite.min()) if finite.size else float("nan")

    @property
    def max_rank(self) -> float:
        """Largest finite rank, NaN if there is none."""
        finite = self.finite_ranks
        return float(finite.max()) if finite.size else float("nan")

    def to_dataframe(
        self,
        id_column: str = "player",
        score_column: str = "rank",
    ) -> pl.DataFrame:
        """Convert results to a Polars DataFrame in registry id order.

        Args:
            id_column: Name for player column. Defaults to "player".
            score_column: Name for rank column. Defaults to "rank".

        Returns:
            DataFrame with player, rank and games columns.
        """
        return pl.DataFrame(
            {
                id_column: self.players,
                score_column: self.ranks.tolist(),
                "games": self.games.astype(np.int64).tolist(),
            },
            schema={
                id_column: pl.Utf8,
                score_column: pl.Float64,
                "games": pl.Int64,
            },
        )

    def get_top_n(self, count: int = 10) -> pl.DataFrame:
        """Get top N ranked players, NaN ranks last.

        Args:
            count: Number of top players to return. Defaults to 10.

        Returns:
            DataFrame with top N players sorted by rank.
        """
        dataframe = self.to_dataframe().with_columns(
            pl.col("rank").fill_nan(None)
        )
        return dataframe.sort("rank", descending=True, nulls_last=True).head(
            count
        )
