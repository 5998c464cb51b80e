"""Selection and normalization of the ranking eigenvector.

Win/loss matrices are generally asymmetric, so there is no canonical sign or
guaranteed unique dominant eigenvector. A vector is accepted as a ranking when
all of its components share one sign once oriented by its *sense* (the sign of
its first nonzero component). The accepted vector is then divided by each
player's number of games so players with different schedules compare as a
rate.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from eigenrank.core.constants import (
    DEFAULT_SELECTION,
    DEFAULT_ZERO_GAMES,
    NO_RANKING_MESSAGE,
    SELECTION_DOMINANT,
    SELECTION_FIRST,
    ZERO_GAMES_NAN,
    ZERO_GAMES_REJECT,
)
from eigenrank.core.edges import total_games
from eigenrank.core.logging import get_logger
from eigenrank.core.results import RankResult

if TYPE_CHECKING:
    from typing import Sequence

    from eigenrank.core.eigen import EigenDecomposition

logger = get_logger(__name__)


class NoValidRankingError(ValueError):
    """Raised when no eigenvector is sign-consistent."""

    def __init__(self, message: str = NO_RANKING_MESSAGE) -> None:
        super().__init__(message)


class ZeroGameError(ValueError):
    """Raised when a registered player has no recorded games."""

    def __init__(self, player_ids: Sequence[int]) -> None:
        self.player_ids = list(player_ids)
        super().__init__(
            f"players with zero recorded games cannot be ranked: ids {self.player_ids}"
        )


def eigenvector_sense(vector: np.ndarray) -> float:
    """Sign of the first nonzero component; +1.0 for an all-zero vector."""
    for component in np.asarray(vector):
        if component != 0:
            return math.copysign(1.0, float(component))
    return 1.0


def is_sign_consistent(vector: np.ndarray, sense: float) -> bool:
    """Whether every component times ``sense`` is non-negative."""
    return bool(np.all(np.asarray(vector) * sense >= 0))


def candidate_order(
    decomposition: EigenDecomposition, selection: str = DEFAULT_SELECTION
) -> list[int]:
    """Order in which eigenvectors are tested.

    Args:
        decomposition: Solver output.
        selection: "first" keeps solver order, "dominant" visits by
            decreasing eigenvalue magnitude.

    Returns:
        Eigenvector indices.
    """
    if selection == SELECTION_FIRST:
        return list(range(len(decomposition)))
    if selection == SELECTION_DOMINANT:
        return decomposition.dominant_order()
    raise ValueError(f"Unknown selection mode: {selection}")


def find_sign_consistent(
    decomposition: EigenDecomposition, selection: str = DEFAULT_SELECTION
) -> tuple[int, float] | None:
    """Locate the accepted eigenvector.

    Returns:
        Tuple of (eigenvector_index, sense), or None if every vector is
        rejected.
    """
    for index in candidate_order(decomposition, selection):
        if not decomposition.is_real(index):
            logger.debug("Skipping eigenvector %d: complex components", index)
            continue

        vector = np.real(decomposition.vector(index))
        sense = eigenvector_sense(vector)
        if is_sign_consistent(vector, sense):
            logger.debug(
                "Accepted eigenvector %d (eigenvalue=%s, sense=%+.0f)",
                index,
                decomposition.value(index),
                sense,
            )
            return index, sense

        logger.debug("Rejected eigenvector %d: mixed signs", index)
    return None


def normalize_by_games(
    vector: np.ndarray, sense: float, games: np.ndarray
) -> np.ndarray:
    """Orient a vector and divide each component by the player's game count.

    Players with zero games get NaN instead of a division by zero.
    """
    vector = np.asarray(vector, dtype=np.float64)
    games = np.asarray(games, dtype=np.float64)

    ranks = np.full(vector.shape, np.nan, dtype=np.float64)
    played = games > 0
    ranks[played] = vector[played] * sense / games[played]
    # turns -0.0 into 0.0
    return ranks + 0.0


def rescale_ranks(ranks: np.ndarray) -> np.ndarray:
    """Map finite ranks onto [0, 1] by min/max; NaN stays NaN.

    When every finite rank is equal they all map to 0.0.
    """
    ranks = np.asarray(ranks, dtype=np.float64)
    finite = np.isfinite(ranks)
    rescaled = ranks.copy()
    if not finite.any():
        return rescaled

    low = ranks[finite].min()
    bound = ranks[finite].max() - low
    if bound == 0:
        rescaled[finite] = 0.0
    else:
        rescaled[finite] = (ranks[finite] - low) / bound
    return rescaled


def select_rank_vector(
    decomposition: EigenDecomposition,
    matrix: np.ndarray,
    players: Sequence[str] | None = None,
    *,
    selection: str = DEFAULT_SELECTION,
    zero_games: str = DEFAULT_ZERO_GAMES,
    rescale: bool = False,
) -> RankResult:
    """Select and normalize the ranking eigenvector.

    Args:
        decomposition: Eigen decomposition of ``matrix``.
        matrix: Win tally matrix used for per-player game counts.
        players: Player names in id order. Defaults to stringified ids.
        selection: "first" or "dominant". Defaults to "first".
        zero_games: Policy for players without games, "nan" or "reject".
        rescale: Map ranks onto [0, 1] by min/max. Defaults to False.

    Returns:
        RankResult for the accepted eigenvector.

    Raises:
        NoValidRankingError: If the matrix is empty or no eigenvector is
            sign-consistent.
        ZeroGameError: If ``zero_games="reject"`` and a player has no games.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    num_players = matrix.shape[0] if matrix.ndim == 2 else 0
    if num_players == 0 or len(decomposition) == 0:
        raise NoValidRankingError()
    if decomposition.vectors.shape[0] != num_players:
        raise ValueError(
            f"eigenvectors have {decomposition.vectors.shape[0]} components "
            f"for a {num_players}-player matrix"
        )

    if players is None:
        players = [str(index) for index in range(num_players)]
    elif len(players) != num_players:
        raise ValueError(
            f"{len(players)} player names for a {num_players}-player matrix"
        )

    games = total_games(matrix)
    idle = np.flatnonzero(games == 0).tolist()
    if idle:
        if zero_games == ZERO_GAMES_REJECT:
            raise ZeroGameError(idle)
        if zero_games != ZERO_GAMES_NAN:
            raise ValueError(f"Unknown zero-game policy: {zero_games}")
        logger.warning(
            "Players without recorded games get a NaN rank: %s",
            [players[index] for index in idle],
        )

    accepted = find_sign_consistent(decomposition, selection)
    if accepted is None:
        raise NoValidRankingError()
    index, sense = accepted

    eigenvector = np.real(decomposition.vector(index)).astype(np.float64)
    ranks = normalize_by_games(eigenvector, sense, games)
    if rescale:
        ranks = rescale_ranks(ranks)

    return RankResult(
        ranks=ranks,
        players=list(players),
        games=games,
        eigenvalue=float(np.real(decomposition.value(index))),
        eigenvector=eigenvector,
        eigenvector_index=index,
        sense=sense,
        rescaled=rescale,
    )
