"""Eigenvector ranking engine.

Runs the forward pipeline for one tournament:

1. **Registry**: dense player ids in first-appearance order
2. **Matrix**: n x n win tallies
3. **Decomposition**: eigenvalues and eigenvectors from the configured solver
4. **Selection**: first sign-consistent eigenvector, normalized by games

Each stage produces an immutable artifact consumed by the next one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from eigenrank.core.config import RankConfig
from eigenrank.core.convert import PlayerRegistry, Tournament
from eigenrank.core.edges import build_match_matrix
from eigenrank.core.eigen import EigenDecomposition, get_eigen_solver
from eigenrank.core.logging import get_logger, log_timing
from eigenrank.core.results import TournamentAnalysis
from eigenrank.core.selection import select_rank_vector

if TYPE_CHECKING:
    from typing import Iterable, Optional

    from eigenrank.core.convert import Match
    from eigenrank.core.protocols import EigenSolver
    from eigenrank.core.results import RankResult


class EigenRankEngine:
    """
    Rank tournament players by eigenvector centrality of their win matrix.

    Parameters
    ----------
    config : RankConfig, optional
        Tolerance, selection mode, zero-game policy, rescale flag and solver
        name. Defaults to ``RankConfig()``.
    solver : EigenSolver, optional
        Decomposition backend. Overrides ``config.solver`` when given.
    """

    def __init__(
        self,
        config: Optional[RankConfig] = None,
        solver: Optional[EigenSolver] = None,
    ) -> None:
        self.config = config or RankConfig()
        self.solver = solver or get_eigen_solver(self.config.solver)
        self.logger = get_logger(__name__)

    def analyze(
        self,
        tournament: Iterable[Match],
        registry: Optional[PlayerRegistry] = None,
    ) -> TournamentAnalysis:
        """Build the registry, match matrix and eigen decomposition.

        Parameters
        ----------
        tournament : Iterable[Match]
            Matches in recorded order.
        registry : PlayerRegistry, optional
            Pre-seeded registry; built from the tournament when omitted.

        Returns
        -------
        TournamentAnalysis
            Artifacts for rank selection and rendering.
        """
        if not isinstance(tournament, Tournament):
            tournament = Tournament(tournament)
        if registry is None:
            registry = PlayerRegistry.from_tournament(tournament)

        self.logger.info(
            "Analyzing %d matches among %d players",
            len(tournament),
            len(registry),
        )

        with log_timing(self.logger, "building match matrix"):
            matrix = build_match_matrix(tournament, registry)

        if matrix.size == 0:
            decomposition = EigenDecomposition.empty(self.config.tolerance)
        else:
            with log_timing(
                self.logger, f"{self.solver.name} eigen decomposition"
            ):
                decomposition = self.solver.decompose(
                    matrix, self.config.tolerance
                )

        return TournamentAnalysis(
            tournament=tournament,
            registry=registry,
            matrix=matrix,
            decomposition=decomposition,
        )

    def rank_analysis(self, analysis: TournamentAnalysis) -> RankResult:
        """Select and normalize the ranking vector of an analysis."""
        with log_timing(self.logger, "rank selection"):
            result = select_rank_vector(
                analysis.decomposition,
                analysis.matrix,
                analysis.registry.players,
                selection=self.config.selection,
                zero_games=self.config.zero_games,
                rescale=self.config.rescale,
            )

        self.logger.info(
            "Ranked %d players with eigenvector %d (eigenvalue %.4g)",
            len(result),
            result.eigenvector_index,
            result.eigenvalue,
        )
        return result

    def rank(
        self,
        tournament: Iterable[Match],
        registry: Optional[PlayerRegistry] = None,
    ) -> RankResult:
        """Rank players of a tournament.

        Raises
        ------
        NoValidRankingError
            If the tournament is empty or no eigenvector is sign-consistent.
        ZeroGameError
            If a seeded player has no games and the policy is "reject".
        """
        return self.rank_analysis(self.analyze(tournament, registry))
