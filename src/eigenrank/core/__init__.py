"""Core components for eigenvector tournament ranking."""

from eigenrank.core.config import GraphConfig, OutputMode, RankConfig, RunConfig
from eigenrank.core.convert import (
    Match,
    PlayerRegistry,
    Tournament,
    factorize_ids,
    tournament_to_dataframe,
)
from eigenrank.core.edges import (
    build_match_matrix,
    build_pair_counts,
    build_win_rate_matrix,
    total_games,
)
from eigenrank.core.eigen import (
    EigenDecomposition,
    NumpyEigenSolver,
    ScipyEigenSolver,
    get_eigen_solver,
)
from eigenrank.core.parser import (
    OpponentlessMatchError,
    parse_matches,
    parse_matches_text,
)
from eigenrank.core.protocols import EigenSolver
from eigenrank.core.results import RankResult, TournamentAnalysis
from eigenrank.core.selection import (
    NoValidRankingError,
    ZeroGameError,
    eigenvector_sense,
    is_sign_consistent,
    normalize_by_games,
    rescale_ranks,
    select_rank_vector,
)

__all__ = [
    # Config
    "GraphConfig",
    "OutputMode",
    "RankConfig",
    "RunConfig",
    # Convert
    "Match",
    "PlayerRegistry",
    "Tournament",
    "factorize_ids",
    "tournament_to_dataframe",
    # Edges
    "build_match_matrix",
    "build_pair_counts",
    "build_win_rate_matrix",
    "total_games",
    # Eigen
    "EigenDecomposition",
    "EigenSolver",
    "NumpyEigenSolver",
    "ScipyEigenSolver",
    "get_eigen_solver",
    # Parser
    "OpponentlessMatchError",
    "parse_matches",
    "parse_matches_text",
    # Results
    "RankResult",
    "TournamentAnalysis",
    # Selection
    "NoValidRankingError",
    "ZeroGameError",
    "eigenvector_sense",
    "is_sign_consistent",
    "normalize_by_games",
    "rescale_ranks",
    "select_rank_vector",
]
