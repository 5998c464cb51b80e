"""Eigenvector tournament rankings."""

from __future__ import annotations

from eigenrank.analysis import EigenRankEngine
from eigenrank.core import (
    Match,
    NoValidRankingError,
    OpponentlessMatchError,
    PlayerRegistry,
    RankConfig,
    RankResult,
    Tournament,
    ZeroGameError,
    build_match_matrix,
    parse_matches,
    select_rank_vector,
)
from eigenrank.core.constants import DEFAULT_EIGEN_TOLERANCE, DEMO_MATCHES

__version__ = "0.1.0"

__all__ = [
    # Core API
    "EigenRankEngine",
    "Match",
    "PlayerRegistry",
    "RankConfig",
    "RankResult",
    "Tournament",
    "build_match_matrix",
    "parse_matches",
    "select_rank_vector",
    # Errors
    "NoValidRankingError",
    "OpponentlessMatchError",
    "ZeroGameError",
    # Essential constants
    "DEFAULT_EIGEN_TOLERANCE",
    "DEMO_MATCHES",
    # Version
    "__version__",
]
