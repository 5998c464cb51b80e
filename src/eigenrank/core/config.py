"""Configuration dataclasses for the ranking pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from eigenrank.core.constants import (
    DEFAULT_EDGE_DIRECTION,
    DEFAULT_EIGEN_TOLERANCE,
    DEFAULT_SELECTION,
    DEFAULT_SOLVER,
    DEFAULT_ZERO_GAMES,
    DUMP_SIGNIFICANT_DIGITS,
    EDGE_LOSER_TO_WINNER,
    EDGE_WINNER_TO_LOSER,
    NODE_BASE_SIZE,
    NODE_HEIGHT_SCALE,
    NODE_WIDTH_SCALE,
    RANK_SIGNIFICANT_DIGITS,
    SELECTION_DOMINANT,
    SELECTION_FIRST,
    SOLVER_NUMPY,
    SOLVER_SCIPY,
    ZERO_GAMES_NAN,
    ZERO_GAMES_REJECT,
)


class OutputMode(str, Enum):
    """Mutually exclusive renderings the command line can produce."""

    TABLE = "table"
    MATRIX = "matrix"
    WIN_RATE = "win_rate"
    EIGENVECTORS = "eigenvectors"
    EIGENVALUES = "eigenvalues"
    GRAPH = "graph"


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ValueError(
            f"{name} must be one of {', '.join(choices)}; got {value!r}"
        )


@dataclass(frozen=True)
class RankConfig:
    """Configuration for eigen decomposition and rank selection."""

    tolerance: float = DEFAULT_EIGEN_TOLERANCE
    selection: str = DEFAULT_SELECTION  # "first" or "dominant"
    zero_games: str = DEFAULT_ZERO_GAMES  # "nan" or "reject"
    rescale: bool = False
    solver: str = DEFAULT_SOLVER  # "numpy" or "scipy"

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(
                f"tolerance must be non-negative; got {self.tolerance}"
            )
        _check_choice(
            "selection", self.selection, (SELECTION_FIRST, SELECTION_DOMINANT)
        )
        _check_choice(
            "zero_games", self.zero_games, (ZERO_GAMES_NAN, ZERO_GAMES_REJECT)
        )
        _check_choice("solver", self.solver, (SOLVER_NUMPY, SOLVER_SCIPY))


@dataclass(frozen=True)
class GraphConfig:
    """Configuration for the Graphviz export."""

    edge_direction: str = DEFAULT_EDGE_DIRECTION
    base_size: float = NODE_BASE_SIZE
    width_scale: float = NODE_WIDTH_SCALE
    height_scale: float = NODE_HEIGHT_SCALE
    significant_digits: int = RANK_SIGNIFICANT_DIGITS

    def __post_init__(self) -> None:
        _check_choice(
            "edge_direction",
            self.edge_direction,
            (EDGE_LOSER_TO_WINNER, EDGE_WINNER_TO_LOSER),
        )


@dataclass(frozen=True)
class RunConfig:
    """Everything one command line invocation needs."""

    mode: OutputMode = OutputMode.TABLE
    demo: bool = False
    input_path: Optional[str] = None  # None or "-" reads stdin
    dump_digits: int = DUMP_SIGNIFICANT_DIGITS

    rank: RankConfig = field(default_factory=RankConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
