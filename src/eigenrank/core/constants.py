"""
Configuration constants for eigenvector tournament ranking.

This module centralizes the default parameters used by the decomposition,
rank selection and rendering layers so they stay consistent across the
engine and the command line.
"""

# =============================================================================
# Eigen Decomposition Parameters
# =============================================================================

# Magnitudes at or below this are treated as exact zeros
DEFAULT_EIGEN_TOLERANCE: float = 1e-10

SOLVER_NUMPY = "numpy"
SOLVER_SCIPY = "scipy"
DEFAULT_SOLVER = SOLVER_NUMPY

# =============================================================================
# Rank Selection
# =============================================================================

# "first": first sign-consistent eigenvector in solver order
# "dominant": same test, eigenvectors visited by decreasing |eigenvalue|
SELECTION_FIRST = "first"
SELECTION_DOMINANT = "dominant"
DEFAULT_SELECTION = SELECTION_FIRST

ZERO_GAMES_NAN = "nan"
ZERO_GAMES_REJECT = "reject"
DEFAULT_ZERO_GAMES = ZERO_GAMES_NAN

NO_RANKING_MESSAGE = "no valid eigenvector ranking found"
OPPONENTLESS_MATCH_MESSAGE = "odd number of players causes opponentless match"

# =============================================================================
# Presentation
# =============================================================================

RANK_SIGNIFICANT_DIGITS: int = 2
DUMP_SIGNIFICANT_DIGITS: int = 4

MATRIX_PREFIX = "tournmat = "
WIN_RATE_PREFIX = "winrate = "
EIGENVECTOR_PREFIX = "eigvects = "
EIGENVALUE_PREFIX = "eigvals = "

EDGE_LOSER_TO_WINNER = "loser-to-winner"
EDGE_WINNER_TO_LOSER = "winner-to-loser"
DEFAULT_EDGE_DIRECTION = EDGE_LOSER_TO_WINNER

GRAPH_NAME = "matches"
NODE_BASE_SIZE: float = 0.5
NODE_WIDTH_SCALE: float = 2.0
NODE_HEIGHT_SCALE: float = 1.3

# =============================================================================
# Demo Tournament
# =============================================================================

# Three players, each split into a row ("-r") and column ("-c") identity
DEMO_MATCHES: tuple[tuple[str, str], ...] = (
    ("bob-r", "joe-c"),
    ("bob-r", "tim-c"),
    ("bob-r", "tim-c"),
    ("bob-r", "tim-c"),
    ("joe-r", "tim-c"),
    ("joe-r", "bob-c"),
    ("tim-r", "joe-c"),
    ("tim-r", "bob-c"),
    ("bob-c", "joe-r"),
    ("bob-c", "tim-r"),
    ("joe-c", "tim-r"),
    ("joe-c", "bob-r"),
    ("tim-c", "joe-r"),
    ("tim-c", "bob-r"),
)
