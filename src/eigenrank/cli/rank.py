from __future__ import annotations

"""
Rank tournament players from a whitespace separated winner/loser log.

Reads alternating winner and loser tokens from a file or stdin, builds the
win matrix, and prints one of: the ranked table (default), the tally or
win-rate matrix, the eigenvectors, the eigenvalues, or a Graphviz script.

Usage examples:
  eigenrank < matches.txt
  eigenrank --demo --graph | dot -Tpng > matches.png
  eigenrank --input matches.txt --eigval --solver scipy
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from eigenrank.analysis.engine import EigenRankEngine
from eigenrank.analysis.formatting import (
    format_eigenvalues,
    format_eigenvectors,
    format_matrix,
    format_rank_table,
)
from eigenrank.analysis.graph import to_dot
from eigenrank.core.config import GraphConfig, OutputMode, RankConfig, RunConfig
from eigenrank.core.constants import (
    DEFAULT_EDGE_DIRECTION,
    DEFAULT_EIGEN_TOLERANCE,
    DEFAULT_SELECTION,
    DEFAULT_SOLVER,
    DEFAULT_ZERO_GAMES,
    DEMO_MATCHES,
    EDGE_LOSER_TO_WINNER,
    EDGE_WINNER_TO_LOSER,
    SELECTION_DOMINANT,
    SELECTION_FIRST,
    SOLVER_NUMPY,
    SOLVER_SCIPY,
    WIN_RATE_PREFIX,
    ZERO_GAMES_NAN,
    ZERO_GAMES_REJECT,
)
from eigenrank.core.convert import Tournament
from eigenrank.core.edges import build_win_rate_matrix
from eigenrank.core.logging import LOG_LEVELS, get_logger, setup_logging
from eigenrank.core.parser import parse_matches
from eigenrank.core.sentry import init_sentry

log = get_logger("cli.rank")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eigenrank",
        description=(
            "Rank players from winner/loser pairs by the sign-consistent "
            "eigenvector of their win matrix."
        ),
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in demo tournament instead of reading input",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        default="-",
        help="File of whitespace separated winner/loser tokens (default: stdin)",
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "--table",
        dest="mode",
        action="store_const",
        const=OutputMode.TABLE,
        help="Print player names and normalized ranks (default)",
    )
    modes.add_argument(
        "--matrix",
        dest="mode",
        action="store_const",
        const=OutputMode.MATRIX,
        help="Print the tournament win tally matrix",
    )
    modes.add_argument(
        "--win-rate",
        dest="mode",
        action="store_const",
        const=OutputMode.WIN_RATE,
        help="Print the pairwise win-rate matrix",
    )
    modes.add_argument(
        "--eigvect",
        dest="mode",
        action="store_const",
        const=OutputMode.EIGENVECTORS,
        help="Print the tournament eigenvectors",
    )
    modes.add_argument(
        "--eigval",
        dest="mode",
        action="store_const",
        const=OutputMode.EIGENVALUES,
        help="Print the tournament eigenvalues",
    )
    modes.add_argument(
        "--graph",
        dest="mode",
        action="store_const",
        const=OutputMode.GRAPH,
        help="Print the graphviz dot script of match relationships",
    )
    parser.set_defaults(mode=OutputMode.TABLE)

    parser.add_argument(
        "--selection",
        choices=[SELECTION_FIRST, SELECTION_DOMINANT],
        default=os.getenv("EIGENRANK_SELECTION", DEFAULT_SELECTION),
        help=(
            "Accept the first sign-consistent eigenvector in solver order, "
            "or visit eigenvectors by decreasing |eigenvalue|"
        ),
    )
    parser.add_argument(
        "--solver",
        choices=[SOLVER_NUMPY, SOLVER_SCIPY],
        default=os.getenv("EIGENRANK_SOLVER", DEFAULT_SOLVER),
        help="Eigen decomposition backend",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_EIGEN_TOLERANCE,
        help="Magnitudes at or below this count as zero",
    )
    parser.add_argument(
        "--rescale",
        action="store_true",
        help="Rescale ranks so the minimum is 0 and the maximum is 1",
    )
    parser.add_argument(
        "--zero-games",
        choices=[ZERO_GAMES_NAN, ZERO_GAMES_REJECT],
        default=DEFAULT_ZERO_GAMES,
        help="Policy for registered players without games",
    )
    parser.add_argument(
        "--edge-direction",
        choices=[EDGE_LOSER_TO_WINNER, EDGE_WINNER_TO_LOSER],
        default=DEFAULT_EDGE_DIRECTION,
        help="Direction of graph edges",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.getenv("EIGENRANK_LOG_LEVEL", "WARNING").upper(),
        help="Logging level for diagnostics on stderr",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        mode=args.mode,
        demo=args.demo,
        input_path=args.input,
        rank=RankConfig(
            tolerance=args.tolerance,
            selection=args.selection,
            zero_games=args.zero_games,
            rescale=args.rescale,
            solver=args.solver,
        ),
        graph=GraphConfig(edge_direction=args.edge_direction),
    )


def load_tournament(config: RunConfig, stdin: TextIO) -> Tournament:
    if config.demo:
        return Tournament.from_pairs(DEMO_MATCHES)
    if config.input_path in (None, "-"):
        return parse_matches(stdin)
    with Path(config.input_path).open("r", encoding="utf-8") as handle:
        return parse_matches(handle)


def render(config: RunConfig, tournament: Tournament) -> str:
    """Produce the output selected by ``config.mode``.

    Raises:
        NoValidRankingError: For the table and graph modes when no ranking exists.
        ZeroGameError: When the zero-game policy rejects the tournament.
    """
    engine = EigenRankEngine(config.rank)
    analysis = engine.analyze(tournament)
    digits = config.dump_digits

    if config.mode is OutputMode.MATRIX:
        return format_matrix(analysis.matrix, digits=digits) + "\n"
    if config.mode is OutputMode.WIN_RATE:
        rates = build_win_rate_matrix(analysis.matrix)
        return format_matrix(rates, prefix=WIN_RATE_PREFIX, digits=digits) + "\n"
    if config.mode is OutputMode.EIGENVECTORS:
        return format_eigenvectors(analysis.decomposition, digits=digits) + "\n"
    if config.mode is OutputMode.EIGENVALUES:
        return format_eigenvalues(analysis.decomposition, digits=digits) + "\n"

    result = engine.rank_analysis(analysis)
    if config.mode is OutputMode.GRAPH:
        return to_dot(result, analysis.matrix, config.graph)
    return format_rank_table(result) + "\n"


def main(
    argv: Optional[list[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(level=args.log_level, log_file=args.log_file)
    except (ValueError, OSError) as e:
        setup_logging()
        log.error("%s", e)
        return 1
    init_sentry(context="eigenrank_cli")

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        config = config_from_args(args)
        tournament = load_tournament(config, stdin)
        output = render(config, tournament)
    except (ValueError, OSError) as e:
        log.error("%s", e)
        return 1

    stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
