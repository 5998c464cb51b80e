"""Tokenize whitespace separated winner/loser streams into tournaments."""

from __future__ import annotations

import io
import re
from typing import TYPE_CHECKING

from eigenrank.core.constants import OPPONENTLESS_MATCH_MESSAGE
from eigenrank.core.convert import Match, Tournament
from eigenrank.core.logging import get_logger

if TYPE_CHECKING:
    from typing import Iterable, Iterator, TextIO

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[ \t\r\n]+")


class OpponentlessMatchError(ValueError):
    """Raised when the token stream ends with a winner and no loser."""

    def __init__(self, winner: str | None = None) -> None:
        super().__init__(OPPONENTLESS_MATCH_MESSAGE)
        self.winner = winner


def iter_tokens(source: TextIO | Iterable[str]) -> Iterator[str]:
    """Yield non-empty tokens split on spaces, tabs, ``\\r`` and ``\\n``.

    Other whitespace, such as a non-breaking space, is part of a token.
    """
    for line in source:
        yield from filter(None, _SEPARATORS.split(line))


def parse_matches(source: TextIO | Iterable[str]) -> Tournament:
    """Read alternating winner/loser tokens into a tournament.

    Args:
        source: Text stream or iterable of lines.

    Returns:
        Tournament with one match per token pair, in input order.

    Raises:
        OpponentlessMatchError: If the number of tokens is odd.
    """
    tokens = iter_tokens(source)
    matches: list[Match] = []
    for winner in tokens:
        loser = next(tokens, None)
        if loser is None:
            raise OpponentlessMatchError(winner)
        matches.append(Match(winner, loser))

    logger.debug("Parsed %d matches", len(matches))
    return Tournament(matches)


def parse_matches_text(text: str) -> Tournament:
    """Parse matches from an in-memory string."""
    return parse_matches(io.StringIO(text))
