"""Match records, tournaments and the player registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import polars as pl

if TYPE_CHECKING:
    from typing import Any, Iterable, Iterator


@dataclass(frozen=True)
class Match:
    """One recorded contest with a single winner and a single loser."""

    winner: str
    loser: str


class Tournament(tuple):
    """Immutable ordered sequence of matches for one analysis run."""

    def __new__(cls, matches: Iterable[Match | tuple[str, str]] = ()):
        return super().__new__(
            cls,
            (
                match if isinstance(match, Match) else Match(*match)
                for match in matches
            ),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Tournament:
        """Build a tournament from (winner, loser) pairs."""
        return cls(Match(winner, loser) for winner, loser in pairs)

    def names(self) -> Iterator[str]:
        """Yield every player name in scan order, winner before loser."""
        for match in self:
            yield match.winner
            yield match.loser

    def __repr__(self) -> str:
        return f"Tournament({len(self)} matches)"


def factorize_ids(
    node_ids: Iterable[Any],
) -> tuple[list[Any], dict[Any, int]]:
    """Convert a sequence of IDs to dense indices in first-occurrence order.

    Args:
        node_ids: IDs, possibly repeated.

    Returns:
        Tuple of (unique_ids, id_to_index_mapping).
    """
    unique_ids = list(dict.fromkeys(node_ids))
    id_to_index = {node_id: index for index, node_id in enumerate(unique_ids)}
    return unique_ids, id_to_index


class PlayerRegistry:
    """Bijection between player names and dense integer ids in ``[0, n)``."""

    __slots__ = ("_players", "_ids")

    def __init__(self, names: Iterable[str] = ()) -> None:
        players, ids = factorize_ids(names)
        self._players: tuple[str, ...] = tuple(players)
        self._ids: dict[str, int] = ids

    @classmethod
    def from_tournament(cls, tournament: Iterable[Match]) -> PlayerRegistry:
        """Assign ids in order of first appearance, winner checked first."""
        return cls(
            name for match in tournament for name in (match.winner, match.loser)
        )

    @classmethod
    def from_names(cls, names: Iterable[str]) -> PlayerRegistry:
        """Seed a registry independently of any match log."""
        return cls(names)

    @property
    def players(self) -> tuple[str, ...]:
        """Player names in id order."""
        return self._players

    @property
    def ids(self) -> dict[str, int]:
        """Copy of the name to id mapping."""
        return dict(self._ids)

    def id_of(self, name: str) -> int:
        return self._ids[name]

    def name_of(self, player_id: int) -> str:
        if player_id < 0:
            raise IndexError(f"player id out of range: {player_id}")
        return self._players[player_id]

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._players)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerRegistry):
            return NotImplemented
        return self._players == other._players

    def __hash__(self) -> int:
        return hash(self._players)

    def __repr__(self) -> str:
        return f"PlayerRegistry({list(self._players)!r})"


def tournament_to_dataframe(
    tournament: Iterable[Match],
    registry: PlayerRegistry,
) -> pl.DataFrame:
    """Flatten matches into a frame with registry indices.

    Args:
        tournament: Matches to convert.
        registry: Registry supplying the indices.

    Returns:
        DataFrame with columns: winner, loser, winner_idx, loser_idx.

    Raises:
        KeyError: If a match names a player missing from the registry.
    """
    winners: list[str] = []
    losers: list[str] = []
    for match in tournament:
        for name in (match.winner, match.loser):
            if name not in registry:
                raise KeyError(f"player {name!r} is not in the registry")
        winners.append(match.winner)
        losers.append(match.loser)

    return pl.DataFrame(
        {
            "winner": winners,
            "loser": losers,
            "winner_idx": [registry.id_of(name) for name in winners],
            "loser_idx": [registry.id_of(name) for name in losers],
        },
        schema={
            "winner": pl.Utf8,
            "loser": pl.Utf8,
            "winner_idx": pl.Int64,
            "loser_idx": pl.Int64,
        },
    )
