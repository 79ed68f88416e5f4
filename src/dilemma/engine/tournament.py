"""Tournament: every pairwise match among a fixed roster.

Matches are stored in a lower-triangular grid. The match between roster
entries i and j (j < i) lives at row i, column j; entry i plays as player 1
and entry j as player 2. There are no self-matches.

Running the matches is up to the caller, e.g.:

    tournament = Tournament([always_cooperate, always_defect, tit_for_tat], rounds=10)
    await asyncio.gather(*(m.play_match() for _, _, m in tournament.matches()))
    print(tournament.standings())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Optional

from dilemma.config import MatchConfig
from dilemma.engine.events import MatchObserver
from dilemma.engine.match import Match, validate_rounds
from dilemma.errors import InvalidArgument
from dilemma.models.matrices import CLASSIC_MATRIX, PayoffMatrix
from dilemma.strategies.base import StrategyFactory, strategy_name

logger = logging.getLogger(__name__)


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Tournament:
    """All pairwise matches among a roster of strategies.

    Attributes:
        players: Roster of strategy factories, in order
        size: Number of roster entries
    """

    def __init__(
        self,
        players: Sequence[StrategyFactory],
        rounds: int,
        *,
        matrix: PayoffMatrix = CLASSIC_MATRIX,
        observers: Optional[Iterable[MatchObserver]] = None,
    ) -> None:
        """Build one match per unordered pair of roster entries.

        Args:
            players: Ordered roster of strategy factories
            rounds: Round limit shared by all matches
            matrix: Payoff matrix shared by all matches
            observers: Observers attached to every match

        Raises:
            InvalidArgument: If rounds is not a positive integer
        """
        validate_rounds(rounds)
        self.players = list(players)
        observer_list = list(observers or [])
        self._matches: list[list[Match]] = []
        for i in range(len(self.players)):
            self._matches.append(
                [
                    Match(self.players[i], self.players[j], rounds, matrix=matrix, observers=observer_list)
                    for j in range(i)
                ]
            )
        logger.debug(f"Tournament of {self.size} players: {self.num_matches} matches of {rounds} rounds")

    @classmethod
    def from_config(cls, players: Sequence[StrategyFactory], config: Optional[MatchConfig] = None) -> Tournament:
        """Build a tournament using configured defaults (DILEMMA_ROUNDS)."""
        config = config or MatchConfig()
        return cls(players, config.rounds)

    @property
    def size(self) -> int:
        return len(self.players)

    @property
    def num_matches(self) -> int:
        return sum(len(row) for row in self._matches)

    def player_name(self, i: int) -> str:
        """Display name of roster entry i."""
        self._check_player(i)
        return strategy_name(self.players[i])

    def get_match(self, i: int, j: int) -> Match:
        """Get the match between roster entries i and j.

        Args:
            i: Higher roster index (player 1 of the match)
            j: Lower roster index (player 2 of the match)

        Raises:
            InvalidArgument: Unless 0 <= j < i < size
        """
        if not (_is_index(i) and _is_index(j) and 0 <= j < i < self.size):
            raise InvalidArgument(f"Tournament.get_match: invalid argument ({i!r}, {j!r})")
        return self._matches[i][j]

    def matches(self) -> Iterator[tuple[int, int, Match]]:
        """Iterate (i, j, match) over the grid, row by row."""
        for i, row in enumerate(self._matches):
            for j, match in enumerate(row):
                yield i, j, match

    def get_score(self, i: int) -> int:
        """Total score of roster entry i across all of its matches.

        Reads each match's current scores, so unfinished matches count for
        what they have so far.

        Raises:
            InvalidArgument: If i is not a valid roster index
        """
        self._check_player(i)
        # Row i: i is the higher index, player 1.
        score = sum(match.score1 for match in self._matches[i])
        # Column i: i is the lower index, player 2.
        for k in range(i + 1, self.size):
            score += self._matches[k][i].score2
        return score

    def scores(self) -> list[int]:
        """Total score of every roster entry, in roster order."""
        return [self.get_score(i) for i in range(self.size)]

    def standings(self) -> list[tuple[str, int]]:
        """(name, score) pairs, best first. Ties keep roster order."""
        pairs = [(self.player_name(i), self.get_score(i)) for i in range(self.size)]
        return sorted(pairs, key=lambda pair: pair[1], reverse=True)

    def is_complete(self) -> bool:
        """Check whether every match is over."""
        return all(match.is_done for _, _, match in self.matches())

    def _check_player(self, i: int) -> None:
        if not (_is_index(i) and 0 <= i < self.size):
            raise InvalidArgument(f"Tournament: invalid player index {i!r}")
