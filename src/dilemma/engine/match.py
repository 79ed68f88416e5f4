"""Match engine for Dilemma.

A Match drives two strategies through a fixed number of rounds of the
Prisoner's Dilemma, scoring each round with the payoff matrix.

State machine:
    PAUSED  -> RUNNING -> PAUSED | DONE   (play_round)
    RUNNING -> play_round raises AlreadyRunning
    DONE    -> play_round raises AlreadyDone

Round sequence:
1. ROUND START - status becomes RUNNING
2. RESUME - player 1 gets player 2's last move, then player 2 gets player 1's
3. VALIDATE - no move, an illegal move, or a crash makes that move undefined
4. FORFEIT - any undefined move ends the match now; the well-behaved side is
   credited the maximum payoff for every remaining round
5. SCORE - otherwise score via the payoff matrix, remember both moves,
   advance the round counter

All score and status changes of a round are committed together after both
strategies have been resumed.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Coroutine, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from dilemma.engine.events import EventType, MatchEvent, MatchObserver, notify
from dilemma.errors import (
    AlreadyDone,
    AlreadyRunning,
    InvalidArgument,
    StrategyConstructionFailed,
    StrategyCrashed,
    StrategyError,
    StrategyIllegalMove,
    StrategyNonTermination,
)
from dilemma.models.matrices import CLASSIC_MATRIX, PayoffMatrix
from dilemma.models.moves import Move, is_move, to_move
from dilemma.strategies.base import StepResult, Strategy, StrategyFactory, as_strategy, strategy_name

logger = logging.getLogger(__name__)


def validate_rounds(rounds: int) -> None:
    """Raise InvalidArgument unless rounds is a positive integer."""
    if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds <= 0:
        raise InvalidArgument(f"rounds must be a positive integer, got {rounds!r}")


class MatchStatus(str, Enum):
    """Match state machine states."""

    PAUSED = "paused"
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class RoundRecord:
    """Record of one completed round.

    Attributes:
        round: Zero-indexed round number
        move1: Player 1's move
        move2: Player 2's move
        delta1: Player 1's score change
        delta2: Player 2's score change
        score1: Player 1's cumulative score after the round
        score2: Player 2's cumulative score after the round
    """

    round: int
    move1: Move
    move2: Move
    delta1: int
    delta2: int
    score1: int
    score2: int


@dataclass(frozen=True)
class Forfeit:
    """Record of one side forfeiting.

    Attributes:
        player: Side that forfeited (1 or 2)
        round: Round in which it happened (0 for construction failures)
        reason: Error message describing the misbehavior
        error_type: Name of the StrategyError subclass
    """

    player: int
    round: int
    reason: str
    error_type: str

    @classmethod
    def from_error(cls, error: StrategyError, round: int) -> Forfeit:
        return cls(player=error.player, round=round, reason=str(error), error_type=type(error).__name__)


class MatchResult(BaseModel):
    """Summary of a match, finished or not.

    Forfeited matches produce ordinary results; forfeited_players only tells
    who misbehaved.
    """

    player1_name: str
    player2_name: str
    score1: int = Field(ge=0)
    score2: int = Field(ge=0)
    rounds_played: int = Field(ge=0)
    round_limit: int = Field(gt=0)
    status: MatchStatus
    forfeited_players: list[int] = Field(default_factory=list)

    @property
    def winner(self) -> Literal["1", "2", "tie"]:
        if self.score1 > self.score2:
            return "1"
        if self.score2 > self.score1:
            return "2"
        return "tie"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {**self.model_dump(mode="json"), "winner": self.winner}


@dataclass
class _Player:
    """Mutable per-side state, owned by the Match."""

    name: str
    strategy: Optional[Strategy] = None
    score: int = 0
    last_move: Optional[Move] = None
    last_delta: Optional[int] = None


class Match:
    """One repeated-game encounter between two strategies.

    Usage:
        match = Match(tit_for_tat, always_defect, rounds=10)
        await match.play_match()
        print(match.score1, match.score2)

    Attributes:
        round: Rounds completed so far (0..round_limit)
        round_limit: Number of rounds to play
        score1, score2: Cumulative scores
        last_move1, last_move2: Moves of the last completed round (None before)
        last_score1, last_score2: Score changes of the last round (None before)
        status: PAUSED, RUNNING or DONE
        history: Completed rounds
        forfeits: Who forfeited and why (empty for a normal finish)
    """

    def __init__(
        self,
        player1: StrategyFactory,
        player2: StrategyFactory,
        rounds: int,
        *,
        matrix: PayoffMatrix = CLASSIC_MATRIX,
        observers: Optional[Iterable[MatchObserver]] = None,
    ) -> None:
        """Create a match and construct both strategies.

        A factory that raises forfeits its side immediately: the match is
        DONE on return and the other side holds the maximum possible score.

        Args:
            player1: Factory for player 1's strategy
            player2: Factory for player 2's strategy
            rounds: Number of rounds to play (positive integer)
            matrix: Payoff matrix (default: the classic 3/0/5/1 matrix)
            observers: Callables receiving every MatchEvent

        Raises:
            InvalidArgument: If rounds is not a positive integer
        """
        validate_rounds(rounds)

        self._round = 0
        self._round_limit = rounds
        self._matrix = matrix
        self._observers: list[MatchObserver] = list(observers or [])
        self._status = MatchStatus.PAUSED
        self._driving = False
        self._runner: Optional[asyncio.Runner] = None
        self._history: list[RoundRecord] = []
        self._forfeits: list[Forfeit] = []
        self._players = (
            _Player(name=strategy_name(player1)),
            _Player(name=strategy_name(player2)),
        )

        errors: list[StrategyError] = []
        for n, factory in ((1, player1), (2, player2)):
            error = self._setup_player(n, factory)
            if error is not None:
                errors.append(error)

        if errors:
            # Forfeit. A lone survivor gets the maximum for every round.
            if len(errors) == 1:
                survivor = self._players[2 - errors[0].player]
                survivor.score = self._matrix.max_payoff * self._round_limit
            self._status = MatchStatus.DONE
            self._forfeits.extend(Forfeit.from_error(e, 0) for e in errors)
            for error in errors:
                self._emit(EventType.FORFEIT, player=error.player, message=str(error))
            self._finish()

    def _setup_player(self, n: int, factory: StrategyFactory) -> Optional[StrategyConstructionFailed]:
        """Construct one side's strategy; return the error if it failed."""
        player = self._players[n - 1]
        try:
            player.strategy = as_strategy(factory(), name=player.name)
        except Exception as exc:
            error = StrategyConstructionFailed(n, player.name, exc)
            logger.error(str(error), exc_info=exc)
            return error
        return None

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def round(self) -> int:
        return self._round

    @property
    def round_limit(self) -> int:
        return self._round_limit

    @property
    def status(self) -> MatchStatus:
        return self._status

    @property
    def is_done(self) -> bool:
        return self._status == MatchStatus.DONE

    @property
    def score1(self) -> int:
        return self._players[0].score

    @property
    def score2(self) -> int:
        return self._players[1].score

    @property
    def scores(self) -> tuple[int, int]:
        return self._players[0].score, self._players[1].score

    @property
    def last_move1(self) -> Optional[Move]:
        return self._players[0].last_move

    @property
    def last_move2(self) -> Optional[Move]:
        return self._players[1].last_move

    @property
    def last_score1(self) -> Optional[int]:
        return self._players[0].last_delta

    @property
    def last_score2(self) -> Optional[int]:
        return self._players[1].last_delta

    @property
    def player1_name(self) -> str:
        return self._players[0].name

    @property
    def player2_name(self) -> str:
        return self._players[1].name

    @property
    def history(self) -> tuple[RoundRecord, ...]:
        return tuple(self._history)

    @property
    def forfeits(self) -> tuple[Forfeit, ...]:
        return tuple(self._forfeits)

    def result(self) -> MatchResult:
        """Summarize the match in its current state."""
        return MatchResult(
            player1_name=self.player1_name,
            player2_name=self.player2_name,
            score1=self.score1,
            score2=self.score2,
            rounds_played=self._round,
            round_limit=self._round_limit,
            status=self._status,
            forfeited_players=[f.player for f in self._forfeits],
        )

    def __repr__(self) -> str:
        return (
            f"Match({self.player1_name!r} vs {self.player2_name!r}, "
            f"round={self._round}/{self._round_limit}, "
            f"score={self.score1}-{self.score2}, status={self._status.value})"
        )

    # =========================================================================
    # Public API
    # =========================================================================

    async def play_round(self) -> Match:
        """Play one round.

        Returns:
            This match, after the round has been committed

        Raises:
            AlreadyRunning: If a round or a play_match() drive is in progress
            AlreadyDone: If the match is over
        """
        if self._status == MatchStatus.RUNNING or self._driving:
            raise AlreadyRunning("play_round")
        if self._status == MatchStatus.DONE:
            raise AlreadyDone("play_round")
        return await self._play_round()

    async def play_match(self) -> Match:
        """Play rounds until the match is over.

        Rounds are played one after another, yielding to the event loop in
        between so independent matches can be driven concurrently.

        Returns:
            This match, finished

        Raises:
            AlreadyRunning: If a round or another play_match() is in progress
        """
        if self._status == MatchStatus.RUNNING or self._driving:
            raise AlreadyRunning("play_match")
        if self._status == MatchStatus.DONE:
            return self

        self._driving = True
        try:
            while self._status != MatchStatus.DONE:
                await self._play_round()
                if self._status != MatchStatus.DONE:
                    await asyncio.sleep(0)
        finally:
            self._driving = False
        return self

    def play_round_sync(self) -> Match:
        """Synchronous wrapper for play_round().

        Must not be called from inside a running event loop. Successive sync
        calls share one event loop, so async-generator strategies survive
        between rounds; the loop is closed once the match is over.
        """
        return self._run_sync(self.play_round())

    def play_match_sync(self) -> Match:
        """Synchronous wrapper for play_match().

        Must not be called from inside a running event loop.
        """
        return self._run_sync(self.play_match())

    def close(self) -> None:
        """Close the event loop kept by the sync wrappers, if any."""
        if self._runner is not None:
            self._runner.close()
            self._runner = None

    def _run_sync(self, coro: Coroutine[Any, Any, Match]) -> Match:
        if self._runner is None:
            self._runner = asyncio.Runner()
        try:
            return self._runner.run(coro)
        finally:
            if self._status == MatchStatus.DONE:
                self.close()

    # =========================================================================
    # Round internals
    # =========================================================================

    async def _play_round(self) -> Match:
        self._status = MatchStatus.RUNNING
        logger.debug(f"Round {self._round + 1}:")
        self._emit(EventType.ROUND_START)

        p1, p2 = self._players
        try:
            # Pass each player the other player's previous move.
            move1, error1 = await self._next_move(1, p2.last_move)
            move2, error2 = await self._next_move(2, p1.last_move)
        except BaseException:
            # Cancelled or interrupted: nothing was committed.
            self._status = MatchStatus.PAUSED
            raise

        if move1 is None or move2 is None:
            self._commit_forfeit(move1, move2, [e for e in (error1, error2) if e is not None])
        else:
            self._commit_round(move1, move2)
        return self

    async def _next_move(
        self, n: int, opponent_last_move: Optional[Move]
    ) -> tuple[Optional[Move], Optional[StrategyError]]:
        """Resume one strategy and validate what it produced."""
        player = self._players[n - 1]
        assert player.strategy is not None

        try:
            result = player.strategy.resume(opponent_last_move)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            error: StrategyError = StrategyCrashed(n, player.name, exc)
            logger.exception(str(error))
            return None, error

        if not isinstance(result, StepResult):
            error = StrategyIllegalMove(n, player.name, result)
        elif result.terminated:
            error = StrategyNonTermination(n, player.name)
        elif not is_move(result.value):
            error = StrategyIllegalMove(n, player.name, result.value)
        else:
            move = to_move(result.value)
            logger.debug(f"Player {n} ({player.name}): {move}")
            return move, None

        logger.error(str(error))
        return None, error

    def _commit_forfeit(
        self, move1: Optional[Move], move2: Optional[Move], errors: list[StrategyError]
    ) -> None:
        """End the match; credit a well-behaved side for every remaining round."""
        credit = self._matrix.max_payoff * (self._round_limit - self._round)
        p1, p2 = self._players
        p1.last_delta = 0 if move1 is None else credit
        p2.last_delta = 0 if move2 is None else credit
        p1.score += p1.last_delta
        p2.score += p2.last_delta
        self._forfeits.extend(Forfeit.from_error(e, self._round) for e in errors)
        self._status = MatchStatus.DONE

        for error in errors:
            self._emit(EventType.FORFEIT, player=error.player, message=str(error))
        self._finish()

    def _commit_round(self, move1: Move, move2: Move) -> None:
        delta1, delta2 = self._matrix.evaluate(move1, move2)
        p1, p2 = self._players
        p1.last_delta, p2.last_delta = delta1, delta2
        p1.score += delta1
        p2.score += delta2

        # Remember these moves for the next round.
        p1.last_move, p2.last_move = move1, move2

        self._history.append(
            RoundRecord(
                round=self._round,
                move1=move1,
                move2=move2,
                delta1=delta1,
                delta2=delta2,
                score1=p1.score,
                score2=p2.score,
            )
        )
        played = self._round
        self._round += 1
        self._status = MatchStatus.DONE if self._round >= self._round_limit else MatchStatus.PAUSED

        self._emit(EventType.MOVE_MADE, round=played, player=1, move=move1.value)
        self._emit(EventType.MOVE_MADE, round=played, player=2, move=move2.value)
        if self._status == MatchStatus.DONE:
            self._finish()

    def _finish(self) -> None:
        logger.info(
            f"Match over after {self._round} of {self._round_limit} rounds: "
            f"{self.player1_name} {self.score1}, {self.player2_name} {self.score2}"
        )
        self._emit(EventType.MATCH_DONE)

    def _emit(
        self,
        event_type: EventType,
        *,
        round: Optional[int] = None,
        player: Optional[int] = None,
        move: Optional[str] = None,
        message: str = "",
    ) -> None:
        if not self._observers:
            return
        notify(
            self._observers,
            MatchEvent(
                event_type=event_type,
                round=self._round if round is None else round,
                player=player,
                move=move,
                score1=self.score1,
                score2=self.score2,
                message=message,
                player1_name=self.player1_name,
                player2_name=self.player2_name,
            ),
        )
