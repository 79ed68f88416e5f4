"""Strategy contract for Dilemma.

A strategy is a restartable-by-construction, suspendable computation. Each
time it is resumed with the opponent's previous move (None on the first
resume of a match) it produces exactly one move and suspends again. A
strategy may also terminate without producing a move, or produce something
that is not a move; the match engine treats both as a forfeit.

Strategies can be written three ways:

1. As a generator function, the natural Python fit. ``yield`` is the keyword
   you use when you are ready to make your move, and it returns your
   opponent's last move:

       @strategy("Tit for Tat")
       def tit_for_tat():
           their_move = yield COOPERATE
           while True:
               their_move = yield their_move

2. As an async generator function, for strategies that need to await
   something (an LLM, a remote service) before moving.

3. As a SimpleStrategy subclass implementing choose_move(), or a Strategy
   subclass implementing resume() directly.

A strategy factory is any zero-argument callable returning one of the above.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from dataclasses import dataclass
from typing import Any, Union

from dilemma.models.moves import Move


@dataclass(frozen=True)
class StepResult:
    """Outcome of resuming a strategy once.

    Attributes:
        value: The value the strategy produced (may be an illegal move)
        terminated: True if the strategy finished without producing a value
    """

    value: Any = None
    terminated: bool = False

    @classmethod
    def produced(cls, value: Any) -> StepResult:
        return cls(value=value)

    @classmethod
    def finished(cls) -> StepResult:
        return cls(terminated=True)


class Strategy(ABC):
    """Abstract base class for all strategies.

    Subclasses implement resume(). Strategies that only need to pick a move
    each round subclass SimpleStrategy and implement choose_move() instead.
    """

    def __init__(self, name: str = "Strategy"):
        """Initialize strategy.

        Args:
            name: Display name for the strategy
        """
        self.name = name

    @abstractmethod
    def resume(self, opponent_last_move: Move | None) -> StepResult | Awaitable[StepResult]:
        """Resume the strategy for one round.

        Args:
            opponent_last_move: Opponent's previous move (None on the first round)

        Returns:
            A StepResult, or an awaitable resolving to one for async strategies
        """


class SimpleStrategy(Strategy):
    """Strategy that produces one move per round and never terminates."""

    @abstractmethod
    def choose_move(self, opponent_last_move: Move | None) -> Any:
        """Choose the move for this round.

        Args:
            opponent_last_move: Opponent's previous move (None on the first round)

        Returns:
            The chosen move
        """

    def resume(self, opponent_last_move: Move | None) -> StepResult:
        return StepResult.produced(self.choose_move(opponent_last_move))


class GeneratorStrategy(Strategy):
    """Adapter driving a generator-based strategy."""

    def __init__(self, generator: Generator[Any, Move | None, Any], name: str = "Strategy"):
        super().__init__(name=name)
        self._generator = generator
        self._started = False

    def resume(self, opponent_last_move: Move | None) -> StepResult:
        try:
            if not self._started:
                # A just-started generator can only be sent None.
                self._started = True
                value = next(self._generator)
            else:
                value = self._generator.send(opponent_last_move)
        except StopIteration:
            return StepResult.finished()
        return StepResult.produced(value)


class AsyncGeneratorStrategy(Strategy):
    """Adapter driving an async-generator-based strategy."""

    def __init__(self, generator: AsyncGenerator[Any, Move | None], name: str = "Strategy"):
        super().__init__(name=name)
        self._generator = generator
        self._started = False

    async def resume(self, opponent_last_move: Move | None) -> StepResult:
        try:
            if not self._started:
                self._started = True
                value = await self._generator.__anext__()
            else:
                value = await self._generator.asend(opponent_last_move)
        except StopAsyncIteration:
            return StepResult.finished()
        return StepResult.produced(value)


StrategyLike = Union[Strategy, Generator, AsyncGenerator]
StrategyFactory = Callable[[], StrategyLike]


def strategy_name(factory: StrategyFactory) -> str:
    """Get the display name of a strategy factory.

    Uses the ``name`` attribute set by @strategy, falling back to the
    callable's ``__name__``.
    """
    name = getattr(factory, "name", None)
    if isinstance(name, str) and name:
        return name
    return getattr(factory, "__name__", type(factory).__name__)


def as_strategy(obj: Any, name: str = "Strategy") -> Strategy:
    """Wrap whatever a factory returned into a Strategy.

    Args:
        obj: Strategy instance, generator, or async generator
        name: Display name used for generator-based strategies

    Returns:
        Strategy instance

    Raises:
        TypeError: If obj is none of the supported kinds
    """
    if isinstance(obj, Strategy):
        return obj
    if inspect.isgenerator(obj):
        return GeneratorStrategy(obj, name=name)
    if inspect.isasyncgen(obj):
        return AsyncGeneratorStrategy(obj, name=name)
    raise TypeError(
        f"Strategy factory returned {type(obj).__name__}; "
        f"expected a Strategy, a generator, or an async generator"
    )


def strategy(name: str) -> Callable[[StrategyFactory], StrategyFactory]:
    """Decorator attaching a display name to a strategy factory."""

    def decorate(factory: StrategyFactory) -> StrategyFactory:
        factory.name = name  # type: ignore[attr-defined]
        return factory

    return decorate
