"""Example strategies for Dilemma.

These are illustrative opponents, not part of the engine. Most are written
as generator functions; Alternator shows the class-based form.

From Axelrod's tournaments and Poundstone's "Prisoner's Dilemma" (1992),
chapter 12, "Survival of the Fittest".
"""

from __future__ import annotations

from typing import ClassVar

from dilemma.models.moves import COOPERATE, DEFECT, Move
from dilemma.strategies.base import SimpleStrategy, StrategyFactory, strategy


@strategy("Good Guy Greg")
def always_cooperate():
    """Always does the right thing."""
    while True:
        yield COOPERATE


@strategy("Scumbag Steve")
def always_defect():
    """Just a jerk."""
    while True:
        yield DEFECT


@strategy("Grim Trigger")
def grim_trigger():
    """Conditional cooperator.

    Cooperates as long as the opponent does. One defection and it defects
    for the rest of the match.
    """
    their_move = yield COOPERATE
    while their_move == COOPERATE:
        their_move = yield COOPERATE

    while True:
        yield DEFECT


@strategy("Tit for Tat")
def tit_for_tat():
    """Reciprocator: cooperate first, then mirror the opponent's last move.

    Key properties:
    - Nice: never defects first
    - Retaliatory: responds to defection with defection
    - Forgiving: returns to cooperation if the opponent does
    """
    their_move = yield COOPERATE
    while True:
        their_move = yield their_move


@strategy("Suspicious Tit for Tat")
def suspicious_tit_for_tat():
    """Tit for Tat that opens with a defection."""
    their_move = yield DEFECT
    while True:
        their_move = yield their_move


class Alternator(SimpleStrategy):
    """Alternates between cooperating and defecting, starting with COOPERATE."""

    name: ClassVar[str] = "Alternator"

    def __init__(self) -> None:
        super().__init__(name="Alternator")
        self._next = COOPERATE

    def choose_move(self, opponent_last_move: Move | None) -> Move:
        move = self._next
        self._next = move.opposite()
        return move


STRATEGIES: dict[str, StrategyFactory] = {
    "always_cooperate": always_cooperate,
    "always_defect": always_defect,
    "grim_trigger": grim_trigger,
    "tit_for_tat": tit_for_tat,
    "suspicious_tit_for_tat": suspicious_tit_for_tat,
    "alternator": Alternator,
}

_ALIASES = {
    "good_guy_greg": "always_cooperate",
    "cooperator": "always_cooperate",
    "scumbag_steve": "always_defect",
    "defector": "always_defect",
    "grim": "grim_trigger",
    "grimtrigger": "grim_trigger",
    "titfortat": "tit_for_tat",
    "tft": "tit_for_tat",
    "stft": "suspicious_tit_for_tat",
}


def get_strategy_by_name(name: str) -> StrategyFactory:
    """Look up a strategy factory by name.

    Args:
        name: Registry name or alias ("tit-for-tat", "Grim Trigger", ...)

    Returns:
        Strategy factory

    Raises:
        ValueError: If the name is unknown
    """
    key = name.lower().replace("-", "_").replace(" ", "_")
    key = _ALIASES.get(key, key)

    if key in STRATEGIES:
        return STRATEGIES[key]

    raise ValueError(
        f"Unknown strategy: {name}. "
        f"Valid strategies: {list(STRATEGIES.keys())}. "
        f"Valid aliases: {list(_ALIASES.keys())}"
    )


def list_strategy_names() -> list[str]:
    """List all registered strategy names."""
    return list(STRATEGIES.keys())
