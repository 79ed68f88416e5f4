"""Move definitions for Dilemma.

On each round of the Prisoner's Dilemma there are only two options:
cooperate or defect. Everything else a strategy might hand back is an
illegal move.
"""

from enum import Enum
from typing import Any


class Move(str, Enum):
    """The two legal per-round actions.

    Inherits from str so that plain "COOPERATE" / "DEFECT" strings compare
    equal to the members and the moves serialize cleanly to JSON.
    """

    COOPERATE = "COOPERATE"
    DEFECT = "DEFECT"

    def __str__(self) -> str:
        return self.value

    def opposite(self) -> "Move":
        """Return the other move."""
        return Move.DEFECT if self is Move.COOPERATE else Move.COOPERATE


COOPERATE = Move.COOPERATE
DEFECT = Move.DEFECT


def is_move(value: Any) -> bool:
    """Check whether a value is a legal move.

    Accepts Move members and the bare strings "COOPERATE" / "DEFECT".
    Anything else (None, lowercase names, booleans, ...) is illegal.
    """
    if isinstance(value, Move):
        return True
    return isinstance(value, str) and value in Move._value2member_map_


def to_move(value: Any) -> Move:
    """Normalize a legal move value to a Move member.

    Raises:
        ValueError: If the value is not a legal move
    """
    if not is_move(value):
        raise ValueError(f"Illegal move: {value!r} (expected COOPERATE or DEFECT)")
    return Move(value)
