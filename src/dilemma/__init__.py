"""Iterated Prisoner's Dilemma match and tournament engine.

References on the game:

  - Poundstone, William. "Prisoner's Dilemma". Doubleday, 1992.
    Chapter 12, "Survival of the Fittest", deals with evolution and
    Prisoner's Dilemma computer tournaments.

  - Radiolab. "The Good Show".
"""

from dilemma.engine import Match, MatchStatus, Tournament, play, play_sync
from dilemma.errors import (
    AlreadyDone,
    AlreadyRunning,
    DilemmaError,
    InvalidArgument,
)
from dilemma.models import COOPERATE, DEFECT, Move, evaluate

__version__ = "0.1.0"

__all__ = [
    "Move",
    "COOPERATE",
    "DEFECT",
    "evaluate",
    "Match",
    "MatchStatus",
    "Tournament",
    "play",
    "play_sync",
    "DilemmaError",
    "AlreadyRunning",
    "AlreadyDone",
    "InvalidArgument",
]
