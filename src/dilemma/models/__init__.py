"""Dilemma game models.

This module exports the moves and the payoff matrix.
"""

from .matrices import (
    CLASSIC_MATRIX,
    MatrixParameters,
    PayoffMatrix,
    evaluate,
)
from .moves import (
    COOPERATE,
    DEFECT,
    Move,
    is_move,
    to_move,
)

__all__ = [
    # Moves
    "Move",
    "COOPERATE",
    "DEFECT",
    "is_move",
    "to_move",
    # Payoffs
    "MatrixParameters",
    "PayoffMatrix",
    "CLASSIC_MATRIX",
    "evaluate",
]
