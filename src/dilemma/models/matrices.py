"""Payoff matrix for the Prisoner's Dilemma.

This module holds the Round Evaluator: a pure mapping from a pair of moves
to a pair of score deltas. It follows the constructor pattern: the payoff
values live in a validated parameter model and the matrix is built from it,
so an invalid matrix can never be constructed.

Classic payoffs (Axelrod's tournaments):

    |           | COOPERATE | DEFECT |
    |-----------|-----------|--------|
    | COOPERATE | 3, 3      | 0, 5   |
    | DEFECT    | 5, 0      | 1, 1   |

Mutual cooperation beats mutual defection, but unilateral defection beats
unilateral cooperation. That is the dilemma.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, model_validator

from dilemma.models.moves import Move


class MatrixParameters(BaseModel):
    """Payoff values for a Prisoner's Dilemma matrix.

    Ordinal constraints:
    - T > R > P > S (the dilemma itself)
    - 2R > T + S (alternating exploitation does not beat steady cooperation)

    Attributes:
        temptation: T, defect against a cooperator
        reward: R, mutual cooperation
        punishment: P, mutual defection
        sucker: S, cooperate against a defector
    """

    model_config = ConfigDict(frozen=True)

    temptation: int = 5
    reward: int = 3
    punishment: int = 1
    sucker: int = 0

    @model_validator(mode="after")
    def validate_ordering(self) -> "MatrixParameters":
        t, r, p, s = self.temptation, self.reward, self.punishment, self.sucker
        if not (t > r > p > s):
            raise ValueError(f"Prisoner's Dilemma requires T > R > P > S, got T={t}, R={r}, P={p}, S={s}")
        if not 2 * r > t + s:
            raise ValueError(f"Prisoner's Dilemma requires 2R > T + S, got 2R={2 * r}, T+S={t + s}")
        if s < 0:
            # Scores must never decrease.
            raise ValueError(f"Payoffs must be non-negative, got S={s}")
        return self


@dataclass(frozen=True)
class PayoffMatrix:
    """Complete 2x2 payoff matrix.

    Outcomes are indexed by (move1, move2):
    - cc: both cooperate
    - cd: player 1 cooperates, player 2 defects
    - dc: player 1 defects, player 2 cooperates
    - dd: both defect
    """

    cc: tuple[int, int]
    cd: tuple[int, int]
    dc: tuple[int, int]
    dd: tuple[int, int]

    @classmethod
    def build(cls, params: MatrixParameters) -> "PayoffMatrix":
        """Build a matrix from validated parameters."""
        t, r, p, s = params.temptation, params.reward, params.punishment, params.sucker
        return cls(
            cc=(r, r),  # Mutual cooperation
            cd=(s, t),  # Player 1 exploited
            dc=(t, s),  # Player 2 exploited
            dd=(p, p),  # Mutual defection
        )

    @property
    def max_payoff(self) -> int:
        """Best single-round payoff; credited per round to the survivor of a forfeit."""
        return max(self.cc + self.cd + self.dc + self.dd)

    def evaluate(self, move1: Move, move2: Move) -> tuple[int, int]:
        """Score one round.

        Args:
            move1: Player 1's move
            move2: Player 2's move

        Returns:
            Tuple of (delta1, delta2)
        """
        if move1 == Move.COOPERATE:
            return self.cc if move2 == Move.COOPERATE else self.cd
        return self.dc if move2 == Move.COOPERATE else self.dd


CLASSIC_MATRIX = PayoffMatrix.build(MatrixParameters())


def evaluate(move1: Move, move2: Move) -> tuple[int, int]:
    """Score one round under the classic payoff matrix."""
    return CLASSIC_MATRIX.evaluate(move1, move2)
