"""Legacy convenience drivers.

play() runs one match to completion and reports the final score, the way
the first version of the engine did before Match and Tournament existed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from dilemma.config import MatchConfig
from dilemma.engine.match import Match
from dilemma.strategies.base import StrategyFactory

logger = logging.getLogger(__name__)


async def play(player1: StrategyFactory, player2: StrategyFactory, rounds: Optional[int] = None) -> Match:
    """Play a full match and log the final score.

    Args:
        player1: Factory for player 1's strategy
        player2: Factory for player 2's strategy
        rounds: Number of rounds (default: DILEMMA_ROUNDS)

    Returns:
        The finished Match
    """
    if rounds is None:
        rounds = MatchConfig().rounds
    match = await Match(player1, player2, rounds).play_match()
    logger.info(
        f"Match complete! Final score: "
        f"{match.player1_name} {match.score1}, {match.player2_name} {match.score2}"
    )
    return match


def play_sync(player1: StrategyFactory, player2: StrategyFactory, rounds: Optional[int] = None) -> Match:
    """Synchronous wrapper for play().

    Useful for scripts and tests where async isn't needed.
    """
    return asyncio.run(play(player1, player2, rounds))
