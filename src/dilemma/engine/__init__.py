"""Match and tournament engine for Dilemma.

This module contains:
- match: The Match state machine (round advance, scoring, forfeits)
- tournament: Pairwise matches among a roster
- events: Observer side channel for round/move/forfeit events
- driver: Legacy play() helper

Usage:
    from dilemma.engine import Match, Tournament
    from dilemma.strategies import always_defect, tit_for_tat

    match = Match(tit_for_tat, always_defect, rounds=10)
    await match.play_match()
    print(match.score1, match.score2)  # 9 14
"""

from dilemma.engine.driver import play, play_sync
from dilemma.engine.events import EventType, MatchEvent, MatchObserver, MatchTrace
from dilemma.engine.match import Forfeit, Match, MatchResult, MatchStatus, RoundRecord
from dilemma.engine.tournament import Tournament

__all__ = [
    # Match
    "Match",
    "MatchStatus",
    "MatchResult",
    "RoundRecord",
    "Forfeit",
    # Tournament
    "Tournament",
    # Events
    "EventType",
    "MatchEvent",
    "MatchObserver",
    "MatchTrace",
    # Legacy driver
    "play",
    "play_sync",
]
