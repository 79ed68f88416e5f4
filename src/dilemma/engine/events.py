"""Match event side channel.

Round starts, moves, forfeits and match completion are reported to
observers as MatchEvent records. Observers never influence the match: their
return values are ignored and their exceptions are logged and swallowed by
the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Kinds of match events."""

    ROUND_START = "round_start"
    MOVE_MADE = "move_made"
    FORFEIT = "forfeit"
    MATCH_DONE = "match_done"


@dataclass(frozen=True)
class MatchEvent:
    """A single observable match event.

    Attributes:
        event_type: What happened
        round: Zero-indexed round the event belongs to
        player: Side the event concerns (1 or 2), None for match-wide events
        move: Move made (MOVE_MADE only)
        score1: Player 1's cumulative score when the event fired
        score2: Player 2's cumulative score when the event fired
        message: Human-readable description (error text for FORFEIT)
        player1_name: Display name of player 1, identifying the match
        player2_name: Display name of player 2, identifying the match
    """

    event_type: EventType
    round: int
    player: int | None = None
    move: str | None = None
    score1: int = 0
    score2: int = 0
    message: str = ""
    player1_name: str = ""
    player2_name: str = ""


MatchObserver = Callable[[MatchEvent], Any]


@dataclass
class MatchTrace:
    """Observer that records every event of a match.

    Usage:
        trace = MatchTrace()
        match = Match(tit_for_tat, always_defect, 10, observers=[trace])
        await match.play_match()
        json.dumps(trace.to_dict())
    """

    events: list[MatchEvent] = field(default_factory=list)
    start_time: str = field(default_factory=lambda: datetime.now().isoformat())

    def __call__(self, event: MatchEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[MatchEvent]:
        """Events of one type, in order."""
        return [e for e in self.events if e.event_type == event_type]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "start_time": self.start_time,
            "events": [{**asdict(e), "event_type": e.event_type.value} for e in self.events],
        }


def notify(observers: list[MatchObserver], event: MatchEvent) -> None:
    """Deliver an event to every observer."""
    for observer in observers:
        try:
            observer(event)
        except Exception:
            logger.exception(f"Match observer {observer!r} failed on {event.event_type.value}")
