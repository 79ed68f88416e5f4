"""Tests for dilemma.engine.events: the match observer side channel."""

import json
import logging

import pytest

from dilemma.engine.events import EventType, MatchEvent, MatchTrace
from dilemma.engine.match import Match
from dilemma.engine.tournament import Tournament
from dilemma.strategies import always_cooperate, always_defect, tit_for_tat


class TestMatchTrace:
    """Tests for recording match events."""

    @pytest.mark.asyncio
    async def test_event_sequence(self):
        trace = MatchTrace()
        await Match(always_cooperate, always_defect, 2, observers=[trace]).play_match()

        assert [e.event_type for e in trace.events] == [
            EventType.ROUND_START,
            EventType.MOVE_MADE,
            EventType.MOVE_MADE,
            EventType.ROUND_START,
            EventType.MOVE_MADE,
            EventType.MOVE_MADE,
            EventType.MATCH_DONE,
        ]

    @pytest.mark.asyncio
    async def test_move_events(self):
        trace = MatchTrace()
        await Match(always_cooperate, always_defect, 2, observers=[trace]).play_match()

        moves = trace.of_type(EventType.MOVE_MADE)
        assert [(e.round, e.player, e.move) for e in moves] == [
            (0, 1, "COOPERATE"),
            (0, 2, "DEFECT"),
            (1, 1, "COOPERATE"),
            (1, 2, "DEFECT"),
        ]
        assert (moves[-1].score1, moves[-1].score2) == (0, 10)

    @pytest.mark.asyncio
    async def test_forfeit_event(self, illegal_at):
        trace = MatchTrace()
        await Match(always_cooperate, illegal_at(1, "SHRUG"), 3, observers=[trace]).play_match()

        forfeits = trace.of_type(EventType.FORFEIT)
        assert len(forfeits) == 1
        assert forfeits[0].player == 2
        assert forfeits[0].round == 1
        assert "'SHRUG'" in forfeits[0].message
        # Reported after the forfeit has been scored.
        assert (forfeits[0].score1, forfeits[0].score2) == (3 + 10, 3)
        assert trace.events[-1].event_type == EventType.MATCH_DONE

    def test_construction_forfeit_event(self, broken_factory):
        trace = MatchTrace()
        Match(broken_factory, always_cooperate, 3, observers=[trace])

        assert [e.event_type for e in trace.events] == [EventType.FORFEIT, EventType.MATCH_DONE]
        assert trace.events[0].player == 1

    def test_to_dict_is_json_serializable(self):
        trace = MatchTrace()
        Match(always_cooperate, always_defect, 1, observers=[trace]).play_match_sync()

        data = json.loads(json.dumps(trace.to_dict()))
        assert data["events"][0]["event_type"] == "round_start"
        assert data["events"][1]["move"] == "COOPERATE"
        assert "start_time" in data

    def test_events_name_their_match(self):
        trace = MatchTrace()
        Match(always_cooperate, always_defect, 1, observers=[trace]).play_match_sync()

        assert {(e.player1_name, e.player2_name) for e in trace.events} == {("Good Guy Greg", "Scumbag Steve")}
        assert trace.to_dict()["events"][0]["player2_name"] == "Scumbag Steve"

    def test_shared_trace_separates_tournament_matches(self):
        trace = MatchTrace()
        tournament = Tournament([always_cooperate, always_defect, tit_for_tat], 2, observers=[trace])
        for _, _, match in tournament.matches():
            match.play_match_sync()

        done = trace.of_type(EventType.MATCH_DONE)
        assert [(e.player1_name, e.player2_name, e.score1, e.score2) for e in done] == [
            ("Scumbag Steve", "Good Guy Greg", 10, 0),
            ("Tit for Tat", "Good Guy Greg", 6, 6),
            ("Tit for Tat", "Scumbag Steve", 1, 6),
        ]


class TestObservers:
    """Tests for observer isolation."""

    def test_failing_observer_does_not_break_match(self, caplog):
        def explode(event: MatchEvent) -> None:
            raise RuntimeError("observer down")

        trace = MatchTrace()
        with caplog.at_level(logging.ERROR, logger="dilemma.engine.events"):
            match = Match(always_cooperate, always_cooperate, 3, observers=[explode, trace]).play_match_sync()

        assert match.scores == (9, 9)
        assert len(trace.events) == 10
        assert "observer down" in caplog.text

    def test_observer_return_value_ignored(self):
        match = Match(always_defect, always_defect, 2, observers=[lambda event: "ignored"]).play_match_sync()
        assert match.scores == (2, 2)
