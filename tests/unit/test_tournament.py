"""Tests for dilemma.engine.tournament.

Tests cover:
- Lower-triangular match grid construction
- get_match() index validation
- get_score() aggregation across both sides of the grid
- standings(), scores(), from_config()
"""

import pytest

from dilemma.config import MatchConfig
from dilemma.engine.match import Match
from dilemma.engine.tournament import Tournament
from dilemma.errors import InvalidArgument
from dilemma.strategies import Alternator, always_cooperate, always_defect, grim_trigger, tit_for_tat


@pytest.fixture
def trio():
    """Cooperator, defector and tit-for-tat, 10 rounds each."""
    return Tournament([always_cooperate, always_defect, tit_for_tat], 10)


def play_all(tournament: Tournament) -> None:
    for _, _, match in tournament.matches():
        match.play_match_sync()


# =============================================================================
# Construction Tests
# =============================================================================


class TestTournamentConstruction:
    """Tests for the match grid."""

    @pytest.mark.parametrize("size, expected", [(0, 0), (1, 0), (2, 1), (4, 6), (6, 15)])
    def test_match_count(self, size, expected):
        tournament = Tournament([always_cooperate] * size, 5)
        assert tournament.size == size
        assert tournament.num_matches == expected
        assert len(list(tournament.matches())) == expected

    def test_grid_is_lower_triangular(self):
        tournament = Tournament([always_cooperate] * 4, 5)
        assert [(i, j) for i, j, _ in tournament.matches()] == [
            (1, 0),
            (2, 0),
            (2, 1),
            (3, 0),
            (3, 1),
            (3, 2),
        ]

    def test_matches_are_distinct(self, trio):
        matches = [m for _, _, m in trio.matches()]
        assert len({id(m) for m in matches}) == 3
        assert all(isinstance(m, Match) for m in matches)

    def test_higher_index_is_player1(self, trio):
        match = trio.get_match(2, 1)
        assert match.player1_name == "Tit for Tat"
        assert match.player2_name == "Scumbag Steve"

    def test_round_limit_shared(self, trio):
        assert all(m.round_limit == 10 for _, _, m in trio.matches())

    def test_invalid_round_limit(self):
        with pytest.raises(InvalidArgument):
            Tournament([always_cooperate, always_defect], 0)
        with pytest.raises(InvalidArgument):
            Tournament([], -1)

    def test_from_config(self, monkeypatch):
        monkeypatch.setenv("DILEMMA_ROUNDS", "7")
        tournament = Tournament.from_config([always_cooperate, always_defect])
        assert tournament.get_match(1, 0).round_limit == 7

    def test_from_explicit_config(self):
        tournament = Tournament.from_config([always_cooperate, always_defect], MatchConfig(rounds=3))
        assert tournament.get_match(1, 0).round_limit == 3


# =============================================================================
# get_match Tests
# =============================================================================


class TestGetMatch:
    """Tests for get_match index validation."""

    def test_valid_lookup(self, trio):
        assert trio.get_match(1, 0) is trio.get_match(1, 0)
        assert trio.get_match(2, 0) is not trio.get_match(2, 1)

    @pytest.mark.parametrize(
        "i, j",
        [
            (0, 1),  # wrong order
            (1, 1),  # self-match
            (3, 0),  # i == size
            (5, 2),
            (1, -1),
            (-1, -2),
            (1.0, 0),
            (1, 0.0),
            ("1", 0),
            (True, False),
        ],
    )
    def test_invalid_lookup(self, trio, i, j):
        with pytest.raises(InvalidArgument, match="invalid argument"):
            trio.get_match(i, j)


# =============================================================================
# Score Aggregation Tests
# =============================================================================


class TestScores:
    """Tests for per-player score aggregation."""

    def test_scores_start_at_zero(self, trio):
        assert trio.scores() == [0, 0, 0]

    def test_scores_after_full_play(self, trio):
        play_all(trio)

        # Defector vs cooperator: 50-0. TFT vs cooperator: 30-30. TFT vs defector: 9-14.
        assert trio.get_score(0) == 0 + 30
        assert trio.get_score(1) == 50 + 14
        assert trio.get_score(2) == 30 + 9
        assert trio.is_complete()

    def test_score_counts_both_sides_of_grid(self):
        tournament = Tournament([always_defect, always_cooperate, always_cooperate], 2)
        play_all(tournament)

        # Player 0 is player 2 in both of its matches (column 0).
        assert tournament.get_score(0) == 10 + 10
        # Player 1 is player 1 against player 0 and player 2 against player 2.
        assert tournament.get_score(1) == 0 + 6
        assert tournament.get_score(2) == 0 + 6

    def test_scores_reflect_unfinished_matches(self, trio):
        trio.get_match(1, 0).play_round_sync()
        assert trio.scores() == [0, 5, 0]
        assert not trio.is_complete()
        trio.get_match(1, 0).close()

    def test_forfeit_counts_before_play(self, broken_factory):
        tournament = Tournament([broken_factory, always_cooperate, grim_trigger], 4)

        assert tournament.scores() == [0, 20, 20]
        assert tournament.get_match(1, 0).is_done
        assert not tournament.get_match(2, 1).is_done

    def test_standings(self, trio):
        play_all(trio)
        assert trio.standings() == [
            ("Scumbag Steve", 64),
            ("Tit for Tat", 39),
            ("Good Guy Greg", 30),
        ]

    def test_player_name(self):
        tournament = Tournament([Alternator, tit_for_tat], 1)
        assert tournament.player_name(0) == "Alternator"
        assert tournament.player_name(1) == "Tit for Tat"

    @pytest.mark.parametrize("i", [-1, 3, 1.5, None])
    def test_invalid_player_index(self, trio, i):
        with pytest.raises(InvalidArgument):
            trio.get_score(i)
