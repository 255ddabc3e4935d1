"""
Tests for binding batters and bowlers to the open innings.
"""
import copy

import pytest

from app.engine import InningsController, PlayerAssignment, InvalidStateError, NotFoundError
from app.engine.state import Match, MatchStatus, TeamRef
from app.repositories.roster import InMemoryRosterProvider, RosterPlayer


@pytest.fixture
def assignment():
    roster = InMemoryRosterProvider(players=[
        RosterPlayer(1, "Amit Patel", 1),
        RosterPlayer(2, "Rahul Sharma", 1),
        RosterPlayer(3, "Dev Shah", 1),
        RosterPlayer(11, "Sanjay Varma", 2),
    ])
    return PlayerAssignment(roster)


@pytest.fixture
def match():
    scheduled = Match(id=3, team_a=TeamRef(1, "Regina Royals"), team_b=TeamRef(2, "Saskatoon Stars"))
    return InningsController.start_match(scheduled, batting_team_id=1)


class TestAssignPlayers:
    def test_creates_stats_lines_with_roster_names(self, assignment, match):
        match = assignment.assign_players(match, striker_id=1, non_striker_id=2, current_bowler_id=11)
        innings = match.current
        assert (innings.striker_id, innings.non_striker_id, innings.current_bowler_id) == (1, 2, 11)
        assert [s.name for s in innings.batsmen_stats] == ["Amit Patel", "Rahul Sharma"]
        assert [s.name for s in innings.bowler_stats] == ["Sanjay Varma"]
        assert innings.batsman(1).runs == 0
        assert innings.bowler(11).overs == 0

    def test_reassigning_is_idempotent(self, assignment, match):
        match = assignment.assign_players(match, striker_id=1, non_striker_id=2, current_bowler_id=11)
        match = assignment.assign_players(match, striker_id=1, current_bowler_id=11)
        assert len(match.current.batsmen_stats) == 2
        assert len(match.current.bowler_stats) == 1

    def test_only_given_fields_change(self, assignment, match):
        match = assignment.assign_players(match, striker_id=1, non_striker_id=2)
        match = assignment.assign_players(match, current_bowler_id=11)
        assert match.current.striker_id == 1
        assert match.current.non_striker_id == 2
        assert match.current.current_bowler_id == 11

    def test_new_batter_keeps_old_lines(self, assignment, match):
        match = assignment.assign_players(match, striker_id=1, non_striker_id=2)
        match.current.batsman(1).runs = 17
        match = assignment.assign_players(match, striker_id=3)
        assert [s.player_id for s in match.current.batsmen_stats] == [1, 2, 3]
        assert match.current.batsman(1).runs == 17

    def test_same_id_at_both_ends_creates_one_line(self, assignment, match):
        match = assignment.assign_players(match, striker_id=1, non_striker_id=1)
        assert len(match.current.batsmen_stats) == 1

    def test_batter_assignment_clears_awaiting_batsman(self, assignment, match):
        match.current.awaiting_batsman = True
        assert assignment.assign_players(match, non_striker_id=3).current.awaiting_batsman is False

    def test_bowler_change_keeps_awaiting_batsman(self, assignment, match):
        match.current.awaiting_batsman = True
        assert assignment.assign_players(match, current_bowler_id=11).current.awaiting_batsman is True

    def test_unknown_player_changes_nothing(self, assignment, match):
        before = copy.deepcopy(match)
        with pytest.raises(NotFoundError):
            assignment.assign_players(match, striker_id=1, non_striker_id=99)
        assert match == before

    def test_input_not_mutated(self, assignment, match):
        before = copy.deepcopy(match)
        assignment.assign_players(match, striker_id=1, non_striker_id=2, current_bowler_id=11)
        assert match == before

    def test_requires_open_innings(self, assignment):
        upcoming = Match(team_a=TeamRef(1, "A"), team_b=TeamRef(2, "B"))
        with pytest.raises(InvalidStateError):
            assignment.assign_players(upcoming, striker_id=1)

    def test_rejected_after_completion(self, assignment, match):
        match.status = MatchStatus.COMPLETED
        with pytest.raises(InvalidStateError):
            assignment.assign_players(match, striker_id=1)
