"""
Tests for the scoring service: the caller-side ceilings and a full match flow.
"""
import pytest

from app.engine import InvalidStateError, UnassignedPlayersError, NotFoundError
from app.engine.state import BallEvent, MatchStatus, TIED
from app.repositories import InMemoryMatchRepository, InMemoryRosterProvider
from app.repositories.roster import RosterPlayer, RosterTeam
from app.services import ScoringService


@pytest.fixture
def service():
    roster = InMemoryRosterProvider(
        teams=[RosterTeam(1, "Regina Royals", "RR"), RosterTeam(2, "Saskatoon Stars", "SS")],
        players=[
            RosterPlayer(1, "Amit Patel", 1),
            RosterPlayer(2, "Rahul Sharma", 1),
            RosterPlayer(3, "Dev Shah", 1),
            RosterPlayer(11, "Sanjay Varma", 2),
            RosterPlayer(12, "Kiran Rao", 2),
            RosterPlayer(13, "Vijay Nair", 2),
            RosterPlayer(21, "Mohan Iyer", 1),
        ],
    )
    return ScoringService(InMemoryMatchRepository(), roster)


def start_two_over_match(service) -> int:
    match = service.schedule_match(1, 2, max_overs=2, venue="Regina")
    service.start_match(match.id, batting_team_id=1)
    service.assign_players(match.id, striker_id=1, non_striker_id=2, current_bowler_id=11)
    return match.id


class TestSchedule:
    def test_scheduled_match_is_upcoming(self, service):
        match = service.schedule_match(1, 2, max_overs=10)
        assert match.id == 1
        assert match.status == MatchStatus.UPCOMING
        assert match.innings == []
        assert match.max_overs == 10
        assert match.team_a.short_name == "RR"

    def test_default_overs_from_settings(self, service):
        assert service.schedule_match(1, 2).max_overs == 20

    def test_zero_overs_rejected(self, service):
        with pytest.raises(InvalidStateError):
            service.schedule_match(1, 2, max_overs=0)

    def test_team_cannot_play_itself(self, service):
        with pytest.raises(InvalidStateError):
            service.schedule_match(1, 1)

    def test_unknown_team(self, service):
        with pytest.raises(NotFoundError):
            service.schedule_match(1, 5)

    def test_list_filters_by_status(self, service):
        service.schedule_match(1, 2)
        live_id = start_two_over_match(service)
        live = service.list_matches(MatchStatus.LIVE)
        assert [m.id for m in live] == [live_id]
        assert len(service.list_matches()) == 2


class TestRecordBall:
    def test_ball_is_persisted(self, service):
        match_id = start_two_over_match(service)
        service.record_ball(match_id, BallEvent(runs=4))
        assert service.get_match(match_id).current.runs == 4

    def test_refuses_ball_after_overs_used_up(self, service):
        match_id = start_two_over_match(service)
        for _ in range(12):
            service.record_ball(match_id, BallEvent(runs=0))
        with pytest.raises(InvalidStateError):
            service.record_ball(match_id, BallEvent(runs=0))
        assert service.get_match(match_id).current.overs == 2

    def test_dismissed_striker_must_be_replaced(self, service):
        match_id = start_two_over_match(service)
        service.record_ball(match_id, BallEvent(is_wicket=True, wicket_type="bowled"))
        with pytest.raises(UnassignedPlayersError):
            service.record_ball(match_id, BallEvent(runs=1))

        service.assign_players(match_id, striker_id=3)
        match = service.record_ball(match_id, BallEvent(runs=1))
        assert match.current.batsman(3).runs == 1
        assert match.current.wickets == 1

    def test_bowler_change_does_not_replace_batsman(self, service):
        match_id = start_two_over_match(service)
        service.record_ball(match_id, BallEvent(is_wicket=True))
        service.assign_players(match_id, current_bowler_id=12)
        with pytest.raises(UnassignedPlayersError):
            service.record_ball(match_id, BallEvent(runs=1))

    def test_dismissed_batsman_may_be_reselected(self, service):
        match_id = start_two_over_match(service)
        service.record_ball(match_id, BallEvent(is_wicket=True))
        service.assign_players(match_id, striker_id=1)
        match = service.record_ball(match_id, BallEvent(runs=2))
        assert match.current.batsman(1).runs == 2

    def test_dismissed_batsman_rotated_back_on_strike(self, service):
        match_id = start_two_over_match(service)
        service.record_ball(match_id, BallEvent(is_wicket=True))
        service.assign_players(match_id, striker_id=2, non_striker_id=1)
        match = service.record_ball(match_id, BallEvent(runs=1))
        assert match.current.striker_id == 1
        match = service.record_ball(match_id, BallEvent(runs=4))
        assert match.current.batsman(1).runs == 4

    def test_refuses_ball_before_start(self, service):
        match = service.schedule_match(1, 2)
        with pytest.raises(InvalidStateError):
            service.record_ball(match.id, BallEvent(runs=1))

    def test_unknown_match(self, service):
        with pytest.raises(NotFoundError):
            service.record_ball(42, BallEvent(runs=1))


class TestFullMatch:
    def test_chase_completes_with_result(self, service):
        match_id = start_two_over_match(service)
        # 1st innings: 4 4 1 | 0 0 0 then a new over 6 0 0 0 0 0 = 15
        for runs in [4, 4, 1, 0, 0, 0]:
            service.record_ball(match_id, BallEvent(runs=runs))
        service.assign_players(match_id, current_bowler_id=12)
        for runs in [6, 0, 0, 0, 0, 0]:
            service.record_ball(match_id, BallEvent(runs=runs))
        assert service.get_match(match_id).current.runs == 15

        match = service.end_innings(match_id)
        assert match.current.target == 16
        assert match.current.batting_team_id == 2

        service.assign_players(match_id, striker_id=12, non_striker_id=13, current_bowler_id=21)
        for runs in [6, 6, 2, 2]:
            service.record_ball(match_id, BallEvent(runs=runs))
        with pytest.raises(InvalidStateError):
            service.record_ball(match_id, BallEvent(runs=1))

        match = service.complete_match(match_id)
        assert match.status == MatchStatus.COMPLETED
        assert match.winner_id == 2
        assert match.result_summary == "Saskatoon Stars won by 10 wickets"

    def test_tie(self, service):
        match_id = start_two_over_match(service)
        service.record_ball(match_id, BallEvent(runs=4))
        service.end_innings(match_id)
        service.assign_players(match_id, striker_id=12, non_striker_id=13, current_bowler_id=21)
        service.record_ball(match_id, BallEvent(runs=4))
        match = service.complete_match(match_id)
        assert match.winner_id == TIED
        assert match.is_tie
