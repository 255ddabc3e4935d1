"""
Scoring service - the caller around the scoring core.

Loads a match, runs one core operation, saves the result. The checks the
engine leaves to its caller live here: no balls once the innings is over,
and no balls while a dismissed striker is still at the crease.
"""
import logging
from datetime import datetime
from typing import Optional, List

from app.config import settings
from app.engine import (
    ScoringEngine, InningsController, PlayerAssignment,
    InvalidStateError, UnassignedPlayersError,
)
from app.engine.state import BallEvent, Match, MatchStatus, TeamRef

logger = logging.getLogger(__name__)


class ScoringService:
    def __init__(self, repository, roster):
        self.repository = repository
        self.roster = roster
        self.assignment = PlayerAssignment(roster)

    def _save(self, match: Match) -> Match:
        match.check_invariants()
        self.repository.save(match)
        return match

    def schedule_match(
        self,
        team_a_id: int,
        team_b_id: int,
        max_overs: Optional[int] = None,
        venue: str = "",
        start_time: Optional[datetime] = None,
    ) -> Match:
        """Create an UPCOMING match with no innings"""
        if team_a_id == team_b_id:
            raise InvalidStateError("A team cannot play itself")
        team_a = self.roster.get_team(team_a_id)
        team_b = self.roster.get_team(team_b_id)
        overs = settings.DEFAULT_MAX_OVERS if max_overs is None else max_overs
        if overs < 1:
            raise InvalidStateError(f"max_overs must be at least 1, got {overs}")

        match = self.repository.add(Match(
            team_a=TeamRef(id=team_a.id, name=team_a.name, short_name=team_a.short_name),
            team_b=TeamRef(id=team_b.id, name=team_b.name, short_name=team_b.short_name),
            max_overs=overs,
            venue=venue,
            start_time=start_time,
        ))
        logger.info("Scheduled match %s: %s vs %s (%s overs)", match.id, team_a.name, team_b.name, overs)
        return match

    def get_match(self, match_id: int) -> Match:
        return self.repository.load(match_id)

    def list_matches(self, status: Optional[MatchStatus] = None) -> List[Match]:
        matches = self.repository.list()
        if status is not None:
            matches = [m for m in matches if m.status == status]
        return matches

    def start_match(self, match_id: int, batting_team_id: int) -> Match:
        match = InningsController.start_match(self.repository.load(match_id), batting_team_id)
        logger.info("Match %s is live, team %s batting", match_id, batting_team_id)
        return self._save(match)

    def assign_players(
        self,
        match_id: int,
        striker_id: Optional[int] = None,
        non_striker_id: Optional[int] = None,
        current_bowler_id: Optional[int] = None,
    ) -> Match:
        match = self.assignment.assign_players(
            self.repository.load(match_id),
            striker_id=striker_id,
            non_striker_id=non_striker_id,
            current_bowler_id=current_bowler_id,
        )
        innings = match.current
        logger.info(
            "Match %s players: striker=%s non_striker=%s bowler=%s",
            match_id, innings.striker_id, innings.non_striker_id, innings.current_bowler_id,
        )
        return self._save(match)

    def record_ball(self, match_id: int, ball: BallEvent) -> Match:
        match = self.repository.load(match_id)

        if InningsController.is_innings_complete(match):
            logger.warning("Match %s: ball refused, innings %s is complete", match_id, match.current_innings)
            raise InvalidStateError("The innings is complete; end the innings before scoring")

        innings = match.current
        if innings is not None and innings.awaiting_batsman:
            logger.warning("Match %s: ball refused, awaiting a new batsman", match_id)
            raise UnassignedPlayersError(["new batsman after the wicket"])

        match = ScoringEngine.apply_ball(match, ball)
        innings = match.current
        if ball.is_wicket:
            logger.info(
                "Match %s: wicket, %s/%s (%s)",
                match_id, innings.runs, innings.wickets, innings.overs_display,
            )
        return self._save(match)

    def end_innings(self, match_id: int) -> Match:
        match = InningsController.end_first_innings(self.repository.load(match_id))
        logger.info("Match %s: first innings closed, target %s", match_id, match.current.target)
        return self._save(match)

    def complete_match(self, match_id: int) -> Match:
        match = InningsController.complete_match(self.repository.load(match_id))
        logger.info("Match %s completed: %s", match_id, match.result_summary)
        return self._save(match)

