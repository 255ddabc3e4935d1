import copy
import logging

from app.engine.errors import InvalidStateError, UnassignedPlayersError
from app.engine.state import (
    BALLS_PER_OVER, BallEvent, BallRecord, ExtraType, Inning, Match, MatchStatus, Over,
)

logger = logging.getLogger(__name__)


class ScoringEngine:
    """
    Turns ball events into match state.
    Every call works on a copy; the match passed in is left untouched.
    """

    @staticmethod
    def _open_innings(match: Match) -> Inning:
        if match.status == MatchStatus.COMPLETED:
            raise InvalidStateError("Match is completed, no more balls can be recorded")
        innings = match.current
        if innings is None:
            raise InvalidStateError("No innings is open for this match")
        return innings

    @staticmethod
    def _check_players(innings: Inning):
        missing = []
        if innings.striker_id is None:
            missing.append("striker")
        if innings.non_striker_id is None:
            missing.append("non-striker")
        if innings.current_bowler_id is None:
            missing.append("bowler")
        if missing:
            raise UnassignedPlayersError(missing)

    @classmethod
    def apply_ball(cls, match: Match, ball: BallEvent) -> Match:
        """Apply one delivery to the open innings and return the updated match"""
        cls._check_players(cls._open_innings(match))

        match = copy.deepcopy(match)
        innings = match.current
        if match.status == MatchStatus.UPCOMING:
            match.status = MatchStatus.LIVE

        striker = innings.batsman(innings.striker_id)
        bowler = innings.bowler(innings.current_bowler_id)
        penalty = ball.extra_type.penalty

        # Over number is fixed before the ball can complete it
        over_number = innings.overs + 1
        batsman_id = innings.striker_id

        # Wicket
        if ball.is_wicket:
            innings.wickets += 1
            innings.awaiting_batsman = True
            if striker:
                striker.is_out = True
                striker.dismissal = ball.wicket_type.value if ball.wicket_type else "out"

        # Score
        scored = 0 if ball.is_wicket else ball.runs
        innings.runs += scored + penalty
        if ball.extra_type in (ExtraType.BYE, ExtraType.LEG_BYE):
            innings.extras += scored
        innings.extras += penalty

        # Legal delivery
        over_complete = False
        if ball.is_legal:
            innings.balls += 1
            if innings.balls >= BALLS_PER_OVER:
                innings.overs += 1
                innings.balls = 0
                over_complete = True

        # Batter
        if striker and not ball.is_wicket and ball.extra_type != ExtraType.WIDE:
            striker.balls += 1
            if ball.extra_type in (ExtraType.NONE, ExtraType.NO_BALL):
                striker.runs += ball.runs
            if ball.extra_type == ExtraType.NONE:
                if ball.runs == 4:
                    striker.fours += 1
                if ball.runs == 6:
                    striker.sixes += 1

        # Bowler spell
        if bowler:
            bowler.runs += scored + penalty
            if ball.is_wicket:
                bowler.wickets += 1
            if ball.extra_type == ExtraType.WIDE:
                bowler.wides += 1
            elif ball.extra_type == ExtraType.NO_BALL:
                bowler.no_balls += 1
            if ball.is_legal:
                bowler.balls += 1
                if bowler.balls >= BALLS_PER_OVER:
                    bowler.overs += 1
                    bowler.balls = 0

        # Rotate strike on odd runs, and again at the end of the over
        if not ball.is_wicket:
            if ball.runs % 2 == 1:
                innings.striker_id, innings.non_striker_id = innings.non_striker_id, innings.striker_id
            if over_complete:
                innings.striker_id, innings.non_striker_id = innings.non_striker_id, innings.striker_id

        cls._record(innings, over_number, ball, batsman_id)

        logger.debug(
            "Ball %s: %s/%s (%s)",
            ball, innings.runs, innings.wickets, innings.overs_display,
        )
        return match

    @staticmethod
    def _record(innings: Inning, over_number: int, ball: BallEvent, batsman_id: int):
        """Append the ball to the over it was bowled in"""
        if not innings.overs_history or innings.overs_history[-1].number != over_number:
            innings.overs_history.append(Over(number=over_number))
        innings.overs_history[-1].balls.append(BallRecord(
            runs=ball.runs,
            is_extra=ball.extra_type != ExtraType.NONE,
            extra_type=ball.extra_type.value if ball.extra_type != ExtraType.NONE else None,
            is_wicket=ball.is_wicket,
            wicket_type=ball.wicket_type.value if ball.wicket_type else None,
            batsman_id=batsman_id,
            bowler_id=innings.current_bowler_id,
        ))
