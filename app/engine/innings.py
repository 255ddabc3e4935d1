import copy

from app.engine.errors import InvalidStateError, NotFoundError
from app.engine.state import (
    BALLS_PER_OVER, MAX_WICKETS, TIED, Inning, Match, MatchStatus,
)


class InningsController:
    """Opens innings, hands over between them and settles the result"""

    @staticmethod
    def start_match(match: Match, batting_team_id: int) -> Match:
        """Open the first innings with the given team batting"""
        if match.status != MatchStatus.UPCOMING or match.innings:
            raise InvalidStateError(f"Match has already started ({match.status.value})")
        batting_team = match.team(batting_team_id)
        if batting_team is None:
            raise NotFoundError(f"Team {batting_team_id} is not playing in this match")

        match = copy.deepcopy(match)
        match.innings.append(Inning(
            batting_team_id=batting_team.id,
            bowling_team_id=match.opponent_of(batting_team.id).id,
        ))
        match.current_innings = 1
        match.status = MatchStatus.LIVE
        return match

    @staticmethod
    def end_first_innings(match: Match) -> Match:
        """Close the first innings and open the second with the teams swapped"""
        if match.current_innings != 1 or len(match.innings) != 1:
            raise InvalidStateError("The first innings is not in progress")
        if match.status == MatchStatus.COMPLETED:
            raise InvalidStateError("Match is already completed")

        match = copy.deepcopy(match)
        first = match.innings[0]
        match.innings.append(Inning(
            batting_team_id=first.bowling_team_id,
            bowling_team_id=first.batting_team_id,
            target=first.runs + 1,
        ))
        match.current_innings = 2
        match.status = MatchStatus.LIVE
        return match

    @staticmethod
    def complete_match(match: Match) -> Match:
        """
        Settle the result from the two innings totals.

        Batting first and ahead wins by the run difference; batting second and
        ahead wins by the wickets in hand; level totals are a tie.
        """
        if match.current_innings != 2 or len(match.innings) != 2:
            raise InvalidStateError("The second innings has not been played")
        if match.status == MatchStatus.COMPLETED:
            raise InvalidStateError("Match is already completed")

        match = copy.deepcopy(match)
        first, second = match.innings
        if first.runs > second.runs:
            margin = first.runs - second.runs
            winner = match.team(first.batting_team_id)
            match.winner_id = winner.id
            match.result_summary = f"{winner.name} won by {margin} run{'s' if margin != 1 else ''}"
        elif second.runs > first.runs:
            margin = MAX_WICKETS - second.wickets
            winner = match.team(second.batting_team_id)
            match.winner_id = winner.id
            match.result_summary = f"{winner.name} won by {margin} wicket{'s' if margin != 1 else ''}"
        else:
            match.winner_id = TIED
            match.result_summary = "Match tied"
        match.status = MatchStatus.COMPLETED
        return match

    @staticmethod
    def is_innings_complete(match: Match) -> bool:
        """All out, overs used up, or the target reached"""
        innings = match.current
        if innings is None:
            return False
        if innings.wickets >= MAX_WICKETS:
            return True
        if innings.legal_balls >= match.max_overs * BALLS_PER_OVER:
            return True
        if innings.target is not None and innings.runs >= innings.target:
            return True
        return False
