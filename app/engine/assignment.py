import copy
from typing import Optional

from app.engine.errors import InvalidStateError
from app.engine.state import BatsmanStats, BowlerStats, Match, MatchStatus


class PlayerAssignment:
    """
    Binds the striker, non-striker and bowler to the open innings.

    A stats line is created the first time a player is bound, with the name
    taken from the roster. Team membership is not checked here.
    """

    def __init__(self, roster):
        self.roster = roster

    def assign_players(
        self,
        match: Match,
        striker_id: Optional[int] = None,
        non_striker_id: Optional[int] = None,
        current_bowler_id: Optional[int] = None,
    ) -> Match:
        if match.status == MatchStatus.COMPLETED:
            raise InvalidStateError("Match is completed")
        innings = match.current
        if innings is None:
            raise InvalidStateError("No innings is open for this match")

        # Resolve every name first so a missing player changes nothing
        new_batsmen = []
        for player_id in (striker_id, non_striker_id):
            if player_id is None or innings.batsman(player_id) is not None:
                continue
            if any(s.player_id == player_id for s in new_batsmen):
                continue
            player = self.roster.get_player(player_id)
            new_batsmen.append(BatsmanStats(player_id=player_id, name=player.name))

        new_bowler = None
        if current_bowler_id is not None and innings.bowler(current_bowler_id) is None:
            player = self.roster.get_player(current_bowler_id)
            new_bowler = BowlerStats(player_id=current_bowler_id, name=player.name)

        match = copy.deepcopy(match)
        innings = match.current
        if striker_id is not None:
            innings.striker_id = striker_id
        if non_striker_id is not None:
            innings.non_striker_id = non_striker_id
        if striker_id is not None or non_striker_id is not None:
            innings.awaiting_batsman = False
        if current_bowler_id is not None:
            innings.current_bowler_id = current_bowler_id
        innings.batsmen_stats.extend(new_batsmen)
        if new_bowler:
            innings.bowler_stats.append(new_bowler)
        return match
