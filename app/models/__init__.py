from app.models.player import Player
from app.models.team import Team
from app.models.match import Match, Innings

__all__ = [
    "Player",
    "Team",
    "Match",
    "Innings",
]
