"""
Roster lookups: teams and players by id.
"""
from dataclasses import dataclass
from typing import Optional, Dict, List

from sqlalchemy.orm import Session

from app.engine.errors import NotFoundError
from app.models.player import Player, PlayerRole
from app.models.team import Team


class RosterProvider:
    """Interface the scoring core uses to resolve players"""

    def get_player(self, player_id: int):
        raise NotImplementedError

    def get_team(self, team_id: int):
        raise NotImplementedError


class SqlRosterProvider(RosterProvider):
    def __init__(self, db: Session):
        self.db = db

    def get_player(self, player_id: int) -> Player:
        player = self.db.get(Player, player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    def get_team(self, team_id: int) -> Team:
        team = self.db.get(Team, team_id)
        if team is None:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    def list_teams(self) -> List[Team]:
        return self.db.query(Team).order_by(Team.id).all()

    def list_players(self, team_id: int) -> List[Player]:
        team = self.get_team(team_id)
        return sorted(team.players, key=lambda p: p.id)

    def add_team(self, name: str, short_name: str, logo_url: Optional[str] = None) -> Team:
        team = Team(name=name, short_name=short_name, logo_url=logo_url)
        self.db.add(team)
        self.db.commit()
        self.db.refresh(team)
        return team

    def add_player(self, team_id: int, name: str, role: Optional[PlayerRole] = None) -> Player:
        team = self.get_team(team_id)
        player = Player(name=name, role=role, team=team)
        self.db.add(player)
        self.db.commit()
        self.db.refresh(player)
        return player


@dataclass
class RosterPlayer:
    id: int
    name: str
    team_id: Optional[int] = None


@dataclass
class RosterTeam:
    id: int
    name: str
    short_name: str = ""


class InMemoryRosterProvider(RosterProvider):
    """Dictionary-backed roster for tests and scripted sessions"""

    def __init__(self, teams: Optional[List[RosterTeam]] = None, players: Optional[List[RosterPlayer]] = None):
        self.teams: Dict[int, RosterTeam] = {t.id: t for t in teams or []}
        self.players: Dict[int, RosterPlayer] = {p.id: p for p in players or []}

    def get_player(self, player_id: int) -> RosterPlayer:
        try:
            return self.players[player_id]
        except KeyError:
            raise NotFoundError(f"Player {player_id} not found") from None

    def get_team(self, team_id: int) -> RosterTeam:
        try:
            return self.teams[team_id]
        except KeyError:
            raise NotFoundError(f"Team {team_id} not found") from None
