from app.repositories.matches import MatchRepository, SqlMatchRepository, InMemoryMatchRepository
from app.repositories.roster import RosterProvider, SqlRosterProvider, InMemoryRosterProvider

__all__ = [
    "MatchRepository",
    "SqlMatchRepository",
    "InMemoryMatchRepository",
    "RosterProvider",
    "SqlRosterProvider",
    "InMemoryRosterProvider",
]
