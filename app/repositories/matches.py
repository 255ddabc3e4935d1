"""
Match storage behind a single interface.

The scoring service only sees add/load/save/list; whether matches live in
SQLite or a dict is decided when the repository is constructed.
"""
import copy
import itertools
import logging
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.engine.errors import NotFoundError, StorageError
from app.engine.state import Inning, Match, TeamRef
from app.models.match import Match as MatchRow, Innings as InningsRow

logger = logging.getLogger(__name__)


class MatchRepository:
    """Interface for durable match storage"""

    def add(self, match: Match) -> Match:
        raise NotImplementedError

    def load(self, match_id: int) -> Match:
        raise NotImplementedError

    def save(self, match: Match) -> None:
        raise NotImplementedError

    def list(self) -> List[Match]:
        raise NotImplementedError


class InMemoryMatchRepository(MatchRepository):
    def __init__(self):
        self._matches: Dict[int, Match] = {}
        self._ids = itertools.count(1)

    def add(self, match: Match) -> Match:
        match = copy.deepcopy(match)
        match.id = next(self._ids)
        self._matches[match.id] = copy.deepcopy(match)
        return match

    def load(self, match_id: int) -> Match:
        if match_id not in self._matches:
            raise NotFoundError(f"Match {match_id} not found")
        return copy.deepcopy(self._matches[match_id])

    def save(self, match: Match) -> None:
        if match.id not in self._matches:
            raise NotFoundError(f"Match {match.id} not found")
        self._matches[match.id] = copy.deepcopy(match)

    def list(self) -> List[Match]:
        return [copy.deepcopy(m) for _, m in sorted(self._matches.items())]


def _innings_to_domain(row: InningsRow) -> Inning:
    return Inning.from_dict({
        "batting_team_id": row.batting_team_id,
        "bowling_team_id": row.bowling_team_id,
        "runs": row.total_runs,
        "wickets": row.wickets,
        "overs": row.overs_completed,
        "balls": row.balls_in_current_over,
        "extras": row.extras,
        "target": row.target,
        "striker_id": row.striker_id,
        "non_striker_id": row.non_striker_id,
        "current_bowler_id": row.current_bowler_id,
        "awaiting_batsman": bool(row.awaiting_batsman),
        "batsmen_stats": row.batsmen_stats or [],
        "bowler_stats": row.bowler_stats or [],
        "overs_history": row.overs_history or [],
    })


def _to_domain(row: MatchRow) -> Match:
    return Match(
        id=row.id,
        team_a=TeamRef(id=row.team1.id, name=row.team1.name, short_name=row.team1.short_name),
        team_b=TeamRef(id=row.team2.id, name=row.team2.name, short_name=row.team2.short_name),
        status=row.status,
        current_innings=row.current_innings,
        max_overs=row.max_overs,
        innings=[_innings_to_domain(i) for i in row.innings],
        winner_id=row.winner_id,
        result_summary=row.result_summary,
        venue=row.venue,
        start_time=row.start_time,
    )


def _copy_innings(row: InningsRow, innings: Inning):
    data = innings.to_dict()
    row.batting_team_id = innings.batting_team_id
    row.bowling_team_id = innings.bowling_team_id
    row.total_runs = innings.runs
    row.wickets = innings.wickets
    row.overs_completed = innings.overs
    row.balls_in_current_over = innings.balls
    row.extras = innings.extras
    row.target = innings.target
    row.striker_id = innings.striker_id
    row.non_striker_id = innings.non_striker_id
    row.current_bowler_id = innings.current_bowler_id
    row.awaiting_batsman = innings.awaiting_batsman
    row.batsmen_stats = data["batsmen_stats"]
    row.bowler_stats = data["bowler_stats"]
    row.overs_history = data["overs_history"]


def _copy_match(row: MatchRow, match: Match):
    row.team1_id = match.team_a.id
    row.team2_id = match.team_b.id
    row.venue = match.venue
    row.start_time = match.start_time
    row.max_overs = match.max_overs
    row.status = match.status
    row.current_innings = match.current_innings
    row.winner_id = match.winner_id
    row.result_summary = match.result_summary

    existing = {i.innings_number: i for i in row.innings}
    for number, innings in enumerate(match.innings, start=1):
        innings_row = existing.get(number)
        if innings_row is None:
            innings_row = InningsRow(innings_number=number)
            row.innings.append(innings_row)
        _copy_innings(innings_row, innings)


class SqlMatchRepository(MatchRepository):
    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, match_id: int) -> MatchRow:
        row = self.db.get(MatchRow, match_id)
        if row is None:
            raise NotFoundError(f"Match {match_id} not found")
        return row

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to persist match: %s", e)
            raise StorageError(str(e)) from e

    def add(self, match: Match) -> Match:
        row = MatchRow()
        _copy_match(row, match)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return _to_domain(row)

    def load(self, match_id: int) -> Match:
        return _to_domain(self._get_row(match_id))

    def save(self, match: Match) -> None:
        row = self._get_row(match.id)
        _copy_match(row, match)
        self._commit()

    def list(self) -> List[Match]:
        return [_to_domain(row) for row in self.db.query(MatchRow).order_by(MatchRow.id).all()]
