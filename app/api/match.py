from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional, List

from app.database import get_db
from app.engine import (
    InningsController, ScoringError, InvalidStateError, UnassignedPlayersError, NotFoundError,
)
from app.engine.state import BallEvent, Match, MatchStatus
from app.repositories import SqlMatchRepository, SqlRosterProvider
from app.services import ScoringService
from app.api.schemas import (
    MatchCreate, MatchResponse, MatchSummary, StartMatchRequest, AssignPlayersRequest,
    BallRequest, ScoreboardResponse, BatsmanStatsResponse, BowlerStatsResponse, TeamBrief,
)

router = APIRouter(prefix="/matches", tags=["Live Scoring"])


def get_service(db: Session = Depends(get_db)) -> ScoringService:
    return ScoringService(SqlMatchRepository(db), SqlRosterProvider(db))


def _http_error(e: ScoringError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (InvalidStateError, UnassignedPlayersError)):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


def _score_line(match: Match, number: int) -> str:
    innings = match.innings[number - 1]
    team = match.team(innings.batting_team_id)
    return f"{team.short_name or team.name} {innings.runs}/{innings.wickets} ({innings.overs_display})"


def _scoreboard(match: Match) -> ScoreboardResponse:
    innings = match.current
    if innings is None:
        raise HTTPException(status_code=409, detail="Match has not started")

    striker = innings.batsman(innings.striker_id) if innings.striker_id else None
    non_striker = innings.batsman(innings.non_striker_id) if innings.non_striker_id else None
    bowler = innings.bowler(innings.current_bowler_id) if innings.current_bowler_id else None
    required_rate = innings.required_rate(match.max_overs)

    return ScoreboardResponse(
        match_id=match.id,
        status=match.status,
        innings=match.current_innings,
        batting_team_name=match.team(innings.batting_team_id).name,
        bowling_team_name=match.team(innings.bowling_team_id).name,
        runs=innings.runs,
        wickets=innings.wickets,
        overs=innings.overs_display,
        extras=innings.extras,
        run_rate=round(innings.run_rate, 2),
        target=innings.target,
        required_rate=round(required_rate, 2) if required_rate is not None else None,
        balls_remaining=innings.balls_remaining(match.max_overs),
        striker=BatsmanStatsResponse.model_validate(striker) if striker else None,
        non_striker=BatsmanStatsResponse.model_validate(non_striker) if non_striker else None,
        bowler=BowlerStatsResponse.model_validate(bowler) if bowler else None,
        this_over=[b.label for b in innings.this_over.balls] if innings.this_over else [],
        innings_complete=InningsController.is_innings_complete(match),
        first_innings_score=_score_line(match, 1) if match.current_innings == 2 else None,
        result_summary=match.result_summary,
    )


@router.post("", response_model=MatchResponse)
def schedule_match(request: MatchCreate, service: ScoringService = Depends(get_service)):
    """Schedule a match between two registered teams"""
    try:
        match = service.schedule_match(
            request.team_a_id,
            request.team_b_id,
            max_overs=request.max_overs,
            venue=request.venue,
            start_time=request.start_time,
        )
    except ScoringError as e:
        raise _http_error(e)
    return MatchResponse.model_validate(match)


@router.get("", response_model=List[MatchSummary])
def list_matches(status: Optional[MatchStatus] = None, service: ScoringService = Depends(get_service)):
    """Spectator list of matches with their innings scores"""
    return [
        MatchSummary(
            id=m.id,
            team_a=TeamBrief.model_validate(m.team_a),
            team_b=TeamBrief.model_validate(m.team_b),
            status=m.status,
            current_innings=m.current_innings,
            scores=[_score_line(m, n) for n in range(1, len(m.innings) + 1)],
            result_summary=m.result_summary,
        )
        for m in service.list_matches(status)
    ]


@router.get("/{match_id}", response_model=MatchResponse)
def get_match(match_id: int, service: ScoringService = Depends(get_service)):
    """Full match state including scorecards and over history"""
    try:
        match = service.get_match(match_id)
    except ScoringError as e:
        raise _http_error(e)
    return MatchResponse.model_validate(match)


@router.get("/{match_id}/scoreboard", response_model=ScoreboardResponse)
def get_scoreboard(match_id: int, service: ScoringService = Depends(get_service)):
    """Live scoreboard for the innings in progress"""
    try:
        match = service.get_match(match_id)
    except ScoringError as e:
        raise _http_error(e)
    return _scoreboard(match)


@router.post("/{match_id}/start", response_model=ScoreboardResponse)
def start_match(match_id: int, request: StartMatchRequest, service: ScoringService = Depends(get_service)):
    """Open the first innings"""
    try:
        match = service.start_match(match_id, request.batting_team_id)
    except ScoringError as e:
        raise _http_error(e)
    return _scoreboard(match)


@router.post("/{match_id}/players", response_model=ScoreboardResponse)
def assign_players(match_id: int, request: AssignPlayersRequest, service: ScoringService = Depends(get_service)):
    """Set the striker, non-striker and/or bowler"""
    try:
        match = service.assign_players(
            match_id,
            striker_id=request.striker_id,
            non_striker_id=request.non_striker_id,
            current_bowler_id=request.current_bowler_id,
        )
    except ScoringError as e:
        raise _http_error(e)
    return _scoreboard(match)


@router.post("/{match_id}/ball", response_model=ScoreboardResponse)
def record_ball(match_id: int, request: BallRequest, service: ScoringService = Depends(get_service)):
    """Record one delivery"""
    try:
        ball = BallEvent(
            runs=request.runs,
            is_wicket=request.is_wicket,
            extra_type=request.extra_type,
            wicket_type=request.wicket_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    try:
        match = service.record_ball(match_id, ball)
    except ScoringError as e:
        raise _http_error(e)
    return _scoreboard(match)


@router.post("/{match_id}/innings/end", response_model=ScoreboardResponse)
def end_innings(match_id: int, service: ScoringService = Depends(get_service)):
    """Close the first innings and start the chase"""
    try:
        match = service.end_innings(match_id)
    except ScoringError as e:
        raise _http_error(e)
    return _scoreboard(match)


@router.post("/{match_id}/complete", response_model=MatchResponse)
def complete_match(match_id: int, service: ScoringService = Depends(get_service)):
    """Settle the result after the second innings"""
    try:
        match = service.complete_match(match_id)
    except ScoringError as e:
        raise _http_error(e)
    return MatchResponse.model_validate(match)
