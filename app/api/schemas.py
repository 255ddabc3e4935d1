"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.engine.state import ExtraType, MatchStatus, WicketType
from app.models.player import PlayerRole


# Roster Schemas
class TeamCreate(BaseModel):
    name: str
    short_name: str
    logo_url: Optional[str] = None


class TeamResponse(TeamCreate):
    id: int

    class Config:
        from_attributes = True


class PlayerCreate(BaseModel):
    name: str
    role: Optional[PlayerRole] = None


class PlayerResponse(PlayerCreate):
    id: int
    team_id: Optional[int] = None

    class Config:
        from_attributes = True


# Match Schemas
class MatchCreate(BaseModel):
    team_a_id: int
    team_b_id: int
    max_overs: Optional[int] = Field(default=None, ge=1)
    venue: str = ""
    start_time: Optional[datetime] = None


class StartMatchRequest(BaseModel):
    batting_team_id: int


class AssignPlayersRequest(BaseModel):
    striker_id: Optional[int] = None
    non_striker_id: Optional[int] = None
    current_bowler_id: Optional[int] = None


class BallRequest(BaseModel):
    runs: int = Field(default=0, ge=0, le=6)
    is_wicket: bool = False
    extra_type: ExtraType = ExtraType.NONE
    wicket_type: Optional[WicketType] = None


class TeamBrief(BaseModel):
    id: int
    name: str
    short_name: str

    class Config:
        from_attributes = True


class BatsmanStatsResponse(BaseModel):
    player_id: int
    name: str
    runs: int
    balls: int
    fours: int
    sixes: int
    is_out: bool
    dismissal: Optional[str] = None
    strike_rate: float

    class Config:
        from_attributes = True


class BowlerStatsResponse(BaseModel):
    player_id: int
    name: str
    overs: int
    balls: int
    runs: int
    wickets: int
    wides: int
    no_balls: int
    overs_display: str
    economy: float

    class Config:
        from_attributes = True


class BallRecordResponse(BaseModel):
    runs: int
    is_extra: bool
    extra_type: Optional[str] = None
    is_wicket: bool
    wicket_type: Optional[str] = None
    batsman_id: int
    bowler_id: int
    label: str

    class Config:
        from_attributes = True


class OverResponse(BaseModel):
    number: int
    runs: int
    balls: List[BallRecordResponse]

    class Config:
        from_attributes = True


class InningsResponse(BaseModel):
    batting_team_id: int
    bowling_team_id: int
    runs: int
    wickets: int
    overs: int
    balls: int
    extras: int
    target: Optional[int] = None
    overs_display: str
    run_rate: float
    striker_id: Optional[int] = None
    non_striker_id: Optional[int] = None
    current_bowler_id: Optional[int] = None
    awaiting_batsman: bool = False
    batsmen_stats: List[BatsmanStatsResponse]
    bowler_stats: List[BowlerStatsResponse]
    overs_history: List[OverResponse]

    class Config:
        from_attributes = True


class MatchResponse(BaseModel):
    id: int
    team_a: TeamBrief
    team_b: TeamBrief
    status: MatchStatus
    current_innings: int
    max_overs: int
    venue: str
    start_time: Optional[datetime] = None
    innings: List[InningsResponse]
    winner_id: Optional[int] = None
    result_summary: Optional[str] = None
    is_tie: bool

    class Config:
        from_attributes = True


class MatchSummary(BaseModel):
    """One line in the spectator match list"""
    id: int
    team_a: TeamBrief
    team_b: TeamBrief
    status: MatchStatus
    current_innings: int
    scores: List[str]
    result_summary: Optional[str] = None


class ScoreboardResponse(BaseModel):
    """Live view of the innings in progress"""
    match_id: int
    status: MatchStatus
    innings: int
    batting_team_name: str
    bowling_team_name: str
    runs: int
    wickets: int
    overs: str
    extras: int
    run_rate: float
    target: Optional[int] = None
    required_rate: Optional[float] = None
    balls_remaining: int
    striker: Optional[BatsmanStatsResponse] = None
    non_striker: Optional[BatsmanStatsResponse] = None
    bowler: Optional[BowlerStatsResponse] = None
    this_over: List[str]
    innings_complete: bool
    first_innings_score: Optional[str] = None
    result_summary: Optional[str] = None
