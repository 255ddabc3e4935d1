from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.engine import NotFoundError
from app.repositories import SqlRosterProvider
from app.api.schemas import TeamCreate, TeamResponse, PlayerCreate, PlayerResponse

router = APIRouter(prefix="/teams", tags=["Roster"])


@router.post("", response_model=TeamResponse)
def create_team(request: TeamCreate, db: Session = Depends(get_db)):
    """Register a team"""
    return SqlRosterProvider(db).add_team(request.name, request.short_name, request.logo_url)


@router.get("", response_model=List[TeamResponse])
def list_teams(db: Session = Depends(get_db)):
    return SqlRosterProvider(db).list_teams()


@router.post("/{team_id}/players", response_model=PlayerResponse)
def add_player(team_id: int, request: PlayerCreate, db: Session = Depends(get_db)):
    """Register a player in a team's squad"""
    try:
        return SqlRosterProvider(db).add_player(team_id, request.name, request.role)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{team_id}/players", response_model=List[PlayerResponse])
def list_players(team_id: int, db: Session = Depends(get_db)):
    try:
        return SqlRosterProvider(db).list_players(team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
