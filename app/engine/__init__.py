from app.engine.scoring import ScoringEngine
from app.engine.innings import InningsController
from app.engine.assignment import PlayerAssignment
from app.engine.errors import (
    ScoringError, InvalidStateError, UnassignedPlayersError, NotFoundError, StorageError,
)

__all__ = [
    "ScoringEngine",
    "InningsController",
    "PlayerAssignment",
    "ScoringError",
    "InvalidStateError",
    "UnassignedPlayersError",
    "NotFoundError",
    "StorageError",
]
