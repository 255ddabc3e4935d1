from app.services.scoring_service import ScoringService

__all__ = ["ScoringService"]
