"""
Errors raised by the scoring core and its collaborators
"""


class ScoringError(Exception):
    """Base class for scoring failures"""


class InvalidStateError(ScoringError):
    """Operation attempted against a match or innings in the wrong state"""


class UnassignedPlayersError(ScoringError):
    """A ball was recorded without a striker, non-striker or bowler"""

    def __init__(self, missing: list):
        self.missing = missing
        super().__init__(f"Assign players before the next ball: {', '.join(missing)}")


class NotFoundError(ScoringError):
    """A match, team or player id could not be resolved"""


class StorageError(ScoringError):
    """The match repository could not persist a change"""
