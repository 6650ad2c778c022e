"""Tournament data access shared by the landing and profile pages."""

from .models import TopParticipant, Tournament, TournamentResult  # noqa: F401
from .services import TournamentService  # noqa: F401

__all__ = ["TopParticipant", "Tournament", "TournamentResult", "TournamentService"]
