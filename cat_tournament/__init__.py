"""
Cat Tournament - Photo Bracket Game with Elo Ratings

Runs single-elimination brackets of cat photos, where a player picks the
winner of each matchup against the clock, and keeps a per-photo Elo rating
that accumulates into a leaderboard across sessions.
"""

from .models import Photo, RatingEntry, Matchup, RoundState, FinaleResult
from .interfaces import ImageCatalog, RatingStore, Presenter, Selector
from .orchestrator import GameSession, GameState, Orchestrator, RunConfig

__version__ = "0.1.0"
__all__ = [
    "Photo",
    "RatingEntry",
    "Matchup",
    "RoundState",
    "FinaleResult",
    "ImageCatalog",
    "RatingStore",
    "Presenter",
    "Selector",
    "GameSession",
    "GameState",
    "Orchestrator",
    "RunConfig",
]
