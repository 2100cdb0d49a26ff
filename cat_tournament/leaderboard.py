"""
Leaderboard ordering over rating entries.
"""

from collections.abc import Iterable

from .models import RatingEntry

LEADERBOARD_SIZE = 5


def ranked_entries(entries: Iterable[RatingEntry]) -> list[RatingEntry]:
    """Entries that have played at least once, best rating first."""
    played = [entry for entry in entries if entry.matchups > 0]
    # Ties: more wins first, then image id for a stable order
    return sorted(played, key=lambda e: (-e.rating, -e.wins, e.image_id))


def top_entries(entries: Iterable[RatingEntry], limit: int = LEADERBOARD_SIZE) -> list[RatingEntry]:
    return ranked_entries(entries)[:limit]


def rank_of(entries: Iterable[RatingEntry], image_id: str) -> int:
    """1-based leaderboard position of image_id; 1 if it is not ranked."""
    for position, entry in enumerate(ranked_entries(entries), 1):
        if entry.image_id == image_id:
            return position
    return 1
