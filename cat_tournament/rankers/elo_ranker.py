"""
Elo ranker implementation.

Fixed K-factor Elo with integer ratings. A timed-out matchup is scored as a
loss for both photos.
"""

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from ..constants import ELO_SCALE, K_FACTOR
from ..exceptions import ValidationError
from ..interfaces import RatingStore
from ..logging_config import get_logger
from ..models import RatingEntry


def expected_score(rating_a: float, rating_b: float) -> float:
    """Probability that a photo rated rating_a beats one rated rating_b."""
    return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / ELO_SCALE))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class EloRanker:
    """
    Elo ranker backed by a RatingStore.

    Holds no rating state of its own: entries are read fresh for every match
    and both sides are written back with a single bulk_set, so a failed write
    leaves neither side updated. Calls are not idempotent; resolving the same
    match twice applies the update twice.
    """

    def __init__(self, store: RatingStore, k_factor: int = K_FACTOR):
        """
        Initialize Elo ranker.

        Args:
            store: Rating store to read and persist entries
            k_factor: Maximum rating points exchanged per match
        """
        self.store: RatingStore = store
        self.k_factor: int = k_factor
        self.logger: Logger = get_logger("elo_ranker")

    def _fetch_pair(self, id_a: str, id_b: str) -> tuple[RatingEntry, RatingEntry]:
        if id_a == id_b:
            raise ValidationError(f"A photo cannot play itself: {id_a}")
        return self.store.get_rating(id_a), self.store.get_rating(id_b)

    def record_win(self, winner_id: str, loser_id: str) -> tuple[int, int]:
        """
        Apply a decisive result.

        Returns:
            (new winner rating, new loser rating)
        """
        winner, loser = self._fetch_pair(winner_id, loser_id)
        old_winner, old_loser = winner.rating, loser.rating

        expected_win = expected_score(old_winner, old_loser)
        expected_lose = expected_score(old_loser, old_winner)

        winner.rating = _round_half_up(old_winner + self.k_factor * (1 - expected_win))
        loser.rating = _round_half_up(old_loser + self.k_factor * (0 - expected_lose))
        winner.wins += 1
        loser.losses += 1
        winner.matchups += 1
        loser.matchups += 1

        self.store.bulk_set([winner, loser])

        self.logger.info(f"Win: {winner_id} over {loser_id}")
        self.logger.info(f"  {winner_id}: {old_winner}->{winner.rating}")
        self.logger.info(f"  {loser_id}: {old_loser}->{loser.rating}")
        return winner.rating, loser.rating

    def record_no_decision(self, id_a: str, id_b: str) -> None:
        """Apply a timed-out matchup: both photos take the loss update."""
        entry_a, entry_b = self._fetch_pair(id_a, id_b)
        old_a, old_b = entry_a.rating, entry_b.rating

        # Both deltas come from the pre-match ratings
        entry_a.rating = _round_half_up(old_a - self.k_factor * expected_score(old_a, old_b))
        entry_b.rating = _round_half_up(old_b - self.k_factor * expected_score(old_b, old_a))
        for entry in (entry_a, entry_b):
            entry.losses += 1
            entry.matchups += 1

        self.store.bulk_set([entry_a, entry_b])

        self.logger.info(f"No decision: {id_a} vs {id_b}")
        self.logger.info(f"  {id_a}: {old_a}->{entry_a.rating}")
        self.logger.info(f"  {id_b}: {old_b}->{entry_b.rating}")
