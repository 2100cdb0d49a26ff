"""
Least-matchups selector implementation.

Picks the tournament field from the catalog, prioritizing photos with the
fewest recorded matchups so new uploads get rated quickly, while a random
fill keeps established photos resurfacing.
"""

import math
import random
from collections.abc import Mapping, Sequence

from typing_extensions import override

from ..constants import DEFAULT_CANDIDATE_COUNT, UNDERPLAYED_FRACTION
from ..exceptions import ConfigurationError
from ..interfaces import Selector
from ..logging_config import get_logger
from ..models import Photo, RatingEntry

# Module-level logger
logger = get_logger("least_matchups_selector")


def select_candidates(
    photos: Sequence[Photo],
    ratings: Mapping[str, RatingEntry],
    target_count: int = DEFAULT_CANDIDATE_COUNT,
    rng: random.Random | None = None,
) -> list[Photo]:
    """
    Select at most target_count photos for a tournament.

    With no more photos than target_count, every photo is returned in a
    uniformly random order. Otherwise the least-played
    floor(target_count * 0.7) photos are taken unconditionally and the rest
    is drawn uniformly from the remaining photos. The result is shuffled so
    bracket position does not depend on how a photo was picked.

    Args:
        photos: Whole catalog
        ratings: Rating entries keyed by photo id; missing means 0 matchups
        target_count: Number of photos to select
        rng: Random source (a fresh unseeded one when omitted)

    Returns:
        Selected photos in random order
    """
    if target_count < 2:
        raise ConfigurationError(f"target_count must be at least 2, got {target_count}")
    rng = rng or random.Random()

    if len(photos) <= target_count:
        selected = list(photos)
        rng.shuffle(selected)
        logger.debug(f"Catalog fits in one tournament, shuffled all {len(selected)} photos")
        return selected

    def matchups_of(photo: Photo) -> int:
        entry = ratings.get(photo.photo_id)
        return entry.matchups if entry else 0

    # Stable sort keeps catalog order among equally played photos
    by_matchups = sorted(photos, key=matchups_of)
    underplayed_count = math.floor(target_count * UNDERPLAYED_FRACTION)
    underplayed = by_matchups[:underplayed_count]
    rest = by_matchups[underplayed_count:]
    random_fill = rng.sample(rest, target_count - len(underplayed))

    selected = underplayed + random_fill
    rng.shuffle(selected)
    logger.debug(
        f"Selected {len(underplayed)} least-played and {len(random_fill)} random photos "
        f"out of {len(photos)}"
    )
    return selected


class LeastMatchupsSelector(Selector):
    """Selector that prioritizes photos with fewer recorded matchups."""

    def __init__(self, rng: random.Random | None = None):
        """Initialize least-matchups selector.

        Args:
            rng: Random source; pass a seeded instance for reproducible brackets
        """
        self.rng: random.Random = rng or random.Random()

    @override
    def select_candidates(
        self,
        photos: Sequence[Photo],
        ratings: Mapping[str, RatingEntry],
        target_count: int = DEFAULT_CANDIDATE_COUNT,
    ) -> list[Photo]:
        """Return the tournament field for this run."""
        return select_candidates(photos, ratings, target_count, rng=self.rng)
