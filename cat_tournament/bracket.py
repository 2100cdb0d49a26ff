"""
Bracket construction for single-elimination rounds.
"""

import math
from collections.abc import Sequence

from .models import Matchup, Photo


def build_bracket(photos: Sequence[Photo]) -> list[Matchup]:
    """
    Pair consecutive photos into matchups.

    (photos[0], photos[1]), (photos[2], photos[3]), ... An odd last photo is
    dropped from the round: it gets no bye and no recorded result. Fewer than
    two photos give an empty bracket.
    """
    return [
        Matchup(left=photos[i], right=photos[i + 1])
        for i in range(0, len(photos) - 1, 2)
    ]


def estimate_total_rounds(photo_count: int) -> int:
    """Round count shown to the player; ceil(log2(n)), not kept in sync with odd drops."""
    if photo_count < 2:
        return 0
    return math.ceil(math.log2(photo_count))
