"""
Core dataclasses for the cat tournament system.

Defines Photo, RatingEntry, Matchup and the per-round tournament state with
validation.
"""

import time
from dataclasses import dataclass, field
from typing import Any

from .constants import DEFAULT_RATING
from .exceptions import ValidationError


@dataclass(frozen=True)
class Photo:
    """A cat photo from the image catalog. Only the id is used for rating."""

    photo_id: str
    filename: str
    created_at: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate photo data."""
        if not self.photo_id:
            raise ValidationError("photo_id cannot be empty")
        if not self.filename:
            raise ValidationError("filename cannot be empty")


@dataclass
class RatingEntry:
    """Persisted skill rating of one photo."""

    image_id: str
    rating: int = DEFAULT_RATING
    wins: int = 0
    losses: int = 0
    matchups: int = 0

    def __post_init__(self) -> None:
        """Validate rating entry data."""
        if not self.image_id:
            raise ValidationError("image_id cannot be empty")
        if min(self.wins, self.losses, self.matchups) < 0:
            raise ValidationError(f"Negative counters for {self.image_id}")
        if self.matchups != self.wins + self.losses:
            raise ValidationError(
                f"matchups ({self.matchups}) must equal wins + losses "
                f"({self.wins} + {self.losses}) for {self.image_id}"
            )

    @classmethod
    def default(cls, image_id: str) -> "RatingEntry":
        """Entry for a photo that has never competed."""
        return cls(image_id=image_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "image_id": self.image_id,
            "rating": self.rating,
            "wins": self.wins,
            "losses": self.losses,
            "matchups": self.matchups,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RatingEntry":
        return cls(
            image_id=str(data["image_id"]),
            rating=int(data["rating"]),
            wins=int(data["wins"]),
            losses=int(data["losses"]),
            matchups=int(data["matchups"]),
        )


@dataclass(frozen=True, eq=False)
class Matchup:
    """Two photos facing each other in one bracket slot.

    Compared by identity: the same pair can meet again in a later round and
    that is a different matchup.
    """

    left: Photo
    right: Photo

    def __post_init__(self) -> None:
        if self.left.photo_id == self.right.photo_id:
            raise ValidationError(f"A photo cannot face itself: {self.left.photo_id}")

    def contains(self, photo_id: str) -> bool:
        return photo_id in (self.left.photo_id, self.right.photo_id)

    def other(self, photo_id: str) -> Photo:
        """Return the opponent of photo_id."""
        if photo_id == self.left.photo_id:
            return self.right
        if photo_id == self.right.photo_id:
            return self.left
        raise ValidationError(f"{photo_id} is not part of this matchup")

    def photo(self, photo_id: str) -> Photo:
        """Return the photo with photo_id from this matchup."""
        if photo_id == self.left.photo_id:
            return self.left
        if photo_id == self.right.photo_id:
            return self.right
        raise ValidationError(f"{photo_id} is not part of this matchup")


@dataclass
class RoundState:
    """In-progress round of a tournament, owned by the game session."""

    matchups: list[Matchup]
    current_index: int = 0
    round_number: int = 1
    total_rounds: int = 1  # display-only estimate, never recomputed
    winners_so_far: list[Photo] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.current_index <= len(self.matchups):
            raise ValidationError(
                f"current_index {self.current_index} out of range for {len(self.matchups)} matchups"
            )
        if len(self.winners_so_far) > self.current_index:
            raise ValidationError("More winners than resolved matchups")

    @property
    def current_matchup(self) -> Matchup | None:
        if self.current_index < len(self.matchups):
            return self.matchups[self.current_index]
        return None

    @property
    def is_last_matchup(self) -> bool:
        return self.current_index >= len(self.matchups) - 1

    @property
    def match_in_round(self) -> int:
        """1-based position of the current matchup."""
        return self.current_index + 1

    @property
    def label(self) -> str:
        return (
            f"Round {self.round_number}/{self.total_rounds} · "
            f"Match {self.match_in_round}/{len(self.matchups)}"
        )


@dataclass
class FinaleResult:
    """Outcome of a finished tournament."""

    champion: Photo
    entry: RatingEntry
    rank: int
    total_photos: int
