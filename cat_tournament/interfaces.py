"""
Abstract base classes defining the interfaces for the cat tournament system.

All interfaces are synchronous to avoid asyncio complexity in core interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from typing_extensions import TypedDict

from .models import Matchup, Photo, RatingEntry


class RatingRecord(TypedDict):
    """Serialized RatingEntry as found in stores and backups."""
    image_id: str
    rating: int
    wins: int
    losses: int
    matchups: int


class RatingStore(ABC):
    """Interface for persisting one rating entry per photo."""

    @abstractmethod
    def get_rating(self, image_id: str) -> RatingEntry:
        """Return the entry for image_id, or a default entry if none exists."""
        pass

    @abstractmethod
    def set_rating(self, entry: RatingEntry) -> None:
        """Persist a single entry."""
        pass

    @abstractmethod
    def get_all_ratings(self) -> list[RatingEntry]:
        """Return every persisted entry."""
        pass

    @abstractmethod
    def bulk_set(self, entries: Iterable[RatingEntry]) -> None:
        """
        Persist several entries as one unit.

        Either all entries are written or none are. Used for the two sides
        of a match and for restore/import.
        """
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Remove every entry (full leaderboard reset)."""
        pass


class ImageCatalog(ABC):
    """Interface for listing available photos."""

    @abstractmethod
    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""
        pass


class Presenter(ABC):
    """Interface for showing a matchup and collecting the pick."""

    @abstractmethod
    def present(self, matchup: Matchup, label: str, timeout: float) -> str | None:
        """
        Show a matchup and wait for a decision.

        May block up to timeout seconds. Called exactly once per matchup.

        Args:
            matchup: The two photos to choose between
            label: Progress text such as "Round 1/5 · Match 2/16"
            timeout: Seconds before the matchup counts as no decision

        Returns:
            The chosen photo id, or None if time ran out
        """
        pass


class Selector(ABC):
    """Interface for choosing the photos that enter a tournament."""

    @abstractmethod
    def select_candidates(
        self,
        photos: Sequence[Photo],
        ratings: Mapping[str, RatingEntry],
        target_count: int,
    ) -> list[Photo]:
        """
        Select up to target_count photos for a fresh tournament.

        Args:
            photos: Whole catalog
            ratings: Rating entries keyed by photo id (missing = never played)
            target_count: Bracket size to aim for

        Returns:
            Selected photos in bracket order
        """
        pass

