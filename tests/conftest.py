"""Shared fixtures for cat tournament tests."""

from collections.abc import Mapping, Sequence

import pytest

from cat_tournament.exceptions import StorageError
from cat_tournament.interfaces import Selector
from cat_tournament.models import Photo, RatingEntry
from cat_tournament.storage.memory_store import InMemoryRatingStore


class InOrderSelector(Selector):
    """Selects photos in catalog order so brackets are predictable."""

    def select_candidates(
        self,
        photos: Sequence[Photo],
        ratings: Mapping[str, RatingEntry],
        target_count: int = 32,
    ) -> list[Photo]:
        return list(photos)[:target_count]


class FlakyRatingStore(InMemoryRatingStore):
    """In-memory store whose writes can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False
        self.fail_reads = False

    def bulk_set(self, entries) -> None:
        if self.fail_writes:
            raise StorageError("disk full")
        super().bulk_set(entries)

    def get_all_ratings(self) -> list[RatingEntry]:
        if self.fail_reads:
            raise StorageError("store offline")
        return super().get_all_ratings()


def make_photos(count: int, prefix: str = "P") -> list[Photo]:
    """Photos P1..Pn, with P1 the newest so catalogs list them in order."""
    return [
        Photo(photo_id=f"{prefix}{i}", filename=f"{prefix.lower()}{i}.jpg", created_at=1_000_000.0 - i)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def photos() -> list[Photo]:
    return make_photos(4)


@pytest.fixture
def store() -> InMemoryRatingStore:
    return InMemoryRatingStore()


@pytest.fixture
def in_order_selector() -> InOrderSelector:
    return InOrderSelector()
