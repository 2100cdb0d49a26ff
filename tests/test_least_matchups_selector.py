"""
Tests for LeastMatchupsSelector implementation.

Focus on field size, fairness toward new photos and reproducibility.
"""

import random

import pytest

from cat_tournament.exceptions import ConfigurationError
from cat_tournament.group_selectors.least_matchups_selector import (
    LeastMatchupsSelector,
    select_candidates,
)
from cat_tournament.models import RatingEntry

from conftest import make_photos


def played(image_id: str, matchups: int) -> RatingEntry:
    return RatingEntry(image_id, rating=1500, wins=0, losses=matchups, matchups=matchups)


class TestSelectCandidates:
    """Test select_candidates through public interface."""

    def test_small_catalog_returns_permutation(self) -> None:
        """With no more photos than the target, every photo is used."""
        # Arrange
        photos = make_photos(10)

        # Act
        selected = select_candidates(photos, {}, target_count=32, rng=random.Random(1))

        # Assert
        assert len(selected) == len(photos)
        assert {p.photo_id for p in selected} == {p.photo_id for p in photos}

    def test_exact_fit_returns_permutation(self) -> None:
        photos = make_photos(8)

        selected = select_candidates(photos, {}, target_count=8, rng=random.Random(2))

        assert sorted(p.photo_id for p in selected) == sorted(p.photo_id for p in photos)

    def test_large_catalog_returns_target_count_distinct_photos(self) -> None:
        # Arrange
        photos = make_photos(100)
        ratings = {p.photo_id: played(p.photo_id, i % 7) for i, p in enumerate(photos)}

        # Act
        selected = select_candidates(photos, ratings, target_count=32, rng=random.Random(3))

        # Assert
        ids = [p.photo_id for p in selected]
        assert len(ids) == 32
        assert len(set(ids)) == 32, "No duplicates"
        assert set(ids) <= {p.photo_id for p in photos}

    def test_unplayed_photos_are_always_selected(self) -> None:
        """The least-played 70% slice is taken unconditionally; new uploads count as 0."""
        # Arrange
        photos = make_photos(20)
        fresh = {p.photo_id for p in photos[13:]}  # 7 photos without a rating entry
        ratings = {p.photo_id: played(p.photo_id, 5) for p in photos[:13]}

        # Act
        selected = select_candidates(photos, ratings, target_count=10, rng=random.Random(4))

        # Assert
        ids = {p.photo_id for p in selected}
        assert len(ids) == 10
        assert fresh <= ids

    def test_least_played_slice_follows_matchup_counts(self) -> None:
        # Arrange
        photos = make_photos(30)
        ratings = {p.photo_id: played(p.photo_id, i) for i, p in enumerate(photos)}

        # Act
        selected = select_candidates(photos, ratings, target_count=10, rng=random.Random(5))

        # Assert
        ids = {p.photo_id for p in selected}
        assert {f"P{i}" for i in range(1, 8)} <= ids, "floor(10 * 0.7) = 7 least played"

    def test_same_seed_same_selection(self) -> None:
        photos = make_photos(50)

        first = select_candidates(photos, {}, target_count=16, rng=random.Random(42))
        second = select_candidates(photos, {}, target_count=16, rng=random.Random(42))

        assert [p.photo_id for p in first] == [p.photo_id for p in second]

    def test_selection_order_is_shuffled(self) -> None:
        """Picked photos do not keep their sorted position."""
        photos = make_photos(40)
        orders = {
            tuple(p.photo_id for p in select_candidates(photos, {}, target_count=10, rng=random.Random(seed)))
            for seed in range(5)
        }

        assert len(orders) > 1

    def test_rejects_tiny_target(self) -> None:
        with pytest.raises(ConfigurationError):
            select_candidates(make_photos(4), {}, target_count=1)


class TestLeastMatchupsSelector:
    """Test the Selector wrapper."""

    def test_uses_injected_random_source(self) -> None:
        # Arrange
        photos = make_photos(12)
        selector_a = LeastMatchupsSelector(random.Random(7))
        selector_b = LeastMatchupsSelector(random.Random(7))

        # Act
        picked_a = selector_a.select_candidates(photos, {}, 8)
        picked_b = selector_b.select_candidates(photos, {}, 8)

        # Assert
        assert [p.photo_id for p in picked_a] == [p.photo_id for p in picked_b]
        assert len(picked_a) == 8
