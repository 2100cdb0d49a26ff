"""
Tests for backup export and import.
"""

import json
import tempfile
from pathlib import Path

import pytest

from cat_tournament.exceptions import StorageError, ValidationError
from cat_tournament.models import RatingEntry
from cat_tournament.storage.backup import export_ratings, import_ratings, load_backup, save_backup
from cat_tournament.storage.memory_store import InMemoryRatingStore


def record(image_id: str, rating: int = 1516, wins: int = 1, losses: int = 0) -> dict[str, object]:
    return {"image_id": image_id, "rating": rating, "wins": wins, "losses": losses, "matchups": wins + losses}


class TestBackup:
    """Test backup export and import through public interface."""

    def test_export_is_keyed_by_image_id(self) -> None:
        # Arrange
        store = InMemoryRatingStore([RatingEntry("cat_a", rating=1516, wins=1, losses=0, matchups=1)])

        # Act
        exported = export_ratings(store)

        # Assert
        assert exported == {"cat_a": record("cat_a")}

    def test_import_overwrites_matching_entries_and_keeps_others(self) -> None:
        # Arrange
        store = InMemoryRatingStore([
            RatingEntry("cat_a", rating=1400, wins=0, losses=3, matchups=3),
            RatingEntry("cat_b", rating=1550, wins=2, losses=0, matchups=2),
        ])

        # Act
        count = import_ratings(store, {"cat_a": record("cat_a", rating=1600, wins=4)})

        # Assert
        assert count == 1
        assert store.get_rating("cat_a").rating == 1600
        assert store.get_rating("cat_b").rating == 1550

    @pytest.mark.parametrize("payload", [
        ["not", "a", "mapping"],
        {"cat_a": {"image_id": "cat_a", "rating": 1500}},
        {"cat_a": {**record("cat_a"), "rating": "very cute"}},
        {"cat_a": record("cat_b")},
        {"cat_a": {**record("cat_a"), "matchups": 7}},
    ])
    def test_import_rejects_malformed_payloads(self, payload: object) -> None:
        # Arrange
        store = InMemoryRatingStore()

        # Act & Assert
        with pytest.raises(ValidationError):
            import_ratings(store, payload)
        assert store.get_all_ratings() == [], "Nothing is written on rejection"

    def test_save_and_load_backup_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            path = Path(temp_dir) / "backup.json"
            source = InMemoryRatingStore([
                RatingEntry("cat_a", rating=1516, wins=1, losses=0, matchups=1),
                RatingEntry("cat_b", rating=1484, wins=0, losses=1, matchups=1),
            ])
            target = InMemoryRatingStore()

            # Act
            saved = save_backup(source, path)
            loaded = load_backup(target, path)

            # Assert
            assert saved == loaded == 2
            assert {e.image_id: e.rating for e in target.get_all_ratings()} == {"cat_a": 1516, "cat_b": 1484}
            with open(path, "r") as f:
                assert set(json.load(f)) == {"cat_a", "cat_b"}

    def test_load_unreadable_backup_raises_storage_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "backup.json"
            path.write_text("garbage", encoding="utf-8")

            with pytest.raises(StorageError):
                load_backup(InMemoryRatingStore(), path)

            with pytest.raises(StorageError):
                load_backup(InMemoryRatingStore(), Path(temp_dir) / "missing.json")
