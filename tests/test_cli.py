"""
Tests for the command line interface.
"""

import json
import os
from pathlib import Path

import pytest

from cat_tournament.__main__ import main


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each CLI test in its own directory so log files land there."""
    monkeypatch.chdir(tmp_path)
    photos = tmp_path / "photos"
    photos.mkdir()
    for i in range(4):
        path = photos / f"cat_{i}.jpg"
        path.write_bytes(b"fake")
        os.utime(path, (1_000.0 + i, 1_000.0 + i))
    return tmp_path


class TestCLI:
    """Test CLI commands end to end."""

    def test_play_with_simulated_presenter(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        # Act
        with pytest.raises(SystemExit) as exc_info:
            main(["play", "--photos-dir", "photos", "--presenter", "simulated", "--noise", "0", "--seed", "1"])

        # Assert
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "Champion: cat_3" in out
        with open(workdir / "ratings.json") as f:
            assert len(json.load(f)["ratings"]) == 4

    def test_play_without_enough_photos(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "empty").mkdir()

        with pytest.raises(SystemExit) as exc_info:
            main(["play", "--photos-dir", "empty", "--presenter", "simulated"])

        assert exc_info.value.code == 1
        assert "Not enough photos" in capsys.readouterr().out

    def test_play_with_missing_directory(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["play", "--photos-dir", "nowhere", "--presenter", "simulated"])

        assert exc_info.value.code == 1
        assert "does not exist" in capsys.readouterr().out

    def test_leaderboard_lists_played_photos(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        # Arrange
        with pytest.raises(SystemExit):
            main(["play", "--photos-dir", "photos", "--presenter", "simulated", "--noise", "0"])
        capsys.readouterr()

        # Act
        main(["leaderboard"])

        # Assert
        out = capsys.readouterr().out
        assert "Rating" in out
        assert "cat_3" in out

    def test_leaderboard_without_ratings(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["leaderboard"])

        assert "No ratings yet" in capsys.readouterr().out

    def test_export_import_and_reset(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        # Arrange
        with pytest.raises(SystemExit):
            main(["play", "--photos-dir", "photos", "--presenter", "simulated"])

        # Act & Assert
        main(["export", "backup.json"])
        assert (workdir / "backup.json").exists()

        main(["reset", "--yes"])
        with open(workdir / "ratings.json") as f:
            assert json.load(f)["ratings"] == {}

        main(["import", "backup.json"])
        with open(workdir / "ratings.json") as f:
            assert len(json.load(f)["ratings"]) == 4
        assert "Imported 4 ratings" in capsys.readouterr().out

    def test_import_rejects_bad_backup(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "bad.json").write_text(json.dumps({"cat_0": {"image_id": "cat_0"}}))

        with pytest.raises(SystemExit) as exc_info:
            main(["import", "bad.json"])

        assert exc_info.value.code == 1
        assert "Invalid backup payload" in capsys.readouterr().out

    def test_reset_can_be_cancelled(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr("builtins.input", lambda prompt="": "n")

        main(["reset"])

        assert "Reset cancelled" in capsys.readouterr().out
