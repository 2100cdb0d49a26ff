"""
JSON rating store implementation.

Persists every rating entry to a single JSON document. Each write replaces
the whole file through a temporary file and os.replace, so a multi-entry
update lands completely or not at all.
"""

import json
import os
import tempfile
import threading
import typing
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from typing_extensions import override

from ..exceptions import StorageError, ValidationError
from ..interfaces import RatingStore
from ..logging_config import get_logger
from ..models import RatingEntry

# Module-level logger
logger = get_logger("json_store")


class JSONRatingStore(RatingStore):
    """
    JSON-file rating store.

    File layout: {"ratings": {image_id: {image_id, rating, wins, losses, matchups}}}.
    Unreadable or invalid content is logged and treated as empty on read.
    Concurrent processes sharing one file are last-write-wins.
    """

    path: Path

    def __init__(self, path: Path):
        """
        Initialize JSON rating store.

        Args:
            path: Path of the JSON document holding all entries
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock: threading.Lock = threading.Lock()
        logger.info(f"JSON rating store initialized: {self.path}")

    def _read(self) -> dict[str, RatingEntry]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = typing.cast(dict[str, Any], json.load(f))
            assert isinstance(data, dict), "Top level must be an object"
            assert isinstance(data.get("ratings"), dict), "Missing required field: ratings"
        except (json.JSONDecodeError, AssertionError) as e:
            logger.error(f"Ignoring unreadable rating file {self.path}: {e}")
            return {}

        entries = dict[str, RatingEntry]()
        for image_id, record in typing.cast(dict[str, Any], data["ratings"]).items():
            try:
                entries[image_id] = RatingEntry.from_dict(record)
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping invalid rating entry {image_id}: {e}")
        return entries

    def _write(self, entries: dict[str, RatingEntry]) -> None:
        payload = {"ratings": {image_id: e.to_dict() for image_id, e in entries.items()}}
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write ratings to {self.path}: {e}") from e

    @override
    def get_rating(self, image_id: str) -> RatingEntry:
        with self._lock:
            entry = self._read().get(image_id)
        return entry or RatingEntry.default(image_id)

    @override
    def set_rating(self, entry: RatingEntry) -> None:
        self.bulk_set([entry])

    @override
    def get_all_ratings(self) -> list[RatingEntry]:
        with self._lock:
            return list(self._read().values())

    @override
    def bulk_set(self, entries: Iterable[RatingEntry]) -> None:
        updates = {entry.image_id: entry for entry in entries}
        with self._lock:
            current = self._read()
            current.update(updates)
            self._write(current)
        logger.debug(f"Persisted {len(updates)} entries to {self.path}")

    @override
    def clear_all(self) -> None:
        with self._lock:
            self._write({})
        logger.info(f"Cleared all rating entries in {self.path}")
