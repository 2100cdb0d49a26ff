"""
In-memory rating store.
"""

import threading
from collections.abc import Iterable
from dataclasses import replace

from typing_extensions import override

from ..interfaces import RatingStore
from ..logging_config import get_logger
from ..models import RatingEntry

logger = get_logger("memory_store")


class InMemoryRatingStore(RatingStore):
    """Rating store kept in a dict. Entries are copied in and out."""

    def __init__(self, entries: Iterable[RatingEntry] = ()):
        self._entries = dict[str, RatingEntry]()
        self._lock: threading.Lock = threading.Lock()
        for entry in entries:
            self._entries[entry.image_id] = replace(entry)

    @override
    def get_rating(self, image_id: str) -> RatingEntry:
        with self._lock:
            entry = self._entries.get(image_id)
        return replace(entry) if entry else RatingEntry.default(image_id)

    @override
    def set_rating(self, entry: RatingEntry) -> None:
        with self._lock:
            self._entries[entry.image_id] = replace(entry)

    @override
    def get_all_ratings(self) -> list[RatingEntry]:
        with self._lock:
            return [replace(entry) for entry in self._entries.values()]

    @override
    def bulk_set(self, entries: Iterable[RatingEntry]) -> None:
        copies = {entry.image_id: replace(entry) for entry in entries}
        with self._lock:
            self._entries.update(copies)
        logger.debug(f"Stored {len(copies)} entries")

    @override
    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Cleared all rating entries")
