"""
Storage implementations.

Provides implementations of the RatingStore interface for persisting one
rating entry per photo, plus backup export and import.

Available implementations:
- InMemoryRatingStore: Process-local store, used for tests and dry runs
- JSONRatingStore: Persists all entries to one JSON document with atomic rewrites
"""

from .backup import export_ratings, import_ratings, load_backup, save_backup
from .json_store import JSONRatingStore
from .memory_store import InMemoryRatingStore

__all__ = [
    "InMemoryRatingStore",
    "JSONRatingStore",
    "export_ratings",
    "import_ratings",
    "load_backup",
    "save_backup",
]
