"""
Backup export and import.

A backup is a JSON object mapping image id to its rating record. Imported
payloads are validated with pydantic before anything is written, and the
whole import goes through one bulk_set.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import StorageError, ValidationError
from ..interfaces import RatingRecord, RatingStore
from ..logging_config import get_logger
from ..models import RatingEntry

logger = get_logger("backup")

_BACKUP_ADAPTER = TypeAdapter(dict[str, RatingRecord])


def export_ratings(store: RatingStore) -> dict[str, RatingRecord]:
    """Export every entry keyed by image id."""
    exported = {
        entry.image_id: RatingRecord(**entry.to_dict())
        for entry in store.get_all_ratings()
    }
    logger.info(f"Exported {len(exported)} rating entries")
    return exported


def import_ratings(store: RatingStore, data: Any) -> int:
    """
    Validate a backup payload and write it to the store.

    Existing entries for the same image ids are overwritten, others are kept.

    Returns:
        Number of imported entries

    Raises:
        ValidationError: If the payload is malformed or inconsistent
    """
    try:
        records = _BACKUP_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid backup payload: {e}") from e

    entries = list[RatingEntry]()
    for key, record in records.items():
        if key != record["image_id"]:
            raise ValidationError(f"Backup key {key} does not match image_id {record['image_id']}")
        entries.append(RatingEntry.from_dict(dict(record)))

    store.bulk_set(entries)
    logger.info(f"Imported {len(entries)} rating entries")
    return len(entries)


def save_backup(store: RatingStore, path: Path) -> int:
    """Write an export of store to path. Returns the number of entries."""
    exported = export_ratings(store)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(exported, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise StorageError(f"Failed to write backup {path}: {e}") from e
    return len(exported)


def load_backup(store: RatingStore, path: Path) -> int:
    """Import a backup file written by save_backup. Returns the number of entries."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StorageError(f"Failed to read backup {path}: {e}") from e
    return import_ratings(store, data)
