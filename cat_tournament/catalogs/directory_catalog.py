"""
Directory image catalog implementation.

Reads photos from a directory tree of image files.
"""

from collections.abc import Sequence
from pathlib import Path

from typing_extensions import override

from ..interfaces import ImageCatalog
from ..logging_config import get_logger
from ..models import Photo

DEFAULT_PATTERNS = ("*.jpg", "*.jpeg", "*.png", "*.webp", "*.gif")


class DirectoryImageCatalog(ImageCatalog):
    """
    Image catalog that reads from a directory structure.

    Treats image files as opaque - only stores ids and file names. The photo
    id is the path relative to the directory without its suffix, so the same
    file keeps its rating across runs.
    """

    def __init__(self, photos_dir: Path, patterns: Sequence[str] = DEFAULT_PATTERNS):
        """
        Initialize directory image catalog.

        Args:
            photos_dir: Directory containing photo files
            patterns: Glob patterns of files to include (matched recursively)
        """
        self.photos_dir: Path = Path(photos_dir)
        self.patterns: tuple[str, ...] = tuple(patterns)

        self.logger = get_logger("directory_catalog")

        if not self.photos_dir.exists():
            raise FileNotFoundError(f"Photos directory does not exist: {self.photos_dir}")

        if not self.photos_dir.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {self.photos_dir}")

        self._cache = dict[str, Photo]()
        self._cache_loaded: bool = False

    def _load_photos(self) -> None:
        """Load all photos from directory into cache."""
        if self._cache_loaded:
            return

        root = self.photos_dir.resolve()
        photo_files = set[Path]()
        for pattern in self.patterns:
            photo_files.update(self.photos_dir.rglob(pattern))

        if not photo_files:
            self.logger.warning(f"No files matching {self.patterns} found in {self.photos_dir}")

        # Sorted so the file kept for a duplicate id is the same on every run
        for photo_file in sorted(photo_files):
            if photo_file.is_dir():
                continue
            # Skip symlinks pointing outside the photos directory
            try:
                relative = photo_file.resolve().relative_to(root)
            except ValueError:
                self.logger.warning(f"Skipping file outside photos directory: {photo_file}")
                continue

            photo_id = relative.with_suffix("").as_posix()
            if photo_id in self._cache:
                self.logger.warning(f"Duplicate photo id {photo_id}, skipping {photo_file}")
                continue

            self._cache[photo_id] = Photo(
                photo_id=photo_id,
                filename=photo_file.name,
                created_at=photo_file.stat().st_mtime,
            )

        self._cache_loaded = True
        self.logger.info(f"Loaded {len(self._cache)} photos from {self.photos_dir}")

    @override
    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""
        self._load_photos()
        return sorted(
            self._cache.values(),
            key=lambda photo: (photo.created_at, photo.photo_id),
            reverse=True,
        )

    def get_photo(self, photo_id: str) -> Photo:
        """Get a specific photo by ID."""
        self._load_photos()

        if photo_id not in self._cache:
            raise KeyError(f"Photo not found: {photo_id}")

        return self._cache[photo_id]

    def get_photo_path(self, photo_id: str) -> Path:
        """Absolute path of the file behind photo_id."""
        photo = self.get_photo(photo_id)
        return (self.photos_dir / photo_id).with_name(photo.filename).resolve()

    def reload_photos(self) -> None:
        """Forget cached photos so the next listing rescans the directory."""
        self._cache.clear()
        self._cache_loaded = False
