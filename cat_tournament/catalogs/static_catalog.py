"""
Static image catalog implementation.
"""

from collections.abc import Iterable

from typing_extensions import override

from ..interfaces import ImageCatalog
from ..models import Photo


class StaticImageCatalog(ImageCatalog):
    """Catalog over a fixed list of photos."""

    def __init__(self, photos: Iterable[Photo]):
        self._photos: list[Photo] = list(photos)

    @override
    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""
        return sorted(self._photos, key=lambda photo: photo.created_at, reverse=True)
