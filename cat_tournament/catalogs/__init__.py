"""
Image catalog implementations.

Provides implementations of the ImageCatalog interface for listing photos
from various sources.

Available implementations:
- DirectoryImageCatalog: Treats every image file under a directory as a photo
- StaticImageCatalog: Serves a fixed list of photos
"""

from .directory_catalog import DirectoryImageCatalog
from .static_catalog import StaticImageCatalog

__all__ = ["DirectoryImageCatalog", "StaticImageCatalog"]
