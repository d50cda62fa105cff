from __future__ import annotations

from pathlib import Path
from typing import Optional


class BlogError(Exception):
    """Base class for every failure raised while loading or publishing a blog."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class NotADirectory(BlogError):
    pass


class FileNotFound(BlogError):
    pass


class FileAccessError(BlogError):
    pass


class SidecarNotFound(FileAccessError):
    """The JSON sidecar of a content file does not exist."""


class MetadataInvalid(BlogError):
    pass


class ImproperFileName(BlogError):
    pass


class RenderError(BlogError):
    pass


class ImproperDate(BlogError):
    pass


class PriorityOutOfRange(BlogError, ValueError):
    def __init__(self, priority: float) -> None:
        super().__init__(f"Priority must be between 0.0 and 1.0, got `{priority}`")
        self.priority = priority


class SitemapMergeError(BlogError):
    pass


class ConfigError(BlogError):
    pass
