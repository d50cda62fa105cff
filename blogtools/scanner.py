from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import NotADirectory

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = {".md", ".html", ".htm"}
SIDECAR_SUFFIX = ".json"


def is_source_file(path: Path) -> bool:
    suffix = path.suffix.lower()
    return suffix != SIDECAR_SUFFIX and suffix in SOURCE_SUFFIXES


def get_blog_paths(root: Path) -> list[Path]:
    """Return every content file under ``root``, newest-looking first.

    Paths are sorted on their full string and then reversed. Posts live in
    ``<year>/<date>/`` folders, so this approximates newest-first order and
    is the tie-break for posts sharing a date.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectory(f"Blog root is not a directory: {root}", root)
    paths = [path for path in root.rglob("*") if path.is_file() and is_source_file(path)]
    paths.sort(key=lambda p: str(p))
    paths.reverse()
    logger.debug("Found %d content files under %s", len(paths), root)
    return paths


def content_for_sidecar(json_path: Path) -> Optional[Path]:
    # Same precedence as the scan: of two files sharing a stem, the one that
    # sorts first is found last and kept.
    stem = json_path.name.split(".", 1)[0]
    for suffix in sorted(SOURCE_SUFFIXES):
        candidate = json_path.parent / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def list_sidecars(root: Path) -> list[Path]:
    root = Path(root)
    if not root.is_dir():
        return []
    paths = [path for path in root.rglob(f"*{SIDECAR_SUFFIX}") if path.is_file()]
    paths.sort(key=lambda p: str(p))
    paths.reverse()
    return paths
