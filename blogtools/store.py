from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

from .cache import fingerprint

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT")


class BlogStore(Generic[SnapshotT]):
    """Holds the loaded blog for an application.

    Create one at start-up and hand it to whatever serves requests. Readers
    get an immutable snapshot; ``reload`` builds a complete new snapshot
    first and only then swaps the single reference, so a reader never sees
    a half-built blog.
    """

    def __init__(self, loader: Callable[[], SnapshotT], root: Optional[Path] = None) -> None:
        self._loader = loader
        self._root = Path(root) if root is not None else None
        self._lock = threading.Lock()
        self._snapshot: Optional[SnapshotT] = None
        self._fingerprint: Optional[str] = None

    @property
    def current(self) -> SnapshotT:
        snapshot = self._snapshot
        if snapshot is None:
            snapshot = self.reload()
        return snapshot

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def reload(self) -> SnapshotT:
        with self._lock:
            stamp = fingerprint(self._root) if self._root is not None else None
            snapshot = self._loader()
            self._snapshot = snapshot
            self._fingerprint = stamp
        logger.info("Blog snapshot reloaded")
        return snapshot

    def reload_if_changed(self) -> bool:
        """Reload when the files under the blog root changed since the last load."""
        if self._root is None:
            raise ValueError("reload_if_changed needs the store to know the blog root")
        if self._snapshot is not None and fingerprint(self._root) == self._fingerprint:
            return False
        self.reload()
        return True
