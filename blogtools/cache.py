from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

LOCK_VERSION = 1


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def fingerprint(root: Path, paths: Iterable[Path] = ()) -> str:
    """SHA-256 over the relative path and bytes of every file under ``root``.

    Any added, removed, renamed or edited post or sidecar changes the value.
    Extra ``paths`` (for example a merged sitemap file) are folded in too.
    """
    root = Path(root)
    files = [path for path in root.rglob("*") if path.is_file()] if root.is_dir() else []
    files.extend(Path(path) for path in paths if Path(path).is_file())
    digest = hashlib.sha256()
    for path in sorted(files, key=lambda p: p.as_posix()):
        try:
            rel = path.relative_to(root)
        except ValueError:
            rel = path
        digest.update(rel.as_posix().encode("utf-8"))
        digest.update(b"\0")
        digest.update(path.read_bytes())
        digest.update(b"\0")
    return digest.hexdigest()


def load_lock(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable lock file %s", path)
        return {}
    if not isinstance(data, dict) or data.get("version") != LOCK_VERSION:
        return {}
    return data


def write_lock(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"version": LOCK_VERSION, **data}
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=True), encoding="utf-8")
