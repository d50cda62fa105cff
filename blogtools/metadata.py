from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import FileAccessError, FileNotFound, ImproperFileName, MetadataInvalid, SidecarNotFound
from .scanner import SIDECAR_SUFFIX


class PostMetadata(BaseModel):
    """Metadata read from the JSON file sitting next to a post."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str
    date: dt.date
    description: Optional[str] = Field(default=None, alias="desc")
    slug: str
    tags: list[str]
    keywords: Optional[list[str]] = None
    canonical_link: Optional[str] = None
    author_name: Optional[str] = None
    author_webpage: Optional[str] = None
    # Filled from ``date`` when the sidecar leaves it out.
    last_modified: Optional[dt.date] = None
    priority: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def default_last_modified(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("last_modified") is None and "date" in data:
            data = dict(data)
            data["last_modified"] = data["date"]
        return data

    @property
    def full_slug(self) -> str:
        return full_slug(self.date, self.slug)


def full_slug(date: dt.date, part_slug: str) -> str:
    return f"{date.isoformat()}/{part_slug}"


def source_stem(path: Path) -> str:
    name = path.name
    if not name:
        raise FileNotFound(f"Path has no file name: {path}", path)
    stem = name.split(".", 1)[0]
    if not stem:
        raise ImproperFileName(f"Cannot extract a file stem from: {path}", path)
    return stem


def sidecar_path(path: Path) -> Path:
    path = Path(path)
    if path.parent == path:
        raise FileNotFound(f"Path has no parent directory: {path}", path)
    return path.parent / f"{source_stem(path)}{SIDECAR_SUFFIX}"


def parse_metadata(text: str, path: Optional[Path] = None) -> PostMetadata:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataInvalid(f"Invalid JSON in metadata file {path}: {exc}", path) from exc
    try:
        return PostMetadata.model_validate(data)
    except ValidationError as exc:
        raise MetadataInvalid(f"Invalid metadata in {path}: {exc}", path) from exc


def read_metadata(json_path: Path) -> PostMetadata:
    json_path = Path(json_path)
    try:
        text = json_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SidecarNotFound(f"Metadata file not found: {json_path}", json_path) from exc
    except OSError as exc:
        raise FileAccessError(f"Cannot read metadata file {json_path}: {exc}", json_path) from exc
    return parse_metadata(text, json_path)


def load_metadata(source: Path) -> PostMetadata:
    """Load the sidecar metadata belonging to a content file."""
    return read_metadata(sidecar_path(source))
