from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

from .errors import ConfigError
from .sitemap import SitemapOptions
from .utils import parse_bool, parse_float

STRATEGIES = ("high", "medium", "low")


def load_config(path: Path) -> dict:
    """Read a TOML, YAML or JSON config file. A missing file means no settings."""
    path = Path(path)
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            raise ConfigError("TOML config requires tomllib (Python 3.11+) or tomli.", path)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}", path) from exc
    elif suffix in {".yml", ".yaml"}:
        if yaml is None:
            raise ConfigError("YAML config requires PyYAML.", path)
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}", path) from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}", path) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}", path)
    return data


def resolve_path(value: str, config_path: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = Path(config_path).resolve().parent / path
    return path


def read_sitemap_base(value: Optional[str], config_path: Path) -> Optional[str]:
    value = (value or "").strip()
    if not value:
        return None
    path = resolve_path(value, config_path)
    if not path.exists():
        raise ConfigError(f"Sitemap base file not found: {path}", path)
    return path.read_text(encoding="utf-8")


def sitemap_options_from_config(config: dict, config_path: Path = Path("blog.toml")) -> SitemapOptions:
    defaults = SitemapOptions()
    return SitemapOptions(
        default_priority=parse_float(config.get("default_priority"), defaults.default_priority),
        include_tags=parse_bool(config.get("include_tags", defaults.include_tags)),
        blog_root_slug=str(config.get("blog_root_slug") or defaults.blog_root_slug),
        tag_root_slug=str(config.get("tag_root_slug") or defaults.tag_root_slug),
        sitemap_base=read_sitemap_base(config.get("sitemap_base"), config_path),
    )
