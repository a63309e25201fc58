from __future__ import annotations
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("site.json")


class ConfigError(ValueError):
    """Raised when the config file or one of its values is malformed."""


@dataclass
class SiteConfig:
    """Site settings read from a JSON file.

    Missing files and missing keys fall back to the defaults below; unknown
    keys are ignored with a warning.
    """

    title: str = "Dev Notes"
    description: str = "Notes on containers, tooling and the web."
    site_url: str = "https://example.com/"
    content_dir: Path = Path("content")
    feed_path: Path = Path("dist/rss.xml")
    debounce_ms: int = 300
    build_delay_ms: int = 2000
    theme: str = "dark"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "SiteConfig":
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config key %r", key)
                continue
            default = getattr(cls, key)
            if isinstance(default, Path):
                if not isinstance(raw, str):
                    raise ConfigError(f"{key} must be a path string")
                path = Path(raw).expanduser()
                if base_dir is not None and not path.is_absolute():
                    path = base_dir / path
                values[key] = path
            elif isinstance(default, int):
                if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
                    raise ConfigError(f"{key} must be a non-negative integer")
                values[key] = raw
            else:
                if not isinstance(raw, str):
                    raise ConfigError(f"{key} must be a string")
                values[key] = raw
        config = cls(**values)
        if config.theme not in ("dark", "light"):
            raise ConfigError("theme must be 'dark' or 'light'")
        return config

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "SiteConfig":
        path = path or DEFAULT_CONFIG_PATH
        if not path.exists():
            logger.debug("No config at %s; using defaults", path)
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
        return cls.from_dict(data, base_dir=path.parent)
