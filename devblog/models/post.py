from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml


class ContentError(ValueError):
    """Raised when a post file cannot be parsed."""


@dataclass
class Post:
    """A blog post loaded from a Markdown file with YAML front matter.

    Attributes:
        id: Path of the file relative to the blog directory, without suffix.
        title: Post title from the front matter.
        date: Publication time, always timezone-aware (UTC if unspecified).
        body: Raw Markdown below the front matter.
        description: Optional summary used by the feed.
        is_visible: Hidden posts are kept out of listings and the feed.
        tags: Free-form tags, emitted as feed categories.
    """

    id: str
    title: str
    date: datetime
    body: str
    description: str = ""
    is_visible: bool = True
    tags: List[str] = field(default_factory=list)
    file_path: Optional[Path] = None

    @property
    def link(self) -> str:
        return f"/blog/{self.id}/"

    @staticmethod
    def split_front_matter(text: str) -> Tuple[str, str]:
        """Return ``(front_matter, body)``; front matter is empty if absent."""
        if not text.startswith("---"):
            return "", text
        lines = text.splitlines(keepends=True)
        if lines[0].strip() != "---":
            return "", text
        for i in range(1, len(lines)):
            if lines[i].strip() == "---":
                return "".join(lines[1:i]), "".join(lines[i + 1 :])
        raise ContentError("Front matter is not terminated by '---'")

    @staticmethod
    def _coerce_date(value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip())
            except ValueError as exc:
                raise ContentError(f"Invalid date: {value!r}") from exc
        else:
            raise ContentError(f"Invalid date: {value!r}")
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @classmethod
    def from_text(cls, post_id: str, text: str, path: Optional[Path] = None) -> "Post":
        front, body = cls.split_front_matter(text)
        try:
            meta: Dict[str, Any] = (yaml.safe_load(front) or {}) if front else {}
        except yaml.YAMLError as exc:
            raise ContentError(f"Invalid front matter: {exc}") from exc
        if not isinstance(meta, dict):
            raise ContentError("Front matter must be a mapping")
        if not meta.get("title"):
            raise ContentError("Front matter is missing 'title'")
        if meta.get("date") is None:
            raise ContentError("Front matter is missing 'date'")
        tags = meta.get("tags") or []
        if isinstance(tags, str):
            tags = [tags]
        return cls(
            id=post_id,
            title=str(meta["title"]),
            date=cls._coerce_date(meta["date"]),
            body=body.lstrip("\n"),
            description=str(meta.get("description") or ""),
            is_visible=bool(meta.get("isVisible", True)),
            tags=[str(t) for t in tags],
            file_path=path,
        )
