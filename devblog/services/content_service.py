from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from devblog.models.post import ContentError, Post

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".mdx")


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Visible posts only, newest first."""
    return sorted((p for p in posts if p.is_visible), key=lambda p: p.date, reverse=True)


class ContentService:
    """Loads blog posts from ``<content_dir>/blog``."""

    def __init__(self, content_dir: Path, encoding: str = "utf-8") -> None:
        self.content_dir = content_dir
        self.encoding = encoding

    @property
    def blog_dir(self) -> Path:
        return self.content_dir / "blog"

    def _post_id(self, path: Path) -> str:
        return path.relative_to(self.blog_dir).with_suffix("").as_posix()

    def read(self, path: Path) -> Post:
        text = path.read_text(encoding=self.encoding)
        try:
            return Post.from_text(self._post_id(path), text, path=path)
        except ContentError as exc:
            raise ContentError(f"{path}: {exc}") from exc

    def load_all(self) -> List[Post]:
        if not self.blog_dir.is_dir():
            logger.warning("No blog directory at %s", self.blog_dir)
            return []
        paths = sorted(
            p for p in self.blog_dir.rglob("*") if p.is_file() and p.suffix.lower() in POST_SUFFIXES
        )
        posts = [self.read(p) for p in paths]
        logger.debug("Loaded %d posts from %s", len(posts), self.blog_dir)
        return posts

    def visible_posts(self) -> List[Post]:
        return sort_posts(self.load_all())

    def get(self, post_id: str) -> Optional[Post]:
        for suffix in POST_SUFFIXES:
            path = self.blog_dir / f"{post_id}{suffix}"
            if path.is_file():
                return self.read(path)
        return None
