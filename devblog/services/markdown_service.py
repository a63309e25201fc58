from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

import bleach
import markdown

# Block, inline and table elements considered safe in feed content, on top
# of bleach's own minimal default list.
DEFAULT_ALLOWED_TAGS: FrozenSet[str] = frozenset(bleach.sanitizer.ALLOWED_TAGS) | {
    "address", "article", "aside", "footer", "header", "h1", "h2", "h3",
    "h4", "h5", "h6", "hgroup", "main", "nav", "section", "dd", "div", "dl",
    "dt", "figcaption", "figure", "hr", "p", "pre", "bdi", "bdo", "br",
    "cite", "data", "dfn", "kbd", "mark", "q", "rb", "rp", "rt", "rtc",
    "ruby", "s", "samp", "small", "span", "sub", "sup", "time", "u", "var",
    "wbr", "caption", "col", "colgroup", "table", "tbody", "td", "tfoot",
    "th", "thead", "tr",
}

DEFAULT_ALLOWED_ATTRIBUTES: Dict[str, List[str]] = {
    "a": ["href", "name", "target", "title"],
    "img": ["src", "srcset", "alt", "title", "width", "height", "loading"],
    "abbr": ["title"],
    "acronym": ["title"],
    "code": ["class"],
    "td": ["align"],
    "th": ["align"],
}


@dataclass
class MarkdownService:
    """Renders post bodies to sanitized HTML.

    Inline images are allowed in addition to the default tag set.
    JSX components embedded in ``.mdx`` files are not processed; they come
    out as escaped or stripped text.
    """

    extensions: List[str] = field(default_factory=lambda: ["fenced_code", "tables"])
    allowed_tags: FrozenSet[str] = DEFAULT_ALLOWED_TAGS | {"img"}
    allowed_attributes: Dict[str, List[str]] = field(
        default_factory=lambda: dict(DEFAULT_ALLOWED_ATTRIBUTES)
    )

    def render(self, markdown_text: str) -> str:
        return markdown.markdown(markdown_text, extensions=self.extensions)

    def sanitize(self, html: str) -> str:
        return bleach.clean(
            html,
            tags=self.allowed_tags,
            attributes=self.allowed_attributes,
            strip=True,
        )

    def to_html(self, markdown_text: str) -> str:
        return self.sanitize(self.render(markdown_text))
