from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from email.utils import format_datetime
from datetime import timezone
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import urljoin

from devblog.models.post import Post
from devblog.services.content_service import sort_posts
from devblog.services.markdown_service import MarkdownService

logger = logging.getLogger(__name__)

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
ET.register_namespace("content", CONTENT_NS)


class FeedService:
    """Builds the RSS 2.0 document for the blog."""

    def __init__(
        self,
        title: str,
        description: str,
        site_url: str,
        markdown_service: Optional[MarkdownService] = None,
    ) -> None:
        self.title = title
        self.description = description
        self.site_url = site_url if site_url.endswith("/") else site_url + "/"
        self.markdown = markdown_service or MarkdownService()

    def _item(self, channel: ET.Element, post: Post) -> None:
        link = urljoin(self.site_url, post.link.lstrip("/"))
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = post.title
        ET.SubElement(item, "link").text = link
        ET.SubElement(item, "guid", isPermaLink="true").text = link
        if post.description:
            ET.SubElement(item, "description").text = post.description
        pub_date = post.date.astimezone(timezone.utc)
        ET.SubElement(item, "pubDate").text = format_datetime(pub_date, usegmt=True)
        for tag in post.tags:
            ET.SubElement(item, "category").text = tag
        content = ET.SubElement(item, f"{{{CONTENT_NS}}}encoded")
        content.text = self.markdown.to_html(post.body)

    def build(self, posts: Iterable[Post]) -> ET.Element:
        rss = ET.Element("rss", version="2.0")
        channel = ET.SubElement(rss, "channel")
        ET.SubElement(channel, "title").text = self.title
        ET.SubElement(channel, "description").text = self.description
        ET.SubElement(channel, "link").text = self.site_url
        for post in sort_posts(posts):
            self._item(channel, post)
        return rss

    def render(self, posts: Iterable[Post]) -> str:
        body = ET.tostring(self.build(posts), encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8"?>' + body

    def write(self, posts: Iterable[Post], path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(posts), encoding="utf-8")
        logger.info("Wrote feed to %s", path)
        return path
