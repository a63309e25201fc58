from datetime import datetime, timezone

import pytest

from devblog.models.post import ContentError, Post
from devblog.services.content_service import ContentService


def write_post(root, rel, text):
    path = root / "blog" / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


POST = """---
title: First steps
date: 2024-01-05
description: Getting started
tags: [docker, intro]
---

Hello **world**.
"""


def test_post_from_text_parses_front_matter():
    post = Post.from_text("first", POST)
    assert post.title == "First steps"
    assert post.date == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert post.description == "Getting started"
    assert post.tags == ["docker", "intro"]
    assert post.is_visible
    assert post.body == "Hello **world**.\n"
    assert post.link == "/blog/first/"


def test_single_tag_string_and_timezone_kept():
    text = "---\ntitle: T\ndate: '2024-03-01T10:00:00+02:00'\ntags: docker\nisVisible: false\n---\nbody"
    post = Post.from_text("t", text)
    assert post.tags == ["docker"]
    assert post.date.utcoffset().total_seconds() == 7200
    assert not post.is_visible


@pytest.mark.parametrize(
    "text, message",
    [
        ("---\ndate: 2024-01-01\n---\n", "missing 'title'"),
        ("---\ntitle: x\n---\n", "missing 'date'"),
        ("---\ntitle: x\ndate: someday\n---\n", "Invalid date"),
        ("---\ntitle: x\n", "not terminated"),
        ("---\n- a\n---\n", "must be a mapping"),
        ("---\ntitle: [x\n---\n", "Invalid front matter"),
    ],
)
def test_bad_front_matter_raises(text, message):
    with pytest.raises(ContentError, match=message):
        Post.from_text("bad", text)


def test_load_all_and_visible_posts(tmp_path):
    write_post(tmp_path, "old.md", "---\ntitle: Old\ndate: 2023-06-01\n---\nold")
    write_post(tmp_path, "guides/new.mdx", "---\ntitle: New\ndate: 2024-06-01\n---\nnew")
    write_post(tmp_path, "hidden.md", "---\ntitle: Hidden\ndate: 2025-01-01\nisVisible: false\n---\n")
    write_post(tmp_path, "notes.txt", "not a post")

    service = ContentService(tmp_path)
    assert sorted(p.id for p in service.load_all()) == ["guides/new", "hidden", "old"]
    assert [p.title for p in service.visible_posts()] == ["New", "Old"]


def test_get_by_id(tmp_path):
    write_post(tmp_path, "guides/new.mdx", "---\ntitle: New\ndate: 2024-06-01\n---\nnew")
    service = ContentService(tmp_path)
    assert service.get("guides/new").title == "New"
    assert service.get("missing") is None


def test_missing_blog_dir_yields_no_posts(tmp_path):
    assert ContentService(tmp_path / "nowhere").load_all() == []


def test_read_error_names_the_file(tmp_path):
    path = write_post(tmp_path, "broken.md", "---\ntitle: x\n---\n")
    with pytest.raises(ContentError, match="broken.md"):
        ContentService(tmp_path).load_all()
    assert path.exists()
