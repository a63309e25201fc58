import json
from pathlib import Path

import pytest

from devblog.config import ConfigError, SiteConfig
from devblog.ui.theme import DARK_THEME, LIGHT_THEME, feedback_colors, theme_by_name


def test_missing_file_gives_defaults(tmp_path):
    config = SiteConfig.load(tmp_path / "site.json")
    assert config == SiteConfig()
    assert config.debounce_ms == 300
    assert config.build_delay_ms == 2000


def test_values_and_relative_paths(tmp_path):
    path = tmp_path / "site.json"
    path.write_text(
        json.dumps(
            {
                "title": "My Blog",
                "content_dir": "posts",
                "feed_path": "/srv/rss.xml",
                "debounce_ms": 150,
                "theme": "light",
                "unknown": True,
            }
        ),
        encoding="utf-8",
    )
    config = SiteConfig.load(path)
    assert config.title == "My Blog"
    assert config.content_dir == tmp_path / "posts"
    assert config.feed_path == Path("/srv/rss.xml")
    assert config.debounce_ms == 150
    assert config.theme == "light"


@pytest.mark.parametrize(
    "data, message",
    [
        ({"debounce_ms": -1}, "non-negative integer"),
        ({"debounce_ms": True}, "non-negative integer"),
        ({"content_dir": 3}, "path string"),
        ({"title": ["x"]}, "must be a string"),
        ({"theme": "neon"}, "theme"),
    ],
)
def test_invalid_values_raise(data, message):
    with pytest.raises(ConfigError, match=message):
        SiteConfig.from_dict(data)


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "site.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid JSON"):
        SiteConfig.load(path)
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="expected a JSON object"):
        SiteConfig.load(path)


def test_theme_lookup_and_feedback_colors():
    assert theme_by_name("light") is LIGHT_THEME
    assert theme_by_name("other") is DARK_THEME
    assert feedback_colors(DARK_THEME, "error") == (DARK_THEME.error_bg, DARK_THEME.error_fg)
    assert feedback_colors(DARK_THEME, "info") == (DARK_THEME.info_bg, DARK_THEME.info_fg)
    assert feedback_colors(DARK_THEME, "success") == (
        DARK_THEME.success_bg,
        DARK_THEME.success_fg,
    )
