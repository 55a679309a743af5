"""Tests for docuverse.config."""

from __future__ import annotations

import pytest

from docuverse.config import DEFAULT_CATEGORY, ConfigError, load_config, parse_config


class TestLoadConfig:
    def test_posts_and_authors(self, config_path):
        config = load_config(config_path)
        assert [p.url for p in config.blog_posts] == [
            "https://example.com/blog/ownership",
            "https://other.example.org/posts/async",
            "https://example.com/blog/draft",
        ]
        assert [a.name for a in config.authors] == ["Jane Smith", "No Blog"]

    def test_defaults(self, config_path):
        config = load_config(config_path)
        post = config.blog_posts[1]
        assert post.category == DEFAULT_CATEGORY
        assert post.publish is True
        assert config.authors[1].blog is None
        assert config.authors[1].github is None

    def test_published_posts(self, config_path):
        config = load_config(config_path)
        assert [p.url for p in config.published_posts()] == [
            "https://example.com/blog/ownership",
            "https://other.example.org/posts/async",
        ]

    def test_matching(self, config_path):
        config = load_config(config_path)
        assert [p.url for p in config.matching(r"example\.com")] == [
            "https://example.com/blog/ownership",
            "https://example.com/blog/draft",
        ]
        assert config.matching("nothing-matches") == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "absent.yaml")


class TestParseConfig:
    def test_empty_document(self):
        config = parse_config("")
        assert config.blog_posts == []
        assert config.authors == []

    def test_blank_category_falls_back(self):
        config = parse_config("blog_posts:\n  - url: https://a.example/x\n    category: ''\n")
        assert config.blog_posts[0].category == DEFAULT_CATEGORY

    def test_url_is_stripped(self):
        config = parse_config("blog_posts:\n  - url: '  https://a.example/x  '\n")
        assert config.blog_posts[0].url == "https://a.example/x"

    @pytest.mark.parametrize(
        "text",
        [
            "blog_posts: [",
            "- just\n- a list\n",
            "blog_posts:\n  - url: not a url\n",
            "blog_posts:\n  - url: ftp://example.com/file\n",
            "blog_posts:\n  - category: Learning\n",
            "authors:\n  - name: X\n    blog: example.com\n",
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(ConfigError):
            parse_config(text)
