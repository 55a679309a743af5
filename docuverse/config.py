"""YAML site configuration: the curated post list and known authors.

Example::

    blog_posts:
      - url: https://example.com/blog/ownership
        category: Learning
      - url: https://example.dreamwidth.org/1234.html
        publish: false

    authors:
      - name: Jane Smith
        github: jsmith
        blog: https://example.com/blog/
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_CATEGORY = "Uncategorized"


class ConfigError(ValueError):
    """Raised when the configuration file cannot be read or is invalid."""


def _check_http_url(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"not an absolute http(s) URL: {v!r}")
    return v


class BlogPost(BaseModel):
    url: str
    category: str = DEFAULT_CATEGORY
    publish: bool = True

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, v: Any) -> Any:
        return _check_http_url(v)

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CATEGORY
        return v


class Author(BaseModel):
    name: str
    github: str | None = None
    blog: str | None = None

    @field_validator("blog", mode="before")
    @classmethod
    def check_blog(cls, v: Any) -> Any:
        return _check_http_url(v)


class Config(BaseModel):
    blog_posts: list[BlogPost] = Field(default_factory=list)
    authors: list[Author] = Field(default_factory=list)

    def published_posts(self) -> list[BlogPost]:
        return [p for p in self.blog_posts if p.publish]

    def matching(self, url_regex: str) -> list[BlogPost]:
        """Return posts whose URL matches *url_regex* (``re.search`` semantics)."""
        pattern = re.compile(url_regex)
        return [p for p in self.blog_posts if pattern.search(p.url)]


def parse_config(text: str) -> Config:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"parsing config: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("config must be a mapping at the top level")
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def load_config(path: str | Path) -> Config:
    """Load and validate the configuration at *path*.

    Raises:
        ConfigError: if the file is missing, not YAML, or fails validation.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"reading config {path}: {exc}") from exc
    return parse_config(text)
