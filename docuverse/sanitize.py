"""Slug generation for output file names."""

from __future__ import annotations

import re

_NON_SLUG_RE = re.compile(r"[^a-z0-9\-]")
_MULTI_DASH_RE = re.compile(r"-{2,}")


def title_to_slug(s: str) -> str:
    """Convert a post title into a lowercase, dash-separated file name stem.

    Example:
        "Hello, Async World!" → "hello-async-world"

    Input that filters down to nothing (or only dashes) yields ``""``.
    """
    slug = s.lower().replace(" ", "-")
    slug = _NON_SLUG_RE.sub("", slug)
    slug = _MULTI_DASH_RE.sub("-", slug)
    if slug.startswith("-"):
        slug = slug[1:]
    if slug.endswith("-"):
        slug = slug[:-1]
    return slug


def name_to_slug(name: str) -> str:
    """Convert an author name into a file name stem."""
    return title_to_slug(name)
