"""Parsed HTML tree helpers.

The tree is BeautifulSoup over lxml.  Only two node kinds matter to the
extractors: elements (:class:`~bs4.Tag`) and character data.  Comments,
doctypes, CDATA sections, processing instructions, and the raw text of
``<script>``/``<style>``/``<template>`` are all treated as ignorable.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    NavigableString,
    PageElement,
    PreformattedString,
    Script,
    Stylesheet,
    TemplateString,
)

# Tags not worth showing in a structural dump
_BORING_TAGS: frozenset[str] = frozenset(
    {
        "span", "a", "img", "meta", "link", "script", "nav",
        "form", "fieldset", "input", "sup",
    }
)

_IGNORED_STRINGS = (PreformattedString, Script, Stylesheet, TemplateString)


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* into a best-effort tree.  Never raises on malformed input."""
    return BeautifulSoup(html, "lxml")


def is_text(node: PageElement) -> bool:
    """Return True if *node* is character data that belongs to the content."""
    return isinstance(node, NavigableString) and not isinstance(node, _IGNORED_STRINGS)


def dump_tags(node: Tag) -> list[str]:
    """Return an indented open/close outline of the interesting tags under *node*."""
    lines: list[str] = []

    def _walk(el: Tag, depth: int) -> None:
        for child in el.children:
            if not isinstance(child, Tag):
                continue
            pad = "  " * depth
            shown = child.name not in _BORING_TAGS
            if shown:
                lines.append(f"{pad}<{child.name}>")
            _walk(child, depth + 1)
            if shown:
                lines.append(f"{pad}</{child.name}>")

    _walk(node, 0)
    return lines
