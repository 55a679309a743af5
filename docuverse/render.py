"""Serialize a :class:`~docuverse.doc.Document` back to a standalone HTML page.

The renderer mirrors the converter: each block kind maps to exactly one tag
and nested blocks are rendered recursively.  Inline content is written
without surrounding whitespace so a rendered page converts back to the same
blocks.  Input is trusted to be well-formed; nothing is re-validated here.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from docuverse.assets import BLOG_CSS_FILE, MAIN_CSS_FILE, RESET_CSS_FILE
from docuverse.doc import (
    Block,
    Blockquote,
    Bold,
    Code,
    CodeBlock,
    CodeLanguage,
    Document,
    Heading,
    Inline,
    Italic,
    List,
    ListKind,
    Paragraph,
    Text,
    ThematicBreak,
)


@dataclass
class HeaderMeta:
    """Page-level ``<head>`` settings."""

    title: str | None = None
    css_prefix: str = "../css/"


def render_head(meta: HeaderMeta) -> list[str]:
    lines = ["<head>", "  <meta charset='utf-8'>"]
    if meta.title:
        lines.append(f"  <title>{html.escape(meta.title)}</title>")
    for css in (RESET_CSS_FILE, MAIN_CSS_FILE, BLOG_CSS_FILE):
        lines.append(f"  <link rel='stylesheet' href='{meta.css_prefix}{css}'>")
    lines.append("</head>")
    return lines


def render_page(head: HeaderMeta, body_lines: list[str]) -> str:
    """Wrap *body_lines* (already inside ``<body>``) into a complete page."""
    lines = ["<!doctype html>", "<html lang='en'>", ""]
    lines.extend(render_head(head))
    lines.append("")
    lines.append("<body>")
    lines.extend(body_lines)
    lines.append("</body>")
    lines.append("</html>")
    lines.append("")
    return "\n".join(lines)


def to_string(doc: Document, head: HeaderMeta | None = None) -> str:
    """Render *doc* as a full HTML page."""
    body = ["<main>", "<article>"]
    body.extend(render_block(block) for block in doc.body.blocks)
    body.extend(["</article>", "</main>"])
    return render_page(head or HeaderMeta(), body)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def render_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f"<h{block.level}>{render_inlines(block.inlines)}</h{block.level}>"
    if isinstance(block, Paragraph):
        return f"<p>{render_inlines(block.inlines)}</p>"
    if isinstance(block, List):
        tag = "ol" if block.kind is ListKind.ORDERED else "ul"
        items = "\n".join(
            f"<li>{render_blocks(item.blocks)}</li>" for item in block.items
        )
        return f"<{tag}>\n{items}\n</{tag}>"
    if isinstance(block, Blockquote):
        return f"<blockquote>\n{render_blocks(block.blocks)}\n</blockquote>"
    if isinstance(block, CodeBlock):
        if block.lang is CodeLanguage.UNKNOWN:
            open_code = "<code>"
        else:
            open_code = f"<code class='language-{block.lang.value}'>"
        return f"<pre>{open_code}{render_inlines(block.inlines)}</code></pre>"
    if isinstance(block, ThematicBreak):
        return "<hr/>"
    raise TypeError(f"unknown block: {block!r}")


def render_blocks(blocks: list[Block]) -> str:
    return "\n".join(render_block(b) for b in blocks)


# ---------------------------------------------------------------------------
# Inlines
# ---------------------------------------------------------------------------

def render_inline(inline: Inline) -> str:
    if isinstance(inline, Text):
        return html.escape(inline.text, quote=False)
    if isinstance(inline, Bold):
        return f"<b>{render_inline(inline.inner)}</b>"
    if isinstance(inline, Italic):
        return f"<i>{render_inline(inline.inner)}</i>"
    if isinstance(inline, Code):
        return f"<code>{render_inline(inline.inner)}</code>"
    raise TypeError(f"unknown inline: {inline!r}")


def render_inlines(inlines: list[Inline]) -> str:
    return "".join(render_inline(i) for i in inlines)
