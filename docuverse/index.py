"""Site index page: every rendered post, grouped by category."""

from __future__ import annotations

import html
import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from docuverse.config import BlogPost
from docuverse.render import HeaderMeta, render_page

logger = logging.getLogger(__name__)

SITE_TITLE = "The Rust Docuverse"


@dataclass
class IndexEntry:
    post: BlogPost
    title: str
    file_name: str


def categorize(entries: list[IndexEntry]) -> dict[str, list[IndexEntry]]:
    """Group *entries* by category; categories sorted, entries in input order."""
    groups: dict[str, list[IndexEntry]] = defaultdict(list)
    for entry in entries:
        groups[entry.post.category].append(entry)
    return {category: groups[category] for category in sorted(groups)}


def render_index(entries: list[IndexEntry]) -> str:
    body = ["<main>", f"<h1>{html.escape(SITE_TITLE)}</h1>"]
    for category, group in categorize(entries).items():
        body.append("<section>")
        body.append(f"<h2>{html.escape(category)}</h2>")
        for entry in group:
            body.append(
                f"<p><a href='./p/{entry.file_name}.html'>{html.escape(entry.title)}</a></p>"
            )
        body.append("</section>")
    body.append("</main>")
    return render_page(HeaderMeta(title=SITE_TITLE, css_prefix="./css/"), body)


def write_index(out_dir: Path, entries: list[IndexEntry]) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    index_file = out_dir / "index.html"
    index_file.write_text(render_index(entries), encoding="utf-8")
    logger.info("index written to %s", index_file)
    return index_file
