"""Per-author pages linking to the posts hosted on each author's blog."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path

from docuverse.config import Author, Config
from docuverse.index import SITE_TITLE, IndexEntry
from docuverse.render import HeaderMeta, render_page
from docuverse.sanitize import name_to_slug

logger = logging.getLogger(__name__)


@dataclass
class AuthorMaps:
    blog_post_author: dict[str, str] = field(default_factory=dict)
    author_blog_posts: dict[str, set[str]] = field(default_factory=dict)


def create_author_maps(config: Config) -> AuthorMaps:
    """Attribute each post to the author whose blog URL prefixes the post URL."""
    maps = AuthorMaps()
    for post in config.blog_posts:
        for author in config.authors:
            if author.blog and post.url.startswith(author.blog):
                maps.blog_post_author[post.url] = author.name
                maps.author_blog_posts.setdefault(author.name, set()).add(post.url)
    return maps


def render_author_page(author: Author, entries: list[IndexEntry], maps: AuthorMaps) -> str:
    urls = maps.author_blog_posts.get(author.name, set())
    name = html.escape(author.name)

    body = ["<main>", f"<h1>{name}</h1>"]
    if author.github:
        gh = html.escape(author.github)
        body.append(
            f"<div><p>GitHub: <a href='https://github.com/{gh}'>@{gh}</a></p></div>"
        )
    if author.blog:
        blog = html.escape(author.blog)
        body.append(f"<div><p>Blog: <a href='{blog}'>{blog}</a></p></div>")

    body.append("<div>")
    body.append("<h2>Blog posts</h2>")
    for entry in entries:
        if entry.post.url not in urls:
            continue
        body.append(
            f"<div><p><a href='../p/{entry.file_name}.html'>{html.escape(entry.title)}</a></p></div>"
        )
    body.append("</div>")
    body.append("</main>")
    return render_page(HeaderMeta(title=f"{author.name} - {SITE_TITLE}"), body)


def write_author_pages(
    out_dir: Path,
    config: Config,
    entries: list[IndexEntry],
    maps: AuthorMaps,
) -> list[Path]:
    """Write ``a/<author-slug>.html`` for every configured author."""
    author_dir = out_dir / "a"
    author_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for author in config.authors:
        slug = name_to_slug(author.name)
        if not slug:
            logger.warning("author name %r has no usable slug, skipping page", author.name)
            continue
        path = author_dir / f"{slug}.html"
        path.write_text(render_author_page(author, entries, maps), encoding="utf-8")
        logger.info("author written to %s", path)
        written.append(path)
    return written
