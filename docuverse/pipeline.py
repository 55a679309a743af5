"""Per-post pipeline (locate → build → backfill → render) and site assembly.

Every post is converted independently; a failure on one post is logged and
recorded on its :class:`PostResult` and never stops the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from docuverse.assets import AssetDirs, copy_assets
from docuverse.author import create_author_maps, write_author_pages
from docuverse.config import BlogPost, Config
from docuverse.doc import Document
from docuverse.extractors.blocks import build_document
from docuverse.extractors.main_content import CandidateKind, LocatorMiss, locate_article
from docuverse.extractors.title import TitleMiss, backfill_title, require_title
from docuverse.extractors.tree import parse_html
from docuverse.fetch import FetchError
from docuverse.index import IndexEntry, write_index
from docuverse.render import HeaderMeta, to_string
from docuverse.sanitize import title_to_slug

logger = logging.getLogger(__name__)


class ConvertedPost(NamedTuple):
    document: Document
    kind: CandidateKind


@dataclass
class PostResult:
    post: BlogPost
    title: str | None = None
    file_name: str | None = None
    html: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert_page(page_html: str, url: str) -> ConvertedPost:
    """Locate the article in *page_html* and convert it into a repaired Document.

    Raises:
        LocatorMiss: if the page has no article candidate.
    """
    page = parse_html(page_html)
    candidate = locate_article(page)
    doc = build_document(candidate.node, url)
    backfill_title(doc, page, candidate.kind)
    return ConvertedPost(doc, candidate.kind)


def process_post(post: BlogPost, page_html: str) -> PostResult:
    """Run the full pipeline for one post, reporting failures on the result."""
    try:
        converted = convert_page(page_html, post.url)
        text = require_title(converted.document)
    except LocatorMiss:
        logger.warning("no article found in %s", post.url)
        return PostResult(post, error="no article candidate")
    except TitleMiss:
        logger.warning("no title found for %s", post.url)
        return PostResult(post, error="no title")

    file_name = title_to_slug(text)
    if not file_name:
        logger.warning("title %r of %s has no usable slug", text, post.url)
        return PostResult(post, title=text, error="title has no usable slug")

    rendered = to_string(converted.document, HeaderMeta(title=text))
    return PostResult(post, title=text, file_name=file_name, html=rendered)


def process_batch(
    posts: list[BlogPost],
    fetch: Callable[[str], str],
    *,
    max_workers: int = 8,
) -> list[PostResult]:
    """Fetch and process *posts* concurrently; results keep the input order."""
    results: list[PostResult | None] = [None] * len(posts)

    def _process_one(idx: int, post: BlogPost) -> tuple[int, PostResult]:
        try:
            page_html = fetch(post.url)
        except FetchError as exc:
            logger.warning("failed to fetch %s: %s", post.url, exc)
            return idx, PostResult(post, error=f"fetch failed: {exc}")
        except Exception as exc:
            # Cache I/O and decoding failures also stay with their post
            logger.warning("failed to read %s: %s", post.url, exc)
            return idx, PostResult(post, error=f"fetch failed: {exc}")
        try:
            return idx, process_post(post, page_html)
        except Exception as exc:
            logger.warning("failed to process %s: %s", post.url, exc)
            return idx, PostResult(post, error=f"processing failed: {exc}")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_process_one, i, post) for i, post in enumerate(posts)]
        for future in as_completed(futures):
            idx, result = future.result()
            results[idx] = result

    return [r for r in results if r is not None]


def _unique_slug(slug: str, seen: set[str]) -> str:
    """Append -2, -3, … until *slug* is not in *seen*."""
    candidate = slug
    counter = 2
    while candidate in seen:
        candidate = f"{slug}-{counter}"
        counter += 1
    seen.add(candidate)
    return candidate


def write_site(out_dir: Path, config: Config, results: list[PostResult]) -> list[IndexEntry]:
    """Write rendered posts, the index, author pages, and stylesheets under *out_dir*."""
    post_dir = out_dir / "p"
    post_dir.mkdir(parents=True, exist_ok=True)

    entries: list[IndexEntry] = []
    seen: set[str] = set()
    for result in results:
        if not result.ok or result.html is None or result.file_name is None:
            continue
        assert result.title is not None
        file_name = _unique_slug(result.file_name, seen)
        path = post_dir / f"{file_name}.html"
        path.write_text(result.html, encoding="utf-8")
        logger.info("post written to %s", path)
        entries.append(IndexEntry(post=result.post, title=result.title, file_name=file_name))

    write_index(out_dir, entries)
    write_author_pages(out_dir, config, entries, create_author_maps(config))
    copy_assets(AssetDirs(css_dir=out_dir / "css"))
    return entries
