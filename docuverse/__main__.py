"""CLI entry point: python -m docuverse [global options] COMMAND [args]"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

from docuverse.config import Config, ConfigError, load_config
from docuverse.extractors.main_content import LocatorMiss, locate_article
from docuverse.extractors.title import title
from docuverse.extractors.tree import dump_tags, parse_html
from docuverse.fetch import FetchError
from docuverse.http_cache import HttpCache
from docuverse.pipeline import PostResult, convert_page, process_batch, write_site

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docuverse",
        description="Republish a curated list of blog posts as a clean static site.",
    )
    parser.add_argument("--data-dir", default="./data", metavar="DIR",
                        help="Cache and output directory (default: ./data)")
    parser.add_argument("--config", default="./config/blog-posts.yaml", metavar="FILE",
                        help="Site configuration (default: ./config/blog-posts.yaml)")
    parser.add_argument("--concurrency", type=int, default=8, metavar="N",
                        help="Posts processed in parallel (default: 8)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: INFO)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("dump-config", help="Print the parsed configuration")
    for name, help_text in (
        ("fetch", "Fill the HTTP cache for posts whose URL matches URL_REGEX"),
        ("extract", "Show the tag outline of the located article"),
        ("convert", "Show the converted document outline"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("url_regex", metavar="URL_REGEX")
    sub.add_parser("render", help="Render every published post and build the site")
    sub.add_parser("index", help="Rebuild the site and report the index page")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_dump_config(config: Config) -> int:
    print(config.model_dump_json(indent=2))
    return 0


def _cmd_fetch(config: Config, cache: HttpCache, url_regex: str) -> int:
    failures = 0
    for post in config.matching(url_regex):
        try:
            cache.get(post.url)
        except FetchError as exc:
            logger.error("%s", exc)
            failures += 1
    return 1 if failures else 0


def _cmd_extract(config: Config, cache: HttpCache, url_regex: str) -> int:
    for post in config.matching(url_regex):
        try:
            page = parse_html(cache.get(post.url))
            candidate = locate_article(page)
        except (FetchError, LocatorMiss) as exc:
            logger.error("%s: %s", post.url, exc)
            continue
        logger.info("%s: %s candidate", post.url, candidate.kind.value)
        for line in dump_tags(candidate.node):
            logger.info("%s", line)
    return 0


def _cmd_convert(config: Config, cache: HttpCache, url_regex: str) -> int:
    for post in config.matching(url_regex):
        try:
            converted = convert_page(cache.get(post.url), post.url)
        except (FetchError, LocatorMiss) as exc:
            logger.error("%s: %s", post.url, exc)
            continue
        doc = converted.document
        logger.info("%s: title %r", post.url, title(doc))
        for block in doc.body.blocks:
            logger.info("  %s", type(block).__name__)
    return 0


def _cmd_render(
    config: Config, cache: HttpCache, out_dir: Path, concurrency: int, *, summary: bool,
) -> int:
    results = process_batch(config.published_posts(), cache.get, max_workers=concurrency)
    entries = write_site(out_dir, config, results)
    if summary:
        _print_summary(results, out_dir)
    else:
        print(out_dir / "index.html")
    logger.info("%d of %d posts rendered", len(entries), len(results))
    return 0


def _print_summary(results: list[PostResult], out_dir: Path) -> None:
    try:
        from rich import box
        from rich.console import Console
        from rich.table import Table
    except ImportError:
        for r in results:
            print(f"{'ok ' if r.ok else 'ERR'} {r.post.url} {r.title or r.error or ''}")
        return

    console = Console()
    tbl = Table(title=f"[bold]Rendered posts -> {out_dir}[/bold]", box=box.SIMPLE_HEAVY)
    tbl.add_column("#", style="dim", justify="right", width=4, no_wrap=True)
    tbl.add_column("Title", style="cyan", max_width=48, no_wrap=True)
    tbl.add_column("Category", style="green", max_width=18, no_wrap=True)
    tbl.add_column("Result", max_width=30, no_wrap=True)
    tbl.add_column("URL", style="blue", max_width=50, no_wrap=True)
    for i, r in enumerate(results, 1):
        status = "[green]ok[/green]" if r.ok else f"[red]{r.error}[/red]"
        tbl.add_row(str(i), r.title or "-", r.post.category, status, r.post.url)
    console.print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    url_regex = getattr(args, "url_regex", None)
    if url_regex is not None:
        try:
            re.compile(url_regex)
        except re.error as exc:
            print(f"ERROR: Invalid URL_REGEX {url_regex!r}: {exc}", file=sys.stderr)
            return 1

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    data_dir = Path(args.data_dir)
    cache = HttpCache(data_dir / "http-cache")
    out_dir = data_dir / "site"

    if args.command == "dump-config":
        return _cmd_dump_config(config)
    if args.command == "fetch":
        return _cmd_fetch(config, cache, args.url_regex)
    if args.command == "extract":
        return _cmd_extract(config, cache, args.url_regex)
    if args.command == "convert":
        return _cmd_convert(config, cache, args.url_regex)
    return _cmd_render(
        config, cache, out_dir, args.concurrency, summary=args.command == "render",
    )


if __name__ == "__main__":
    sys.exit(main())
