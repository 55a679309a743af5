"""docuverse - republish curated blog posts as a clean static site.

Single-page usage::

    from docuverse import convert_page, title, to_string

    converted = convert_page(html, "https://example.com/blog/some-post")
    print(title(converted.document))
    print(to_string(converted.document))

Whole-site usage::

    from docuverse import HttpCache, load_config, process_batch, write_site

    config = load_config("config/blog-posts.yaml")
    cache = HttpCache(Path("data/http-cache"))
    results = process_batch(config.published_posts(), cache.get)
    write_site(Path("data/site"), config, results)
"""

from docuverse.config import ConfigError, load_config
from docuverse.extractors import LocatorMiss, TitleMiss, title
from docuverse.fetch import FetchError
from docuverse.http_cache import HttpCache
from docuverse.pipeline import convert_page, process_batch, process_post, write_site
from docuverse.render import to_string
from docuverse.sanitize import title_to_slug

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "FetchError",
    "HttpCache",
    "LocatorMiss",
    "TitleMiss",
    "convert_page",
    "load_config",
    "process_batch",
    "process_post",
    "title",
    "title_to_slug",
    "to_string",
    "write_site",
]
