"""Content-addressed on-disk cache of fetched pages.

Each response body is stored under a file named by a hash of its URL.  The
cache never expires entries; delete the directory to refetch.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from docuverse.fetch import fetch_html

logger = logging.getLogger(__name__)

# Number of BLAKE2b digest bytes kept in the cache key
_KEY_BYTES = 20


def url_hash(url: str) -> str:
    """Return the hex cache key for *url*."""
    return hashlib.blake2b(url.encode("utf-8")).digest()[:_KEY_BYTES].hex()


class HttpCache:
    """Read-through cache in front of a fetch function.

    Safe to share between worker threads: reads never block, and each write
    lands atomically via a temporary file renamed into place.
    """

    def __init__(self, cache_dir: Path, fetcher: Callable[[str], str] = fetch_html) -> None:
        self.cache_dir = Path(cache_dir)
        self._fetcher = fetcher

    def path_for(self, url: str) -> Path:
        return self.cache_dir / url_hash(url)

    def contains(self, url: str) -> bool:
        return self.path_for(url).is_file()

    def get(self, url: str) -> str:
        """Return the body for *url*, fetching and storing it on a miss.

        Raises:
            FetchError: if the page is not cached and cannot be fetched.
        """
        path = self.path_for(url)
        logger.debug("fetching %s (key %s)", url, path.name)
        try:
            body = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            pass
        else:
            logger.debug("cache hit for %s", url)
            return body

        body = self._fetcher(url)
        self._store(path, body)
        logger.debug("wrote cache for %s to %s", url, path)
        return body

    def _store(self, path: Path, body: str) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(body)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
