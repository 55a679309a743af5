"""Plain HTTP fetching of blog post pages.

Uses only the stdlib (``urllib``) for HTTP.  Transient failures are retried
with jittered exponential backoff.
"""

from __future__ import annotations

import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_DEFAULT_UA = "docuverse/0.1 (+static blog republisher)"

_RETRY_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        encoding = str(headers.get("Content-Encoding", "")).lower().strip()

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc

    charset = "utf-8"
    if headers is not None:
        charset = headers.get_content_charset("utf-8") or "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def _backoff(attempt: int, retry_after: int = 0) -> float:
    return max(retry_after, 2 ** attempt) + random.uniform(0, 1)


def fetch_html(
    url: str,
    *,
    timeout: int = 30,
    user_agent: str | None = None,
    max_retries: int = 3,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Args:
        url:         Fully-qualified HTTP/HTTPS URL.
        timeout:     Request timeout in seconds (default 30).
        user_agent:  Override the default User-Agent string.
        max_retries: Maximum number of retry attempts (default 3).

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or _DEFAULT_UA,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    last_exc: FetchError | None = None
    for attempt in range(max_retries + 1):
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return _decode_response_body(resp.read(), resp.headers, url)

        except urllib.error.HTTPError as exc:
            error = FetchError(
                f"HTTP {exc.code} fetching {url}: {exc.reason}", url=url, status=exc.code,
            )
            if exc.code in _RETRY_CODES and attempt < max_retries:
                ra_header = exc.headers.get("Retry-After", "") if exc.headers else ""
                retry_after = int(ra_header) if ra_header.strip().isdigit() else 0
                delay = _backoff(attempt, retry_after)
                logger.debug(
                    "HTTP %d for %s - retrying in %.1fs (attempt %d/%d)",
                    exc.code, url, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                last_exc = error
                continue
            raise error from exc

        except urllib.error.URLError as exc:
            error = FetchError(f"URL error fetching {url}: {exc.reason}", url=url)
            if attempt < max_retries:
                delay = _backoff(attempt)
                logger.debug(
                    "URL error for %s - retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc.reason,
                )
                time.sleep(delay)
                last_exc = error
                continue
            raise error from exc

        except OSError as exc:
            error = FetchError(f"Network error fetching {url}: {exc}", url=url)
            if attempt < max_retries:
                delay = _backoff(attempt)
                logger.debug(
                    "Network error for %s - retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc,
                )
                time.sleep(delay)
                last_exc = error
                continue
            raise error from exc

    raise last_exc or FetchError(f"All retries exhausted for {url}", url=url)
