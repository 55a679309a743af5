"""Tests for docuverse.http_cache and docuverse.fetch."""

from __future__ import annotations

import gzip
import urllib.error
from email.message import Message
from unittest.mock import MagicMock, patch

import pytest

from docuverse.fetch import FetchError, fetch_html
from docuverse.http_cache import HttpCache, url_hash

URL = "https://example.com/blog/post"


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

class TestUrlHash:
    def test_forty_hex_chars(self):
        key = url_hash(URL)
        assert len(key) == 40
        int(key, 16)

    def test_stable_and_distinct(self):
        assert url_hash(URL) == url_hash(URL)
        assert url_hash(URL) != url_hash(URL + "/")


class TestHttpCache:
    def test_miss_fetches_and_stores(self, tmp_path):
        fetcher = MagicMock(return_value="<html>body</html>")
        cache = HttpCache(tmp_path / "cache", fetcher=fetcher)

        assert not cache.contains(URL)
        assert cache.get(URL) == "<html>body</html>"
        fetcher.assert_called_once_with(URL)
        assert cache.contains(URL)
        assert cache.path_for(URL).read_text(encoding="utf-8") == "<html>body</html>"

    def test_hit_does_not_fetch(self, tmp_path):
        fetcher = MagicMock(return_value="first")
        cache = HttpCache(tmp_path, fetcher=fetcher)
        cache.get(URL)
        fetcher.return_value = "second"
        assert cache.get(URL) == "first"
        assert fetcher.call_count == 1

    def test_prepopulated_entry(self, tmp_path):
        fetcher = MagicMock()
        cache = HttpCache(tmp_path, fetcher=fetcher)
        cache.path_for(URL).write_text("cached", encoding="utf-8")
        assert cache.get(URL) == "cached"
        fetcher.assert_not_called()

    def test_fetch_error_leaves_no_entry(self, tmp_path):
        fetcher = MagicMock(side_effect=FetchError("boom", url=URL))
        cache = HttpCache(tmp_path / "cache", fetcher=fetcher)
        with pytest.raises(FetchError):
            cache.get(URL)
        assert not cache.contains(URL)

    def test_no_temp_files_left(self, tmp_path):
        cache = HttpCache(tmp_path, fetcher=lambda url: "x")
        cache.get(URL)
        assert [p.name for p in tmp_path.iterdir()] == [url_hash(URL)]


# ---------------------------------------------------------------------------
# fetch_html
# ---------------------------------------------------------------------------

def _headers(**values: str) -> Message:
    msg = Message()
    for key, value in values.items():
        msg[key.replace("_", "-")] = value
    return msg


def _response(body: bytes, headers: Message) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = body
    resp.headers = headers
    cm = MagicMock()
    cm.__enter__.return_value = resp
    return cm


class TestFetchHtml:
    def test_unsupported_scheme(self):
        with pytest.raises(FetchError):
            fetch_html("ftp://example.com/file")

    def test_plain_body(self):
        headers = _headers(Content_Type="text/html; charset=utf-8")
        with patch("docuverse.fetch.urllib.request.urlopen",
                   return_value=_response("héllo".encode(), headers)):
            assert fetch_html(URL) == "héllo"

    def test_gzip_body(self):
        headers = _headers(Content_Type="text/html", Content_Encoding="gzip")
        with patch("docuverse.fetch.urllib.request.urlopen",
                   return_value=_response(gzip.compress(b"<p>zipped</p>"), headers)):
            assert fetch_html(URL) == "<p>zipped</p>"

    def test_not_found_is_not_retried(self):
        err = urllib.error.HTTPError(URL, 404, "Not Found", _headers(), None)
        with patch("docuverse.fetch.urllib.request.urlopen", side_effect=err) as mock_open:
            with pytest.raises(FetchError) as exc_info:
                fetch_html(URL)
        assert exc_info.value.status == 404
        assert mock_open.call_count == 1

    def test_server_error_is_retried(self):
        err = urllib.error.HTTPError(URL, 503, "Unavailable", _headers(), None)
        with patch("docuverse.fetch.urllib.request.urlopen", side_effect=err) as mock_open, \
             patch("docuverse.fetch.time.sleep") as mock_sleep:
            with pytest.raises(FetchError) as exc_info:
                fetch_html(URL, max_retries=2)
        assert exc_info.value.status == 503
        assert mock_open.call_count == 3
        assert mock_sleep.call_count == 2

    def test_network_error(self):
        err = urllib.error.URLError("connection refused")
        with patch("docuverse.fetch.urllib.request.urlopen", side_effect=err), \
             patch("docuverse.fetch.time.sleep"):
            with pytest.raises(FetchError, match="connection refused"):
                fetch_html(URL, max_retries=1)
