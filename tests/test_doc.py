"""Tests for docuverse.doc."""

from __future__ import annotations

import pytest

from docuverse.doc import Body, Document, Heading, Meta, Paragraph, Text


class TestMeta:
    def test_accepts_http_urls(self):
        assert Meta("https://example.com/x").origin_url == "https://example.com/x"
        assert Meta("http://example.com").origin_url == "http://example.com"

    @pytest.mark.parametrize("url", ["", "example.com/x", "/relative", "ftp://example.com/x"])
    def test_rejects_non_http_urls(self, url):
        with pytest.raises(ValueError):
            Meta(url)


class TestHeading:
    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_rejects_bad_level(self, level):
        with pytest.raises(ValueError):
            Heading(level, [])


class TestDocument:
    def test_blocks_alias(self):
        doc = Document(meta=Meta("https://example.com"), body=Body([Paragraph([Text("x")])]))
        assert doc.blocks is doc.body.blocks

    def test_default_body_is_empty_and_unshared(self):
        a = Document(meta=Meta("https://example.com"))
        b = Document(meta=Meta("https://example.com"))
        a.body.blocks.append(Paragraph([]))
        assert b.body.blocks == []
