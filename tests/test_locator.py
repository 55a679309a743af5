"""Tests for docuverse.extractors.main_content (article location)."""

from __future__ import annotations

import logging

import pytest

from docuverse.extractors.main_content import (
    CandidateKind,
    LocatorMiss,
    classify_candidate,
    locate_article,
)
from docuverse.extractors.tree import parse_html


def _locate(html: str):
    return locate_article(parse_html(html))


# ---------------------------------------------------------------------------
# Candidate patterns
# ---------------------------------------------------------------------------

class TestClassifyCandidate:
    @pytest.mark.parametrize(
        ("html", "expected"),
        [
            ("<article></article>", CandidateKind.ARTICLE),
            ("<main></main>", CandidateKind.MAIN),
            ('<div id="content"></div>', CandidateKind.CONTENT_DIV),
            ('<div id="entry-42"></div>', CandidateKind.DREAMWIDTH),
            ('<div id="entry-wrapper-42"></div>', None),
            ('<div id="contents"></div>', None),
            ('<section id="content"></section>', None),
            ("<div></div>", None),
        ],
    )
    def test_patterns(self, html, expected):
        soup = parse_html(html)
        tag = soup.find(["article", "main", "div", "section"])
        assert classify_candidate(tag) is expected


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

class TestLocateArticle:
    def test_single_article(self):
        found = _locate("<body><article><p>x</p></article></body>")
        assert found.kind is CandidateKind.ARTICLE
        assert found.node.name == "article"

    def test_main_upgrades_to_nested_article(self):
        found = _locate("<body><main><p>intro</p><article id='a'><p>x</p></article></main></body>")
        assert found.kind is CandidateKind.ARTICLE
        assert found.node.get("id") == "a"

    def test_content_div_upgrades_to_dreamwidth_entry(self):
        found = _locate('<body><div id="content"><div id="entry-42"><p>x</p></div></div></body>')
        assert found.kind is CandidateKind.DREAMWIDTH
        assert found.node.get("id") == "entry-42"

    def test_dreamwidth_wrapper_is_skipped(self, dreamwidth_page):
        found = _locate(dreamwidth_page)
        assert found.node.get("id") == "entry-1234"

    def test_article_then_main_keeps_article(self):
        found = _locate("<body><article id='a'></article><main></main></body>")
        assert found.kind is CandidateKind.ARTICLE
        assert found.node.get("id") == "a"

    def test_first_article_wins_over_second(self):
        found = _locate("<body><article id='one'></article><article id='two'></article></body>")
        assert found.node.get("id") == "one"

    def test_main_then_content_div_keeps_main(self):
        found = _locate('<body><main></main><div id="content"></div></body>')
        assert found.kind is CandidateKind.MAIN

    def test_article_then_dreamwidth_keeps_article(self):
        found = _locate('<body><article></article><div id="entry-1"></div></body>')
        assert found.kind is CandidateKind.ARTICLE

    def test_conflict_is_logged_not_raised(self, caplog):
        with caplog.at_level(logging.INFO, logger="docuverse.extractors.main_content"):
            found = _locate('<body><main></main><div id="content"></div></body>')
        assert found.kind is CandidateKind.MAIN
        assert "ignoring conflicting article candidate" in caplog.text

    def test_no_candidate_raises(self):
        with pytest.raises(LocatorMiss):
            _locate("<body><div><p>nothing</p></div></body>")

    def test_empty_document_raises(self):
        with pytest.raises(LocatorMiss):
            _locate("")
