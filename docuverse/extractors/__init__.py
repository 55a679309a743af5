"""Extraction sub-package: article location, block conversion, and title repair."""

from .blocks import build_document
from .main_content import ArticleCandidate, CandidateKind, LocatorMiss, locate_article
from .title import TitleMiss, backfill_title, require_title, title
from .tree import parse_html

__all__ = [
    "ArticleCandidate",
    "CandidateKind",
    "LocatorMiss",
    "TitleMiss",
    "backfill_title",
    "build_document",
    "locate_article",
    "parse_html",
    "require_title",
    "title",
]
