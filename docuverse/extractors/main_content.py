"""Locate the subtree holding the article body.

Candidates are recognised by a handful of tag/id patterns.  The whole tree
is scanned in document order and conflicts are resolved as they appear:

- the first candidate found becomes current;
- a later ``<article>`` replaces a current ``<main>``;
- a later Dreamwidth entry ``<div id="entry-…">`` replaces a current
  ``<div id="content">``;
- any other later candidate is discarded.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

from bs4 import Tag

logger = logging.getLogger(__name__)

_DREAMWIDTH_ID_PREFIX = "entry-"
_DREAMWIDTH_WRAPPER_PREFIX = "entry-wrapper-"


class CandidateKind(Enum):
    ARTICLE = "article"
    MAIN = "main"
    CONTENT_DIV = "content_div"
    DREAMWIDTH = "dreamwidth"


# (current, later) pairs where the later candidate wins
_UPGRADES: frozenset[tuple[CandidateKind, CandidateKind]] = frozenset(
    {
        (CandidateKind.MAIN, CandidateKind.ARTICLE),
        (CandidateKind.CONTENT_DIV, CandidateKind.DREAMWIDTH),
    }
)


class LocatorMiss(LookupError):
    """Raised when a page contains no article candidate."""


class ArticleCandidate(NamedTuple):
    node: Tag
    kind: CandidateKind


def classify_candidate(tag: Tag) -> CandidateKind | None:
    """Return the candidate kind of *tag*, or None if it is not a candidate."""
    if tag.name == "article":
        return CandidateKind.ARTICLE
    if tag.name == "main":
        return CandidateKind.MAIN
    if tag.name != "div":
        return None

    el_id = tag.get("id")
    if not isinstance(el_id, str):
        return None
    if el_id == "content":
        return CandidateKind.CONTENT_DIV
    if el_id.startswith(_DREAMWIDTH_ID_PREFIX) and not el_id.startswith(_DREAMWIDTH_WRAPPER_PREFIX):
        return CandidateKind.DREAMWIDTH
    return None


def locate_article(tree: Tag) -> ArticleCandidate:
    """Return the best article candidate in *tree*.

    Raises:
        LocatorMiss: if no element in *tree* matches a candidate pattern.
    """
    current: ArticleCandidate | None = None

    for el in tree.find_all(True):
        kind = classify_candidate(el)
        if kind is None:
            continue
        found = ArticleCandidate(el, kind)
        if current is None:
            logger.debug("article candidate: %s", kind.value)
            current = found
        elif (current.kind, kind) in _UPGRADES:
            logger.debug("upgrading article candidate %s -> %s", current.kind.value, kind.value)
            current = found
        else:
            logger.info(
                "ignoring conflicting article candidate %s (keeping %s)",
                kind.value, current.kind.value,
            )

    if current is None:
        raise LocatorMiss("no article candidate found")
    return current
