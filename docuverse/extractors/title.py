"""Title extraction and the missing-H1 repair pass."""

from __future__ import annotations

import copy
import logging

from bs4 import Tag

from docuverse.doc import Bold, Code, Document, Heading, Inline, Italic, Text
from docuverse.extractors.blocks import build_document
from docuverse.extractors.main_content import CandidateKind

logger = logging.getLogger(__name__)


class TitleMiss(LookupError):
    """Raised when a document has no heading to take a title from."""

    def __init__(self, url: str) -> None:
        super().__init__(f"no title heading found for {url}")
        self.url = url


def inline_text(inline: Inline) -> str:
    """Return the plain text of *inline*, unwrapping formatting."""
    if isinstance(inline, Text):
        return inline.text
    if isinstance(inline, (Bold, Italic, Code)):
        return inline_text(inline.inner)
    raise TypeError(f"unknown inline: {inline!r}")


def first_heading(doc: Document) -> Heading | None:
    for block in doc.body.blocks:
        if isinstance(block, Heading):
            return block
    return None


def title(doc: Document) -> str | None:
    """Return the text of the first heading of any level, or None."""
    heading = first_heading(doc)
    if heading is None:
        return None
    return "".join(inline_text(i) for i in heading.inlines)


def require_title(doc: Document) -> str:
    """Like :func:`title` but raise :class:`TitleMiss` instead of returning None."""
    text = title(doc)
    if text is None:
        raise TitleMiss(doc.meta.origin_url)
    return text


def is_missing_h1(doc: Document) -> bool:
    """Return True if the first heading exists and is not level 1.

    A document with no heading at all is not reported as missing its H1.
    """
    heading = first_heading(doc)
    return heading is not None and heading.level != 1


def backfill_title(doc: Document, page: Tag, kind: CandidateKind) -> bool:
    """Prepend the page's first level-1 heading to *doc* when it lacks one.

    *page* is the whole parsed page the article was located in.  Dreamwidth
    entries keep their title outside the entry div, so they are left alone.
    Returns True if *doc* was changed.
    """
    if not is_missing_h1(doc):
        return False
    if kind is CandidateKind.DREAMWIDTH:
        logger.debug("missing h1 in dreamwidth entry %s, not backfilling", doc.meta.origin_url)
        return False

    whole = build_document(page, doc.meta.origin_url)
    for block in whole.body.blocks:
        if isinstance(block, Heading) and block.level == 1:
            logger.info("backfilled h1 for %s", doc.meta.origin_url)
            doc.body.blocks.insert(0, copy.deepcopy(block))
            return True

    logger.warning("missing h1 for %s and none found on the page", doc.meta.origin_url)
    return False
