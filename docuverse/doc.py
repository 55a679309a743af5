"""Semantic document model produced by the converter and consumed by the renderer.

A :class:`Document` is plain data: block-level nodes hold inline-level nodes,
container blocks (list items, block quotes) hold further blocks.  Nothing in
this module validates structure beyond the origin URL; the builder is
responsible for producing well-formed trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union
from urllib.parse import urlparse

# ---------------------------------------------------------------------------
# Inlines
# ---------------------------------------------------------------------------

@dataclass
class Text:
    text: str


@dataclass
class Bold:
    inner: Inline


@dataclass
class Italic:
    inner: Inline


@dataclass
class Code:
    inner: Inline


Inline = Union[Text, Bold, Italic, Code]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

HEADING_LEVELS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)


class ListKind(Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"


class CodeLanguage(Enum):
    """Language of a code block.  The converter never sniffs it."""

    UNKNOWN = ""
    RUST = "rust"
    TOML = "toml"
    SHELL = "shell"


@dataclass
class Heading:
    level: int
    inlines: list[Inline] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.level not in HEADING_LEVELS:
            raise ValueError(f"heading level must be 1-6, got {self.level!r}")


@dataclass
class Paragraph:
    inlines: list[Inline] = field(default_factory=list)


@dataclass
class ListItem:
    blocks: list[Block] = field(default_factory=list)


@dataclass
class List:
    kind: ListKind
    items: list[ListItem]


@dataclass
class Blockquote:
    blocks: list[Block] = field(default_factory=list)


@dataclass
class CodeBlock:
    lang: CodeLanguage = CodeLanguage.UNKNOWN
    inlines: list[Inline] = field(default_factory=list)


@dataclass
class ThematicBreak:
    pass


Block = Union[Heading, Paragraph, List, Blockquote, CodeBlock, ThematicBreak]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

@dataclass
class Meta:
    origin_url: str

    def __post_init__(self) -> None:
        parsed = urlparse(self.origin_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"origin url must be an absolute http(s) URL: {self.origin_url!r}")


@dataclass
class Body:
    blocks: list[Block] = field(default_factory=list)


@dataclass
class Document:
    meta: Meta
    body: Body = field(default_factory=Body)

    @property
    def blocks(self) -> list[Block]:
        return self.body.blocks
