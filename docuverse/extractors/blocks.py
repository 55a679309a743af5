"""Convert a located article subtree into a :class:`~docuverse.doc.Document`.

The walk is depth-first and pre-order.  Conversion state lives on an
explicit stack of accumulator frames; each block-opening element pushes a
frame, walks its children, pops the frame and appends the finished block to
whatever frame is now on top.

Third-party markup is routinely malformed, so every element is accepted in
every state: an element that is not legal where it appears is treated as a
transparent container and its children are walked into the frame that is
already open.  The builder never raises on input structure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from bs4 import Tag
from bs4.element import PageElement

from docuverse.doc import (
    Block,
    Blockquote,
    Body,
    CodeBlock,
    CodeLanguage,
    Document,
    Heading,
    Inline,
    List,
    ListItem,
    ListKind,
    Meta,
    Paragraph,
    Text,
    ThematicBreak,
)
from docuverse.extractors.tree import is_text

logger = logging.getLogger(__name__)

_HEADING_LEVELS: dict[str, int] = {f"h{i}": i for i in range(1, 7)}

_LIST_KINDS: dict[str, ListKind] = {
    "ol": ListKind.ORDERED,
    "ul": ListKind.UNORDERED,
}

# Elements that count as inline content when they sit directly inside a
# list item or block quote
_INLINE_TAGS: frozenset[str] = frozenset({"a", "code", "em", "i", "b"})


# ---------------------------------------------------------------------------
# Accumulator frames
# ---------------------------------------------------------------------------

@dataclass
class ScanningBlocks:
    blocks: list[Block] = field(default_factory=list)


@dataclass
class AccumulatingInlines:
    inlines: list[Inline] = field(default_factory=list)


@dataclass
class AccumulatingListItems:
    items: list[ListItem] = field(default_factory=list)


@dataclass
class AccumulatingBlocks:
    blocks: list[Block] = field(default_factory=list)


Frame = ScanningBlocks | AccumulatingInlines | AccumulatingListItems | AccumulatingBlocks

_BLOCK_FRAMES = (ScanningBlocks, AccumulatingBlocks)

_F = TypeVar("_F", ScanningBlocks, AccumulatingInlines, AccumulatingListItems, AccumulatingBlocks)

# A node to visit, or a closing action run once its children are done
_Task = PageElement | Callable[[], None]


class _ChildKind(Enum):
    INLINE = "inline"
    BLOCK = "block"
    BLANK = "blank"


def _classify_child(node: PageElement) -> _ChildKind:
    if isinstance(node, Tag):
        return _ChildKind.INLINE if node.name in _INLINE_TAGS else _ChildKind.BLOCK
    if is_text(node) and node.strip():
        return _ChildKind.INLINE
    return _ChildKind.BLANK


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class DocumentBuilder:
    """Single-use converter from one subtree to a list of blocks."""

    def __init__(self) -> None:
        self._stack: list[Frame] = [ScanningBlocks()]
        self._pending: list[_Task] = []

    def build(self, node: Tag) -> list[Block]:
        self._run(node)
        root = self._stack[0]
        assert isinstance(root, ScanningBlocks)
        return root.blocks

    # -- stack --------------------------------------------------------------

    @property
    def _top(self) -> Frame:
        return self._stack[-1]

    def _push(self, frame: _F) -> _F:
        self._stack.append(frame)
        return frame

    def _pop(self) -> None:
        self._stack.pop()

    def _emit(self, block: Block) -> None:
        top = self._top
        assert isinstance(top, _BLOCK_FRAMES)
        top.blocks.append(block)

    # -- traversal ----------------------------------------------------------
    #
    # Pending work is a LIFO list of tasks: a node still to be visited, or a
    # closing action that pops a frame and hands its contents to the frame
    # below.  Scheduling a node's children followed by its closing action
    # gives the same order as a recursive pre-order walk, without using the
    # Python call stack, so arbitrarily deep markup is fine.

    def _run(self, root: Tag) -> None:
        self._schedule(list(root.children))
        while self._pending:
            task = self._pending.pop()
            # Tag is callable (find_all shorthand), so test for nodes first
            if isinstance(task, PageElement):
                self._visit(task)
            else:
                task()

    def _schedule(self, tasks: list[_Task]) -> None:
        self._pending.extend(reversed(tasks))

    def _visit(self, node: PageElement) -> None:
        if not isinstance(node, Tag):
            top = self._top
            if is_text(node) and isinstance(top, AccumulatingInlines):
                top.inlines.append(Text(str(node)))
            return

        name = node.name
        top = self._top
        in_block_frame = isinstance(top, _BLOCK_FRAMES)

        if name == "p" and in_block_frame:
            self._open_inlines(node, lambda inlines: self._emit(Paragraph(inlines)))
        elif name in _HEADING_LEVELS and isinstance(top, ScanningBlocks):
            level = _HEADING_LEVELS[name]
            self._open_inlines(node, lambda inlines: self._emit(Heading(level, inlines)))
        elif name in _LIST_KINDS and in_block_frame:
            self._open_list(node, _LIST_KINDS[name])
        elif name == "li" and isinstance(top, AccumulatingListItems):
            self._open_blocks(node, lambda blocks: top.items.append(ListItem(blocks)))
        elif name == "blockquote" and in_block_frame:
            self._open_blocks(node, lambda blocks: self._emit(Blockquote(blocks)))
        elif name == "hr" and in_block_frame:
            self._emit(ThematicBreak())
        elif name == "pre" and in_block_frame:
            self._open_inlines(
                node, lambda inlines: self._emit(CodeBlock(CodeLanguage.UNKNOWN, inlines))
            )
        else:
            self._schedule(list(node.children))

    def _open_inlines(self, node: Tag, finish: Callable[[list[Inline]], None]) -> None:
        frame = self._push(AccumulatingInlines())

        def close() -> None:
            self._pop()
            finish(frame.inlines)

        self._schedule([*node.children, close])

    def _open_list(self, node: Tag, kind: ListKind) -> None:
        frame = self._push(AccumulatingListItems())

        def close() -> None:
            self._pop()
            if frame.items:
                self._emit(List(kind, frame.items))

        self._schedule([*node.children, close])

    def _open_blocks(self, node: Tag, finish: Callable[[list[Block]], None]) -> None:
        frame = self._push(AccumulatingBlocks())

        def close() -> None:
            self._pop()
            finish(frame.blocks)

        self._schedule([*self._block_aware_tasks(node), close])

    def _block_aware_tasks(self, node: Tag) -> list[_Task]:
        """Plan the walk over the children of a list item or block quote.

        Runs of inline children are gathered into a synthesized paragraph,
        flushed before the next block child and at the end of the children.
        Blank text joins a run only when more inline content follows it.
        """
        tasks: list[_Task] = []
        run: list[PageElement] = []
        blanks: list[PageElement] = []

        for child in node.children:
            kind = _classify_child(child)
            if kind is _ChildKind.INLINE:
                # Whitespace between two inline children stays inside the
                # run instead of splitting it, so "<b>a</b> <i>b</i>" keeps
                # its word gap in one paragraph.
                if run:
                    run.extend(blanks)
                blanks = []
                run.append(child)
            elif kind is _ChildKind.BLANK:
                blanks.append(child)
            else:
                tasks.extend(self._paragraph_tasks(run))
                run, blanks = [], []
                tasks.append(child)

        tasks.extend(self._paragraph_tasks(run))
        return tasks

    def _paragraph_tasks(self, run: list[PageElement]) -> list[_Task]:
        if not run:
            return []
        frame = AccumulatingInlines()

        def open_() -> None:
            self._push(frame)

        def close() -> None:
            self._pop()
            self._emit(Paragraph(frame.inlines))

        return [open_, *run, close]


def build_document(node: Tag, origin_url: str) -> Document:
    """Convert the subtree rooted at *node* into a :class:`Document`.

    *node* may be a located article element or a whole parsed page.
    """
    blocks = DocumentBuilder().build(node)
    logger.debug("built %d top-level blocks for %s", len(blocks), origin_url)
    return Document(meta=Meta(origin_url=origin_url), body=Body(blocks=blocks))
