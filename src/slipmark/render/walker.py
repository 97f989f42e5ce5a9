#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

"""Document model to printer command stream.

The walker makes a single recursive pass over the blocks.  Indentation
(blockquotes, list markers) travels down the recursion in an immutable
``_Context``; text styles are tracked with a ``StyleStack`` per block.
Every leaf block leaves the printer in the default style with left
justification, and consecutive blocks are separated by one line feed.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, replace
from typing import Iterator, Sequence

from ..codecs.base import BarcodeGenerator, ImageDecoder, QrMatrixGenerator, TextTranscoder
from ..config.loader import AppConfig
from ..core.errors import IndentOverflow, RenderError
from ..core.keywords import (
    BITMAP,
    CODE128,
    IMAGE,
    LANGUAGES,
    QRCODE,
    TEXT,
    BlockFormat,
    resolve_format,
)
from ..core.model import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    Inline,
    InlineCode,
    LineBreak,
    ListBlock,
    Paragraph,
    StyleSpan,
    Text,
    ThematicBreak,
    block_kind,
)
from ..core.style import DEFAULT_STATE, StyleStack, StyleState, heading_style
from ..escpos.commands import (
    DEFAULT_STYLE,
    Color,
    Command,
    Cut,
    Initialize,
    Justification,
    LineFeed,
    PrintText,
    RasterImage,
    SelectCodePage,
    SetColor,
    SetJustification,
)
from .layout import Line, Run, Segment, rule_line, wrap_runs
from .raster import bicolor_planes, bitmap_from_ascii, raster_from_image
from .symbols import encode_code128, encode_qr

logger = logging.getLogger(__name__)

UNORDERED_MARKER = "- "

_RENDER_ERRORS = (OSError, RuntimeError, ValueError, TypeError, LookupError)


class CommandStream:
    """Append-only command list that remembers the printer's current modes."""

    def __init__(self) -> None:
        self.commands: list[Command] = []
        self.separator_pending = False
        self._style = DEFAULT_STYLE
        self._justification = Justification.LEFT
        self._color = Color.DEFAULT

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def last(self) -> Command | None:
        return self.commands[-1] if self.commands else None

    def append(self, command: Command) -> None:
        if self.separator_pending:
            self.separator_pending = False
            self.commands.append(LineFeed(1))
        self.commands.append(command)

    def sync(self, state: StyleState, justification: Justification) -> None:
        style = state.set_style_command()
        if style != self._style:
            self.append(style)
            self._style = style
        if justification is not self._justification:
            self.append(SetJustification(justification))
            self._justification = justification
        if state.color is not self._color:
            self.append(SetColor(state.color))
            self._color = state.color

    def reset(self) -> None:
        self.sync(DEFAULT_STATE, Justification.LEFT)

    def separate(self, mark: int) -> None:
        """Request a separator if anything was emitted since ``mark``."""
        if len(self.commands) > mark and not isinstance(self.last, Cut):
            self.separator_pending = True


@dataclass(frozen=True)
class _Context:
    first_prefix: str = ""
    prefix: str = ""
    list_depth: int = 0

    def rest(self) -> _Context:
        return replace(self, first_prefix=self.prefix)

    def nest(self, first: str, rest: str, *, columns: int, list_level: bool = False) -> _Context:
        nested = _Context(
            first_prefix=self.first_prefix + first,
            prefix=self.prefix + rest,
            list_depth=self.list_depth + (1 if list_level else 0),
        )
        if len(nested.prefix) >= columns:
            raise IndentOverflow(len(nested.prefix), columns)
        return nested


class DocumentWalker:
    def __init__(
        self,
        config: AppConfig,
        *,
        transcoder: TextTranscoder,
        images: ImageDecoder,
        qr: QrMatrixGenerator,
        barcode: BarcodeGenerator,
    ) -> None:
        self.config = config
        self.transcoder = transcoder
        self.images = images
        self.qr = qr
        self.barcode = barcode
        self.stream = CommandStream()

    @property
    def columns(self) -> int:
        return self.config.printer.columns

    @property
    def dot_width(self) -> int:
        return self.config.printer.dot_width

    def render(self, document: Document) -> list[Command]:
        """Full stream: prologue, every block, then the paper trailer."""
        self.stream = CommandStream()
        self.stream.append(Initialize())
        self.stream.append(SelectCodePage(self.config.printer.codepage_table))
        self._render_document(document)
        self._trailer()
        return list(self.stream.commands)

    def render_blocks(self, blocks: Sequence[Block]) -> list[Command]:
        self.stream = CommandStream()
        self._render_document(Document(blocks=tuple(blocks)))
        return list(self.stream.commands)

    def _render_document(self, document: Document) -> None:
        context = _Context()
        for index, block in enumerate(document.blocks):
            mark = len(self.stream)
            try:
                self._block(block, context)
            except _RENDER_ERRORS as exc:
                raise RenderError(
                    index,
                    block_kind(block),
                    exc,
                    completed=self.stream.commands[:mark],
                ) from exc
            self.stream.separate(mark)
            logger.debug("rendered block %d (%s)", index + 1, block_kind(block))

    def _trailer(self) -> None:
        printer = self.config.printer
        ended_with_cut = isinstance(self.stream.last, Cut)
        self.stream.separator_pending = False
        self.stream.append(LineFeed(printer.trailing_feed_lines))
        if printer.cut_at_end and not ended_with_cut:
            self.stream.append(Cut(printer.cut_mode))

    def _blocks(self, blocks: Sequence[Block], context: _Context, *, separate: bool) -> None:
        current = context
        for block in blocks:
            mark = len(self.stream)
            self._block(block, current)
            if len(self.stream) > mark:
                current = context.rest()
            if separate:
                self.stream.separate(mark)
        if current is context and context.first_prefix.strip():
            # Nothing printed, so the list marker still needs its own line.
            self._marker_line(context)

    def _block(self, block: Block, context: _Context) -> None:
        if isinstance(block, Heading):
            self._heading(block, context)
        elif isinstance(block, Paragraph):
            self._paragraph(block, context)
        elif isinstance(block, ListBlock):
            self._list(block, context)
        elif isinstance(block, Blockquote):
            self._blockquote(block, context)
        elif isinstance(block, CodeBlock):
            self._code_block(block, context)
        elif isinstance(block, ThematicBreak):
            self._thematic_break(context)
        else:
            raise TypeError(f"unsupported block: {block!r}")

    def _heading(self, block: Heading, context: _Context) -> None:
        stack = StyleStack(heading_style(block.level))
        self._text(self._runs(block.inlines, stack), context, Justification.CENTER)
        self.stream.reset()

    def _paragraph(self, block: Paragraph, context: _Context) -> None:
        stack = StyleStack()
        self._text(self._runs(block.inlines, stack), context, Justification.LEFT)
        self.stream.reset()

    def _list(self, block: ListBlock, context: _Context) -> None:
        depth = context.list_depth + 1
        numbered = block.ordered and depth <= self.config.layout.max_ordered_depth
        if block.ordered and not numbered:
            logger.debug("ordered list at depth %d printed with bullets", depth)
        number = block.start
        for item in block.items:
            marker = f"{number}. " if numbered else UNORDERED_MARKER
            number += 1
            item_context = context.nest(
                marker, " " * len(marker), columns=self.columns, list_level=True
            )
            mark = len(self.stream)
            self._blocks(item, item_context, separate=not block.tight)
            if not block.tight:
                self.stream.separate(mark)
            # Only the first item may carry the enclosing marker.
            context = context.rest()

    def _blockquote(self, block: Blockquote, context: _Context) -> None:
        indent = " " * self.config.layout.quote_indent
        inner = context.nest(indent, indent, columns=self.columns)
        self._blocks(block.blocks, inner, separate=True)

    def _thematic_break(self, context: _Context) -> None:
        line = rule_line(self.columns, self.config.layout.rule_glyph, prefix=context.first_prefix)
        self._line(line, Justification.LEFT, feed=False)
        self.stream.append(Cut(self.config.printer.cut_mode))

    def _code_block(self, block: CodeBlock, context: _Context) -> None:
        language = block.language or TEXT
        if language not in LANGUAGES:
            logger.debug("unknown code block language %r printed as text", language)
            self._literal(block.text, DEFAULT_STATE, context, Justification.LEFT)
            return
        fmt = resolve_format(language, block.keywords)
        if language == TEXT:
            justification = Justification.CENTER if fmt.has("center") else Justification.LEFT
            self._literal(block.text, fmt.style, context, justification)
            return
        images = self._rasters(language, block, fmt)
        if context.first_prefix.strip():
            self._marker_line(context)
        for image in images:
            self.stream.sync(DEFAULT_STATE.with_color(image.plane), Justification.CENTER)
            self.stream.append(image)
        self.stream.reset()

    def _rasters(self, language: str, block: CodeBlock, fmt: BlockFormat) -> list[RasterImage]:
        plane = fmt.style.color
        if language == BITMAP:
            return [bitmap_from_ascii(block.text, max_width=self.dot_width, plane=plane)]
        if language == IMAGE:
            payload = _payload(block.text, fmt)
            if not fmt.has("base64"):
                # Plain PNM text needs whitespace after the last sample.
                payload += b"\n"
            decoded = self.images.decode(payload)
            if fmt.has("bicolor"):
                return list(
                    bicolor_planes(
                        decoded,
                        max_width=self.dot_width,
                        dither=self.config.image.dither,
                    )
                )
            return [
                raster_from_image(
                    decoded,
                    max_width=self.dot_width,
                    threshold=self.config.image.threshold,
                    dither=self.config.image.dither,
                    plane=plane,
                )
            ]
        if language == QRCODE:
            return [
                encode_qr(
                    _payload(block.text, fmt),
                    self.qr,
                    self.config.qr,
                    max_width=self.dot_width,
                    bold=fmt.has("bold"),
                    plane=plane,
                )
            ]
        if language == CODE128:
            return [
                encode_code128(
                    block.text.strip(),
                    self.barcode,
                    self.config.barcode,
                    max_width=self.dot_width,
                    plane=plane,
                )
            ]
        raise ValueError(f"{language} blocks do not produce raster images")

    def _literal(
        self,
        text: str,
        style: StyleState,
        context: _Context,
        justification: Justification,
    ) -> None:
        runs = [(self.transcoder.normalize(text.expandtabs().rstrip("\n")), style)]
        self._text(runs, context, justification, normalized=True)
        self.stream.reset()

    def _runs(self, inlines: Sequence[Inline], stack: StyleStack) -> Iterator[Run]:
        for inline in inlines:
            if isinstance(inline, Text):
                yield inline.text, stack.current
            elif isinstance(inline, InlineCode):
                yield inline.text, stack.current.with_color(Color.ACCENT)
            elif isinstance(inline, LineBreak):
                yield "\n", stack.current
            elif isinstance(inline, StyleSpan):
                stack.enter(inline.delta)
                yield from self._runs(inline.children, stack)
                stack.leave()
            else:
                raise TypeError(f"unsupported inline: {inline!r}")

    def _text(
        self,
        runs: Iterator[Run] | Sequence[Run],
        context: _Context,
        justification: Justification,
        *,
        normalized: bool = False,
    ) -> None:
        if not normalized:
            runs = ((self.transcoder.normalize(text), style) for text, style in runs)
        lines = wrap_runs(
            runs,
            self.columns,
            first_prefix=context.first_prefix,
            prefix=context.prefix,
        )
        for line in lines:
            self._line(line, justification)

    def _line(self, line: Line, justification: Justification, *, feed: bool = True) -> None:
        for segment in line:
            self.stream.sync(segment.style, justification)
            self.stream.append(PrintText(self.transcoder.encode(segment.text)))
        if feed:
            self.stream.append(LineFeed(1))

    def _marker_line(self, context: _Context) -> None:
        self._line((Segment(context.first_prefix.rstrip(), DEFAULT_STATE),), Justification.LEFT)
        self.stream.reset()


def _payload(text: str, fmt: BlockFormat) -> bytes:
    if not fmt.has("base64"):
        return text.encode("utf-8")
    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 payload: {exc}") from exc
