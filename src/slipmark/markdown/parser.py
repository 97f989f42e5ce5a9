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

"""Markdown text to the printable document model.

Parsing uses the CommonMark preset of markdown-it-py with strikethrough
enabled.  Constructs the printer cannot show degrade to text: links keep
their label, images keep their alt text and raw HTML is dropped.  Tables
and footnotes are not recognised by the preset, so they arrive as ordinary
paragraphs.
"""

from __future__ import annotations

import logging

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

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
)
from ..core.style import StyleDelta

logger = logging.getLogger(__name__)

_SPAN_DELTAS = {
    "strong": StyleDelta.BOLD,
    "em": StyleDelta.ITALIC,
    "s": StyleDelta.STRIKETHROUGH,
}

_MD_PARSER: MarkdownIt | None = None


def _build_markdown_parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True})
    md.enable("strikethrough")
    return md


def _get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        _MD_PARSER = _build_markdown_parser()
    return _MD_PARSER


def parse_document(text: str) -> Document:
    tokens = _get_markdown_parser().parse(text)
    root = SyntaxTreeNode(tokens)
    return Document(blocks=_blocks(root.children))


def _blocks(nodes: list[SyntaxTreeNode]) -> tuple[Block, ...]:
    blocks: list[Block] = []
    for node in nodes:
        block = _block(node)
        if block is not None:
            blocks.append(block)
    return tuple(blocks)


def _block(node: SyntaxTreeNode) -> Block | None:
    kind = node.type
    if kind == "heading":
        return Heading(level=int(node.tag[1:]), inlines=_inline_content(node))
    if kind == "paragraph":
        return Paragraph(inlines=_inline_content(node))
    if kind in {"bullet_list", "ordered_list"}:
        return _list(node)
    if kind == "blockquote":
        return Blockquote(blocks=_blocks(node.children))
    if kind == "fence":
        return CodeBlock.from_info(node.info, _strip_final_newline(node.content))
    if kind == "code_block":
        return CodeBlock(text=_strip_final_newline(node.content))
    if kind == "hr":
        return ThematicBreak()
    if kind == "html_block":
        logger.debug("dropping HTML block")
        return None
    logger.debug("dropping unsupported block %s", kind)
    return None


def _list(node: SyntaxTreeNode) -> ListBlock:
    ordered = node.type == "ordered_list"
    start = 1
    if ordered:
        start = int(node.attrs.get("start", 1))
    items = tuple(_blocks(item.children) for item in node.children)
    return ListBlock(ordered=ordered, items=items, start=start, tight=_is_tight(node))


def _is_tight(node: SyntaxTreeNode) -> bool:
    # markdown-it hides the paragraphs of tight list items.
    for item in node.children:
        for child in item.children:
            if child.type == "paragraph":
                return bool(child.hidden)
    return True


def _inline_content(node: SyntaxTreeNode) -> tuple[Inline, ...]:
    inlines: list[Inline] = []
    for child in node.children:
        if child.type == "inline":
            inlines.extend(_inlines(child.children))
    return tuple(inlines)


def _inlines(nodes: list[SyntaxTreeNode]) -> list[Inline]:
    out: list[Inline] = []
    for node in nodes:
        kind = node.type
        if kind == "text":
            out.append(Text(node.content))
        elif kind in _SPAN_DELTAS:
            out.append(StyleSpan(_SPAN_DELTAS[kind], tuple(_inlines(node.children))))
        elif kind == "code_inline":
            out.append(InlineCode(node.content))
        elif kind == "softbreak":
            out.append(Text(" "))
        elif kind == "hardbreak":
            out.append(LineBreak())
        elif kind == "link":
            out.extend(_inlines(node.children))
        elif kind == "image":
            if node.content:
                out.append(Text(node.content))
        elif kind == "html_inline":
            continue
        else:
            logger.debug("dropping unsupported inline %s", kind)
    return out


def _strip_final_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text
