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

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .style import StyleDelta


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class InlineCode:
    text: str


@dataclass(frozen=True)
class LineBreak:
    pass


@dataclass(frozen=True)
class StyleSpan:
    delta: StyleDelta
    children: tuple[Inline, ...] = ()


Inline = Union[Text, InlineCode, LineBreak, StyleSpan]


@dataclass(frozen=True)
class Heading:
    level: int
    inlines: tuple[Inline, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"heading level must be 1-6, got {self.level}")


@dataclass(frozen=True)
class Paragraph:
    inlines: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: tuple[tuple[Block, ...], ...] = ()
    start: int = 1
    tight: bool = True


@dataclass(frozen=True)
class Blockquote:
    blocks: tuple[Block, ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    language: str = ""
    keywords: tuple[str, ...] = ()
    text: str = ""

    @classmethod
    def from_info(cls, info: str, text: str) -> CodeBlock:
        words = info.split()
        if not words:
            return cls(text=text)
        return cls(language=words[0].lower(), keywords=tuple(w.lower() for w in words[1:]), text=text)


@dataclass(frozen=True)
class ThematicBreak:
    pass


Block = Union[Heading, Paragraph, ListBlock, Blockquote, CodeBlock, ThematicBreak]


@dataclass(frozen=True)
class Document:
    blocks: tuple[Block, ...] = field(default_factory=tuple)


def block_kind(block: Block) -> str:
    if isinstance(block, Heading):
        return f"heading {block.level}"
    if isinstance(block, CodeBlock):
        return f"{block.language or 'code'} block"
    if isinstance(block, ListBlock):
        return "ordered list" if block.ordered else "list"
    return {
        Paragraph: "paragraph",
        Blockquote: "blockquote",
        ThematicBreak: "thematic break",
    }.get(type(block), type(block).__name__)
