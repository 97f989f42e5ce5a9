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

"""Code block info-string keywords.

Each fenced block names a language (``text``, ``bitmap``, ``image``,
``qrcode``, ``code128``) followed by optional keywords.  Keywords are plain
table entries: adding one means adding a row to ``KEYWORDS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Sequence

from ..escpos.commands import Color
from .style import StyleState

TEXT = "text"
BITMAP = "bitmap"
IMAGE = "image"
QRCODE = "qrcode"
CODE128 = "code128"

LANGUAGES = frozenset({TEXT, BITMAP, IMAGE, QRCODE, CODE128})
_RASTER = frozenset({BITMAP, IMAGE, QRCODE, CODE128})
_ALL = LANGUAGES

StyleEffect = Callable[[StyleState], StyleState]


@dataclass(frozen=True)
class Keyword:
    name: str
    languages: frozenset[str]
    style: StyleEffect | None = None
    option: str | None = None


@dataclass(frozen=True)
class BlockFormat:
    style: StyleState
    options: frozenset[str] = field(default_factory=frozenset)

    def has(self, option: str) -> bool:
        return option in self.options


def _accent(state: StyleState) -> StyleState:
    return state.with_color(Color.ACCENT)


def _black(state: StyleState) -> StyleState:
    return state.with_color(Color.DEFAULT)


def _wide(state: StyleState) -> StyleState:
    return replace(state, double_width=True)


def _tall(state: StyleState) -> StyleState:
    return replace(state, double_height=True)


def _large(state: StyleState) -> StyleState:
    return state.with_size(width=2, height=2)


def _bold(state: StyleState) -> StyleState:
    return replace(state, bold=True)


def _underline(state: StyleState) -> StyleState:
    return replace(state, underline=True)


def _strikethrough(state: StyleState) -> StyleState:
    return replace(state, strikethrough=True)


_TEXT_ONLY = frozenset({TEXT})

KEYWORDS: tuple[Keyword, ...] = (
    Keyword("red", _ALL, style=_accent),
    Keyword("accent", _ALL, style=_accent),
    Keyword("black", _ALL, style=_black),
    Keyword("bold", _TEXT_ONLY, style=_bold),
    Keyword("underline", _TEXT_ONLY, style=_underline),
    Keyword("italic", _TEXT_ONLY, style=_underline),
    Keyword("strikethrough", _TEXT_ONLY, style=_strikethrough),
    Keyword("wide", _TEXT_ONLY, style=_wide),
    Keyword("doublewidth", _TEXT_ONLY, style=_wide),
    Keyword("tall", _TEXT_ONLY, style=_tall),
    Keyword("doubleheight", _TEXT_ONLY, style=_tall),
    Keyword("large", _TEXT_ONLY, style=_large),
    Keyword("center", _TEXT_ONLY | _RASTER, option="center"),
    Keyword("base64", frozenset({IMAGE, QRCODE}), option="base64"),
    Keyword("bicolor", frozenset({IMAGE}), option="bicolor"),
    Keyword("bold", frozenset({QRCODE}), option="bold"),
)


def lookup(language: str, name: str) -> Keyword | None:
    for keyword in KEYWORDS:
        if keyword.name == name and language in keyword.languages:
            return keyword
    return None


def default_style(language: str) -> StyleState:
    # Literal text blocks print in the accent ink unless told otherwise.
    if language == TEXT:
        return StyleState(color=Color.ACCENT)
    return StyleState()


def resolve_format(language: str, keywords: Sequence[str]) -> BlockFormat:
    if language not in LANGUAGES:
        raise ValueError(f"unknown code block language: {language!r}")
    style = default_style(language)
    options: set[str] = set()
    for name in keywords:
        keyword = lookup(language, name)
        if keyword is None:
            raise ValueError(f"unknown option '{name}' for {language} block")
        if keyword.style is not None:
            style = keyword.style(style)
        if keyword.option is not None:
            options.add(keyword.option)
    if "bicolor" in options and style.color is Color.ACCENT:
        raise ValueError("bicolor images cannot also select a single ink color")
    return BlockFormat(style=style, options=frozenset(options))
