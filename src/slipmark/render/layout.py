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

"""Fixed-column word wrapping for styled text runs.

Widths are counted in character cells of the 1x font: a double-width
character takes two cells.  Lines never exceed the column budget, prefix
included.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from ..core.errors import IndentOverflow
from ..core.style import DEFAULT_STATE, StyleState


@dataclass(frozen=True)
class Segment:
    text: str
    style: StyleState

    @property
    def width(self) -> int:
        return len(self.text) * self.style.width_multiplier


Line = tuple[Segment, ...]
Run = tuple[str, StyleState]


def line_width(line: Line) -> int:
    return sum(segment.width for segment in line)


def line_text(line: Line) -> str:
    return "".join(segment.text for segment in line)


class _Wrapper:
    def __init__(self, usable: int, columns: int, indent: int) -> None:
        self.usable = usable
        self.columns = columns
        self.indent = indent
        self.line: list[tuple[str, StyleState]] = []
        self.line_width = 0
        self.word: list[tuple[str, StyleState]] = []
        self.word_has_letters = False
        self.done: list[list[tuple[str, StyleState]]] = []

    def feed(self, char: str, style: StyleState) -> None:
        if char == "\n":
            if self.word_has_letters:
                self._write_word()
            else:
                self._clear_word()
            self._end_line()
            return
        if char == " " and self.word_has_letters:
            self._write_word()
        self.word.append((char, style))
        if char != " ":
            self.word_has_letters = True

    def finish(self) -> None:
        if self.word_has_letters:
            self._write_word()
        self._clear_word()
        if self.line:
            self._end_line()

    def _write_word(self) -> None:
        width = sum(style.width_multiplier for _char, style in self.word)
        # Leading spaces vanish on a wrapped line, so only the rest must fit.
        bare = sum(style.width_multiplier for char, style in self.word if char != " ")
        soft_wrapped = bool(self.line) and bare <= self.usable and self.line_width + width > self.usable
        if soft_wrapped:
            self._end_line()
        for char, style in self.word:
            if soft_wrapped and char == " ":
                continue
            cost = style.width_multiplier
            if cost > self.usable:
                raise IndentOverflow(self.indent, self.columns)
            if self.line_width + cost > self.usable:
                self._end_line()
                if char == " ":
                    continue
            self.line.append((char, style))
            self.line_width += cost
        self._clear_word()

    def _clear_word(self) -> None:
        self.word = []
        self.word_has_letters = False

    def _end_line(self) -> None:
        self.done.append(self.line)
        self.line = []
        self.line_width = 0


def _segments(
    chars: list[tuple[str, StyleState]],
    prefix: str,
    prefix_style: StyleState,
) -> Line:
    segments: list[Segment] = []
    if prefix:
        segments.append(Segment(prefix, prefix_style))
    for char, style in chars:
        if segments and segments[-1].style == style:
            last = segments[-1]
            segments[-1] = Segment(last.text + char, style)
        else:
            segments.append(Segment(char, style))
    return tuple(segments)


def wrap_runs(
    runs: Iterable[Run],
    columns: int,
    *,
    first_prefix: str = "",
    prefix: str | None = None,
    prefix_style: StyleState = DEFAULT_STATE,
) -> Iterator[Line]:
    """Lazily break styled runs into lines of at most ``columns`` cells.

    ``first_prefix`` starts the first line (a list marker, for instance) and
    ``prefix`` starts every following one; both are subtracted from the
    budget and must be the same width.
    """
    if prefix is None:
        prefix = " " * len(first_prefix)
    if len(prefix) != len(first_prefix):
        raise ValueError("first_prefix and prefix must have the same width")
    indent = len(prefix) * prefix_style.width_multiplier
    usable = columns - indent
    if usable <= 0:
        raise IndentOverflow(indent, columns)

    wrapper = _Wrapper(usable, columns, indent)
    produced = 0

    def _drain() -> Iterator[Line]:
        nonlocal produced
        while wrapper.done:
            chars = wrapper.done.pop(0)
            lead = first_prefix if produced == 0 else prefix
            produced += 1
            yield _segments(chars, lead, prefix_style)

    for text, style in runs:
        for char in text:
            wrapper.feed(char, style)
            yield from _drain()
    wrapper.finish()
    yield from _drain()


def wrap_text(text: str, columns: int, style: StyleState = DEFAULT_STATE) -> list[str]:
    return [line_text(line) for line in wrap_runs([(text, style)], columns)]


def rule_line(columns: int, glyph: str = "-", *, prefix: str = "") -> Line:
    if len(glyph) != 1:
        raise ValueError("rule glyph must be a single character")
    width = columns - len(prefix)
    if width <= 0:
        raise IndentOverflow(len(prefix), columns)
    return _segments([(glyph, DEFAULT_STATE)] * width, prefix, DEFAULT_STATE)
