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

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..escpos.commands import Command


class SlipmarkError(ValueError):
    """Base class for errors that abort a render."""


class ImageTooWide(SlipmarkError):
    def __init__(self, width: int, limit: int) -> None:
        super().__init__(f"image width {width} larger than maximum {limit}")
        self.width = width
        self.limit = limit


class UnencodableSymbol(SlipmarkError):
    def __init__(self, text: str, char: str) -> None:
        super().__init__(f"character {char!r} cannot be encoded in Code128 set B")
        self.text = text
        self.char = char


class EmptySymbolData(SlipmarkError):
    def __init__(self, symbology: str) -> None:
        super().__init__(f"{symbology} payload is empty")
        self.symbology = symbology


class IndentOverflow(SlipmarkError):
    def __init__(self, indent: int, columns: int) -> None:
        super().__init__(f"indent of {indent} columns leaves no room on a {columns}-column line")
        self.indent = indent
        self.columns = columns


class UnencodableCharacter(UnicodeWarning):
    """Reported (never raised) when text falls outside the printer code page."""


class RenderError(SlipmarkError):
    """A block failed to render.

    ``completed`` holds the commands of every block that finished before the
    failing one, so callers can still inspect or print that prefix.
    """

    def __init__(
        self,
        block_index: int,
        block_kind: str,
        cause: BaseException,
        completed: Sequence[Command] = (),
    ) -> None:
        super().__init__(f"block {block_index + 1} ({block_kind}): {cause}")
        self.block_index = block_index
        self.block_kind = block_kind
        self.cause = cause
        self.completed = tuple(completed)
