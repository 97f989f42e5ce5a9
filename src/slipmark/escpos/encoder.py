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

from typing import Iterable

from .commands import (
    Command,
    Cut,
    CutMode,
    Initialize,
    LineFeed,
    PrintText,
    RasterImage,
    SelectCodePage,
    SetColor,
    SetJustification,
    SetStyle,
)

ESC = b"\x1b"
GS = b"\x1d"
LF = b"\n"

MODE_EMPHASIZED = 0x08
MODE_DOUBLE_HEIGHT = 0x10
MODE_DOUBLE_WIDTH = 0x20
MODE_UNDERLINE = 0x80

_CUT_FUNCTIONS = {
    CutMode.FULL: 0x41,
    CutMode.PARTIAL: 0x42,
}

MAX_RASTER_HEIGHT = 0xFFFF


def print_mode(command: SetStyle) -> int:
    mode = 0
    if command.bold:
        mode |= MODE_EMPHASIZED
    if command.height == 2:
        mode |= MODE_DOUBLE_HEIGHT
    if command.width == 2:
        mode |= MODE_DOUBLE_WIDTH
    if command.underline:
        mode |= MODE_UNDERLINE
    return mode


def encode_command(command: Command, *, cut_feed: int = 0) -> bytes:
    if isinstance(command, Initialize):
        return ESC + b"@"
    if isinstance(command, SelectCodePage):
        return ESC + b"t" + bytes([command.table])
    if isinstance(command, SetStyle):
        return ESC + b"!" + bytes([print_mode(command)]) + ESC + b"G" + bytes([command.double_strike])
    if isinstance(command, SetJustification):
        return ESC + b"a" + bytes([int(command.justification)])
    if isinstance(command, SetColor):
        return ESC + b"r" + bytes([int(command.color)])
    if isinstance(command, PrintText):
        return command.data
    if isinstance(command, LineFeed):
        if command.lines == 1:
            return LF
        return ESC + b"d" + bytes([command.lines])
    if isinstance(command, RasterImage):
        return _raster_bytes(command)
    if isinstance(command, Cut):
        return GS + b"V" + bytes([_CUT_FUNCTIONS[command.mode], cut_feed])
    raise TypeError(f"unsupported command: {command!r}")


def encode_commands(commands: Iterable[Command], *, cut_feed: int = 0) -> bytes:
    """Serialize a command stream.

    The cutter only fires at the beginning of a line, so a line feed is
    inserted before a cut that directly follows printed text.
    """
    if not 0 <= cut_feed <= 255:
        raise ValueError("cut feed must be between 0 and 255")
    out = bytearray()
    mid_line = False
    for command in commands:
        if isinstance(command, Cut) and mid_line:
            out += LF
        out += encode_command(command, cut_feed=cut_feed)
        if isinstance(command, PrintText):
            mid_line = mid_line or bool(command.data)
        elif isinstance(command, (LineFeed, Cut, RasterImage, Initialize)):
            mid_line = False
    return bytes(out)


def _raster_bytes(image: RasterImage) -> bytes:
    if image.height > MAX_RASTER_HEIGHT:
        raise ValueError(f"raster height {image.height} exceeds {MAX_RASTER_HEIGHT}")
    row_bytes = image.row_bytes
    header = GS + b"v0" + bytes(
        [
            0,
            row_bytes & 0xFF,
            (row_bytes >> 8) & 0xFF,
            image.height & 0xFF,
            (image.height >> 8) & 0xFF,
        ]
    )
    return header + image.data
