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

"""Device operations understood by the printer, as immutable values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Justification(int, Enum):
    LEFT = 0
    CENTER = 1


class Color(int, Enum):
    DEFAULT = 0
    ACCENT = 1


class CutMode(str, Enum):
    FULL = "full"
    PARTIAL = "partial"


@dataclass(frozen=True)
class Initialize:
    pass


@dataclass(frozen=True)
class SelectCodePage:
    table: int


@dataclass(frozen=True)
class SetStyle:
    bold: bool = False
    underline: bool = False
    double_strike: bool = False
    width: int = 1
    height: int = 1

    def __post_init__(self) -> None:
        if self.width not in (1, 2) or self.height not in (1, 2):
            raise ValueError("width and height multipliers must be 1 or 2")


@dataclass(frozen=True)
class SetJustification:
    justification: Justification


@dataclass(frozen=True)
class SetColor:
    color: Color


@dataclass(frozen=True)
class PrintText:
    data: bytes


@dataclass(frozen=True)
class LineFeed:
    lines: int = 1

    def __post_init__(self) -> None:
        if not 1 <= self.lines <= 255:
            raise ValueError("line feed count must be between 1 and 255")


@dataclass(frozen=True)
class RasterImage:
    width: int
    height: int
    data: bytes
    plane: Color = Color.DEFAULT

    @property
    def row_bytes(self) -> int:
        return (self.width + 7) // 8

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("raster image must not be empty")
        if len(self.data) != self.row_bytes * self.height:
            raise ValueError(
                f"raster data is {len(self.data)} bytes, expected {self.row_bytes * self.height}"
            )

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        byte = self.data[y * self.row_bytes + x // 8]
        return bool(byte & (0x80 >> (x % 8)))

    def rows(self) -> list[list[bool]]:
        return [[self.pixel(x, y) for x in range(self.width)] for y in range(self.height)]


@dataclass(frozen=True)
class Cut:
    mode: CutMode = CutMode.PARTIAL


Command = Union[
    Initialize,
    SelectCodePage,
    SetStyle,
    SetJustification,
    SetColor,
    PrintText,
    LineFeed,
    RasterImage,
    Cut,
]

DEFAULT_STYLE = SetStyle()
