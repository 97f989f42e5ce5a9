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

"""Capabilities the renderer consumes but does not implement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Sequence

PixelMode = Literal["L", "RGB"]


@dataclass(frozen=True)
class DecodedImage:
    width: int
    height: int
    mode: PixelMode
    pixels: bytes

    def __post_init__(self) -> None:
        channels = 1 if self.mode == "L" else 3
        if len(self.pixels) != self.width * self.height * channels:
            raise ValueError(
                f"{self.mode} buffer of {len(self.pixels)} bytes does not match "
                f"{self.width}x{self.height}"
            )


class ImageDecoder(Protocol):
    def decode(self, data: bytes) -> DecodedImage: ...


class QrMatrixGenerator(Protocol):
    def matrix(self, data: bytes, *, error: str, border: int) -> Sequence[Sequence[bool]]: ...


class BarcodeGenerator(Protocol):
    def modules(self, text: str) -> Sequence[bool]: ...


class TextTranscoder(Protocol):
    """Maps text onto a single-byte printer code page.

    ``normalize`` runs before line wrapping and must return text in which
    every character encodes to exactly one byte, so widths stay exact.
    """

    def normalize(self, text: str) -> str: ...

    def encode(self, text: str) -> bytes: ...
