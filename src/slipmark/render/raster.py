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

from typing import Sequence

from PIL import Image, ImageOps

from ..codecs.base import DecodedImage
from ..core.errors import ImageTooWide
from ..escpos.commands import Color, RasterImage

DEFAULT_THRESHOLD = 128

_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)
_RED = (255, 0, 0)
_BLACK_INDEX = 1
_RED_INDEX = 2


def check_width(width: int, max_width: int) -> None:
    if width > max_width:
        raise ImageTooWide(width, max_width)


def pack_rows(
    rows: Sequence[Sequence[bool]],
    *,
    max_width: int,
    plane: Color = Color.DEFAULT,
) -> RasterImage:
    """Pack rows of set/unset pixels MSB-first, padding each row to a byte."""
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    if width == 0 or height == 0:
        raise ValueError("image has no pixels")
    check_width(width, max_width)
    row_bytes = (width + 7) // 8
    data = bytearray(row_bytes * height)
    for y, row in enumerate(rows):
        base = y * row_bytes
        for x, value in enumerate(row):
            if value:
                data[base + x // 8] |= 0x80 >> (x % 8)
    return RasterImage(width=width, height=height, data=bytes(data), plane=plane)


def bitmap_from_ascii(
    text: str,
    *,
    max_width: int,
    plane: Color = Color.DEFAULT,
) -> RasterImage:
    """Every non-blank glyph is a set pixel; spaces and short rows are unset."""
    rows = [[not char.isspace() for char in line] for line in text.split("\n")]
    width = max((len(row) for row in rows), default=0)
    padded = [row + [False] * (width - len(row)) for row in rows]
    return pack_rows(padded, max_width=max_width, plane=plane)


def raster_from_image(
    image: DecodedImage,
    *,
    max_width: int,
    threshold: int = DEFAULT_THRESHOLD,
    dither: bool = False,
    plane: Color = Color.DEFAULT,
) -> RasterImage:
    """1-bit raster of ``image``; dark pixels become set dots.

    With ``dither`` the gray levels are spread with Floyd-Steinberg error
    diffusion and ``threshold`` is not used.
    """
    check_width(image.width, max_width)
    if image.width == 0 or image.height == 0:
        raise ValueError("image has no pixels")
    gray = _to_pil(image).convert("L")
    # Mode "1" packs rows MSB-first with byte padding, the printer's raster layout.
    if dither:
        mono = ImageOps.invert(gray).convert("1", dither=Image.Dither.FLOYDSTEINBERG)
    else:
        mono = gray.point(lambda v: 255 if v < threshold else 0).convert(
            "1", dither=Image.Dither.NONE
        )
    return RasterImage(
        width=image.width,
        height=image.height,
        data=mono.tobytes(),
        plane=plane,
    )


def _to_pil(image: DecodedImage) -> Image.Image:
    return Image.frombytes(image.mode, (image.width, image.height), image.pixels)


def _ink_palette() -> Image.Image:
    palette = Image.new("P", (1, 1))
    # Unused slots repeat white so only indices 1 and 2 carry ink.
    palette.putpalette(list(_WHITE + _BLACK + _RED) + list(_WHITE) * 253)
    return palette


def bicolor_planes(
    image: DecodedImage,
    *,
    max_width: int,
    dither: bool = False,
) -> tuple[RasterImage, RasterImage]:
    """Split an RGB image into aligned default (black) and accent (red) planes.

    Each pixel takes the nearest of white, black and red, or with ``dither``
    the Floyd-Steinberg spread over those three inks.
    """
    check_width(image.width, max_width)
    if image.width == 0 or image.height == 0:
        raise ValueError("image has no pixels")
    mode = Image.Dither.FLOYDSTEINBERG if dither else Image.Dither.NONE
    indices = _to_pil(image).convert("RGB").quantize(palette=_ink_palette(), dither=mode).tobytes()
    width = image.width
    rows = [indices[y * width : (y + 1) * width] for y in range(image.height)]
    return (
        pack_rows(
            [[index == _BLACK_INDEX for index in row] for row in rows],
            max_width=max_width,
            plane=Color.DEFAULT,
        ),
        pack_rows(
            [[index == _RED_INDEX for index in row] for row in rows],
            max_width=max_width,
            plane=Color.ACCENT,
        ),
    )


def expand_modules(
    grid: Sequence[Sequence[bool]],
    *,
    module_width: int,
    module_height: int,
) -> list[list[bool]]:
    if module_width < 1 or module_height < 1:
        raise ValueError("module size must be at least one dot")
    rows: list[list[bool]] = []
    for grid_row in grid:
        row = [bool(value) for value in grid_row for _ in range(module_width)]
        rows.extend(list(row) for _ in range(module_height))
    return rows
