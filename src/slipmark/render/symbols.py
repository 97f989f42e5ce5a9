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

"""QR code and Code128 symbols rendered as raster images."""

from __future__ import annotations

from ..codecs.base import BarcodeGenerator, QrMatrixGenerator
from ..codecs.barcode import BarcodeConfig
from ..codecs.qr import QrConfig
from ..core.errors import EmptySymbolData, UnencodableSymbol
from ..escpos.commands import Color, RasterImage
from .raster import expand_modules, pack_rows

CODE128_FIRST = 0x20
CODE128_LAST = 0x7E


def encode_qr(
    data: bytes,
    generator: QrMatrixGenerator,
    config: QrConfig,
    *,
    max_width: int,
    bold: bool = False,
    plane: Color = Color.DEFAULT,
) -> RasterImage:
    if not data:
        raise EmptySymbolData("QR code")
    grid = generator.matrix(data, error=config.error, border=config.border)
    size = config.bold_module_dots if bold else config.module_dots
    rows = expand_modules(grid, module_width=size, module_height=size)
    return pack_rows(rows, max_width=max_width, plane=plane)


def check_code128_text(text: str) -> None:
    if not text:
        raise EmptySymbolData("Code128 barcode")
    for char in text:
        if not CODE128_FIRST <= ord(char) <= CODE128_LAST:
            raise UnencodableSymbol(text, char)


def encode_code128(
    text: str,
    generator: BarcodeGenerator,
    config: BarcodeConfig,
    *,
    max_width: int,
    plane: Color = Color.DEFAULT,
) -> RasterImage:
    check_code128_text(text)
    modules = generator.modules(text)
    rows = expand_modules(
        [modules],
        module_width=config.module_dots,
        module_height=config.height_dots,
    )
    return pack_rows(rows, max_width=max_width, plane=plane)
