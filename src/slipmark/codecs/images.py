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

import io

from PIL import Image, UnidentifiedImageError

from .base import DecodedImage

_GRAY_MODES = {"1", "L", "I", "I;16", "F"}
_WHITE = (255, 255, 255, 255)


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode in _GRAY_MODES:
        return image.convert("L")
    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, _WHITE)
    return Image.alpha_composite(background, rgba).convert("RGB")


class PillowImageDecoder:
    def decode(self, data: bytes) -> DecodedImage:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                flat = _flatten(image)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ValueError(f"unable to decode image: {exc}") from exc
        mode = "L" if flat.mode == "L" else "RGB"
        return DecodedImage(
            width=flat.width,
            height=flat.height,
            mode=mode,
            pixels=flat.tobytes(),
        )
