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

"""ESC/POS command values and their byte encoding."""

from .commands import (
    DEFAULT_STYLE,
    Color,
    Command,
    Cut,
    CutMode,
    Initialize,
    Justification,
    LineFeed,
    PrintText,
    RasterImage,
    SelectCodePage,
    SetColor,
    SetJustification,
    SetStyle,
)
from .encoder import encode_command, encode_commands

__all__ = [
    "Color",
    "Command",
    "Cut",
    "CutMode",
    "DEFAULT_STYLE",
    "Initialize",
    "Justification",
    "LineFeed",
    "PrintText",
    "RasterImage",
    "SelectCodePage",
    "SetColor",
    "SetJustification",
    "SetStyle",
    "encode_command",
    "encode_commands",
]
