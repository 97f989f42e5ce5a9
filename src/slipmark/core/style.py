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

from dataclasses import dataclass, replace
from enum import Flag, auto

from ..escpos.commands import Color, SetStyle


class StyleDelta(Flag):
    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    STRIKETHROUGH = auto()


@dataclass(frozen=True)
class StyleState:
    bold: bool = False
    underline: bool = False
    strikethrough: bool = False
    double_height: bool = False
    double_width: bool = False
    color: Color = Color.DEFAULT

    @property
    def width_multiplier(self) -> int:
        return 2 if self.double_width else 1

    def columns(self, paper_columns: int) -> int:
        return paper_columns // self.width_multiplier

    def apply(self, delta: StyleDelta) -> StyleState:
        # Setting a flag that is already set leaves the state unchanged.
        return replace(
            self,
            bold=self.bold or bool(delta & StyleDelta.BOLD),
            underline=self.underline or bool(delta & StyleDelta.ITALIC),
            strikethrough=self.strikethrough or bool(delta & StyleDelta.STRIKETHROUGH),
        )

    def with_color(self, color: Color) -> StyleState:
        return replace(self, color=color)

    def with_size(self, *, width: int = 1, height: int = 1) -> StyleState:
        if width not in (1, 2) or height not in (1, 2):
            raise ValueError("size multipliers must be 1 or 2")
        return replace(self, double_width=width == 2, double_height=height == 2)

    def set_style_command(self) -> SetStyle:
        return SetStyle(
            bold=self.bold,
            underline=self.underline,
            double_strike=self.strikethrough,
            width=self.width_multiplier,
            height=2 if self.double_height else 1,
        )


DEFAULT_STATE = StyleState()


class StyleStack:
    """Push/pop discipline for nested style spans."""

    def __init__(self, base: StyleState = DEFAULT_STATE) -> None:
        self._current = base
        self._saved: list[StyleState] = []

    @property
    def current(self) -> StyleState:
        return self._current

    @property
    def depth(self) -> int:
        return len(self._saved)

    def enter(self, delta: StyleDelta) -> StyleState:
        self._saved.append(self._current)
        self._current = self._current.apply(delta)
        return self._current

    def leave(self) -> StyleState:
        if not self._saved:
            raise RuntimeError("tried to leave the root style")
        self._current = self._saved.pop()
        return self._current


HEADING_PRESETS: dict[int, StyleState] = {
    1: StyleState(bold=True, underline=True, double_height=True, double_width=True),
    2: StyleState(bold=True, double_height=True, double_width=True),
    3: StyleState(bold=True, underline=True),
    4: StyleState(bold=True),
    5: StyleState(bold=True, underline=True),
    6: StyleState(bold=True),
}


def heading_style(level: int) -> StyleState:
    try:
        return HEADING_PRESETS[level]
    except KeyError:
        raise ValueError(f"heading level must be 1-6, got {level}") from None
