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

import codecs
import logging

from ..core.errors import UnencodableCharacter

logger = logging.getLogger(__name__)

# ESC t table numbers for the code pages most ESC/POS printers ship.
CODE_PAGE_TABLES = {
    "cp437": 0,
    "cp850": 2,
    "cp860": 3,
    "cp863": 4,
    "cp865": 5,
    "cp1252": 16,
    "cp866": 17,
    "cp852": 18,
    "cp858": 19,
}

REPLACEMENT = "?"

# Typographic characters that have a close single-byte-friendly spelling.
_FOLDS = {
    "\t": " ",
    "\u00a0": " ",
    "\u2007": " ",
    "\u2009": " ",
    "\u200b": "",
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",
    "\u2014": "--",
    "\u2015": "--",
    "\u2212": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2022": "*",
    "\u2026": "...",
    "\u2190": "<-",
    "\u2192": "->",
}


def code_page_table(codepage: str) -> int:
    name = codecs.lookup(codepage).name
    try:
        return CODE_PAGE_TABLES[name]
    except KeyError:
        raise ValueError(
            f"no ESC t table known for code page {codepage!r}; set printer.codepage_table"
        ) from None


class CodePageTranscoder:
    def __init__(self, codepage: str = "cp437", *, replacement: str = REPLACEMENT) -> None:
        self.codepage = codecs.lookup(codepage).name
        if len(replacement.encode(self.codepage)) != 1:
            raise ValueError("replacement must encode to a single byte")
        self.replacement = replacement
        self.substituted: list[UnencodableCharacter] = []

    def _encodable(self, char: str) -> bool:
        if char == "\n":
            return True
        if ord(char) < 0x20 or ord(char) == 0x7F:
            return False
        try:
            return len(char.encode(self.codepage)) == 1
        except UnicodeEncodeError:
            return False

    def normalize(self, text: str) -> str:
        out: list[str] = []
        for char in text:
            if self._encodable(char):
                out.append(char)
                continue
            folded = _FOLDS.get(char)
            if folded is not None and all(self._encodable(c) for c in folded):
                out.append(folded)
                continue
            self._report(char)
            out.append(self.replacement)
        return "".join(out)

    def encode(self, text: str) -> bytes:
        return self.normalize(text).encode(self.codepage)

    def _report(self, char: str) -> None:
        issue = UnencodableCharacter(
            f"U+{ord(char):04X} is not in {self.codepage}; printing {self.replacement!r}"
        )
        self.substituted.append(issue)
        logger.debug("%s", issue)
