#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass

from barcode import Code128


@dataclass(frozen=True)
class BarcodeConfig:
    module_dots: int = 2
    height_dots: int = 48


class _Code128SetB(Code128):
    # Whole symbol in code set B; runs of digits are not packed into set C.
    def __init__(self, code: str, writer=None) -> None:
        super().__init__(code, writer)
        self._charset = "B"

    def _maybe_switch_charset(self, pos: int) -> list[int]:
        return []


class PythonBarcodeGenerator:
    """Code128 (set B) module sequence from python-barcode, without the quiet zone."""

    def modules(self, text: str) -> list[bool]:
        (pattern,) = _Code128SetB(text).build()
        return [bit == "1" for bit in pattern]
