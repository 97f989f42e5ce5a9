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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..codecs.barcode import BarcodeConfig
from ..codecs.qr import QrConfig
from ..codecs.text import code_page_table
from ..escpos.commands import CutMode
from .installer import resolve_config_path

MAX_FEED_LINES = 255


@dataclass(frozen=True)
class PrinterConfig:
    columns: int = 42
    dot_width: int = 512
    codepage: str = "cp437"
    codepage_table: int = 0
    cut_mode: CutMode = CutMode.PARTIAL
    cut_feed: int = 0
    cut_at_end: bool = True
    trailing_feed_lines: int = 4


@dataclass(frozen=True)
class LayoutConfig:
    quote_indent: int = 4
    max_ordered_depth: int = 3
    rule_glyph: str = "-"


@dataclass(frozen=True)
class ImageConfig:
    threshold: int = 128
    dither: bool = True


@dataclass(frozen=True)
class AppConfig:
    printer: PrinterConfig = field(default_factory=PrinterConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    qr: QrConfig = field(default_factory=QrConfig)
    barcode: BarcodeConfig = field(default_factory=BarcodeConfig)
    source: Path | None = None


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return build_app_config(data, source=config_path)


def build_app_config(data: dict[str, object], *, source: Path | None = None) -> AppConfig:
    return AppConfig(
        printer=build_printer_config(_get_dict(data, "printer")),
        layout=build_layout_config(_get_dict(data, "layout")),
        image=build_image_config(_get_dict(data, "image")),
        qr=build_qr_config(_get_dict(data, "qr")),
        barcode=build_barcode_config(_get_dict(data, "barcode")),
        source=source,
    )


def build_printer_config(cfg: dict[str, object] | None = None) -> PrinterConfig:
    cfg = cfg or {}
    codepage = _parse_str(cfg.get("codepage"), field="printer.codepage", default="cp437")
    table_value = cfg.get("codepage_table")
    if table_value is None:
        try:
            table = code_page_table(codepage)
        except LookupError as exc:
            raise ValueError(f"printer.codepage: unknown encoding {codepage!r}") from exc
    else:
        table = _parse_int_range(table_value, field="printer.codepage_table", low=0, high=255)
    return PrinterConfig(
        columns=_parse_positive_int(cfg.get("columns"), field="printer.columns", default=42),
        dot_width=_parse_positive_int(cfg.get("dot_width"), field="printer.dot_width", default=512),
        codepage=codepage,
        codepage_table=table,
        cut_mode=_parse_cut_mode(cfg.get("cut_mode"), field="printer.cut_mode"),
        cut_feed=_parse_int_range(
            cfg.get("cut_feed", 0), field="printer.cut_feed", low=0, high=255
        ),
        cut_at_end=_parse_bool(cfg.get("cut_at_end"), field="printer.cut_at_end", default=True),
        trailing_feed_lines=_parse_int_range(
            cfg.get("trailing_feed_lines", 4),
            field="printer.trailing_feed_lines",
            low=1,
            high=MAX_FEED_LINES,
        ),
    )


def build_layout_config(cfg: dict[str, object] | None = None) -> LayoutConfig:
    cfg = cfg or {}
    glyph = _parse_str(cfg.get("rule_glyph"), field="layout.rule_glyph", default="-")
    if len(glyph) != 1:
        raise ValueError("layout.rule_glyph must be a single character")
    return LayoutConfig(
        quote_indent=_parse_positive_int(
            cfg.get("quote_indent"), field="layout.quote_indent", default=4
        ),
        max_ordered_depth=_parse_positive_int(
            cfg.get("max_ordered_depth"), field="layout.max_ordered_depth", default=3
        ),
        rule_glyph=glyph,
    )


def build_image_config(cfg: dict[str, object] | None = None) -> ImageConfig:
    cfg = cfg or {}
    return ImageConfig(
        threshold=_parse_int_range(
            cfg.get("threshold", 128), field="image.threshold", low=1, high=255
        ),
        dither=_parse_bool(cfg.get("dither"), field="image.dither", default=True),
    )


def build_qr_config(cfg: dict[str, object] | None = None) -> QrConfig:
    cfg = cfg or {}
    error = _parse_str(cfg.get("error"), field="qr.error", default="L").upper()
    if error not in {"L", "M", "Q", "H"}:
        raise ValueError("qr.error must be one of L, M, Q, H")
    version = cfg.get("version")
    mask = cfg.get("mask")
    return QrConfig(
        error=error,
        border=_parse_int_range(cfg.get("border", 4), field="qr.border", low=0, high=16),
        module_dots=_parse_positive_int(cfg.get("module_dots"), field="qr.module_dots", default=2),
        bold_module_dots=_parse_positive_int(
            cfg.get("bold_module_dots"), field="qr.bold_module_dots", default=3
        ),
        version=None if version is None else _parse_int_range(
            version, field="qr.version", low=1, high=40
        ),
        mask=None if mask is None else _parse_int_range(mask, field="qr.mask", low=0, high=7),
        boost_error=_parse_bool(cfg.get("boost_error"), field="qr.boost_error", default=False),
    )


def build_barcode_config(cfg: dict[str, object] | None = None) -> BarcodeConfig:
    cfg = cfg or {}
    return BarcodeConfig(
        module_dots=_parse_positive_int(
            cfg.get("module_dots"), field="barcode.module_dots", default=2
        ),
        height_dots=_parse_positive_int(
            cfg.get("height_dots"), field="barcode.height_dots", default=48
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_str(value: object, *, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field} must be a non-empty string")
    return normalized


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_cut_mode(value: object, *, field: str) -> CutMode:
    if value is None:
        return CutMode.PARTIAL
    if not isinstance(value, str):
        raise ValueError(f"{field} must be 'full' or 'partial'")
    try:
        return CutMode(value.strip().lower())
    except ValueError:
        raise ValueError(f"{field} must be 'full' or 'partial'") from None


def _parse_positive_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_int_range(value: object, *, field: str, low: int, high: int) -> int:
    parsed = _parse_int_strict(value, field=field)
    if not low <= parsed <= high:
        raise ValueError(f"{field} must be between {low} and {high}")
    return parsed


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
