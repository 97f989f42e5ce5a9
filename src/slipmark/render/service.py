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

import logging
from dataclasses import dataclass, field
from typing import BinaryIO

from ..codecs.barcode import PythonBarcodeGenerator
from ..codecs.base import BarcodeGenerator, ImageDecoder, QrMatrixGenerator
from ..codecs.images import PillowImageDecoder
from ..codecs.qr import SegnoQrGenerator
from ..codecs.text import CodePageTranscoder
from ..config.loader import AppConfig
from ..core.errors import UnencodableCharacter
from ..core.model import Document
from ..escpos.commands import Command
from ..escpos.encoder import encode_commands
from ..markdown.parser import parse_document
from .walker import DocumentWalker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    commands: tuple[Command, ...]
    data: bytes
    substitutions: tuple[UnencodableCharacter, ...] = field(default_factory=tuple)


def build_walker(
    config: AppConfig,
    *,
    transcoder: CodePageTranscoder | None = None,
    images: ImageDecoder | None = None,
    qr: QrMatrixGenerator | None = None,
    barcode: BarcodeGenerator | None = None,
) -> DocumentWalker:
    return DocumentWalker(
        config,
        transcoder=transcoder or CodePageTranscoder(config.printer.codepage),
        images=images or PillowImageDecoder(),
        qr=qr or SegnoQrGenerator.from_config(config.qr),
        barcode=barcode or PythonBarcodeGenerator(),
    )


def encode(commands: list[Command] | tuple[Command, ...], config: AppConfig) -> bytes:
    return encode_commands(commands, cut_feed=config.printer.cut_feed)


def render_document(document: Document, config: AppConfig) -> RenderResult:
    transcoder = CodePageTranscoder(config.printer.codepage)
    walker = build_walker(config, transcoder=transcoder)
    commands = walker.render(document)
    data = encode(commands, config)
    logger.debug(
        "rendered %d blocks into %d commands (%d bytes)",
        len(document.blocks),
        len(commands),
        len(data),
    )
    return RenderResult(
        commands=tuple(commands),
        data=data,
        substitutions=tuple(transcoder.substituted),
    )


def render_markdown(text: str, config: AppConfig) -> RenderResult:
    return render_document(parse_document(text), config)


def write_stream(data: bytes, sink: BinaryIO) -> None:
    """Single write with no retry; errors propagate to the caller."""
    sink.write(data)
    sink.flush()
