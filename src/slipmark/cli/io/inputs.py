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

import sys
from pathlib import Path


def _read_input_bytes(path: str | None) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    source = Path(path).expanduser()
    if not source.exists():
        raise FileNotFoundError(f"input file not found: {source}")
    if source.is_dir():
        raise IsADirectoryError(f"input path is a directory: {source}")
    return source.read_bytes()


def _read_markdown(path: str | None) -> str:
    data = _read_input_bytes(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        label = "stdin" if path in (None, "-") else path
        raise ValueError(f"couldn't decode {label} as UTF-8: {exc.reason}") from exc
