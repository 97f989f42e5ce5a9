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

import fcntl
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ...render import write_stream
from ..ui import console_err

logger = logging.getLogger(__name__)


@contextmanager
def exclusive_lock(path: str | Path | None) -> Iterator[None]:
    """Hold an advisory lock on ``path`` so producers take turns on one printer."""
    if path is None:
        yield
        return
    lock_path = Path(path).expanduser()
    try:
        handle = open(lock_path, "a")
    except OSError as exc:
        raise OSError(f"unable to open lock file {lock_path}: {exc}") from exc
    with handle:
        logger.debug("waiting for lock %s", lock_path)
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def write_device(device: str | Path, data: bytes) -> None:
    target = Path(device).expanduser()
    if not target.exists():
        raise FileNotFoundError(f"device not found: {target}")
    # The printer node must already exist; never create a regular file in its place.
    with open(target, "r+b") as handle:
        write_stream(data, handle)
    logger.debug("wrote %d bytes to %s", len(data), target)


def _write_output(path: str | None, data: bytes, *, quiet: bool) -> None:
    if path and path != "-":
        with open(path, "wb") as handle:
            write_stream(data, handle)
        if not quiet:
            console_err.print(f"[dim]- wrote {path}[/dim]")
    else:
        write_stream(data, sys.stdout.buffer)
