#!/usr/bin/env python3
from __future__ import annotations

import sys
from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

# Row styles of `slipmark inspect` follow the command groups.
THEME = Theme(
    {
        "title": "bold cyan",
        "muted": "dim",
        "warning": "yellow",
        "error": "red",
        "command": "cyan",
        "text": "green",
        "raster": "magenta",
        "paper": "blue",
    }
)


def isatty(stream) -> bool:
    try:
        return bool(stream.isatty())
    except (OSError, ValueError, AttributeError):
        return False


@dataclass(frozen=True)
class Consoles:
    out: Console
    err: Console


def _console(*, stderr: bool) -> Console:
    # Check the process streams; sys.stdout may be swapped by test runners.
    raw = sys.__stderr__ if stderr else sys.__stdout__
    return Console(
        stderr=stderr,
        theme=THEME,
        force_terminal=True if isatty(raw) else None,
        highlight=False,
    )


CONSOLES = Consoles(out=_console(stderr=False), err=_console(stderr=True))
