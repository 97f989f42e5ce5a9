#!/usr/bin/env python3
from __future__ import annotations

import logging

from rich.logging import RichHandler

from ..ui import console_err

_HANDLER_NAME = "slipmark-cli"


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[yellow]Warning:[/yellow] {message}")


def configure_logging(*, debug: bool, quiet: bool) -> None:
    root = logging.getLogger("slipmark")
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    handler = RichHandler(console=console_err, show_path=False, show_time=debug)
    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    if debug:
        root.setLevel(logging.DEBUG)
    elif quiet:
        root.setLevel(logging.ERROR)
    else:
        root.setLevel(logging.WARNING)
