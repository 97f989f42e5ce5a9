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

import typer

from ...render import render_markdown
from ..core.common import _ctx_value, _load_config, _report_substitutions, _run_cli
from ..io.device import exclusive_lock, write_device
from ..io.inputs import _read_markdown
from ..ui import console_err

_PRINT_HELP = (
    "Print a Markdown document on the receipt printer.\n\n"
    "The whole document is rendered before the device is opened, so nothing\n"
    "is printed when rendering fails.\n\n"
    "Examples:\n"
    "  slipmark print /dev/usb/lp0 --file notes.md\n"
    "  cat notes.md | slipmark print /dev/usb/lp0 --lock-file /run/lock/printer.lock\n"
)


def register(app: typer.Typer) -> None:
    app.command(name="print", help=_PRINT_HELP)(print_document)


def print_document(
    ctx: typer.Context,
    device: str = typer.Argument(
        ...,
        metavar="DEVICE-PATH",
        help="Path to the printer character device.",
    ),
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        metavar="PATH",
        help="Markdown input file (default: stdin).",
        rich_help_panel="Input",
    ),
    lock_file: str | None = typer.Option(
        None,
        "--lock-file",
        metavar="PATH",
        help="Lock file for coordinating exclusive access to the printer.",
        rich_help_panel="Output",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        result = render_markdown(_read_markdown(file), config)
        _report_substitutions(result, quiet=quiet_value)
        with exclusive_lock(lock_file):
            write_device(device, result.data)
        if not quiet_value:
            console_err.print(f"[dim]- sent {len(result.data)} bytes to {device}[/dim]")

    _run_cli(_run, debug=debug_value)
