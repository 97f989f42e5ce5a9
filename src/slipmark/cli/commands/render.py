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
from ..io.device import _write_output
from ..io.inputs import _read_markdown

_RENDER_HELP = (
    "Render Markdown to raw ESC/POS bytes without touching a printer.\n\n"
    "Examples:\n"
    "  slipmark render --file notes.md -o notes.bin\n"
    "  slipmark render < notes.md > /dev/usb/lp0\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_RENDER_HELP)(render)


def render(
    ctx: typer.Context,
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        metavar="PATH",
        help="Markdown input file (default: stdin).",
        rich_help_panel="Input",
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        metavar="PATH",
        help="Write the byte stream here (default: stdout).",
        rich_help_panel="Output",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        result = render_markdown(_read_markdown(file), config)
        _report_substitutions(result, quiet=quiet_value)
        _write_output(output, result.data, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)
