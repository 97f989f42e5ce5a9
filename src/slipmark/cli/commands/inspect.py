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
from rich.table import Table

from ...escpos.commands import (
    Command,
    Cut,
    Initialize,
    LineFeed,
    PrintText,
    RasterImage,
    SelectCodePage,
    SetColor,
    SetJustification,
    SetStyle,
)
from ...render import render_markdown
from ..core.common import _ctx_value, _load_config, _report_substitutions, _run_cli
from ..io.inputs import _read_markdown
from ..ui import console

_INSPECT_HELP = (
    "Show the printer command stream for a Markdown document.\n\n"
    "Examples:\n"
    "  slipmark inspect --file notes.md\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_INSPECT_HELP)(inspect)


def inspect(
    ctx: typer.Context,
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        metavar="PATH",
        help="Markdown input file (default: stdin).",
        rich_help_panel="Input",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        result = render_markdown(_read_markdown(file), config)
        _report_substitutions(result, quiet=quiet_value)
        table = Table(title="Command stream", title_style="title", header_style="muted")
        table.add_column("#", justify="right", style="muted")
        table.add_column("Command")
        table.add_column("Details", overflow="fold")
        for index, command in enumerate(result.commands, start=1):
            name, details, style = _describe(command, codepage=config.printer.codepage)
            table.add_row(str(index), f"[{style}]{name}[/{style}]", details)
        console.print(table)
        if not quiet_value:
            console.print(
                f"[muted]{len(result.commands)} commands, {len(result.data)} bytes[/muted]"
            )

    _run_cli(_run, debug=debug_value)


def _describe(command: Command, *, codepage: str) -> tuple[str, str, str]:
    name = type(command).__name__
    if isinstance(command, PrintText):
        return name, repr(command.data.decode(codepage)), "text"
    if isinstance(command, SetStyle):
        flags = [
            label
            for label, enabled in (
                ("bold", command.bold),
                ("underline", command.underline),
                ("double-strike", command.double_strike),
            )
            if enabled
        ]
        flags.append(f"{command.width}x{command.height}")
        return name, " ".join(flags), "command"
    if isinstance(command, SetJustification):
        return name, command.justification.name.lower(), "command"
    if isinstance(command, SetColor):
        return name, command.color.name.lower(), "command"
    if isinstance(command, SelectCodePage):
        return name, f"table {command.table}", "command"
    if isinstance(command, RasterImage):
        details = f"{command.width}x{command.height} dots, {command.plane.name.lower()} plane"
        return name, details, "raster"
    if isinstance(command, LineFeed):
        return name, str(command.lines), "paper"
    if isinstance(command, Cut):
        return name, command.mode.value, "paper"
    if isinstance(command, Initialize):
        return name, "", "command"
    return name, repr(command), "command"
