#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    inspect as inspect_command,
    printer as print_command,
    render as render_command,
)


def register(app: typer.Typer) -> None:
    print_command.register(app)
    render_command.register(app)
    inspect_command.register(app)
