# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Tavor CLI — terminal interface for Tavor boxes.

The functions in this package are intended to be called via the CLI,
not from Python code. No backwards compatibility guarantees are made
for Python calling patterns.
"""

from __future__ import annotations

from typing import Any

try:
    import click
except ModuleNotFoundError as e:
    if getattr(e, "name", None) == "click":
        raise ImportError(
            "tavor CLI requires the 'cli' extra. Install it with: pip install tavor-client[cli]",
            name="click",
        ) from e
    raise

from tavor.cli.box import box_status, create_box, stop_boxes
from tavor.cli.list import list_boxes
from tavor.exceptions import TavorError


class _TavorCLI(click.Group):
    """Click group with top-level TavorError handling.

    SDK errors (NotFoundError, auth failures, etc.) are caught and
    printed as clean "Error: <message>" output instead of raw tracebacks.
    """

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except TavorError as exc:
            raise click.ClickException(str(exc)) from None


@click.group(cls=_TavorCLI)
@click.version_option(package_name="tavor-client")
def cli() -> None:
    """Tavor CLI."""


cli.add_command(list_boxes, "ls")
cli.add_command(create_box, "create")
cli.add_command(box_status, "status")
cli.add_command(stop_boxes, "stop")
