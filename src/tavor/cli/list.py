# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""tavor ls — list boxes."""

from __future__ import annotations

import asyncio

import click

from tavor import Box, BoxStatus, Tavor

_STATUS_CHOICES = [s.value for s in BoxStatus if s != BoxStatus.UNKNOWN]


async def _fetch() -> list[Box]:
    client = Tavor()
    try:
        return await client.list_boxes()
    finally:
        await client.aclose()


@click.command("ls")
@click.option(
    "--status",
    "-s",
    default=None,
    type=click.Choice(_STATUS_CHOICES, case_sensitive=False),
    help="Only show boxes with this status.",
)
@click.option("--quiet", "-q", is_flag=True, help="Only print box IDs.")
def list_boxes(status: str | None, quiet: bool) -> None:
    """List boxes.

    Displays box ID, status, hostname, and creation time.
    """
    boxes = asyncio.run(_fetch())
    if status is not None:
        boxes = [b for b in boxes if b.status == status.lower()]

    if quiet:
        for b in boxes:
            click.echo(b.id)
        return

    if not boxes:
        click.echo("No boxes found.")
        return

    click.echo(f"{'BOX ID':<40} {'STATUS':<14} {'HOSTNAME':<32} {'CREATED AT'}")
    click.echo(f"{'-' * 40} {'-' * 14} {'-' * 32} {'-' * 24}")

    for b in boxes:
        hostname = b.hostname or "-"
        created = b.created_at or "-"
        click.echo(f"{b.id:<40} {b.status.value:<14} {hostname:<32} {created}")
