# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""tavor create / status / stop — single-box lifecycle commands."""

from __future__ import annotations

import asyncio
import json

import click

from tavor import Box, BoxConfig, Tavor


def _parse_metadata(pairs: tuple[str, ...]) -> dict[str, str] | None:
    if not pairs:
        return None
    metadata: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--metadata")
        metadata[key] = value
    return metadata


@click.command("create")
@click.option("--cpu", type=click.IntRange(min=1), default=None, help="Number of CPUs.")
@click.option("--mib-ram", type=click.IntRange(min=1), default=None, help="Memory in MiB.")
@click.option(
    "--timeout",
    "-t",
    type=click.IntRange(min=1),
    default=None,
    help="Box lifetime in seconds.",
)
@click.option("--metadata", "-m", multiple=True, help="Metadata as KEY=VALUE (repeatable).")
@click.option("--wait/--no-wait", default=False, help="Wait until the box is running.")
@click.option(
    "--max-wait",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for readiness (with --wait).",
)
def create_box(
    cpu: int | None,
    mib_ram: int | None,
    timeout: int | None,
    metadata: tuple[str, ...],
    wait: bool,
    max_wait: float | None,
) -> None:
    """Create a box and print its ID.

    The box keeps running until it is stopped or its timeout expires.

    Examples:

        tavor create --cpu 2 --mib-ram 2048

        tavor create --wait -m job=nightly
    """
    config = BoxConfig(
        timeout=timeout,
        metadata=_parse_metadata(metadata),
        cpu=cpu,
        mib_ram=mib_ram,
    )

    async def _run() -> str:
        client = Tavor()
        try:
            box = await client.create_box(config)
            if wait:
                if max_wait is not None:
                    await box.wait_until_ready(max_wait=max_wait)
                else:
                    await box.wait_until_ready()
            return box.id
        finally:
            await client.aclose()

    click.echo(asyncio.run(_run()))


@click.command("status")
@click.argument("box_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw box JSON.")
def box_status(box_id: str, as_json: bool) -> None:
    """Show the current status of a box.

    BOX_ID is the ID of the box to query.
    """

    async def _run() -> Box:
        client = Tavor()
        try:
            box = await client.get_box(box_id)
            return await box.refresh()
        finally:
            await client.aclose()

    box = asyncio.run(_run())
    if as_json:
        click.echo(json.dumps(box.raw, indent=2))
    else:
        click.echo(box.status.value)


@click.command("stop")
@click.argument("box_ids", nargs=-1, required=True)
@click.option("--missing-ok", is_flag=True, help="Do not fail for boxes that no longer exist.")
def stop_boxes(box_ids: tuple[str, ...], missing_ok: bool) -> None:
    """Stop one or more boxes.

    BOX_IDS are the IDs of the boxes to stop.
    """

    async def _run() -> list[tuple[str, bool]]:
        client = Tavor()
        results: list[tuple[str, bool]] = []
        try:
            for box_id in box_ids:
                box = await client.get_box(box_id)
                results.append((box_id, await box.stop(missing_ok=missing_ok)))
        finally:
            await client.aclose()
        return results

    for box_id, stopped in asyncio.run(_run()):
        click.echo(f"{box_id}: {'stopped' if stopped else 'not found'}")
