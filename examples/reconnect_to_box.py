#!/usr/bin/env python3
"""Example: Reconnect to an existing box by ID.

get_box() returns a handle for a box created elsewhere (in a previous
script run, or by another process). No request is made until the handle
is used, so an unknown ID shows up as NotFoundError at that point.

Usage:
    # First, create a box and note its ID
    uv run examples/reconnect_to_box.py --create

    # Then reconnect to it
    uv run examples/reconnect_to_box.py --box-id <id>

    # And stop it
    uv run examples/reconnect_to_box.py --box-id <id> --stop
"""

import argparse
import asyncio

from tavor import BoxConfig, Tavor
from tavor.exceptions import NotFoundError


async def create_box(client: Tavor) -> None:
    box = await client.create_box(BoxConfig(timeout=3600, metadata={"example": "reconnect"}))
    await box.wait_until_ready()

    print(f"Created box: {box.id}")
    print("This box keeps running until you stop it or its timeout expires.")
    print("To reconnect later, run:")
    print(f"  uv run examples/reconnect_to_box.py --box-id {box.id}")


async def reconnect(client: Tavor, box_id: str, stop: bool) -> None:
    box = await client.get_box(box_id)
    try:
        snapshot = await box.refresh()
    except NotFoundError:
        print(f"Error: Box {box_id} not found")
        print("It may have been stopped or never existed.")
        return

    print(f"Connected to {box.id}")
    print(f"  Status: {snapshot.status}")
    print(f"  Hostname: {snapshot.hostname}")
    print(f"  Metadata: {snapshot.metadata}")

    if stop:
        await box.stop()
        print("Box stopped")


async def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--create", action="store_true", help="Create a long-running box")
    parser.add_argument("--box-id", help="ID of the box to reconnect to")
    parser.add_argument("--stop", action="store_true", help="Stop the box after reconnecting")
    args = parser.parse_args()

    async with Tavor() as client:
        if args.create:
            await create_box(client)
        elif args.box_id:
            await reconnect(client, args.box_id, args.stop)
        else:
            parser.print_help()


if __name__ == "__main__":
    asyncio.run(main())
