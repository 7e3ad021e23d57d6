"""List boxes and stop the ones that are still queued.

Usage:
    uv run examples/list_boxes.py
"""

import asyncio

from tavor import BoxStatus, Tavor


async def main() -> None:
    async with Tavor() as client:
        boxes = await client.list_boxes()
        print(f"Found {len(boxes)} boxes")

        for snapshot in boxes:
            print(f"  {snapshot.id}: {snapshot.status} {snapshot.metadata}")

        queued = [b for b in boxes if b.status == BoxStatus.QUEUED]
        for snapshot in queued:
            box = await client.get_box(snapshot.id)
            if await box.stop(missing_ok=True):
                print(f"Stopped queued box {snapshot.id}")


if __name__ == "__main__":
    asyncio.run(main())
