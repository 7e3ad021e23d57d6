"""Quick start example - run work against a managed box.

This example demonstrates:
- Creating a client from TAVOR_API_KEY
- Using client.sandbox() to create a box, wait until it is ready,
  and stop it when the block exits
"""

import asyncio

from tavor import BoxConfig, Tavor


async def main() -> None:
    async with Tavor() as client:
        async with client.sandbox(BoxConfig(cpu=1, mib_ram=1024)) as box:
            snapshot = await box.refresh()
            print(f"Box ID: {box.id}")
            print(f"Status: {snapshot.status}")
            print(f"Hostname: {snapshot.hostname}")

        # The box has been stopped at this point
        print("Box stopped")


if __name__ == "__main__":
    asyncio.run(main())
