"""Run work on several boxes concurrently.

Each managed box is independent; the client's HTTP connection pool is
shared between them. Every box is stopped even if another one fails.

Usage:
    uv run examples/parallel_boxes.py
"""

import asyncio

from tavor import BoxConfig, BoxHandle, Tavor


async def job(box: BoxHandle) -> str:
    snapshot = await box.refresh()
    return f"{box.id} ready at {snapshot.hostname}"


async def main() -> None:
    async with Tavor() as client:
        results = await asyncio.gather(
            *[
                client.with_sandbox(job, BoxConfig(cpu=1, metadata={"worker": str(i)}))
                for i in range(3)
            ],
            return_exceptions=True,
        )

    for result in results:
        if isinstance(result, Exception):
            print(f"failed: {result!r}")
        else:
            print(result)


if __name__ == "__main__":
    asyncio.run(main())
