"""Error handling patterns for the Tavor client.

Demonstrates:
- AuthenticationError when no API key is configured
- ReadinessTimeoutError from a short max_wait
- NotFoundError and stop(missing_ok=True)

Usage:
    uv run examples/error_handling.py
"""

import asyncio
import os

from tavor import Tavor
from tavor.exceptions import (
    AuthenticationError,
    NotFoundError,
    ReadinessTimeoutError,
    RemoteFailureError,
)


async def main() -> None:
    # --- AuthenticationError ---
    print("1. AuthenticationError without an API key")
    print("-" * 50)

    api_key = os.environ.pop("TAVOR_API_KEY", None)
    try:
        Tavor()
    except AuthenticationError as e:
        print(f"   Caught AuthenticationError: {e}")
    finally:
        if api_key is not None:
            os.environ["TAVOR_API_KEY"] = api_key
    print()

    async with Tavor() as client:
        # --- ReadinessTimeoutError ---
        print("2. ReadinessTimeoutError from a short max_wait")
        print("-" * 50)

        box = await client.create_box()
        try:
            await box.wait_until_ready(poll_interval=0.1, max_wait=0.5)
            print("   Box was ready within 0.5s")
        except ReadinessTimeoutError as e:
            print(f"   Caught ReadinessTimeoutError after {e.max_wait}s")
        except RemoteFailureError as e:
            print(f"   Box failed to start: status={e.status} details={e.details}")
        finally:
            await box.stop()
        print()

        # --- NotFoundError with missing_ok ---
        print("3. NotFoundError with missing_ok")
        print("-" * 50)

        gone = await client.get_box("non-existent-box-id")
        try:
            await gone.stop()
        except NotFoundError as e:
            print(f"   Without missing_ok: caught NotFoundError (HTTP {e.status_code})")

        stopped = await gone.stop(missing_ok=True)
        print(f"   With missing_ok=True: stop returned {stopped}")
        print()

    print("All error handling patterns demonstrated!")


if __name__ == "__main__":
    asyncio.run(main())
