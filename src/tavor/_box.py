# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from tavor._defaults import (
    BOXES_PATH,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
)
from tavor._transport import ConnectionConfig, parse_box, request_json
from tavor._types import Box, BoxStatus
from tavor.exceptions import NotFoundError, ReadinessTimeoutError, RemoteFailureError

logger = logging.getLogger(__name__)


class BoxHandle:
    """Handle to a single remote box.

    A handle is the box ID plus the connection settings of the client that
    produced it. It does not cache box state: every call that needs the
    status asks the service again.

    Example:
        box = await client.create_box(BoxConfig(cpu=2))
        try:
            await box.wait_until_ready()
            ...
        finally:
            await box.stop()

        # or let the handle stop the box on exit
        async with await client.create_box() as box:
            await box.wait_until_ready()
    """

    def __init__(self, box_id: str, config: ConnectionConfig) -> None:
        self._box_id = box_id
        self._config = config

    @property
    def id(self) -> str:
        """The box ID assigned by the service."""
        return self._box_id

    def __repr__(self) -> str:
        return f"<BoxHandle id={self._box_id}>"

    @property
    def _path(self) -> str:
        return f"{BOXES_PATH}/{self._box_id}"

    async def refresh(self) -> Box:
        """Fetch the current box projection from the service.

        Raises:
            NotFoundError: If the box does not exist
        """
        payload = await request_json(self._config, "GET", self._path)
        return parse_box(payload)

    async def get_status(self) -> BoxStatus:
        """Get the current status of the box from the service."""
        box = await self.refresh()
        return box.status

    async def wait_until_ready(
        self,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_wait: float = DEFAULT_MAX_WAIT_SECONDS,
    ) -> Box:
        """Poll the box until it is running.

        Polling stops at the first running status, at the first terminal
        status, or once max_wait has elapsed. Request errors are not retried.

        Args:
            poll_interval: Seconds to sleep between status queries
            max_wait: Maximum total seconds to wait. This is separate from
                the box lifetime and from the per-request timeout.

        Returns:
            The Box snapshot that reported the running status

        Raises:
            ValueError: If max_wait is not positive or poll_interval is negative
            RemoteFailureError: If the box reached a terminal status
            ReadinessTimeoutError: If max_wait elapsed first
        """
        if max_wait <= 0:
            raise ValueError("max_wait must be positive")
        if poll_interval < 0:
            raise ValueError("poll_interval cannot be negative")

        start_time = time.monotonic()

        while True:
            box = await self.refresh()
            logger.debug("Box %s status: %s", self._box_id, box.status)

            if box.status.is_ready:
                logger.info("Box %s is ready", self._box_id)
                return box

            if box.status.is_terminal:
                message = f"Box {self._box_id} is {box.status.value} and will not become ready"
                if box.details:
                    message = f"{message}: {box.details}"
                raise RemoteFailureError(
                    message,
                    box_id=self._box_id,
                    status=box.status.value,
                    details=box.details,
                )

            remaining = max_wait - (time.monotonic() - start_time)
            if remaining <= 0:
                raise ReadinessTimeoutError(
                    f"Box {self._box_id} did not become ready within {max_wait}s",
                    box_id=self._box_id,
                    max_wait=max_wait,
                )

            await asyncio.sleep(min(poll_interval, remaining))

    async def stop(self, *, missing_ok: bool = False) -> bool:
        """Stop the box and release it on the service.

        Args:
            missing_ok: If True, return False instead of raising when the box
                does not exist (already stopped and removed, or never existed)

        Returns:
            True if the service accepted the stop, False if missing_ok=True
            and the box was not found

        Raises:
            NotFoundError: If the box doesn't exist and missing_ok=False
        """
        logger.debug("Stopping box %s", self._box_id)
        try:
            await request_json(self._config, "DELETE", self._path)
        except NotFoundError:
            if missing_ok:
                logger.debug("Box %s already gone", self._box_id)
                return False
            raise
        logger.info("Box %s stopped", self._box_id)
        return True

    async def _release(self) -> None:
        """Stop the box, logging instead of raising if the stop fails.

        Used on cleanup paths where another outcome is already propagating.
        """
        try:
            await self.stop()
        except Exception:
            logger.warning("Failed to stop box %s", self._box_id, exc_info=True)

    # Context manager

    async def __aenter__(self) -> BoxHandle:
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, *args: Any) -> None:
        """Stop the box.

        If the block raised, a failed stop is logged so the original error
        propagates unchanged.
        """
        if exc_type is None:
            await self.stop(missing_ok=True)
        else:
            await self._release()
