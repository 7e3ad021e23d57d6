# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, TypeVar

import httpx

from tavor._auth import resolve_api_key
from tavor._box import BoxHandle
from tavor._defaults import (
    BOXES_PATH,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    BoxConfig,
)
from tavor._env import resolve_base_url, resolve_box_timeout
from tavor._transport import ConnectionConfig, build_http_client, parse_box, request_json
from tavor._types import Box
from tavor.exceptions import RemoteServiceError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Tavor:
    """Tavor API client.

    Configuration is resolved once, at construction:

    - api_key: explicit value, then TAVOR_API_KEY. Missing -> AuthenticationError.
    - base_url: explicit value, then TAVOR_BASE_URL, then https://api.tavor.dev
    - request_timeout_seconds: explicit value, then 30s

    Example:

        async with Tavor() as client:
            async with client.sandbox(BoxConfig(cpu=2)) as box:
                print(f"Box {box.id} is ready")

            # Or manage the box yourself
            box = await client.create_box()
            try:
                await box.wait_until_ready()
            finally:
                await box.stop()
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        request_timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client (makes no requests).

        Args:
            api_key: Tavor API key (default: TAVOR_API_KEY env)
            base_url: Tavor API URL (default: TAVOR_BASE_URL env or https://api.tavor.dev)
            request_timeout_seconds: Timeout for each HTTP request (default: 30s)
            http_client: Pre-configured client to send requests with. It is used
                as given and is not closed by aclose().

        Raises:
            AuthenticationError: If no API key can be resolved
        """
        auth = resolve_api_key(api_key)
        self._base_url = resolve_base_url(base_url)
        self._request_timeout_seconds = request_timeout_seconds or DEFAULT_REQUEST_TIMEOUT_SECONDS

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = build_http_client(
                auth.api_key, self._base_url, self._request_timeout_seconds
            )
            logger.debug("Initialized HTTP client for %s", self._base_url)

        self._config = ConnectionConfig(
            api_key=auth.api_key,
            base_url=self._base_url,
            request_timeout_seconds=self._request_timeout_seconds,
            http_client=http_client,
        )

    @property
    def base_url(self) -> str:
        """The resolved API base URL, without a trailing slash."""
        return self._base_url

    @property
    def request_timeout_seconds(self) -> float:
        """Timeout applied to each HTTP request, in seconds."""
        return self._request_timeout_seconds

    def __repr__(self) -> str:
        return f"<Tavor base_url={self._base_url}>"

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http_client:
            await self._config.http_client.aclose()
            logger.debug("Closed HTTP client")

    async def __aenter__(self) -> Tavor:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def create_box(self, config: BoxConfig | None = None) -> BoxHandle:
        """Create a box and return a handle to it.

        Only the fields set on config are sent. The box is not ready yet when
        this returns; call wait_until_ready() and remember to stop() it.

        Raises:
            RemoteServiceError: If the response carries no box ID
        """
        request = (config or BoxConfig()).to_request()
        logger.debug("Creating box with %s", request)

        payload = await request_json(self._config, "POST", BOXES_PATH, json=request)
        if not isinstance(payload, dict) or not payload.get("id"):
            raise RemoteServiceError("Create response did not include a box ID", body=payload)

        box_id = str(payload["id"])
        logger.info("Box %s created", box_id)
        return BoxHandle(box_id, self._config)

    async def list_boxes(self) -> list[Box]:
        """List the boxes visible to this API key.

        Returns a snapshot in the order the service returned it.
        """
        payload = await request_json(self._config, "GET", BOXES_PATH)
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise RemoteServiceError("List response did not include a data array", body=payload)
        return [parse_box(item) for item in data]

    async def get_box(self, box_id: str) -> BoxHandle:
        """Return a handle for an existing box ID.

        No request is made. An unknown ID surfaces as NotFoundError on first use.
        """
        return BoxHandle(box_id, self._config)

    @contextlib.asynccontextmanager
    async def sandbox(
        self,
        config: BoxConfig | None = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_wait: float = DEFAULT_MAX_WAIT_SECONDS,
    ) -> AsyncIterator[BoxHandle]:
        """Create a box, wait until it is ready, and stop it on exit.

        The box is stopped exactly once on every exit path, including
        failures while waiting and task cancellation. If that stop fails the
        error is logged and the original outcome propagates.

        When config has no timeout, TAVOR_BOX_TIMEOUT (default 600s) is used.

        Example:
            async with client.sandbox(BoxConfig(mib_ram=2048)) as box:
                status = await box.get_status()
        """
        config = config or BoxConfig()
        config = config.with_overrides(timeout=resolve_box_timeout(config.timeout))

        box = await self.create_box(config)
        try:
            await box.wait_until_ready(poll_interval=poll_interval, max_wait=max_wait)
            yield box
        finally:
            await box._release()

    async def with_sandbox(
        self,
        work: Callable[[BoxHandle], Awaitable[T]],
        config: BoxConfig | None = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_wait: float = DEFAULT_MAX_WAIT_SECONDS,
    ) -> T:
        """Run work against a fresh box and return its result.

        Callback form of sandbox(); the box is stopped however work exits.

        Example:
            async def job(box: BoxHandle) -> str:
                return (await box.refresh()).hostname

            hostname = await client.with_sandbox(job, BoxConfig(cpu=1))
        """
        async with self.sandbox(config, poll_interval=poll_interval, max_wait=max_wait) as box:
            return await work(box)
