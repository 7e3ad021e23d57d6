# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Shared fixtures for tavor unit tests."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

# Environment variables that affect configuration resolution.
# These are cleared before each test to ensure isolation.
TAVOR_ENV_VARS = (
    "TAVOR_API_KEY",
    "TAVOR_BASE_URL",
    "TAVOR_BOX_TIMEOUT",
)

TEST_BASE_URL = "http://tavor.test"


@pytest.fixture(autouse=True)
def clean_tavor_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear all TAVOR_* env vars before each test.

    This runs automatically for every test (autouse=True) and ensures:
    1. Tests start with a clean environment (no leakage from local setup)
    2. The original environment is restored after each test (even on failure)
    3. Tests are deterministic regardless of the developer's local env
    """
    for var in TAVOR_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Set a mock TAVOR_API_KEY for the test."""
    test_key = "test-api-key"
    monkeypatch.setenv("TAVOR_API_KEY", test_key)
    return test_key


@pytest.fixture
def mock_base_url(monkeypatch: pytest.MonkeyPatch) -> str:
    """Set a mock TAVOR_BASE_URL for the test."""
    monkeypatch.setenv("TAVOR_BASE_URL", TEST_BASE_URL)
    return TEST_BASE_URL


class FakeBoxService:
    """In-memory stand-in for the boxes API, served through httpx.MockTransport.

    Each box has a queue of statuses; every GET pops the next one and the
    last status repeats. Individual routes can be overridden with a handler
    via `overrides[(method, path)]`.
    """

    def __init__(self) -> None:
        self.boxes: dict[str, dict[str, Any]] = {}
        self.status_queues: dict[str, list[str]] = {}
        self.requests: list[httpx.Request] = []
        self.overrides: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self._next_id = 0

    def add_box(self, box_id: str, *statuses: str, **fields: Any) -> None:
        queue = list(statuses) or ["queued"]
        self.status_queues[box_id] = queue
        self.boxes[box_id] = {"id": box_id, "status": queue[0], **fields}

    def set_statuses(self, box_id: str, *statuses: str) -> None:
        self.status_queues[box_id] = list(statuses)

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        override = self.overrides.get((request.method, path))
        if override is not None:
            return override(request)

        if path == "/api/v2/boxes":
            if request.method == "POST":
                body = json.loads(request.content) if request.content else {}
                self._next_id += 1
                box_id = f"box-{self._next_id}"
                self.add_box(box_id, "queued", "running", **body)
                return httpx.Response(201, json={"id": box_id})
            if request.method == "GET":
                return httpx.Response(200, json={"data": list(self.boxes.values())})

        if path.startswith("/api/v2/boxes/"):
            box_id = path.rsplit("/", 1)[-1]
            if box_id not in self.boxes:
                return httpx.Response(404, json={"error": f"Box {box_id} not found"})
            if request.method == "GET":
                queue = self.status_queues[box_id]
                status = queue.pop(0) if len(queue) > 1 else queue[0]
                self.boxes[box_id]["status"] = status
                return httpx.Response(200, json=self.boxes[box_id])
            if request.method == "DELETE":
                del self.boxes[box_id]
                del self.status_queues[box_id]
                return httpx.Response(204)

        return httpx.Response(405, json={"error": "method not allowed"})


@pytest.fixture
def fake_service() -> FakeBoxService:
    return FakeBoxService()


@pytest_asyncio.fixture
async def http_client(fake_service: FakeBoxService) -> AsyncIterator[httpx.AsyncClient]:
    """An httpx client routed to the fake service."""
    async with httpx.AsyncClient(
        base_url=TEST_BASE_URL,
        transport=httpx.MockTransport(fake_service.handler),
        headers={"x-api-key": "test-api-key"},
    ) as client:
        yield client
