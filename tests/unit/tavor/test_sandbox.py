# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Unit tests for managed execution: Tavor.sandbox() and Tavor.with_sandbox()."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from tavor import BoxConfig, BoxHandle, Tavor
from tavor.exceptions import (
    NotFoundError,
    ReadinessTimeoutError,
    RemoteFailureError,
    ValidationError,
)
from tests.unit.tavor.conftest import FakeBoxService


@pytest.fixture
def client(http_client: httpx.AsyncClient) -> Tavor:
    return Tavor(api_key="test-api-key", http_client=http_client)


class TestWithSandbox:
    """Tests for the callback form."""

    @pytest.mark.asyncio
    async def test_returns_work_result_and_stops_once(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        seen: list[str] = []

        async def work(box: BoxHandle) -> str:
            seen.append(box.id)
            return "done"

        result = await client.with_sandbox(work, poll_interval=0)

        assert result == "done"
        assert seen == ["box-1"]
        assert len(fake_service.calls("DELETE", "/api/v2/boxes/box-1")) == 1

    @pytest.mark.asyncio
    async def test_operations_run_in_order(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        """Test create, then readiness polling, then work, then stop."""

        async def work(box: BoxHandle) -> None:
            fake_service.requests.append(httpx.Request("WORK", "http://tavor.test/work"))

        await client.with_sandbox(work, poll_interval=0)

        assert [r.method for r in fake_service.requests] == ["POST", "GET", "GET", "WORK", "DELETE"]

    @pytest.mark.asyncio
    async def test_work_error_propagates_and_box_is_stopped(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        async def work(box: BoxHandle) -> None:
            raise KeyError("missing result")

        with pytest.raises(KeyError, match="missing result"):
            await client.with_sandbox(work, poll_interval=0)

        assert len(fake_service.calls("DELETE")) == 1

    @pytest.mark.asyncio
    async def test_readiness_failure_propagates_and_box_is_stopped(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        work_called = False

        async def work(box: BoxHandle) -> None:
            nonlocal work_called
            work_called = True

        fake_service.overrides[("GET", "/api/v2/boxes/box-1")] = lambda request: httpx.Response(
            200, json={"id": "box-1", "status": "failed"}
        )

        with pytest.raises(RemoteFailureError):
            await client.with_sandbox(work, poll_interval=0)

        assert not work_called
        assert len(fake_service.calls("DELETE", "/api/v2/boxes/box-1")) == 1

    @pytest.mark.asyncio
    async def test_readiness_timeout_propagates_and_box_is_stopped(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        fake_service.overrides[("GET", "/api/v2/boxes/box-1")] = lambda request: httpx.Response(
            200, json={"id": "box-1", "status": "queued"}
        )

        async def work(box: BoxHandle) -> None:
            pass

        with pytest.raises(ReadinessTimeoutError):
            await client.with_sandbox(work, poll_interval=0, max_wait=0.02)

        assert len(fake_service.calls("DELETE")) == 1

    @pytest.mark.asyncio
    async def test_stop_failure_does_not_replace_result(
        self,
        client: Tavor,
        fake_service: FakeBoxService,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fake_service.overrides[("DELETE", "/api/v2/boxes/box-1")] = lambda request: httpx.Response(
            500, json={"error": "stop failed"}
        )

        async def work(box: BoxHandle) -> int:
            return 42

        with caplog.at_level(logging.WARNING, logger="tavor._box"):
            result = await client.with_sandbox(work, poll_interval=0)

        assert result == 42
        assert "Failed to stop box box-1" in caplog.text

    @pytest.mark.asyncio
    async def test_stop_failure_does_not_replace_work_error(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        fake_service.overrides[("DELETE", "/api/v2/boxes/box-1")] = lambda request: httpx.Response(
            404, json={"error": "gone"}
        )

        async def work(box: BoxHandle) -> None:
            raise ValueError("bad input")

        with pytest.raises(ValueError, match="bad input"):
            await client.with_sandbox(work, poll_interval=0)

    @pytest.mark.asyncio
    async def test_create_failure_issues_no_stop(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        fake_service.overrides[("POST", "/api/v2/boxes")] = lambda request: httpx.Response(
            400, json={"error": "cpu out of range"}
        )

        async def work(box: BoxHandle) -> None:
            pass

        with pytest.raises(ValidationError, match="cpu out of range"):
            await client.with_sandbox(work, BoxConfig(cpu=999))

        assert fake_service.calls("DELETE") == []


class TestBoxTimeout:
    """Tests for the box lifetime requested by managed execution."""

    async def _created_body(
        self, client: Tavor, fake_service: FakeBoxService, config: BoxConfig | None
    ) -> dict[str, object]:
        async with client.sandbox(config, poll_interval=0):
            pass
        return json.loads(fake_service.calls("POST")[0].content)

    @pytest.mark.asyncio
    async def test_default_timeout(self, client: Tavor, fake_service: FakeBoxService) -> None:
        body = await self._created_body(client, fake_service, None)
        assert body == {"timeout": 600}

    @pytest.mark.asyncio
    async def test_env_timeout(
        self, client: Tavor, fake_service: FakeBoxService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TAVOR_BOX_TIMEOUT", "90")
        body = await self._created_body(client, fake_service, BoxConfig(cpu=1))
        assert body == {"timeout": 90, "cpu": 1}

    @pytest.mark.asyncio
    async def test_explicit_timeout_wins(
        self, client: Tavor, fake_service: FakeBoxService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TAVOR_BOX_TIMEOUT", "90")
        body = await self._created_body(client, fake_service, BoxConfig(timeout=30))
        assert body == {"timeout": 30}


class TestSandboxContextManager:
    """Tests for the async context manager form."""

    @pytest.mark.asyncio
    async def test_yields_ready_box(self, client: Tavor, fake_service: FakeBoxService) -> None:
        async with client.sandbox(poll_interval=0) as box:
            assert fake_service.calls("DELETE") == []
            assert box.id == "box-1"

        assert len(fake_service.calls("DELETE")) == 1

    @pytest.mark.asyncio
    async def test_cancellation_still_stops_box(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        """Test cancelling the caller mid-work still releases the box."""
        started = asyncio.Event()

        async def work(box: BoxHandle) -> None:
            started.set()
            await asyncio.sleep(60)

        task = asyncio.create_task(client.with_sandbox(work, poll_interval=0))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(fake_service.calls("DELETE", "/api/v2/boxes/box-1")) == 1

    @pytest.mark.asyncio
    async def test_cancellation_during_wait_stops_box(
        self, client: Tavor, fake_service: FakeBoxService
    ) -> None:
        fake_service.overrides[("GET", "/api/v2/boxes/box-1")] = lambda request: httpx.Response(
            200, json={"id": "box-1", "status": "provisioning"}
        )

        async def work(box: BoxHandle) -> None:
            pass

        task = asyncio.create_task(client.with_sandbox(work, poll_interval=0.01))
        while not fake_service.calls("GET"):
            await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(fake_service.calls("DELETE", "/api/v2/boxes/box-1")) == 1

    @pytest.mark.asyncio
    async def test_already_gone_box_is_logged(
        self,
        client: Tavor,
        fake_service: FakeBoxService,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="tavor._box"):
            async with client.sandbox(poll_interval=0) as box:
                await box.stop()

        assert len(fake_service.calls("DELETE")) == 2
        assert any(
            isinstance(r.exc_info[1], NotFoundError) for r in caplog.records if r.exc_info
        )
