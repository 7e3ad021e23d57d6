# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class BoxStatus(StrEnum):
    """Box status values reported by the service."""

    QUEUED = "queued"
    PROVISIONING = "provisioning"
    BOOTING = "booting"
    RUNNING = "running"
    STOPPED = "stopped"
    FAILED = "failed"
    FINISHED = "finished"
    ERROR = "error"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: object) -> BoxStatus:
        """Convert a status string from the API, mapping unrecognised values to UNKNOWN."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_ready(self) -> bool:
        return self is BoxStatus.RUNNING

    @property
    def is_terminal(self) -> bool:
        """True for states a box never leaves, so it can no longer become ready."""
        return self in _TERMINAL_STATUSES


_TERMINAL_STATUSES = frozenset(
    {BoxStatus.STOPPED, BoxStatus.FAILED, BoxStatus.FINISHED, BoxStatus.ERROR}
)


@dataclass(frozen=True)
class Box:
    """Snapshot of a box as returned by the API.

    Attributes:
        id: Box ID assigned by the service
        status: Status at the time the snapshot was taken
        timeout: Requested lifetime in seconds, if reported
        metadata: Caller metadata, passed through unmodified
        hostname: Public hostname, once assigned
        created_at: Creation timestamp as reported by the service
        details: Extra status detail, typically the failure reason
        raw: The JSON object exactly as received
    """

    id: str
    status: BoxStatus
    timeout: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    hostname: str | None = None
    created_at: str | None = None
    details: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Box:
        return cls(
            id=str(payload["id"]),
            status=BoxStatus.parse(payload.get("status")),
            timeout=payload.get("timeout"),
            metadata=dict(payload.get("metadata") or {}),
            hostname=payload.get("hostname"),
            created_at=payload.get("created_at"),
            details=payload.get("details"),
            raw=dict(payload),
        )
