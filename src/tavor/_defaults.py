# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

DEFAULT_BASE_URL: str = "https://api.tavor.dev"
BOXES_PATH: str = "/api/v2/boxes"
API_KEY_HEADER: str = "x-api-key"

API_KEY_ENV: str = "TAVOR_API_KEY"
BASE_URL_ENV: str = "TAVOR_BASE_URL"
BOX_TIMEOUT_ENV: str = "TAVOR_BOX_TIMEOUT"

# Default timeout for HTTP requests (seconds)
# This controls how long to wait for API responses, not box lifetime.
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 30.0

# Box lifetime requested by managed execution when none is given
DEFAULT_BOX_TIMEOUT_SECONDS: int = 600

DEFAULT_POLL_INTERVAL_SECONDS: float = 1.0

# Upper bound on wait_until_ready, independent of the box lifetime
DEFAULT_MAX_WAIT_SECONDS: float = 300.0


@dataclass(frozen=True)
class BoxConfig:
    """Immutable options for box creation.

    Every field is optional. Unset fields are left out of the creation
    request entirely so the service applies its own defaults.

    Example:
        ```python
        config = BoxConfig(
            cpu=2,
            mib_ram=2048,
            timeout=3600,  # 1 hour box lifetime
            metadata={"job": "nightly-eval"},
        )
        ```
    """

    timeout: int | None = None
    metadata: dict[str, Any] | None = None
    cpu: int | None = None
    mib_ram: int | None = None

    def to_request(self) -> dict[str, Any]:
        """Build the JSON body for a creation request."""
        request: dict[str, Any] = {}
        if self.timeout is not None:
            request["timeout"] = self.timeout
        if self.metadata is not None:
            request["metadata"] = dict(self.metadata)
        if self.cpu is not None:
            request["cpu"] = self.cpu
        if self.mib_ram is not None:
            request["mib_ram"] = self.mib_ram
        return request

    def with_overrides(self, **kwargs: Any) -> BoxConfig:
        """Create a new config with some values overridden."""
        return replace(self, **kwargs)
