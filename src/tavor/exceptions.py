# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Exception hierarchy for Tavor operations.

Every public operation raises a subclass of TavorError:

- APIError subclasses for HTTP error responses (see map_http_error)
- TransportError when a request was sent but no response arrived
- BoxError subclasses for lifecycle failures observed while polling
"""

from __future__ import annotations

from typing import Any


class TavorError(Exception):
    """Base exception for all Tavor client errors."""


class APIError(TavorError):
    """Raised when the service answers with an error status.

    The original response body is kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class AuthenticationError(APIError):
    """Raised for a missing credential or a 401/403 response.

    status_code is None when the credential could not be resolved locally.
    """


class NotFoundError(APIError):
    """Raised for a 404 response, usually an unknown box ID."""


class ValidationError(APIError):
    """Raised for any other 4xx response (malformed request)."""


class RemoteServiceError(APIError):
    """Raised for 5xx responses and malformed success bodies."""


class TransportError(TavorError):
    """Raised when a request produced no HTTP response.

    Covers connection refused, DNS failures and socket-level timeouts.
    """


class BoxError(TavorError):
    """Base exception for box lifecycle failures."""

    def __init__(self, message: str, *, box_id: str) -> None:
        super().__init__(message)
        self.box_id = box_id


class ReadinessTimeoutError(BoxError):
    """Raised when a box did not become ready within max_wait."""

    def __init__(self, message: str, *, box_id: str, max_wait: float) -> None:
        super().__init__(message, box_id=box_id)
        self.max_wait = max_wait


class RemoteFailureError(BoxError):
    """Raised when the service reports a box in a terminal state while waiting."""

    def __init__(
        self,
        message: str,
        *,
        box_id: str,
        status: str,
        details: str | None = None,
    ) -> None:
        super().__init__(message, box_id=box_id)
        self.status = status
        self.details = details


def map_http_error(status_code: int, message: str, body: Any = None) -> APIError:
    """Map an HTTP error status to the matching APIError subclass."""
    exc_type: type[APIError]
    if status_code in (401, 403):
        exc_type = AuthenticationError
    elif status_code == 404:
        exc_type = NotFoundError
    elif 400 <= status_code < 500:
        exc_type = ValidationError
    elif status_code >= 500:
        exc_type = RemoteServiceError
    else:
        exc_type = APIError
    return exc_type(message, status_code=status_code, body=body)
