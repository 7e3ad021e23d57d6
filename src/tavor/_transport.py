# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""HTTP dispatch and error normalization.

Every request made by the client and by box handles goes through
request_json, so callers see the same exception types whichever
operation failed.
"""

from __future__ import annotations

import json as _json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from tavor._defaults import API_KEY_HEADER
from tavor._types import Box
from tavor.exceptions import RemoteServiceError, TransportError, map_http_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionConfig:
    """Resolved connection settings shared by a client and its box handles.

    Handles keep their own copy so they stay usable after the client that
    created them is gone. The http_client may be shared; httpx clients are
    safe for concurrent requests.
    """

    api_key: str
    base_url: str
    request_timeout_seconds: float
    http_client: httpx.AsyncClient


def build_http_client(api_key: str, base_url: str, timeout: float) -> httpx.AsyncClient:
    """Create the default HTTP client carrying the API key on every request."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={
            API_KEY_HEADER: api_key,
            "Content-Type": "application/json",
        },
    )


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str):
                return message
            return _json.dumps(error, ensure_ascii=False)
        message = body.get("message")
        if isinstance(message, str) and message:
            return message

    raw_text = response.text.strip()
    if raw_text:
        return raw_text

    return response.reason_phrase or f"HTTP {response.status_code}"


async def request_json(
    config: ConnectionConfig,
    method: str,
    path: str,
    *,
    json: Any = None,
) -> Any:
    """Send a request and return the decoded JSON body.

    Returns:
        The decoded body, or None for an empty success response

    Raises:
        TransportError: If no response was received
        APIError: A subclass matching the error status (see map_http_error),
            or APIError itself for a redirect the client did not follow
        RemoteServiceError: If a success response body is not valid JSON
    """
    logger.debug("%s %s", method, path)
    try:
        response = await config.http_client.request(method, path, json=json)
    except httpx.RequestError as e:
        raise TransportError(f"Request failed: {e}") from e

    if response.is_error or response.is_redirect:
        body = _parse_body(response)
        message = _error_message(response, body)
        logger.debug("%s %s returned %d: %s", method, path, response.status_code, message)
        raise map_http_error(response.status_code, message, body)

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise RemoteServiceError(
            f"Invalid JSON in response to {method} {path}",
            status_code=response.status_code,
            body=response.text,
        ) from e


def parse_box(payload: Any) -> Box:
    """Convert a box projection from the API, rejecting malformed payloads."""
    if not isinstance(payload, dict) or payload.get("id") is None:
        raise RemoteServiceError("Malformed box in response", body=payload)
    metadata = payload.get("metadata")
    if metadata is not None and not isinstance(metadata, dict):
        raise RemoteServiceError("Malformed box metadata in response", body=payload)
    return Box.from_dict(payload)
