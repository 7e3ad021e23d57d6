# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Credential resolution for the Tavor client.

Resolution order:
1. api_key passed explicitly to the client
2. TAVOR_API_KEY env var

A missing credential is an error at client construction time, before any
request is made.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from tavor._defaults import API_KEY_ENV, API_KEY_HEADER
from tavor._env import get_env_var
from tavor.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthHeaders:
    """Resolved authentication headers and where the key came from."""

    headers: dict[str, str]
    source: Literal["explicit", "env"]

    @property
    def api_key(self) -> str:
        return self.headers[API_KEY_HEADER]


def resolve_api_key(explicit: str | None = None) -> AuthHeaders:
    """Resolve the API key into request headers.

    Raises:
        AuthenticationError: If no key is passed and TAVOR_API_KEY is unset
    """
    if explicit:
        logger.debug("Using explicitly configured API key")
        return AuthHeaders(headers={API_KEY_HEADER: explicit}, source="explicit")

    api_key = get_env_var(API_KEY_ENV)
    if api_key:
        logger.debug("Using API key from %s", API_KEY_ENV)
        return AuthHeaders(headers={API_KEY_HEADER: api_key}, source="env")

    raise AuthenticationError(
        f"API key is required. Set it via api_key or the {API_KEY_ENV} environment variable."
    )
