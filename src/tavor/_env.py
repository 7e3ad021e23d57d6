# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Environment variable utilities.

All fallbacks to the process environment go through get_env_var so they
can be substituted in one place.
"""

from __future__ import annotations

import os

from tavor._defaults import (
    BASE_URL_ENV,
    BOX_TIMEOUT_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_BOX_TIMEOUT_SECONDS,
)


def get_env_var(name: str) -> str | None:
    """Return the environment value for name, treating empty strings as unset."""
    value = os.environ.get(name)
    return value or None


def resolve_base_url(explicit: str | None = None) -> str:
    """Resolve the API base URL: explicit value, TAVOR_BASE_URL, then default."""
    return (explicit or get_env_var(BASE_URL_ENV) or DEFAULT_BASE_URL).rstrip("/")


def resolve_box_timeout(explicit: int | None = None) -> int:
    """Resolve the box lifetime used by managed execution.

    Raises:
        ValueError: If TAVOR_BOX_TIMEOUT is set but is not an integer
    """
    if explicit is not None:
        return explicit
    raw = get_env_var(BOX_TIMEOUT_ENV)
    if raw is None:
        return DEFAULT_BOX_TIMEOUT_SECONDS
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{BOX_TIMEOUT_ENV} must be an integer, got {raw!r}") from e


def load_dotenv(filepath: str = ".env") -> dict[str, str]:
    """Load environment variables from a .env file.

    The process environment is not modified; pass the values on explicitly.

    Args:
        filepath: Path to .env file (default: ".env")

    Returns:
        Dictionary of environment variables from the file. Keys declared
        without a value are skipped.

    Raises:
        FileNotFoundError: If the .env file doesn't exist

    Example:
        env_vars = load_dotenv(".env")
        client = Tavor(api_key=env_vars.get("TAVOR_API_KEY"))
    """
    from dotenv import dotenv_values

    if not os.path.exists(filepath):
        raise FileNotFoundError(filepath)

    return {key: value for key, value in dotenv_values(filepath).items() if value is not None}
