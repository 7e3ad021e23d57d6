"""A Python client library for Tavor boxes."""

from tavor._auth import AuthHeaders
from tavor._box import BoxHandle
from tavor._client import Tavor
from tavor._defaults import BoxConfig
from tavor._env import load_dotenv
from tavor._types import Box, BoxStatus
from tavor.exceptions import (
    APIError,
    AuthenticationError,
    BoxError,
    NotFoundError,
    ReadinessTimeoutError,
    RemoteFailureError,
    RemoteServiceError,
    TavorError,
    TransportError,
    ValidationError,
)

__all__ = [
    "APIError",
    "AuthHeaders",
    "AuthenticationError",
    "Box",
    "BoxConfig",
    "BoxError",
    "BoxHandle",
    "BoxStatus",
    "NotFoundError",
    "ReadinessTimeoutError",
    "RemoteFailureError",
    "RemoteServiceError",
    "Tavor",
    "TavorError",
    "TransportError",
    "ValidationError",
    "load_dotenv",
]
