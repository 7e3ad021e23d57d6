"""Shared fixtures for integration tests."""

import pytest

from tavor import BoxConfig


@pytest.fixture(scope="module")
def box_config() -> BoxConfig:
    """Module-scoped config for creating test boxes"""
    return BoxConfig(
        timeout=300,
        metadata={"purpose": "integration-test"},
    )
