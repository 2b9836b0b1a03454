"""Shared fixtures for Verba MCP tests."""

from unittest.mock import AsyncMock

import pytest

from verba_mcp.client.verba_client import BackendResult, VerbaClient
from verba_mcp.config.settings import Settings
from verba_mcp.registry.operations import register_all_operations


@pytest.fixture
def settings():
    """Settings pointing at a test backend."""
    return Settings(api_key="test-token", api_url="https://verba.test")


@pytest.fixture
def registry():
    """Registry with all translation operations."""
    return register_all_operations()


@pytest.fixture
def backend():
    """Stand-in for VerbaClient returning an empty 200 payload by default."""
    client = AsyncMock(spec=VerbaClient)
    client.call.return_value = BackendResult(ok=True, status=200, data={})
    return client
