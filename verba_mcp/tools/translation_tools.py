"""Translation-management tools backed by the Verba API."""

import logging
from typing import Any, Dict, List, Optional

from mcp import Tool
from mcp.types import CallToolResult

from ..client.verba_client import VerbaClient
from ..registry.operation_registry import OperationRegistry
from ..utils.response import OperationOutcome

logger = logging.getLogger(__name__)


class TranslationTools:
    """Dispatches tool calls to registered Verba operations.

    Holds no per-call state: the registry is read-only and each call keeps
    its arguments and backend result local, so concurrent calls are fine.
    """

    def __init__(self, registry: OperationRegistry, client: VerbaClient):
        """Initialize with a filled registry and a backend client.

        Args:
            registry: Registry of available operations
            client: Client used by every operation handler
        """
        self.registry = registry
        self.client = client

    def get_tools(self) -> List[Tool]:
        """Return all translation tools."""
        return self.registry.get_tools()

    async def handle_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Run one tool call and return exactly one envelope.

        Args:
            name: Tool name
            arguments: Raw tool arguments from the host

        Returns:
            CallToolResult; isError is set for unknown tools, invalid
            arguments, backend rejections and transport failures
        """
        return (await self.execute(name, arguments)).to_envelope()

    async def execute(self, name: str, arguments: Optional[Dict[str, Any]]) -> OperationOutcome:
        """Validate, call the backend, and fold any failure into the outcome."""
        try:
            operation = self.registry.get(name)
            validated = self.registry.validate(name, arguments)
            result = await operation.handler(self.client, validated)
        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}")
            return OperationOutcome.failure(e)

        if not result.ok:
            logger.info(f"Tool {name} rejected by backend (HTTP {result.status})")
        return OperationOutcome.from_backend(result)
