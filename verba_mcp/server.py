"""Main MCP server implementation for Verba translation management."""

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import CallToolResult

from . import __version__
from .client.verba_client import VerbaClient
from .config.settings import ConfigurationError, Settings, load_settings
from .registry.operations import register_all_operations
from .tools.translation_tools import TranslationTools

logger = logging.getLogger(__name__)

SERVER_NAME = "verba"


class VerbaMCPServer:
    """MCP Server exposing the Verba API as tools."""

    def __init__(self, settings: Settings, client: Optional[VerbaClient] = None):
        """Build the registry, backend client and MCP server.

        Args:
            settings: Startup configuration
            client: Optional preconstructed backend client
        """
        self.settings = settings
        self.client = client or VerbaClient(settings)
        self.registry = register_all_operations()
        self.translation_tools = TranslationTools(self.registry, self.client)

        self.server = Server(SERVER_NAME)
        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return self.translation_tools.get_tools()

        # Argument validation is done by TranslationTools so that errors
        # come back in the same envelope shape as backend failures.
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
            """Route tool calls to the dispatcher."""
            return await self.translation_tools.handle_tool(name, arguments)

    async def run(self):
        """Run the MCP server over stdio until the host disconnects."""
        from mcp.server.stdio import stdio_server

        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("Verba MCP server started")
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=__version__,
                        capabilities=self.server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={}
                        )
                    )
                )
        finally:
            await self.client.close()


def main():
    """Main entry point for the MCP server."""
    logging.basicConfig(level=logging.INFO)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.info(f"Using Verba API at {settings.api_url}")

    server = VerbaMCPServer(settings)
    try:
        asyncio.run(server.run())
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
