"""MCP server exposing the Verba translation-management API as tools."""

__version__ = "0.1.0"
